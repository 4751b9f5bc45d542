"""
Relay Routes Blueprint

HTTP endpoints of the relay. Each route delegates to one service held in
``app.extensions`` and turns its result into a single JSON or redirect
response; typed errors are converted by the handlers in api.app.

Routes:
- GET  /news?keyword=            news lookup
- POST /generate-post            post drafting
- GET  /auth/linkedin            OAuth redirect
- GET  /auth/linkedin/callback   OAuth callback
- POST /linkedin/post            publish
- GET  /health                   health check
"""

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, redirect, request

from utils.exceptions import RelayError, OAuthStateError
from utils.helpers import append_query, utc_timestamp
from utils.logger import get_logger

logger = get_logger(__name__)

relay_bp = Blueprint('relay', __name__)

AUTH_CODE_MISSING = "Authorization code not provided"
AUTH_FAILED = "LinkedIn authentication failed"


def _service(name: str):
    return current_app.extensions[name]


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _frontend_redirect(**params):
    settings = current_app.extensions["relay_settings"]
    return redirect(append_query(settings.frontend_url, params))


# ===== News =====

@relay_bp.route('/news', methods=['GET'])
def get_news():
    """Top articles for a keyword."""
    articles = _service("news_service").search(request.args.get('keyword'))
    return jsonify({"articles": [article.to_dict() for article in articles]})


# ===== Post drafting =====

@relay_bp.route('/generate-post', methods=['POST'])
def generate_post():
    """Draft a LinkedIn post from the supplied articles."""
    draft = _service("ai_service").generate_post(_json_body().get('articles'))
    return jsonify({"post": draft.text})


# ===== LinkedIn OAuth =====

@relay_bp.route('/auth/linkedin', methods=['GET'])
def linkedin_auth():
    auth_url = _service("linkedin_service").build_authorization_url()
    return redirect(auth_url)


@relay_bp.route('/auth/linkedin/callback', methods=['GET'])
def linkedin_callback():
    """
    Finish the OAuth flow and hand the token to the frontend.

    Every outcome is a redirect to the frontend: provider errors win over a
    code, a missing code or bad state is reported as such, and any exchange
    failure is reported as a generic authentication failure.
    """
    code = request.args.get('code')
    error = request.args.get('error')
    error_description = request.args.get('error_description')

    logger.info(f"LinkedIn callback received: code={bool(code)}, error={error}, "
                f"error_description={error_description}")

    if error:
        logger.error(f"LinkedIn OAuth Error: {error} {error_description or ''}".rstrip())
        return _frontend_redirect(error=error_description or error)

    if not code:
        logger.error("No authorization code received")
        return _frontend_redirect(error=AUTH_CODE_MISSING)

    linkedin = _service("linkedin_service")
    try:
        linkedin.verify_state(request.args.get('state'))
    except OAuthStateError as e:
        logger.error(f"LinkedIn OAuth state rejected: {e.details}")
        return _frontend_redirect(error=e.message)

    try:
        token = linkedin.exchange_code(code)
    except RelayError as e:
        logger.error(f"LinkedIn Auth Error ({e.kind}): {e.upstream_payload or e.details}")
        return _frontend_redirect(error=AUTH_FAILED)

    return _frontend_redirect(linkedin_token=token.access_token)


# ===== Publishing =====

@relay_bp.route('/linkedin/post', methods=['POST'])
def linkedin_post():
    """Publish caller-supplied text with the caller's token."""
    body = _json_body()
    _service("linkedin_service").publish(body.get('token'), body.get('content'))
    return jsonify({"success": True, "message": "Posted on LinkedIn!"})


# ===== Health =====

@relay_bp.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "OK", "timestamp": utc_timestamp()})
