"""
Application Factory for the News Relay

Builds the Flask application: resolves settings, wires the services into
``app.extensions``, enables CORS, registers the routes blueprint and the
error handlers that turn typed relay errors into JSON responses.

Usage:
    from api.app import create_app
    app = create_app()
    app.run(port=app.extensions["relay_settings"].port)
"""

from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from api.routes import relay_bp
from config.settings import Settings, load_settings
from services.ai_service import AIService
from services.linkedin_service import LinkedInService
from services.news_service import NewsService
from services.protocols import NewsProvider, PostGenerator, LinkedInGateway
from utils.exceptions import RelayError
from utils.logger import get_logger

logger = get_logger(__name__)


def _cors_origins(settings: Settings):
    if settings.cors_origins.strip() == "*":
        return "*"
    return [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


def create_app(settings: Optional[Settings] = None,
               news_service: Optional[NewsProvider] = None,
               ai_service: Optional[PostGenerator] = None,
               linkedin_service: Optional[LinkedInGateway] = None) -> Flask:
    """
    Create the relay application.

    Args:
        settings: Resolved settings; loaded from the environment when omitted.
        news_service: News lookup implementation; NewsService by default.
        ai_service: Post drafting implementation; AIService by default.
        linkedin_service: LinkedIn implementation; LinkedInService by default.

    Returns:
        Flask: The configured application.
    """
    if settings is None:
        settings = load_settings()

    app = Flask(__name__)
    app.extensions["relay_settings"] = settings
    app.extensions["news_service"] = news_service or NewsService(settings)
    app.extensions["ai_service"] = ai_service or AIService(settings)
    app.extensions["linkedin_service"] = linkedin_service or LinkedInService(settings)

    CORS(app, origins=_cors_origins(settings))
    app.register_blueprint(relay_bp)
    register_error_handlers(app)

    return app


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error handlers to an application."""

    @app.errorhandler(RelayError)
    def handle_relay_error(error: RelayError):
        log = logger.warning if error.status_code < 500 else logger.error
        log(f"{request.method} {request.path} failed ({error.kind}): {error.message}"
            + (f" | upstream: {error.upstream_payload}" if error.upstream_payload is not None else ""))
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.error(f"Unhandled error in {request.method} {request.path}: {error}", exc_info=True)
        return jsonify({"error": "Internal server error"}), 500
