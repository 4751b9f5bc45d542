"""
LinkedIn Service Module

This module handles the LinkedIn integration: building the OAuth consent
URL, exchanging an authorization code for an access token, and publishing
text through the UGC posts API with the caller's bearer token.
"""

from typing import Any, Dict, Optional

import requests

from config import settings as config
from data.models import OAuthToken, GeneratedPost
from services.oauth_state import OAuthStateSigner
from utils.exceptions import ConfigurationError, InvalidRequest, OAuthExchangeError, PublishError
from utils.helpers import encode_query, extract_upstream_payload, payload_field
from utils.logger import get_logger

logger = get_logger(__name__)

LINKEDIN_API_ERROR_DETAILS = "LinkedIn API error"


class LinkedInService:
    """Service for the LinkedIn OAuth flow and UGC publishing."""

    def __init__(self, settings: config.Settings):
        """
        Initialize the LinkedIn service.

        State signing is switched on only when an OAuth state secret is
        configured.

        Args:
            settings: Resolved application settings.
        """
        self.settings = settings
        self.state_signer = None
        if settings.oauth_state_enabled:
            self.state_signer = OAuthStateSigner(settings.oauth_state_secret, settings.oauth_state_max_age)

    # =========================================================================
    # OAuth
    # =========================================================================

    def build_authorization_url(self) -> str:
        """
        Build the LinkedIn consent URL.

        Returns:
            str: The authorization URL, with a signed state when enabled.

        Raises:
            ConfigurationError: If client id or redirect URI is unset.
        """
        if not self.settings.linkedin_oauth_configured:
            logger.error("LinkedIn OAuth not configured: LINKEDIN_CLIENT_ID and LINKEDIN_REDIRECT_URI are required")
            raise ConfigurationError("LinkedIn OAuth not configured")

        params = {
            "response_type": "code",
            "client_id": self.settings.linkedin_client_id,
            "redirect_uri": self.settings.linkedin_redirect_uri,
            "scope": config.LINKEDIN_SCOPE,
        }

        if self.state_signer:
            params["state"] = self.state_signer.issue()
        else:
            logger.warning("Building LinkedIn authorization URL without a state parameter (OAUTH_STATE_SECRET unset)")

        logger.info(f"Initiating LinkedIn OAuth with scope: {config.LINKEDIN_SCOPE}")
        return f"{config.LINKEDIN_AUTHORIZATION_URL}?{encode_query(params)}"

    def verify_state(self, state: Optional[str]) -> None:
        """Verify a callback state; a no-op when state signing is disabled."""
        if self.state_signer:
            self.state_signer.verify(state)

    def exchange_code(self, code: str) -> OAuthToken:
        """
        Exchange an authorization code for an access token.

        Args:
            code: The authorization code from the callback.

        Returns:
            OAuthToken: The issued access token.

        Raises:
            OAuthExchangeError: On missing configuration, transport failure,
                a non-2xx answer or a response without an access token.
        """
        if not (self.settings.linkedin_oauth_configured and self.settings.linkedin_client_secret):
            logger.error("LinkedIn Auth Error: client id, client secret and redirect URI must all be configured")
            raise OAuthExchangeError("LinkedIn authentication failed", details="LinkedIn OAuth not configured")

        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.settings.linkedin_redirect_uri,
            "client_id": self.settings.linkedin_client_id,
            "client_secret": self.settings.linkedin_client_secret,
        }

        logger.info("Requesting access token from LinkedIn...")
        try:
            response = requests.post(
                config.LINKEDIN_ACCESS_TOKEN_URL,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            payload = extract_upstream_payload(e)
            logger.error(f"LinkedIn Auth Error: {payload}")
            raise OAuthExchangeError("LinkedIn authentication failed", upstream_payload=payload) from e

        access_token = payload_field(data, "access_token")
        if not access_token:
            logger.error("LinkedIn Auth Error: token response did not include an access_token")
            raise OAuthExchangeError("LinkedIn authentication failed", upstream_payload=data)

        logger.info("Access token received successfully")
        return OAuthToken(access_token=access_token, expires_in=data.get("expires_in"))

    # =========================================================================
    # Publishing
    # =========================================================================

    def build_share_payload(self, content: str) -> Dict[str, Any]:
        """Return the UGC post body for a plain-text share."""
        return {
            "author": self.settings.linkedin_author_urn,
            "lifecycleState": "PUBLISHED",
            "specificContent": {
                "com.linkedin.ugc.ShareContent": {
                    "shareCommentary": {"text": content},
                    "shareMediaCategory": "NONE",
                },
            },
            "visibility": {
                "com.linkedin.ugc.MemberNetworkVisibility": "PUBLIC",
            },
        }

    def publish(self, token: Optional[str], content: Optional[str]) -> Optional[str]:
        """
        Publish text on LinkedIn as the owner of the token.

        Args:
            token: The caller's bearer token.
            content: The text to share.

        Returns:
            Optional[str]: The id LinkedIn assigned to the post, when reported.

        Raises:
            InvalidRequest: If token or content is missing.
            PublishError: If LinkedIn rejects the post or cannot be reached.
        """
        post = GeneratedPost(token=token or "", content=content or "")
        if not post.is_complete:
            raise InvalidRequest("Token and content required")

        logger.info("Posting to LinkedIn...")
        try:
            response = requests.post(
                config.LINKEDIN_UGC_POSTS_URL,
                json=self.build_share_payload(post.content),
                headers={
                    "Authorization": f"Bearer {post.token}",
                    "X-Restli-Protocol-Version": config.LINKEDIN_RESTLI_PROTOCOL_VERSION,
                    "Content-Type": "application/json",
                },
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            payload = extract_upstream_payload(e)
            logger.error(f"LinkedIn Post Error: {payload}")
            raise PublishError(
                "Failed to post on LinkedIn",
                details=payload_field(payload, "message") or LINKEDIN_API_ERROR_DETAILS,
                upstream_payload=payload,
            ) from e

        post_id = response.headers.get("x-restli-id")
        if not post_id:
            try:
                post_id = payload_field(response.json(), "id")
            except ValueError:
                post_id = None

        logger.info(f"Post successful: {post_id or 'no id reported'}")
        return post_id
