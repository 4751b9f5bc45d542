"""
Custom Exception Classes for the News Relay

This module defines the typed error taxonomy used across the relay. Every
error carries the HTTP status it maps to, a caller-facing message, optional
details and, for upstream failures, the payload the remote service returned.
"""

from typing import Any, Dict, Optional


class RelayError(Exception):
    """Base exception for all relay errors."""

    kind = "relay_error"
    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None,
                 upstream_payload: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.upstream_payload = upstream_payload

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON error body returned to callers."""
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind!r}, message={self.message!r})"


# =============================================================================
# Caller Errors
# =============================================================================

class InvalidRequest(RelayError):
    """Raised when caller input is missing or malformed."""
    kind = "invalid_request"
    status_code = 400


class NotFound(RelayError):
    """Raised when the remote source holds no matching data."""
    kind = "not_found"
    status_code = 404


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(RelayError):
    """Raised when deployment configuration is missing or invalid."""
    kind = "configuration_error"
    status_code = 500


# =============================================================================
# Upstream Errors
# =============================================================================

class UpstreamError(RelayError):
    """Base exception for failures of a remote dependency."""
    kind = "upstream_error"
    status_code = 500


class UpstreamUnavailable(UpstreamError):
    """Raised when a remote service cannot be reached or answers non-2xx."""
    kind = "upstream_unavailable"


class UpstreamParseError(UpstreamError):
    """Raised when a remote response cannot be parsed."""
    kind = "upstream_parse_error"


class AIServiceError(UpstreamError):
    """Raised when the language-model service fails to draft a post."""
    kind = "ai_service_error"


class PublishError(UpstreamError):
    """Raised when LinkedIn rejects or fails a publish call."""
    kind = "publish_error"


class OAuthExchangeError(UpstreamError):
    """Raised when an authorization code cannot be exchanged for a token."""
    kind = "oauth_exchange_error"


class OAuthStateError(RelayError):
    """Raised when an OAuth callback carries a missing, forged or expired state."""
    kind = "oauth_state_error"
    status_code = 400
