"""
Configuration Settings for the News Relay

This module centralizes all configuration for the relay: environment
variables, upstream endpoints and application constants. Environment values
are resolved once by load_settings() into an immutable Settings object that
the application factory hands to each service.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any, Mapping

from dotenv import load_dotenv

from utils.exceptions import ConfigurationError

# Determine the application root directory
APP_ROOT = Path(__file__).resolve().parent.parent

# =============================================================================
# News Feed Settings
# =============================================================================

NEWS_RSS_SEARCH_URL = "https://news.google.com/rss/search"
NEWS_MAX_ARTICLES = 5                # Articles returned per keyword search
NO_DESCRIPTION_PLACEHOLDER = "No description available"

# =============================================================================
# Language Model Settings
# =============================================================================

AI_CHAT_COMPLETIONS_URL = "https://openrouter.ai/api/v1/chat/completions"
AI_MODEL = "mistralai/mistral-7b-instruct"
AI_TEMPERATURE = 0.7
AI_MAX_TOKENS = 300
AI_APP_TITLE = "ai-newspost-generator"  # Sent as X-Title for OpenRouter attribution

AI_SYSTEM_PROMPT = (
    "You are an expert content writer who creates short, engaging, and "
    "opinionated LinkedIn posts based on recent news. Keep posts professional "
    "but engaging."
)

AI_USER_PROMPT_TEMPLATE = (
    "Here are some news articles:\n\n{articles}\n\n"
    "Generate a 5-7 line opinionated LinkedIn post. Start directly with an "
    "opinion. Keep it relevant, thoughtful, and professional. Use emojis sparingly."
)

# =============================================================================
# LinkedIn Settings
# =============================================================================

LINKEDIN_AUTHORIZATION_URL = "https://www.linkedin.com/oauth/v2/authorization"
LINKEDIN_ACCESS_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
LINKEDIN_UGC_POSTS_URL = "https://api.linkedin.com/v2/ugcPosts"
LINKEDIN_SCOPE = "w_member_social"   # Posting permission only; profile scopes are closed to new apps
LINKEDIN_RESTLI_PROTOCOL_VERSION = "2.0.0"

# Undocumented for the v2 UGC API but accepted with w_member_social
DEFAULT_LINKEDIN_AUTHOR_URN = "urn:li:person:me"

# =============================================================================
# Server Settings
# =============================================================================

DEFAULT_FRONTEND_URL = "http://localhost:3000"
DEFAULT_HTTP_REFERER = "http://localhost:3000"
DEFAULT_PORT = 5000
DEFAULT_HTTP_TIMEOUT = 15.0          # Seconds for every outbound request
DEFAULT_CORS_ORIGINS = "*"
DEFAULT_OAUTH_STATE_MAX_AGE = 600    # Seconds a signed OAuth state stays valid


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, resolved once at startup."""
    language_model_api_key: Optional[str] = None
    linkedin_client_id: Optional[str] = None
    linkedin_client_secret: Optional[str] = None
    linkedin_redirect_uri: Optional[str] = None
    linkedin_author_urn: str = DEFAULT_LINKEDIN_AUTHOR_URN
    frontend_url: str = DEFAULT_FRONTEND_URL
    http_referer: str = DEFAULT_HTTP_REFERER
    port: int = DEFAULT_PORT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    cors_origins: str = DEFAULT_CORS_ORIGINS
    oauth_state_secret: Optional[str] = None
    oauth_state_max_age: int = DEFAULT_OAUTH_STATE_MAX_AGE

    @property
    def linkedin_oauth_configured(self) -> bool:
        return bool(self.linkedin_client_id and self.linkedin_redirect_uri)

    @property
    def oauth_state_enabled(self) -> bool:
        return bool(self.oauth_state_secret)


def _env(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = environ.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _env_number(environ: Mapping[str, str], key: str, default, cast):
    raw = _env(environ, key)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None,
                  dotenv_path: Optional[str] = None) -> Settings:
    """
    Build a Settings object from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ after loading
            the .env file at the application root.
        dotenv_path: Alternative .env file to load.

    Returns:
        Settings: The resolved configuration.

    Raises:
        ConfigurationError: If a numeric variable cannot be parsed.
    """
    if environ is None:
        load_dotenv(dotenv_path=dotenv_path or os.path.join(APP_ROOT, '.env'))
        environ = os.environ

    return Settings(
        language_model_api_key=_env(environ, "OPENROUTER_API_KEY"),
        linkedin_client_id=_env(environ, "LINKEDIN_CLIENT_ID"),
        linkedin_client_secret=_env(environ, "LINKEDIN_CLIENT_SECRET"),
        linkedin_redirect_uri=_env(environ, "LINKEDIN_REDIRECT_URI"),
        linkedin_author_urn=_env(environ, "LINKEDIN_AUTHOR_URN") or DEFAULT_LINKEDIN_AUTHOR_URN,
        frontend_url=_env(environ, "FRONTEND_URL") or DEFAULT_FRONTEND_URL,
        http_referer=_env(environ, "HTTP_REFERER") or DEFAULT_HTTP_REFERER,
        port=_env_number(environ, "PORT", DEFAULT_PORT, int),
        http_timeout=_env_number(environ, "HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
        cors_origins=_env(environ, "CORS_ORIGINS") or DEFAULT_CORS_ORIGINS,
        oauth_state_secret=_env(environ, "OAUTH_STATE_SECRET"),
        oauth_state_max_age=_env_number(
            environ, "OAUTH_STATE_MAX_AGE", DEFAULT_OAUTH_STATE_MAX_AGE, int
        ),
    )


def get_config_summary(settings: Settings) -> Dict[str, Any]:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    return {
        "language_model": {
            "api_key_configured": bool(settings.language_model_api_key),
            "model": AI_MODEL,
        },
        "linkedin": {
            "oauth_configured": settings.linkedin_oauth_configured,
            "client_secret_configured": bool(settings.linkedin_client_secret),
            "redirect_uri": settings.linkedin_redirect_uri,
            "author_urn": settings.linkedin_author_urn,
            "oauth_state_enabled": settings.oauth_state_enabled,
        },
        "server": {
            "port": settings.port,
            "frontend_url": settings.frontend_url,
            "cors_origins": settings.cors_origins,
            "http_timeout": settings.http_timeout,
        },
    }
