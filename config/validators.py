"""
Configuration Validation for the News Relay

This module contains the startup checks run against a Settings object.
Each route also reports its own missing configuration at request time, so a
failed validation is a warning unless the server is started in strict mode.
"""

from utils.exceptions import ConfigurationError
from utils.helpers import is_valid_url


def validate_settings(settings) -> bool:
    """
    Validate that all required settings are properly configured.

    Args:
        settings: The Settings object to check.

    Returns:
        bool: True if every check passed.

    Raises:
        ConfigurationError: If required settings are missing or invalid.
    """
    errors = []

    # Required environment variables
    required_vars = [
        ("OPENROUTER_API_KEY", settings.language_model_api_key),
        ("LINKEDIN_CLIENT_ID", settings.linkedin_client_id),
        ("LINKEDIN_CLIENT_SECRET", settings.linkedin_client_secret),
        ("LINKEDIN_REDIRECT_URI", settings.linkedin_redirect_uri),
    ]

    for var_name, var_value in required_vars:
        if not var_value:
            errors.append(f"Missing required environment variable: {var_name}")

    # URLs must be absolute so redirects and referer headers are usable
    url_settings = [
        ("LINKEDIN_REDIRECT_URI", settings.linkedin_redirect_uri),
        ("FRONTEND_URL", settings.frontend_url),
        ("HTTP_REFERER", settings.http_referer),
    ]

    for name, value in url_settings:
        if value and not is_valid_url(value):
            errors.append(f"{name} must be an absolute URL, got {value!r}")

    if not settings.linkedin_author_urn.startswith("urn:li:"):
        errors.append(f"LINKEDIN_AUTHOR_URN must be a LinkedIn URN, got {settings.linkedin_author_urn!r}")

    # Validate numeric settings are within reasonable bounds
    numeric_validations = [
        ("PORT", settings.port, 1, 65535),
        ("HTTP_TIMEOUT", settings.http_timeout, 1, 300),
        ("OAUTH_STATE_MAX_AGE", settings.oauth_state_max_age, 30, 86400),
    ]

    for name, value, min_val, max_val in numeric_validations:
        if value < min_val or value > max_val:
            errors.append(f"{name} must be between {min_val} and {max_val}, got {value}")

    # Raise all errors at once
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return True
