"""
Tests for Configuration Loading and Validation
"""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import load_settings, get_config_summary, DEFAULT_LINKEDIN_AUTHOR_URN
from config.validators import validate_settings
from utils.exceptions import ConfigurationError


FULL_ENV = {
    "OPENROUTER_API_KEY": "sk-or-test",
    "LINKEDIN_CLIENT_ID": "client-id",
    "LINKEDIN_CLIENT_SECRET": "client-secret",
    "LINKEDIN_REDIRECT_URI": "http://localhost:5000/auth/linkedin/callback",
    "FRONTEND_URL": "https://app.example.com",
    "HTTP_REFERER": "https://app.example.com",
    "PORT": "8080",
}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_reads_environment(self):
        settings = load_settings(FULL_ENV)

        assert settings.language_model_api_key == "sk-or-test"
        assert settings.linkedin_client_id == "client-id"
        assert settings.port == 8080
        assert settings.frontend_url == "https://app.example.com"
        assert settings.linkedin_oauth_configured

    def test_defaults(self):
        settings = load_settings({})

        assert settings.language_model_api_key is None
        assert settings.frontend_url == "http://localhost:3000"
        assert settings.http_referer == "http://localhost:3000"
        assert settings.port == 5000
        assert settings.linkedin_author_urn == DEFAULT_LINKEDIN_AUTHOR_URN
        assert not settings.linkedin_oauth_configured
        assert not settings.oauth_state_enabled

    def test_blank_values_are_unset(self):
        settings = load_settings({"LINKEDIN_CLIENT_ID": "   ", "FRONTEND_URL": ""})

        assert settings.linkedin_client_id is None
        assert settings.frontend_url == "http://localhost:3000"

    def test_bad_number(self):
        with pytest.raises(ConfigurationError):
            load_settings({"PORT": "eighty"})

    def test_settings_are_immutable(self):
        settings = load_settings(FULL_ENV)

        with pytest.raises(AttributeError):
            settings.port = 1

    def test_summary_hides_secrets(self):
        summary = get_config_summary(load_settings(dict(FULL_ENV, OAUTH_STATE_SECRET="state-secret")))

        flattened = repr(summary)
        assert "sk-or-test" not in flattened
        assert "client-secret" not in flattened
        assert "state-secret" not in flattened
        assert summary["linkedin"]["oauth_state_enabled"] is True


class TestValidateSettings:
    """Tests for validate_settings."""

    def test_complete_configuration(self):
        assert validate_settings(load_settings(FULL_ENV)) is True

    def test_all_problems_reported_together(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_settings(load_settings({"PORT": "70000"}))

        message = exc_info.value.message
        assert "OPENROUTER_API_KEY" in message
        assert "LINKEDIN_CLIENT_SECRET" in message
        assert "PORT must be between" in message

    def test_relative_frontend_url(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_settings(load_settings(dict(FULL_ENV, FRONTEND_URL="/app")))

        assert "FRONTEND_URL" in exc_info.value.message

    def test_bad_author_urn(self):
        with pytest.raises(ConfigurationError):
            validate_settings(load_settings(dict(FULL_ENV, LINKEDIN_AUTHOR_URN="me")))
