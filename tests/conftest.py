"""
Shared Test Fixtures for the News Relay

This module provides common fixtures used across all test modules.
Fixtures include settings factories, HTTP response mocks, log capture,
data factories and a Flask test client wired to fake services.
"""

import pytest
from unittest.mock import MagicMock, patch
from typing import Optional, Dict, Any, List
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import Settings
from data.models import Article, PostDraft, OAuthToken
from utils.exceptions import ConfigurationError


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings_factory():
    """
    Factory fixture for Settings objects with safe test values.

    Usage:
        def test_something(settings_factory):
            settings = settings_factory(linkedin_client_id=None)

    Returns:
        callable: Builds a Settings with keyword overrides.
    """
    def _create_settings(**overrides) -> Settings:
        values = dict(
            language_model_api_key="test-openrouter-key",
            linkedin_client_id="test-client-id",
            linkedin_client_secret="test-client-secret",
            linkedin_redirect_uri="http://localhost:5000/auth/linkedin/callback",
            frontend_url="http://localhost:3000",
            http_referer="http://localhost:3000",
            port=5000,
            http_timeout=5.0,
        )
        values.update(overrides)
        return Settings(**values)

    return _create_settings


@pytest.fixture
def test_settings(settings_factory):
    """Settings with every credential configured and state signing off."""
    return settings_factory()


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log records emitted by the application loggers.

    Usage:
        def test_logging(capture_logs):
            do_something()
            assert any("expected" in r.getMessage() for r in capture_logs.records)

    Returns:
        LogCapture: Handler exposing the captured ``records``.
    """
    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__(level=logging.DEBUG)
            self.records = []

        def emit(self, record):
            self.records.append(record)

        def messages(self, level: Optional[int] = None) -> List[str]:
            return [r.getMessage() for r in self.records if level is None or r.levelno == level]

    handler = LogCapture()
    root = logging.getLogger("relay")
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    yield handler
    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# HTTP Response Fixtures
# =============================================================================

@pytest.fixture
def mock_http_response():
    """
    Factory fixture for creating mock HTTP responses.

    Usage:
        def test_http_request(mock_http_response):
            response = mock_http_response(status_code=200, json_data={'key': 'value'})

    Returns:
        callable: A factory function for creating mock responses.
    """
    def _create_response(
        status_code: int = 200,
        content: bytes = b'',
        text: str = '',
        json_data: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        url: str = 'https://example.com',
        raise_for_status: bool = False
    ) -> MagicMock:
        """
        Create a mock HTTP response object.

        Args:
            status_code: HTTP status code (default 200).
            content: Raw bytes content.
            text: Text content (will be auto-generated from json_data if not provided).
            json_data: Value to return from response.json().
            headers: Response headers dictionary.
            url: The URL of the response.
            raise_for_status: If True, raise_for_status() will raise an exception.

        Returns:
            MagicMock: A mock response object mimicking requests.Response.
        """
        import json

        mock_response = MagicMock()
        mock_response.status_code = status_code
        mock_response.content = content or text.encode('utf-8')
        mock_response.url = url
        mock_response.headers = headers or {'Content-Type': 'application/json'}
        mock_response.ok = 200 <= status_code < 300

        # Set text content
        if text:
            mock_response.text = text
        elif json_data is not None:
            mock_response.text = json.dumps(json_data)
        else:
            mock_response.text = content.decode('utf-8') if content else ''

        # Configure json() method
        if json_data is not None:
            mock_response.json.return_value = json_data
        else:
            mock_response.json.side_effect = ValueError("No JSON data")

        # Configure raise_for_status
        if raise_for_status or status_code >= 400:
            from requests.exceptions import HTTPError
            mock_response.raise_for_status.side_effect = HTTPError(
                f"{status_code} Error",
                response=mock_response
            )
        else:
            mock_response.raise_for_status.return_value = None

        return mock_response

    return _create_response


@pytest.fixture
def mock_requests(mock_http_response):
    """
    Mock the requests library for HTTP testing.

    Usage:
        def test_api_call(mock_requests):
            mock_requests.get.return_value = mock_requests.response(
                status_code=200, text='<rss/>'
            )

    Returns:
        MagicMock: A mock requests module with response factory attached.
    """
    with patch('requests.get') as mock_get, \
         patch('requests.post') as mock_post:
        mock_module = MagicMock()
        mock_module.get = mock_get
        mock_module.post = mock_post
        mock_module.response = mock_http_response
        yield mock_module


# =============================================================================
# Data Factories
# =============================================================================

@pytest.fixture
def rss_feed_factory():
    """
    Factory fixture for RSS documents.

    Usage:
        def test_feed(rss_feed_factory):
            xml = rss_feed_factory(item_count=7)

    Returns:
        callable: Builds an RSS document with numbered items.
    """
    def _create_feed(item_count: int = 3, with_description: bool = True,
                     extra_items: str = '') -> str:
        items = []
        for i in range(1, item_count + 1):
            description = f"<description>Description {i}</description>" if with_description else ""
            items.append(
                "<item>"
                f"<title>Article {i}</title>"
                f"<link>https://news.example.com/article-{i}</link>"
                f"<pubDate>Mon, 0{i % 9 + 1} Jan 2024 10:00:00 GMT</pubDate>"
                f"{description}"
                "</item>"
            )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rss version="2.0"><channel><title>Search results</title>'
            + "".join(items) + extra_items +
            '</channel></rss>'
        )

    return _create_feed


@pytest.fixture
def article_factory():
    """
    Factory fixture for creating Article test objects.

    Returns:
        callable: Builds an Article with sensible defaults.
    """
    def _create_article(index: int = 1, **overrides) -> Article:
        values = dict(
            title=f"Article {index}",
            link=f"https://news.example.com/article-{index}",
            pub_date="Mon, 01 Jan 2024 10:00:00 GMT",
            description=f"Description {index}",
        )
        values.update(overrides)
        return Article(**values)

    return _create_article


# =============================================================================
# Fake Services
# =============================================================================

class FakeNewsService:
    """NewsProvider returning canned articles and recording calls."""

    def __init__(self, articles: Optional[List[Article]] = None, error: Optional[Exception] = None):
        self.articles = articles or []
        self.error = error
        self.calls = []

    def search(self, keyword):
        self.calls.append(keyword)
        if self.error:
            raise self.error
        return self.articles


class FakeAIService:
    """PostGenerator returning a canned draft and recording calls."""

    def __init__(self, text: str = "Drafted post", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_post(self, articles):
        self.calls.append(articles)
        if self.error:
            raise self.error
        return PostDraft(text=self.text, model="test-model")


class FakeLinkedInService:
    """LinkedInGateway with configurable outcomes that records calls."""

    def __init__(self, configured: bool = True, token: str = "test-access-token",
                 exchange_error: Optional[Exception] = None,
                 state_error: Optional[Exception] = None,
                 publish_error: Optional[Exception] = None):
        self.configured = configured
        self.token = token
        self.exchange_error = exchange_error
        self.state_error = state_error
        self.publish_error = publish_error
        self.exchanged_codes = []
        self.verified_states = []
        self.published = []

    def build_authorization_url(self):
        if not self.configured:
            raise ConfigurationError("LinkedIn OAuth not configured")
        return "https://www.linkedin.com/oauth/v2/authorization?response_type=code&client_id=test-client-id"

    def verify_state(self, state):
        self.verified_states.append(state)
        if self.state_error:
            raise self.state_error

    def exchange_code(self, code):
        self.exchanged_codes.append(code)
        if self.exchange_error:
            raise self.exchange_error
        return OAuthToken(access_token=self.token, expires_in=5184000)

    def publish(self, token, content):
        self.published.append((token, content))
        if self.publish_error:
            raise self.publish_error
        return "urn:li:share:123"


@pytest.fixture
def fake_services(article_factory):
    """Fake news, AI and LinkedIn services with default happy-path behavior."""
    return {
        "news_service": FakeNewsService([article_factory(i) for i in range(1, 4)]),
        "ai_service": FakeAIService(),
        "linkedin_service": FakeLinkedInService(),
    }


@pytest.fixture
def app_factory(test_settings, fake_services):
    """
    Factory fixture for Flask apps wired to fake services.

    Usage:
        def test_route(app_factory):
            client = app_factory(ai_service=FakeAIService(error=...)).test_client()

    Returns:
        callable: Builds an app; keyword arguments replace individual services.
    """
    from api.app import create_app

    def _create_app(settings: Optional[Settings] = None, **services):
        wired = dict(fake_services)
        wired.update(services)
        app = create_app(settings or test_settings, **wired)
        app.config["TESTING"] = True
        return app

    return _create_app


@pytest.fixture
def client(app_factory):
    """Flask test client for an app with default fake services."""
    return app_factory().test_client()
