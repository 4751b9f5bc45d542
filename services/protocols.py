"""
Service Layer Protocol Definitions

This module defines typing.Protocol interfaces for the relay's outbound
services. The application factory accepts any object that satisfies these
protocols, which lets route tests swap in fakes without patching HTTP.

Protocols defined:
- NewsProvider: Keyword search over a news feed
- PostGenerator: Drafting a social post from articles
- LinkedInGateway: OAuth flow and publishing on LinkedIn
"""

from typing import Protocol, Optional, List, Any

from data.models import Article, PostDraft, OAuthToken


class NewsProvider(Protocol):
    """Protocol for looking up recent news by keyword."""

    def search(self, keyword: Optional[str]) -> List[Article]:
        """Search the feed for a keyword.

        Args:
            keyword: The search term supplied by the caller.

        Returns:
            List[Article]: At most NEWS_MAX_ARTICLES articles in feed order.

        Raises:
            InvalidRequest: If the keyword is missing.
            NotFound: If the feed holds no items.
            UpstreamUnavailable: If the feed cannot be fetched.
            UpstreamParseError: If the feed is not valid XML.
        """
        ...


class PostGenerator(Protocol):
    """Protocol for drafting a post with a language model."""

    def generate_post(self, articles: Any) -> PostDraft:
        """Draft a post about the given articles.

        Args:
            articles: A non-empty list of article objects.

        Returns:
            PostDraft: The trimmed text returned by the model.

        Raises:
            InvalidRequest: If no articles were supplied.
            AIServiceError: If the model call fails.
        """
        ...


class LinkedInGateway(Protocol):
    """Protocol for the LinkedIn OAuth flow and publishing."""

    def build_authorization_url(self) -> str:
        """Return the URL the browser is redirected to for consent.

        Raises:
            ConfigurationError: If client id or redirect URI is unset.
        """
        ...

    def verify_state(self, state: Optional[str]) -> None:
        """Check the state echoed back on the OAuth callback.

        Raises:
            OAuthStateError: If state signing is enabled and the state is bad.
        """
        ...

    def exchange_code(self, code: str) -> OAuthToken:
        """Exchange an authorization code for an access token.

        Raises:
            OAuthExchangeError: If the exchange fails for any reason.
        """
        ...

    def publish(self, token: Optional[str], content: Optional[str]) -> Optional[str]:
        """Publish text as the token's owner.

        Returns:
            Optional[str]: The id LinkedIn assigned to the post, when reported.

        Raises:
            InvalidRequest: If token or content is missing.
            PublishError: If LinkedIn rejects the post.
        """
        ...
