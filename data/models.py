"""
Data Models for the News Relay

This module contains the data classes passed between the routes and the
services. None of them outlive a single request.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

from config.settings import NO_DESCRIPTION_PLACEHOLDER


@dataclass(frozen=True)
class Article:
    """One news item parsed from a feed."""
    title: str
    link: str
    pub_date: str                      # As formatted by the feed source
    description: str = NO_DESCRIPTION_PLACEHOLDER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Build an Article from a caller-supplied JSON object."""
        description = data.get("description")
        return cls(
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            pub_date=str(data.get("pubDate") or data.get("pub_date") or ""),
            description=str(description) if description else NO_DESCRIPTION_PLACEHOLDER,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pub_date,
            "description": self.description,
        }


@dataclass(frozen=True)
class PostDraft:
    """Text drafted by the language model."""
    text: str
    model: Optional[str] = None


@dataclass(frozen=True)
class OAuthToken:
    """An access token issued by LinkedIn, held only in transit."""
    access_token: str
    expires_in: Optional[int] = None

    def __repr__(self) -> str:
        # keep the credential out of logs and tracebacks
        return f"OAuthToken(access_token='***', expires_in={self.expires_in!r})"


@dataclass(frozen=True)
class GeneratedPost:
    """Caller-supplied text to publish with the caller's bearer token."""
    token: str
    content: str

    @property
    def is_complete(self) -> bool:
        return bool(self.token) and bool(self.content)

    def __repr__(self) -> str:
        return f"GeneratedPost(token='***', content={self.content!r})"
