"""
AI Service Module

This module drafts LinkedIn posts with a chat-completion model served
through OpenRouter. It assembles the prompt from a list of articles, calls
the model with fixed sampling parameters and returns the trimmed text.
"""

from typing import Any, Dict, List, Optional

import requests

from config import settings as config
from data.models import Article, PostDraft
from utils.exceptions import AIServiceError, InvalidRequest
from utils.helpers import extract_upstream_payload, payload_field
from utils.logger import get_logger

logger = get_logger(__name__)

AI_UNAVAILABLE_DETAILS = "AI service unavailable"


def coerce_articles(articles: Any) -> List[Article]:
    """
    Validate caller-supplied articles and convert them to Article records.

    Args:
        articles: The ``articles`` value from the request body.

    Returns:
        List[Article]: The converted articles.

    Raises:
        InvalidRequest: If the value is missing, not a list, empty, or holds
            entries that are not article objects.
    """
    if not articles or not isinstance(articles, list):
        raise InvalidRequest("Articles required")

    converted = []
    for entry in articles:
        if isinstance(entry, Article):
            converted.append(entry)
        elif isinstance(entry, dict):
            converted.append(Article.from_dict(entry))
        else:
            raise InvalidRequest("Articles required", details="Each article must be an object")

    if not all(article.title for article in converted):
        raise InvalidRequest("Articles required", details="Each article needs a title")

    return converted


def build_user_prompt(articles: List[Article]) -> str:
    """Number the articles and embed them in the user instruction."""
    content = "\n\n".join(
        f"({i}) {article.title} - {article.description}"
        for i, article in enumerate(articles, start=1)
    )
    return config.AI_USER_PROMPT_TEMPLATE.format(articles=content)


class AIService:
    """Service for drafting posts through the OpenRouter chat-completion API."""

    def __init__(self, settings: config.Settings):
        """
        Initialize the AI service.

        The API key is checked per call, not here.

        Args:
            settings: Resolved application settings.
        """
        self.settings = settings
        self.model = config.AI_MODEL

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.language_model_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.http_referer,
            "X-Title": config.AI_APP_TITLE,
        }

    def build_request(self, articles: List[Article]) -> Dict[str, Any]:
        """Return the chat-completion request body for the articles."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": config.AI_SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(articles)},
            ],
            "temperature": config.AI_TEMPERATURE,
            "max_tokens": config.AI_MAX_TOKENS,
        }

    def generate_post(self, articles: Any) -> PostDraft:
        """
        Draft a LinkedIn post about the given articles.

        Args:
            articles: A non-empty list of article objects (title + description).

        Returns:
            PostDraft: The model's text with surrounding whitespace removed.

        Raises:
            InvalidRequest: If no usable articles were supplied.
            AIServiceError: On any transport or API-level failure.
        """
        article_list = coerce_articles(articles)

        if not self.settings.language_model_api_key:
            logger.error("OpenRouter Error: OPENROUTER_API_KEY is not configured")
            raise AIServiceError("Failed to generate post", details=AI_UNAVAILABLE_DETAILS)

        try:
            response = requests.post(
                config.AI_CHAT_COMPLETIONS_URL,
                json=self.build_request(article_list),
                headers=self._headers(),
                timeout=self.settings.http_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            payload = extract_upstream_payload(e)
            logger.error(f"OpenRouter Error: {payload}")
            raise AIServiceError(
                "Failed to generate post",
                details=payload_field(payload, "error") or AI_UNAVAILABLE_DETAILS,
                upstream_payload=payload,
            ) from e

        # OpenRouter may report provider failures inside a 200 response
        if payload_field(data, "error"):
            logger.error(f"OpenRouter Error: {data['error']}")
            raise AIServiceError("Failed to generate post", details=data["error"], upstream_payload=data)

        text = self._extract_text(data)
        if text is None:
            logger.error(f"OpenRouter Error: no usable choice in response: {data}")
            raise AIServiceError("Failed to generate post", details=AI_UNAVAILABLE_DETAILS, upstream_payload=data)
        if not text:
            logger.warning("OpenRouter returned a blank completion")

        logger.info(f"Generated post from {len(article_list)} articles ({len(text)} characters)")
        return PostDraft(text=text, model=data.get("model") or self.model)

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        """Trimmed ``choices[0].message.content``, or None when the choice is unusable."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(content, str):
            return None
        return content.strip()
