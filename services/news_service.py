"""
News Service Module

This module searches the Google News RSS feed for a keyword and converts
the returned feed items into Article records.
"""

from typing import List, Optional
from urllib.parse import quote
import xml.etree.ElementTree as ET

import requests

from config import settings as config
from data.models import Article
from utils.exceptions import InvalidRequest, NotFound, UpstreamUnavailable, UpstreamParseError
from utils.logger import get_logger

logger = get_logger(__name__)


class NewsService:
    """Service for keyword searches over an RSS news feed."""

    def __init__(self, settings: config.Settings, max_articles: int = config.NEWS_MAX_ARTICLES):
        """
        Initialize the news service.

        Args:
            settings: Resolved application settings.
            max_articles: Maximum number of articles returned per search.
        """
        self.settings = settings
        self.max_articles = max_articles

    @staticmethod
    def build_search_url(keyword: str) -> str:
        """Return the feed search URL for a keyword."""
        return f"{config.NEWS_RSS_SEARCH_URL}?q={quote(keyword, safe='')}"

    def search(self, keyword: Optional[str]) -> List[Article]:
        """
        Fetch the feed for a keyword and return its leading articles.

        Args:
            keyword: The search term.

        Returns:
            List[Article]: At most ``max_articles`` articles in feed order.
        """
        if not keyword or not keyword.strip():
            raise InvalidRequest("Keyword is required")

        url = self.build_search_url(keyword)
        try:
            response = requests.get(url, timeout=self.settings.http_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"News fetch error for keyword '{keyword}': {e}")
            raise UpstreamUnavailable("Failed to fetch news", upstream_payload=str(e)) from e

        articles = self.parse_feed(response.content)
        logger.info(f"Found {len(articles)} articles for keyword '{keyword}'")
        return articles

    def parse_feed(self, xml_data) -> List[Article]:
        """
        Convert an RSS document into Article records.

        Items without a title or link are skipped; the remaining items are
        cut to ``max_articles`` in document order.

        Args:
            xml_data: The feed body as bytes or str.

        Returns:
            List[Article]: The parsed articles.

        Raises:
            UpstreamParseError: If the document is not well-formed XML.
            NotFound: If the document has no rss/channel/item structure.
        """
        try:
            root = ET.fromstring(xml_data)
        except ET.ParseError as e:
            logger.error(f"XML Parse Error: {e}")
            raise UpstreamParseError("Failed to parse RSS feed", upstream_payload=str(e)) from e

        channel = root.find("channel") if root.tag == "rss" else None
        items = channel.findall("item") if channel is not None else []

        articles = []
        for item in items:
            article = self._parse_item(item)
            if article is None:
                continue
            articles.append(article)
            if len(articles) >= self.max_articles:
                break

        if not articles:
            raise NotFound("No articles found for this keyword")

        return articles

    @staticmethod
    def _parse_item(item: ET.Element) -> Optional[Article]:
        title = (item.findtext("title") or "").strip()
        link = (item.findtext("link") or "").strip()
        if not title or not link:
            logger.debug("Skipping feed item without title or link")
            return None

        description = (item.findtext("description") or "").strip()
        return Article(
            title=title,
            link=link,
            pub_date=(item.findtext("pubDate") or "").strip(),
            description=description or config.NO_DESCRIPTION_PLACEHOLDER,
        )
