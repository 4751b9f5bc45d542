"""
Helper Utility Module

This module provides helper functions shared by the services and routes.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlparse, urlsplit, urlunsplit, quote

import requests


def is_valid_url(url: Optional[str]) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL has both a scheme and a host, False otherwise
    """
    if not url:
        return False
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except Exception:
        return False


def extract_upstream_payload(error: Exception) -> Any:
    """
    Pull the most useful description out of a failed outbound call.

    Returns the decoded JSON body of the upstream response when there is one,
    its raw text when it is not JSON, and the exception message otherwise.

    Args:
        error: The exception raised by ``requests`` or by response handling.

    Returns:
        The upstream payload (dict, list or str).
    """
    response = getattr(error, "response", None)
    if isinstance(error, requests.RequestException) and response is not None:
        try:
            return response.json()
        except ValueError:
            text = getattr(response, "text", "")
            if text:
                return text
    return str(error)


def payload_field(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` when the payload is a dict, else None."""
    if isinstance(payload, dict):
        return payload.get(key)
    return None


def encode_query(params: Dict[str, str]) -> str:
    """URL-encode query parameters, escaping every reserved character."""
    return "&".join(f"{quote(str(k), safe='')}={quote(str(v), safe='')}" for k, v in params.items())


def append_query(base_url: str, params: Dict[str, str]) -> str:
    """
    Append URL-encoded query parameters to a base URL.

    The parameters always land in the query component, ahead of any
    ``#fragment`` the base URL carries.

    Args:
        base_url: URL that may already carry a query string or fragment.
        params: Parameters to add.

    Returns:
        str: The combined URL.
    """
    parts = urlsplit(base_url)
    query = f"{parts.query}&{encode_query(params)}" if parts.query else encode_query(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
