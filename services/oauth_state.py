"""
OAuth State Module

Stateless CSRF protection for the LinkedIn OAuth flow. A state value is a
random nonce plus its issue time, signed with HMAC-SHA256 using a server
secret; the callback recomputes the signature instead of looking anything up.
"""

import hashlib
import hmac
import secrets
import time
from typing import Optional

from utils.exceptions import OAuthStateError

STATE_SEPARATOR = "."


class OAuthStateSigner:
    """Issues and verifies signed OAuth state values."""

    def __init__(self, secret: str, max_age: int):
        if not secret:
            raise ValueError("OAuth state secret must not be empty")
        self._key = secret.encode("utf-8")
        self.max_age = max_age

    def _sign(self, message: str) -> str:
        return hmac.new(self._key, message.encode("utf-8"), hashlib.sha256).hexdigest()

    def issue(self, now: Optional[float] = None) -> str:
        """
        Create a new state value.

        Args:
            now: Issue time as a Unix timestamp; defaults to the current time.

        Returns:
            str: ``<nonce>.<issued_at>.<signature>``
        """
        issued_at = int(now if now is not None else time.time())
        message = f"{secrets.token_urlsafe(16)}{STATE_SEPARATOR}{issued_at}"
        return f"{message}{STATE_SEPARATOR}{self._sign(message)}"

    def verify(self, state: Optional[str], now: Optional[float] = None) -> None:
        """
        Check a state value returned on the callback.

        Args:
            state: The ``state`` query parameter.
            now: Verification time; defaults to the current time.

        Raises:
            OAuthStateError: If the state is missing, malformed, forged or expired.
        """
        if not state:
            raise OAuthStateError("Invalid OAuth state", details="state parameter missing")

        parts = state.split(STATE_SEPARATOR)
        if len(parts) != 3 or not parts[1].isdigit():
            raise OAuthStateError("Invalid OAuth state", details="malformed state")

        nonce, issued_at, signature = parts
        expected = self._sign(f"{nonce}{STATE_SEPARATOR}{issued_at}")
        if not hmac.compare_digest(expected, signature):
            raise OAuthStateError("Invalid OAuth state", details="signature mismatch")

        current = now if now is not None else time.time()
        age = current - int(issued_at)
        if age < 0 or age > self.max_age:
            raise OAuthStateError("Invalid OAuth state", details="state expired")
