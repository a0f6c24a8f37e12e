# token_store.py

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger("investec_card_sdk.token_store")


@dataclass(frozen=True)
class SessionToken:
    """An access token together with the UNIX timestamp at which it expires."""

    access_token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        # A token expiring exactly now is already expired.
        return now < self.expires_at


class TokenCache:
    """
    Single-slot, single-writer holder for the current session token.

    The slot is only ever replaced as a whole; readers never observe a token
    paired with another token's expiry. The lock is exposed so the owner can
    serialise refreshes when it opts into single-flight behaviour.
    """

    def __init__(self):
        self._token: Optional[SessionToken] = None
        self.lock = asyncio.Lock()

    def current(self) -> Optional[SessionToken]:
        return self._token

    def valid_token(self, now: float) -> Optional[SessionToken]:
        if self._token is not None and self._token.is_valid(now):
            return self._token
        return None

    def replace(self, token: SessionToken):
        self._token = token
        logger.debug("Session token replaced (expires_at=%s)", token.expires_at)

    def clear(self):
        """Clears the token cache"""
        self._token = None
        logger.debug("Session token cleared")
