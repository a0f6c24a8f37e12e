"""
This module provides an asynchronous AuthManager class responsible for:
- acquiring OAuth2 access tokens with the client-credentials grant
- enforcing that the granted scope covers the cards API
- managing token expiration and reuse.

There is no retry: an identity endpoint failure surfaces as AuthError.
"""

import base64
import logging
import time
from typing import Callable, Optional
from urllib.parse import urljoin

from investec_card_sdk.config import InvestecCardSettings
from investec_card_sdk.exceptions import AuthError
from investec_card_sdk.exceptions import TransportError
from investec_card_sdk.models import AuthResponse
from investec_card_sdk.token_store import SessionToken
from investec_card_sdk.token_store import TokenCache
from investec_card_sdk.transport.base import BaseTransport

logger = logging.getLogger("investec_card_sdk.auth")

TOKEN_PATH = "/identity/v2/oauth2/token"
REQUIRED_SCOPE = "cards"


class AuthManager:
    """
    Manages retrieval and caching of access tokens for one set of credentials.

    A cached token is reused while the current time is strictly before its
    expiry; otherwise a new one is requested from the identity endpoint.

    Attributes:
        settings (InvestecCardSettings): Credentials and host.
        transport (BaseTransport): HTTP transport shared with the client.
        single_flight (bool): When True, concurrent callers that find no valid
            token wait on one refresh instead of each requesting their own.
    """

    def __init__(
        self,
        settings: InvestecCardSettings,
        transport: BaseTransport,
        single_flight: bool = False,
        clock: Callable[[], float] = time.time,
        token_cache: Optional[TokenCache] = None,
    ):
        """
        Initializes the AuthManager.

        Args:
            settings (InvestecCardSettings): Configuration with credentials and host.
            transport (BaseTransport): Transport used for the identity endpoint.
            single_flight (bool, optional): Serialise refreshes. Defaults to False.
            clock (Callable[[], float], optional): Returns the current UNIX time.
            token_cache (TokenCache, optional): Slot holding the session token.
        """
        self.settings = settings
        self.transport = transport
        self.single_flight = single_flight
        self._clock = clock
        self._cache = token_cache or TokenCache()

    @property
    def token(self) -> Optional[SessionToken]:
        """The cached session token, valid or not."""
        return self._cache.current()

    def is_token_expired(self) -> bool:
        """
        Checks if the current access token is missing or expired.

        Returns:
            bool: True if no token is cached or now >= its expiry.
        """
        return self._cache.valid_token(self._clock()) is None

    def clear(self):
        """Forget the cached token so the next call re-authenticates."""
        self._cache.clear()

    async def get_token(self) -> str:
        """
        Returns a valid access token. Refreshes it only if it's expired or missing.
        """
        cached = self._cache.valid_token(self._clock())
        if cached is not None:
            logger.debug("Using valid token from memory")
            return cached.access_token

        if not self.single_flight:
            logger.debug("No valid token. Refreshing...")
            return (await self.request_token()).access_token

        async with self._cache.lock:
            # Another caller may have refreshed while we waited.
            cached = self._cache.valid_token(self._clock())
            if cached is not None:
                logger.debug("Token refreshed by a concurrent caller")
                return cached.access_token
            logger.debug("No valid token. Refreshing...")
            return (await self.request_token()).access_token

    async def request_token(self) -> AuthResponse:
        """
        Requests a new access token and caches it on success.

        Returns:
            AuthResponse: The parsed identity endpoint response.

        Raises:
            AuthError: If the endpoint is unreachable, answers non-200, returns
                a malformed body, or grants a scope without cards access.
        """
        url = urljoin(self.settings.host, TOKEN_PATH)
        credentials = f"{self.settings.client_id}:{self.settings.client_secret}"
        headers = {
            "Authorization": "Basic "
            + base64.b64encode(credentials.encode("utf-8")).decode("ascii"),
            "x-api-key": self.settings.api_key,
            "content-type": "application/x-www-form-urlencoded",
        }

        try:
            response = await self.transport.request(
                method="POST",
                url=url,
                headers=headers,
                data={"grant_type": "client_credentials"},
                timeout=self.settings.timeout,
            )
        except TransportError as exc:
            logger.error(f"Identity endpoint unreachable: {exc}")
            raise AuthError(f"Identity endpoint unreachable: {exc}") from exc

        if response.status_code != 200:
            logger.error(f"Auth error: {response.status_code} {response.reason}")
            raise AuthError(response.reason, details=response.text)

        try:
            result = AuthResponse.model_validate(await response.json())
        except ValueError as exc:
            raise AuthError("Malformed token response", details=response.text) from exc

        if REQUIRED_SCOPE not in result.scope:
            logger.error(f"Granted scope '{result.scope}' lacks '{REQUIRED_SCOPE}'")
            raise AuthError("You require the cards scope to use this tool")

        expires_at = self._clock() + result.expires_in
        self._cache.replace(SessionToken(result.access_token, expires_at))
        logger.debug(f"New access token acquired (expires in {result.expires_in}s)")
        return result
