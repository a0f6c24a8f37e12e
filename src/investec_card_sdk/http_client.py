"""
Authenticated HTTP call layer shared by every card endpoint.

CardHttpClient resolves a path against the configured host, attaches the
bearer token, runs middleware hooks, and maps response statuses onto the
SDK's exception taxonomy:

- 200: parsed JSON body, returned as-is
- 404: NotFoundError("Card not found")
- other: HttpError carrying the status reason text

Transport failures (network errors, the request timeout) propagate as
TransportError. Nothing is retried.
"""

import logging
from typing import Any
from urllib.parse import urljoin

from investec_card_sdk.exceptions import CardAPIError
from investec_card_sdk.exceptions import HttpError
from investec_card_sdk.exceptions import NotFoundError
from investec_card_sdk.middleware import Middleware
from investec_card_sdk.transport.base import BaseTransport
from investec_card_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("investec_card_sdk.http")


class CardHttpClient:
    def __init__(
        self,
        host: str,
        transport: BaseTransport,
        timeout: float = 30.0,
        middlewares: list[Middleware] | None = None,
    ):
        self.host = host
        self.transport = transport
        self.timeout = timeout
        self.middlewares = middlewares or []

    def endpoint(self, path: str) -> str:
        return urljoin(self.host, path)

    async def authenticated_get(self, path: str, token: str) -> Any:
        return await self._send("GET", path, token)

    async def authenticated_post(self, path: str, token: str, body: Any) -> Any:
        return await self._send("POST", path, token, body)

    async def _send(self, method: str, path: str, token: str, body: Any = None) -> Any:
        url = self.endpoint(path)
        headers = {
            "Authorization": f"Bearer {token}",
            "content-type": "application/json",
        }

        # === MIDDLEWARE: before request ===
        for mw in self.middlewares:
            await mw.on_request(
                method=method,
                url=url,
                headers=headers,
                params=None,
                json=body,
                data=None,
            )

        response = await self.transport.request(
            method=method,
            url=url,
            headers=headers,
            json=body,
            timeout=self.timeout,
        )

        # === MIDDLEWARE: after response ===
        for mw in self.middlewares:
            await mw.on_response(response)

        return await self._handle(method, url, response)

    async def _handle(self, method: str, url: str, response: UnifiedResponse) -> Any:
        if response.status_code == 200:
            try:
                return await response.json()
            except ValueError as exc:
                raise CardAPIError(
                    f"Invalid JSON in response from {method} {url}",
                    details=response.text,
                ) from exc

        logger.debug(f"{method} {url} -> {response.status_code} {response.reason}")
        if response.status_code == 404:
            raise NotFoundError(details=response.text)
        raise HttpError(response.status_code, response.reason, details=response.text)
