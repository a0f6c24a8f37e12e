from typing import Any

import httpx

from investec_card_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import UnifiedResponse


class HttpxTransport(BaseTransport):
    """
    Async transport implementation using httpx.AsyncClient.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.AsyncClient | None = None):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=self._timeout, follow_redirects=True
        )

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json,
                data=data,
                timeout=timeout or self._timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"{method} {url} timed out after {timeout or self._timeout}s",
                is_timeout=True,
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        return UnifiedResponse(response)

    async def close(self):
        await self._client.aclose()
