"""
Aiohttp transport implementation for Investec Card SDK.

This module provides AiohttpTransport, an alternative async HTTP client for the SDK.
The response body is read while the connection is still open and handed back
as a BufferedResponse, so callers can parse it after the request completes.
"""

import asyncio
from typing import Any

import aiohttp

from investec_card_sdk.exceptions import TransportError

from .base import BaseTransport
from .base import BufferedResponse
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

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
        # Create session if not exists
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )

        timeout_obj = aiohttp.ClientTimeout(total=timeout or self._timeout)
        try:
            async with self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json,
                data=data,
                timeout=timeout_obj,
            ) as response:
                buffered = BufferedResponse(
                    status_code=response.status,
                    reason=response.reason or "",
                    text=await response.text(),
                    headers=dict(response.headers),
                )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"{method} {url} timed out after {timeout_obj.total}s",
                is_timeout=True,
            ) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc
        return UnifiedResponse(buffered)

    async def close(self):
        if self._session:
            await self._session.close()
