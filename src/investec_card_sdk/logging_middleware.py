"""
Logging middleware for Investec Card SDK.

This module provides LoggingMiddleware, a built-in middleware that logs
all card API requests and responses with timing information.

The Authorization header is redacted before logging. The start time is kept
per request context, so concurrent calls through one middleware each report
their own elapsed time.
"""

import logging
import time
from contextvars import ContextVar
from typing import Callable

from investec_card_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("investec_card_sdk.middleware.logging")

_REDACTED = "***"

_request_started: ContextVar[float | None] = ContextVar(
    "investec_card_sdk_request_started", default=None
)


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses in InvestecCardClient.
    Uses standard Python logging.
    """

    def __init__(
        self, level: int = logging.INFO, clock: Callable[[], float] = time.monotonic
    ):
        self.level = level
        self._clock = clock

    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict,
        params,
        json,
        data,
    ):
        _request_started.set(self._clock())
        safe_headers = {
            key: (_REDACTED if key.lower() == "authorization" else value)
            for key, value in headers.items()
        }
        logger.log(
            self.level,
            f"Request: {method} {url} | headers={safe_headers} | params={params} | json={json}",
        )

    async def on_response(self, response: UnifiedResponse):
        started = _request_started.get()
        elapsed = (self._clock() - started) if started is not None else None
        logger.log(
            self.level,
            f"Response: {response.status_code} {response.reason}"
            + (f" | elapsed={elapsed:.3f}s" if elapsed is not None else ""),
        )
