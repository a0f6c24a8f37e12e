import inspect
import json as jsonlib
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def _reason_of(response) -> str:
    # httpx exposes reason_phrase, requests and aiohttp expose reason
    for attr in ("reason_phrase", "reason"):
        reason = getattr(response, attr, None)
        if isinstance(reason, str) and reason:
            return reason
    try:
        return HTTPStatus(response.status_code).phrase
    except ValueError:
        return ""


@dataclass
class BufferedResponse:
    """
    Response whose body was read eagerly.

    Used for clients (aiohttp) whose response object is unusable once its
    context manager exits.
    """

    status_code: int
    reason: str = ""
    text: str = ""
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        return jsonlib.loads(self.text)


class UnifiedResponse:
    """
    Unified response wrapper that handles differences between HTTP clients.
    Provides consistent async interface regardless of the underlying transport.
    """

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.reason = _reason_of(response)
        self.text = (
            response.text if hasattr(response, "text") else str(response.content)
        )
        self.headers = response.headers if hasattr(response, "headers") else {}

    async def json(self):
        """
        Unified JSON parsing that works with both sync and async HTTP clients.
        """
        if hasattr(self._response, "json") and callable(self._response.json):
            result = self._response.json()
            if inspect.isawaitable(result):
                return await result
            return result
        raise NotImplementedError("Response doesn't support .json()")


class BaseTransport:
    """
    Abstract transport layer interface for Investec Card SDK.
    All HTTP client backends should inherit from this class.

    Implementations must raise TransportError for network failures and
    timeouts; HTTP error statuses are returned, not raised.

    Supported transports:
    - httpx: Native async HTTP client
    - aiohttp: Native async HTTP client
    - requests: Sync HTTP client wrapped in async interface
    """

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
        """
        Async request method for all transports.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self):
        """Release any pooled connections held by the transport."""
