"""
Synchronous wrapper for InvestecCardClient.

This module provides a synchronous interface on top of the async InvestecCardClient
to support users who need sync operations.
"""

import asyncio
from collections.abc import Mapping
from typing import Any, Union

from .client import CardKey
from .client import InvestecCardClient
from .models import CardResponse
from .models import CodeResponse
from .models import CodeToggle
from .models import EnvResponse
from .models import ExecuteResult
from .models import ExecutionResult
from .models import ReferenceResponse
from .models import Transaction


class InvestecCardClientSync:
    """
    Synchronous wrapper for InvestecCardClient.

    All calls run on one private event loop, so the cached token and the
    transport's connections survive between calls.

    Example:
        with InvestecCardClientSync("client-id", "client-secret", "api-key") as client:
            cards = client.get_cards()
            client.toggle_code(cards["data"]["cards"][0]["CardKey"], True)
    """

    def __init__(self, *args, **kwargs):
        """
        Initialize the synchronous client.

        Accepts the same arguments as InvestecCardClient.
        """
        self._async_client = InvestecCardClient(*args, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro):
        return self._loop.run_until_complete(coro)

    def get_token(self) -> str:
        return self._run(self._async_client.get_token())

    def get_cards(self) -> CardResponse:
        return self._run(self._async_client.get_cards())

    def get_code(self, card_key: CardKey) -> CodeResponse:
        return self._run(self._async_client.get_code(card_key))

    def get_published_code(self, card_key: CardKey) -> CodeResponse:
        return self._run(self._async_client.get_published_code(card_key))

    def upload_code(self, card_key: CardKey, code: Mapping[str, Any]) -> CodeResponse:
        return self._run(self._async_client.upload_code(card_key, code))

    def upload_published_code(
        self, card_key: CardKey, code_id: str, code: str
    ) -> CodeResponse:
        return self._run(
            self._async_client.upload_published_code(card_key, code_id, code)
        )

    def toggle_code(self, card_key: CardKey, enabled: bool) -> CodeToggle:
        return self._run(self._async_client.toggle_code(card_key, enabled))

    def get_env(self, card_key: CardKey) -> EnvResponse:
        return self._run(self._async_client.get_env(card_key))

    def upload_env(self, card_key: CardKey, env: Mapping[str, Any]) -> EnvResponse:
        return self._run(self._async_client.upload_env(card_key, env))

    def get_executions(self, card_key: CardKey) -> ExecutionResult:
        return self._run(self._async_client.get_executions(card_key))

    def execute_code(
        self,
        code: str,
        transaction: Union[Transaction, Mapping[str, Any]],
        card_key: CardKey,
    ) -> ExecuteResult:
        return self._run(self._async_client.execute_code(code, transaction, card_key))

    def get_currencies(self) -> ReferenceResponse:
        return self._run(self._async_client.get_currencies())

    def get_countries(self) -> ReferenceResponse:
        return self._run(self._async_client.get_countries())

    def get_merchants(self) -> ReferenceResponse:
        return self._run(self._async_client.get_merchants())

    def close(self):
        """
        Synchronous cleanup of client resources.
        """
        if self._loop.is_closed():
            return
        try:
            self._run(self._async_client.aclose())
        finally:
            self._loop.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
