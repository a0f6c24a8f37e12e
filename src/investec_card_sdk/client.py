"""
Async-first Investec Card API SDK Client.

This module provides the main InvestecCardClient class that handles all
interactions with the Investec programmable cards API.
Features include:

- Async-first design with async/await for all API operations
- OAuth2 client-credentials authentication with token caching
- Multiple HTTP transport backends (httpx, aiohttp, requests)
- Pluggable middleware system for request/response processing
- Argument validation before any network call
- Comprehensive error handling with meaningful exceptions

Example usage:
    from investec_card_sdk import InvestecCardClient

    async with InvestecCardClient("client-id", "client-secret", "api-key") as client:
        cards = await client.get_cards()
        card_key = cards["data"]["cards"][0]["CardKey"]
        await client.toggle_code(card_key, True)
"""

import time
from collections.abc import Mapping
from typing import Any, Callable, Union
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from investec_card_sdk.auth import AuthManager
from investec_card_sdk.config import InvestecCardSettings
from investec_card_sdk.exceptions import ValidationError
from investec_card_sdk.http_client import CardHttpClient
from investec_card_sdk.middleware import Middleware
from investec_card_sdk.models import CardResponse
from investec_card_sdk.models import CodeResponse
from investec_card_sdk.models import CodeToggle
from investec_card_sdk.models import EnvResponse
from investec_card_sdk.models import ExecuteResult
from investec_card_sdk.models import ExecutionResult
from investec_card_sdk.models import ReferenceResponse
from investec_card_sdk.models import SimulationPayload
from investec_card_sdk.models import Transaction
from investec_card_sdk.transport import get_transport
from investec_card_sdk.transport.base import BaseTransport


CARDS_PATH = "/za/v1/cards"

CardKey = Union[int, str]

MISSING_PARAMETERS = "Missing required parameters"


def _card_key_missing(card_key: Any) -> bool:
    # 0 is treated as missing, same as None and "".
    return card_key is None or card_key == 0 or card_key == ""


def _text_missing(value: Any) -> bool:
    return value is None or value == ""


def _card_path(card_key: CardKey, resource: str) -> str:
    return f"{CARDS_PATH}/{quote(str(card_key), safe='')}/{resource}"


class InvestecCardClient:
    """
    Async client for the Investec programmable cards API.

    Every endpoint method follows the same template: validate the arguments,
    obtain a token from the AuthManager (reusing a cached one while it is
    valid), build the resource path and return the parsed JSON response
    unmodified.

    Args:
        client_id (str | None): OAuth2 client id. Falls back to INVESTEC_CARD_CLIENT_ID.
        client_secret (str | None): OAuth2 client secret. Falls back to INVESTEC_CARD_CLIENT_SECRET.
        api_key (str | None): API key. Falls back to INVESTEC_CARD_API_KEY.
        host (str | None): API host, defaults to https://openapi.investec.com
        settings (InvestecCardSettings | None): Complete settings; overrides the
            individual credential arguments when given.
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
            Defaults to settings.transport
        transport (BaseTransport | None): Ready-made transport instance.
        middlewares (list[Middleware] | None): Hooks run around each card API call.
        single_flight (bool): Serialise concurrent token refreshes.
        clock (Callable[[], float]): Source of the current UNIX time.

    Raises:
        ValidationError: Missing required parameters (no request is sent).
        AuthError: Authentication failed or the cards scope was not granted.
        NotFoundError: The API answered 404.
        HttpError: The API answered any other non-200 status.
        TransportError: Network failure or timeout.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        api_key: str | None = None,
        host: str | None = None,
        *,
        settings: InvestecCardSettings | None = None,
        transport_name: str | None = None,
        transport: BaseTransport | None = None,
        middlewares: list[Middleware] | None = None,
        single_flight: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        if settings is None:
            overrides = {
                "client_id": client_id,
                "client_secret": client_secret,
                "api_key": api_key,
                "host": host,
            }
            settings = InvestecCardSettings(
                **{key: value for key, value in overrides.items() if value is not None}
            )
        self.settings = settings

        self.transport = transport or get_transport(
            transport_name or settings.transport, timeout=settings.timeout
        )
        self.auth = AuthManager(
            settings=settings,
            transport=self.transport,
            single_flight=single_flight,
            clock=clock,
        )
        self.http = CardHttpClient(
            host=settings.host,
            transport=self.transport,
            timeout=settings.timeout,
            middlewares=middlewares,
        )

    async def get_token(self) -> str:
        """Return a valid access token, authenticating if needed."""
        return await self.auth.get_token()

    async def _get(self, path: str) -> Any:
        token = await self.auth.get_token()
        return await self.http.authenticated_get(path, token)

    async def _post(self, path: str, body: Any) -> Any:
        token = await self.auth.get_token()
        return await self.http.authenticated_post(path, token, body)

    # --- Cards ------------------------------------------------------------

    async def get_cards(self) -> CardResponse:
        """
        List the cards visible to these credentials.

        Returns:
            CardResponse: ``{"data": {"cards": [...]}}`` plus any ``links``/``meta``.
        """
        return await self._get(CARDS_PATH)

    # --- Code -------------------------------------------------------------

    async def get_code(self, card_key: CardKey) -> CodeResponse:
        """Fetch the saved (unpublished) code of a card."""
        if _card_key_missing(card_key):
            raise ValidationError(MISSING_PARAMETERS)
        return await self._get(_card_path(card_key, "code"))

    async def get_published_code(self, card_key: CardKey) -> CodeResponse:
        """Fetch the code currently published to a card."""
        if _card_key_missing(card_key):
            raise ValidationError(MISSING_PARAMETERS)
        return await self._get(_card_path(card_key, "publishedcode"))

    async def upload_code(self, card_key: CardKey, code: Mapping[str, Any]) -> CodeResponse:
        """
        Save code to a card without publishing it.

        Args:
            card_key: The card to update.
            code: Request body, typically ``{"code": "<source>"}``.
        """
        if _card_key_missing(card_key) or code is None:
            raise ValidationError(MISSING_PARAMETERS)
        return await self._post(_card_path(card_key, "code"), code)

    async def upload_published_code(
        self, card_key: CardKey, code_id: str, code: str
    ) -> CodeResponse:
        """
        Publish code to a card.

        Args:
            card_key: The card to publish to.
            code_id: Identifier of the saved code being published.
            code: The source to publish.
        """
        if _card_key_missing(card_key) or _text_missing(code_id) or _text_missing(code):
            raise ValidationError(MISSING_PARAMETERS)
        return await self._post(
            _card_path(card_key, "publish"), {"code": code, "codeId": code_id}
        )

    async def toggle_code(self, card_key: CardKey, enabled: bool) -> CodeToggle:
        """Enable or disable the programmable feature on a card."""
        if _card_key_missing(card_key) or enabled is None:
            raise ValidationError(MISSING_PARAMETERS)
        return await self._post(
            _card_path(card_key, "toggle-programmable-feature"), {"Enabled": enabled}
        )

    # --- Environment variables -------------------------------------------

    async def get_env(self, card_key: CardKey) -> EnvResponse:
        if _card_key_missing(card_key):
            raise ValidationError(MISSING_PARAMETERS)
        return await self._get(_card_path(card_key, "environmentvariables"))

    async def upload_env(self, card_key: CardKey, env: Mapping[str, Any]) -> EnvResponse:
        """
        Replace the environment variables of a card.

        Args:
            card_key: The card to update.
            env: Request body, typically ``{"variables": {"KEY": "value"}}``.
        """
        if _card_key_missing(card_key) or env is None:
            raise ValidationError(MISSING_PARAMETERS)
        return await self._post(_card_path(card_key, "environmentvariables"), env)

    # --- Executions -------------------------------------------------------

    async def get_executions(self, card_key: CardKey) -> ExecutionResult:
        """List recent executions of a card's code."""
        if _card_key_missing(card_key):
            raise ValidationError(MISSING_PARAMETERS)
        return await self._get(_card_path(card_key, "code/executions"))

    async def execute_code(
        self,
        code: str,
        transaction: Union[Transaction, Mapping[str, Any]],
        card_key: CardKey,
    ) -> ExecuteResult:
        """
        Simulate running code against a synthetic transaction.

        The transaction is flattened into the simulation payload
        ``{simulationcode, centsAmount, currencyCode, merchantCode,
        merchantName, merchantCity, countryCode}``.

        Args:
            code: Source to simulate.
            transaction: A Transaction, or a mapping in the API's camelCase shape.
            card_key: The card whose sandbox runs the simulation.

        Raises:
            ValidationError: If an argument is missing or the transaction
                lacks a field the payload needs.
        """
        if _text_missing(code) or transaction is None or _card_key_missing(card_key):
            raise ValidationError(MISSING_PARAMETERS)
        if not isinstance(transaction, Transaction):
            try:
                transaction = Transaction.model_validate(transaction)
            except PydanticValidationError as exc:
                raise ValidationError(
                    "Invalid transaction", details=exc.errors()
                ) from exc

        payload = SimulationPayload.from_transaction(code, transaction)
        return await self._post(_card_path(card_key, "code/execute"), payload.to_dict())

    # --- Reference data ---------------------------------------------------

    async def get_currencies(self) -> ReferenceResponse:
        return await self._get(f"{CARDS_PATH}/currencies")

    async def get_countries(self) -> ReferenceResponse:
        return await self._get(f"{CARDS_PATH}/countries")

    async def get_merchants(self) -> ReferenceResponse:
        return await self._get(f"{CARDS_PATH}/merchants")

    # --- Lifecycle --------------------------------------------------------

    async def aclose(self):
        """
        Gracefully close client resources and transport connections.

        Example:
            # Using as context manager
            async with InvestecCardClient(settings=settings) as client:
                cards = await client.get_cards()

            # Or explicit cleanup
            client = InvestecCardClient(settings=settings)
            try:
                cards = await client.get_cards()
            finally:
                await client.aclose()
        """
        await self.transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
