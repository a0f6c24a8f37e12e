"""
Smoke tests for the public package surface and the synchronous wrapper.
"""

import pytest
from pydantic import ValidationError

from tests.fakes import FakeResponse
from tests.fakes import MockTransport
from tests.fakes import token_response


def test_public_exports():
    import investec_card_sdk

    for name in investec_card_sdk.__all__:
        assert hasattr(investec_card_sdk, name)


def test_error_taxonomy_shares_base():
    from investec_card_sdk import AuthError
    from investec_card_sdk import CardAPIError
    from investec_card_sdk import HttpError
    from investec_card_sdk import NotFoundError
    from investec_card_sdk import TransportError
    from investec_card_sdk import ValidationError

    for error in (AuthError, HttpError, NotFoundError, TransportError, ValidationError):
        assert issubclass(error, CardAPIError)


def test_sync_wrapper():
    from investec_card_sdk import InvestecCardClientSync
    from investec_card_sdk import InvestecCardSettings

    settings = InvestecCardSettings(
        client_id="id", client_secret="secret", api_key="key", host="https://api.test"
    )
    transport = MockTransport(
        [
            token_response(),
            FakeResponse(200, {"data": {"cards": []}}),
            FakeResponse(200, {"data": {"result": {"Enabled": False}}}),
        ]
    )

    with InvestecCardClientSync(settings=settings, transport=transport) as client:
        assert client.get_cards() == {"data": {"cards": []}}
        assert client.toggle_code(3, False) == {"data": {"result": {"Enabled": False}}}

    assert len(transport.token_calls) == 1
    assert transport.closed


def test_sync_wrapper_opens_no_loop_when_settings_fail(monkeypatch, tmp_path):
    from investec_card_sdk import InvestecCardClientSync
    from investec_card_sdk import client_sync

    for name in ("CLIENT_ID", "CLIENT_SECRET", "API_KEY"):
        monkeypatch.delenv(f"INVESTEC_CARD_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    loops = []

    def new_event_loop():
        loops.append(True)
        raise AssertionError("event loop created before settings were valid")

    monkeypatch.setattr(client_sync.asyncio, "new_event_loop", new_event_loop)

    with pytest.raises(ValidationError):
        InvestecCardClientSync()

    assert loops == []


def test_country_code_parsing():
    from investec_card_sdk import CountryCode
    from investec_card_sdk.models import Country
    from investec_card_sdk.models import Merchant
    from investec_card_sdk.models import SimulationPayload
    from investec_card_sdk.models import Transaction

    assert Country(code="ZA").code is CountryCode.ZA
    assert Country(code="XK").code == "XK"
    assert not isinstance(Country(code="XK").code, CountryCode)

    transaction = Transaction(
        cents_amount=100,
        currency_code="ZAR",
        merchant=Merchant.model_validate(
            {
                "category": {"code": "5411"},
                "name": "Shop",
                "city": "Durban",
                "country": {"code": "ZA"},
            }
        ),
    )
    payload = SimulationPayload.from_transaction("code", transaction).to_dict()
    assert payload["countryCode"] == "ZA"
    assert type(payload["countryCode"]) is str


def test_execution_result_shape():
    from typing import get_type_hints

    from investec_card_sdk.models import ExecutionItem
    from investec_card_sdk.models import ExecutionItems
    from investec_card_sdk.models import ExecutionResult

    data = get_type_hints(ExecutionResult)["data"]
    result = get_type_hints(data)["result"]

    assert result is ExecutionItems
    assert get_type_hints(ExecutionItems)["executionItems"] == list[ExecutionItem]
