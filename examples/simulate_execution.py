"""
Example: simulate card code against a synthetic transaction, then read
the card's execution history with the synchronous client.
"""

import logging
from datetime import datetime, timezone

from investec_card_sdk import CardAPIError
from investec_card_sdk import InvestecCardClientSync
from investec_card_sdk import Transaction

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CARD_KEY = 123456


def simulate():
    transaction = Transaction.model_validate(
        {
            "accountNumber": "123456789",
            "dateTime": datetime.now(timezone.utc).isoformat(),
            "centsAmount": 1000,
            "currencyCode": "ZAR",
            "type": "purchase",
            "reference": "TestRef",
            "card": {"id": "card-id"},
            "merchant": {
                "category": {"key": "1", "code": "5411", "name": "Grocery Stores"},
                "name": "Test Store",
                "city": "Cape Town",
                "country": {"code": "ZA", "alpha3": "ZAF", "name": "South Africa"},
            },
        }
    )

    with InvestecCardClientSync() as client:
        try:
            result = client.execute_code("return true;", transaction, CARD_KEY)
            for item in result["data"]["result"]:
                logger.info("Simulated %s: approved=%s", item["type"], item["authorizationApproved"])

            executions = client.get_executions(CARD_KEY)
            logger.info(
                "%d recorded executions",
                len(executions["data"]["result"]["executionItems"]),
            )
        except CardAPIError as exc:
            logger.error("Error executing code: %s", exc)


if __name__ == "__main__":
    simulate()
