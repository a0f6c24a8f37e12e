"""
Example: list the programmable cards visible to your credentials.

Credentials are read from INVESTEC_CARD_CLIENT_ID, INVESTEC_CARD_CLIENT_SECRET
and INVESTEC_CARD_API_KEY (or a .env file).
"""

import asyncio
import logging

from investec_card_sdk import CardAPIError
from investec_card_sdk import InvestecCardClient
from investec_card_sdk import LoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def list_cards():
    async with InvestecCardClient(middlewares=[LoggingMiddleware()]) as client:
        try:
            cards = await client.get_cards()
        except CardAPIError as exc:
            logger.error("Error fetching cards: %s", exc)
            return

        for card in cards["data"]["cards"]:
            logger.info(
                "Card %s (%s) programmable=%s",
                card["CardKey"],
                card["CardNumber"],
                card["IsProgrammable"],
            )


if __name__ == "__main__":
    asyncio.run(list_cards())
