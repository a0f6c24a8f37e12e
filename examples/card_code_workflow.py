"""
Example: save, publish and enable code on a programmable card.

Replace CARD_KEY with one of the keys printed by list_cards.py.
"""

import asyncio
import logging

from investec_card_sdk import CardAPIError
from investec_card_sdk import InvestecCardClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CARD_KEY = 123456
CODE = """
const beforeTransaction = async (authorization) => {
    return true;
};
"""


async def deploy_code():
    async with InvestecCardClient() as client:
        try:
            saved = await client.upload_code(CARD_KEY, {"code": CODE})
            code_id = saved["data"]["result"]["codeId"]
            logger.info("Saved code %s", code_id)

            await client.upload_published_code(CARD_KEY, code_id, CODE)
            logger.info("Published code %s", code_id)

            await client.upload_env(CARD_KEY, {"variables": {"LIMIT_CENTS": "50000"}})
            toggled = await client.toggle_code(CARD_KEY, True)
            logger.info("Programmable feature: %s", toggled["data"]["result"]["Enabled"])
        except CardAPIError as exc:
            logger.error("Deployment failed: %s", exc)


if __name__ == "__main__":
    asyncio.run(deploy_code())
