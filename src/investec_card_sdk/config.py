"""
Configuration management for Investec Card SDK.

This module provides InvestecCardSettings class that handles all SDK configuration
with support for environment variables, .env files, and sensible defaults.

Environment variables are automatically loaded with INVESTEC_CARD_ prefix.
Example: INVESTEC_CARD_CLIENT_ID=your_client_id
"""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

DEFAULT_HOST = "https://openapi.investec.com"
REQUEST_TIMEOUT = 30.0


class InvestecCardSettings(BaseSettings):
    """
    Configuration settings for Investec Card SDK with environment variable support.

    This class automatically loads configuration from:
    - Environment variables (with INVESTEC_CARD_ prefix)
    - .env files
    - Default values for optional settings

    Settings are frozen: credentials cannot change once a client is built.

    Example:
        # From environment
        export INVESTEC_CARD_CLIENT_ID=your_client_id
        export INVESTEC_CARD_CLIENT_SECRET=your_client_secret
        export INVESTEC_CARD_API_KEY=your_api_key

        # In code
        settings = InvestecCardSettings()
    """

    client_id: str = Field(..., description="OAuth2 client id")
    client_secret: str = Field(..., description="OAuth2 client secret")
    api_key: str = Field(..., description="Value sent in the x-api-key header")
    host: str = DEFAULT_HOST
    timeout: float = REQUEST_TIMEOUT
    transport: str = "httpx"  # default, can be 'aiohttp' or 'requests'

    model_config = SettingsConfigDict(
        env_prefix="INVESTEC_CARD_", env_file=".env", extra="ignore", frozen=True
    )
