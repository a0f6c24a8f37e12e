"""
Investec Card SDK - Async-first SDK for the Investec programmable cards API.

This SDK provides:
- Async client for the cards API
- Synchronous wrapper for sync operations
- OAuth2 client-credentials token management with caching
- Multiple HTTP transport support
- Middleware support
"""

from .auth import AuthManager
from .client import InvestecCardClient
from .client_sync import InvestecCardClientSync
from .config import InvestecCardSettings
from .exceptions import AuthError
from .exceptions import CardAPIError
from .exceptions import HttpError
from .exceptions import NotFoundError
from .exceptions import TransportError
from .exceptions import ValidationError
from .logging_middleware import LoggingMiddleware
from .middleware import Middleware
from .models import CountryCode
from .models import Transaction
from .token_store import SessionToken
from .token_store import TokenCache

__version__ = "1.0.0"

__all__ = [
    "InvestecCardClient",
    "InvestecCardClientSync",
    "InvestecCardSettings",
    "AuthManager",
    "AuthError",
    "CardAPIError",
    "HttpError",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    "LoggingMiddleware",
    "Middleware",
    "CountryCode",
    "Transaction",
    "SessionToken",
    "TokenCache",
]
