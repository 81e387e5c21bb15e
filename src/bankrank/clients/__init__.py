"""Provider client layer for BANKRANK.

Async HTTP clients for the two external sources:
- Token Terminal: Aave net deposits (API + explorer page)
- Federal Reserve: Large Commercial Banks release
"""

from bankrank.clients.base import BaseAsyncClient, RateLimiter, APIProviderError
from bankrank.clients.token_terminal import TokenTerminalClient, TokenTerminalWebClient
from bankrank.clients.fed import FedReportClient

__all__ = [
    "BaseAsyncClient",
    "RateLimiter",
    "APIProviderError",
    "TokenTerminalClient",
    "TokenTerminalWebClient",
    "FedReportClient",
]
