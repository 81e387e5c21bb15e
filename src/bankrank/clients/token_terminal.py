"""Token Terminal clients.

Two surfaces expose the same net deposits figure:
- The metrics API (JSON, value in billions USD)
- The public explorer page (HTML, value embedded in text)

API Documentation: https://docs.tokenterminal.com/

Usage:
    from bankrank.clients.token_terminal import TokenTerminalClient

    async with TokenTerminalClient() as client:
        metrics = await client.get_project_metrics("aave")
"""

from typing import Any

from bankrank.clients.base import BaseAsyncClient


class TokenTerminalClient(BaseAsyncClient):
    """Async client for the Token Terminal metrics API.

    Args:
        base_url: API base URL (default: v2 public API)
        user_agent: User-Agent header value
        rate_limit: Max requests per second (default: 5)
        timeout: Request timeout in seconds (default: 10)
        max_retries: Retries on transient failures (default: 1)
    """

    def __init__(
        self,
        base_url: str = "https://api.tokenterminal.com/v2",
        user_agent: str = "bankrank",
        rate_limit: int = 5,
        timeout: float = 10.0,
        max_retries: int = 1,
    ) -> None:
        super().__init__(
            base_url=base_url,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            rate_limit=rate_limit,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def get_project_metrics(self, project_id: str) -> Any:
        """Get the metrics document for a project.

        Args:
            project_id: Token Terminal project id (e.g. 'aave')

        Returns:
            Decoded JSON. Expected to be a mapping with 'net_deposits'
            in billions USD, but callers must validate the shape.
        """
        return await self.get_json(f"/projects/{project_id}/metrics")


class TokenTerminalWebClient(BaseAsyncClient):
    """Async client for the Token Terminal explorer pages.

    Args:
        base_url: Explorer base URL
        user_agent: User-Agent header value
        rate_limit: Max requests per second (default: 5)
        timeout: Request timeout in seconds (default: 10)
        max_retries: Retries on transient failures (default: 1)
    """

    def __init__(
        self,
        base_url: str = "https://tokenterminal.com",
        user_agent: str = "bankrank",
        rate_limit: int = 5,
        timeout: float = 10.0,
        max_retries: int = 1,
    ) -> None:
        super().__init__(
            base_url=base_url,
            headers={"User-Agent": user_agent},
            rate_limit=rate_limit,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def get_net_deposits_page(self, project_id: str) -> str:
        """Get the raw net deposits explorer page for a project."""
        return await self.get_text(f"/explorer/projects/{project_id}/metrics/net-deposits")
