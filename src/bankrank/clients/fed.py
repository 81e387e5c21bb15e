"""Federal Reserve client for the Large Commercial Banks (LBR) release.

The quarterly release lists insured U.S.-chartered commercial banks with
consolidated assets of $300 million or more, as a fixed-width text table
(assets in millions USD).

Release page: https://www.federalreserve.gov/releases/lbr/

Usage:
    from bankrank.clients.fed import FedReportClient

    async with FedReportClient() as client:
        raw = await client.get_large_bank_report()
"""

from bankrank.clients.base import BaseAsyncClient


class FedReportClient(BaseAsyncClient):
    """Async client for the Federal Reserve website.

    Args:
        base_url: Site base URL
        report_path: Path of the current LBR release
        user_agent: User-Agent header value
        rate_limit: Max requests per second (default: 5)
        timeout: Request timeout in seconds (default: 10)
        max_retries: Retries on transient failures (default: 1)
    """

    def __init__(
        self,
        base_url: str = "https://www.federalreserve.gov",
        report_path: str = "/releases/lbr/current/",
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
        self.report_path = report_path

    async def get_large_bank_report(self) -> str:
        """Get the raw body of the current LBR release."""
        return await self.get_text(self.report_path)
