"""Base async HTTP client with rate limiting and connection pooling.

All provider clients inherit from this base to ensure consistent behavior:
- Async/await for non-blocking I/O
- Bounded timeout on every request
- Rate limiting to stay polite with public sites
- Optional retries with exponential backoff
- A single exception type (APIProviderError) for every failure

Usage:
    class MyProviderClient(BaseAsyncClient):
        def __init__(self) -> None:
            super().__init__(base_url="https://provider.example.com")

        async def get_report(self) -> str:
            return await self.get_text("/report")
"""

import asyncio
import logging
from typing import Any

import httpx


logger = logging.getLogger(__name__)

# Retry configuration
_RETRYABLE_STATUS_CODES = {429, 502, 503, 504}
_DEFAULT_MAX_RETRIES = 1
_BASE_BACKOFF = 0.5  # seconds


class RateLimiter:
    """Token bucket rate limiter for async operations.

    Args:
        rate: Maximum requests per second
    """

    def __init__(self, rate: int) -> None:
        self.rate = rate
        self.tokens = rate
        self.updated_at: float = 0.0
        self._initialized: bool = False
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Acquire a token, waiting if necessary."""
        async with self._lock:
            loop = asyncio.get_running_loop()

            if not self._initialized:
                self.updated_at = loop.time()
                self._initialized = True

            while self.tokens < 1:
                now = loop.time()
                elapsed = now - self.updated_at
                self.tokens = min(self.rate, self.tokens + elapsed * self.rate)
                self.updated_at = now

                if self.tokens < 1:
                    wait_time = (1 - self.tokens) / self.rate
                    await asyncio.sleep(wait_time)

            self.tokens -= 1
            self.updated_at = loop.time()


class APIProviderError(Exception):
    """Base exception for provider errors (network, HTTP status, decoding)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class BaseAsyncClient:
    """Base async HTTP client with rate limiting and connection pooling.

    Args:
        base_url: Base URL for all requests
        headers: Default headers for all requests
        rate_limit: Maximum requests per second (default: 10)
        timeout: Request timeout in seconds (default: 10)
        max_retries: Retries on transient failures (default: 1)
    """

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str] | None = None,
        rate_limit: int = 10,
        timeout: float = 10.0,
        max_retries: int = _DEFAULT_MAX_RETRIES,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout = timeout
        self.max_retries = max_retries
        self._rate_limiter = RateLimiter(rate=rate_limit)
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BaseAsyncClient":
        """Async context manager entry."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Make an HTTP request with rate limiting, retries, and error handling.

        Retries on transient failures (429, 502, 503, 504, timeouts, network
        errors) with exponential backoff. Non-retryable errors raise immediately.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: Path relative to base_url
            params: Query parameters

        Returns:
            The successful (< 400) response

        Raises:
            APIProviderError: If request fails after all retries
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with context manager.")

        if not endpoint.startswith("/"):
            endpoint = f"/{endpoint}"

        last_error: APIProviderError | None = None

        for attempt in range(self.max_retries + 1):
            await self._rate_limiter.acquire()

            logger.debug(
                "%s %s%s params=%s (attempt %d/%d)",
                method, self.base_url, endpoint, params, attempt + 1, self.max_retries + 1,
            )

            try:
                response = await self._client.request(method=method, url=endpoint, params=params)

                logger.debug("Response: %d for %s", response.status_code, endpoint)

                if response.status_code >= 400:
                    error_body = response.text[:500]

                    if response.status_code in _RETRYABLE_STATUS_CODES and attempt < self.max_retries:
                        backoff = _BASE_BACKOFF * (2 ** attempt)
                        logger.warning(
                            "Retryable %d for %s, retrying in %.1fs (attempt %d/%d)",
                            response.status_code, endpoint, backoff,
                            attempt + 1, self.max_retries + 1,
                        )
                        last_error = APIProviderError(
                            message=f"Request failed: {response.status_code}",
                            status_code=response.status_code,
                            response_body=error_body,
                        )
                        await asyncio.sleep(backoff)
                        continue

                    logger.warning(
                        "HTTP error: %d %s%s",
                        response.status_code, self.base_url, endpoint,
                    )
                    raise APIProviderError(
                        message=f"Request failed: {response.status_code}",
                        status_code=response.status_code,
                        response_body=error_body,
                    )

                return response

            except httpx.TimeoutException as e:
                if attempt < self.max_retries:
                    backoff = _BASE_BACKOFF * (2 ** attempt)
                    logger.warning(
                        "Timeout for %s, retrying in %.1fs (attempt %d/%d)",
                        endpoint, backoff, attempt + 1, self.max_retries + 1,
                    )
                    last_error = APIProviderError(f"Request timeout: {e}")
                    await asyncio.sleep(backoff)
                    continue
                logger.warning("Request timeout for %s: %s", endpoint, e)
                raise APIProviderError(f"Request timeout: {e}")

            except httpx.NetworkError as e:
                if attempt < self.max_retries:
                    backoff = _BASE_BACKOFF * (2 ** attempt)
                    logger.warning(
                        "Network error for %s, retrying in %.1fs (attempt %d/%d)",
                        endpoint, backoff, attempt + 1, self.max_retries + 1,
                    )
                    last_error = APIProviderError(f"Network error: {e}")
                    await asyncio.sleep(backoff)
                    continue
                logger.warning("Network error for %s: %s", endpoint, e)
                raise APIProviderError(f"Network error: {e}")

            except APIProviderError:
                raise

            except Exception as e:
                logger.error("Unexpected error for %s: %s", endpoint, e)
                raise APIProviderError(f"Unexpected error: {e}")

        # Exhausted retries
        raise last_error or APIProviderError("Request failed after retries")

    async def get_json(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET and decode a JSON body.

        Raises:
            APIProviderError: On request failure or an undecodable body
        """
        response = await self._request("GET", endpoint, params=params)
        try:
            return response.json()
        except ValueError as e:
            logger.warning("Failed to parse JSON response: %s", e)
            raise APIProviderError(
                message=f"Invalid JSON response: {e}",
                status_code=response.status_code,
                response_body=response.text[:500],
            )

    async def get_text(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> str:
        """GET and return the decoded text body."""
        response = await self._request("GET", endpoint, params=params)
        return response.text
