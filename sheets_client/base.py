"""Base HTTP client with retry logic."""

import asyncio

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
)

# Default settings
API_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
API_TIMEOUT = 30
API_TOKEN = ""


def set_api_config(base_url: str, timeout: int, token: str = "") -> None:
    """Set API configuration."""
    global API_BASE_URL, API_TIMEOUT, API_TOKEN
    API_BASE_URL = base_url
    API_TIMEOUT = timeout
    API_TOKEN = token


def _is_retryable_error(exc: BaseException) -> bool:
    """Check if exception is retryable (network errors + 5xx server errors + rate limiting)."""
    if isinstance(exc, (httpx.ReadError, httpx.ConnectError, httpx.TimeoutException)):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and (
        exc.response.status_code >= 500 or exc.response.status_code == 429
    )


class BaseClient:
    """Base async HTTP client with rate limiting and exponential backoff."""

    def __init__(self, max_concurrent: int = 5):
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_count = 0
        logger.info("{}: max_concurrent={}", self.__class__.__name__, max_concurrent)

    async def __aenter__(self):
        self.open()
        return self

    async def __aexit__(self, *_):
        await self.close()

    def open(self) -> None:
        """Create the underlying connection pool."""
        if self._client is None:
            headers = {"Authorization": f"Bearer {API_TOKEN}"} if API_TOKEN else {}
            self._client = httpx.AsyncClient(
                timeout=API_TIMEOUT,
                headers=headers,
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=5),
            )

    async def close(self) -> None:
        logger.info("Total API requests: {}", self._request_count)
        if self._client:
            await self._client.aclose()
            self._client = None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=30),
        retry=_is_retryable_error,
        reraise=True,
    )
    async def _request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> dict:
        """HTTP request with retry logic."""
        self.open()
        async with self._sem:
            self._request_count += 1
            resp = await self._client.request(method, f"{API_BASE_URL}/{path}", params=params, json=json)
            resp.raise_for_status()
            return resp.json() if resp.content else {}

    async def _get(self, path: str, params: dict | None = None) -> dict:
        return await self._request("GET", path, params=params)

    async def _post(self, path: str, json: dict, params: dict | None = None) -> dict:
        return await self._request("POST", path, params=params, json=json)

    async def _put(self, path: str, json: dict, params: dict | None = None) -> dict:
        return await self._request("PUT", path, params=params, json=json)
