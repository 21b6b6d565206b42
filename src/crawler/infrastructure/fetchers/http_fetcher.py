import asyncio

import aiohttp

from src.crawler.application.ports import PageFetcherPort
from src.crawler.domain.models import FetchedPage
from src.crawler.domain.rules import is_accepted_content_type
from src.crawler.errors import PageFetchError


class HttpPageFetcher(PageFetcherPort):
    """Plain HTTP fetch without script rendering."""

    def __init__(
        self,
        timeout_seconds: float = 60.0,
        connector_limit: int = 0,
        connector_limit_per_host: int = 10,
        connector_ttl_dns_cache: int = 300,
        user_agent: str = "Mozilla/5.0 (compatible; AccessibilityStatementCrawler/1.0)",
    ) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds, connect=10)
        self.connector_limit = connector_limit
        self.connector_limit_per_host = connector_limit_per_host
        self.connector_ttl_dns_cache = connector_ttl_dns_cache
        self.user_agent = user_agent
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.connector_limit,
                limit_per_host=self.connector_limit_per_host,
                ttl_dns_cache=self.connector_ttl_dns_cache,
                ssl=False,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers={"User-Agent": self.user_agent},
            )
        return self._session

    async def fetch(self, url: str) -> FetchedPage:
        session = self._get_session()
        try:
            async with session.get(url, allow_redirects=True, timeout=self.timeout) as resp:
                if resp.status >= 400:
                    raise PageFetchError(url, f"HTTP {resp.status}", status=resp.status)
                content_type = resp.headers.get("Content-Type")
                html = await resp.text(errors="replace") if is_accepted_content_type(content_type) else ""
                return FetchedPage(
                    request_url=url,
                    final_url=str(resp.url),
                    html=html,
                    status=resp.status,
                    content_type=content_type,
                )
        except asyncio.TimeoutError as exc:
            raise PageFetchError(url, "Request timed out") from exc
        except aiohttp.ClientError as exc:
            raise PageFetchError(url, f"{type(exc).__name__}: {exc}") from exc

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
