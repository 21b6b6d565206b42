import asyncio

from playwright.async_api import Browser, Error as PlaywrightError, Playwright, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from src.config.logger_config import logger
from src.crawler.application.ports import PageFetcherPort
from src.crawler.domain.models import FetchedPage
from src.crawler.errors import PageFetchError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/128.0.0.0 Safari/537.36"
)
DEFAULT_LAUNCH_ARGS = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-extensions",
    "--no-first-run",
)


class PlaywrightPageFetcher(PageFetcherPort):
    """Renders pages in one shared Chromium instance, one browser context per visit."""

    def __init__(
        self,
        headless: bool = True,
        navigation_timeout_ms: int = 60000,
        user_agent: str = DEFAULT_USER_AGENT,
        launch_args: tuple[str, ...] = DEFAULT_LAUNCH_ARGS,
    ) -> None:
        self.headless = headless
        self.navigation_timeout_ms = navigation_timeout_ms
        self.user_agent = user_agent
        self.launch_args = launch_args
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def _ensure_browser(self) -> Browser:
        async with self._lock:
            if self._browser is not None and self._browser.is_connected():
                return self._browser
            if self._playwright is None:
                self._playwright = await async_playwright().start()
            logger.info("Launching Chromium: headless={}", self.headless)
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=list(self.launch_args),
            )
            return self._browser

    async def fetch(self, url: str) -> FetchedPage:
        browser = await self._ensure_browser()
        context = await browser.new_context(ignore_https_errors=True, user_agent=self.user_agent)
        try:
            page = await context.new_page()
            page.set_default_timeout(self.navigation_timeout_ms)
            try:
                response = await page.goto(url, wait_until="load", timeout=self.navigation_timeout_ms)
                html = await page.content()
            except PlaywrightTimeoutError as exc:
                raise PageFetchError(url, f"Navigation timed out: {exc}") from exc
            except PlaywrightError as exc:
                raise PageFetchError(url, str(exc).splitlines()[0] if str(exc) else type(exc).__name__) from exc

            status = response.status if response is not None else None
            if status is not None and status >= 400:
                raise PageFetchError(url, f"HTTP {status}", status=status)
            # Without a response object the page is assumed to be HTML.
            content_type = response.headers.get("content-type") if response is not None else "text/html"
            return FetchedPage(
                request_url=url,
                final_url=page.url,
                html=html,
                status=status,
                content_type=content_type,
            )
        finally:
            await context.close()

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
