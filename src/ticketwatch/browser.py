"""Browser lifecycle shared by the scripts."""

from types import TracebackType

from playwright.async_api import Browser, Playwright, async_playwright

from src.ticketwatch.config import WatcherConfig
from src.ticketwatch.logging import get_logger
from src.ticketwatch.pages.schedule import SchedulePage
from src.ticketwatch.session import SessionManager
from src.ticketwatch.utils import configure_page_for_watching

log = get_logger(__name__)


class ScheduleBrowser:
    """Launches Chromium with the exported cookies and opens the schedule.

    Usage:
        async with ScheduleBrowser(config) as browser:
            state = await browser.sessions.check_session(browser.schedule.page)
            report = await browser.schedule.extract()
    """

    def __init__(
        self,
        config: WatcherConfig,
        *,
        headless: bool | None = None,
        block_resources: bool = True,
    ) -> None:
        self.config = config
        self.headless = config.headless if headless is None else headless
        self.block_resources = block_resources
        self.sessions = SessionManager(config.cookies_path, config.schedule_path)
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._schedule: SchedulePage | None = None

    @property
    def schedule(self) -> SchedulePage:
        if self._schedule is None:
            raise RuntimeError("ScheduleBrowser used outside 'async with'")
        return self._schedule

    async def __aenter__(self) -> "ScheduleBrowser":
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            context = await self.sessions.create_authenticated_context(self._browser)
            page = await context.new_page()
            await configure_page_for_watching(
                page,
                block_resources=self.block_resources,
                timeout_ms=self.config.navigation_timeout_ms,
            )
            self._schedule = SchedulePage(page, self.config)
            await self._schedule.navigate()
        except BaseException:
            await self.close()
            raise
        log.info("browser_ready", headless=self.headless)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._schedule = None
