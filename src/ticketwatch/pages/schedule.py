"""SchedulePage - checks ticket status on the festival "My Schedule" page.

Loads the festival landing page first (the schedule page redirects to login
when visited cold), then /my-festival/my-schedule, waits for the
client-rendered schedule table and snapshots it for extraction.

DOM structure (react-data-table):
  div.rdt_TableRow
    div.rdt_TableCell
      div.sd_schedule_film_desc
        h3                      -> film title
        .sd_start_end_date      -> "Fri 7:00 PM" (whitespace varies)
    div.rdt_TableCell
      button.fav...             -> favorite toggle (ignored)
      button / a.button / .btn  -> "Order Tickets", "Sold Out", "Waitlist"
"""

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, TimeoutError as PlaywrightTimeoutError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.ticketwatch.config import WatcherConfig
from src.ticketwatch.dom import SoupNode
from src.ticketwatch.errors import TransientError
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import ScheduleReport
from src.ticketwatch.pipeline import RowDiagnostics, extract_report, inspect_rows

log = get_logger(__name__)


class SchedulePage:
    """Personal schedule page at /my-festival/my-schedule."""

    def __init__(self, page: Page, config: WatcherConfig) -> None:
        self.page = page
        self.config = config
        self.selectors = config.schedule_selectors()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_fixed(5),
        retry=retry_if_exception_type(TransientError),
        reraise=True,
    )
    async def navigate(self) -> None:
        """Load the landing page, then the schedule page.

        Raises:
            TransientError: If either page times out or the request fails
                (DNS, connection reset, aborted navigation).
        """
        timeout = self.config.navigation_timeout_ms
        try:
            await self.page.goto(
                self.config.festival_url, wait_until="domcontentloaded", timeout=timeout
            )
            await self.page.wait_for_timeout(self.config.settle_delay_ms)
            await self.page.goto(
                self.config.schedule_url, wait_until="domcontentloaded", timeout=timeout
            )
        except PlaywrightTimeoutError as e:
            log.warning("schedule_navigation_timeout", error=str(e))
            raise TransientError(f"Schedule page failed to load: {e}") from e
        except PlaywrightError as e:
            log.warning("schedule_navigation_failed", error=str(e))
            raise TransientError(f"Schedule page request failed: {e}") from e

        log.info("schedule_page_navigated", url=self.page.url)

    async def wait_for_items(self) -> bool:
        """Wait for schedule items to render, then let the table settle.

        Returns:
            False if no item appeared in time. An empty schedule never
            renders items, so this is not an error.
        """
        rendered = True
        try:
            await self.page.wait_for_selector(
                self.selectors.film_desc, timeout=self.config.selector_timeout_ms
            )
        except PlaywrightTimeoutError:
            log.warning(
                "schedule_items_not_rendered",
                selector=self.selectors.film_desc,
                timeout_ms=self.config.selector_timeout_ms,
            )
            rendered = False

        await self.page.wait_for_timeout(self.config.settle_delay_ms)
        return rendered

    async def snapshot(self) -> SoupNode:
        """Immutable copy of the current DOM."""
        return SoupNode.from_html(await self.page.content())

    async def extract(self) -> ScheduleReport:
        """Classify every film on the schedule from one snapshot."""
        return extract_report(await self.snapshot(), self.selectors)

    async def inspect(self) -> list[RowDiagnostics]:
        """Diagnostic row analysis using the fallback row strategies."""
        return list(inspect_rows(await self.snapshot(), self.selectors))

    async def screenshot(self, path: str, *, full_page: bool = False) -> None:
        await self.page.screenshot(path=path, full_page=full_page)
        log.info("screenshot_saved", path=path)
