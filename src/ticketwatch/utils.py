"""Page setup for watching: resource blocking and read-only guardrails."""

from playwright.async_api import Page, Route

from src.ticketwatch.logging import get_logger

log = get_logger(__name__)

BLOCKED_RESOURCE_TYPES: frozenset[str] = frozenset({"image", "font", "media"})

# HTTP methods that modify server state — blocked in read-only mode so a
# stray click can never touch the cart or the schedule.
_BLOCKED_METHODS: frozenset[str] = frozenset({"PUT", "DELETE", "PATCH"})


async def configure_page_for_watching(
    page: Page,
    *,
    read_only: bool = True,
    block_resources: bool = True,
    timeout_ms: int = 60000,
) -> None:
    """Set up a Playwright page for schedule checks.

    Args:
        page: Playwright Page instance.
        read_only: Abort PUT/DELETE/PATCH requests.
        block_resources: Abort image, font and media downloads. Leave off
                         when taking screenshots.
        timeout_ms: Default action and navigation timeout.
    """

    async def _route(route: Route) -> None:
        request = route.request

        if read_only and request.method in _BLOCKED_METHODS:
            log.warning(
                "blocked_mutating_request",
                method=request.method,
                url=request.url,
            )
            await route.abort("blockedbyclient")
            return

        if block_resources and request.resource_type in BLOCKED_RESOURCE_TYPES:
            await route.abort()
        else:
            await route.continue_()

    if read_only or block_resources:
        await page.route("**/*", _route)
    page.set_default_timeout(timeout_ms)
    page.set_default_navigation_timeout(timeout_ms)
