"""Playwright session bootstrap from exported festival cookies.

SessionManager loads the cookie file a user exports from their logged-in
browser, installs it into a fresh browser context, and checks whether the
schedule page then renders as an authenticated view. Nothing is written
back to disk.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from playwright.async_api import Error as PlaywrightError

from src.ticketwatch.errors import AuthenticationError, CookieFileError
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import SessionEvidence, SessionState
from src.ticketwatch.session_state import (
    DEFAULT_SCHEDULE_PATH,
    classify_evidence,
    has_login_control,
)

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Page

logger = get_logger(__name__)

# Browser cookie-export extensions use Chrome's sameSite names
_SAME_SITE_VALUES: dict[str, str] = {
    "no_restriction": "None",
    "none": "None",
    "lax": "Lax",
    "strict": "Strict",
}

_COOKIE_FIELDS = ("name", "value", "url", "domain", "path", "httpOnly", "secure")

# Controls searched for a sign-in prompt; only visible ones count
LOGIN_CONTROL_SELECTOR = "button, a, [role='button'], input[type='submit']"

_VISIBLE_CONTROL_TEXTS_JS = """els => els
    .filter(el => el.offsetParent !== null)
    .map(el => (el.innerText || el.value || el.textContent || '').trim())"""


def normalize_cookie(raw: dict[str, Any]) -> dict[str, Any]:
    """Convert one exported cookie into the shape context.add_cookies accepts.

    Raises:
        CookieFileError: If the cookie has no name, value, or location.
    """
    if "name" not in raw or "value" not in raw:
        raise CookieFileError(f"Cookie without name/value: {sorted(raw)}")
    if "url" not in raw and "domain" not in raw:
        raise CookieFileError(f"Cookie {raw['name']!r} has neither url nor domain")

    cookie = {field: raw[field] for field in _COOKIE_FIELDS if field in raw}
    if "domain" in cookie and "path" not in cookie:
        cookie["path"] = "/"

    expires = raw.get("expires", raw.get("expirationDate"))
    if expires is not None and not raw.get("session", False):
        cookie["expires"] = float(expires)

    same_site = raw.get("sameSite")
    if isinstance(same_site, str) and same_site.lower() in _SAME_SITE_VALUES:
        cookie["sameSite"] = _SAME_SITE_VALUES[same_site.lower()]

    return cookie


def load_cookies(path: str | Path) -> list[dict[str, Any]]:
    """Read and normalize a cookies.json export.

    Raises:
        CookieFileError: If the file is missing, not JSON, or not a list.
    """
    cookie_file = Path(path)
    if not cookie_file.exists():
        raise CookieFileError(
            f"{cookie_file} not found. Export your festival session cookies "
            "from a logged-in browser into this file."
        )

    try:
        data = json.loads(cookie_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CookieFileError(f"Cannot read {cookie_file}: {e}") from e

    if not isinstance(data, list):
        raise CookieFileError(f"{cookie_file} must contain a JSON list of cookies")

    cookies = [normalize_cookie(raw) for raw in data]
    logger.info("cookies_loaded", path=str(cookie_file), count=len(cookies))
    return cookies


class SessionManager:
    """Installs exported cookies and classifies the resulting session."""

    def __init__(
        self,
        cookies_path: str = "cookies.json",
        schedule_path: str = DEFAULT_SCHEDULE_PATH,
    ) -> None:
        """Initialize SessionManager.

        Args:
            cookies_path: Cookie export to load into new browser contexts.
            schedule_path: URL path of the authenticated schedule view.
        """
        self.cookies_path = Path(cookies_path)
        self.schedule_path = schedule_path

    async def create_authenticated_context(self, browser: "Browser") -> "BrowserContext":
        """Create a browser context carrying the exported cookies.

        Raises:
            CookieFileError: If the cookie file cannot be used.
        """
        cookies = load_cookies(self.cookies_path)
        context = await browser.new_context()
        await context.add_cookies(cookies)
        logger.info("context_created", cookies=len(cookies))
        return context

    async def gather_evidence(self, page: "Page") -> SessionEvidence:
        """Collect URL, body text and visible login controls from the page.

        Evidence that cannot be read is treated as absent, which at worst
        yields UNCLEAR.
        """
        url = page.url
        try:
            page_text = await page.inner_text("body")
        except PlaywrightError as e:
            logger.warning("session_evidence_error", part="body_text", error=str(e))
            page_text = ""

        try:
            texts = await page.locator(LOGIN_CONTROL_SELECTOR).evaluate_all(
                _VISIBLE_CONTROL_TEXTS_JS
            )
        except PlaywrightError as e:
            logger.warning("session_evidence_error", part="controls", error=str(e))
            texts = []

        return SessionEvidence(
            url=url,
            page_text=page_text,
            has_login_control=has_login_control(texts),
        )

    async def check_session(self, page: "Page") -> SessionState:
        """Classify the page currently loaded in ``page``."""
        evidence = await self.gather_evidence(page)
        state = classify_evidence(evidence, schedule_path=self.schedule_path)
        logger.info(
            "session_checked",
            state=state.value,
            url=evidence.url,
            has_login_control=evidence.has_login_control,
            has_schedule_text=evidence.has_schedule_text,
        )
        return state

    async def require_authenticated(self, page: "Page") -> None:
        """Raise unless the page is an authenticated schedule view.

        Raises:
            AuthenticationError: If the state is LOGIN_REQUIRED or UNCLEAR.
        """
        state = await self.check_session(page)
        if state is SessionState.LOGIN_REQUIRED:
            raise AuthenticationError(
                "Login required: cookies may be expired, export fresh ones"
            )
        if state is SessionState.UNCLEAR:
            raise AuthenticationError(
                f"Could not confirm the schedule view (url={page.url})"
            )
