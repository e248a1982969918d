import json

import pytest
from playwright.async_api import Error as PlaywrightError

from src.ticketwatch.errors import AuthenticationError, CookieFileError
from src.ticketwatch.models import SessionState
from src.ticketwatch.session import SessionManager, load_cookies, normalize_cookie


class FakeLocator:
    def __init__(self, texts):
        self._texts = texts

    async def evaluate_all(self, expression):
        if isinstance(self._texts, Exception):
            raise self._texts
        return self._texts


class FakePage:
    """Just enough of playwright's Page for session evidence."""

    def __init__(self, url, body="", control_texts=()):
        self.url = url
        self._body = body
        self._control_texts = list(control_texts)

    async def inner_text(self, selector):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body

    def locator(self, selector):
        return FakeLocator(self._control_texts)


SCHEDULE_URL = "https://festival.sundance.org/my-festival/my-schedule"


def test_normalize_extension_export_cookie():
    raw = {
        "domain": ".sundance.org",
        "expirationDate": 1769900000.5,
        "hostOnly": False,
        "httpOnly": True,
        "name": "session_id",
        "path": "/",
        "sameSite": "no_restriction",
        "secure": True,
        "session": False,
        "storeId": "0",
        "value": "abc",
        "id": 1,
    }
    assert normalize_cookie(raw) == {
        "name": "session_id",
        "value": "abc",
        "domain": ".sundance.org",
        "path": "/",
        "httpOnly": True,
        "secure": True,
        "expires": 1769900000.5,
        "sameSite": "None",
    }


def test_normalize_session_cookie_drops_expiry_and_unspecified_same_site():
    raw = {
        "domain": "festival.sundance.org",
        "name": "csrf",
        "value": "x",
        "session": True,
        "expirationDate": 1,
        "sameSite": "unspecified",
    }
    cookie = normalize_cookie(raw)
    assert "expires" not in cookie
    assert "sameSite" not in cookie
    assert cookie["path"] == "/"


def test_normalize_playwright_style_cookie_passes_through():
    raw = {"name": "a", "value": "b", "url": "https://festival.sundance.org", "sameSite": "Lax"}
    assert normalize_cookie(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [{"value": "b", "domain": "x"}, {"name": "a", "domain": "x"}, {"name": "a", "value": "b"}],
)
def test_normalize_rejects_incomplete_cookie(raw):
    with pytest.raises(CookieFileError):
        normalize_cookie(raw)


def test_load_cookies(tmp_path):
    path = tmp_path / "cookies.json"
    path.write_text(json.dumps([{"name": "a", "value": "b", "domain": ".sundance.org"}]))
    assert load_cookies(path) == [
        {"name": "a", "value": "b", "domain": ".sundance.org", "path": "/"}
    ]


def test_load_cookies_missing_file(tmp_path):
    with pytest.raises(CookieFileError, match="not found"):
        load_cookies(tmp_path / "cookies.json")


@pytest.mark.parametrize("content", ["{not json", '{"name": "a"}'])
def test_load_cookies_bad_content(tmp_path, content):
    path = tmp_path / "cookies.json"
    path.write_text(content)
    with pytest.raises(CookieFileError):
        load_cookies(path)


def test_cookie_errors_are_permanent():
    from src.ticketwatch.errors import PermanentError

    assert issubclass(CookieFileError, PermanentError)
    assert issubclass(AuthenticationError, PermanentError)


@pytest.mark.asyncio
async def test_gather_evidence():
    page = FakePage(SCHEDULE_URL, body="My Schedule", control_texts=["Order Tickets", "Sign out"])
    evidence = await SessionManager().gather_evidence(page)

    assert evidence.url == SCHEDULE_URL
    assert evidence.has_schedule_text
    assert not evidence.has_login_control


@pytest.mark.asyncio
async def test_unreadable_evidence_is_treated_as_absent():
    page = FakePage("https://x/other", body=PlaywrightError("detached"))
    page._control_texts = PlaywrightError("detached")
    evidence = await SessionManager().gather_evidence(page)

    assert evidence.page_text == ""
    assert not evidence.has_login_control
    assert await SessionManager().check_session(page) is SessionState.UNCLEAR


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url, controls, expected",
    [
        (SCHEDULE_URL, ["Order Tickets"], SessionState.AUTHENTICATED),
        (SCHEDULE_URL, ["Sign In"], SessionState.LOGIN_REQUIRED),
        ("https://festival.sundance.org/", [], SessionState.UNCLEAR),
    ],
)
async def test_check_session(url, controls, expected):
    page = FakePage(url, control_texts=controls)
    assert await SessionManager().check_session(page) is expected


@pytest.mark.asyncio
async def test_require_authenticated():
    manager = SessionManager()
    await manager.require_authenticated(FakePage(SCHEDULE_URL))

    with pytest.raises(AuthenticationError, match="Login required"):
        await manager.require_authenticated(FakePage(SCHEDULE_URL, control_texts=["Log in"]))
    with pytest.raises(AuthenticationError, match="Could not confirm"):
        await manager.require_authenticated(FakePage("https://x/elsewhere"))
