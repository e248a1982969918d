import pytest

from src.ticketwatch.models import SessionEvidence, SessionState
from src.ticketwatch.session_state import (
    classify_evidence,
    classify_session,
    has_login_control,
)


@pytest.mark.parametrize(
    "url, login_control, expected",
    [
        ("https://x/my-festival/my-schedule", False, SessionState.AUTHENTICATED),
        ("https://x/login", True, SessionState.LOGIN_REQUIRED),
        ("https://x/my-festival/my-schedule", True, SessionState.LOGIN_REQUIRED),
        ("https://x/unknown", False, SessionState.UNCLEAR),
    ],
)
def test_session_decision_table(url, login_control, expected):
    assert classify_session("", url, login_control) is expected


def test_page_text_does_not_change_outcome():
    url = "https://x/unknown"
    assert classify_session("My Schedule", url, False) is SessionState.UNCLEAR


def test_custom_schedule_path():
    assert (
        classify_session("", "https://x/account/agenda", False, schedule_path="/account/agenda")
        is SessionState.AUTHENTICATED
    )


@pytest.mark.parametrize(
    "texts, expected",
    [
        (["Sign In"], True),
        (["Menu", "LOG IN to continue"], True),
        (["sign in"], True),
        (["Order Tickets", "Sign out", "Log out"], False),
        (["Login"], False),
        ([], False),
        ([""], False),
    ],
)
def test_has_login_control(texts, expected):
    assert has_login_control(texts) is expected


def test_classify_evidence():
    evidence = SessionEvidence(
        url="https://festival.sundance.org/my-festival/my-schedule",
        page_text="My Schedule\nPublic Access",
        has_login_control=False,
    )
    assert evidence.has_schedule_text
    assert classify_evidence(evidence) is SessionState.AUTHENTICATED


def test_schedule_text_detection():
    assert SessionEvidence(url="u", page_text="Your Schedule is empty").has_schedule_text
    assert not SessionEvidence(url="u", page_text="Welcome back").has_schedule_text
