"""Classify whether a page is an authenticated schedule view."""

import re
from collections.abc import Iterable

from src.ticketwatch.models import SessionEvidence, SessionState

DEFAULT_SCHEDULE_PATH = "/my-festival/my-schedule"

LOGIN_CONTROL_RE = re.compile(r"sign in|log in", re.IGNORECASE)


def has_login_control(control_texts: Iterable[str]) -> bool:
    """True if any visible control reads like a sign-in prompt."""
    return any(LOGIN_CONTROL_RE.search(text or "") for text in control_texts)


def classify_session(
    page_text: str,
    current_url: str,
    has_login_control: bool,
    schedule_path: str = DEFAULT_SCHEDULE_PATH,
) -> SessionState:
    """Three-way decision on already-gathered evidence.

    A visible login control overrides a matching URL. ``page_text`` is
    accepted for callers that log it; it does not change the outcome.
    """
    if schedule_path in current_url and not has_login_control:
        return SessionState.AUTHENTICATED
    if has_login_control:
        return SessionState.LOGIN_REQUIRED
    return SessionState.UNCLEAR


def classify_evidence(
    evidence: SessionEvidence, schedule_path: str = DEFAULT_SCHEDULE_PATH
) -> SessionState:
    return classify_session(
        evidence.page_text,
        evidence.url,
        evidence.has_login_control,
        schedule_path=schedule_path,
    )
