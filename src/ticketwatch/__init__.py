"""Festival schedule ticket watcher.

Classifies every film on a user's festival "My Schedule" page as available,
sold out, waitlisted or unknown, from a snapshot of the rendered page.
"""

from src.ticketwatch.models import ScheduleReport, SessionState, Status, TicketRecord
from src.ticketwatch.pages.schedule import SchedulePage
from src.ticketwatch.pipeline import extract_report
from src.ticketwatch.session_state import classify_session

__all__ = [
    "SchedulePage",
    "ScheduleReport",
    "SessionState",
    "Status",
    "TicketRecord",
    "classify_session",
    "extract_report",
]
