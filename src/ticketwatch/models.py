"""Pydantic models for schedule and ticket data.

All records use Pydantic v2 for validation, serialization, and type safety.
ScheduleReport is a plain read-only mapping so it can be compared, iterated
and indexed like the dict the report formatter consumes.
"""

import re
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, Field


class Status(str, Enum):
    """Ticket purchasability of one schedule item."""

    SOLD_OUT = "SOLD_OUT"
    WAITLIST = "WAITLIST"
    AVAILABLE = "AVAILABLE"
    UNKNOWN = "UNKNOWN"


class SessionState(str, Enum):
    """Whether the current page is an authenticated schedule view."""

    AUTHENTICATED = "AUTHENTICATED"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"
    UNCLEAR = "UNCLEAR"


class ScheduleSelectors(BaseModel):
    """Markers the extraction pipeline uses to query a page snapshot.

    Defaults match the festival schedule layout (react-data-table rows).
    """

    model_config = {"frozen": True}

    film_desc: str = ".sd_schedule_film_desc"
    title: str = "h3"
    date: str = ".sd_start_end_date"
    cell: str = '.rdt_TableCell, [class*="TableCell"]'
    control: str = "button, a.button, .btn"
    favorite_marker: str = "fav"
    max_row_ascent: int = 25


class ScheduleItem(BaseModel):
    """One film/session entry on the personal schedule.

    Sourced from a .sd_schedule_film_desc node: title from its h3,
    screening_time from .sd_start_end_date with whitespace collapsed.
    """

    model_config = {"frozen": True}

    title: str = Field(min_length=1)
    screening_time: str = ""  # "Fri 7:00 PM" or "" when the page shows no date


_ALPHA_RE = re.compile(r"[a-zA-Z]")


class ControlCandidate(BaseModel):
    """A button or link found in an item's control row."""

    model_config = {"frozen": True}

    text: str
    is_favorite_control: bool = False
    disabled: bool = False  # diagnostics only, never affects status

    @property
    def is_eligible(self) -> bool:
        """True if this control may take part in classification.

        Favorite toggles, empty controls and icon-only glyphs are ignored.
        """
        if self.is_favorite_control:
            return False
        text = self.text.strip()
        return bool(text) and _ALPHA_RE.search(text) is not None


class Classification(NamedTuple):
    status: Status
    button_label: str


UNCLASSIFIED = Classification(Status.UNKNOWN, "")


class TicketRecord(BaseModel):
    """Final per-item entry in a ScheduleReport."""

    model_config = {"frozen": True}

    title: str
    screening_time: str = ""
    status: Status = Status.UNKNOWN
    button_label: str = ""


class RecordKey(NamedTuple):
    """Composite report key: title plus screening time or positional index.

    The string form ``{title}_{time_or_index}`` is the report identity, so
    two items with the same title and screening time share a key.
    """

    title: str
    time_or_index: str

    @classmethod
    def for_item(cls, item: ScheduleItem, index: int) -> "RecordKey":
        return cls(item.title, item.screening_time or str(index))

    def __str__(self) -> str:
        return f"{self.title}_{self.time_or_index}"


class ScheduleReport(Mapping[str, TicketRecord]):
    """Keyed ticket records in document order of discovery.

    Insertion policy is last write wins: a record whose key already exists
    replaces the stored record in place (the key keeps its first position)
    and the key is appended to ``collisions``.
    """

    def __init__(self) -> None:
        self._records: dict[str, TicketRecord] = {}
        self.collisions: list[str] = []

    def put(self, key: RecordKey, record: TicketRecord) -> bool:
        """Store a record, returning True if it replaced an existing one."""
        name = str(key)
        replaced = name in self._records
        if replaced:
            self.collisions.append(name)
        self._records[name] = record
        return replaced

    def __getitem__(self, key: str) -> TicketRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"ScheduleReport({self._records!r}, collisions={self.collisions!r})"

    def by_status(self) -> dict[Status, list[TicketRecord]]:
        """Group records by status, every status present (possibly empty)."""
        groups: dict[Status, list[TicketRecord]] = {status: [] for status in Status}
        for record in self._records.values():
            groups[record.status].append(record)
        return groups

    def to_dict(self) -> dict[str, dict]:
        return {key: record.model_dump(mode="json") for key, record in self.items()}


_SCHEDULE_TEXT_MARKERS = ("my schedule", "your schedule")


class SessionEvidence(BaseModel):
    """Signals gathered from the live page before extraction."""

    url: str
    page_text: str = ""
    has_login_control: bool = False

    @property
    def has_schedule_text(self) -> bool:
        text = self.page_text.lower()
        return any(marker in text for marker in _SCHEDULE_TEXT_MARKERS)
