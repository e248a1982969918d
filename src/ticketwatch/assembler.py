"""Assemble classified schedule items into a keyed report."""

from collections.abc import Iterable

from src.ticketwatch.locator import LocatedItem
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import (
    Classification,
    RecordKey,
    ScheduleReport,
    TicketRecord,
)

log = get_logger(__name__)


def assemble(rows: Iterable[tuple[LocatedItem, Classification]]) -> ScheduleReport:
    """Build a ScheduleReport in discovery order.

    Items sharing a key (same title and screening time) overwrite each
    other; the last one wins and the key is recorded in ``collisions``.
    """
    report = ScheduleReport()
    for located, classification in rows:
        item = located.item
        key = RecordKey.for_item(item, located.index)
        record = TicketRecord(
            title=item.title,
            screening_time=item.screening_time,
            status=classification.status,
            button_label=classification.button_label,
        )
        if report.put(key, record):
            log.warning("record_key_collision", key=str(key), index=located.index)
    return report
