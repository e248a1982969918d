"""Human-readable and JSON rendering of a ScheduleReport."""

import json

from src.ticketwatch.models import ScheduleReport, Status, TicketRecord

DISPLAY_ORDER: tuple[Status, ...] = (
    Status.AVAILABLE,
    Status.WAITLIST,
    Status.SOLD_OUT,
    Status.UNKNOWN,
)

SECTION_HEADINGS: dict[Status, str] = {
    Status.AVAILABLE: "TICKETS AVAILABLE",
    Status.WAITLIST: "WAITLIST",
    Status.SOLD_OUT: "SOLD OUT",
    Status.UNKNOWN: "UNKNOWN STATUS (check manually)",
}


def group_by_status(report: ScheduleReport) -> list[tuple[Status, list[TicketRecord]]]:
    """Non-empty status groups in display order."""
    groups = report.by_status()
    return [(status, groups[status]) for status in DISPLAY_ORDER if groups[status]]


def _format_record(record: TicketRecord) -> list[str]:
    lines = [f"  {record.title}"]
    if record.screening_time:
        lines.append(f"    time:   {record.screening_time}")
    if record.button_label:
        lines.append(f'    button: "{record.button_label}"')
    return lines


def format_report(report: ScheduleReport) -> str:
    """Render the report grouped by status.

    An empty report is a valid result (empty schedule or changed layout),
    so it gets an explanatory note instead of an error.
    """
    count = len(report)
    if count == 0:
        return "\n".join(
            [
                "Found 0 film(s) on your schedule.",
                "  - the schedule may be empty, or",
                "  - the page structure differs from the configured selectors",
            ]
        )

    lines = [f"Found {count} film(s) on your schedule:"]
    for status, records in group_by_status(report):
        lines.append("")
        lines.append(f"{SECTION_HEADINGS[status]} ({len(records)}):")
        for record in records:
            lines.extend(_format_record(record))

    if report.collisions:
        lines.append("")
        lines.append(
            f"Note: {len(report.collisions)} duplicate schedule entr"
            f"{'y was' if len(report.collisions) == 1 else 'ies were'} merged: "
            + ", ".join(report.collisions)
        )
    return "\n".join(lines)


def report_to_json(report: ScheduleReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
