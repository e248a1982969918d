"""Extraction pipeline: locate -> resolve row -> classify -> assemble.

Runs synchronously over an immutable page snapshot. Items without a title
or without a resolvable row are skipped, never raised.
"""

from collections.abc import Iterator

from pydantic import BaseModel

from src.ticketwatch.assembler import assemble
from src.ticketwatch.classifier import classify
from src.ticketwatch.dom import PageNode
from src.ticketwatch.locator import LocatedItem, locate
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import (
    Classification,
    ControlCandidate,
    ScheduleReport,
    ScheduleSelectors,
    Status,
)
from src.ticketwatch.rows import (
    DIAGNOSTIC_ROW_STRATEGIES,
    PRODUCTION_ROW_STRATEGIES,
    RowStrategy,
    collect_controls,
    resolve_row,
)

log = get_logger(__name__)


def _classified_rows(
    located_items: Iterator[LocatedItem],
    selectors: ScheduleSelectors,
    strategies: tuple[RowStrategy, ...],
    skipped: list[int],
) -> Iterator[tuple[LocatedItem, Classification]]:
    for located in located_items:
        row = resolve_row(located.node, strategies, selectors.max_row_ascent)
        if row is None:
            log.warning(
                "row_not_found", title=located.item.title, index=located.index
            )
            skipped.append(located.index)
            continue
        yield located, classify(collect_controls(row, selectors))


def extract_report(
    page: PageNode,
    selectors: ScheduleSelectors = ScheduleSelectors(),
    strategies: tuple[RowStrategy, ...] = PRODUCTION_ROW_STRATEGIES,
) -> ScheduleReport:
    """Classify every schedule item on the page into a ScheduleReport."""
    skipped: list[int] = []
    rows = _classified_rows(locate(page, selectors), selectors, strategies, skipped)
    report = assemble(rows)

    counts = {status.value: len(records) for status, records in report.by_status().items()}
    log.info(
        "schedule_extracted",
        records=len(report),
        rows_missing=len(skipped),
        collisions=len(report.collisions),
        **counts,
    )
    return report


class RowDiagnostics(BaseModel):
    """Everything the pipeline saw for one item, for layout investigation."""

    index: int
    title: str
    screening_time: str
    hierarchy: list[str]  # "<tag> class" from the item node upwards
    strategy: str | None = None
    controls: list[ControlCandidate] = []
    status: Status = Status.UNKNOWN
    button_label: str = ""


def _hierarchy(node: PageNode, levels: int) -> list[str]:
    entries: list[str] = []
    current: PageNode | None = node
    while current is not None and len(entries) < levels:
        entries.append(f"<{current.tag_name()}> {current.class_name()}".rstrip())
        current = current.closest("*", 1)
    return entries


def inspect_rows(
    page: PageNode,
    selectors: ScheduleSelectors = ScheduleSelectors(),
    strategies: tuple[RowStrategy, ...] = DIAGNOSTIC_ROW_STRATEGIES,
    hierarchy_levels: int = 5,
) -> Iterator[RowDiagnostics]:
    """Diagnostic variant of the pipeline, one entry per titled item.

    Uses the fallback row strategies and keeps items whose row cannot be
    resolved (``strategy`` is None) so layout changes are visible.
    """
    for located in locate(page, selectors):
        diagnostics = RowDiagnostics(
            index=located.index,
            title=located.item.title,
            screening_time=located.item.screening_time,
            hierarchy=_hierarchy(located.node, hierarchy_levels),
        )
        row = resolve_row(located.node, strategies, selectors.max_row_ascent)
        if row is not None:
            controls = collect_controls(row, selectors)
            status, label = classify(controls)
            diagnostics = diagnostics.model_copy(
                update={
                    "strategy": row.strategy.name,
                    "controls": controls,
                    "status": status,
                    "button_label": label,
                }
            )
        yield diagnostics
