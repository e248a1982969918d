"""Resolve the control row that belongs to a schedule item.

On the schedule table an item's description cell holds no purchase
controls; they live in sibling cells of the same row. Resolution therefore
walks up from the item to its row container and then back down into the
row's cells.

Row containers are found with an ordered list of strategies. The first
strategy whose container marker matches an ancestor wins:

  PRODUCTION_ROW_STRATEGIES   react-data-table rows only
  DIAGNOSTIC_ROW_STRATEGIES   the above, then generic schedule/item/row
                              containers for layout investigation
"""

from typing import NamedTuple

from src.ticketwatch.dom import PageNode
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import ControlCandidate, ScheduleSelectors

log = get_logger(__name__)


class RowStrategy(NamedTuple):
    name: str
    container: str
    by_cells: bool  # collect controls per cell instead of from the whole container


PRODUCTION_ROW_STRATEGIES: tuple[RowStrategy, ...] = (
    RowStrategy("table_row", ".rdt_TableRow", by_cells=True),
    RowStrategy("table_row_like", '[class*="TableRow"]', by_cells=True),
)

DIAGNOSTIC_ROW_STRATEGIES: tuple[RowStrategy, ...] = PRODUCTION_ROW_STRATEGIES + (
    RowStrategy("schedule_container", '[class*="schedule"]', by_cells=False),
    RowStrategy("item_container", '[class*="item"]', by_cells=False),
    RowStrategy("row_container", 'div[class*="row"]', by_cells=False),
)


class ResolvedRow(NamedTuple):
    node: PageNode
    strategy: RowStrategy


def resolve_row(
    item_node: PageNode,
    strategies: tuple[RowStrategy, ...] = PRODUCTION_ROW_STRATEGIES,
    max_depth: int = ScheduleSelectors().max_row_ascent,
) -> ResolvedRow | None:
    """Find the row container for an item node, or None."""
    for strategy in strategies:
        container = item_node.closest(strategy.container, max_depth)
        if container is not None:
            return ResolvedRow(container, strategy)
    return None


def is_disabled(node: PageNode) -> bool:
    return (
        node.attribute("disabled") is not None
        or (node.attribute("aria-disabled") or "").lower() == "true"
    )


def _candidate(node: PageNode, favorite_marker: str) -> ControlCandidate:
    return ControlCandidate(
        text=node.text(),
        is_favorite_control=favorite_marker in node.class_name(),
        disabled=is_disabled(node),
    )


def collect_controls(
    row: ResolvedRow, selectors: ScheduleSelectors = ScheduleSelectors()
) -> list[ControlCandidate]:
    """All controls in a row, in cell order then document order within a cell.

    Favorite toggles are included and flagged; the classifier ignores them.
    """
    if row.strategy.by_cells:
        scopes = row.node.select(selectors.cell)
    else:
        scopes = [row.node]

    controls: list[ControlCandidate] = []
    for scope in scopes:
        for node in scope.select(selectors.control):
            controls.append(_candidate(node, selectors.favorite_marker))
    return controls
