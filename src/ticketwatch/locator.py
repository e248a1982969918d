"""Locate schedule items on a page snapshot."""

import re
from collections.abc import Iterator
from typing import NamedTuple

from src.ticketwatch.dom import PageNode
from src.ticketwatch.logging import get_logger
from src.ticketwatch.models import ScheduleItem, ScheduleSelectors

log = get_logger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


class LocatedItem(NamedTuple):
    index: int  # position among all matched description nodes, titled or not
    node: PageNode
    item: ScheduleItem


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.strip())


def locate(
    page: PageNode, selectors: ScheduleSelectors = ScheduleSelectors()
) -> Iterator[LocatedItem]:
    """Yield schedule items in document order.

    Description nodes without a title heading cannot be keyed and are
    skipped. The screening time is optional and defaults to "".
    Each call re-queries the page.
    """
    for index, node in enumerate(page.select(selectors.film_desc)):
        headings = node.select(selectors.title)
        title = headings[0].text() if headings else ""
        if not title:
            log.debug("schedule_item_skipped", index=index, reason="no_title")
            continue

        dates = node.select(selectors.date)
        screening_time = collapse_whitespace(dates[0].text()) if dates else ""

        yield LocatedItem(
            index=index,
            node=node,
            item=ScheduleItem(title=title, screening_time=screening_time),
        )
