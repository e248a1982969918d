"""Status classification for a row of schedule controls.

Classification is a left-to-right fold over the eligible controls of a row,
starting from (UNKNOWN, ""). Each control is matched against RULES in order
and the first rule it satisfies replaces the accumulated result; a control
that matches nothing leaves it untouched.

The last matching control in document order therefore decides the status.
A row rendering a "Sold Out" badge before an active "Order Tickets" link
reports AVAILABLE. This assumes action controls render after status badges
and is kept as-is: changing it would change reported statuses.

Keywords are matched as upper-case substrings, not whole words, so
"Pre-order" counts as AVAILABLE.
"""

from collections.abc import Iterable
from functools import reduce
from typing import NamedTuple

from src.ticketwatch.models import (
    UNCLASSIFIED,
    Classification,
    ControlCandidate,
    Status,
)


class ClassificationRule(NamedTuple):
    status: Status
    keywords: tuple[str, ...]

    def matches(self, upper_text: str) -> bool:
        return any(keyword in upper_text for keyword in self.keywords)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(Status.SOLD_OUT, ("SOLD OUT",)),
    ClassificationRule(Status.WAITLIST, ("WAITLIST", "WAIT LIST")),
    ClassificationRule(
        Status.AVAILABLE,
        ("ORDER", "BUY", "GET", "TICKETS", "TICKET", "PURCHASE", "AVAILABLE"),
    ),
)


def match_rule(text: str) -> Status | None:
    """Status of the first rule matching ``text``, or None."""
    upper_text = text.upper()
    for rule in RULES:
        if rule.matches(upper_text):
            return rule.status
    return None


def _step(current: Classification, control: ControlCandidate) -> Classification:
    text = control.text.strip()
    status = match_rule(text)
    if status is None:
        return current
    return Classification(status, text)


def classify(controls: Iterable[ControlCandidate]) -> Classification:
    """Assign exactly one status and representative label to a control row."""
    eligible = (control for control in controls if control.is_eligible)
    return reduce(_step, eligible, UNCLASSIFIED)
