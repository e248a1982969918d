import pytest

from html_builders import film_row, schedule_page
from src.ticketwatch.dom import SoupNode


@pytest.fixture
def end_to_end_page() -> SoupNode:
    """Two films: one on sale with a known time, one waitlisted without a time."""
    return schedule_page(
        film_row("Public Access", "Fri 7:00 PM", ["Order Tickets"]),
        film_row("Midnight Special", None, ["Sold Out", "Waitlist"]),
    )
