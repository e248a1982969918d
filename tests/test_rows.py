from html_builders import control_html, film_row, schedule_page
from src.ticketwatch.dom import SoupNode
from src.ticketwatch.locator import locate
from src.ticketwatch.models import ControlCandidate
from src.ticketwatch.rows import (
    DIAGNOSTIC_ROW_STRATEGIES,
    PRODUCTION_ROW_STRATEGIES,
    collect_controls,
    resolve_row,
)


def only_item_node(page: SoupNode):
    (entry,) = locate(page)
    return entry.node


def test_resolves_react_data_table_row():
    node = only_item_node(schedule_page(film_row("Film", "Fri", ["Order Tickets"])))
    row = resolve_row(node)

    assert row is not None
    assert row.strategy.name == "table_row"
    assert "rdt_TableRow" in row.node.class_name()


def test_falls_back_to_table_row_like_class():
    page = schedule_page(
        film_row(
            "Film",
            "Fri",
            ["Order Tickets"],
            row_class="sc-abc StyledTableRow",
            cell_class="sc-def StyledTableCell",
        )
    )
    row = resolve_row(only_item_node(page))

    assert row is not None
    assert row.strategy.name == "table_row_like"
    assert [c.text for c in collect_controls(row)] == ["Order Tickets"]


def test_no_row_container_resolves_to_none():
    page = SoupNode.from_html(
        '<html><body><section class="schedule-list">'
        '<div class="sd_schedule_film_desc"><h3>Loose Film</h3></div>'
        "<button>Order Tickets</button>"
        "</section></body></html>"
    )
    node = only_item_node(page)

    assert resolve_row(node, PRODUCTION_ROW_STRATEGIES) is None


def test_diagnostic_strategies_use_generic_containers():
    page = SoupNode.from_html(
        '<html><body><section class="schedule-list">'
        '<div class="sd_schedule_film_desc"><h3>Loose Film</h3></div>'
        "<button>Order Tickets</button>"
        "</section></body></html>"
    )
    row = resolve_row(only_item_node(page), DIAGNOSTIC_ROW_STRATEGIES)

    assert row is not None
    assert row.strategy.name == "schedule_container"
    assert not row.strategy.by_cells
    assert [c.text for c in collect_controls(row)] == ["Order Tickets"]


def test_item_node_itself_is_not_its_row():
    # The description's own class contains "schedule"; only ancestors count
    page = SoupNode.from_html(
        '<html><body><div class="sd_schedule_film_desc"><h3>Film</h3></div></body></html>'
    )
    assert resolve_row(only_item_node(page), DIAGNOSTIC_ROW_STRATEGIES) is None


def test_ascent_is_bounded():
    node = only_item_node(schedule_page(film_row("Film", "Fri", ["Order Tickets"])))
    # description -> cell -> row: the row is two levels up
    assert resolve_row(node, max_depth=1) is None
    assert resolve_row(node, max_depth=2) is not None


def test_collects_controls_cell_by_cell_in_document_order():
    page = schedule_page(
        '<div class="rdt_TableRow">'
        '<div class="rdt_TableCell"><div class="sd_schedule_film_desc"><h3>Film</h3></div></div>'
        f'<div class="rdt_TableCell">{control_html("Sold Out", "btn-status", "span")}</div>'
        '<div class="rdt_TableCell">'
        f'{control_html("♥", "fav-toggle")}'
        f'{control_html("Order Tickets", "button", "a")}'
        f'{control_html("Waitlist", extra=" disabled")}'
        "</div>"
        "<button>Outside any cell</button>"
        "</div>"
    )
    row = resolve_row(only_item_node(page))
    controls = collect_controls(row)

    # span.btn-status is not a control: ".btn" needs the exact class
    assert controls == [
        ControlCandidate(text="♥", is_favorite_control=True),
        ControlCandidate(text="Order Tickets"),
        ControlCandidate(text="Waitlist", disabled=True),
    ]


def test_aria_disabled_counts_as_disabled():
    page = schedule_page(
        film_row("Film", "Fri", [control_html("Sold Out", extra=' aria-disabled="true"')])
    )
    (control,) = collect_controls(resolve_row(only_item_node(page)))
    assert control.disabled


def test_btn_class_and_button_links_are_controls():
    page = schedule_page(
        film_row(
            "Film",
            "Fri",
            [
                control_html("Sold Out", "btn", "div"),
                control_html("Order", "button", "a"),
                control_html("Plain link", tag="a"),
            ],
        )
    )
    controls = collect_controls(resolve_row(only_item_node(page)))
    assert [c.text for c in controls] == ["Sold Out", "Order"]
