"""Tests for order aggregation and company attribution."""

from datetime import UTC, datetime

import pytest

from daily_summary.application.aggregator import (
    MULTIPLE_COMPANIES,
    NO_COMPANY,
    UNKNOWN_COMPANY,
    UNKNOWN_FOOD,
    aggregate_orders,
    resolve_company_label,
)
from daily_summary.domain.order import Order, OrderItem


def _make_order(
    company: str | None = "Acme",
    items: list[tuple[str | None, int]] | None = None,
    order_id: str = "1",
) -> Order:
    """Build an Order from ``(food name, quantity)`` pairs."""
    return Order(
        id=order_id,
        order_time=datetime(2025, 6, 5, 10, 0, tzinfo=UTC),
        status="sent",
        company_name=company,
        items=[OrderItem(food_name=name, quantity=qty) for name, qty in items or []],
    )


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def test_sums_quantities_per_company_and_food() -> None:
    orders = [
        _make_order("Acme", [("Rice", 2), ("Beans", 1)], "1"),
        _make_order("Acme", [("Rice", 3)], "2"),
    ]

    result = aggregate_orders(orders)

    assert result.companies == {"Acme": {"Rice": 5, "Beans": 1}}
    assert result.items == {"Rice": 5, "Beans": 1}
    assert result.company_totals == {"Acme": 6}
    assert result.total == 6
    assert result.order_count == 2


def test_preserves_first_seen_order() -> None:
    orders = [
        _make_order("Acme", [("Chapati", 1), ("Rice", 1)], "1"),
        _make_order("Acme", [("Beans", 1), ("Rice", 1)], "2"),
    ]

    result = aggregate_orders(orders)

    assert list(result.items) == ["Chapati", "Rice", "Beans"]


def test_empty_input_has_zero_total() -> None:
    result = aggregate_orders([])

    assert result.total == 0
    assert result.order_count == 0
    assert result.items == {}
    assert result.company_label == NO_COMPANY


def test_order_without_items_counts_but_adds_nothing() -> None:
    result = aggregate_orders([_make_order("Acme", [])])

    assert result.order_count == 1
    assert result.total == 0
    assert result.companies == {"Acme": {}}


@pytest.mark.parametrize(
    "orders",
    [
        [_make_order("Acme", [("Rice", 1)])],
        [
            _make_order("Acme", [("Rice", 4), ("Beans", 7)], "1"),
            _make_order("Globex", [("Rice", 2), (None, 5)], "2"),
            _make_order(None, [("Ugali", 12)], "3"),
        ],
        [_make_order("Acme", [("Pilau", 150)]), _make_order("Acme", [("Pilau", 1)])],
    ],
)
def test_conservation_of_quantities(orders: list[Order]) -> None:
    """Every quantity lands in exactly one cell and in the grand total."""
    result = aggregate_orders(orders)
    input_total = sum(item.quantity for order in orders for item in order.items)

    cell_total = sum(q for foods in result.companies.values() for q in foods.values())
    assert cell_total == input_total
    assert result.total == input_total
    assert sum(result.items.values()) == input_total
    assert sum(result.company_totals.values()) == input_total


def test_reaggregating_in_another_order_gives_same_result() -> None:
    orders = [
        _make_order("Acme", [("Rice", 2), ("Beans", 1)], "1"),
        _make_order("Acme", [("Beans", 4)], "2"),
        _make_order("Acme", [("Chapati", 3), ("Rice", 1)], "3"),
    ]

    assert aggregate_orders(orders) == aggregate_orders(list(reversed(orders)))


# ---------------------------------------------------------------------------
# Missing references
# ---------------------------------------------------------------------------


def test_missing_food_and_company_use_unknown_labels() -> None:
    result = aggregate_orders([_make_order(None, [(None, 2)])])

    assert result.companies == {UNKNOWN_COMPANY: {UNKNOWN_FOOD: 2}}
    assert result.items == {UNKNOWN_FOOD: 2}


def test_empty_company_name_is_unknown() -> None:
    result = aggregate_orders([_make_order("", [("Rice", 1)])])

    assert list(result.companies) == [UNKNOWN_COMPANY]


# ---------------------------------------------------------------------------
# Company attribution
# ---------------------------------------------------------------------------


def test_single_company_is_used_as_label() -> None:
    orders = [_make_order("Acme", order_id="1"), _make_order("Acme", order_id="2")]

    assert resolve_company_label(orders) == "Acme"


@pytest.mark.parametrize("first, second", [("Acme", "Globex"), ("Globex", "Acme")])
def test_two_named_companies_give_sentinel(first: str, second: str) -> None:
    orders = [_make_order(first, order_id="1"), _make_order(second, order_id="2")]

    assert resolve_company_label(orders) == MULTIPLE_COMPANIES


def test_first_named_then_missing_gives_sentinel() -> None:
    orders = [_make_order("Acme", order_id="1"), _make_order(None, order_id="2")]

    assert resolve_company_label(orders) == MULTIPLE_COMPANIES


def test_first_missing_with_two_distinct_names_gives_sentinel() -> None:
    orders = [
        _make_order(None, order_id="1"),
        _make_order("Acme", order_id="2"),
        _make_order("Globex", order_id="3"),
    ]

    assert resolve_company_label(orders) == MULTIPLE_COMPANIES


def test_first_missing_with_one_distinct_name_falls_back() -> None:
    orders = [_make_order("", order_id="1"), _make_order("Acme", order_id="2")]

    assert resolve_company_label(orders) == NO_COMPANY


def test_all_missing_falls_back() -> None:
    orders = [_make_order(None, order_id="1"), _make_order(None, order_id="2")]

    assert resolve_company_label(orders) == NO_COMPANY


def test_multiple_companies_logs_warning(log_records: list[dict]) -> None:
    aggregate_orders([_make_order("Acme", order_id="1"), _make_order("Globex", order_id="2")])

    warnings = [r for r in log_records if r["level"].name == "WARNING"]
    assert len(warnings) == 1
    assert "Acme" in warnings[0]["message"]
