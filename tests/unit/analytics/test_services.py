"""Unit tests for the analytics functions."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from freezegun import freeze_time

from modules.analytics.services import sales_by_period, sales_by_product, summarize
from modules.orders.constants import OrderStatus
from modules.orders.models import OrderItem

pytestmark = pytest.mark.unit


def _at(day: int, hour: int = 12) -> datetime:
    return datetime(2026, 10, day, hour, tzinfo=timezone.utc)


def test_summarize(order_factory):
    orders = [
        order_factory(total=Decimal("10.00"), status=OrderStatus.PENDING),
        order_factory(total=Decimal("20.00"), status=OrderStatus.DISPATCHED),
        order_factory(total=Decimal("5.01"), status=OrderStatus.PENDING),
    ]

    summary = summarize(orders)

    assert summary.total_orders == 3
    assert summary.total_sales == Decimal("35.01")
    assert summary.average_order_value == Decimal("11.67")
    assert summary.pending_orders == 2


def test_summarize_empty():
    summary = summarize([])
    assert summary.total_orders == 0
    assert summary.average_order_value == Decimal("0.00")


def test_sales_by_period_zero_fills_window(order_factory):
    orders = [
        order_factory(total=Decimal("10"), created_at=_at(17, 1)),
        order_factory(total=Decimal("5"), created_at=_at(17, 23)),
        order_factory(total=Decimal("7"), created_at=_at(12)),
        order_factory(total=Decimal("99"), created_at=_at(1)),
        order_factory(total=Decimal("1"), created_at=None),
    ]

    rows = sales_by_period(orders, days=7, today=date(2026, 10, 17))

    assert [row.day for row in rows] == [date(2026, 10, d) for d in range(11, 18)]
    amounts = {row.day.day: row.amount for row in rows}
    assert amounts[17] == Decimal("15.00")
    assert amounts[12] == Decimal("7.00")
    assert amounts[11] == Decimal("0.00")


@freeze_time("2026-10-17 05:00:00")
def test_sales_by_period_defaults_to_today(order_factory):
    rows = sales_by_period([order_factory(created_at=_at(17))], days=1)
    assert rows[0].day == date(2026, 10, 17)
    assert rows[0].amount == Decimal("25.00")


def test_sales_by_period_rejects_empty_window():
    with pytest.raises(ValueError):
        sales_by_period([], days=0)


def test_sales_by_product_descending(order_factory):
    orders = [
        order_factory(
            items=(
                OrderItem(product_id="a", product_name="Wire", quantity=2, price=Decimal("3")),
                OrderItem(product_id="b", product_name="Nails", quantity=1, price=Decimal("10")),
            )
        ),
        order_factory(
            items=(OrderItem(product_id="a", product_name="Wire", quantity=1, price=Decimal("3")),)
        ),
    ]

    rows = sales_by_product(orders)

    assert [(row.product_name, row.amount) for row in rows] == [
        ("Nails", Decimal("10.00")),
        ("Wire", Decimal("9.00")),
    ]
