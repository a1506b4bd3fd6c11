"""Sales analytics over an order list.

Pure functions: they read the orders they are given and never call the
remote service.  Amounts are rounded to cents.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from modules.analytics.dtos import AnalyticsSummary, SalesByPeriod, SalesByProduct
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

CENTS = Decimal("0.01")


def _round(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def _utc_day(moment: datetime) -> date:
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(timezone.utc).date()


def summarize(orders: Iterable[Order]) -> AnalyticsSummary:
    orders = list(orders)
    total_sales = sum((order.total for order in orders), Decimal("0"))
    average = total_sales / len(orders) if orders else Decimal("0")
    return AnalyticsSummary(
        total_orders=len(orders),
        total_sales=_round(total_sales),
        average_order_value=_round(average),
        pending_orders=sum(1 for order in orders if order.status is OrderStatus.PENDING),
    )


def sales_by_period(
    orders: Iterable[Order],
    days: int = 7,
    today: Optional[date] = None,
) -> List[SalesByPeriod]:
    """Daily revenue for the last ``days`` days, oldest first.

    Days without orders are reported with a zero amount.  Orders without
    a creation date are ignored.
    """
    if days < 1:
        raise ValueError("days must be at least 1")
    today = today or datetime.now(timezone.utc).date()
    window = [today - timedelta(days=offset) for offset in reversed(range(days))]
    totals: Dict[date, Decimal] = {day: Decimal("0") for day in window}

    for order in orders:
        if order.created_at is None:
            continue
        day = _utc_day(order.created_at)
        if day in totals:
            totals[day] += order.total

    return [SalesByPeriod(day=day, amount=_round(totals[day])) for day in window]


def sales_by_product(orders: Iterable[Order]) -> List[SalesByProduct]:
    """Line-item revenue per product name, highest first."""
    totals: Dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for order in orders:
        for item in order.items:
            totals[item.product_name or item.product_id] += item.subtotal

    rows = [
        SalesByProduct(product_name=name, amount=_round(amount))
        for name, amount in totals.items()
    ]
    return sorted(rows, key=lambda row: row.amount, reverse=True)
