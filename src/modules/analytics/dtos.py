"""Analytics result DTOs."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class AnalyticsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_orders: int
    total_sales: Decimal
    average_order_value: Decimal
    pending_orders: int


class SalesByPeriod(BaseModel):
    """Revenue booked on one calendar day (UTC)."""

    model_config = ConfigDict(frozen=True)

    day: date
    amount: Decimal


class SalesByProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_name: str
    amount: Decimal
