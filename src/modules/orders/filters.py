"""Order list filters.

The remote exposes one listing endpoint per criterion, so a filter
selects at most one of: status, assignee, creation date range.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from modules.orders.constants import OrderStatus


class OrderFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Optional[OrderStatus] = None
    assigned_to: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def single_criterion(self):
        has_range = self.start_date is not None or self.end_date is not None
        if has_range and (self.start_date is None or self.end_date is None):
            raise ValueError("A date range needs both start_date and end_date.")
        if has_range and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date.")
        chosen = [self.status is not None, self.assigned_to is not None, has_range]
        if sum(chosen) > 1:
            raise ValueError("Filter by status, assignee or date range, not several.")
        return self

    @property
    def is_empty(self) -> bool:
        return (
            self.status is None
            and self.assigned_to is None
            and self.start_date is None
        )
