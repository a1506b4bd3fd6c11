"""Domain events for the Orders bounded context.

Each event carries what a user-facing message needs (the display order
number, the new value), never the raw patch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class OrderCreated(DomainEvent):
    """Raised when an order is created."""

    order_number: str


@dataclass(frozen=True, kw_only=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order status changes."""

    order_number: str
    old_status: str
    new_status: str


@dataclass(frozen=True, kw_only=True)
class OrderMarkedPaid(DomainEvent):
    order_number: str


@dataclass(frozen=True, kw_only=True)
class OrderAssigned(DomainEvent):
    """Raised when an order is assigned, or opened to all staff (``assigned_to=None``)."""

    order_number: str
    assigned_to: Optional[str] = None
    assignee_name: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class OrderPriorityChanged(DomainEvent):
    order_number: str
    priority: str


@dataclass(frozen=True, kw_only=True)
class OrderUpdated(DomainEvent):
    """Raised when an order is edited in a way no narrower event describes."""

    order_number: str


@dataclass(frozen=True, kw_only=True)
class OrderDeleted(DomainEvent):
    order_number: str


@dataclass(frozen=True, kw_only=True)
class StockAdjustmentFailed(DomainEvent):
    """Raised when an order was created but some product stock was not reduced."""

    order_number: str
    product_ids: Tuple[str, ...]
