"""Order DTOs for the workflow service.

Input contracts built by the UI layer from its forms, validated with
Pydantic v2.  DTOs are immutable (``frozen=True``).

- ``OrderItemDTO``: one line item with its unit-price snapshot.
- ``CreateOrderDTO``: input for order creation.
- ``EditOrderDTO``: input for a full order edit (items included).

The order ``total`` is never part of the input: ``total()`` recomputes
it from the items every time a payload is built.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.core.http import to_wire
from modules.orders.constants import (
    INITIAL_STATUS,
    LEGACY_PAYMENT_CONDITIONS,
    UNASSIGNED_MARKERS,
    OrderPriority,
    OrderStatus,
    PaymentCondition,
)


class OrderItemDTO(BaseModel):
    """Immutable DTO for a single order line item.

    ``price`` is the product's unit price at the moment the form was
    filled in; it is stored with the order and never re-read.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    product_name: str = ""
    quantity: int
    price: Decimal
    dimension: Optional[str] = None

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        return v

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "productId": self.product_id,
            "productName": self.product_name,
            "quantity": self.quantity,
            "price": to_wire(self.price),
        }
        if self.dimension:
            payload["dimension"] = self.dimension
        return payload


class OrderFormDTO(BaseModel):
    """Fields shared by the create and edit forms.

    Validates:
    - ``customer_name`` is not blank.
    - ``items`` contains at least one item.
    - a product appears at most once.
    """

    model_config = ConfigDict(frozen=True)

    customer_name: str
    customer_phone: str = ""
    customer_email: Optional[str] = None
    items: List[OrderItemDTO]
    status: OrderStatus = INITIAL_STATUS
    payment_condition: PaymentCondition = PaymentCondition.IMMEDIATE
    priority: OrderPriority = OrderPriority.MEDIUM
    assigned_to: Optional[str] = None
    notes: str = ""

    @field_validator("customer_name")
    @classmethod
    def customer_name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Customer name must not be empty.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[OrderItemDTO]) -> List[OrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @field_validator("assigned_to", mode="before")
    @classmethod
    def all_staff_means_unassigned(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip() in UNASSIGNED_MARKERS:
            return None
        return v

    @field_validator("payment_condition", mode="before")
    @classmethod
    def map_legacy_payment_condition(cls, v: Any) -> Any:
        if isinstance(v, str):
            return LEGACY_PAYMENT_CONDITIONS.get(v, v)
        return v

    @model_validator(mode="after")
    def no_duplicate_products(self):
        """Prevent duplicate product IDs in the same order."""
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Duplicate product IDs are not allowed in the same order.")
        return self

    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))

    def to_wire(self, dispatch_date: Optional[datetime] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "customerEmail": self.customer_email or "",
            "items": [item.to_wire() for item in self.items],
            "status": self.status.value,
            "paymentCondition": self.payment_condition.value,
            "priority": self.priority.value,
            "assignedTo": self.assigned_to,
            "notes": self.notes,
            "total": to_wire(self.total()),
        }
        if dispatch_date is not None:
            payload["dispatchDate"] = to_wire(dispatch_date)
        return payload


class CreateOrderDTO(OrderFormDTO):
    """Immutable DTO for order creation requests."""


class EditOrderDTO(OrderFormDTO):
    """Immutable DTO for a full order edit, line items included."""
