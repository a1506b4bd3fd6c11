"""Order entities.

The remote service returns loosely-typed JSON documents; these models are
the validated form the rest of the core works with.  All models are
immutable (``frozen=True``); a transition produces a new ``Order``.

Wire payloads use camelCase keys and a Mongo-style ``_id``; both are
accepted on parse, and snake_case field names work when building models
in code.

Invariants:
- ``OrderItem.price`` is the unit price captured when the order was
  created.  It never follows the product's live price.
- ``Order.total`` is the stored value reported by the remote.
  ``items_total()`` recomputes it from the line items.
- ``dispatch_date`` is set once, the first time the order is dispatched.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from modules.core.exceptions import InvalidTransitionError
from modules.orders.constants import (
    INITIAL_STATUS,
    LEGACY_PAYMENT_CONDITIONS,
    UNASSIGNED_MARKERS,
    OrderPriority,
    OrderStatus,
    PaymentCondition,
)

WIRE_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


def _normalize_staff_ref(value: Any) -> Any:
    if isinstance(value, str) and value.strip() in UNASSIGNED_MARKERS:
        return None
    return value


def _normalize_payment_condition(value: Any) -> Any:
    if isinstance(value, str):
        return LEGACY_PAYMENT_CONDITIONS.get(value, value)
    return value


class OrderItem(BaseModel):
    """One line of an order with its price snapshot."""

    model_config = WIRE_CONFIG

    product_id: str = Field(min_length=1)
    product_name: str = ""
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0)
    dimension: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity


class Order(BaseModel):
    """Order aggregate as known to the current session."""

    model_config = WIRE_CONFIG

    id: str = Field(min_length=1)
    order_number: str = ""
    customer_name: str = ""
    customer_phone: str = ""
    customer_email: Optional[str] = None
    items: Tuple[OrderItem, ...] = ()
    status: OrderStatus = INITIAL_STATUS
    is_paid: bool = False
    paid_at: Optional[datetime] = None
    payment_condition: PaymentCondition = PaymentCondition.IMMEDIATE
    priority: OrderPriority = OrderPriority.MEDIUM
    assigned_to: Optional[str] = None
    created_by: Optional[str] = None
    dispatch_date: Optional[datetime] = None
    total: Decimal = Decimal("0")
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def accept_wire_shapes(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        if not data.get("id") and data.get("_id"):
            data["id"] = data["_id"]
        if "items" not in data and "orderItems" in data:
            data["items"] = data["orderItems"]
        return data

    @field_validator("assigned_to", "created_by", mode="before")
    @classmethod
    def blank_staff_ref_is_none(cls, value: Any) -> Any:
        return _normalize_staff_ref(value)

    @field_validator("payment_condition", mode="before")
    @classmethod
    def map_legacy_payment_condition(cls, value: Any) -> Any:
        if value is None:
            return PaymentCondition.IMMEDIATE
        return _normalize_payment_condition(value)

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, value: Any) -> Any:
        return OrderPriority.MEDIUM if value is None else value

    @field_validator("notes", "customer_name", "customer_phone", mode="before")
    @classmethod
    def none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def display_number(self) -> str:
        """Human-facing order reference (``orderNumber`` or a short id)."""
        return self.order_number or self.id[:8]

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    def items_total(self) -> Decimal:
        """Sum of quantity × price snapshot over all line items."""
        return sum((item.subtotal for item in self.items), Decimal("0"))


class OrderPatch(BaseModel):
    """A lifecycle change: any subset of the transition fields.

    Only fields that were supplied are applied.  ``assigned_to=None``
    supplied explicitly means "open to all staff".  Line items, totals
    and unknown keys are not lifecycle fields and are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    status: Optional[OrderStatus] = None
    is_paid: Optional[StrictBool] = None
    assigned_to: Optional[str] = None
    priority: Optional[OrderPriority] = None
    payment_condition: Optional[PaymentCondition] = None

    @field_validator("assigned_to", mode="before")
    @classmethod
    def blank_assignment_is_none(cls, value: Any) -> Any:
        return _normalize_staff_ref(value)

    @field_validator("payment_condition", mode="before")
    @classmethod
    def map_legacy_payment_condition(cls, value: Any) -> Any:
        return _normalize_payment_condition(value)

    @model_validator(mode="after")
    def supplied_fields_are_not_null(self) -> OrderPatch:
        for name in ("status", "is_paid", "priority", "payment_condition"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be null.")
        return self

    @classmethod
    def parse(cls, data: OrderPatch | Mapping[str, Any]) -> OrderPatch:
        """Build a patch, reporting bad input as ``InvalidTransitionError``."""
        if isinstance(data, cls):
            return data
        try:
            return cls.model_validate(dict(data))
        except ValidationError as exc:
            fields = sorted(
                {".".join(str(p) for p in err["loc"]) or "patch" for err in exc.errors()}
            )
            raise InvalidTransitionError(
                f"Invalid order change for field(s): {', '.join(fields)}."
            ) from exc

    def touches(self, field_name: str) -> bool:
        return field_name in self.model_fields_set

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set

    def to_wire(self) -> dict[str, Any]:
        """Supplied fields only, keyed the way the remote expects."""
        return self.model_dump(mode="json", by_alias=True, include=self.model_fields_set)
