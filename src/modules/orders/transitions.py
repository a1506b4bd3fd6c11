"""Order transition rules.

``apply_transition`` is the single place where lifecycle side effects
live.  It knows nothing about who is acting; authorization is checked by
the workflow service before a transition is attempted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order, OrderPatch


def apply_transition(
    order: Optional[Order],
    patch: OrderPatch | Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
) -> Order:
    """Return ``order`` with ``patch`` applied.

    Side effects:
    - becoming ``dispatched`` stamps ``dispatch_date`` unless the order
      already carries one;
    - becoming paid stamps ``paid_at``; re-marking a paid order changes
      nothing;
    - marking unpaid clears ``paid_at``.

    ``total`` and ``items`` are never touched.

    Raises:
        OrderNotFound: ``order`` is ``None``.
        InvalidTransitionError: ``patch`` holds an unknown field or a
            value outside its enumeration.  ``order`` is left as is.
    """
    if order is None:
        raise OrderNotFound("Order not found.")

    patch = OrderPatch.parse(patch)
    now = now or datetime.now(timezone.utc)
    changes: Dict[str, Any] = {}

    if patch.touches("status") and patch.status is not order.status:
        changes["status"] = patch.status
        if (
            patch.status is OrderStatus.DISPATCHED
            and order.status is not OrderStatus.DISPATCHED
            and order.dispatch_date is None
        ):
            changes["dispatch_date"] = now

    if patch.touches("is_paid"):
        if patch.is_paid and not order.is_paid:
            changes["is_paid"] = True
            changes["paid_at"] = now
        elif not patch.is_paid and order.is_paid:
            changes["is_paid"] = False
            changes["paid_at"] = None

    if patch.touches("assigned_to") and patch.assigned_to != order.assigned_to:
        changes["assigned_to"] = patch.assigned_to

    if patch.touches("priority") and patch.priority is not order.priority:
        changes["priority"] = patch.priority

    if (
        patch.touches("payment_condition")
        and patch.payment_condition is not order.payment_condition
    ):
        changes["payment_condition"] = patch.payment_condition

    if not changes:
        return order
    return order.model_copy(update=changes)


def changed_fields(before: Order, after: Order) -> set[str]:
    """Names of lifecycle fields whose values differ between two orders."""
    names = (
        "status",
        "is_paid",
        "paid_at",
        "assigned_to",
        "priority",
        "payment_condition",
        "dispatch_date",
    )
    return {name for name in names if getattr(before, name) != getattr(after, name)}
