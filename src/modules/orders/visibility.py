"""Role-based visibility and edit policy for orders.

Pure functions over ``(actor, order)``.  No store, no network.

- ``admin`` sees and edits every order.
- ``staff`` sees orders open to all staff (no assignee) and orders
  assigned to them.  Orders assigned to someone else are filtered out.
- ``executive`` sees only orders they created.  An order with no
  recorded creator is visible to no executive.  Executives never change
  assignment, not even on the orders they create.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from modules.core.exceptions import AuthorizationError
from modules.orders.models import Order, OrderPatch
from modules.staff.constants import StaffRole
from modules.staff.models import Actor


def is_visible(actor: Actor, order: Order) -> bool:
    if actor.role is StaffRole.ADMIN:
        return True
    if actor.role is StaffRole.STAFF:
        return order.assigned_to is None or order.assigned_to == actor.id
    if actor.role is StaffRole.EXECUTIVE:
        return order.created_by is not None and order.created_by == actor.id
    return False


def is_editable(actor: Actor, order: Order) -> bool:
    if actor.role is StaffRole.ADMIN:
        return True
    return is_visible(actor, order)


def can_assign(actor: Actor, order: Order) -> bool:
    if actor.role is StaffRole.EXECUTIVE:
        return False
    return is_editable(actor, order)


def can_delete(actor: Actor, order: Order) -> bool:
    return actor.role is StaffRole.ADMIN


def filter_visible(actor: Actor, orders: Iterable[Order]) -> List[Order]:
    """Orders ``actor`` may see, in their original order."""
    return [order for order in orders if is_visible(actor, order)]


def ensure_editable(actor: Actor, order: Order, patch: Optional[OrderPatch] = None) -> None:
    """Raise ``AuthorizationError`` unless ``actor`` may apply ``patch``."""
    if not is_editable(actor, order):
        raise AuthorizationError(
            f"{actor.role.value} {actor.id} cannot edit order {order.display_number}."
        )
    if patch is not None and patch.touches("assigned_to") and not can_assign(actor, order):
        raise AuthorizationError(
            f"{actor.role.value} {actor.id} cannot change the assignment of "
            f"order {order.display_number}."
        )


def ensure_creatable(actor: Actor, assigned_to: Optional[str]) -> None:
    """Raise ``AuthorizationError`` if an executive names an assignee at creation."""
    if assigned_to is not None and actor.role is StaffRole.EXECUTIVE:
        raise AuthorizationError(
            f"{actor.role.value} {actor.id} cannot assign a new order to {assigned_to}."
        )


def ensure_deletable(actor: Actor, order: Order) -> None:
    if not can_delete(actor, order):
        raise AuthorizationError(
            f"{actor.role.value} {actor.id} cannot delete order {order.display_number}."
        )
