"""Event handlers that turn domain events into notifications.

Each handler renders one event type into a ``NotificationDraft`` with
user-facing wording and hands it to the dispatcher.
``register_notification_handlers`` wires them onto a bus.
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, Type, TypeVar

import structlog

from modules.notifications.constants import NotificationType
from modules.notifications.dispatcher import NotificationDispatcher
from modules.notifications.models import NotificationDraft
from modules.orders.constants import ORDERS_ACTION_URL
from modules.orders.events import (
    OrderAssigned,
    OrderCreated,
    OrderDeleted,
    OrderMarkedPaid,
    OrderPriorityChanged,
    OrderStatusChanged,
    OrderUpdated,
    StockAdjustmentFailed,
)
from modules.products.constants import PRODUCTS_ACTION_URL
from modules.products.events import (
    LowStockDetected,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
)
from modules.staff.constants import ALL_STAFF_LABEL, STAFF_ACTION_URL
from modules.staff.events import StaffCreated, StaffDeleted, StaffUpdated
from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)

E = TypeVar("E", bound=DomainEvent)


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------


def _order_draft(title: str, message: str) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.ORDER,
        title=title,
        message=message,
        action_url=ORDERS_ACTION_URL,
    )


def render_order_created(event: OrderCreated) -> NotificationDraft:
    return _order_draft("New Order Created", f"Order #{event.order_number} has been created")


def render_order_status_changed(event: OrderStatusChanged) -> NotificationDraft:
    return _order_draft(
        "Order Status Updated",
        f"Order #{event.order_number} status changed to {event.new_status}",
    )


def render_order_marked_paid(event: OrderMarkedPaid) -> NotificationDraft:
    return _order_draft(
        "Order Marked as Paid",
        f"Order #{event.order_number} has been marked as paid",
    )


def render_order_assigned(event: OrderAssigned) -> NotificationDraft:
    if event.assigned_to is None:
        assignee = ALL_STAFF_LABEL.lower()
    else:
        assignee = event.assignee_name or event.assigned_to
    return _order_draft(
        "Order Assigned",
        f"Order #{event.order_number} has been assigned to {assignee}",
    )


def render_order_priority_changed(event: OrderPriorityChanged) -> NotificationDraft:
    return _order_draft(
        "Order Priority Updated",
        f"Order #{event.order_number} priority set to {event.priority}",
    )


def render_order_updated(event: OrderUpdated) -> NotificationDraft:
    return _order_draft("Order Updated", f"Order #{event.order_number} has been updated")


def render_order_deleted(event: OrderDeleted) -> NotificationDraft:
    return _order_draft(
        "Order Deleted",
        f"Order #{event.order_number} has been successfully deleted",
    )


def render_stock_adjustment_failed(event: StockAdjustmentFailed) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.SYSTEM,
        title="Stock Update Incomplete",
        message=(
            f"Stock could not be updated for {len(event.product_ids)} product(s) "
            f"on order #{event.order_number}"
        ),
        action_url=PRODUCTS_ACTION_URL,
    )


def render_product_created(event: ProductCreated) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.PRODUCT,
        title="New Product Added",
        message=f"{event.name} has been successfully added to your inventory",
        action_url=PRODUCTS_ACTION_URL,
    )


def render_product_updated(event: ProductUpdated) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.PRODUCT,
        title="Product Updated",
        message=f"{event.name} has been successfully updated",
        action_url=PRODUCTS_ACTION_URL,
    )


def render_product_deleted(event: ProductDeleted) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.PRODUCT,
        title="Product Deleted",
        message=f"{event.name} has been removed from your inventory",
        action_url=PRODUCTS_ACTION_URL,
    )


def render_low_stock_detected(event: LowStockDetected) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.PRODUCT,
        title="Low Stock Alert",
        message=f"{event.count} products have low stock and need attention",
        action_url=PRODUCTS_ACTION_URL,
    )


def render_staff_created(event: StaffCreated) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.STAFF,
        title="Staff Member Added",
        message=f"{event.name} has been added as {event.role}",
        action_url=STAFF_ACTION_URL,
    )


def render_staff_updated(event: StaffUpdated) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.STAFF,
        title="Staff Member Updated",
        message=f"{event.name} has been updated",
        action_url=STAFF_ACTION_URL,
    )


def render_staff_deleted(event: StaffDeleted) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.STAFF,
        title="Staff Member Removed",
        message=f"{event.name} has been removed",
        action_url=STAFF_ACTION_URL,
    )


RENDERERS: Dict[Type[DomainEvent], Callable[..., NotificationDraft]] = {
    OrderCreated: render_order_created,
    OrderStatusChanged: render_order_status_changed,
    OrderMarkedPaid: render_order_marked_paid,
    OrderAssigned: render_order_assigned,
    OrderPriorityChanged: render_order_priority_changed,
    OrderUpdated: render_order_updated,
    OrderDeleted: render_order_deleted,
    StockAdjustmentFailed: render_stock_adjustment_failed,
    ProductCreated: render_product_created,
    ProductUpdated: render_product_updated,
    ProductDeleted: render_product_deleted,
    LowStockDetected: render_low_stock_detected,
    StaffCreated: render_staff_created,
    StaffUpdated: render_staff_updated,
    StaffDeleted: render_staff_deleted,
}


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


class NotificationHandler(IEventHandler[E], Generic[E]):
    """Renders one event type and dispatches the resulting draft."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        render: Callable[[E], NotificationDraft],
    ) -> None:
        self._dispatcher = dispatcher
        self._render = render

    def handle(self, event: E) -> None:
        draft = self._render(event)
        notification = self._dispatcher.notify(draft)
        logger.info(
            "notification.event_handled",
            event_name=event.event_name,
            aggregate_id=event.aggregate_id,
            notification_id=notification.id,
        )


def register_notification_handlers(
    bus: IEventBus, dispatcher: NotificationDispatcher
) -> Dict[Type[DomainEvent], NotificationHandler]:
    """Subscribe one handler per known event type and return them."""
    handlers: Dict[Type[DomainEvent], NotificationHandler] = {}
    for event_class, render in RENDERERS.items():
        handler: NotificationHandler = NotificationHandler(dispatcher, render)
        bus.subscribe(event_class, handler)
        handlers[event_class] = handler
    return handlers
