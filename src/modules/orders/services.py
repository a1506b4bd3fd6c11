"""Order workflow service (Use Cases).

The one place where the transition rules, the visibility policy and the
remote service meet.  Every mutation follows the same sequence:

1. Resolve the order in the ``OrderBook``, parse the change and check
   the acting user's permissions.  Nothing has touched the network yet.
2. Issue the remote mutation.  If it fails the error is re-raised, the
   book is left as it was and no event is published.
3. Reconcile: the record the remote returns wins.  A ``dispatch_date``
   or ``paid_at`` the remote left out is filled from the local
   transition.
4. Store the reconciled order in the book and publish one domain event.

Business rules enforced:
- ``dispatch_date`` is stamped once, the first time an order becomes
  ``dispatched``.
- Marking an already-paid order paid is a successful no-op.
- ``total`` is recomputed from the line items on create and edit.
- Only administrators delete orders; executives never change assignment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

import structlog

from modules.core.exceptions import DomainError, InvalidTransitionError
from modules.orders.book import OrderBook
from modules.orders.constants import OrderPriority, OrderStatus
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
from modules.orders.models import Order, OrderPatch
from modules.orders.transitions import apply_transition, changed_fields
from modules.orders.visibility import (
    ensure_creatable,
    ensure_deletable,
    ensure_editable,
    filter_visible,
)

if TYPE_CHECKING:
    from modules.orders.dtos import CreateOrderDTO, EditOrderDTO, OrderItemDTO
    from modules.orders.filters import OrderFilter
    from modules.orders.repositories.interfaces import IOrderGateway
    from modules.products.repositories.interfaces import IProductGateway
    from modules.staff.models import Actor
    from shared.domain.bus import IEventBus
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockAdjustment:
    """Outcome of the per-item stock decrement after an order is created."""

    adjusted: Tuple[str, ...] = ()
    failed: Tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class CreateOrderResult:
    order: Order
    stock: StockAdjustment = field(default_factory=StockAdjustment)


class OrderWorkflowService:
    """Application service for order use-cases.

    Receives the order gateway, the event bus and (optionally) the
    product gateway via constructor injection.  Without a product
    gateway, order creation skips the stock adjustment.
    """

    def __init__(
        self,
        gateway: IOrderGateway,
        event_bus: IEventBus,
        book: Optional[OrderBook] = None,
        product_gateway: Optional[IProductGateway] = None,
    ) -> None:
        self._gateway = gateway
        self._bus = event_bus
        self._book = book if book is not None else OrderBook()
        self._product_gateway = product_gateway

    @property
    def book(self) -> OrderBook:
        return self._book

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def refresh(self, filters: Optional[OrderFilter] = None) -> List[Order]:
        """Replace the book with the remote order list."""
        orders = self._gateway.list_orders(filters)
        self._book.replace(orders)
        logger.info("order.book_refreshed", count=len(orders))
        return orders

    def visible_orders(self, actor: Actor) -> List[Order]:
        return filter_visible(actor, self._book)

    # ------------------------------------------------------------------
    # Lifecycle commands
    # ------------------------------------------------------------------

    def update_status(self, actor: Actor, order_id: str, status: OrderStatus | str) -> Order:
        """Move an order to ``status``.

        Raises:
            OrderNotFound: the order is not in the book.
            InvalidTransitionError: ``status`` is not a known status.
            AuthorizationError: ``actor`` may not edit the order.
            TransportError / RemoteRejectedError: the remote call failed.
        """
        return self.update_order(actor, order_id, {"status": status})

    def mark_paid(self, actor: Actor, order_id: str) -> Order:
        """Mark an order paid.  An order that is already paid is returned as is."""
        order = self._book.get(order_id)
        patch = OrderPatch.parse({"is_paid": True})
        ensure_editable(actor, order, patch)

        log = logger.bind(order_id=order.id, actor_id=actor.id)
        if order.is_paid:
            log.info("order.already_paid")
            return order

        local = apply_transition(order, patch)
        remote = self._gateway.mark_order_paid(order.id)
        updated = self._store(local, remote)

        log.info("order.marked_paid")
        self._publish(
            OrderMarkedPaid(aggregate_id=updated.id, order_number=updated.display_number)
        )
        return updated

    def assign(
        self,
        actor: Actor,
        order_id: str,
        staff_id: Optional[str],
        assignee_name: Optional[str] = None,
    ) -> Order:
        """Assign an order to ``staff_id``, or open it to all staff with ``None``."""
        return self._update(
            actor, order_id, {"assigned_to": staff_id}, assignee_name=assignee_name
        )

    def set_priority(self, actor: Actor, order_id: str, priority: OrderPriority | str) -> Order:
        return self.update_order(actor, order_id, {"priority": priority})

    def update_order(
        self, actor: Actor, order_id: str, patch: OrderPatch | Mapping[str, Any]
    ) -> Order:
        """Apply a lifecycle patch (any subset of the transition fields).

        Publishes the event of the most significant field that changed:
        status, then payment, then assignment, then priority.  Anything
        else is reported as ``OrderUpdated``.

        Raises:
            OrderNotFound: the order is not in the book.
            InvalidTransitionError: the patch is empty, holds an unknown
                field or a value outside its enumeration.
            AuthorizationError: ``actor`` may not apply the patch.
            TransportError / RemoteRejectedError: the remote call failed.
        """
        return self._update(actor, order_id, patch)

    def edit_order(self, actor: Actor, order_id: str, dto: EditOrderDTO) -> Order:
        """Replace the editable content of an order, line items included."""
        order = self._book.get(order_id)
        assignment = (
            OrderPatch(assigned_to=dto.assigned_to)
            if dto.assigned_to != order.assigned_to
            else None
        )
        ensure_editable(actor, order, assignment)

        local = apply_transition(order, {"status": dto.status})
        dispatch_date = local.dispatch_date if local.dispatch_date != order.dispatch_date else None
        remote = self._gateway.update_order(order.id, dto.to_wire(dispatch_date=dispatch_date))
        updated = self._store(local, remote)

        logger.info("order.edited", order_id=updated.id, actor_id=actor.id, total=str(dto.total()))
        self._publish(OrderUpdated(aggregate_id=updated.id, order_number=updated.display_number))
        return updated

    # ------------------------------------------------------------------
    # Create / delete
    # ------------------------------------------------------------------

    def create_order(self, actor: Actor, dto: CreateOrderDTO) -> CreateOrderResult:
        """Create an order on behalf of ``actor`` and reduce product stock.

        The stock adjustment runs after the order exists and never undoes
        it: items whose stock could not be reduced are reported in the
        result and in a single ``StockAdjustmentFailed`` event.

        Raises:
            AuthorizationError: an executive named an assignee.
            TransportError / RemoteRejectedError: the remote call failed.
        """
        ensure_creatable(actor, dto.assigned_to)

        log = logger.bind(actor_id=actor.id)
        log.info("order.creation_started", items=len(dto.items))

        dispatch_date = (
            datetime.now(timezone.utc) if dto.status is OrderStatus.DISPATCHED else None
        )
        payload = dto.to_wire(dispatch_date=dispatch_date)
        payload["createdBy"] = actor.id
        payload["isPaid"] = False

        order = self._gateway.create_order(payload)
        self._book.put(order)
        log = log.bind(order_id=order.id)
        log.info("order.created", order_number=order.display_number, total=str(order.total))

        stock = self._adjust_stock(order, dto.items)

        self._publish(OrderCreated(aggregate_id=order.id, order_number=order.display_number))
        if stock.failed:
            self._publish(
                StockAdjustmentFailed(
                    aggregate_id=order.id,
                    order_number=order.display_number,
                    product_ids=stock.failed,
                )
            )
        return CreateOrderResult(order=order, stock=stock)

    def delete_order(self, actor: Actor, order_id: str) -> None:
        order = self._book.get(order_id)
        ensure_deletable(actor, order)

        self._gateway.delete_order(order.id)
        self._book.remove(order.id)

        logger.info("order.deleted", order_id=order.id, actor_id=actor.id)
        self._publish(OrderDeleted(aggregate_id=order.id, order_number=order.display_number))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update(
        self,
        actor: Actor,
        order_id: str,
        patch: OrderPatch | Mapping[str, Any],
        assignee_name: Optional[str] = None,
    ) -> Order:
        order = self._book.get(order_id)
        patch = OrderPatch.parse(patch)
        if patch.is_empty:
            raise InvalidTransitionError("Order change is empty.")
        ensure_editable(actor, order, patch)

        log = logger.bind(order_id=order.id, actor_id=actor.id)
        local = apply_transition(order, patch)
        changed = changed_fields(order, local)
        if not changed:
            log.info("order.unchanged", fields=sorted(patch.model_fields_set))
            return order

        wire = patch.to_wire()
        if "dispatch_date" in changed:
            wire["dispatchDate"] = local.dispatch_date
        remote = self._gateway.update_order(order.id, wire)
        updated = self._store(local, remote)

        log.info("order.updated", fields=sorted(changed))
        self._publish(self._event_for(order, updated, changed, assignee_name))
        return updated

    def _store(self, local: Order, remote: Order) -> Order:
        """Reconcile the remote record with the local transition and keep it."""
        fill: Dict[str, Any] = {}
        if remote.dispatch_date is None and local.dispatch_date is not None:
            fill["dispatch_date"] = local.dispatch_date
        if remote.is_paid and remote.paid_at is None and local.paid_at is not None:
            fill["paid_at"] = local.paid_at
        updated = remote.model_copy(update=fill) if fill else remote
        self._book.put(updated)
        return updated

    @staticmethod
    def _event_for(
        before: Order,
        after: Order,
        changed: set[str],
        assignee_name: Optional[str],
    ) -> DomainEvent:
        number = after.display_number
        if "status" in changed:
            return OrderStatusChanged(
                aggregate_id=after.id,
                order_number=number,
                old_status=before.status.value,
                new_status=after.status.value,
            )
        if "is_paid" in changed and after.is_paid:
            return OrderMarkedPaid(aggregate_id=after.id, order_number=number)
        if "assigned_to" in changed:
            return OrderAssigned(
                aggregate_id=after.id,
                order_number=number,
                assigned_to=after.assigned_to,
                assignee_name=assignee_name,
            )
        if "priority" in changed:
            return OrderPriorityChanged(
                aggregate_id=after.id, order_number=number, priority=after.priority.value
            )
        return OrderUpdated(aggregate_id=after.id, order_number=number)

    def _adjust_stock(self, order: Order, items: List[OrderItemDTO]) -> StockAdjustment:
        if self._product_gateway is None or not items:
            return StockAdjustment()

        log = logger.bind(order_id=order.id)
        try:
            products = {p.id: p for p in self._product_gateway.list_products()}
        except DomainError as exc:
            log.error("order.stock_lookup_failed", error=str(exc))
            return StockAdjustment(failed=tuple(item.product_id for item in items))

        adjusted: List[str] = []
        failed: List[str] = []
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                log.warning("order.stock_product_missing", product_id=item.product_id)
                failed.append(item.product_id)
                continue
            new_stock = max(0, product.stock - item.quantity)
            try:
                self._product_gateway.update_product(product.id, {"stock": new_stock})
            except DomainError as exc:
                log.error(
                    "order.stock_update_failed",
                    product_id=product.id,
                    error=str(exc),
                )
                failed.append(product.id)
            else:
                adjusted.append(product.id)

        return StockAdjustment(adjusted=tuple(adjusted), failed=tuple(failed))

    def _publish(self, event: DomainEvent) -> None:
        self._bus.publish(event)
