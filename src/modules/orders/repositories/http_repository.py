"""HTTP implementation of the Order gateway.

Endpoints:
- ``GET /orders``, ``/orders/status/{status}``, ``/orders/assigned/{id}``,
  ``/orders/date-range/{start}/{end}``
- ``POST /orders``
- ``PUT /orders/{id}``, ``PUT /orders/{id}/paid``
- ``DELETE /orders/{id}``
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

from modules.core.http import RemoteServiceClient, parse_many, parse_payload, to_wire
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.interfaces import IOrderGateway

logger = structlog.get_logger(__name__)


class OrderHttpGateway(IOrderGateway):
    """Concrete Order gateway backed by the remote REST service."""

    def __init__(self, client: RemoteServiceClient) -> None:
        self._client = client

    def list_orders(self, filters: Optional[OrderFilter] = None) -> List[Order]:
        path = _list_path(filters)
        orders = parse_many(Order, self._client.get(path))
        logger.info("order.listed", path=path, count=len(orders))
        return orders

    def create_order(self, payload: Dict[str, Any]) -> Order:
        order = parse_payload(Order, self._client.post("/orders", json=to_wire(payload)))
        logger.info("order.remote_created", order_id=order.id)
        return order

    def update_order(self, id: str, patch: Dict[str, Any]) -> Order:
        data = self._client.put(f"/orders/{id}", json=to_wire(patch))
        return parse_payload(Order, data)

    def mark_order_paid(self, id: str) -> Order:
        body = {"isPaid": True, "paidAt": datetime.now(timezone.utc)}
        data = self._client.put(f"/orders/{id}/paid", json=to_wire(body))
        return parse_payload(Order, data)

    def delete_order(self, id: str) -> None:
        self._client.delete(f"/orders/{id}")
        logger.info("order.remote_deleted", order_id=id)


def _list_path(filters: Optional[OrderFilter]) -> str:
    if filters is None or filters.is_empty:
        return "/orders"
    if filters.status is not None:
        return f"/orders/status/{filters.status.value}"
    if filters.assigned_to is not None:
        return f"/orders/assigned/{filters.assigned_to}"
    return f"/orders/date-range/{filters.start_date.isoformat()}/{filters.end_date.isoformat()}"
