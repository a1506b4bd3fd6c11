"""End-to-end session tests: container, services, bus, store and a fake remote.

The remote is an in-memory stand-in behind a mocked ``requests.Session``
so the real client, gateways and parse step are exercised.
"""

from __future__ import annotations

import json
import re
from unittest.mock import MagicMock

import pytest
import requests

from config.container import OrderDeskContainer
from config.settings import Settings
from modules.core.exceptions import AuthorizationError, InvalidTransitionError, TransportError
from modules.notifications.alerts import NullAlertSurface
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, OrderItemDTO
from modules.products.dtos import UpdateProductDTO

pytestmark = pytest.mark.integration


def _response(status_code: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = b"" if body is None else json.dumps(body).encode()
    return response


class FakeRemote:
    """Minimal in-memory version of the REST service."""

    def __init__(self) -> None:
        self.orders: dict[str, dict] = {}
        self.products: dict[str, dict] = {
            "p1": {"_id": "p1", "name": "Steel Wire", "price": 12.5, "stock": 10, "threshold": 5},
            "p2": {"_id": "p2", "name": "Nails", "price": 1.0, "stock": 3, "threshold": 5},
        }
        self.offline = False
        self._next = 1000

    def __call__(self, method, url, json=None, params=None, headers=None, timeout=None):
        if self.offline:
            raise requests.exceptions.ConnectionError("network down")
        path = url.split("/api", 1)[1]
        if method == "GET" and path == "/orders":
            return _response(200, list(self.orders.values()))
        if method == "POST" and path == "/orders":
            self._next += 1
            doc = {**json, "_id": f"o{self._next}", "orderNumber": str(self._next)}
            self.orders[doc["_id"]] = doc
            return _response(201, doc)
        match = re.fullmatch(r"/orders/(\w+)(/paid)?", path)
        if match:
            order_id = match.group(1)
            if order_id not in self.orders:
                return _response(404, {"message": "Order not found"})
            if method == "PUT":
                self.orders[order_id].update(json)
                return _response(200, self.orders[order_id])
            if method == "DELETE":
                del self.orders[order_id]
                return _response(200, {"message": "deleted"})
        if method == "GET" and path == "/products":
            return _response(200, list(self.products.values()))
        match = re.fullmatch(r"/products/(\w+)", path)
        if match and method == "PUT":
            self.products[match.group(1)].update(json)
            return _response(200, self.products[match.group(1)])
        return _response(400, {"message": f"Unsupported {method} {path}"})


@pytest.fixture()
def remote():
    return FakeRemote()


@pytest.fixture()
def session(remote):
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = remote
    return session


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        api_url="http://remote.test/api",
        notifications_path=tmp_path / "notifications.json",
        desktop_alerts=False,
    )


@pytest.fixture()
def desk(settings, session):
    container = OrderDeskContainer.build(
        settings, session=session, alert_surface=NullAlertSurface()
    )
    container.start()
    yield container
    if not container.store.closed:
        container.close()


def _new_order(**overrides) -> CreateOrderDTO:
    data = {
        "customer_name": "Acme Traders",
        "items": [
            OrderItemDTO(
                product_id="p1", product_name="Steel Wire", quantity=2, price="12.50"
            ),
            OrderItemDTO(product_id="p2", product_name="Nails", quantity=5, price="1.00"),
        ],
    }
    data.update(overrides)
    return CreateOrderDTO(**data)


def _titles(desk) -> list[str]:
    return [n.title for n in desk.store.notifications]


def test_executive_order_lifecycle(desk, remote, admin, executive, staff_member):
    result = desk.orders.create_order(executive, _new_order())
    order = result.order

    assert remote.orders[order.id]["createdBy"] == "E1"
    assert remote.products["p1"]["stock"] == 8
    assert remote.products["p2"]["stock"] == 0
    assert desk.orders.visible_orders(executive) == [order]
    assert desk.orders.visible_orders(staff_member) == [order]

    with pytest.raises(AuthorizationError):
        desk.orders.assign(executive, order.id, "S1")

    desk.orders.assign(admin, order.id, "S2", assignee_name="Sky Staff")
    assert desk.orders.visible_orders(staff_member) == []

    dispatched = desk.orders.update_status(admin, order.id, "dispatched")
    first_dispatch = dispatched.dispatch_date
    assert first_dispatch is not None
    assert remote.orders[order.id]["dispatchDate"] == first_dispatch.isoformat()

    desk.orders.update_status(admin, order.id, "invoice")
    again = desk.orders.update_status(admin, order.id, "dispatched")
    assert again.dispatch_date == first_dispatch

    paid = desk.orders.mark_paid(admin, order.id)
    assert paid.is_paid and paid.paid_at is not None
    assert desk.orders.mark_paid(admin, order.id).paid_at == paid.paid_at

    assert _titles(desk) == [
        "Order Marked as Paid",
        "Order Status Updated",
        "Order Status Updated",
        "Order Status Updated",
        "Order Assigned",
        "New Order Created",
    ]
    assert desk.store.notifications[4].message == (
        f"Order #{order.display_number} has been assigned to Sky Staff"
    )


def test_rejected_change_touches_nothing(desk, admin):
    order = desk.orders.create_order(admin, _new_order()).order
    before = len(desk.store)

    with pytest.raises(InvalidTransitionError):
        desk.orders.update_status(admin, order.id, "shipped")

    assert desk.orders.book.get(order.id).status is OrderStatus.PENDING
    assert len(desk.store) == before


def test_transport_failure_leaves_book_and_notifications(desk, remote, admin):
    order = desk.orders.create_order(admin, _new_order()).order
    before = len(desk.store)
    remote.offline = True

    with pytest.raises(TransportError):
        desk.orders.update_status(admin, order.id, "dispatched")

    cached = desk.orders.book.get(order.id)
    assert cached.status is OrderStatus.PENDING
    assert cached.dispatch_date is None
    assert len(desk.store) == before


def test_delete_keeps_earlier_notifications(desk, remote, admin):
    order = desk.orders.create_order(admin, _new_order()).order

    desk.orders.delete_order(admin, order.id)

    assert order.id not in remote.orders
    assert _titles(desk) == ["Order Deleted", "New Order Created"]
    assert desk.store.notifications[0].message == (
        f"Order #{order.display_number} has been successfully deleted"
    )


def test_low_stock_scan_is_one_notification(desk):
    desk.products.refresh()
    desk.products.update_product("p1", UpdateProductDTO(stock=1))

    low = desk.products.scan_low_stock()

    assert [p.id for p in low] == ["p1", "p2"]
    assert _titles(desk) == ["Low Stock Alert", "Product Updated"]
    assert desk.store.notifications[0].message == "2 products have low stock and need attention"


def test_notifications_survive_a_new_session(desk, settings, session, admin):
    desk.orders.create_order(admin, _new_order())
    desk.store.mark_all_read()
    desk.close()

    reopened = OrderDeskContainer.build(
        settings, session=session, alert_surface=NullAlertSurface()
    )
    reopened.start()

    assert [n.title for n in reopened.store.notifications] == ["New Order Created"]
    assert reopened.store.unread_count() == 0
    reopened.store.clear()
    assert reopened.store.unread_count() == 0
    assert not settings.notifications_path.exists()
    reopened.close()


def test_low_stock_scan_sees_stock_taken_by_a_new_order(desk, admin):
    desk.products.refresh()
    items = [
        OrderItemDTO(product_id="p1", product_name="Steel Wire", quantity=6, price="12.50")
    ]

    desk.orders.create_order(admin, _new_order(items=items))
    low = desk.products.scan_low_stock()

    assert [(p.id, p.stock) for p in low] == [("p2", 3), ("p1", 4)]
