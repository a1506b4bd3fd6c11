from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

import pytest

from modules.notifications.dispatcher import NotificationDispatcher
from modules.notifications.repositories import InMemoryNotificationRepository
from modules.notifications.store import NotificationStore
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderItem
from modules.staff.constants import StaffRole
from modules.staff.models import Actor
from shared.infrastructure.bus import InMemoryEventBus

_order_ids = count(1)


def make_order(**overrides) -> Order:
    """Build a valid order; any field can be overridden by name."""
    n = next(_order_ids)
    data = {
        "id": f"ord-{n}",
        "order_number": f"{1000 + n}",
        "customer_name": "Acme Traders",
        "customer_phone": "5550100",
        "items": (
            OrderItem(
                product_id="prod-1",
                product_name="Steel Wire",
                quantity=2,
                price=Decimal("12.50"),
            ),
        ),
        "status": OrderStatus.PENDING,
        "total": Decimal("25.00"),
        "created_at": datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return Order(**data)


@pytest.fixture()
def admin() -> Actor:
    return Actor(id="admin-1", name="Ada Admin", role=StaffRole.ADMIN)


@pytest.fixture()
def staff_member() -> Actor:
    return Actor(id="S1", name="Sam Staff", role=StaffRole.STAFF)


@pytest.fixture()
def other_staff_member() -> Actor:
    return Actor(id="S2", name="Sky Staff", role=StaffRole.STAFF)


@pytest.fixture()
def executive() -> Actor:
    return Actor(id="E1", name="Eve Exec", role=StaffRole.EXECUTIVE)


@pytest.fixture()
def bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture()
def recording_bus() -> MagicMock:
    """Bus double that records published events."""
    return MagicMock()


@pytest.fixture()
def notification_repo() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


@pytest.fixture()
def store(notification_repo) -> NotificationStore:
    store = NotificationStore(notification_repo)
    store.init()
    return store


@pytest.fixture()
def dispatcher(store) -> NotificationDispatcher:
    return NotificationDispatcher(store)


@pytest.fixture()
def order_factory():
    return make_order
