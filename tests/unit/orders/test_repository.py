"""Unit tests for OrderHttpGateway with a mocked RemoteServiceClient."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time
from pydantic import ValidationError

from modules.core.exceptions import InvalidPayloadError
from modules.orders.constants import OrderStatus
from modules.orders.filters import OrderFilter
from modules.orders.repositories import OrderHttpGateway

pytestmark = pytest.mark.unit

ORDER_DOC = {"_id": "o1", "orderNumber": "1001", "status": "pending", "total": 10}


@pytest.fixture()
def client():
    return MagicMock()


@pytest.fixture()
def gateway(client):
    return OrderHttpGateway(client)


class TestListOrders:
    @pytest.mark.parametrize(
        "filters,path",
        [
            (None, "/orders"),
            (OrderFilter(), "/orders"),
            (OrderFilter(status=OrderStatus.DC), "/orders/status/dc"),
            (OrderFilter(assigned_to="S1"), "/orders/assigned/S1"),
            (
                OrderFilter(start_date=date(2026, 10, 1), end_date=date(2026, 10, 7)),
                "/orders/date-range/2026-10-01/2026-10-07",
            ),
        ],
    )
    def test_filter_selects_endpoint(self, gateway, client, filters, path):
        client.get.return_value = [ORDER_DOC]

        orders = gateway.list_orders(filters)

        client.get.assert_called_once_with(path)
        assert orders[0].id == "o1"

    def test_non_list_body_is_invalid(self, gateway, client):
        client.get.return_value = {"orders": []}
        with pytest.raises(InvalidPayloadError):
            gateway.list_orders()

    def test_malformed_order_is_invalid(self, gateway, client):
        client.get.return_value = [{"orderNumber": "no id"}]
        with pytest.raises(InvalidPayloadError):
            gateway.list_orders()


class TestMutations:
    def test_create_posts_payload(self, gateway, client):
        client.post.return_value = ORDER_DOC

        order = gateway.create_order({"customerName": "Acme", "status": OrderStatus.PENDING})

        client.post.assert_called_once_with(
            "/orders", json={"customerName": "Acme", "status": "pending"}
        )
        assert order.order_number == "1001"

    def test_update_puts_patch(self, gateway, client):
        client.put.return_value = {**ORDER_DOC, "status": "dc"}

        order = gateway.update_order("o1", {"status": "dc"})

        client.put.assert_called_once_with("/orders/o1", json={"status": "dc"})
        assert order.status is OrderStatus.DC

    @freeze_time("2026-10-17 09:15:00")
    def test_mark_paid_sends_paid_flag_and_timestamp(self, gateway, client):
        client.put.return_value = {**ORDER_DOC, "isPaid": True}

        gateway.mark_order_paid("o1")

        client.put.assert_called_once_with(
            "/orders/o1/paid",
            json={"isPaid": True, "paidAt": "2026-10-17T09:15:00+00:00"},
        )

    def test_delete(self, gateway, client):
        gateway.delete_order("o1")
        client.delete.assert_called_once_with("/orders/o1")


class TestOrderFilter:
    def test_range_needs_both_dates(self):
        with pytest.raises(ValidationError, match="both start_date and end_date"):
            OrderFilter(start_date=date(2026, 10, 1))

    def test_range_must_be_ordered(self):
        with pytest.raises(ValidationError, match="must not be after"):
            OrderFilter(start_date=date(2026, 10, 8), end_date=date(2026, 10, 1))

    def test_only_one_criterion(self):
        with pytest.raises(ValidationError, match="not several"):
            OrderFilter(status=OrderStatus.DC, assigned_to="S1")
