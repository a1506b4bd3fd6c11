"""Unit tests for OrderBook."""

from __future__ import annotations

import pytest

from modules.orders.book import OrderBook
from modules.orders.constants import OrderStatus
from modules.orders.exceptions import OrderNotFound

pytestmark = pytest.mark.unit


def test_put_replaces_in_place(order_factory):
    first, second = order_factory(), order_factory()
    book = OrderBook([first, second])

    updated = second.model_copy(update={"status": OrderStatus.DC})
    book.put(updated)

    assert book.all() == [first, updated]


def test_put_prepends_new_orders(order_factory):
    existing, new = order_factory(), order_factory()
    book = OrderBook([existing])

    book.put(new)

    assert book.all() == [new, existing]
    assert new.id in book
    assert len(book) == 2


def test_get_unknown_raises(order_factory):
    book = OrderBook([order_factory()])
    with pytest.raises(OrderNotFound):
        book.get("missing")
    assert book.find("missing") is None


def test_remove_and_replace(order_factory):
    a, b = order_factory(), order_factory()
    book = OrderBook([a, b])

    assert book.remove(a.id) == a
    assert list(book) == [b]

    book.replace([])
    assert len(book) == 0
