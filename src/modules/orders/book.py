"""In-memory order list owned by one session.

The book is a read-through / write-through cache of the remote order
list: it is replaced wholesale on refresh and updated only with records
the remote has confirmed.  It is never merged with another session.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from modules.orders.exceptions import OrderNotFound
from modules.orders.models import Order


class OrderBook:
    """Ordered collection of orders keyed by ``Order.id``."""

    def __init__(self, orders: Optional[Iterable[Order]] = None) -> None:
        self._orders: List[Order] = list(orders or [])

    def replace(self, orders: Iterable[Order]) -> None:
        self._orders = list(orders)

    def find(self, order_id: str) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def get(self, order_id: str) -> Order:
        """Return the order with ``order_id``.

        Raises:
            OrderNotFound: the order is not in the book.
        """
        order = self.find(order_id)
        if order is None:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def put(self, order: Order) -> None:
        """Replace the order with the same id in place, or prepend it."""
        for index, existing in enumerate(self._orders):
            if existing.id == order.id:
                self._orders[index] = order
                return
        self._orders.insert(0, order)

    def remove(self, order_id: str) -> Order:
        order = self.get(order_id)
        self._orders = [o for o in self._orders if o.id != order_id]
        return order

    def all(self) -> List[Order]:
        return list(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders))

    def __len__(self) -> int:
        return len(self._orders)

    def __contains__(self, order_id: object) -> bool:
        return any(order.id == order_id for order in self._orders)
