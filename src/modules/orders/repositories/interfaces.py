"""Order gateway interface.

The contract the workflow service needs from the remote service.  Every
method returns typed entities; mutations return the full, authoritative
post-update record.

The service layer depends exclusively on this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from modules.orders.filters import OrderFilter
    from modules.orders.models import Order


class IOrderGateway(ABC):
    """Remote operations on orders."""

    @abstractmethod
    def list_orders(self, filters: Optional[OrderFilter] = None) -> List[Order]:
        """List orders, optionally narrowed by one filter criterion."""

    @abstractmethod
    def create_order(self, payload: Dict[str, Any]) -> Order:
        """Create an order from a wire payload and return the stored record."""

    @abstractmethod
    def update_order(self, id: str, patch: Dict[str, Any]) -> Order:
        """Apply ``patch`` (wire keys) and return the updated record."""

    @abstractmethod
    def mark_order_paid(self, id: str) -> Order:
        """Mark the order paid and return the updated record."""

    @abstractmethod
    def delete_order(self, id: str) -> None:
        """Delete the order permanently."""
