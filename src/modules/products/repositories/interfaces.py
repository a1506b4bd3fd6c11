"""Product gateway interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductGateway(ABC):
    """Remote operations on products."""

    @abstractmethod
    def list_products(self) -> List[Product]:
        """List every product."""

    @abstractmethod
    def create_product(self, payload: Dict[str, Any]) -> Product:
        """Create a product and return the stored record."""

    @abstractmethod
    def update_product(self, id: str, payload: Dict[str, Any]) -> Product:
        """Update the supplied fields and return the stored record."""

    @abstractmethod
    def delete_product(self, id: str) -> None:
        """Delete the product."""
