"""Product service layer (Use Cases).

Keeps the session's product list in step with the remote service and
publishes one domain event per confirmed change.

Business rules enforced here:
- Low stock means ``stock < threshold`` for products with a threshold.
- A low-stock scan publishes at most one event, however many products
  it finds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import structlog

from modules.products.constants import INVENTORY_AGGREGATE_ID
from modules.products.events import (
    LowStockDetected,
    ProductCreated,
    ProductDeleted,
    ProductUpdated,
)
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductGateway
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductGateway`` and an event bus via constructor
    injection.
    """

    def __init__(self, gateway: IProductGateway, event_bus: IEventBus) -> None:
        self._gateway = gateway
        self._bus = event_bus
        self._products: Dict[str, Product] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def refresh(self) -> List[Product]:
        """Re-read the product list from the remote service."""
        products = self._gateway.list_products()
        self._products = {product.id: product for product in products}
        return products

    @property
    def products(self) -> List[Product]:
        return list(self._products.values())

    def get_product(self, id: str) -> Product:
        """Retrieve a product from the current list.

        Raises:
            ProductNotFound: if the product is not in the list.
        """
        product = self._products.get(id)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def low_stock_products(self, products: Optional[Iterable[Product]] = None) -> List[Product]:
        """Products below their threshold, lowest stock first."""
        candidates = self._products.values() if products is None else products
        return sorted((p for p in candidates if p.is_low_stock), key=lambda p: p.stock)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        product = self._gateway.create_product(dto.to_wire())
        self._products = {product.id: product, **self._products}
        logger.info("product.created", product_id=product.id)
        self._bus.publish(ProductCreated(aggregate_id=product.id, name=product.name))
        return product

    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        product = self._gateway.update_product(id, dto.to_wire())
        self._products[product.id] = product
        logger.info("product.updated", product_id=product.id)
        self._bus.publish(ProductUpdated(aggregate_id=product.id, name=product.name))
        return product

    def delete_product(self, id: str) -> None:
        known = self._products.get(id)
        self._gateway.delete_product(id)
        self._products.pop(id, None)
        logger.info("product.deleted", product_id=id)
        name = known.name if known is not None else id
        self._bus.publish(ProductDeleted(aggregate_id=id, name=name))

    def scan_low_stock(self, products: Optional[Iterable[Product]] = None) -> List[Product]:
        """Find low-stock products and publish a single event if any exist."""
        low = self.low_stock_products(products)
        if low:
            logger.info("product.low_stock_detected", count=len(low))
            self._bus.publish(
                LowStockDetected(
                    aggregate_id=INVENTORY_AGGREGATE_ID,
                    product_ids=tuple(p.id for p in low),
                )
            )
        return low
