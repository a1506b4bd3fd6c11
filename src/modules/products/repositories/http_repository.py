"""HTTP implementation of the Product gateway (``/products``)."""

from __future__ import annotations

from typing import Any, Dict, List

import structlog

from modules.core.http import RemoteServiceClient, parse_many, parse_payload, to_wire
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductGateway

logger = structlog.get_logger(__name__)


class ProductHttpGateway(IProductGateway):
    def __init__(self, client: RemoteServiceClient) -> None:
        self._client = client

    def list_products(self) -> List[Product]:
        products = parse_many(Product, self._client.get("/products"))
        logger.info("product.listed", count=len(products))
        return products

    def create_product(self, payload: Dict[str, Any]) -> Product:
        return parse_payload(Product, self._client.post("/products", json=to_wire(payload)))

    def update_product(self, id: str, payload: Dict[str, Any]) -> Product:
        return parse_payload(
            Product, self._client.put(f"/products/{id}", json=to_wire(payload))
        )

    def delete_product(self, id: str) -> None:
        self._client.delete(f"/products/{id}")
