"""Product-side event handlers.

Order creation reduces stock through the product gateway directly, so
the session's product list is re-read once the order exists.
"""

from __future__ import annotations

import structlog

from modules.core.exceptions import DomainError
from modules.orders.events import OrderCreated
from modules.products.services import ProductService
from shared.domain.bus import IEventBus, IEventHandler

logger = structlog.get_logger(__name__)


class RefreshStockOnOrderCreated(IEventHandler[OrderCreated]):
    def __init__(self, service: ProductService) -> None:
        self._service = service

    def handle(self, event: OrderCreated) -> None:
        try:
            products = self._service.refresh()
        except DomainError as exc:
            logger.warning(
                "product.stock_refresh_failed",
                order_id=event.aggregate_id,
                error=str(exc),
            )
            return
        logger.info(
            "product.stock_refreshed",
            order_id=event.aggregate_id,
            count=len(products),
        )


def register_product_handlers(
    bus: IEventBus, service: ProductService
) -> RefreshStockOnOrderCreated:
    handler = RefreshStockOnOrderCreated(service)
    bus.subscribe(OrderCreated, handler)
    return handler
