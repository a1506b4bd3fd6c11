"""Composition root.

Wires one session: HTTP client, gateways, event bus, notification store
and dispatcher, notification handlers and the application services.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests
import structlog

from config.settings import Settings, load_settings
from modules.core.http import RemoteServiceClient
from modules.notifications.alerts import AlertSurface, NotifySendAlertSurface, NullAlertSurface
from modules.notifications.dispatcher import NotificationDispatcher
from modules.notifications.handlers import register_notification_handlers
from modules.notifications.repositories import JsonFileNotificationRepository
from modules.notifications.store import NotificationStore
from modules.orders.repositories import OrderHttpGateway
from modules.orders.services import OrderWorkflowService
from modules.products.handlers import register_product_handlers
from modules.products.repositories import ProductHttpGateway
from modules.products.services import ProductService
from modules.staff.repositories import StaffHttpGateway
from modules.staff.services import StaffService
from shared.infrastructure.bus import InMemoryEventBus

logger = structlog.get_logger(__name__)


@dataclass
class OrderDeskContainer:
    settings: Settings
    client: RemoteServiceClient
    bus: InMemoryEventBus
    store: NotificationStore
    dispatcher: NotificationDispatcher
    orders: OrderWorkflowService
    products: ProductService
    staff: StaffService

    @classmethod
    def build(
        cls,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        alert_surface: Optional[AlertSurface] = None,
    ) -> OrderDeskContainer:
        settings = settings or load_settings()
        client = RemoteServiceClient(
            settings.api_url,
            token=settings.api_token,
            timeout=settings.api_timeout,
            session=session,
        )
        bus = InMemoryEventBus()

        store = NotificationStore(
            JsonFileNotificationRepository(settings.notifications_path),
            capacity=settings.notifications_capacity,
        )
        if alert_surface is None:
            alert_surface = (
                NotifySendAlertSurface() if settings.desktop_alerts else NullAlertSurface()
            )
        dispatcher = NotificationDispatcher(store, alert_surface)
        register_notification_handlers(bus, dispatcher)

        product_gateway = ProductHttpGateway(client)
        products = ProductService(product_gateway, bus)
        register_product_handlers(bus, products)
        return cls(
            settings=settings,
            client=client,
            bus=bus,
            store=store,
            dispatcher=dispatcher,
            orders=OrderWorkflowService(
                OrderHttpGateway(client), bus, product_gateway=product_gateway
            ),
            products=products,
            staff=StaffService(StaffHttpGateway(client), bus),
        )

    def start(self) -> None:
        self.store.init()
        self.store.load()
        self.dispatcher.initialize()
        logger.info("session.started", api_url=self.client.base_url)

    def close(self) -> None:
        self.store.teardown()
        self.client.close()
        logger.info("session.closed")
