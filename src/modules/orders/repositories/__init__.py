"""Order repositories package."""

from modules.orders.repositories.http_repository import OrderHttpGateway
from modules.orders.repositories.interfaces import IOrderGateway

__all__ = ["IOrderGateway", "OrderHttpGateway"]
