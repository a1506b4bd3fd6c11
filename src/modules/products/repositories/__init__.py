"""Product repositories package."""

from modules.products.repositories.http_repository import ProductHttpGateway
from modules.products.repositories.interfaces import IProductGateway

__all__ = ["IProductGateway", "ProductHttpGateway"]
