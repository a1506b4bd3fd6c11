"""Domain events for the Products bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shared.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ProductCreated(DomainEvent):
    name: str


@dataclass(frozen=True, kw_only=True)
class ProductUpdated(DomainEvent):
    name: str


@dataclass(frozen=True, kw_only=True)
class ProductDeleted(DomainEvent):
    name: str


@dataclass(frozen=True, kw_only=True)
class LowStockDetected(DomainEvent):
    """Raised once per scan that finds products below their threshold."""

    product_ids: Tuple[str, ...]

    @property
    def count(self) -> int:
        return len(self.product_ids)
