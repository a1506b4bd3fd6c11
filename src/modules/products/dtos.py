"""Product DTOs.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from modules.core.http import to_wire
from modules.products.constants import ProductDimension


def _check_price(v: Optional[Decimal]) -> Optional[Decimal]:
    if v is not None and v <= 0:
        raise ValueError("Price must be greater than zero.")
    return v


def _check_stock(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 0:
        raise ValueError("Stock cannot be negative.")
    return v


def _check_threshold(v: Optional[int]) -> Optional[int]:
    if v is not None and v < 1:
        raise ValueError("Threshold must be a positive integer.")
    return v


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is not blank.
    - ``price`` is greater than zero.
    - ``stock`` is non-negative.
    - ``threshold``, when given, is positive.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    stock: int = 0
    dimension: Optional[ProductDimension] = None
    threshold: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Product name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        return _check_price(v)

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        return _check_stock(v)

    @field_validator("threshold")
    @classmethod
    def threshold_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        return _check_threshold(v)

    def to_wire(self) -> Dict[str, Any]:
        return to_wire(self.model_dump(exclude_none=True))


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields are updated.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None
    dimension: Optional[ProductDimension] = None
    threshold: Optional[int] = None

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _check_price(v)

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: Optional[int]) -> Optional[int]:
        return _check_stock(v)

    @field_validator("threshold")
    @classmethod
    def threshold_must_be_positive(cls, v: Optional[int]) -> Optional[int]:
        return _check_threshold(v)

    def to_wire(self) -> Dict[str, Any]:
        return to_wire(self.model_dump(exclude_unset=True, exclude_none=True))
