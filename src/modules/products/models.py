"""Product entity.

Invariant: ``threshold``, when present, is a positive integer, and a
product is low on stock exactly when ``stock < threshold``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from modules.products.constants import ProductDimension


class Product(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(min_length=1)
    name: str
    price: Decimal = Field(default=Decimal("0"), ge=0)
    stock: int = Field(default=0, ge=0)
    dimension: Optional[ProductDimension] = None
    threshold: Optional[int] = Field(default=None, gt=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("id") and data.get("_id"):
            data = dict(data)
            data["id"] = data["_id"]
        return data

    @field_validator("dimension", mode="before")
    @classmethod
    def blank_dimension_is_none(cls, value: Any) -> Any:
        return None if value == "" else value

    @property
    def is_low_stock(self) -> bool:
        return self.threshold is not None and self.stock < self.threshold
