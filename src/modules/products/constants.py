"""Product domain constants."""

from __future__ import annotations

from enum import Enum


class ProductDimension(str, Enum):
    BAG = "Bag"
    BUNDLE = "Bundle"
    BOX = "Box"
    COILS = "Coils"
    DOZEN = "Dozen"
    FT = "Ft"
    GROSS = "Gross"
    KG = "Kg"
    MTR = "Mtr"
    PC = "Pc"
    PKT = "Pkt"
    SET = "Set"
    NOT_APPLICABLE = "Not Applicable"


PRODUCTS_ACTION_URL = "/products"

# Aggregate id used for inventory-wide events such as a low-stock scan.
INVENTORY_AGGREGATE_ID = "inventory"
