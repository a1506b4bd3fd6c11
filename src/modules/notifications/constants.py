"""Notification domain constants."""

from __future__ import annotations

from enum import Enum


class NotificationType(str, Enum):
    ORDER = "order"
    PRODUCT = "product"
    STAFF = "staff"
    SYSTEM = "system"


DEFAULT_CAPACITY = 50
