"""Staff domain constants."""

from __future__ import annotations

from enum import Enum


class StaffRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    EXECUTIVE = "executive"


STAFF_ACTION_URL = "/staff"
ALL_STAFF_LABEL = "All Staff"
