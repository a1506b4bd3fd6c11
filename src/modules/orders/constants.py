"""Order domain constants.

Closed enumerations for the order lifecycle.  The status set imposes no
ordering: any status may be set from any other by an explicit action.
"""

from __future__ import annotations

from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    DC = "dc"
    INVOICE = "invoice"
    DISPATCHED = "dispatched"


class PaymentCondition(str, Enum):
    IMMEDIATE = "immediate"
    NET_15 = "net-15"
    NET_30 = "net-30"


class OrderPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


INITIAL_STATUS = OrderStatus.PENDING

# Older records store payment terms as "days15" / "days30".
LEGACY_PAYMENT_CONDITIONS: dict[str, str] = {
    "days15": PaymentCondition.NET_15.value,
    "days30": PaymentCondition.NET_30.value,
}

# Values the order forms use to mean "open to all staff".
UNASSIGNED_MARKERS = frozenset({"", "all"})

ORDERS_ACTION_URL = "/orders"
