"""Order domain exceptions.

Raised by the transition rules and the workflow service.  The UI layer
catches these and decides how to present them.
"""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class OrderNotFound(NotFoundError):
    """The referenced order is not in the current order list."""
