"""Staff domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFoundError


class StaffNotFound(NotFoundError):
    """The referenced staff member does not exist."""
