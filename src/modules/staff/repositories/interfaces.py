"""Staff gateway interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from modules.staff.models import Actor


class IStaffGateway(ABC):
    @abstractmethod
    def list_staff(self) -> List[Actor]:
        """List every staff member."""

    @abstractmethod
    def create_staff(self, payload: Dict[str, Any]) -> Actor:
        """Create a staff member and return the stored record."""

    @abstractmethod
    def update_staff(self, id: str, payload: Dict[str, Any]) -> Actor:
        """Apply a partial update and return the stored record."""

    @abstractmethod
    def delete_staff(self, id: str) -> None:
        """Delete a staff member."""
