"""Staff service layer.

Staff management is an administrator action.  The service also resolves
staff ids to display names for assignment messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional

import structlog

from modules.core.exceptions import AuthorizationError
from modules.staff.constants import ALL_STAFF_LABEL
from modules.staff.events import StaffCreated, StaffDeleted, StaffUpdated
from modules.staff.exceptions import StaffNotFound

if TYPE_CHECKING:
    from modules.staff.dtos import CreateStaffDTO, UpdateStaffDTO
    from modules.staff.models import Actor
    from modules.staff.repositories.interfaces import IStaffGateway
    from shared.domain.bus import IEventBus

logger = structlog.get_logger(__name__)


class StaffService:
    def __init__(self, gateway: IStaffGateway, event_bus: IEventBus) -> None:
        self._gateway = gateway
        self._bus = event_bus
        self._staff: Dict[str, Actor] = {}

    def list_staff(self) -> List[Actor]:
        """Re-read the staff list from the remote service."""
        staff = self._gateway.list_staff()
        self._staff = {member.id: member for member in staff}
        return staff

    def get_staff(self, id: str) -> Actor:
        member = self._staff.get(id)
        if member is None:
            raise StaffNotFound(f"Staff member {id} not found.")
        return member

    def display_name(self, staff_id: Optional[str]) -> str:
        """Name to show for an assignee; unknown ids fall back to the id."""
        if staff_id is None:
            return ALL_STAFF_LABEL
        member = self._staff.get(staff_id)
        return member.name if member is not None and member.name else staff_id

    def create_staff(self, actor: Actor, dto: CreateStaffDTO) -> Actor:
        """Create a staff member.

        Raises:
            AuthorizationError: ``actor`` is not an administrator.
        """
        self._ensure_admin(actor, "create staff members")
        member = self._gateway.create_staff(dto.to_wire())
        self._staff[member.id] = member
        logger.info("staff.created", staff_id=member.id, role=member.role.value)
        self._bus.publish(
            StaffCreated(aggregate_id=member.id, name=member.name, role=member.role.value)
        )
        return member

    def update_staff(self, actor: Actor, id: str, dto: UpdateStaffDTO) -> Actor:
        self._ensure_admin(actor, "update staff members")
        member = self._gateway.update_staff(id, dto.to_wire())
        self._staff[member.id] = member
        logger.info("staff.updated", staff_id=member.id)
        self._bus.publish(StaffUpdated(aggregate_id=member.id, name=member.name))
        return member

    def delete_staff(self, actor: Actor, id: str) -> None:
        """Delete a staff member.

        Raises:
            AuthorizationError: ``actor`` is not an administrator, or is
                trying to delete their own account.
        """
        self._ensure_admin(actor, "delete staff members")
        if actor.id == id:
            raise AuthorizationError("Administrators cannot delete their own account.")
        known = self._staff.get(id)
        self._gateway.delete_staff(id)
        self._staff.pop(id, None)
        logger.info("staff.deleted", staff_id=id)
        name = known.name if known is not None and known.name else id
        self._bus.publish(StaffDeleted(aggregate_id=id, name=name))

    @staticmethod
    def _ensure_admin(actor: Actor, action: str) -> None:
        if not actor.is_admin:
            raise AuthorizationError(f"Only administrators can {action}.")
