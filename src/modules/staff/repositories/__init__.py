"""Staff repositories package."""

from modules.staff.repositories.http_repository import StaffHttpGateway
from modules.staff.repositories.interfaces import IStaffGateway

__all__ = ["IStaffGateway", "StaffHttpGateway"]
