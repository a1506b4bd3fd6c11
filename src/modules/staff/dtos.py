"""Staff DTOs.

Input contracts for staff management.  DTOs are immutable
(``frozen=True``) and validated on construction.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, SecretStr, field_validator

from modules.staff.constants import StaffRole


def _check_email(v: str) -> str:
    v = v.strip()
    if "@" not in v or v.startswith("@") or v.endswith("@"):
        raise ValueError("Email address is not valid.")
    return v.lower()


class CreateStaffDTO(BaseModel):
    """Immutable DTO for staff creation.

    ``password`` is a ``SecretStr`` so it never shows up in reprs or logs.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    role: StaffRole = StaffRole.STAFF
    password: SecretStr
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("email")
    @classmethod
    def email_must_look_valid(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < 6:
            raise ValueError("Password must be at least 6 characters.")
        return v

    def to_wire(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "password": self.password.get_secret_value(),
        }
        if self.phone:
            payload["phone"] = self.phone
        return payload


class UpdateStaffDTO(BaseModel):
    """Partial staff update.  Only supplied fields are sent."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[StaffRole] = None
    phone: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_must_look_valid(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_email(v)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)
