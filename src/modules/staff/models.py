"""Staff entities.

``Actor`` is the identity the visibility policy reasons about.  The same
model is used for staff records returned by the remote service.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from modules.staff.constants import StaffRole


class Actor(BaseModel):
    """A staff member, executive or administrator."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(min_length=1)
    name: str = ""
    role: StaffRole
    email: Optional[str] = None
    phone: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("id") and data.get("_id"):
            data = dict(data)
            data["id"] = data["_id"]
        return data

    @property
    def is_admin(self) -> bool:
        return self.role is StaffRole.ADMIN
