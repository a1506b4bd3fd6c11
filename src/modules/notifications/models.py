"""Notification entities.

``NotificationDraft`` is what producers hand to the dispatcher.  The
store turns it into a ``Notification`` by assigning the id and the
timestamp itself; a producer never chooses either.

Persisted records keep the wire shape
``{id, type, title, message, timestamp, read, actionUrl?}`` with an
ISO-8601 timestamp.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from modules.notifications.constants import NotificationType

_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class NotificationDraft(BaseModel):
    """A notification before it is stored."""

    model_config = _CONFIG

    type: NotificationType
    title: str = Field(min_length=1)
    message: str
    action_url: Optional[str] = None


class Notification(BaseModel):
    """A stored notification.  Only ``read`` ever changes."""

    model_config = _CONFIG

    id: str = Field(min_length=1)
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    action_url: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def assume_utc_when_naive(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
