"""Notification repositories package."""

from modules.notifications.repositories.interfaces import INotificationRepository
from modules.notifications.repositories.json_repository import (
    JsonFileNotificationRepository,
)
from modules.notifications.repositories.memory_repository import (
    InMemoryNotificationRepository,
)

__all__ = [
    "INotificationRepository",
    "InMemoryNotificationRepository",
    "JsonFileNotificationRepository",
]
