"""In-memory notification repository for ephemeral sessions and tests."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from modules.notifications.repositories.interfaces import INotificationRepository


class InMemoryNotificationRepository(INotificationRepository):
    def __init__(self, records: Optional[List[Any]] = None) -> None:
        self._records: List[Any] = copy.deepcopy(records or [])
        self.save_count = 0

    def load(self) -> List[Any]:
        return copy.deepcopy(self._records)

    def save(self, records: List[Dict[str, Any]]) -> None:
        self._records = copy.deepcopy(records)
        self.save_count += 1

    def clear(self) -> None:
        self._records = []
