"""Notification log persistence interface.

The store owns the log's semantics (cap, ordering, read state); a
repository only moves the serialized records in and out of durable
storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class INotificationRepository(ABC):
    """Repository contract for the persisted notification log."""

    @abstractmethod
    def load(self) -> List[Any]:
        """Return the raw persisted records, most recent first.

        Entries are returned as stored; the caller validates them.
        """

    @abstractmethod
    def save(self, records: List[Dict[str, Any]]) -> None:
        """Replace the persisted log with ``records``."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the persisted log."""
