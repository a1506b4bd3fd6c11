"""JSON-file implementation of the notification repository.

The log is one JSON array.  Saves write a sibling temp file and swap it
in with ``os.replace`` so a crash mid-write never leaves half a file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List

import structlog

from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)


class JsonFileNotificationRepository(INotificationRepository):
    """Notification log stored as a JSON array on disk."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> List[Any]:
        if not self._path.exists():
            return []
        log = logger.bind(path=str(self._path))
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.error("notifications.load_failed", error=str(exc))
            return []
        if not isinstance(data, list):
            log.error("notifications.load_failed", error="expected a JSON array")
            return []
        return data

    def save(self, records: List[Dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
