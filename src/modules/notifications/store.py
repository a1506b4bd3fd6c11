"""Capacity-bounded notification log.

The log is ordered most recent first and never holds more than
``capacity`` records; appending past the cap evicts the oldest.  The
unread count is always derived from the live records, so eviction or
clearing can never leave it out of step.

Every mutation is written through to the repository.  A failed write
is logged and the in-memory log stays authoritative; the next successful
write catches the file up.  The store is owned by one session and is not
shared between threads.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Tuple
from uuid import uuid4

import structlog
from pydantic import ValidationError

from modules.notifications.constants import DEFAULT_CAPACITY
from modules.notifications.models import Notification, NotificationDraft
from modules.notifications.repositories.interfaces import INotificationRepository

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationStore:
    """Append-only notification log with read state.

    Lifecycle: ``init()`` starts an empty log, ``load()`` restores the
    persisted one, ``persist()`` writes it out, ``teardown()`` writes it
    and closes the store.  A closed store rejects further mutations.
    """

    def __init__(
        self,
        repository: INotificationRepository,
        capacity: int = DEFAULT_CAPACITY,
        clock: Optional[Clock] = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._repo = repository
        self._capacity = capacity
        self._clock = clock or _utcnow
        self._records: List[Notification] = []
        self._closed = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> None:
        self._records = []
        self._closed = False

    def load(self) -> int:
        """Restore the persisted log and return the number of records kept.

        Entries that fail to parse (most often an unreadable timestamp)
        are dropped one by one; the rest of the log still loads.
        """
        raw_records = self._repo.load()
        records: List[Notification] = []
        dropped = 0
        for raw in raw_records:
            try:
                records.append(Notification.model_validate(raw))
            except ValidationError:
                dropped += 1
        if dropped:
            logger.warning("notifications.entries_dropped", dropped=dropped)

        self._records = records[: self._capacity]
        self._closed = False
        logger.info(
            "notifications.loaded",
            count=len(self._records),
            unread=self.unread_count(),
        )
        return len(self._records)

    def persist(self) -> None:
        self._repo.save([record.to_record() for record in self._records])

    def teardown(self) -> None:
        if self._closed:
            return
        self.persist()
        self._closed = True
        logger.info("notifications.closed", count=len(self._records))

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def capacity(self) -> int:
        return self._capacity

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def append(self, draft: NotificationDraft | Mapping[str, Any]) -> Notification:
        """Store a new unread notification at the head of the log.

        The id and timestamp are assigned here.  Any ``id``,
        ``timestamp`` or ``read`` carried by a mapping is ignored.
        """
        self._ensure_open()
        if not isinstance(draft, NotificationDraft):
            draft = NotificationDraft.model_validate(draft)

        notification = Notification(
            id=str(uuid4()),
            type=draft.type,
            title=draft.title,
            message=draft.message,
            action_url=draft.action_url,
            timestamp=self._clock(),
            read=False,
        )
        evicted = max(0, len(self._records) + 1 - self._capacity)
        self._records = [notification, *self._records][: self._capacity]
        self._write_through()

        logger.info(
            "notification.appended",
            notification_id=notification.id,
            notification_type=notification.type.value,
            evicted=evicted,
        )
        return notification

    def mark_read(self, notification_id: str) -> bool:
        """Mark one notification read.  Returns ``True`` if it changed."""
        self._ensure_open()
        for index, record in enumerate(self._records):
            if record.id != notification_id:
                continue
            if record.read:
                return False
            self._records[index] = record.model_copy(update={"read": True})
            self._write_through()
            return True
        logger.debug("notification.mark_read_unknown", notification_id=notification_id)
        return False

    def mark_all_read(self) -> int:
        """Mark every notification read in one update.  Returns how many changed."""
        self._ensure_open()
        changed = sum(1 for record in self._records if not record.read)
        if not changed:
            return 0
        self._records = [
            record if record.read else record.model_copy(update={"read": True})
            for record in self._records
        ]
        self._write_through()
        logger.info("notifications.all_read", changed=changed)
        return changed

    def clear(self) -> None:
        self._ensure_open()
        self._records = []
        self._repo.clear()
        logger.info("notifications.cleared")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def unread_count(self) -> int:
        return sum(1 for record in self._records if not record.read)

    @property
    def notifications(self) -> Tuple[Notification, ...]:
        """Snapshot of the log, most recent first."""
        return tuple(self._records)

    def get(self, notification_id: str) -> Optional[Notification]:
        for record in self._records:
            if record.id == notification_id:
                return record
        return None

    def __len__(self) -> int:
        return len(self._records)

    def _write_through(self) -> None:
        try:
            self.persist()
        except OSError as exc:
            logger.error(
                "notifications.persist_failed",
                error=str(exc),
                count=len(self._records),
            )

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("NotificationStore has been torn down.")
