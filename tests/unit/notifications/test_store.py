"""Unit tests for NotificationStore."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from freezegun import freeze_time
from structlog.testing import capture_logs

from modules.notifications.constants import NotificationType
from modules.notifications.models import NotificationDraft
from modules.notifications.repositories import InMemoryNotificationRepository
from modules.notifications.store import NotificationStore

pytestmark = pytest.mark.unit


def _draft(title: str = "Order Deleted", message: str = "Order #1 has been successfully deleted"):
    return NotificationDraft(
        type=NotificationType.ORDER, title=title, message=message, action_url="/orders"
    )


class TestAppend:
    @freeze_time("2026-10-17 11:00:00")
    def test_assigns_id_timestamp_and_unread(self, store):
        notification = store.append(_draft())

        assert notification.id
        assert notification.timestamp == datetime(2026, 10, 17, 11, 0, tzinfo=timezone.utc)
        assert notification.read is False
        assert store.unread_count() == 1

    def test_ids_are_unique(self, store):
        ids = {store.append(_draft()).id for _ in range(10)}
        assert len(ids) == 10

    def test_most_recent_first(self, store):
        store.append(_draft(title="first"))
        store.append(_draft(title="second"))
        assert [n.title for n in store.notifications] == ["second", "first"]

    def test_accepts_mapping_and_ignores_caller_identity(self, store):
        notification = store.append(
            {
                "type": "system",
                "title": "Hello",
                "message": "World",
                "id": "chosen-by-caller",
                "read": True,
            }
        )
        assert notification.id != "chosen-by-caller"
        assert notification.read is False

    def test_cap_evicts_oldest(self, store):
        for n in range(1, 52):
            store.append(_draft(title=f"N{n}"))

        titles = [n.title for n in store.notifications]
        assert len(titles) == 50
        assert titles[0] == "N51"
        assert titles[-1] == "N2"
        assert "N1" not in titles
        assert store.unread_count() == 50

    def test_every_append_is_persisted(self, store, notification_repo):
        store.append(_draft())
        store.append(_draft())
        assert notification_repo.save_count == 2
        assert len(notification_repo.load()) == 2


class TestReadState:
    def test_mark_read(self, store):
        notification = store.append(_draft())
        assert store.mark_read(notification.id) is True
        assert store.get(notification.id).read is True
        assert store.unread_count() == 0

    def test_mark_read_twice_changes_nothing(self, store, notification_repo):
        notification = store.append(_draft())
        store.mark_read(notification.id)
        saves = notification_repo.save_count

        assert store.mark_read(notification.id) is False
        assert notification_repo.save_count == saves

    def test_mark_read_unknown_id_is_a_no_op(self, store):
        store.append(_draft())
        assert store.mark_read("does-not-exist") is False
        assert store.unread_count() == 1

    def test_mark_all_read(self, store):
        for _ in range(3):
            store.append(_draft())
        store.mark_read(store.notifications[0].id)

        assert store.mark_all_read() == 2
        assert store.unread_count() == 0
        assert store.mark_all_read() == 0

    def test_unread_count_follows_eviction(self):
        store = NotificationStore(InMemoryNotificationRepository(), capacity=2)
        store.init()
        store.append(_draft())
        store.append(_draft())
        store.append(_draft())
        assert store.unread_count() == 2


class TestClear:
    def test_clear_empties_log_and_repository(self, store, notification_repo):
        store.append(_draft())
        store.append(_draft())

        store.clear()

        assert len(store) == 0
        assert store.unread_count() == 0
        assert notification_repo.load() == []


class TestLifecycle:
    def test_load_restores_persisted_log(self):
        repo = InMemoryNotificationRepository()
        first = NotificationStore(repo)
        first.init()
        kept = first.append(_draft(title="kept"))
        first.mark_read(kept.id)
        first.append(_draft(title="unread"))
        first.teardown()

        second = NotificationStore(repo)
        assert second.load() == 2
        assert [n.title for n in second.notifications] == ["unread", "kept"]
        assert second.unread_count() == 1

    def test_load_drops_unparseable_entries(self):
        repo = InMemoryNotificationRepository(
            [
                {
                    "id": "ok",
                    "type": "order",
                    "title": "Fine",
                    "message": "m",
                    "timestamp": "2026-10-17T10:00:00Z",
                    "read": False,
                },
                {
                    "id": "bad",
                    "type": "order",
                    "title": "Broken",
                    "message": "m",
                    "timestamp": "not a date",
                    "read": False,
                },
            ]
        )
        store = NotificationStore(repo)

        with capture_logs() as logs:
            assert store.load() == 1

        assert store.notifications[0].id == "ok"
        assert any(entry["event"] == "notifications.entries_dropped" for entry in logs)

    def test_load_truncates_to_capacity(self):
        records = [
            {
                "id": f"n{i}",
                "type": "system",
                "title": "t",
                "message": "m",
                "timestamp": "2026-10-17T10:00:00+00:00",
            }
            for i in range(5)
        ]
        store = NotificationStore(InMemoryNotificationRepository(records), capacity=3)
        assert store.load() == 3

    def test_mutations_after_teardown_raise(self, store):
        store.teardown()
        assert store.closed
        with pytest.raises(RuntimeError):
            store.append(_draft())

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValueError):
            NotificationStore(InMemoryNotificationRepository(), capacity=0)


class _FailingRepository(InMemoryNotificationRepository):
    def __init__(self) -> None:
        super().__init__()
        self.failing = True

    def save(self, records):
        if self.failing:
            raise OSError("disk full")
        super().save(records)


class TestWriteFailures:
    def test_append_survives_failed_write(self):
        repo = _FailingRepository()
        store = NotificationStore(repo)
        store.init()

        with capture_logs() as logs:
            notification = store.append(_draft())

        assert store.notifications == (notification,)
        assert store.unread_count() == 1
        failed = [log for log in logs if log["event"] == "notifications.persist_failed"]
        assert failed[0]["log_level"] == "error"
        assert failed[0]["error"] == "disk full"

    def test_next_successful_write_catches_up(self):
        repo = _FailingRepository()
        store = NotificationStore(repo)
        store.init()
        first = store.append(_draft(title="first"))

        repo.failing = False
        assert store.mark_read(first.id) is True

        assert [record["title"] for record in repo.load()] == ["first"]
        assert repo.load()[0]["read"] is True

    def test_mark_all_read_survives_failed_write(self):
        repo = _FailingRepository()
        store = NotificationStore(repo)
        store.init()
        store.append(_draft())
        store.append(_draft())

        assert store.mark_all_read() == 2
        assert store.unread_count() == 0

    def test_teardown_still_raises(self):
        store = NotificationStore(_FailingRepository())
        store.init()

        with pytest.raises(OSError):
            store.teardown()
