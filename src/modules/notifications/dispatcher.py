"""Notification dispatcher.

Delivers a draft in two steps: append it to the store (the durable,
user-visible record), then mirror title and message to the OS alert
surface if the environment supports it and permission was granted.
A failing mirror is logged and swallowed; the stored record stands.

Content is not deduplicated.  Producers that can fire repeatedly (the
low-stock scan, for one) batch into a single draft per pass.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog

from modules.notifications.alerts import AlertPermission, AlertSurface, NullAlertSurface
from modules.notifications.models import Notification, NotificationDraft
from modules.notifications.store import NotificationStore

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    def __init__(
        self,
        store: NotificationStore,
        alert_surface: Optional[AlertSurface] = None,
    ) -> None:
        self._store = store
        self._surface: AlertSurface = alert_surface or NullAlertSurface()
        self._permission_requested = False

    @property
    def store(self) -> NotificationStore:
        return self._store

    def initialize(self) -> None:
        """Ask for alert permission once, if it was never decided."""
        if self._permission_requested or not self._surface.is_supported():
            return
        if self._surface.permission() is not AlertPermission.DEFAULT:
            return
        self._permission_requested = True
        try:
            granted = self._surface.request_permission()
        except Exception as exc:  # noqa: BLE001
            logger.warning("alert.permission_request_failed", error=str(exc))
            return
        logger.info("alert.permission_requested", permission=granted.value)

    def notify(self, draft: NotificationDraft | Mapping[str, Any]) -> Notification:
        notification = self._store.append(draft)
        self._mirror(notification)
        return notification

    def _mirror(self, notification: Notification) -> None:
        try:
            if not self._surface.is_supported():
                return
            if self._surface.permission() is not AlertPermission.GRANTED:
                return
            shown = self._surface.try_show(notification.title, notification.message)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "alert.mirror_failed",
                notification_id=notification.id,
                error=str(exc),
            )
            return
        logger.debug("alert.mirrored", notification_id=notification.id, shown=shown)
