"""Operating-system alert surfaces.

An ``AlertSurface`` mirrors notifications outside the application.  It
is a best-effort convenience: the dispatcher checks support and
permission before calling it and swallows anything it raises.
"""

from __future__ import annotations

import shutil
import subprocess
from enum import Enum
from typing import Optional, Protocol

import structlog

logger = structlog.get_logger(__name__)


class AlertPermission(str, Enum):
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


class AlertSurface(Protocol):
    def is_supported(self) -> bool: ...

    def permission(self) -> AlertPermission: ...

    def request_permission(self) -> AlertPermission: ...

    def try_show(self, title: str, message: str) -> bool: ...


class NullAlertSurface:
    """Surface for environments with no OS alerts at all."""

    def is_supported(self) -> bool:
        return False

    def permission(self) -> AlertPermission:
        return AlertPermission.DENIED

    def request_permission(self) -> AlertPermission:
        return AlertPermission.DENIED

    def try_show(self, title: str, message: str) -> bool:
        return False


class NotifySendAlertSurface:
    """Desktop notifications through the freedesktop ``notify-send`` tool.

    Supported only when the binary is on ``PATH``.  Permission starts
    ``default`` unless given, and a permission request is granted when
    the surface is supported.
    """

    def __init__(
        self,
        app_name: str = "Order Desk",
        permission: AlertPermission = AlertPermission.DEFAULT,
        binary: Optional[str] = None,
        timeout: float = 5.0,
    ) -> None:
        self._app_name = app_name
        self._permission = permission
        self._binary = binary if binary is not None else shutil.which("notify-send")
        self._timeout = timeout

    def is_supported(self) -> bool:
        return bool(self._binary)

    def permission(self) -> AlertPermission:
        return self._permission

    def request_permission(self) -> AlertPermission:
        if self._permission is AlertPermission.DEFAULT:
            self._permission = (
                AlertPermission.GRANTED if self.is_supported() else AlertPermission.DENIED
            )
        return self._permission

    def try_show(self, title: str, message: str) -> bool:
        if not self.is_supported() or self._permission is not AlertPermission.GRANTED:
            return False
        result = subprocess.run(
            [self._binary, "--app-name", self._app_name, title, message],
            capture_output=True,
            timeout=self._timeout,
            check=False,
        )
        if result.returncode != 0:
            logger.debug("alert.notify_send_failed", returncode=result.returncode)
            return False
        return True
