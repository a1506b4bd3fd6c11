"""Unit tests for the OS alert surfaces."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from modules.notifications.alerts import (
    AlertPermission,
    NotifySendAlertSurface,
    NullAlertSurface,
)

pytestmark = pytest.mark.unit


def test_null_surface_is_unsupported():
    surface = NullAlertSurface()
    assert not surface.is_supported()
    assert surface.request_permission() is AlertPermission.DENIED
    assert surface.try_show("t", "m") is False


class TestNotifySend:
    def test_unsupported_without_binary(self):
        with patch("modules.notifications.alerts.shutil.which", return_value=None):
            surface = NotifySendAlertSurface()
        assert not surface.is_supported()
        assert surface.request_permission() is AlertPermission.DENIED

    def test_request_permission_grants_when_supported(self):
        surface = NotifySendAlertSurface(binary="/usr/bin/notify-send")
        assert surface.permission() is AlertPermission.DEFAULT
        assert surface.request_permission() is AlertPermission.GRANTED

    def test_denied_stays_denied(self):
        surface = NotifySendAlertSurface(
            binary="/usr/bin/notify-send", permission=AlertPermission.DENIED
        )
        assert surface.request_permission() is AlertPermission.DENIED
        assert surface.try_show("t", "m") is False

    def test_try_show_runs_notify_send(self):
        surface = NotifySendAlertSurface(
            app_name="Order Desk",
            binary="/usr/bin/notify-send",
            permission=AlertPermission.GRANTED,
        )
        completed = subprocess.CompletedProcess(args=[], returncode=0)

        with patch("modules.notifications.alerts.subprocess.run", return_value=completed) as run:
            assert surface.try_show("Low Stock Alert", "3 products have low stock") is True

        command = run.call_args.args[0]
        assert command == [
            "/usr/bin/notify-send",
            "--app-name",
            "Order Desk",
            "Low Stock Alert",
            "3 products have low stock",
        ]

    def test_non_zero_exit_reports_not_shown(self):
        surface = NotifySendAlertSurface(
            binary="/usr/bin/notify-send", permission=AlertPermission.GRANTED
        )
        failed = subprocess.CompletedProcess(args=[], returncode=1)
        with patch("modules.notifications.alerts.subprocess.run", return_value=failed):
            assert surface.try_show("t", "m") is False
