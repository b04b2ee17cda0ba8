"""Tests for the top-level CLI app."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from focusflow_cli import __version__
from focusflow_cli.commands.utils import get_notification_sink
from focusflow_cli.main import app
from focusflow_cli.services.notification_service import (
    NullNotificationSink,
    TerminalNotificationSink,
)

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    assert "Usage" in result.output


def test_typo_suggests_command():
    result = runner.invoke(app, ["taks"])
    assert result.exit_code == 2
    assert "Did you mean" in result.output
    assert "'tasks'" in result.output


def test_typo_in_subcommand_suggests_command():
    result = runner.invoke(app, ["tasks", "lst"])
    assert result.exit_code == 2
    assert "'list'" in result.output


def test_week_json(patch_workspace):
    runner.invoke(app, ["tasks", "add", "mon", "Plan"])
    runner.invoke(app, ["notes", "add", "idea"])
    result = runner.invoke(app, ["week", "-o", "json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["version"] == 1
    assert data["tasks"][0]["content"] == "Plan"
    assert data["notes"][0]["text"] == "idea"
    assert data["timer"]["mode"] == "focus"


def test_week_board(patch_workspace):
    runner.invoke(app, ["tasks", "add", "mon", "Plan"])
    result = runner.invoke(app, ["week"])
    assert result.exit_code == 0
    assert "Mon 1/3" in result.output
    assert "Sun 0/3" in result.output
    assert "External brain is empty" in result.output


def test_week_without_notes(patch_workspace):
    result = runner.invoke(app, ["week", "--no-notes"])
    assert "External brain" not in result.output


def test_save_failure_is_reported(patch_workspace, gateway):
    gateway.fail_saves = True
    result = runner.invoke(app, ["tasks", "add", "mon", "Offline"])
    assert result.exit_code == 0
    assert "save failed" in result.output


def test_notification_sink_respects_quiet(mock_config_service):
    with patch(
        "focusflow_cli.commands.utils.get_config_service", return_value=mock_config_service
    ):
        assert isinstance(get_notification_sink(quiet=True), NullNotificationSink)
        assert isinstance(get_notification_sink(), TerminalNotificationSink)
        mock_config_service.config.output.quiet_sounds = True
        assert isinstance(get_notification_sink(), NullNotificationSink)
