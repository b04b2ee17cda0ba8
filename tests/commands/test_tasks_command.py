"""Unit tests for planner task commands."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from focusflow_cli.main import app

runner = CliRunner()


@pytest.fixture
def live_timer():
    """Replace the full-screen countdown with an immediate pause."""
    display = MagicMock()
    display.run = AsyncMock(return_value="paused")
    with patch("focusflow_cli.commands.timer.TimerDisplay", return_value=display):
        yield display


# ---------------------------------------------------------------------------
# Help flags
# ---------------------------------------------------------------------------


class TestHelpFlags:
    @pytest.mark.parametrize("command", ["add", "list", "move", "focus", "delete"])
    def test_command_help(self, command):
        result = runner.invoke(app, ["tasks", command, "--help"])
        assert result.exit_code == 0


# ---------------------------------------------------------------------------
# Add / list
# ---------------------------------------------------------------------------


class TestAddAndList:
    def test_add_task(self, patch_workspace):
        result = runner.invoke(app, ["tasks", "add", "mon", "Write report"])
        assert result.exit_code == 0
        assert "Monday" in result.output
        assert [t.content for t in patch_workspace.tasks.for_day(0)] == ["Write report"]

    def test_add_by_index(self, patch_workspace):
        result = runner.invoke(app, ["tasks", "add", "4"])
        assert result.exit_code == 0
        assert patch_workspace.tasks.for_day(4)[0].content == ""

    def test_fourth_task_rejected(self, patch_workspace):
        for i in range(3):
            runner.invoke(app, ["tasks", "add", "tue", f"t{i}"])
        result = runner.invoke(app, ["tasks", "add", "tue", "extra"])
        assert result.exit_code == 2
        assert "already has 3 tasks" in result.output
        assert len(patch_workspace.tasks.for_day(1)) == 3

    def test_unknown_day(self, patch_workspace):
        result = runner.invoke(app, ["tasks", "add", "someday", "x"])
        assert result.exit_code == 2
        assert "Unknown day" in result.output

    def test_list_json(self, patch_workspace):
        runner.invoke(app, ["tasks", "add", "wed", "Gym"])
        result = runner.invoke(app, ["tasks", "list", "-o", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["content"] == "Gym"
        assert data[0]["dayIndex"] == 2

    def test_list_one_day(self, patch_workspace):
        runner.invoke(app, ["tasks", "add", "mon", "A"])
        runner.invoke(app, ["tasks", "add", "fri", "B"])
        result = runner.invoke(app, ["tasks", "list", "--day", "fri", "-o", "json"])
        assert [t["content"] for t in json.loads(result.output)] == ["B"]

    def test_list_pretty_empty(self, patch_workspace):
        result = runner.invoke(app, ["tasks", "list"])
        assert result.exit_code == 0
        assert "No tasks planned" in result.output


# ---------------------------------------------------------------------------
# Edit / status / done / delete / move
# ---------------------------------------------------------------------------


class TestChanges:
    @pytest.fixture
    def task_id(self, patch_workspace):
        runner.invoke(app, ["tasks", "add", "mon", "Draft"])
        return patch_workspace.tasks.all()[0].id

    def test_edit(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "edit", task_id[:8], "Final"])
        assert result.exit_code == 0
        assert patch_workspace.tasks.get(task_id).content == "Final"

    def test_status(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "status", task_id, "wip"])
        assert result.exit_code == 0
        assert patch_workspace.tasks.get(task_id).status == "wip"

    def test_invalid_status(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "status", task_id, "blocked"])
        assert result.exit_code == 2

    def test_done_toggles(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "done", task_id])
        assert "Completed" in result.output
        result = runner.invoke(app, ["tasks", "done", task_id])
        assert "Reopened" in result.output
        assert patch_workspace.tasks.get(task_id).status == "todo"

    def test_unknown_task(self, patch_workspace):
        result = runner.invoke(app, ["tasks", "done", "zzzz"])
        assert result.exit_code == 5
        assert "not found" in result.output

    def test_delete_with_yes(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "delete", task_id, "--yes"])
        assert result.exit_code == 0
        assert patch_workspace.tasks.all() == []

    def test_delete_blank_id_rejected(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "delete", "", "--yes"])
        assert result.exit_code == 2
        assert len(patch_workspace.tasks.all()) == 1

    def test_delete_cancelled(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "delete", task_id], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(patch_workspace.tasks.all()) == 1

    def test_move(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "move", task_id, "sun"])
        assert result.exit_code == 0
        assert patch_workspace.tasks.get(task_id).day_index == 6

    def test_move_negative_position_rejected(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "move", task_id, "sun", "--position=-1"])
        assert result.exit_code == 2
        assert patch_workspace.tasks.get(task_id).day_index == 0

    def test_move_into_full_day(self, patch_workspace, task_id):
        for _ in range(3):
            runner.invoke(app, ["tasks", "add", "sat"])
        result = runner.invoke(app, ["tasks", "move", task_id, "sat"])
        assert result.exit_code == 2
        assert patch_workspace.tasks.get(task_id).day_index == 0


# ---------------------------------------------------------------------------
# Focus
# ---------------------------------------------------------------------------


class TestFocus:
    @pytest.fixture
    def task_id(self, patch_workspace):
        runner.invoke(app, ["tasks", "add", "thu", "Deep work"])
        return patch_workspace.tasks.all()[0].id

    def test_focus_no_run_links_task(self, patch_workspace, task_id):
        result = runner.invoke(app, ["tasks", "focus", task_id, "--no-run"])
        assert result.exit_code == 0
        assert "Linked to: Deep work" in result.output
        assert patch_workspace.engine.active_task_id == task_id
        assert patch_workspace.tasks.get(task_id).status == "wip"

    def test_focus_runs_live_timer(self, patch_workspace, task_id, live_timer):
        result = runner.invoke(app, ["tasks", "focus", task_id, "--quiet"])
        assert result.exit_code == 0
        live_timer.run.assert_awaited_once_with(patch_workspace)
        assert "Timer paused" in result.output

    def test_focus_again_pauses(self, patch_workspace, task_id):
        runner.invoke(app, ["tasks", "focus", task_id, "--no-run"])
        result = runner.invoke(app, ["tasks", "focus", task_id])
        assert result.exit_code == 0
        assert "Paused focus" in result.output
        assert not patch_workspace.engine.is_running

    def test_delete_focused_task_unlinks_timer(self, patch_workspace, task_id):
        runner.invoke(app, ["tasks", "focus", task_id, "--no-run"])
        result = runner.invoke(app, ["tasks", "delete", task_id, "-y"])
        assert "unlinked" in result.output
        assert patch_workspace.engine.active_task_id is None
