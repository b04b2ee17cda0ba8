"""Tests for output formatters."""

import json

import pytest

from focusflow_cli.utils.ui.formatters import (
    format_output,
    format_task_line,
    format_time,
    get_cycle_dots,
    get_progress_bar,
)


class TestFormatTime:
    @pytest.mark.parametrize(
        "seconds,expected",
        [(1500, "25:00"), (59, "00:59"), (0, "00:00"), (-5, "00:00"), (3661, "61:01")],
    )
    def test_format(self, seconds, expected):
        assert format_time(seconds) == expected


class TestCycleDots:
    def test_fresh_cycle_in_focus(self):
        assert get_cycle_dots(0, "focus") == "◉ ○ ○ ○"

    def test_after_two_sessions_on_break(self):
        assert get_cycle_dots(2, "short") == "● ● ○ ○"

    def test_long_break(self):
        assert get_cycle_dots(4, "long") == "● ● ● ●"


def test_progress_bar():
    assert get_progress_bar(50, width=4) == "▓▓░░"


class TestFormatOutput:
    def test_json(self, capsys):
        assert format_output({"a": 1}, "json") is True
        assert json.loads(capsys.readouterr().out) == {"a": 1}

    def test_yaml(self, capsys):
        assert format_output({"mode": "focus"}, "yaml") is True
        assert "mode: focus" in capsys.readouterr().out

    def test_pretty_is_left_to_caller(self, capsys):
        assert format_output({"a": 1}, "pretty") is False
        assert capsys.readouterr().out == ""


class TestTaskLine:
    def test_plain_task(self):
        line = format_task_line({"id": "abcdef123456", "content": "Write", "status": "todo"})
        assert line.plain == "○ Write  #abcdef12"

    def test_untitled_with_chunks_and_focus(self):
        task = {
            "id": "abcdef123456",
            "content": "",
            "status": "wip",
            "chunks": [{"id": "1", "done": True}, {"id": "2", "done": False}],
        }
        plain = format_task_line(task, active_task_id="abcdef123456").plain
        assert "(untitled)" in plain
        assert "[1/2]" in plain
        assert "focusing" in plain
