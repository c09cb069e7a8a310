"""Tests for the derived board views."""

from __future__ import annotations

from taskboard.models import Task
from taskboard.projection import (
    active_board_selection,
    distinct_boards,
    group_by_board_and_status,
)

STATUSES = ["todo", "doing", "done"]


def _make_task(id, board, status="todo", title=None):
    return Task(id=id, title=title or f"task {id}", status=status, board=board)


def test_distinct_boards_first_seen_order():
    tasks = [
        _make_task(1, "A"),
        _make_task(2, "B"),
        _make_task(3, None),
        _make_task(4, "A"),
    ]
    assert distinct_boards(tasks) == ["A", "B"]


def test_distinct_boards_skips_empty_names():
    tasks = [_make_task(1, ""), _make_task(2, None), _make_task(3, "Z")]
    assert distinct_boards(tasks) == ["Z"]


def test_distinct_boards_empty():
    assert distinct_boards([]) == []


def test_group_has_every_status_key():
    tasks = [_make_task(1, "Home", "todo"), _make_task(2, "Home", "done")]
    groups = group_by_board_and_status(tasks, "Home", STATUSES)

    assert list(groups) == STATUSES
    assert groups["doing"] == []
    assert [t.id for t in groups["todo"]] == [1]
    assert [t.id for t in groups["done"]] == [2]


def test_group_filters_to_board_and_keeps_order():
    tasks = [
        _make_task(1, "Home", "todo"),
        _make_task(2, "Work", "todo"),
        _make_task(3, "Home", "todo"),
        _make_task(4, None, "todo"),
    ]
    groups = group_by_board_and_status(tasks, "Home", STATUSES)
    assert [t.id for t in groups["todo"]] == [1, 3]


def test_group_ignores_unconfigured_status():
    tasks = [_make_task(1, "Home", "blocked"), _make_task(2, "Home", "doing")]
    groups = group_by_board_and_status(tasks, "Home", STATUSES)
    assert "blocked" not in groups
    assert sum(len(v) for v in groups.values()) == 1


def test_group_with_no_board_is_all_empty():
    groups = group_by_board_and_status([_make_task(1, None)], None, STATUSES)
    assert groups == {"todo": [], "doing": [], "done": []}


def test_done_scenario():
    tasks = [_make_task(1, "Home", "done", title="Buy milk")]
    groups = group_by_board_and_status(tasks, "Home", STATUSES)
    assert groups["done"] == tasks
    assert groups["todo"] == []


class TestActiveBoardSelection:
    def test_keeps_persisted_choice(self):
        assert active_board_selection(["A", "B"], "B") == "B"

    def test_falls_back_to_first_board(self):
        assert active_board_selection(["A", "B"], "Gone") == "A"

    def test_no_persisted_choice(self):
        assert active_board_selection(["A"], None) == "A"

    def test_no_boards(self):
        assert active_board_selection([], "A") is None
        assert active_board_selection([], None) is None
