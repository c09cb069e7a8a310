"""Read-only views derived from the flat task collection."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Task


def distinct_boards(tasks: Iterable[Task]) -> list[str]:
    """Return unique non-empty board names in first-seen order."""
    seen: dict[str, None] = {}
    for task in tasks:
        if task.board:
            seen.setdefault(task.board, None)
    return list(seen)


def group_by_board_and_status(
    tasks: Iterable[Task],
    board: str | None,
    statuses: Iterable[str],
) -> dict[str, list[Task]]:
    """Partition the tasks of one board by status.

    Every status in ``statuses`` is present in the result, in the given
    order, even when it has no tasks. Tasks with a status outside
    ``statuses`` are not included.
    """
    groups: dict[str, list[Task]] = {status: [] for status in statuses}
    if not board:
        return groups
    for task in tasks:
        if task.board == board and task.status in groups:
            groups[task.status].append(task)
    return groups


def active_board_selection(boards: list[str], persisted_choice: str | None) -> str | None:
    """Pick the board to show.

    The persisted choice wins if that board still exists; otherwise the
    first board; otherwise None (no boards at all).
    """
    if persisted_choice and persisted_choice in boards:
        return persisted_choice
    if boards:
        return boards[0]
    return None
