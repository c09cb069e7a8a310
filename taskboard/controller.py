"""UI controller: turns user actions into repository calls and board views.

The controller keeps no mutable selection of its own. Callers pass the
current ViewState in and get the next one back, so the same controller can
drive any front end (the bundled CLI, a test, or another UI).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from .errors import NotFoundError
from .models import BoardView, Column, Task, ViewState
from .projection import active_board_selection, distinct_boards, group_by_board_and_status
from .repository import TaskRepository
from .storage import StorageAdapter

logger = logging.getLogger(__name__)


class BoardController:
    def __init__(
        self,
        repository: TaskRepository,
        storage: StorageAdapter,
        columns: Sequence[Column],
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.columns: list[Column] = list(columns)

    @property
    def statuses(self) -> list[str]:
        return [c.key for c in self.columns]

    def start(self, seed: list[Task]) -> ViewState:
        """Seed storage on first run and return the persisted view state."""
        self.storage.initialize(seed)
        return ViewState(
            active_board=self.storage.active_board(),
            show_sidebar=self.storage.show_sidebar(),
            light_theme=self.storage.light_theme(),
        )

    def render(self, state: ViewState) -> tuple[ViewState, BoardView]:
        """Build the current board view.

        The active board is re-resolved against the current boards list on
        every call, so a board that disappeared (its last task deleted) falls
        back to the first remaining board.
        """
        tasks = self.repository.list_all()
        boards = distinct_boards(tasks)
        active = active_board_selection(boards, state.active_board)
        if active != state.active_board:
            logger.debug("Active board resolved %r -> %r", state.active_board, active)
            state = replace(state, active_board=active)

        groups = group_by_board_and_status(tasks, active, self.statuses)
        view = BoardView(
            boards=boards,
            active_board=active,
            columns=[(column, groups[column.key]) for column in self.columns],
            show_sidebar=state.show_sidebar,
            light_theme=state.light_theme,
        )
        return state, view

    def select_board(self, state: ViewState, board: str) -> ViewState:
        self.storage.set_active_board(board)
        return replace(state, active_board=board)

    def add_task(
        self,
        state: ViewState,
        title: str,
        description: str = "",
        status: str | None = None,
        board: str | None = None,
    ) -> Task:
        """Create a task on ``board`` (default: the active board).

        ValidationError propagates so the UI can reject the submission and
        keep the user's input.
        """
        return self.repository.create(
            title=title,
            description=description,
            status=status,
            board=board or state.active_board,
        )

    def save_task_changes(
        self,
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
    ) -> Task | None:
        """Apply an edit; a task that vanished meanwhile is ignored."""
        try:
            return self.repository.patch(
                task_id, title=title, description=description, status=status
            )
        except NotFoundError:
            logger.warning("Task %d no longer exists; edit ignored", task_id)
            return None

    def delete_task(self, task_id: int) -> None:
        self.repository.remove(task_id)

    def toggle_sidebar(self, state: ViewState, show: bool) -> ViewState:
        self.storage.set_show_sidebar(show)
        return replace(state, show_sidebar=show)

    def toggle_theme(self, state: ViewState, light: bool) -> ViewState:
        self.storage.set_light_theme(light)
        return replace(state, light_theme=light)

    def reset(self) -> None:
        self.storage.clear()
