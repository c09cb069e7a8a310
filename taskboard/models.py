"""Data models for the task board."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import CorruptStateError


@dataclass
class Task:
    """A single task on a board."""

    id: int
    title: str
    status: str
    description: str = ""
    board: str | None = None
    # Optional keys missing from the stored record; not written back while still empty
    _omitted: frozenset[str] = field(default=frozenset(), repr=False, compare=False)

    @property
    def has_board(self) -> bool:
        return bool(self.board)

    def to_dict(self) -> dict:
        """Return the persisted representation of this task."""
        d = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "board": self.board,
        }
        for key in self._omitted:
            if not d[key]:
                del d[key]
        return d

    @classmethod
    def from_dict(cls, raw: object) -> Task:
        """Build a task from its persisted representation.

        Raises CorruptStateError when required fields are missing or have
        the wrong type.
        """
        if not isinstance(raw, dict):
            raise CorruptStateError(f"Task entry is not an object: {raw!r}")
        tid = raw.get("id")
        # bool is an int subclass; reject it explicitly
        if not isinstance(tid, int) or isinstance(tid, bool):
            raise CorruptStateError(f"Task entry has invalid id: {raw!r}")
        title = raw.get("title")
        status = raw.get("status")
        if not isinstance(title, str) or not isinstance(status, str):
            raise CorruptStateError(f"Task {tid} is missing title or status")
        description = raw.get("description") or ""
        # Legacy records may carry "" or no board at all; keep them as stored
        board = raw.get("board")
        if not isinstance(description, str) or not (board is None or isinstance(board, str)):
            raise CorruptStateError(f"Task {tid} has invalid description or board")
        return cls(
            id=tid,
            title=title,
            status=status,
            description=description,
            board=board,
            _omitted=frozenset(k for k in ("description", "board") if k not in raw),
        )


@dataclass(frozen=True)
class Column:
    """A status column: the stored key and the header shown to users."""

    key: str
    title: str


@dataclass
class ViewState:
    """UI context threaded through controller calls.

    Replaces a free-floating "selected board" variable: every controller
    call takes the current state and returns the next one.
    """

    active_board: str | None = None
    show_sidebar: bool = True
    light_theme: bool = False


@dataclass
class BoardView:
    """Everything a UI needs to draw one screen of the board."""

    boards: list[str]
    active_board: str | None
    columns: list[tuple[Column, list[Task]]]
    show_sidebar: bool = True
    light_theme: bool = False

    @property
    def by_status(self) -> dict[str, list[Task]]:
        return {column.key: tasks for column, tasks in self.columns}

    def to_dict(self) -> dict:
        return {
            "boards": list(self.boards),
            "active_board": self.active_board,
            "columns": [
                {
                    "key": column.key,
                    "title": column.title,
                    "tasks": [t.to_dict() for t in tasks],
                }
                for column, tasks in self.columns
            ],
            "show_sidebar": self.show_sidebar,
            "light_theme": self.light_theme,
        }
