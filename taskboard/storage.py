"""Persistence: key-value stores and the task collection adapter on top."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .errors import CorruptStateError
from .models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
SHOW_SIDEBAR_KEY = "showSideBar"
ACTIVE_BOARD_KEY = "activeBoard"
LIGHT_THEME_KEY = "light-theme"


class MemoryStore:
    """Key-value store held in a dict. Values are always text."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = str(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data


class DirectoryStore:
    """Key-value store with one UTF-8 text file per key under a directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / key

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(str(value), encoding="utf-8")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def clear(self) -> None:
        if not self.root.is_dir():
            return
        for path in self.root.iterdir():
            if path.is_file() and not path.name.startswith("."):
                path.unlink()

    def __contains__(self, key: str) -> bool:
        return self._path(key).is_file()


def encode_tasks(tasks: list[Task]) -> str:
    """Serialize a task collection to compact JSON text."""
    return json.dumps([t.to_dict() for t in tasks], separators=(",", ":"), ensure_ascii=False)


def decode_tasks(text: str) -> list[Task]:
    """Parse persisted JSON text into tasks.

    Raises CorruptStateError if the text is not a JSON array of task objects.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"Persisted tasks are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptStateError(
            f"Persisted tasks must be a list, got {type(data).__name__}"
        )
    return check_unique_ids([Task.from_dict(raw) for raw in data])


def check_unique_ids(tasks: list[Task]) -> list[Task]:
    """Return ``tasks`` unchanged, or raise CorruptStateError on a repeated id."""
    seen: set[int] = set()
    for task in tasks:
        if task.id in seen:
            raise CorruptStateError(f"Duplicate task id {task.id}")
        seen.add(task.id)
    return tasks


class StorageAdapter:
    """Reads and writes the task collection and UI preferences.

    Every call goes to the underlying store; nothing is cached.

    Args:
        store: Any object with get/set/remove/clear/__contains__
        strict: If True, corrupt task data raises CorruptStateError instead
                of loading as an empty collection
    """

    def __init__(self, store: MemoryStore | DirectoryStore, strict: bool = False) -> None:
        self.store = store
        self.strict = strict

    # ------------------------------------------------------------------
    # Task collection
    # ------------------------------------------------------------------

    def load(self) -> list[Task]:
        """Return the persisted collection, or [] if none exists yet."""
        text = self.store.get(TASKS_KEY)
        if text is None:
            return []
        try:
            return decode_tasks(text)
        except CorruptStateError as e:
            if self.strict:
                raise
            logger.warning("Discarding unreadable task data: %s", e)
            return []

    def save(self, tasks: list[Task]) -> None:
        """Replace the persisted collection with ``tasks``."""
        self.store.set(TASKS_KEY, encode_tasks(tasks))
        logger.debug("Saved %d task(s)", len(tasks))

    def initialize(self, seed: list[Task]) -> bool:
        """Seed storage on first run.

        Returns:
            True if storage was seeded, False if data already existed.
        """
        if TASKS_KEY in self.store:
            logger.debug("Data already exists in storage")
            return False
        self.save(seed)
        self.store.set(SHOW_SIDEBAR_KEY, "true")
        logger.info("Seeded storage with %d task(s)", len(seed))
        return True

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def show_sidebar(self) -> bool:
        return self.store.get(SHOW_SIDEBAR_KEY) == "true"

    def set_show_sidebar(self, show: bool) -> None:
        self.store.set(SHOW_SIDEBAR_KEY, "true" if show else "false")

    def active_board(self) -> str | None:
        """Return the last selected board, or None if unset or unreadable."""
        text = self.store.get(ACTIVE_BOARD_KEY)
        if text is None:
            return None
        try:
            value = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable %s value: %r", ACTIVE_BOARD_KEY, text)
            return None
        if value is not None and not isinstance(value, str):
            logger.warning("Ignoring non-string %s value: %r", ACTIVE_BOARD_KEY, value)
            return None
        return value or None

    def set_active_board(self, board: str | None) -> None:
        self.store.set(ACTIVE_BOARD_KEY, json.dumps(board, ensure_ascii=False))

    def light_theme(self) -> bool:
        return self.store.get(LIGHT_THEME_KEY) == "enabled"

    def set_light_theme(self, enabled: bool) -> None:
        self.store.set(LIGHT_THEME_KEY, "enabled" if enabled else "disabled")

    def clear(self) -> None:
        """Remove every persisted key."""
        self.store.clear()
        logger.info("Cleared all stored data")
