"""Configuration: column definitions, seed data, and store location."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from .errors import CorruptStateError
from .models import Column, Task
from .storage import check_unique_ids

DEFAULT_COLUMNS: tuple[Column, ...] = (
    Column("todo", "TODO"),
    Column("doing", "DOING"),
    Column("done", "DONE"),
)


def default_store_dir() -> Path:
    """Per-user data directory under ~/.local/share."""
    return Path.home() / ".local" / "share" / "taskboard"


# Loaded into an empty store on first run
INITIAL_DATA: tuple[dict, ...] = (
    {
        "id": 1,
        "title": "Launch Epic Career",
        "description": "Create a killer resume and apply for jobs.",
        "status": "todo",
        "board": "Launch Career",
    },
    {
        "id": 2,
        "title": "Practice interview questions",
        "description": "",
        "status": "doing",
        "board": "Launch Career",
    },
    {
        "id": 3,
        "title": "Finish portfolio site",
        "description": "Deploy the static build.",
        "status": "done",
        "board": "Launch Career",
    },
    {
        "id": 4,
        "title": "Plan weekly meals",
        "description": "",
        "status": "todo",
        "board": "Roadmap",
    },
)


@dataclass
class TaskboardConfig:
    """Resolved settings for one run."""

    store_dir: Path = field(default_factory=default_store_dir)
    columns: tuple[Column, ...] = DEFAULT_COLUMNS
    seed: list[Task] = field(default_factory=lambda: default_seed())

    @property
    def statuses(self) -> list[str]:
        return [c.key for c in self.columns]


def default_seed() -> list[Task]:
    return [Task.from_dict(dict(raw)) for raw in INITIAL_DATA]


def parse_columns(raw: str) -> tuple[Column, ...]:
    """Parse a comma-separated ``key:Title`` list (title optional).

    >>> parse_columns("todo:To Do, review")
    (Column(key='todo', title='To Do'), Column(key='review', title='REVIEW'))
    """
    columns: list[Column] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        key, _, title = part.partition(":")
        key = key.strip()
        if not key:
            raise ValueError(f"Empty column key in {raw!r}")
        if any(c.key == key for c in columns):
            raise ValueError(f"Duplicate column key {key!r}")
        columns.append(Column(key, title.strip() or key.upper()))
    if not columns:
        raise ValueError("At least one column is required")
    return tuple(columns)


def load_seed_file(path: str | Path) -> list[Task]:
    """Read a JSON array of tasks to use as the first-run seed."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"Seed file {p} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptStateError(f"Seed file {p} must contain a JSON array")
    return check_unique_ids([Task.from_dict(raw) for raw in data])


def resolve_config(
    store_dir: str | None = None,
    columns: str | None = None,
    seed_file: str | None = None,
) -> TaskboardConfig:
    """Build a config from explicit values, then environment, then defaults.

    Environment:
        TASKBOARD_STORE: directory holding the stored keys
        TASKBOARD_COLUMNS: column list in ``parse_columns`` format
    """
    store_dir = store_dir or os.environ.get("TASKBOARD_STORE")
    columns = columns or os.environ.get("TASKBOARD_COLUMNS")

    config = TaskboardConfig()
    if store_dir:
        config.store_dir = Path(store_dir).expanduser()
    if columns:
        config.columns = parse_columns(columns)
    if seed_file:
        config.seed = load_seed_file(seed_file)
    return config
