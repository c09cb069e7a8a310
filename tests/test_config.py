"""Tests for configuration resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskboard.config import (
    DEFAULT_COLUMNS,
    default_seed,
    load_seed_file,
    parse_columns,
    resolve_config,
)
from taskboard.errors import CorruptStateError
from taskboard.models import Column


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("TASKBOARD_STORE", raising=False)
    monkeypatch.delenv("TASKBOARD_COLUMNS", raising=False)


def test_defaults():
    config = resolve_config()
    assert config.store_dir == Path.home() / ".local" / "share" / "taskboard"
    assert config.columns == DEFAULT_COLUMNS
    assert config.statuses == ["todo", "doing", "done"]
    assert config.seed == default_seed()


def test_default_seed_uses_default_columns():
    statuses = {c.key for c in DEFAULT_COLUMNS}
    assert all(t.status in statuses for t in default_seed())
    assert len({t.id for t in default_seed()}) == len(default_seed())


def test_env_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TASKBOARD_STORE", str(tmp_path))
    monkeypatch.setenv("TASKBOARD_COLUMNS", "backlog,wip:In Progress")

    config = resolve_config()

    assert config.store_dir == tmp_path
    assert config.columns == (Column("backlog", "BACKLOG"), Column("wip", "In Progress"))


def test_explicit_values_beat_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("TASKBOARD_STORE", "/ignored")
    config = resolve_config(store_dir=str(tmp_path), columns="a")
    assert config.store_dir == tmp_path
    assert config.statuses == ["a"]


@pytest.mark.parametrize("raw", ["", " , ", ":Title", "a,a"])
def test_parse_columns_rejects_bad_input(raw: str):
    with pytest.raises(ValueError):
        parse_columns(raw)


def test_seed_file(tmp_path: Path):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps([{"id": 1, "title": "x", "status": "todo", "board": "B"}]))

    config = resolve_config(seed_file=str(seed))

    assert [t.title for t in config.seed] == ["x"]


@pytest.mark.parametrize("content", ["nope", '{"id": 1}'])
def test_bad_seed_file(tmp_path: Path, content: str):
    seed = tmp_path / "seed.json"
    seed.write_text(content)
    with pytest.raises(CorruptStateError):
        load_seed_file(seed)


def test_default_store_dir_follows_home(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_config().store_dir == tmp_path / ".local" / "share" / "taskboard"


def test_seed_file_duplicate_ids(tmp_path: Path):
    seed = tmp_path / "seed.json"
    seed.write_text(json.dumps([
        {"id": 1, "title": "a", "status": "todo", "board": "B"},
        {"id": 1, "title": "b", "status": "todo", "board": "B"},
    ]))
    with pytest.raises(CorruptStateError, match="Duplicate task id 1"):
        load_seed_file(seed)
