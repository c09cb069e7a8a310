"""CLI entry point for taskboard."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from .config import resolve_config
from .controller import BoardController
from .errors import CorruptStateError, ValidationError
from .models import BoardView, Task
from .repository import TaskRepository
from .storage import DirectoryStore, StorageAdapter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Kanban task board kept in a local key-value store.",
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        help="Directory holding the board data (or set TASKBOARD_STORE)",
    )
    parser.add_argument(
        "--columns",
        type=str,
        default=None,
        help="Comma-separated status columns as key:Title "
        "(or set TASKBOARD_COLUMNS). Default: todo,doing,done",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=None,
        help="JSON file of tasks loaded into an empty store on first run",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unreadable stored tasks instead of starting empty",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Show the active board")
    show.add_argument("--board", "-b", default=None, help="Board to show instead of the active one")
    show.add_argument(
        "--output-json",
        type=str,
        default=None,
        help="Also write the board view to a JSON file",
    )

    sub.add_parser("boards", help="List boards")

    select = sub.add_parser("select", help="Make a board the active one")
    select.add_argument("board")

    add = sub.add_parser("add", help="Add a task to a board")
    add.add_argument("title")
    add.add_argument("--description", "-d", default="")
    add.add_argument("--status", "-s", default=None)
    add.add_argument("--board", "-b", default=None, help="Defaults to the active board")

    edit = sub.add_parser("edit", help="Change a task's title, description or status")
    edit.add_argument("task_id", type=int)
    edit.add_argument("--title", "-t", default=None)
    edit.add_argument("--description", "-d", default=None)
    edit.add_argument("--status", "-s", default=None)

    rm = sub.add_parser("rm", help="Delete a task")
    rm.add_argument("task_id", type=int)

    sidebar = sub.add_parser("sidebar", help="Show or hide the board list in 'show'")
    sidebar.add_argument("mode", choices=["show", "hide"])

    theme = sub.add_parser("theme", help="Switch between light and dark theme")
    theme.add_argument("mode", choices=["light", "dark"])

    sub.add_parser("reset", help="Delete all stored data")
    return parser


def format_board(view: BoardView) -> str:
    """Render a board view as plain text."""
    lines: list[str] = []
    if view.show_sidebar:
        lines.append("Boards:")
        for board in view.boards:
            marker = "*" if board == view.active_board else " "
            lines.append(f" {marker} {board}")
        lines.append("")

    if view.active_board is None:
        lines.append("No boards yet. Add a task with --board to create one.")
        return "\n".join(lines)

    lines.append(f"== {view.active_board} ==")
    for column, tasks in view.columns:
        lines.append("")
        lines.append(f"{column.title} ({len(tasks)})")
        for task in tasks:
            lines.append(f"  #{task.id} {task.title}")
            if task.description:
                lines.append(f"      {task.description}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )

    try:
        config = resolve_config(args.store, args.columns, args.seed)
    except (ValueError, CorruptStateError, OSError) as e:
        logging.error("Invalid configuration: %s", e)
        return 1

    storage = StorageAdapter(DirectoryStore(config.store_dir), strict=args.strict)
    repository = TaskRepository(storage, config.statuses)
    controller = BoardController(repository, storage, config.columns)
    logging.debug("Using store %s", config.store_dir)

    if args.command == "reset":
        controller.reset()
        return 0

    try:
        return _dispatch(args, controller, config.seed)
    except CorruptStateError as e:
        logging.error("Stored data is unreadable: %s", e)
        return 1


def _dispatch(args: argparse.Namespace, controller: BoardController, seed: list[Task]) -> int:
    state = controller.start(seed)

    if args.command == "show":
        if args.board:
            state = replace(state, active_board=args.board)
        state, view = controller.render(state)
        if args.board and view.active_board != args.board:
            logging.error("Board not found: %s", args.board)
            return 1
        print(format_board(view))
        if args.output_json:
            Path(args.output_json).write_text(json.dumps(view.to_dict(), indent=2))
            logging.info("Board written to %s", args.output_json)
        return 0

    if args.command == "boards":
        state, view = controller.render(state)
        for board in view.boards:
            marker = "*" if board == view.active_board else " "
            print(f"{marker} {board}")
        return 0

    if args.command == "select":
        _, view = controller.render(state)
        if args.board not in view.boards:
            logging.error("Board not found: %s", args.board)
            return 1
        controller.select_board(state, args.board)
        return 0

    if args.command == "add":
        # Resolve the active board first so a stale selection is not used
        state, _ = controller.render(state)
        try:
            task = controller.add_task(
                state,
                title=args.title,
                description=args.description,
                status=args.status,
                board=args.board,
            )
        except ValidationError as e:
            logging.error("Task rejected: %s", e)
            return 1
        if task.board is None:
            logging.warning("Task %d has no board and will not be listed", task.id)
        print(f"Created task #{task.id} in {task.status}")
        return 0

    if args.command == "edit":
        if args.title is None and args.description is None and args.status is None:
            logging.error("Nothing to change; pass --title, --description or --status")
            return 1
        try:
            task = controller.save_task_changes(
                args.task_id,
                title=args.title,
                description=args.description,
                status=args.status,
            )
        except ValidationError as e:
            logging.error("Edit rejected: %s", e)
            return 1
        return 0 if task is not None else 1

    if args.command == "rm":
        controller.delete_task(args.task_id)
        return 0

    if args.command == "sidebar":
        controller.toggle_sidebar(state, args.mode == "show")
        return 0

    if args.command == "theme":
        controller.toggle_theme(state, args.mode == "light")
        return 0

    logging.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
