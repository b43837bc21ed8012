"""Command line interface for creating and managing todo lists."""

from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Sequence

import yaml

from .models import Status, TodoItem
from .store import CSVData, PathType, StoreError, new_store
from .table import TabTable

DEFAULT_FILE = "todo.csv"
CONFIG_NAME = ".todo-cli.yaml"

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its add, complete and list commands."""
    parser = argparse.ArgumentParser(
        prog="todo-cli",
        description="Create and manage todo lists",
    )
    _add_global_options(parser, root=True)
    parser.add_argument(
        "-t", "--toggle", action="store_true", help="Help message for toggle"
    )

    commands = parser.add_subparsers(dest="command", metavar="command")

    add = commands.add_parser(
        "add", help="add subcommand adds a new item to your todo list"
    )
    _add_global_options(add, root=False)
    add.add_argument("task", help="text of the task")
    add.add_argument(
        "-p", "--parent", type=int, default=0, dest="parent", help="Parent task id"
    )

    complete = commands.add_parser("complete", help="Complete a todo item")
    _add_global_options(complete, root=False)
    complete.add_argument("id", type=int, help="id of the item to complete")

    listing = commands.add_parser("list", help="Print todo list to terminal")
    _add_global_options(listing, root=False)

    return parser


def _add_global_options(parser: argparse.ArgumentParser, *, root: bool) -> None:
    def default(value: Any) -> Any:
        return value if root else argparse.SUPPRESS

    parser.add_argument(
        "--config",
        default=default(None),
        help=f"config file (default is $HOME/{CONFIG_NAME})",
    )
    parser.add_argument(
        "--json",
        dest="format",
        default=default(""),
        help="todo list format (default csv)",
    )
    parser.add_argument(
        "--file", default=default(DEFAULT_FILE), help="name of todo file"
    )


def load_config(path: PathType | None) -> tuple[dict[str, Any], Path | None]:
    """Read the YAML configuration.

    Without a path, ``.todo-cli.yaml`` in the home directory is used. A file
    that is missing or unreadable yields an empty mapping and no path.
    """
    candidate = Path(path) if path else Path.home() / CONFIG_NAME
    try:
        with open(candidate, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError):
        return {}, None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return {}, None
    return data, candidate


def format_time(value: datetime | None) -> str:
    """Format a timestamp as date and 12-hour clock time; ``None`` gives ''."""
    if value is None:
        return ""
    hour = value.hour % 12 or 12
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{hour:02d}:{value.minute:02d}"
    )


def _now() -> datetime:
    return datetime.now().astimezone()


def add_todo(
    path: PathType, task: str, parent_id: int = 0, now: datetime | None = None
) -> TodoItem:
    """Append a new task to the list stored at ``path`` and return it."""
    store = new_store(path)
    todos = store.load()
    todo = TodoItem(
        id=len(todos) + 1,
        task=task,
        parent_id=parent_id,
        created_at=now if now is not None else _now(),
        status=Status.TODO,
    )
    todos.append(todo)
    store.save(todos)
    return todo


def complete_todo(
    path: PathType, todo_id: int, now: datetime | None = None
) -> list[TodoItem]:
    """Mark every item with ``todo_id`` as done and return those items."""
    store = new_store(path)
    todos = store.load()
    finished = now if now is not None else _now()
    completed = []
    for todo in todos:
        if todo.id == todo_id:
            todo.status = Status.DONE
            todo.done_at = finished
            completed.append(todo)
    store.save(todos)
    return completed


def list_todos(path: PathType, stream: IO[str] | None = None) -> None:
    """Print the list stored at ``path`` as an aligned table."""
    todos = CSVData(os.fspath(path)).load()
    table = TabTable(stream)
    table.add_header("ID", "Task", "Status", "Created", "Due", "Done")
    for todo in todos:
        created = todo.created_at if todo.created_at is not None else _ZERO_TIME
        table.add_line(
            todo.id,
            todo.task,
            str(todo.status),
            format_time(created),
            format_time(todo.due),
            format_time(todo.done_at),
        )
    table.flush()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    _, used = load_config(args.config)
    if used is not None:
        print("Using config file:", used, file=sys.stderr)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "add":
            add_todo(args.file, args.task, args.parent)
        elif args.command == "complete":
            print("complete called")
            complete_todo(args.file, args.id)
        elif args.command == "list":
            list_todos(args.file)
    except StoreError as exc:
        print(f"todo-cli: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())