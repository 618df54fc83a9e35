"""Command-line interface for managing tasks."""

from __future__ import annotations

import argparse
import re
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Sequence, TextIO

from .listing import DisplayManager, ListOptions, filter_tasks, sort_tasks
from .model import Priority, Task
from .store import JsonStore, StoreError, TaskRepository

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class CommandError(Exception):
    """A command could not be carried out."""


class _Parser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting on bad input."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise CommandError(message)


def _parse_ids(values: Sequence[str]) -> list[int]:
    ids = []
    for value in values:
        if not _INTEGER.fullmatch(value):
            raise CommandError(f"invalid task ID: {value}")
        ids.append(int(value))
    return ids


def _single_id(values: Sequence[str]) -> int:
    if len(values) != 1:
        raise CommandError("exactly one task ID must be provided")
    return _parse_ids(values)[0]


def _lookup(store: TaskRepository, task_id: int) -> Task:
    task = store.get_task(task_id)
    if task is None:
        raise CommandError(f"task with ID {task_id} not found")
    return task


def _parse_due(text: str) -> datetime:
    if not _DATE.fullmatch(text):
        raise CommandError(f'invalid date format: "{text}" does not match YYYY-MM-DD')
    try:
        return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise CommandError(f"invalid date format: {exc}") from exc


def _add(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    title = " ".join(args.name)
    if not title:
        raise CommandError("task name cannot be empty")
    if args.due:
        due = _parse_due(args.due)
    else:
        due = datetime.now().astimezone() + timedelta(days=1)
    if not 1 <= args.priority <= 3:
        raise CommandError("priority must be between 1 (Low) and 3 (High)")
    task = Task(
        title=title,
        description=args.description,
        project=args.project,
        priority=Priority(args.priority),
        due_date=due,
    )
    try:
        store.add_task(task)
    except StoreError as exc:
        raise CommandError(f"failed to add task: {exc}") from exc
    out.write(f"Successfully added task: {task.title} (ID: {task.id})\n")


def _do(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    for task_id in _parse_ids(args.ids):
        task = _lookup(store, task_id)
        if args.time > 0:
            task.add_time_spent(args.time)
        task.complete()
        try:
            store.update_task(task)
        except StoreError as exc:
            raise CommandError(f"failed to update task {task_id}: {exc}") from exc
        out.write(f"Completed task {task_id}: {task.title}\n")


def _edit(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    task_id = _single_id(args.ids)
    task = _lookup(store, task_id)
    task.title = args.title
    try:
        store.update_task(task)
    except StoreError as exc:
        raise CommandError(f"failed to update task {task_id}: {exc}") from exc
    out.write(f"Updated task with ID {task_id} to: {task.title}\n")


def _remove(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    for task_id in _parse_ids(args.ids):
        task = _lookup(store, task_id)
        try:
            store.delete_task(task_id)
        except StoreError as exc:
            raise CommandError(f"failed to remove task {task_id}: {exc}") from exc
        out.write(f"Remove task {task_id}: {task.title}\n")


def _show(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    task = _lookup(store, _single_id(args.ids))
    out.write(f"{task}\n")


def _list(store: TaskRepository, args: argparse.Namespace, out: TextIO) -> None:
    tasks = store.list_all_tasks()
    if not tasks:
        out.write("No tasks found.\n")
        return
    options = ListOptions(
        project_filter=args.project,
        show_completed=args.completed,
        sort_by=args.sort,
        view=args.view,
    )
    selected = filter_tasks(tasks, options)
    if not selected:
        out.write("No tasks match the filter criteria.\n")
        return
    sort_tasks(selected, options.sort_by)
    DisplayManager(out).render_tasks(selected, options.view)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every task command."""
    parser = _Parser(prog="task", description="Task is a CLI tool for managing tasks")
    commands = parser.add_subparsers(dest="command", title="commands", parser_class=_Parser)
    raw = argparse.RawDescriptionHelpFormatter

    add = commands.add_parser(
        "add",
        help="Add a new task",
        formatter_class=raw,
        description="Add a new task to your task list.",
        epilog='examples:\n  task add "Complete project report"\n'
        '  task add "Force push to prod" --project work --priority 2 --due 2025-06-03',
    )
    add.add_argument("name", nargs="*", metavar="TASK_NAME")
    add.add_argument("-d", "--description", default="", help="Task description.")
    add.add_argument(
        "-p", "--project", default="work",
        help="Project the task belongs to. For example work or private.",
    )
    add.add_argument(
        "-P", "--priority", type=int, default=1,
        help="Task priority (1=Low, 2=Medium, 3=High)",
    )
    add.add_argument("--due", default="", help="Due date (format: YYYY-MM-DD)")
    add.set_defaults(handler=_add)

    do = commands.add_parser(
        "do",
        help="Mark task(s) as completed",
        formatter_class=raw,
        description="Mark one or more tasks as completed by their IDs.",
        epilog="examples:\n  task do 1\n  task do 1 2 3\n  task do 1 --time 30",
    )
    do.add_argument("ids", nargs="+", metavar="ID")
    do.add_argument("-t", "--time", type=int, default=0,
                    help="Time spent on the task in minutes")
    do.set_defaults(handler=_do)

    edit = commands.add_parser(
        "edit",
        help="Edit task",
        formatter_class=raw,
        description="Edit a task. Right now only title (--title or -t) is supported.",
        epilog='examples:\n  task edit 1 --title "New title"',
    )
    edit.add_argument("ids", nargs="+", metavar="ID")
    edit.add_argument("-t", "--title", default="", help="Edit task title")
    edit.set_defaults(handler=_edit)

    listing = commands.add_parser(
        "list",
        help="List tasks",
        formatter_class=raw,
        description="List tasks with optional filtering and sorting.",
        epilog="examples:\n  task list\n  task list --view full\n  task list -c\n"
        "  task list -p work\n  task list -s priority",
    )
    listing.add_argument("-p", "--project", default="", help="Filter tasks by project")
    listing.add_argument("-c", "--completed", action="store_true",
                         help="Show completed tasks")
    listing.add_argument("-s", "--sort", default="id",
                         help="Sort tasks by: id, priority, or due")
    listing.add_argument("--view", default="basic", help="Set view format: basic or full")
    listing.set_defaults(handler=_list)

    remove = commands.add_parser(
        "remove",
        help="Remove task(s)",
        formatter_class=raw,
        description="Remove one or more tasks totally. Unlike 'task do', removed tasks\n"
        "are not included in any stats in any way.",
        epilog="examples:\n  task remove 1\n  task remove 1 2 3",
    )
    remove.add_argument("ids", nargs="+", metavar="ID")
    remove.set_defaults(handler=_remove)

    show = commands.add_parser("show", help="Show (all) info about a specific task")
    show.add_argument("ids", nargs="+", metavar="ID")
    show.set_defaults(handler=_show)

    return parser


def run(store: TaskRepository, argv: Sequence[str], out: TextIO) -> None:
    """Run one command against the store, writing its output to out."""
    parser = build_parser()
    args = parser.parse_args(list(argv))
    if args.command is None:
        parser.print_help(out)
        return
    args.handler(store, args, out)


def default_storage_path() -> Path:
    """Location of the task file in the user's home directory."""
    return Path.home() / ".task" / "tasks.json"


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the task command."""
    try:
        path = default_storage_path()
    except (RuntimeError, KeyError) as exc:
        print(f"Error getting home directory: {exc}", file=sys.stderr)
        return 1
    try:
        store = JsonStore(path)
    except StoreError as exc:
        print(f"Error initializing storage: {exc}", file=sys.stderr)
        return 1
    try:
        run(store, sys.argv[1:] if argv is None else argv, sys.stdout)
    except CommandError as exc:
        print(f"Error executing command: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())