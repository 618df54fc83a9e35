"""Filtering, sorting and tabular display of tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TextIO

from .model import Priority, Task


@dataclass
class ListOptions:
    """Options that control which tasks are listed and how."""

    project_filter: str = ""
    show_completed: bool = False
    sort_by: str = "id"
    view: str = "basic"


def filter_tasks(tasks: Iterable[Task], options: ListOptions) -> list[Task]:
    """Return the tasks that match the options' filters."""
    wanted = options.project_filter.casefold()
    return [
        task
        for task in tasks
        if (options.show_completed or task.completed_at is None)
        and (not wanted or task.project.casefold() == wanted)
    ]


def sort_tasks(tasks: list[Task], sort_by: str) -> None:
    """Sort tasks in place by 'priority', 'due' or, otherwise, ID."""
    key = sort_by.lower()
    if key == "priority":
        tasks.sort(key=lambda task: task.priority, reverse=True)
    elif key == "due":
        tasks.sort(key=lambda task: (task.due_date is None, task.due_date or 0))
    else:
        tasks.sort(key=lambda task: task.id)


def priority_label(priority: int) -> str:
    """Readable name of a priority; anything unknown reads as Low."""
    if priority == Priority.HIGH:
        return "High"
    if priority == Priority.MEDIUM:
        return "Medium"
    return "Low"


def _date_text(task: Task) -> str:
    return task.due_date.strftime("%Y-%m-%d") if task.due_date else "0001-01-01"


def build_table_data(tasks: Iterable[Task], view: str) -> tuple[list[str], list[list[str]]]:
    """Headers and rows for the 'basic' view or, for any other view, the full one."""
    if view == "basic":
        return ["ID", "Title"], [[str(task.id), task.title] for task in tasks]
    headers = ["ID", "Status", "Priority", "Due Date", "Project", "Title"]
    rows = [
        [
            str(task.id),
            task.status_icon(),
            priority_label(task.priority),
            _date_text(task),
            task.project,
            task.title,
        ]
        for task in tasks
    ]
    return headers, rows


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Align cells into columns separated by at least two spaces."""
    if not headers or not rows:
        return ""
    lines = [headers, *rows]
    widths: dict[int, int] = {}
    for line in lines:
        for column, cell in enumerate(line[:-1]):
            widths[column] = max(widths.get(column, 0), len(cell))
    out = []
    for line in lines:
        padded = [cell.ljust(widths[column] + 2) for column, cell in enumerate(line[:-1])]
        out.append("".join(padded) + (line[-1] if line else "") + "\n")
    return "".join(out)


class DisplayManager:
    """Writes task tables to a text stream."""

    def __init__(self, writer: TextIO) -> None:
        self.writer = writer

    def render_tasks(self, tasks: Iterable[Task], view: str) -> None:
        """Write the tasks as a table in the given view."""
        headers, rows = build_table_data(tasks, view)
        if not rows:
            return
        self.writer.write(format_table(headers, rows))