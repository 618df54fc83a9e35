import io
from datetime import datetime, timedelta, timezone

import pytest

from tasktrack.listing import (
    DisplayManager,
    ListOptions,
    build_table_data,
    filter_tasks,
    format_table,
    priority_label,
    sort_tasks,
)
from tasktrack.model import Priority, Task


def _day(offset):
    return datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(days=offset)


@pytest.fixture
def tasks():
    done = Task(id=3, title="done", project="Work", priority=Priority.LOW, due_date=_day(1))
    done.complete()
    return [
        Task(id=2, title="home chore", project="home", priority=Priority.HIGH, due_date=_day(5)),
        done,
        Task(id=1, title="report", project="work", priority=Priority.MEDIUM, due_date=None),
    ]


def test_filter_hides_completed_by_default(tasks):
    result = filter_tasks(tasks, ListOptions())
    assert all(task.completed_at is None for task in result)
    assert len(result) == len(tasks) - 1


def test_filter_can_show_completed(tasks):
    assert filter_tasks(tasks, ListOptions(show_completed=True)) == tasks


def test_filter_project_is_case_insensitive(tasks):
    result = filter_tasks(tasks, ListOptions(project_filter="WORK", show_completed=True))
    assert sorted(task.id for task in result) == [1, 3]


def test_sort_by_priority_is_descending(tasks):
    sort_tasks(tasks, "Priority")
    assert [task.priority for task in tasks] == sorted((t.priority for t in tasks), reverse=True)


def test_sort_by_due_puts_missing_last(tasks):
    sort_tasks(tasks, "due")
    assert tasks[-1].due_date is None
    dated = [task.due_date for task in tasks[:-1]]
    assert dated == sorted(dated)


@pytest.mark.parametrize("key", ["id", "unknown"])
def test_sort_defaults_to_id(tasks, key):
    sort_tasks(tasks, key)
    assert [task.id for task in tasks] == [1, 2, 3]


@pytest.mark.parametrize(
    "priority, label",
    [(Priority.HIGH, "High"), (Priority.MEDIUM, "Medium"), (Priority.LOW, "Low"), (0, "Low")],
)
def test_priority_label(priority, label):
    assert priority_label(priority) == label


def test_basic_view_table(tasks):
    headers, rows = build_table_data(tasks, "basic")
    assert headers == ["ID", "Title"]
    assert rows[0] == ["2", "home chore"]


def test_full_view_table(tasks):
    headers, rows = build_table_data(tasks, "full")
    assert headers == ["ID", "Status", "Priority", "Due Date", "Project", "Title"]
    assert rows[0][2:] == ["High", "2025-01-06", "home", "home chore"]
    assert rows[1][1] == "✅"
    assert rows[2][3] == "0001-01-01"


def test_format_table_aligns_columns():
    text = format_table(["ID", "Title"], [["1", "Buy milk"], ["10", "Call"]])
    assert text == "ID  Title\n1   Buy milk\n10  Call\n"


def test_format_table_columns_line_up(tasks):
    headers, rows = build_table_data(tasks, "full")
    lines = format_table(headers, rows).splitlines()
    starts = {line.index(title) for line, title in zip(lines, ["Title", *(t.title for t in tasks)])}
    assert len(starts) == 1


def test_format_table_empty():
    assert format_table(["ID"], []) == ""


def test_display_manager_writes_table(tasks):
    out = io.StringIO()
    DisplayManager(out).render_tasks(tasks, "basic")
    lines = out.getvalue().splitlines()
    assert lines[0].startswith("ID")
    assert len(lines) == len(tasks) + 1


def test_display_manager_writes_nothing_for_no_tasks():
    out = io.StringIO()
    DisplayManager(out).render_tasks([], "full")
    assert out.getvalue() == ""