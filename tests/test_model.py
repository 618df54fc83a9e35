from datetime import datetime, timedelta, timezone

import pytest

from tasktrack.model import Priority, Task


def _future():
    return datetime.now(timezone.utc) + timedelta(days=2)


def _past():
    return datetime.now(timezone.utc) - timedelta(days=2)


def test_past_due_date_is_overdue():
    assert Task(title="a", due_date=_past()).is_overdue() is True


def test_future_due_date_is_not_overdue():
    assert Task(title="a", due_date=_future()).is_overdue() is False


def test_missing_due_date_counts_as_overdue():
    assert Task(title="a").is_overdue() is True


def test_complete_sets_completion_time():
    task = Task(title="a", due_date=_future())
    assert task.completed_at is None
    task.complete()
    assert task.completed_at is not None
    assert task.completed_at <= datetime.now(timezone.utc)


def test_add_time_spent_accumulates():
    task = Task(title="a")
    task.add_time_spent(5)
    assert task.time_spent == 5
    task.add_time_spent(10)
    assert task.time_spent == 5 + 10


@pytest.mark.parametrize(
    "due, completed, icon",
    [
        (_future(), False, "⏳"),
        (_past(), False, "⚠️"),
        (_past(), True, "✅"),
    ],
)
def test_status_icon(due, completed, icon):
    task = Task(title="a", due_date=due)
    if completed:
        task.complete()
    assert task.status_icon() == icon


def test_to_dict_uses_json_field_names():
    data = Task(title="a").to_dict()
    assert set(data) == {
        "id", "title", "description", "project", "priority",
        "due_date", "created_at", "completed_at", "time_spent",
    }


def test_missing_dates_serialise_as_zero_time():
    data = Task(title="a", created_at=None).to_dict()
    assert data["completed_at"] == "0001-01-01T00:00:00Z"
    assert data["due_date"] == data["completed_at"]


def test_round_trip_preserves_fields():
    task = Task(
        id=7,
        title="Report",
        description="quarterly",
        project="work",
        priority=Priority.HIGH,
        due_date=datetime(2025, 6, 3, tzinfo=timezone.utc),
        time_spent=30,
    )
    task.complete()
    restored = Task.from_dict(task.to_dict())
    assert restored == task
    assert restored.priority is Priority.HIGH


def test_from_dict_reads_zero_time_as_none():
    task = Task.from_dict({"id": 1, "title": "x", "completed_at": "0001-01-01T00:00:00Z"})
    assert task.completed_at is None


def test_from_dict_accepts_nanosecond_timestamps():
    task = Task.from_dict({"id": 1, "created_at": "2025-06-03T10:20:30.123456789+02:00"})
    assert task.created_at.microsecond == 123456
    assert task.created_at.utcoffset() == timedelta(hours=2)


def test_from_dict_rejects_bad_timestamp():
    with pytest.raises(ValueError):
        Task.from_dict({"id": 1, "due_date": "not a date"})


def test_str_lists_details():
    task = Task(
        title="Write docs",
        project="work",
        due_date=datetime(2025, 6, 3, tzinfo=timezone.utc),
        time_spent=30,
    )
    text = str(task)
    assert "Title: Write docs\n" in text
    assert "Project: work\n" in text
    assert "Due Date: 2025-06-03\n" in text
    assert "Time Spent: 30 min\n" in text
    assert text.startswith("\nStatus: ")