"""Task records and their JSON representation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any

_ZERO_TIME_TEXT = "0001-01-01T00:00:00Z"
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_TIMESTAMP = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})?$"
)


class Priority(IntEnum):
    """How urgent a task is."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


def _now() -> datetime:
    return datetime.now().astimezone()


def _now_like(moment: datetime) -> datetime:
    return datetime.now(timezone.utc) if moment.tzinfo else datetime.now()


def _format_timestamp(moment: datetime | None) -> str:
    if moment is None:
        return _ZERO_TIME_TEXT
    text = moment.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp: {value!r}")
    match = _TIMESTAMP.match(value)
    if match is None:
        raise ValueError(f"invalid timestamp: {value!r}")
    text = match["base"]
    if match["frac"]:
        text += "." + match["frac"][:6].ljust(6, "0")
    zone = match["zone"]
    if zone:
        text += "+00:00" if zone == "Z" else zone
    moment = datetime.fromisoformat(text)
    if moment.tzinfo is not None and moment == _ZERO_TIME:
        return None
    return moment


def _coerce_priority(value: Any) -> int:
    number = int(value)
    try:
        return Priority(number)
    except ValueError:
        return number


@dataclass
class Task:
    """A single task; absent dates are None."""

    id: int = 0
    title: str = ""
    description: str = ""
    project: str = ""
    priority: int = Priority.LOW
    due_date: datetime | None = None
    created_at: datetime | None = field(default_factory=_now)
    completed_at: datetime | None = None
    time_spent: int = 0

    def is_overdue(self) -> bool:
        """True when the due date lies in the past; a task without one counts as overdue."""
        if self.due_date is None:
            return True
        return self.due_date < _now_like(self.due_date)

    def complete(self) -> None:
        """Mark the task as completed now."""
        self.completed_at = _now()

    def add_time_spent(self, minutes: int) -> None:
        """Add minutes to the time logged on the task."""
        self.time_spent += minutes

    def status_icon(self) -> str:
        """Icon for completed, overdue or pending."""
        if self.completed_at is not None:
            return "✅"
        if self.is_overdue():
            return "⚠️"
        return "⏳"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping of the task."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "project": self.project,
            "priority": int(self.priority),
            "due_date": _format_timestamp(self.due_date),
            "created_at": _format_timestamp(self.created_at),
            "completed_at": _format_timestamp(self.completed_at),
            "time_spent": self.time_spent,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from a mapping produced by to_dict."""
        if not isinstance(data, dict):
            raise ValueError(f"task must be an object, got {type(data).__name__}")
        return cls(
            id=int(data.get("id", 0)),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            project=str(data.get("project", "")),
            priority=_coerce_priority(data.get("priority", 0)),
            due_date=_parse_timestamp(data.get("due_date")),
            created_at=_parse_timestamp(data.get("created_at")),
            completed_at=_parse_timestamp(data.get("completed_at")),
            time_spent=int(data.get("time_spent", 0)),
        )

    def __str__(self) -> str:
        due = self.due_date.strftime("%Y-%m-%d") if self.due_date else "0001-01-01"
        return (
            f"\nStatus: {self.status_icon()}\nTitle: {self.title}\n"
            f"Project: {self.project}\nDue Date: {due}\n"
            f"Time Spent: {self.time_spent} min\n"
        )