"""Task repositories, including one persisted to a JSON file."""

from __future__ import annotations

import json
import threading
from abc import ABC, abstractmethod
from pathlib import Path

from .model import Task


class StoreError(Exception):
    """A repository operation failed."""


class TaskRepository(ABC):
    """Operations a task store provides."""

    @abstractmethod
    def add_task(self, task: Task) -> None:
        """Store a task, assigning it a fresh ID."""

    @abstractmethod
    def list_all_tasks(self) -> list[Task]:
        """Return every stored task."""

    @abstractmethod
    def get_task(self, task_id: int) -> Task | None:
        """Return the task with the given ID, or None."""

    @abstractmethod
    def update_task(self, task: Task) -> None:
        """Replace an existing task; raise StoreError if it is unknown."""

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        """Remove the task with the given ID."""


class JsonStore(TaskRepository):
    """Keeps tasks in memory and writes them to a JSON file on every change."""

    def __init__(self, filename) -> None:
        self.filename = Path(filename)
        self._tasks: dict[int, Task] = {}
        self._lock = threading.RLock()
        self._next_id = 1
        try:
            self.filename.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"failed to create directory: {exc}") from exc
        try:
            self._load()
        except FileNotFoundError:
            return
        self._next_id = max(self._tasks, default=0) + 1

    def _load(self) -> None:
        try:
            text = self.filename.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StoreError(f"failed to load tasks: {exc}") from exc
        try:
            data = json.loads(text)
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            tasks = {int(key): Task.from_dict(value) for key, value in data.items()}
        except (ValueError, TypeError) as exc:
            raise StoreError(f"failed to load tasks: failed to unmarshal tasks: {exc}") from exc
        with self._lock:
            self._tasks.update(tasks)

    def _save(self) -> None:
        with self._lock:
            payload = {str(task_id): task.to_dict() for task_id, task in self._tasks.items()}
        text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
        try:
            self.filename.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"failed to write tasks to file: {exc}") from exc

    def list_all_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def get_task(self, task_id: int) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def add_task(self, task: Task) -> None:
        with self._lock:
            task.id = self._next_id
            self._next_id += 1
            self._tasks[task.id] = task
        self._save()

    def update_task(self, task: Task) -> None:
        with self._lock:
            if task.id not in self._tasks:
                raise StoreError(f"task with ID {task.id} does not exist")
            self._tasks[task.id] = task
        self._save()

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            self._tasks.pop(task_id, None)
        self._save()