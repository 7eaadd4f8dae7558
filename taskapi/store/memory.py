"""In-process task store."""

import threading

from taskapi.exceptions import NotFound, StoreError
from taskapi.ids import TaskId
from taskapi.models import Task
from taskapi.store.base import TaskStore


class InMemoryTaskStore(TaskStore):
    """Dict-backed store for local runs and tests.

    Contents are lost when the process exits.
    """

    def __init__(self) -> None:
        self._tasks: dict[TaskId, Task] = {}
        self._lock = threading.Lock()

    def insert(self, task: Task) -> Task:
        with self._lock:
            if task.id in self._tasks:
                raise StoreError("Failed to create task")
            self._tasks[task.id] = task
        return task

    def find_by_id(self, task_id: TaskId) -> Task:
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise NotFound("Task not found")
        return task

    def update_by_id(self, task_id: TaskId, replacement: Task) -> Task:
        stored = replacement.with_id(task_id)
        with self._lock:
            if task_id not in self._tasks:
                raise NotFound("Task not found")
            self._tasks[task_id] = stored
        return stored

    def delete_by_id(self, task_id: TaskId) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                raise NotFound("Task not found")

    def find_all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def close(self) -> None:
        with self._lock:
            self._tasks.clear()
