"""Store adapter interface."""

from abc import ABC, abstractmethod

from taskapi.ids import TaskId
from taskapi.models import Task


class TaskStore(ABC):
    """Narrow interface over a task persistence backend.

    Implementations must be safe to share between concurrent requests.
    Lookups raise NotFound when no record matches and StoreError when the
    backend fails; a replace either fully applies or leaves the stored
    record untouched.
    """

    @abstractmethod
    def insert(self, task: Task) -> Task:
        """Persist a task that already carries its id."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, task_id: TaskId) -> Task:
        """Return the task stored under task_id."""
        raise NotImplementedError

    @abstractmethod
    def update_by_id(self, task_id: TaskId, replacement: Task) -> Task:
        """Replace every mutable field of the task stored under task_id."""
        raise NotImplementedError

    @abstractmethod
    def delete_by_id(self, task_id: TaskId) -> None:
        """Remove the task stored under task_id."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Task]:
        """Return every stored task, in backend order."""
        raise NotImplementedError

    def create_schema(self) -> None:
        """Create backing tables if the backend needs them."""

    def ping(self) -> bool:
        """Check whether the backend is reachable."""
        return True

    def close(self) -> None:
        """Release the backend handle."""
