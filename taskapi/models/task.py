"""Task entity."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone

from taskapi.ids import TaskId


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to timezone-aware UTC.

    Naive timestamps are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Task:
    """A persisted work item.

    Instances are immutable; an update produces a new Task that replaces
    every mutable field of the stored record.
    """

    id: TaskId
    title: str
    description: str
    due_date: datetime
    status: str

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("title must not be empty")
        object.__setattr__(self, "due_date", as_utc(self.due_date))

    def with_id(self, task_id: TaskId) -> "Task":
        """Return a copy of this task carrying the given id."""
        return replace(self, id=task_id)
