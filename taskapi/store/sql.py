"""SQLAlchemy task store."""

import logging
import uuid
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import DateTime, Engine, String, Text, Uuid, delete, make_url, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from taskapi.exceptions import NotFound, StoreError
from taskapi.ids import TaskId
from taskapi.models import Task
from taskapi.store.base import TaskStore


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class TaskRecord(Base):
    """Row layout of the tasks table."""

    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<TaskRecord {self.id.hex}>"


def create_store_engine(url: str, timeout: float | None = None, **options: Any) -> Engine:
    """Create an engine whose backend calls are bounded by timeout.

    The timeout caps waiting for a pooled connection and, where the
    driver supports it, each statement.

    Args:
        url: SQLAlchemy database URL.
        timeout: Per-call limit in seconds, or None for driver defaults.
        **options: Extra create_engine() keyword arguments.

    Returns:
        Configured SQLAlchemy Engine.
    """
    backend = make_url(url).get_backend_name()
    if timeout is not None:
        connect_args = dict(options.pop("connect_args", {}))
        if backend == "postgresql":
            connect_args.setdefault("options", f"-c statement_timeout={int(timeout * 1000)}")
            options.setdefault("pool_timeout", timeout)
        elif backend == "sqlite":
            # sqlite3 busy timeout; in-memory pools reject pool_timeout
            connect_args.setdefault("timeout", timeout)
        else:
            options.setdefault("pool_timeout", timeout)
        options["connect_args"] = connect_args

    # Looked up at call time so telemetry instrumentation of create_engine applies
    return sa.create_engine(url, **options)


def _to_record(task: Task) -> TaskRecord:
    return TaskRecord(
        id=task.id,
        title=task.title,
        description=task.description,
        due_date=task.due_date,
        status=task.status,
    )


def _to_task(record: TaskRecord) -> Task:
    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        due_date=record.due_date,
        status=record.status,
    )


class SQLAlchemyTaskStore(TaskStore):
    """Task store over a relational database.

    Every call runs in its own short transaction, so one instance can be
    shared by all request threads.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def insert(self, task: Task) -> Task:
        try:
            with self._sessions.begin() as session:
                session.add(_to_record(task))
        except SQLAlchemyError as exc:
            raise StoreError("Failed to create task") from exc
        return task

    def find_by_id(self, task_id: TaskId) -> Task:
        try:
            with self._sessions() as session:
                record = session.get(TaskRecord, task_id)
                task = _to_task(record) if record else None
        except SQLAlchemyError as exc:
            raise StoreError("Failed to fetch task") from exc

        if task is None:
            raise NotFound("Task not found")
        return task

    def update_by_id(self, task_id: TaskId, replacement: Task) -> Task:
        # Single UPDATE statement: all columns change together or none do
        statement = (
            update(TaskRecord)
            .where(TaskRecord.id == task_id)
            .values(
                title=replacement.title,
                description=replacement.description,
                due_date=replacement.due_date,
                status=replacement.status,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            with self._sessions.begin() as session:
                matched = session.execute(statement).rowcount
        except SQLAlchemyError as exc:
            raise StoreError("Failed to update task") from exc

        if matched == 0:
            raise NotFound("Task not found")
        return replacement.with_id(task_id)

    def delete_by_id(self, task_id: TaskId) -> None:
        statement = delete(TaskRecord).where(TaskRecord.id == task_id).execution_options(synchronize_session=False)
        try:
            with self._sessions.begin() as session:
                matched = session.execute(statement).rowcount
        except SQLAlchemyError as exc:
            raise StoreError("Failed to delete task") from exc

        if matched == 0:
            raise NotFound("Task not found")

    def find_all(self) -> list[Task]:
        try:
            with self._sessions() as session:
                return [_to_task(record) for record in session.scalars(select(TaskRecord))]
        except SQLAlchemyError as exc:
            raise StoreError("Failed to list tasks") from exc

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    def close(self) -> None:
        self.engine.dispose()
