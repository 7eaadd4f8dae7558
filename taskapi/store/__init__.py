"""Task persistence adapters."""

from taskapi.store.base import TaskStore
from taskapi.store.memory import InMemoryTaskStore
from taskapi.store.sql import SQLAlchemyTaskStore, create_store_engine


__all__ = ["TaskStore", "InMemoryTaskStore", "SQLAlchemyTaskStore", "create_store_engine"]
