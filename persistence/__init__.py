from __future__ import annotations

from .bindings import resolve_kv_binding, resolve_todo_namespace
from .disk_store import DiskKeyValueNamespace
from .interfaces import KeyValueNamespace
from .memory_store import FALLBACK_NAMESPACE, MemoryKeyValueNamespace
from .repositories import AsyncKeyValueTodoRepository, AsyncTodoRepository
from .todo_state import (
    InvalidTodosPayload,
    KeyValueTodoStateRepository,
    TodoRecord,
    TodoStateRepository,
    parse_todos,
)

__all__ = [
    "KeyValueNamespace",
    "MemoryKeyValueNamespace",
    "DiskKeyValueNamespace",
    "FALLBACK_NAMESPACE",
    "resolve_kv_binding",
    "resolve_todo_namespace",
    "TodoRecord",
    "InvalidTodosPayload",
    "parse_todos",
    "TodoStateRepository",
    "KeyValueTodoStateRepository",
    "AsyncTodoRepository",
    "AsyncKeyValueTodoRepository",
]
