from __future__ import annotations

import asyncio
from typing import Protocol, Sequence

from .interfaces import KeyValueNamespace
from .todo_state import DEFAULT_TODOS_KEY, KeyValueTodoStateRepository, TodoRecord


class AsyncTodoRepository(Protocol):
    """
    Whole-list todo persistence. There is no per-item addressing: callers
    read the full list, change it, and write the full list back.
    """

    is_transient: bool

    async def list_todos(self) -> list[TodoRecord]: ...
    async def replace_todos(self, todos: Sequence[TodoRecord]) -> None: ...


class AsyncKeyValueTodoRepository(AsyncTodoRepository):
    """
    Async wrapper around the key-value todo repository.
    Uses asyncio.to_thread to avoid blocking the event loop on storage I/O.
    """

    def __init__(
        self,
        namespace: KeyValueNamespace,
        *,
        key: str = DEFAULT_TODOS_KEY,
        is_transient: bool = False,
    ) -> None:
        self._repo = KeyValueTodoStateRepository(namespace, key)
        self.is_transient = is_transient

    async def list_todos(self) -> list[TodoRecord]:
        return await asyncio.to_thread(self._repo.read_todos)

    async def replace_todos(self, todos: Sequence[TodoRecord]) -> None:
        await asyncio.to_thread(self._repo.write_todos, list(todos))
