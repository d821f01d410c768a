from __future__ import annotations

import logging
import time
from typing import Sequence

import httpx

from persistence.todo_state import TodoRecord, parse_todos, todos_to_payload

logger = logging.getLogger(__name__)

TODOS_PATH = "/api/todos"


def _now_ms() -> int:
    return int(time.time() * 1000)


# -------------------------------------------------------------------
# List operations (client-side; the server only ever sees whole lists)
# -------------------------------------------------------------------

def add_todo(todos: Sequence[TodoRecord], text: str, *, now_ms: int | None = None) -> list[TodoRecord]:
    """
    Append a new task. Blank text leaves the list unchanged.
    The id is a millisecond timestamp; collisions are not handled.
    """
    if not text.strip():
        return list(todos)
    todo_id = _now_ms() if now_ms is None else int(now_ms)
    return [*todos, TodoRecord(id=todo_id, text=text, completed=False)]


def toggle_todo(todos: Sequence[TodoRecord], todo_id: int) -> list[TodoRecord]:
    return [t.model_copy(update={"completed": not t.completed}) if t.id == todo_id else t for t in todos]


def delete_todo(todos: Sequence[TodoRecord], todo_id: int) -> list[TodoRecord]:
    return [t for t in todos if t.id != todo_id]


def remaining_count(todos: Sequence[TodoRecord]) -> int:
    return sum(1 for t in todos if not t.completed)


# -------------------------------------------------------------------
# HTTP client
# -------------------------------------------------------------------

class TodoApiError(RuntimeError):
    pass


class TodoApiClient:
    """
    Talks to GET/POST /api/todos.

    Pass either a base URL or a ready httpx.Client (a TestClient works too).
    """

    def __init__(self, base_url: str | None = None, *, http: httpx.Client | None = None, timeout: float = 10.0):
        if http is None and base_url is None:
            raise ValueError("base_url or http client is required")
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url or "", timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TodoApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_todos(self) -> list[TodoRecord]:
        resp = self._http.get(TODOS_PATH)
        if resp.status_code != 200:
            raise TodoApiError(f"GET {TODOS_PATH} failed with status {resp.status_code}")
        return parse_todos(resp.json())

    def save_todos(self, todos: Sequence[TodoRecord]) -> None:
        resp = self._http.post(TODOS_PATH, json=todos_to_payload(todos))
        if resp.status_code != 200:
            raise TodoApiError(f"POST {TODOS_PATH} failed with status {resp.status_code}: {resp.text}")


class TodoListSession:
    """
    Owns the in-memory list the way the browser page does: mutate locally,
    then save the whole list. Load/save errors are logged and swallowed so the
    local state always reflects what the user did.
    """

    def __init__(self, api: TodoApiClient):
        self._api = api
        self.todos: list[TodoRecord] = []

    def load(self) -> list[TodoRecord]:
        try:
            self.todos = self._api.fetch_todos()
        except Exception as e:
            logger.error("TODO CLIENT: failed to load todos: %r", e)
            self.todos = []
        return self.todos

    def add(self, text: str, *, now_ms: int | None = None) -> bool:
        if not text.strip():
            return False
        self._update(add_todo(self.todos, text, now_ms=now_ms))
        return True

    def toggle(self, todo_id: int) -> None:
        self._update(toggle_todo(self.todos, todo_id))

    def delete(self, todo_id: int) -> None:
        self._update(delete_todo(self.todos, todo_id))

    @property
    def remaining(self) -> int:
        return remaining_count(self.todos)

    def _update(self, todos: list[TodoRecord]) -> None:
        self.todos = todos
        try:
            self._api.save_todos(self.todos)
        except Exception as e:
            logger.error("TODO CLIENT: failed to save todos: %r", e)
