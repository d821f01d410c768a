from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence

from pydantic import BaseModel, StrictBool, StrictInt, StrictStr, TypeAdapter, ValidationError

from json_store import dumps_json, loads_json

from .interfaces import KeyValueNamespace

logger = logging.getLogger(__name__)

DEFAULT_TODOS_KEY = "todos"


class TodoRecord(BaseModel):
    """
    One task. Ids are millisecond timestamps generated by the client;
    uniqueness is not enforced.
    """

    id: StrictInt
    text: StrictStr
    completed: StrictBool = False


class InvalidTodosPayload(ValueError):
    """Raised when a payload is not a JSON array of tasks."""


_TODO_LIST = TypeAdapter(list[TodoRecord])


def parse_todos(payload: Any) -> list[TodoRecord]:
    if not isinstance(payload, list):
        raise InvalidTodosPayload("todos payload must be a JSON array")
    try:
        return _TODO_LIST.validate_python(payload)
    except ValidationError as e:
        raise InvalidTodosPayload(f"invalid todo item: {e.error_count()} error(s)") from e


def todos_to_payload(todos: Sequence[TodoRecord]) -> list[dict[str, Any]]:
    return [t.model_dump(mode="json") for t in todos]


def dump_todos(todos: Sequence[TodoRecord]) -> str:
    return dumps_json(todos_to_payload(todos))


class TodoStateRepository(Protocol):
    def read_todos(self) -> list[TodoRecord]:
        ...

    def write_todos(self, todos: Sequence[TodoRecord]) -> None:
        ...


class KeyValueTodoStateRepository(TodoStateRepository):
    """
    Keeps the whole list as a single JSON array under one key.

    Reads never fail (missing or unreadable data reads as an empty list);
    write failures are logged and re-raised.
    """

    def __init__(self, namespace: KeyValueNamespace, key: str = DEFAULT_TODOS_KEY):
        self._namespace = namespace
        self._key = key

    def read_todos(self) -> list[TodoRecord]:
        try:
            raw = self._namespace.get(self._key)
        except Exception as e:
            logger.error("TODOS READ: failed to read key %r: %r", self._key, e)
            return []
        data = loads_json(raw)
        if data is None:
            return []
        try:
            return parse_todos(data)
        except InvalidTodosPayload as e:
            logger.error("TODOS READ: ignoring stored value under %r: %s", self._key, e)
            return []

    def write_todos(self, todos: Sequence[TodoRecord]) -> None:
        try:
            self._namespace.put(self._key, dump_todos(todos))
        except Exception as e:
            logger.error("TODOS WRITE: failed to write key %r: %r", self._key, e)
            raise
