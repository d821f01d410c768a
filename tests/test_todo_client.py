from __future__ import annotations

import logging

import httpx
import pytest

from persistence.todo_state import TodoRecord
from todo_client import (
    TodoApiClient,
    TodoListSession,
    add_todo,
    delete_todo,
    remaining_count,
    toggle_todo,
)


def test_list_operations():
    todos = add_todo([], "buy milk", now_ms=100)
    todos = add_todo(todos, "  ", now_ms=101)
    todos = add_todo(todos, " bread ", now_ms=102)
    assert todos == [TodoRecord(id=100, text="buy milk"), TodoRecord(id=102, text=" bread ")]
    assert remaining_count(todos) == 2

    toggled = toggle_todo(todos, 100)
    assert [t.completed for t in toggled] == [True, False]
    assert [t.completed for t in todos] == [False, False]
    assert remaining_count(toggled) == 1

    assert toggle_todo(toggled, 999) == toggled
    assert delete_todo(toggled, 100) == [TodoRecord(id=102, text=" bread ")]
    assert delete_todo(toggled, 999) == toggled


def test_add_todo_uses_timestamp_ids():
    todos = add_todo([], "x")
    assert todos[0].id > 1_600_000_000_000


def test_session_against_app(client):
    session = TodoListSession(TodoApiClient(http=client))
    assert session.load() == []

    assert session.add("buy milk", now_ms=1) is True
    assert session.add("   ") is False
    session.add("bread", now_ms=2)
    session.toggle(1)
    assert session.remaining == 1

    assert client.get("/api/todos").json() == [
        {"id": 1, "text": "buy milk", "completed": True},
        {"id": 2, "text": "bread", "completed": False},
    ]

    session.delete(1)
    reloaded = TodoListSession(TodoApiClient(http=client))
    assert [t.id for t in reloaded.load()] == [2]


def test_session_logs_save_errors_and_keeps_local_state(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json=[])
        return httpx.Response(500, json={"error": "Failed to save todos"})

    http = httpx.Client(base_url="http://todo.test", transport=httpx.MockTransport(handler))
    session = TodoListSession(TodoApiClient(http=http))
    session.load()

    with caplog.at_level(logging.ERROR, logger="todo_client"):
        session.add("offline task", now_ms=7)

    assert session.todos == [TodoRecord(id=7, text="offline task")]
    assert "failed to save todos" in caplog.text


def test_session_load_failure_yields_empty_list(caplog):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://todo.test", transport=httpx.MockTransport(handler))
    session = TodoListSession(TodoApiClient(http=http))

    with caplog.at_level(logging.ERROR, logger="todo_client"):
        assert session.load() == []
    assert "failed to load todos" in caplog.text


def test_api_client_closes_only_the_client_it_created():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": 1, "text": "a", "completed": False}])

    shared = httpx.Client(base_url="http://todo.test", transport=httpx.MockTransport(handler))
    with TodoApiClient(http=shared) as api:
        assert api.fetch_todos() == [TodoRecord(id=1, text="a")]
    assert not shared.is_closed
    shared.close()

    with TodoApiClient("http://todo.test") as owned:
        pass
    assert owned._http.is_closed


def test_api_client_requires_a_target():
    with pytest.raises(ValueError):
        TodoApiClient()
