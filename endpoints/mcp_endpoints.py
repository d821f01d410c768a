from __future__ import annotations

import asyncio
import logging
from typing import Any, Literal

from typing_extensions import TypedDict

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from persistence.bindings import resolve_todo_namespace
from persistence.repositories import AsyncKeyValueTodoRepository
from persistence.todo_state import TodoRecord, todos_to_payload
from settings import get_settings
from todo_client import add_todo as add_todo_to_list
from todo_client import delete_todo as delete_todo_from_list
from todo_client import remaining_count
from todo_client import toggle_todo as toggle_todo_in_list

logger = logging.getLogger(__name__)

# Set by create_app so tools see the same runtime binding as the HTTP routes.
APP_STATE: Any | None = None

# Tools run read/modify/write; serialize them within this process.
STATE_LOCK = asyncio.Lock()


class ToolTextContent(TypedDict):
    type: Literal["text"]
    text: str


class TodoToolResponse(TypedDict, total=False):
    content: list[ToolTextContent]
    structuredContent: dict[str, Any]


def _repo() -> AsyncKeyValueTodoRepository:
    namespace, transient = resolve_todo_namespace(APP_STATE)
    return AsyncKeyValueTodoRepository(namespace, key=get_settings().todo_kv_key, is_transient=transient)


def _reply(message: str | None = None, *, todos: list[TodoRecord] | None = None) -> TodoToolResponse:
    items = todos if todos is not None else []
    return {
        "content": ([{"type": "text", "text": message}] if message else []),
        "structuredContent": {
            "todos": todos_to_payload(items),
            "remaining": remaining_count(items),
        },
    }


mcp = FastMCP(
    "ToDo MCP",
    stateless_http=True,
    json_response=True,
    # FastMCP auto-enables DNS rebinding protection on localhost, which rejects
    # tunnelled Host headers with 421.
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)


@mcp.tool()
async def list_todos() -> TodoToolResponse:
    """
    Lists all tasks in order.
    """
    todos = await _repo().list_todos()
    if not todos:
        return _reply("No tasks yet.")
    return _reply(f"{remaining_count(todos)} of {len(todos)} tasks remaining.", todos=todos)


@mcp.tool()
async def add_todo(text: str) -> TodoToolResponse:
    """
    Adds a task to the end of the list.
    """
    repo = _repo()
    if not isinstance(text, str) or not text.strip():
        return _reply("Invalid input: `text` must be a non-empty string.", todos=await repo.list_todos())
    async with STATE_LOCK:
        todos = add_todo_to_list(await repo.list_todos(), text)
        await repo.replace_todos(todos)
    logger.info("MCP TODOS: added id=%s transient=%s", todos[-1].id, repo.is_transient)
    return _reply(f'Added "{text}".', todos=todos)


@mcp.tool()
async def toggle_todo(id: int) -> TodoToolResponse:
    """
    Flips the completed flag of a task by id.
    """
    repo = _repo()
    async with STATE_LOCK:
        todos = await repo.list_todos()
        if not any(t.id == id for t in todos):
            return _reply(f"Task {id} was not found.", todos=todos)
        todos = toggle_todo_in_list(todos, id)
        await repo.replace_todos(todos)
    return _reply(f"Toggled task {id}.", todos=todos)


@mcp.tool()
async def delete_todo(id: int) -> TodoToolResponse:
    """
    Deletes a task by id.
    """
    repo = _repo()
    async with STATE_LOCK:
        todos = await repo.list_todos()
        remaining = delete_todo_from_list(todos, id)
        if len(remaining) == len(todos):
            return _reply(f"Task {id} was not found.", todos=todos)
        await repo.replace_todos(remaining)
    return _reply(f"Deleted task {id}.", todos=remaining)
