from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from persistence.bindings import resolve_todo_namespace
from persistence.repositories import AsyncKeyValueTodoRepository, AsyncTodoRepository
from persistence.todo_state import InvalidTodosPayload, parse_todos, todos_to_payload
from settings import get_settings

router = APIRouter(prefix="/api/todos", tags=["todos"])
logger = logging.getLogger(__name__)

SETTINGS = get_settings()
DEBUG_LOG_REQUESTS = SETTINGS.debug_log_requests


def get_todo_repository(request: Request) -> AsyncTodoRepository:
    """
    Resolve storage per request so a binding attached after startup is picked up.
    """
    namespace, transient = resolve_todo_namespace(request.app.state)
    return AsyncKeyValueTodoRepository(namespace, key=get_settings().todo_kv_key, is_transient=transient)


@router.get("")
async def read_todos(repo: AsyncTodoRepository = Depends(get_todo_repository)) -> JSONResponse:
    try:
        todos = await repo.list_todos()
    except Exception as e:
        logger.error("TODOS GET: failed to read todos: %r", e)
        return JSONResponse([])
    if DEBUG_LOG_REQUESTS:
        logger.info("TODOS GET: count=%s transient=%s", len(todos), repo.is_transient)
    return JSONResponse(todos_to_payload(todos))


@router.post("")
async def save_todos(
    request: Request,
    repo: AsyncTodoRepository = Depends(get_todo_repository),
) -> JSONResponse:
    try:
        payload = await request.json()
    except (ValueError, RecursionError) as e:
        logger.info("TODOS POST: rejected unparseable body: %r", e)
        return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

    try:
        todos = parse_todos(payload)
    except InvalidTodosPayload as e:
        logger.info("TODOS POST: rejected payload: %s", e)
        return JSONResponse({"error": "Invalid todos payload"}, status_code=400)

    if DEBUG_LOG_REQUESTS:
        logger.info("TODOS POST: count=%s transient=%s", len(todos), repo.is_transient)

    try:
        await repo.replace_todos(todos)
    except Exception as e:
        logger.error("TODOS POST: failed to save todos: %r", e)
        return JSONResponse({"error": "Failed to save todos"}, status_code=500)
    return JSONResponse({"success": True})
