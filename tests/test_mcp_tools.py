from __future__ import annotations

import asyncio

from persistence.memory_store import FALLBACK_NAMESPACE


def _texts(r):
    return r["content"][0]["text"] if r.get("content") else ""


def test_mcp_tools_basic_flow(client):
    async def _run():
        import endpoints.mcp_endpoints as mcp

        r = await mcp.list_todos()
        assert r["structuredContent"]["todos"] == []
        assert "No tasks yet" in _texts(r)

        r = await mcp.add_todo("buy milk")
        todos = r["structuredContent"]["todos"]
        assert len(todos) == 1
        assert todos[0]["text"] == "buy milk"
        todo_id = todos[0]["id"]

        r = await mcp.toggle_todo(todo_id)
        assert r["structuredContent"]["todos"][0]["completed"] is True
        assert r["structuredContent"]["remaining"] == 0
        return todo_id

    todo_id = asyncio.run(_run())

    # same storage as the HTTP API
    assert client.get("/api/todos").json()[0]["completed"] is True

    async def _delete():
        import endpoints.mcp_endpoints as mcp

        return await mcp.delete_todo(todo_id)

    r = asyncio.run(_delete())
    assert r["structuredContent"]["todos"] == []
    assert client.get("/api/todos").json() == []


def test_mcp_tools_reject_blank_and_unknown(client):
    async def _run():
        import endpoints.mcp_endpoints as mcp

        r = await mcp.add_todo("   ")
        assert "Invalid input" in _texts(r)
        assert FALLBACK_NAMESPACE.get("todos") is None

        assert "was not found" in _texts(await mcp.toggle_todo(42))
        assert "was not found" in _texts(await mcp.delete_todo(42))

    asyncio.run(_run())
    assert FALLBACK_NAMESPACE.get("todos") is None


def test_mcp_tools_use_disk_binding(sandbox_project, monkeypatch, client):
    monkeypatch.setenv("TODO_KV", "disk")

    async def _run():
        import endpoints.mcp_endpoints as mcp

        await mcp.add_todo("on disk")
        return await mcp.list_todos()

    r = asyncio.run(_run())
    assert [t["text"] for t in r["structuredContent"]["todos"]] == ["on disk"]
    assert (sandbox_project / "data" / "kv" / "todos.json").exists()
    assert FALLBACK_NAMESPACE.get("todos") is None
