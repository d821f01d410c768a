from __future__ import annotations

import html

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from settings import get_settings

router = APIRouter(tags=["ui"])

# The page owns the list in memory: every change is applied locally and the
# whole list is POSTed back. Save/load failures only reach the console.
INDEX_HTML = """
<!doctype html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>__TITLE__</title>
    <style>
      body { font-family: system-ui, sans-serif; background: #eef2ff; margin: 0; padding: 2rem; }
      main { max-width: 40rem; margin: 0 auto; }
      h1 { text-align: center; color: #1f2937; }
      form { display: flex; gap: .5rem; margin-bottom: 2rem; }
      form input { flex: 1; padding: .75rem 1rem; border-radius: .5rem; border: 1px solid #d1d5db; }
      form button { padding: .75rem 1.5rem; border: 0; border-radius: .5rem; background: #3b82f6; color: #fff; }
      .card { background: #fff; border-radius: .5rem; box-shadow: 0 4px 12px rgba(0,0,0,.08); padding: 1.5rem; }
      .empty { text-align: center; color: #6b7280; padding: 2rem 0; }
      ul { list-style: none; margin: 0; padding: 0; }
      li { display: flex; align-items: center; gap: .75rem; padding: .75rem; }
      li span { flex: 1; }
      li.done span { text-decoration: line-through; color: #9ca3af; }
      li button { border: 0; background: none; color: #ef4444; cursor: pointer; }
      .footer { margin-top: 1rem; text-align: center; font-size: .875rem; color: #4b5563; }
    </style>
  </head>
  <body>
    <main>
      <h1>__TITLE__</h1>
      <form id="add-form">
        <input id="new-text" type="text" placeholder="Add a new task..." autocomplete="off">
        <button type="submit">Add</button>
      </form>
      <div class="card">
        <p id="empty" class="empty">No tasks yet. Add one above!</p>
        <ul id="list"></ul>
      </div>
      <div id="footer" class="footer" hidden></div>
    </main>
    <script>
      const API = "/api/todos";
      let todos = [];

      async function loadTodos() {
        try {
          const res = await fetch(API);
          const data = await res.json();
          todos = Array.isArray(data) ? data : [];
        } catch (err) {
          console.error("Failed to load todos:", err);
          todos = [];
        }
        render();
      }

      async function saveTodos() {
        try {
          const res = await fetch(API, {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify(todos),
          });
          if (!res.ok) {
            console.error("Failed to save todos:", res.status, await res.text());
          }
        } catch (err) {
          console.error("Failed to save todos:", err);
        }
      }

      function update(next) {
        todos = next;
        render();
        saveTodos();
      }

      function addTodo(text) {
        if (!text.trim()) return false;
        update([...todos, { id: Date.now(), text: text, completed: false }]);
        return true;
      }

      function toggleTodo(id) {
        update(todos.map((t) => (t.id === id ? { ...t, completed: !t.completed } : t)));
      }

      function deleteTodo(id) {
        update(todos.filter((t) => t.id !== id));
      }

      function render() {
        const list = document.getElementById("list");
        const footer = document.getElementById("footer");
        list.replaceChildren();
        document.getElementById("empty").hidden = todos.length > 0;
        for (const todo of todos) {
          const li = document.createElement("li");
          if (todo.completed) li.className = "done";

          const box = document.createElement("input");
          box.type = "checkbox";
          box.checked = todo.completed;
          box.addEventListener("change", () => toggleTodo(todo.id));

          const label = document.createElement("span");
          label.textContent = todo.text;

          const del = document.createElement("button");
          del.textContent = "Delete";
          del.addEventListener("click", () => deleteTodo(todo.id));

          li.append(box, label, del);
          list.append(li);
        }
        const remaining = todos.filter((t) => !t.completed).length;
        footer.hidden = todos.length === 0;
        footer.textContent = remaining + " of " + todos.length + " tasks remaining";
      }

      document.getElementById("add-form").addEventListener("submit", (e) => {
        e.preventDefault();
        const input = document.getElementById("new-text");
        if (addTodo(input.value)) input.value = "";
      });

      loadTodos();
    </script>
  </body>
</html>
""".strip()


@router.get("/")
async def index_page() -> HTMLResponse:
    title = html.escape(get_settings().app_title)
    return HTMLResponse(INDEX_HTML.replace("__TITLE__", title), status_code=200)
