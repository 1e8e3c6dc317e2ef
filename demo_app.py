"""Demo FastAPI application with htmx middleware.

A small in-memory todo list driven by htmx.
Run with: python demo_app.py
Then open http://localhost:8000 in a browser.
"""

import html
from uuid import UUID, uuid4

import uvicorn
from fastapi import Depends, FastAPI, Form
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from htmx_middleware import Htmx, HtmxASGIMiddleware, HtmxConfig, SwapType, TriggerType, get_htmx
from htmx_middleware.observability.logging import configure_logging

configure_logging(level="INFO", json_output=False)

app = FastAPI(
    title="htmx Middleware Demo",
    description="Todo list showing htmx request and response headers",
    version="0.1.0",
)

app.add_middleware(HtmxASGIMiddleware, config=HtmxConfig())


class Todo(BaseModel):
    id: UUID
    text: str
    done: bool = False


todos: dict[UUID, Todo] = {}

PAGE = """<!DOCTYPE html>
<html>
    <head>
        <title>htmx todo</title>
        <script src="https://unpkg.com/htmx.org@2.0.6"></script>
    </head>
    <body hx-boost="true">
        <form hx-post="/todos" hx-target="#todos">
            <input name="text" placeholder="What needs doing?">
        </form>
        <div id="message"></div>
        {todos}
    </body>
    <script>
        document.body.addEventListener("message", (e) => {{
            document.getElementById("message").textContent = e.detail.value;
        }});
    </script>
</html>
"""


def render_todos() -> str:
    items = "".join(
        f'<li><input type="checkbox" hx-put="/todos/{todo.id}" name="done" '
        f'{"checked" if todo.done else ""} hx-target="#todos">'
        f"{html.escape(todo.text)} "
        f'<button hx-delete="/todos/{todo.id}" hx-target="#todos">x</button></li>'
        for todo in todos.values()
    )
    return f'<ul id="todos">{items}</ul>'


# Endpoints
@app.get("/", response_class=HTMLResponse)
async def index(htmx: Htmx = Depends(get_htmx)):
    """Full page for browsers, the list fragment for htmx requests."""
    if htmx.is_htmx and not htmx.boosted:
        return render_todos()
    return PAGE.format(todos=render_todos())


@app.post("/todos", response_class=HTMLResponse)
async def create_todo(text: str = Form(...), htmx: Htmx = Depends(get_htmx)):
    """Add a todo and tell the client which one was created."""
    todo = Todo(id=uuid4(), text=text)
    todos[todo.id] = todo

    htmx.trigger_event("message", f"Added {todo.text}")
    htmx.trigger_event("todo-created", todo, TriggerType.AFTER_SWAP)
    htmx.reswap(SwapType.OUTER_HTML)
    return render_todos()


@app.put("/todos/{todo_id}", response_class=HTMLResponse)
async def update_todo(
    todo_id: UUID,
    done: str | None = Form(None),
    htmx: Htmx = Depends(get_htmx),
):
    """Toggle a todo."""
    todo = todos.get(todo_id)
    if todo is None:
        htmx.redirect_with_swap("/")
        return ""

    todo.done = done is not None
    htmx.trigger_event("message", f"{todo.text} is {'done' if todo.done else 'pending'}")
    htmx.reswap(SwapType.OUTER_HTML)
    return render_todos()


@app.delete("/todos/{todo_id}", response_class=HTMLResponse)
async def delete_todo(todo_id: UUID, htmx: Htmx = Depends(get_htmx)):
    """Delete a todo, firing events at every lifecycle stage."""
    todo = todos.pop(todo_id, None)
    if todo is not None:
        htmx.trigger_event("message", f"Deleted {todo.text}")
        htmx.trigger_event("deleted")
        htmx.trigger_event("message", "List settled", TriggerType.AFTER_SETTLE)
    htmx.reswap(SwapType.OUTER_HTML)
    return render_todos()


if __name__ == "__main__":
    print("=" * 60)
    print("htmx Middleware Demo Server")
    print("=" * 60)
    print("\nStarting server at http://localhost:8000")
    print("\nPress Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
