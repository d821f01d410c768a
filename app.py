from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    from endpoints.mcp_endpoints import mcp

    async with mcp.session_manager.run():
        yield


def create_app() -> FastAPI:
    load_dotenv("local.env")

    from endpoints import mcp_endpoints
    from endpoints.mcp_endpoints import mcp
    from endpoints.todo_endpoints import router as todo_router
    from endpoints.ui_endpoints import router as ui_router
    from logging_setup import setup_logging
    from settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    mcp.settings.streamable_http_path = "/"

    app = FastAPI(title=settings.app_title, lifespan=lifespan)
    # A hosted key-value binding can be attached here at runtime; see persistence.bindings.
    app.state.todo_kv = None
    mcp_endpoints.APP_STATE = app.state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post("/mcp")
    async def mcp_redirect_post():
        return RedirectResponse(url="/mcp/", status_code=307)

    @app.get("/mcp")
    async def mcp_redirect_get():
        return RedirectResponse(url="/mcp/", status_code=307)

    app.include_router(todo_router)
    app.include_router(ui_router)

    app.mount("/mcp", mcp.streamable_http_app())

    logger.info("APP: created %r (TODO_KV=%r persist_to_disk=%s)", settings.app_title, settings.todo_kv, settings.persist_to_disk)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    from settings import get_settings

    base = get_settings().local_base_url
    host, _, port = base.split("://", 1)[-1].partition(":")
    uvicorn.run(app, host=host or "127.0.0.1", port=int(port or 8000))
