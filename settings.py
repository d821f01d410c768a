from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Deployment / URLs
    app_title: str
    local_base_url: str

    # Logging
    log_level: str
    debug_log_requests: bool

    # Storage binding
    todo_kv: str
    todo_kv_key: str

    # Persistence (serverless-friendly default: off)
    persist_to_disk: bool
    data_dir: str


def get_settings() -> Settings:
    app_title = os.getenv("APP_TITLE", "ToDo App")
    local_base_url = (os.getenv("LOCAL_BASE_URL", "http://127.0.0.1:8000")).rstrip("/")

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    # e.g. "memory", "memory:shared", "disk", "file:/var/lib/todos"
    todo_kv = os.getenv("TODO_KV", "").strip()
    todo_kv_key = os.getenv("TODO_KV_KEY", "todos").strip() or "todos"

    # Serverless filesystems are ephemeral; default off unless explicitly enabled.
    persist_to_disk = _env_bool("PERSIST_TO_DISK", False)
    data_dir = os.getenv("DATA_DIR", "").strip()

    return Settings(
        app_title=app_title,
        local_base_url=local_base_url,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
        todo_kv=todo_kv,
        todo_kv_key=todo_kv_key,
        persist_to_disk=persist_to_disk,
        data_dir=data_dir,
    )
