from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from settings import get_settings

from . import paths
from .disk_store import DiskKeyValueNamespace
from .interfaces import KeyValueNamespace
from .memory_store import FALLBACK_NAMESPACE, named_memory_namespace

logger = logging.getLogger(__name__)

APP_STATE_ATTR = "todo_kv"


def _binding_from_config(value: str) -> KeyValueNamespace | None:
    """
    Build a namespace from a TODO_KV value:

      memory            shared in-memory namespace "default"
      memory:<name>     shared in-memory namespace <name>
      disk              files under <data dir>/kv
      file:<dir>        files under <dir>
    """
    scheme, _, rest = value.partition(":")
    scheme = scheme.strip().lower()
    if scheme == "memory":
        return named_memory_namespace(rest or "default")
    if scheme == "disk" and not rest:
        return DiskKeyValueNamespace(paths.kv_dir(paths.data_dir()))
    if scheme == "file" and rest.strip():
        return DiskKeyValueNamespace(paths.ensure_dir(Path(rest.strip()).expanduser()))
    logger.warning("KV BINDING: unsupported TODO_KV value %r", value)
    return None


def resolve_kv_binding(app_state: Any | None = None) -> KeyValueNamespace | None:
    """
    Locate the key-value binding for the todo list.

    Lookup order: a binding attached to the app state, then the TODO_KV
    setting, then PERSIST_TO_DISK. Returns None when nothing is configured.
    """
    try:
        kv = getattr(app_state, APP_STATE_ATTR, None) if app_state is not None else None
        if kv is not None:
            logger.debug("KV BINDING: found in app state")
            return kv

        settings = get_settings()
        if settings.todo_kv:
            kv = _binding_from_config(settings.todo_kv)
            if kv is not None:
                logger.debug("KV BINDING: found in environment (TODO_KV=%s)", settings.todo_kv)
                return kv

        if settings.persist_to_disk:
            logger.debug("KV BINDING: PERSIST_TO_DISK enabled, using data dir")
            return DiskKeyValueNamespace(paths.kv_dir(paths.data_dir()))

        logger.warning("KV BINDING: TODO_KV binding not found")
        return None
    except Exception as e:
        logger.error("KV BINDING: error resolving binding: %r", e)
        return None


def resolve_todo_namespace(app_state: Any | None = None) -> tuple[KeyValueNamespace, bool]:
    """
    Return (namespace, is_transient). Falls back to process-local memory.
    """
    kv = resolve_kv_binding(app_state)
    if kv is None:
        logger.info("KV BINDING: using transient in-memory storage")
        return FALLBACK_NAMESPACE, True
    return kv, False
