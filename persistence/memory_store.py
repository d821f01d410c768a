from __future__ import annotations

import threading

from .interfaces import KeyValueNamespace


class MemoryKeyValueNamespace(KeyValueNamespace):
    """
    Process-local namespace. Contents are lost when the process exits.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


# Used when no binding is configured.
FALLBACK_NAMESPACE = MemoryKeyValueNamespace("fallback")

_NAMED_GUARD = threading.Lock()
_NAMED: dict[str, MemoryKeyValueNamespace] = {}


def named_memory_namespace(name: str) -> MemoryKeyValueNamespace:
    """Return the shared in-memory namespace registered under name, creating it on first use."""
    key = name.strip() or "default"
    with _NAMED_GUARD:
        ns = _NAMED.get(key)
        if ns is None:
            ns = MemoryKeyValueNamespace(key)
            _NAMED[key] = ns
        return ns


def reset_memory_namespaces() -> None:
    with _NAMED_GUARD:
        _NAMED.clear()
    FALLBACK_NAMESPACE.clear()
