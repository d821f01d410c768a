from __future__ import annotations

from typing import Protocol


class KeyValueNamespace(Protocol):
    """
    Minimal key-value binding: text values stored under string keys.

    Shaped after managed KV services (get/put by key), so a hosted binding can
    be attached in place of the local ones.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None when the key is missing."""
        ...

    def put(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        ...
