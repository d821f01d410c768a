from __future__ import annotations

import re
from pathlib import Path

from json_store import atomic_write_text, read_text

from .interfaces import KeyValueNamespace
from .locks import GLOBAL_PATH_LOCKS

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class DiskKeyValueNamespace(KeyValueNamespace):
    """
    Stores each key as its own file under a root directory.

    - Missing keys read as None.
    - Writes atomically.
    """

    def __init__(self, root: Path):
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        safe = _UNSAFE_KEY_CHARS.sub("_", key.strip()) or "_"
        return self._root / f"{safe}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        with GLOBAL_PATH_LOCKS.lock_for(path):
            return read_text(path)

    def put(self, key: str, value: str) -> None:
        path = self.path_for(key)
        with GLOBAL_PATH_LOCKS.lock_for(path):
            atomic_write_text(path, value)
