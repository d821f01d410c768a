from __future__ import annotations

import threading
from pathlib import Path


class FileLockRegistry:
    """
    One in-process lock per resolved file path, so writers of different keys
    never wait on each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        resolved = path.resolve()
        with self._guard:
            return self._locks.setdefault(resolved, threading.Lock())


GLOBAL_PATH_LOCKS = FileLockRegistry()
