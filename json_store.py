from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_text(path: Path) -> str | None:
    """
    Read a stored value from disk.

    Returns None for missing files.
    """
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")


def atomic_write_text(path: Path, value: str) -> None:
    """
    Atomically write a value to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write(value)
    tmp_path.replace(path)


def loads_json(raw: str | None) -> Any | None:
    """
    Parse a JSON document.

    Returns None for missing, empty, or invalid JSON.
    """
    if raw is None or not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return None


def dumps_json(payload: Any) -> str:
    # Compact, matching what a browser's JSON.stringify produces.
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
