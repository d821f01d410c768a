from __future__ import annotations

from pathlib import Path

from settings import get_settings


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    configured = get_settings().data_dir
    if configured:
        return ensure_dir(Path(configured).expanduser())
    return ensure_dir(project_root() / "data")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def kv_dir(data_dir: Path) -> Path:
    return ensure_dir(data_dir / "kv")
