from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_storage_env(monkeypatch: pytest.MonkeyPatch):
    """
    Every test starts without a configured binding and with empty in-memory namespaces.
    """
    from persistence.memory_store import reset_memory_namespaces

    for name in ("TODO_KV", "TODO_KV_KEY", "PERSIST_TO_DISK", "DATA_DIR"):
        monkeypatch.delenv(name, raising=False)
    reset_memory_namespaces()
    yield
    reset_memory_namespaces()


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Redirect persistence paths to a temp project directory so tests never touch real ./data.
    """
    import persistence.paths as paths

    def _project_root() -> Path:
        return tmp_path

    def _data_dir() -> Path:
        p = tmp_path / "data"
        p.mkdir(parents=True, exist_ok=True)
        return p

    monkeypatch.setattr(paths, "project_root", _project_root)
    monkeypatch.setattr(paths, "data_dir", _data_dir)
    return tmp_path


@pytest.fixture
def client(sandbox_project: Path):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app())
