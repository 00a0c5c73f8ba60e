from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import lsdb` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

LSDB_ENV_VARS = (
    "LSDB_STORAGE",
    "LSDB_DATA_DIR",
    "LSDB_KEY_PREFIX",
    "LSDB_JSON_INDENT",
    "LSDB_DEBUG_LOG_QUERIES",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in LSDB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path: Path):
    from lsdb.settings import Settings

    return Settings(
        storage="memory",
        data_dir=tmp_path / "data",
        key_prefix="",
        json_indent=None,
        debug_log_queries=True,
    )


@pytest.fixture
def storage():
    from lsdb.storage import MemoryStorage

    return MemoryStorage()


@pytest.fixture
def db(storage, settings):
    """
    A database named "test-1" with one declared, empty collection "test-1".
    """
    from lsdb import Lsdb

    database = Lsdb("test-1", storage, settings)
    database.collection(["test-1"])
    return database


@pytest.fixture
def sandbox_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the disk backend at a temp directory so tests never touch real ./data.
    """
    data_dir = tmp_path / "lsdb-data"
    monkeypatch.setenv("LSDB_STORAGE", "disk")
    monkeypatch.setenv("LSDB_DATA_DIR", str(data_dir))
    return data_dir
