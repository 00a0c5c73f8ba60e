from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw.strip())


@dataclass(frozen=True)
class Settings:
    # Storage backend: "memory" or "disk"
    storage: str
    data_dir: Path

    # Prepended to the database name to build its storage key
    key_prefix: str

    # Persisted JSON layout (compact when None)
    json_indent: int | None

    # Debug
    debug_log_queries: bool


def get_settings() -> Settings:
    storage = os.getenv("LSDB_STORAGE", "memory").strip().lower()

    data_dir = Path(os.getenv("LSDB_DATA_DIR", str(Path.cwd() / "data" / "lsdb")))

    return Settings(
        storage=storage,
        data_dir=data_dir,
        key_prefix=os.getenv("LSDB_KEY_PREFIX", ""),
        json_indent=_env_int("LSDB_JSON_INDENT"),
        debug_log_queries=_env_bool("LSDB_DEBUG_LOG_QUERIES", False),
    )
