import logging
import os


def _str_env(name: str, default: str) -> str:
    raw = str(os.getenv(name, default)).strip()
    return raw or default


def _level_env(name: str, default: int) -> int:
    raw = _str_env(name, logging.getLevelName(default)).upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return default


LOG_LEVEL = _level_env("VOLUME_BINDER_LOG_LEVEL", logging.INFO)
LOG_FILE = str(os.getenv("VOLUME_BINDER_LOG_FILE", "")).strip() or None

ACCESS_MODES_INDEX = "accessmodes"
RESOURCE_STORAGE = "storage"
