from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import structlog

from pollbooth.core.config import settings

logger = structlog.get_logger(__name__)


class KeyValueStore(Protocol):
    """Minimal get/set-by-key interface the survey results are persisted through."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, useful for previews and tests."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


class JsonFileStore(KeyValueStore):
    """Keeps every key in a single JSON object on disk."""

    def __init__(self, storage_path: Path) -> None:
        self._path = Path(storage_path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            payload = self._read_all_unlocked()
        return payload.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            payload = self._read_all_unlocked()
            payload[key] = value
            self._write_all_unlocked(payload)

    def _read_all_unlocked(self) -> Dict[str, Any]:
        if not self._path.is_file():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("store_file_unreadable", path=str(self._path))
            return {}
        if not isinstance(payload, dict):
            logger.warning("store_file_unexpected_shape", path=str(self._path))
            return {}
        return payload

    def _write_all_unlocked(self, payload: Dict[str, Any]) -> None:
        self._path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


_STORE_INSTANCE: Optional[KeyValueStore] = None
_STORE_LOCK = threading.Lock()


def get_store() -> KeyValueStore:
    """Return the shared file-backed store at the configured path."""

    global _STORE_INSTANCE
    if _STORE_INSTANCE is None:
        with _STORE_LOCK:
            if _STORE_INSTANCE is None:
                _STORE_INSTANCE = JsonFileStore(settings.survey_store_path)
    return _STORE_INSTANCE


__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "get_store",
]
