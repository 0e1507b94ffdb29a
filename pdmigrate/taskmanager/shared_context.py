"""Thread-safe key/value store that tasks of a workflow share."""

from __future__ import annotations

import threading
from typing import Any


class SharedContext:
    """A dictionary-like store guarded by a lock so tasks can share data."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._data: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Add or replace the value stored under ``key``."""
        with self._lock:
            self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under ``key``, or ``default`` if absent."""
        with self._lock:
            return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __repr__(self) -> str:
        with self._lock:
            return f"SharedContext({self._data!r})"