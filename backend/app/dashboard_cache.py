"""Single-slot memo of the combined dashboard payload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Any, Optional, Tuple

LOGGER = logging.getLogger(__name__)

CacheKey = Tuple[str, int, str]


@dataclass
class _CacheEntry:
    key: CacheKey
    payload: Any


class DashboardCache:
    """Thread-safe holder for the last overview and evolution payload.

    The key is ``(period_key, window, current_period)``. ``current_period`` is
    the month the evolution window ends at, so the entry goes stale on its own
    when the calendar month changes.
    """

    _lock = Lock()
    _entry: Optional[_CacheEntry] = None

    @classmethod
    def get(cls, key: CacheKey) -> Optional[Any]:
        with cls._lock:
            if cls._entry is not None and cls._entry.key == key:
                return cls._entry.payload
            return None

    @classmethod
    def store(cls, key: CacheKey, payload: Any) -> None:
        with cls._lock:
            cls._entry = _CacheEntry(key=key, payload=payload)

    @classmethod
    def invalidate(cls) -> None:
        with cls._lock:
            if cls._entry is not None:
                LOGGER.debug("Dropping cached dashboard payload for %s", cls._entry.key)
            cls._entry = None
