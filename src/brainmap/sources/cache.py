"""In-memory cache with per-entry expiry."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: float | None  # None = never expires


class TTLCache:
    """
    Key/value cache with time-based expiry.

    The clock is injectable so tests can advance time without sleeping.
    ``get`` returns ``None`` on a miss; ``None`` itself is never stored.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        default_max_age: float | None = None,
    ) -> None:
        self.clock = clock
        self.default_max_age = default_max_age
        self._entries: dict[str, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at is not None and self.clock() >= entry.expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None
        return entry.value

    def put(self, key: str, value: Any, max_age: float | None = None) -> None:
        if value is None:
            raise ValueError("TTLCache cannot store None")
        if max_age is None:
            max_age = self.default_max_age
        expires_at = self.clock() + max_age if max_age is not None else None
        self._entries[key] = _Entry(value=value, expires_at=expires_at)

    def clear(self) -> None:
        self._entries.clear()
