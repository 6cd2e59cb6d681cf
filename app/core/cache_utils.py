from __future__ import annotations

import copy
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_MS = 300_000
KEY_PREVIEW_LENGTH = 50


class CacheConfigError(ValueError):
    """Raised when a cache is constructed with unusable bounds."""


def _now_ms() -> float:
    return time.time() * 1000


def make_cache_key(shape: Any) -> str:
    """
    Build a canonical string key from a request shape.

    Dict keys are sorted at every nesting level so two shapes holding the same
    fields in a different order map to the same slot.
    """
    return json.dumps(shape, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


@dataclass
class CacheEntry:
    value: Any
    created_at: float
    hit_count: int = 0


@dataclass
class CacheEntryStats:
    key_preview: str
    hit_count: int
    age_ms: float


@dataclass
class CacheStats:
    size: int
    hit_rate: float
    entries: List[CacheEntryStats] = field(default_factory=list)


class QRCodeCache:
    """
    In-memory cache with a TTL (milliseconds) and an entry-count ceiling.

    When full, ``set`` evicts the single entry with the lowest hit count.
    Values are stored and returned as deep copies, so callers may mutate what
    ``get`` hands back without touching the cached snapshot.

    ``size`` and ``get_stats`` purge expired entries before counting; they are
    not pure reads.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
            raise CacheConfigError(f"max_size must be a positive integer, got {max_size!r}")
        if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int) or ttl_ms <= 0:
            raise CacheConfigError(f"ttl_ms must be a positive integer, got {ttl_ms!r}")
        self.max_size = max_size
        self.ttl_ms = ttl_ms
        self._clock = clock or _now_ms
        self._data: Dict[str, CacheEntry] = {}

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at > self.ttl_ms

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._data.items() if self._is_expired(entry, now)]
        for key in expired:
            del self._data[key]

    def _evict_least_used(self) -> None:
        # min() keeps the first minimum, i.e. the oldest insertion on ties.
        if not self._data:
            return
        victim = min(self._data, key=lambda k: self._data[k].hit_count)
        del self._data[victim]

    def _live_entry(self, key: str) -> Optional[CacheEntry]:
        entry = self._data.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, self._clock()):
            del self._data[key]
            return None
        return entry

    def get(self, shape: Any) -> Optional[Any]:
        entry = self._live_entry(make_cache_key(shape))
        if entry is None:
            return None
        entry.hit_count += 1
        return copy.deepcopy(entry.value)

    def set(self, shape: Any, value: Any) -> None:
        key = make_cache_key(shape)
        self._purge_expired()
        if len(self._data) >= self.max_size:
            # One eviction per insert.
            self._evict_least_used()
        self._data[key] = CacheEntry(value=copy.deepcopy(value), created_at=self._clock())

    def has(self, shape: Any) -> bool:
        return self._live_entry(make_cache_key(shape)) is not None

    def clear(self) -> None:
        self._data.clear()

    def size(self) -> int:
        """Purge expired entries, then return how many remain."""
        self._purge_expired()
        return len(self._data)

    def get_stats(self) -> CacheStats:
        """Purge expired entries, then summarize the survivors."""
        self._purge_expired()
        now = self._clock()
        entries = [
            CacheEntryStats(
                key_preview=f"{key[:KEY_PREVIEW_LENGTH]}...",
                hit_count=entry.hit_count,
                age_ms=now - entry.created_at,
            )
            for key, entry in self._data.items()
        ]
        total_hits = sum(item.hit_count for item in entries)
        hit_rate = total_hits / len(entries) if entries else 0
        return CacheStats(size=len(self._data), hit_rate=hit_rate, entries=entries)


def build_qr_cache(settings) -> QRCodeCache:
    """Cache instance for the QR creation flow, sized from settings."""
    return QRCodeCache(max_size=settings.qr_cache_max_size, ttl_ms=settings.qr_cache_ttl_ms)


def describe_ttl(ttl_ms: int) -> str:
    """Human-readable TTL such as '10 minutes' or '45 seconds'."""
    seconds = ttl_ms / 1000
    if seconds >= 60 and seconds % 60 == 0:
        minutes = int(seconds // 60)
        return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"
    if seconds == int(seconds):
        count = int(seconds)
        return f"{count} second" if count == 1 else f"{count} seconds"
    return f"{ttl_ms} ms"
