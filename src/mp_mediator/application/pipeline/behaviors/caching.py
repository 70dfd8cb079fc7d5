"""Application pipeline – CachingBehavior for queries."""
from __future__ import annotations

import abc
import dataclasses
import hashlib
import json
import time
from typing import Any, Callable

from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.config.settings import MediatorSettings
from mp_mediator.observability.logging import get_logger, request_fields, request_name

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class CacheEntry:
    value: Any
    expires_at: float


class QueryCache(abc.ABC):
    """Port: async key/value store for query results."""

    @abc.abstractmethod
    async def get(self, key: str) -> CacheEntry | None: ...

    @abc.abstractmethod
    async def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    @abc.abstractmethod
    async def clear(self) -> None: ...


class InMemoryQueryCache(QueryCache):
    """Process-local TTL cache.

    Expired entries are dropped on read and swept on every ``set``.  With
    *max_entries* the oldest entry is evicted once the cache is full.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock
        self._max_entries = max_entries

    async def get(self, key: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    async def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        now = self._clock()
        self._entries = {k: e for k, e in self._entries.items() if e.expires_at > now and k != key}
        if self._max_entries is not None:
            while len(self._entries) >= self._max_entries:
                del self._entries[next(iter(self._entries))]
        self._entries[key] = CacheEntry(value, now + ttl_seconds)

    async def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def query_cache_key(request: Any) -> str:
    """Deterministic key: qualified type name + SHA-256 of the sorted fields."""
    request_type = type(request)
    try:
        canonical = json.dumps(request_fields(request), sort_keys=True, default=str)
    except (TypeError, ValueError):
        canonical = repr(request)
    digest = hashlib.sha256(canonical.encode()).hexdigest()[:16]
    return f"query:{request_type.__module__}.{request_type.__qualname__}:{digest}"


@pipeline_behavior(priority=5, scope="query")
class CachingBehavior(PipelineBehavior):
    """Serve repeated queries from *cache*; a hit never reaches the handler."""

    def __init__(
        self,
        cache: QueryCache | None = None,
        ttl_seconds: float = 30.0,
        ttl_map: dict[type, float] | None = None,
    ) -> None:
        self.cache = cache if cache is not None else InMemoryQueryCache()
        self._ttl = ttl_seconds
        self._ttl_map: dict[type, float] = ttl_map or {}

    @classmethod
    def from_settings(cls, settings: MediatorSettings, cache: QueryCache | None = None) -> "CachingBehavior":
        return cls(cache, ttl_seconds=settings.cache_ttl_seconds)

    async def handle(self, request: Any, next_: Next) -> Any:
        key = query_cache_key(request)
        entry = await self.cache.get(key)
        if entry is not None:
            logger.info("cache.hit", request=request_name(request))
            return entry.value

        logger.info("cache.miss", request=request_name(request))
        result = await next_()
        await self.cache.set(key, result, self._ttl_map.get(type(request), self._ttl))
        return result


__all__ = [
    "CacheEntry",
    "CachingBehavior",
    "InMemoryQueryCache",
    "QueryCache",
    "query_cache_key",
]
