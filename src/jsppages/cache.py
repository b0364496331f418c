"""Resource existence cache.

One ``ResourceCache`` per context, remembering the outcome of
``context.get_resource()`` for ``config.cache_refresh_interval`` seconds.
Both hits and misses are remembered, so repeated probes for pages that
do not exist stay cheap.  Expired entries are dropped when read and swept
at most once per refresh interval, so the cache holds only paths looked
up within roughly the last two intervals.

Free-threading safety:
    - Entries are immutable tuples swapped in under a Lock
    - The context lookup itself runs outside the Lock; two threads
      missing on the same path may both consult the context, and the
      later result wins
"""

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from jsppages.attributes import ContextAttribute
from jsppages.container import ServletContext

logger = logging.getLogger("jsppages.cache")


class ResourceCache:
    """Caches resource lookups for a single context.

    Obtain through ``ResourceCache.get_cache(context)`` so every caller
    shares the context's instance.
    """

    __slots__ = (
        "_clock",
        "_context",
        "_entries",
        "_lock",
        "_next_sweep",
        "_refresh_interval",
    )

    def __init__(
        self,
        context: ServletContext,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._context = context
        self._clock = clock
        self._refresh_interval = context.config.cache_refresh_interval
        self._lock = threading.Lock()
        # path -> (resource or None, expires_at)
        self._entries: dict[str, tuple[Path | None, float]] = {}
        self._next_sweep = 0.0

    @classmethod
    def get_cache(cls, context: ServletContext) -> "ResourceCache":
        """Return the cache for *context*, creating it on first use."""
        return _CACHE.get_or_create(context)

    def get_resource(self, path: str) -> Path | None:
        """Return the resource at *path*, or ``None`` when it does not exist.

        Errors raised by the context propagate unchanged and are not cached.
        """
        if self._refresh_interval <= 0:
            return self._context.get_resource(path)

        now = self._clock()
        with self._lock:
            entry = self._entries.get(path)
            if entry is not None and entry[1] <= now:
                self._entries.pop(path, None)
                entry = None
        if entry is not None:
            return entry[0]

        resource = self._context.get_resource(path)
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            self._entries[path] = (resource, now + self._refresh_interval)
        logger.debug("Cached %s -> %s", path, "found" if resource is not None else "missing")
        return resource

    def _sweep(self, now: float) -> None:
        """Drop expired entries.  MUST only be called while holding _lock."""
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._next_sweep = now + self._refresh_interval

    def clear(self) -> None:
        """Forget every cached lookup."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_CACHE: ContextAttribute[ResourceCache] = ContextAttribute(
    f"{__name__}.ResourceCache",
    ResourceCache,
    factory=ResourceCache,
)
