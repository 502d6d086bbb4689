# runtime/cache.py
import threading
from collections.abc import Callable
from typing import Any

from navgraph.runtime.hooks import EngineHooks, NoopHooks


class ResultCache:
    """
    Per-owner memo of derived results, keyed by (kind, owner id).

    Population runs under one re-entrant lock so a check-then-compute-then-store
    sequence is atomic; computations may themselves read other cached kinds.
    Entries never expire on their own, owners are evicted with invalidate().
    """

    def __init__(self, hooks: EngineHooks | None = None, enabled: bool = True):
        self._lock = threading.RLock()
        self._store: dict[tuple[str, str], Any] = {}
        self._hooks = hooks or NoopHooks()
        self.enabled = enabled

    def get_or_compute(
        self, kind: str, key: str, compute: Callable[[], Any], *, force: bool = False
    ):
        if not self.enabled:
            return compute()
        with self._lock:
            if not force and (kind, key) in self._store:
                self._hooks.cache_hit(kind=kind, key=key)
                return self._store[(kind, key)]
            value = compute()
            self._store[(kind, key)] = value
            return value

    def peek(self, kind: str, key: str):
        with self._lock:
            return self._store.get((kind, key))

    def invalidate(self, key: str) -> int:
        with self._lock:
            stale = [k for k in self._store if k[1] == key]
            for k in stale:
                del self._store[k]
        self._hooks.cache_invalidate(key=key, removed=len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, item: tuple[str, str]) -> bool:
        with self._lock:
            return item in self._store
