"""
In-process cache of rendered category views.

Routes store computed tree views under a scope key and call ``invalidate``
after every successful mutation in that scope. Each scope holds at most
``max_entries`` views, least recently used first out.

A reader takes ``generation(scope)`` before loading data and passes it to
``set``; the write is dropped when an invalidation happened in between.
"""

import logging
import threading
from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional, Protocol

logger = logging.getLogger(__name__)

CATEGORIES_SCOPE = "categories"


class CacheInvalidator(Protocol):
    def invalidate(self, scope_key: str) -> None: ...


class ViewCache:
    """Thread-safe scope key -> bounded LRU of view key -> value."""

    def __init__(self, enabled: bool = True, max_entries: int = 256):
        self.enabled = enabled
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._scopes: Dict[str, "OrderedDict[Hashable, Any]"] = {}
        self._generations: Dict[str, int] = {}

    def generation(self, scope_key: str) -> int:
        with self._lock:
            return self._generations.get(scope_key, 0)

    def get(self, scope_key: str, key: Hashable) -> Optional[Any]:
        if not self.enabled:
            return None
        with self._lock:
            entries = self._scopes.get(scope_key)
            if entries is None or key not in entries:
                return None
            entries.move_to_end(key)
            return entries[key]

    def set(self, scope_key: str, key: Hashable, value: Any, generation: Optional[int] = None) -> bool:
        """Store a view. Returns False when it was dropped as stale or disabled."""
        if not self.enabled or self.max_entries <= 0:
            return False
        with self._lock:
            if generation is not None and generation != self._generations.get(scope_key, 0):
                logger.debug(f"Dropped stale view for scope '{scope_key}'")
                return False
            entries = self._scopes.setdefault(scope_key, OrderedDict())
            entries[key] = value
            entries.move_to_end(key)
            while len(entries) > self.max_entries:
                entries.popitem(last=False)
            return True

    def invalidate(self, scope_key: str) -> None:
        with self._lock:
            self._generations[scope_key] = self._generations.get(scope_key, 0) + 1
            dropped = len(self._scopes.pop(scope_key, {}))
        logger.debug(f"Invalidated cache scope '{scope_key}' ({dropped} entries)")

    def size(self, scope_key: str) -> int:
        with self._lock:
            return len(self._scopes.get(scope_key, {}))
