"""In-process caches used by the text normalizer."""

import threading
from collections import OrderedDict
from typing import Any, Dict, Hashable, Optional
import structlog

logger = structlog.get_logger(__name__)

class BoundedCache:
    """Thread-safe key/value store that evicts its oldest entry on overflow."""

    def __init__(self, max_size: int = 1000):
        """Initialize an empty cache holding at most ``max_size`` entries."""
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.max_size = max_size
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value or None."""
        with self._lock:
            if key in self._data:
                self.hits += 1
                return self._data[key]
            self.misses += 1
            return None

    def set(self, key: Hashable, value: Any) -> None:
        """Store a value, evicting the oldest entry when full."""
        if self.max_size == 0:
            return
        with self._lock:
            if key in self._data:
                self._data[key] = value
                return
            if len(self._data) >= self.max_size:
                self._data.popitem(last=False)
                self.evictions += 1
            self._data[key] = value

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0
            self.evictions = 0
        logger.debug("Cache cleared", max_size=self.max_size)

    def stats(self) -> Dict[str, int]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._data),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

class NullCache:
    """Cache that never stores anything."""

    max_size = 0

    def get(self, key: Hashable) -> Optional[Any]:
        return None

    def set(self, key: Hashable, value: Any) -> None:
        pass

    def clear(self) -> None:
        pass

    def stats(self) -> Dict[str, int]:
        return {"size": 0, "max_size": 0, "hits": 0, "misses": 0, "evictions": 0}

    def __len__(self) -> int:
        return 0

    def __contains__(self, key: Hashable) -> bool:
        return False
