import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

PUBLISHED_POSTS_KEY = "published"


class PostsCache:
    """
    Process-local TTL cache for post listings.
    Entries expire after ttl_seconds; every post mutation calls invalidate().
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self.clock() - stored_at >= self.ttl_seconds:
                self._entries.pop(key, None)
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (self.clock(), value)

    def expire(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Posts cache invalidated")
