import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict

from ipinfo_lookup.models.details import IPDetails

# Bump whenever IPDetails changes shape, so records from an older layout
# sitting in a shared store are never served.
CACHE_KEY_VERSION = 1


class BaseCache(ABC):
    """Key/value store for resolved IP details.

    Implementations must be safe to call from concurrent lookups and must not
    perform network I/O. A missing key is reported by returning None.
    """

    @abstractmethod
    def get(self, key: str) -> IPDetails | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: IPDetails) -> None:
        raise NotImplementedError


class NoopCache(BaseCache):
    """Pass-through store: never remembers anything."""

    def get(self, key: str) -> IPDetails | None:
        return None

    def set(self, key: str, value: IPDetails) -> None:
        return None


class LRUCache(BaseCache):
    """Bounded in-process store with least-recently-used eviction and optional TTL.

    Setting an existing key overwrites it and refreshes both its position and expiry.
    """

    def __init__(self, maxsize: int = 4096, ttl_seconds: float | None = 24 * 60 * 60) -> None:
        if maxsize <= 0:
            raise ValueError("maxsize must be a positive integer")
        if ttl_seconds is not None and ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative or None")
        self.maxsize = maxsize
        self.ttl_seconds = ttl_seconds
        self._entries: OrderedDict[str, tuple[IPDetails, float | None]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> IPDetails | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def set(self, key: str, value: IPDetails) -> None:
        expires_at = None if self.ttl_seconds is None else time.monotonic() + self.ttl_seconds
        with self._lock:
            self._entries[key] = (value, expires_at)
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class CacheAdapter:
    """Uniform get/set access to a pluggable store, keyed by the queried address.

    Policy (what gets cached) belongs to the caller; this only maps addresses
    to versioned store keys. Passing no store selects the pass-through NoopCache.
    """

    def __init__(self, cache: BaseCache | None = None) -> None:
        self.cache: BaseCache = cache if cache is not None else NoopCache()

    @staticmethod
    def cache_key(ip: str) -> str:
        return f"{ip}_v{CACHE_KEY_VERSION}"

    def get(self, ip: str) -> IPDetails | None:
        return self.cache.get(self.cache_key(ip))

    def set(self, ip: str, details: IPDetails) -> None:
        self.cache.set(self.cache_key(ip), details)
