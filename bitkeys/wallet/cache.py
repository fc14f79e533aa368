"""
The DerivationCache - memoizes derived children by (parent xprivkey, index, hardened)
"""
import math
import threading
from typing import Optional

import cachetools

from bitkeys.core import CACHE
from bitkeys.logger import get_logger

__all__ = ["DerivationCache", "HD_KEY_CACHE", "configure_cache"]

logger = get_logger(__name__)


class DerivationCache:
    """
    Thread-safe LRU map from (parent xprivkey, index, hardened) to the derived key.

    Entries are keyed by the parent's serialized string, not the parent object. A max_size of None keeps every
    entry; 0 disables caching.
    """

    def __init__(self, max_size: Optional[int] = CACHE.MAX_SIZE):
        self._validate_size(max_size)
        self._max_size = max_size
        self._entries = self._new_store(max_size)
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: tuple) -> bool:
        with self._lock:
            return key in self._entries

    @staticmethod
    def _validate_size(max_size: Optional[int]):
        if max_size is None:
            return
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 0:
            raise ValueError(f"Cache max_size must be None or a non-negative integer, got {max_size!r}")

    @staticmethod
    def _new_store(max_size: Optional[int]) -> cachetools.LRUCache:
        return cachetools.LRUCache(maxsize=math.inf if max_size is None else max_size)

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    def get(self, xprivkey: str, index: int, hardened: bool):
        with self._lock:
            return self._entries.get((xprivkey, index, hardened))

    def set(self, xprivkey: str, index: int, hardened: bool, derived):
        """
        Stores the derived key and returns the instance kept in the cache. If another caller stored the same
        derivation first, that earlier instance is kept and returned.
        """
        key = (xprivkey, index, hardened)
        with self._lock:
            if self._max_size == 0:
                return derived

            existing = self._entries.get(key)
            if existing is not None:
                return existing

            self._entries[key] = derived
        return derived

    def resize(self, max_size: Optional[int]):
        self._validate_size(max_size)
        with self._lock:
            resized = self._new_store(max_size)
            if max_size != 0:
                # popitem yields least recently used first, so recency carries over
                while self._entries:
                    key, derived = self._entries.popitem()
                    resized[key] = derived
            self._max_size = max_size
            self._entries = resized
        logger.debug("Derivation cache resized to %s", "unbounded" if max_size is None else max_size)

    def clear(self):
        with self._lock:
            self._entries.clear()


# Process-wide cache shared by every ExtendedPrivateKey
HD_KEY_CACHE = DerivationCache()


def configure_cache(max_size: Optional[int]) -> DerivationCache:
    """
    Sets the bound of the shared cache (None for unbounded) and returns it
    """
    HD_KEY_CACHE.resize(max_size)
    return HD_KEY_CACHE
