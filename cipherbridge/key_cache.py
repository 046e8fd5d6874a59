"""
Memoized key encoding.

The cipher provider expects keys as base64 text. KeyEncoder converts a
caller's UTF-8 key string once and serves repeat lookups from its cache.
Entries are indexed by a SHA-256 digest of the key. The cached value is the
base64 key itself, so the cache holds key material for as long as an entry
lives; call clear() to drop it.
"""

import base64
import hashlib
import logging
from collections import OrderedDict
from typing import Optional

logger = logging.getLogger(__name__)


class KeyEncoder:
    """
    Converts key strings to base64 and memoizes the result.

    Unbounded by default: one entry per distinct key, never evicted. With
    max_entries set, the least recently used entry is evicted first.
    Cached values are reversible encodings of the keys.
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Initialize key encoder.

        Args:
            max_entries: Cache bound, or None for an unbounded cache
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be a positive integer or None")
        self.max_entries = max_entries
        self.conversions = 0
        self._cache: "OrderedDict[bytes, str]" = OrderedDict()

    @staticmethod
    def _index(key: str) -> bytes:
        return hashlib.sha256(key.encode("utf-8", "surrogatepass")).digest()

    def encode(self, key: str) -> str:
        """
        Return the base64 form of the UTF-8 bytes of `key`.

        Args:
            key: Key string, already validated as str by the caller

        Returns:
            Base64 text of the key
        """
        index = self._index(key)
        cached = self._cache.get(index)
        if cached is not None:
            if self.max_entries is not None:
                self._cache.move_to_end(index)
            return cached

        encoded = base64.b64encode(key.encode("utf-8", "surrogatepass")).decode("ascii")
        self.conversions += 1
        self._cache[index] = encoded
        if self.max_entries is not None and len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
            logger.debug("Key cache full (%d entries), evicted oldest", self.max_entries)
        return encoded

    def clear(self) -> None:
        """Drop every cached entry."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self._index(key) in self._cache
