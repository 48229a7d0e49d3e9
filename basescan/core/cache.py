"""In-memory parse-result cache with file-change detection.

A cached result is served only while the file still has the same
modification time, size and content hash it had when the result was stored,
and only for ``validity`` seconds after that.
"""
from __future__ import annotations

import hashlib
import logging
import os
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, Tuple, TypeVar

from .models import CachedParseResult, ChangeSet, DetectedFeature, FileMetadata

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_CAPACITY = 1000
DEFAULT_VALIDITY_SECONDS = 5 * 60.0
HASH_BLOCK_SIZE = 1024 * 1024

logger = logging.getLogger("basescan").getChild("cache")


class LRUCache(Generic[K, V]):
    """Least-recently-used mapping with a fixed capacity. Not thread-safe."""

    def __init__(self, max_size: int = DEFAULT_CAPACITY) -> None:
        if max_size < 1:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self._data: "OrderedDict[K, V]" = OrderedDict()

    def get(self, key: K) -> Optional[V]:
        if key not in self._data:
            return None
        self._data.move_to_end(key)
        return self._data[key]

    def peek(self, key: K) -> Optional[V]:
        """Like ``get`` but leaves recency untouched."""
        return self._data.get(key)

    def set(self, key: K, value: V) -> None:
        if key in self._data:
            self._data.move_to_end(key)
        self._data[key] = value
        while len(self._data) > self.max_size:
            self._data.popitem(last=False)

    def has(self, key: K) -> bool:
        return key in self._data

    def delete(self, key: K) -> bool:
        return self._data.pop(key, None) is not None

    def evict_where(self, predicate: Callable[[K, V], bool]) -> List[K]:
        doomed = [k for k, v in self._data.items() if predicate(k, v)]
        for key in doomed:
            del self._data[key]
        return doomed

    def keys(self) -> List[K]:
        return list(self._data)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def file_metadata(path: str) -> FileMetadata:
    """Current identity of ``path``; OSError propagates."""
    st = os.stat(path)
    digest = hashlib.blake2b(digest_size=16)
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(HASH_BLOCK_SIZE), b""):
            digest.update(block)
    return FileMetadata(
        path=path,
        modified_time=st.st_mtime_ns,
        size_bytes=st.st_size,
        content_hash=digest.hexdigest(),
    )


class CacheManager:
    def __init__(
        self,
        max_size: int = DEFAULT_CAPACITY,
        validity: float = DEFAULT_VALIDITY_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_size = max_size
        self.validity = validity
        self._clock = clock
        self._lock = threading.RLock()
        self._results: LRUCache[str, CachedParseResult] = LRUCache(max_size)
        self._metadata: Dict[str, FileMetadata] = {}
        self._hits = 0
        self._misses = 0

    def get(self, path: str) -> Optional[List[DetectedFeature]]:
        """Cached features for ``path``, or None when absent or stale."""
        return self.lookup(path)[0]

    def lookup(self, path: str) -> Tuple[Optional[List[DetectedFeature]], Optional[FileMetadata]]:
        """Cached features for ``path`` plus the file state they were checked against.

        On a miss the returned metadata is what a fresh parse should be
        stored under; it is None when the file cannot be read.
        """
        try:
            current = file_metadata(path)
        except OSError as exc:
            logger.debug("Cache miss for %s: %s", path, exc)
            with self._lock:
                self._misses += 1
            return None, None

        with self._lock:
            cached = self._results.peek(path)
            if cached is None:
                self._misses += 1
                return None, current
            if cached.metadata != current:
                self._results.delete(path)
                self._misses += 1
                return None, current
            if self._clock() - cached.timestamp >= self.validity:
                self._misses += 1
                return None, current
            self._results.get(path)
            self._hits += 1
            return list(cached.features), current

    def set(
        self,
        path: str,
        features: List[DetectedFeature],
        metadata: Optional[FileMetadata] = None,
    ) -> None:
        """Store ``features`` under ``metadata``, the file state they were parsed from.

        Without ``metadata`` the file's current state is used.
        """
        if metadata is None:
            try:
                metadata = file_metadata(path)
            except OSError as exc:
                logger.debug("Not caching %s: %s", path, exc)
                return
        with self._lock:
            self._results.set(path, CachedParseResult(list(features), metadata, self._clock()))
            self._metadata[path] = metadata

    def get_changed_files(self, paths: List[str]) -> ChangeSet:
        result = ChangeSet()
        for path in paths:
            try:
                current = file_metadata(path)
            except OSError:
                result.changed.append(path)
                continue
            with self._lock:
                known = self._metadata.get(path)
                if known is None or known != current:
                    result.changed.append(path)
                    self._metadata[path] = current
                else:
                    result.unchanged.append(path)
        return result

    def sweep_expired(self) -> int:
        """Drop every entry at or past the validity window; returns the count."""
        with self._lock:
            now = self._clock()
            expired = self._results.evict_where(lambda _, entry: now - entry.timestamp >= self.validity)
            for path in expired:
                self._metadata.pop(path, None)
        if expired:
            logger.debug("Swept %d expired cache entr%s", len(expired), "y" if len(expired) == 1 else "ies")
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self._metadata.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "parse_cache": {"size": len(self._results), "max_size": self.max_size},
                "file_metadata": {"size": len(self._metadata)},
                "hits": self._hits,
                "misses": self._misses,
            }

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._results
