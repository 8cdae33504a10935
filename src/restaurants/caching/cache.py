"""Process-wide read cache, partitioned into named regions.

Entries never expire; they are replaced wholesale or evicted by the
mutations that make them stale. Each region carries an epoch that every
eviction bumps, so a reader that started loading before an eviction cannot
write its (possibly stale) result back afterwards.
"""

import threading

import structlog

logger = structlog.get_logger(__name__)

_MISSING = object()


class ReadCache:
    """Keyed store of read results, ``region -> key -> value``."""

    def __init__(self):
        self._regions = {}
        self._epochs = {}
        self._lock = threading.RLock()

    def get(self, region, key, default=None):
        with self._lock:
            return self._regions.get(region, {}).get(key, default)

    def contains(self, region, key):
        with self._lock:
            return key in self._regions.get(region, {})

    def epoch(self, region):
        with self._lock:
            return self._epochs.get(region, 0)

    def put(self, region, key, value, epoch=None):
        """Store ``value`` under ``key``, replacing any previous entry.

        With ``epoch`` given, the write is dropped if the region was evicted
        since that epoch was read. Returns True when the value was stored.
        """
        with self._lock:
            if epoch is not None and epoch != self._epochs.get(region, 0):
                return False
            self._regions.setdefault(region, {})[key] = value
            return True

    def evict(self, region, key):
        with self._lock:
            self._bump(region)
            return self._regions.get(region, {}).pop(key, _MISSING) is not _MISSING

    def clear(self, region):
        with self._lock:
            self._bump(region)
            return len(self._regions.pop(region, {}))

    def clear_all(self):
        with self._lock:
            for region in list(self._regions):
                self._bump(region)
            self._regions.clear()

    def size(self, region=None):
        with self._lock:
            if region is not None:
                return len(self._regions.get(region, {}))
            return sum(len(entries) for entries in self._regions.values())

    def _bump(self, region):
        self._epochs[region] = self._epochs.get(region, 0) + 1


_cache_instance = None
_instance_lock = threading.Lock()


def get_read_cache():
    """Return the process-wide read cache, creating it on first use."""
    global _cache_instance
    with _instance_lock:
        if _cache_instance is None:
            _cache_instance = ReadCache()
            logger.debug("Read cache created")
        return _cache_instance


def reset_read_cache():
    """Drop the process-wide cache (useful for testing)."""
    global _cache_instance
    with _instance_lock:
        _cache_instance = None
