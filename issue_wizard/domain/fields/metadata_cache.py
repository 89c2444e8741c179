"""Field metadata cache.

Keeps raw create-metadata responses per (project key, issue type id) for a
limited time. The cache only stores; callers decide when an entry is fresh
enough by calling is_valid() before get_unsafe().
"""

import time
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, Optional


# Entries older than this are treated as absent
DEFAULT_TTL_SECONDS = 10 * 60


@dataclass
class CacheEntry:
    """A fetched metadata payload and when it was fetched."""
    data: Dict[str, Any]
    fetched_at: float


def cache_key(project_key: str, issue_type_id: str) -> str:
    return f"{project_key}_{issue_type_id}"


class FieldMetadataCache:
    """Time-boxed in-memory cache of field metadata responses."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Lifetime of an entry
            clock: Returns the current time in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.time
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    def is_valid(self, project_key: str, issue_type_id: str) -> bool:
        """True when an entry exists and is younger than the TTL."""
        entry = self._entries.get(cache_key(project_key, issue_type_id))
        if entry is None:
            return False
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def update(self, project_key: str, issue_type_id: str, data: Dict[str, Any]) -> None:
        """Store a freshly fetched payload, replacing any previous one."""
        with self._lock:
            self._entries[cache_key(project_key, issue_type_id)] = CacheEntry(
                data=data,
                fetched_at=self._clock(),
            )

    def get_unsafe(self, project_key: str, issue_type_id: str) -> Dict[str, Any]:
        """Return the stored payload without checking freshness.

        Returns an empty response shape when nothing is stored.
        """
        entry = self._entries.get(cache_key(project_key, issue_type_id))
        if entry is None:
            return {"projects": []}
        return entry.data

    def clear(self, project_key: Optional[str] = None, issue_type_id: Optional[str] = None) -> None:
        """Evict one entry, every entry of a project, or everything."""
        with self._lock:
            if project_key and issue_type_id:
                self._entries.pop(cache_key(project_key, issue_type_id), None)
            elif project_key:
                prefix = f"{project_key}_"
                for key in [k for k in self._entries if k.startswith(prefix)]:
                    del self._entries[key]
            else:
                self._entries.clear()


# Process-wide cache shared by every session
field_metadata_cache = FieldMetadataCache()
