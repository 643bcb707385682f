"""In-process overlay in front of the cache directory.

The overlay is a plain dict keyed by the caller's key (not the resolved
path). Eviction is lazy: expired entries are only dropped when a store
notices them on access, so memory grows with the number of distinct keys
until they are deleted or cleared.

One overlay may be shared by several stores, e.g. two directories during a
migration. Keeping their key spaces apart is the caller's job.
"""

from dataclasses import dataclass

from dirstore.expiry import ExpiryState, check_deadline


@dataclass
class MemoryEntry:
    value: str
    expires_at_ms: int = 0


class MemoryOverlay:
    """Key -> MemoryEntry map with deadline-aware lookup."""

    def __init__(self):
        self._entries: dict[str, MemoryEntry] = {}

    def lookup(self, key: str, now: int | None = None) -> tuple[MemoryEntry, ExpiryState] | None:
        """Return the entry and its expiry state, or None if not held."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry, check_deadline(entry.expires_at_ms, now)

    def get(self, key: str, now: int | None = None) -> str | None:
        """Return the value only if held and not expired."""
        found = self.lookup(key, now)
        if found is None:
            return None
        entry, state = found
        if state is ExpiryState.EXPIRED:
            return None
        return entry.value

    def set(self, key: str, value: str, expires_at_ms: int = 0):
        self._entries[key] = MemoryEntry(value=value, expires_at_ms=expires_at_ms)

    def delete(self, key: str):
        self._entries.pop(key, None)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
