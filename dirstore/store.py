"""File-per-key cache store with mtime-encoded expiry.

Each value lives in its own file under the store directory. The file's
modification time holds the expiry deadline (epoch zero = never expires),
so the filename and mtime are the whole durable state: there is no index.
An optional in-memory overlay answers repeat reads without touching disk.

TTLs are best-effort. Anything that rewrites mtimes (backup or sync agents)
changes expiry, so callers needing reliable TTLs should keep the deadline
inside the value as well.
"""

import asyncio
import shutil
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path

from dirstore.expiry import ExpiryState, check_deadline, encode_deadline, now_ms
from dirstore.overlay import MemoryOverlay
from dirstore.paths import resolve_path
from dirstore.shared.config import StoreConfig
from dirstore.shared.logger import bind_store_logger, get_store_logger

logger = get_store_logger("store")


class Outcome(Enum):
    HIT = "hit"
    MISS = "miss"
    EXPIRED = "expired"
    ERROR = "error"


@dataclass
class Lookup:
    outcome: Outcome
    value: str | None = None
    error: Exception | None = None


class DirStore:
    """Async key-value store keeping one file per key.

    WARNING: the directory is owned by the store. ``clear()`` deletes it
    recursively, including files that other programs put there.

    Example::

        store = DirStore("cache/pages")
        await store.set("a", "1234", -86400_000)   # already expired
        await store.get("a")                       # None, file removed
        await store.set("b", "1234")               # never expires
    """

    def __init__(self, directory: str | Path, **options):
        config = StoreConfig(directory=directory, **options)
        if config.memory and config.overlay is None:
            config = replace(config, overlay=MemoryOverlay())
        self._config = config
        self._dir = Path(config.directory)
        self._overlay = config.overlay if config.memory else None
        self._expiry = config.expiry_codec()
        self._log = bind_store_logger(logger, dir=str(self._dir))
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # surfaces later as a failed set
            self._log.warning(f"Cache directory not created: {e}")

    @classmethod
    def from_config(cls, config: StoreConfig) -> "DirStore":
        options = {f.name: getattr(config, f.name) for f in fields(config) if f.name != "directory"}
        return cls(config.directory, **options)

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        c = self._config
        return resolve_path(self._dir, key, c.path_namer, c.prefix, c.suffix)

    async def get(self, key: str) -> str | None:
        """Return the stored value, or None if missing, expired or unreadable."""
        result = await self._lookup(key)
        if result.outcome is Outcome.ERROR:
            self._log.warning(f"Cache read failed for {key!r}: {result.error}", key=key)
        return result.value if result.outcome is Outcome.HIT else None

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def set(self, key: str, value: str, ttl_ms: int | float | None = None) -> bool:
        """Store ``value`` under ``key``. Empty values delete the key.

        ``ttl_ms`` is relative to now; None or 0 means the entry never
        expires, and a negative TTL stores an already expired entry.
        """
        if not value:
            return await self.delete(key)
        if not isinstance(value, str):
            raise TypeError(
                f"DirStore only stores str values, got {type(value).__name__}; "
                "serialize it with a codec first"
            )

        deadline = encode_deadline(ttl_ms)
        if self._overlay is not None:
            self._overlay.set(key, value, deadline)

        path = self.path_for(key)
        try:
            await asyncio.to_thread(self._write, path, value, deadline)
        except OSError as e:
            self._log.warning(f"Cache write failed for {key!r}: {e}", key=key, path=str(path))
            return False
        return True

    async def delete(self, key: str) -> bool:
        """Remove ``key`` from memory and disk. Missing keys are fine."""
        if self._overlay is not None:
            self._overlay.delete(key)
        path = self.path_for(key)
        try:
            await asyncio.to_thread(path.unlink, missing_ok=True)
        except OSError as e:
            self._log.warning(f"Cache delete failed for {key!r}: {e}", key=key, path=str(path))
        return True

    async def clear(self):
        """Wipe the whole store directory and the memory overlay."""
        if self._overlay is not None:
            self._overlay.clear()
        try:
            await asyncio.to_thread(self._reset_dir)
        except OSError as e:
            self._log.warning(f"Cache clear failed for {self._dir}: {e}")

    async def _lookup(self, key: str) -> Lookup:
        now = now_ms()

        if self._overlay is not None:
            found = self._overlay.lookup(key, now)
            if found is not None:
                entry, state = found
                if state is not ExpiryState.EXPIRED:
                    return Lookup(Outcome.HIT, entry.value)
                self._log.debug(f"Memory entry expired: {key!r}", key=key)
                await self.delete(key)
                return Lookup(Outcome.EXPIRED)

        path = self.path_for(key)
        try:
            stat = await asyncio.to_thread(path.stat)
        except FileNotFoundError:
            return Lookup(Outcome.MISS)
        except OSError as e:
            return Lookup(Outcome.ERROR, error=e)

        deadline = self._expiry.read(path, stat)
        if check_deadline(deadline, now) is ExpiryState.EXPIRED:
            self._log.debug(f"File entry expired: {key!r}", key=key)
            await self.delete(key)
            return Lookup(Outcome.EXPIRED)

        try:
            value = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            # removed between stat and read
            return Lookup(Outcome.MISS)
        except (OSError, UnicodeDecodeError) as e:
            return Lookup(Outcome.ERROR, error=e)
        return Lookup(Outcome.HIT, value)

    def _write(self, path: Path, value: str, deadline: int):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")
        self._expiry.write(path, deadline)

    def _reset_dir(self):
        try:
            shutil.rmtree(self._dir)
        except FileNotFoundError:
            pass
        self._dir.mkdir(parents=True, exist_ok=True)
