"""Expiry deadlines for cache entries.

A deadline is an epoch timestamp in milliseconds, with ``0`` meaning the
entry never expires. The same check is applied to in-memory entries and to
deadlines read back from disk.

How a deadline is persisted next to a file is up to an ``ExpiryCodec``.
``MtimeExpiry`` stores it as the file's modification time, which is cheap
but best-effort: backup and sync tools may rewrite mtimes.
"""

import os
import time
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

NEVER = 0


class ExpiryState(Enum):
    LIVE = "live"
    EXPIRED = "expired"
    NEVER = "never"


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def encode_deadline(ttl_ms: int | float | None, now: int | None = None) -> int:
    """Turn a TTL relative to now into an absolute deadline (0 = never)."""
    if not ttl_ms:
        return NEVER
    if now is None:
        now = now_ms()
    return int(now + ttl_ms)


def check_deadline(deadline_ms: int | None, now: int | None = None) -> ExpiryState:
    if not deadline_ms:
        return ExpiryState.NEVER
    if now is None:
        now = now_ms()
    if deadline_ms < now:
        return ExpiryState.EXPIRED
    return ExpiryState.LIVE


class ExpiryCodec(ABC):
    """Persists a deadline alongside a stored file."""

    @abstractmethod
    def read(self, path: Path, stat: os.stat_result) -> int | None:
        """Return the stored deadline, or None when nothing is tracked."""
        ...

    @abstractmethod
    def write(self, path: Path, deadline_ms: int) -> None:
        ...


class MtimeExpiry(ExpiryCodec):
    """Deadline stored as the file mtime; epoch zero means never expires."""

    def read(self, path: Path, stat: os.stat_result) -> int | None:
        return stat.st_mtime_ns // 1_000_000

    def write(self, path: Path, deadline_ms: int) -> None:
        # must run after the content write, which resets mtime to now
        os.utime(path, ns=(time.time_ns(), deadline_ms * 1_000_000))


class NoExpiry(ExpiryCodec):
    """Files never carry a deadline; only the memory overlay expires."""

    def read(self, path: Path, stat: os.stat_result) -> int | None:
        return None

    def write(self, path: Path, deadline_ms: int) -> None:
        return None
