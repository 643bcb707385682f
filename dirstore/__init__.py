"""File-per-key cache store with mtime-encoded expiry."""

from dirstore.codecs import Codec, CodecError, CodecStore, JsonCodec, YamlCodec
from dirstore.expiry import ExpiryCodec, MtimeExpiry, NoExpiry
from dirstore.overlay import MemoryEntry, MemoryOverlay
from dirstore.paths import default_name, raw_name, resolve_path
from dirstore.shared.config import StoreConfig, load_store_config
from dirstore.store import DirStore

__all__ = [
    "DirStore",
    "StoreConfig",
    "load_store_config",
    "MemoryOverlay",
    "MemoryEntry",
    "ExpiryCodec",
    "MtimeExpiry",
    "NoExpiry",
    "default_name",
    "raw_name",
    "resolve_path",
    "Codec",
    "CodecStore",
    "JsonCodec",
    "YamlCodec",
    "CodecError",
]
