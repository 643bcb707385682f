"""Configuration for dirstore caches."""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from dirstore.expiry import ExpiryCodec, MtimeExpiry, NoExpiry
from dirstore.overlay import MemoryOverlay
from dirstore.paths import PathNamer, default_name, raw_name

NAMERS: dict[str, PathNamer] = {
    "hashed": default_name,
    "raw": raw_name,
}


@dataclass(frozen=True)
class StoreConfig:
    """Settings for one DirStore. Immutable once the store is built.

    WARNING: ``directory`` must be owned by the store alone. ``clear()``
    removes it recursively, along with anything else placed inside.
    """

    directory: str | Path
    path_namer: PathNamer | None = None
    prefix: str = ""
    suffix: str = ".json"
    mtime_as_ttl: bool = True
    memory: bool = True
    overlay: MemoryOverlay | None = None
    expiry: ExpiryCodec | None = None

    def expiry_codec(self) -> ExpiryCodec:
        if self.expiry is not None:
            return self.expiry
        return MtimeExpiry() if self.mtime_as_ttl else NoExpiry()


def _from_dict(config: dict[str, Any], base_dir: Path | None = None) -> StoreConfig:
    config = dict(config)
    if not config.get("directory"):
        raise ValueError("Store config needs a 'directory'")

    filename = config.pop("filename", "hashed")
    if filename not in NAMERS:
        raise ValueError(f"Unknown filename scheme: {filename} (expected one of {sorted(NAMERS)})")

    allowed = {f.name for f in fields(StoreConfig)} - {"path_namer", "overlay", "expiry"}
    unknown = set(config) - allowed
    if unknown:
        raise ValueError(f"Unknown store config keys: {', '.join(sorted(unknown))}")

    directory = Path(config.pop("directory"))
    if base_dir is not None and not directory.is_absolute():
        directory = base_dir / directory

    return StoreConfig(directory=directory, path_namer=NAMERS[filename], **config)


def load_store_config(config_path: str, defaults: dict[str, Any] | None = None) -> StoreConfig:
    """Load store configuration from a JSON file, merging with optional defaults.

    Args:
        config_path: Path to the JSON configuration file.
        defaults: Optional dictionary of default values. File values override defaults.

    Returns:
        A frozen ``StoreConfig``. A relative ``directory`` is resolved
        against the folder holding the config file.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If ``directory`` is missing or a key is not recognised.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        config = json.load(f)

    if defaults:
        config = {**defaults, **config}

    return _from_dict(config, base_dir=path.parent)
