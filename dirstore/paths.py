"""Key to file path mapping.

Default filenames look like ``{readable}-{digest}``: up to 16 sanitized
characters of the key for eyeballing the cache directory, then 16 hex
characters of a salted MD5 so keys that sanitize to the same text never
share a file. The salt is a fixed constant, not the directory, so a key
maps to the same filename wherever the cache lives.
"""

import hashlib
from pathlib import Path
from typing import Callable

from pathvalidate import sanitize_filename

PathNamer = Callable[[str], str]

NAME_SALT = "+SALT-poS1djRa4M2jXsWi"
READABLE_LENGTH = 16
DIGEST_LENGTH = 16


def _printable(text: str) -> str:
    # lone surrogates (e.g. from os.fsdecode) cannot be encoded as utf-8
    return text.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


def default_name(key: str) -> str:
    readable = sanitize_filename(_printable(key))[:READABLE_LENGTH]
    digest = hashlib.md5((key + NAME_SALT).encode("utf-8", "surrogatepass")).hexdigest()[:DIGEST_LENGTH]
    return f"{readable}-{digest}"


def raw_name(key: str) -> str:
    """Use the key as-is, for mirroring an externally defined path scheme."""
    return key


def safe_filename(name: str) -> str:
    safe = sanitize_filename(_printable(name))
    if safe in ("", ".", ".."):
        safe = f"_{safe}"
    return safe


def resolve_path(
    directory: str | Path,
    key: str,
    namer: PathNamer | None = None,
    prefix: str = "",
    suffix: str = "",
) -> Path:
    """Build ``directory / (prefix + sanitize(namer(key) + suffix))``.

    Only the filename is sanitized. ``prefix`` is used verbatim and may
    contain separators to place entries in nested subdirectories.
    """
    namer = namer or default_name
    filename = safe_filename(namer(key) + suffix)
    return Path(directory) / (prefix + filename)
