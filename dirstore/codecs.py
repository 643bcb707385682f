"""Value codecs and a store wrapper that applies them.

DirStore only holds strings. Codecs turn arbitrary values into the text
written to disk and back.
"""

import json
from abc import ABC, abstractmethod
from typing import Any

import yaml

from dirstore.store import DirStore


class CodecError(ValueError):
    """Stored text could not be decoded."""


class Codec(ABC):
    """Converts values to the text stored on disk and back."""

    @abstractmethod
    def serialize(self, value: Any) -> str:
        ...

    @abstractmethod
    def deserialize(self, text: str) -> Any:
        """Decode stored text; raise CodecError when it is malformed."""
        ...


class JsonCodec(Codec):
    """Pretty-printed JSON, two-space indent."""

    def serialize(self, value: Any) -> str:
        return json.dumps(value, indent=2)

    def deserialize(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CodecError(f"Invalid JSON in cache entry: {e}") from e


class YamlCodec(Codec):
    def serialize(self, value: Any) -> str:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)

    def deserialize(self, text: str) -> Any:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise CodecError(f"Invalid YAML in cache entry: {e}") from e


class CodecStore:
    """Serializes values through a codec before handing them to a DirStore."""

    def __init__(self, store: DirStore, codec: Codec | None = None):
        self._store = store
        self._codec = codec or JsonCodec()

    @property
    def store(self) -> DirStore:
        return self._store

    async def get(self, key: str) -> Any:
        text = await self._store.get(key)
        if text is None:
            return None
        return self._codec.deserialize(text)

    async def set(self, key: str, value: Any, ttl_ms: int | float | None = None) -> bool:
        if value is None:
            return await self._store.delete(key)
        return await self._store.set(key, self._codec.serialize(value), ttl_ms)

    async def delete(self, key: str) -> bool:
        return await self._store.delete(key)

    async def clear(self):
        await self._store.clear()

    async def has(self, key: str) -> bool:
        return await self._store.has(key)
