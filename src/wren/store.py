"""Persistent key/value cache mirrored to session storage.

The ``Store`` keeps an in-memory mapping of slugged keys to JSON values
and rewrites the whole mapping to session storage under one key on
every ``set`` and ``flush``. Each write costs O(total cache size), so
the cache is meant for a handful of small payloads (index JSON, flags),
not for bulk content.

Values never leave the cache by reference: ``get`` hands out copies made
by ``clone_value`` so callers cannot corrupt stored entries.

Only one Store exists per application. ``App.provide_store()`` owns that
guarantee; constructing a ``Store`` directly always runs the one-time
initialization (flush + persist) for that instance.
"""

import json
import logging
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from wren.config import StoreConfig
from wren.errors import StorageUnavailable
from wren.storage import SessionStorage, probe_storage

logger = logging.getLogger("wren.store")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Normalize *text* into a storage-safe key.

    Examples::

        slugify("Some Key!")  -> "some-key"
        slugify("Foo Bar")    -> "foo-bar"
        slugify("/work/")     -> "work"
    """
    return _NON_ALNUM_RE.sub("-", str(text).strip().lower()).strip("-")


# -- Copy rules --


class ValueKind(Enum):
    """Clone rule selected for a cached value."""

    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    ABSENT = "absent"


def classify(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.ABSENT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.PRIMITIVE


def clone_value(value: Any) -> Any:
    """Return a copy of *value* safe to hand to a caller.

    Strings and other scalars are immutable and pass through. Lists and
    tuples are shallow-cloned into a new ``list`` or ``tuple`` (named tuples
    come back as plain tuples), mappings into a new ``dict``. ``None``
    stays ``None`` (the not-found sentinel).
    """
    kind = classify(value)
    if kind is ValueKind.SEQUENCE:
        return list(value) if isinstance(value, list) else tuple(value)
    if kind is ValueKind.MAPPING:
        return dict(value)
    return value


# -- Store --


class Store:
    """Session-storage backed cache.

    Usage::

        store = Store(StoreConfig(), MemoryStorage())
        store.set("Foo Bar", [1, 2, 3])
        store.get("Foo Bar")  # -> [1, 2, 3], a fresh list
    """

    __slots__ = ("_cache", "_config", "_storage", "_supported")

    def __init__(self, config: StoreConfig, storage: SessionStorage) -> None:
        self._config = config
        self._storage = storage
        self._cache: dict[str, Any] = {}
        self._supported = self._detect_support()

        # Start from an empty, persisted cache
        self.flush()
        logger.info("Store initialized (storage supported: %s)", self._supported)

    def _detect_support(self) -> bool:
        try:
            probe_storage(self._storage, self._config.probe_key)
        except StorageUnavailable as exc:
            logger.warning("%s. Cache is in-memory only for this process.", exc)
            return False
        return True

    @property
    def config(self) -> StoreConfig:
        return self._config

    @property
    def is_storage_supported(self) -> bool:
        """Whether the startup probe could write to session storage."""
        return self._supported

    def flush(self) -> None:
        """Empty the cache and persist the empty mapping."""
        self._cache = {}
        self.save()

    def save(self) -> None:
        """Synchronously write the whole cache to session storage.

        A no-op when storage is disabled or unsupported. Write errors
        after a successful probe are not caught.
        """
        if not self._config.enable_storage or not self._supported:
            logger.debug("Cache storage disabled - not writing to session storage")
            return

        self._storage.set_item(self._config.storage_key, json.dumps(self._cache))

    def set(self, key: str, value: Any) -> None:
        self._cache[slugify(key)] = value
        self.save()

    def get(self, key: str | None = None) -> Any:
        """Return a copy of the value stored under *key*.

        Without a key, returns a snapshot of the whole cache whose values
        are copies too. Missing keys return ``None``.
        """
        if not key:
            return {slug: self.get_value(value) for slug, value in self._cache.items()}
        return self.get_value(self._cache.get(slugify(key)))

    def get_value(self, value: Any) -> Any:
        return clone_value(value)

    def remove(self, key: str) -> None:
        """Delete *key* from memory.

        Does not call ``save()``: session storage keeps the entry until
        the next ``set`` or ``flush`` rewrites the mapping.
        """
        self._cache.pop(slugify(key), None)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and slugify(key) in self._cache

    def __len__(self) -> int:
        return len(self._cache)
