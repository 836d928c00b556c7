"""Session storage backends.

``SessionStorage`` is the structural interface of ``window.sessionStorage``
reduced to the three calls the cache makes. Two backends ship:

- ``MemoryStorage``: a dict, lives as long as the process.
- ``FileStorage``: a JSON file, survives restarts of a long-running
  process sharing the same session directory.

Both store strings only, like the browser API.
"""

import json
from pathlib import Path
from typing import Protocol, runtime_checkable

from wren.errors import StorageUnavailable


@runtime_checkable
class SessionStorage(Protocol):
    """A string key/value store with the ``sessionStorage`` call shape."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process session storage.

    ``quota`` caps the total stored characters (keys plus values); writes
    past it raise ``OSError`` the way a full browser storage raises
    ``QuotaExceededError``.
    """

    __slots__ = ("_items", "quota")

    def __init__(self, quota: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self.quota = quota

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        value = str(value)
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._items.items() if k != key)
            if used + len(key) + len(value) > self.quota:
                msg = f"Session storage quota of {self.quota} characters exceeded"
                raise OSError(msg)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class FileStorage:
    """Session storage persisted to a single JSON document on disk.

    The whole document is rewritten on every mutation.
    """

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            return {}
        return data

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = str(value)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)


def probe_storage(storage: SessionStorage, key: str) -> None:
    """Write then delete *key* to prove *storage* accepts writes.

    Raises:
        StorageUnavailable: if either call fails for any reason (quota,
            disabled storage, read-only filesystem).
    """
    try:
        storage.set_item(key, "1")
        storage.remove_item(key)
    except Exception as exc:
        msg = f"Session storage rejected the probe write: {exc}"
        raise StorageUnavailable(msg) from exc
