"""Session history and location.

Models the slice of the History API the navigator relies on: a stack
of paths with a cursor, ``push_state`` for forward navigation, and
``back``/``forward``/``go`` traversals that dispatch ``popstate`` to
registered listeners. ``push_state`` never dispatches ``popstate``,
matching browser behaviour.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import urlsplit

logger = logging.getLogger("wren.history")


@dataclass(frozen=True, slots=True)
class PopStateEvent:
    """Delivered to popstate listeners after a traversal."""

    path: str
    state: Any = None


PopStateListener: TypeAlias = Callable[[PopStateEvent], Any]


class Location:
    """The current document location.

    ``assign()`` records a hard navigation: the document would be
    replaced, so ``href`` changes and ``hard_navigations`` grows.
    """

    __slots__ = ("_history", "hard_navigations", "origin")

    def __init__(self, history: "History", origin: str) -> None:
        self._history = history
        self.origin = origin.rstrip("/")
        self.hard_navigations: list[str] = []

    @property
    def pathname(self) -> str:
        return self._history.path

    @property
    def href(self) -> str:
        if self.hard_navigations:
            return self.hard_navigations[-1]
        return f"{self.origin}{self.pathname}"

    def assign(self, url: str) -> None:
        logger.info("Hard navigation to %s", url)
        self.hard_navigations.append(url)


class History:
    """Path stack with popstate dispatch."""

    __slots__ = ("_entries", "_index", "_listeners", "location")

    def __init__(self, origin: str = "http://localhost:8000", path: str = "/") -> None:
        self._entries: list[tuple[str, Any]] = [(_pathname(path), None)]
        self._index = 0
        self._listeners: list[PopStateListener] = []
        self.location = Location(self, origin)

    @property
    def path(self) -> str:
        return self._entries[self._index][0]

    @property
    def state(self) -> Any:
        return self._entries[self._index][1]

    def __len__(self) -> int:
        return len(self._entries)

    def push_state(self, path: str, state: Any = None) -> None:
        """Add an entry after the cursor, discarding any forward entries."""
        del self._entries[self._index + 1 :]
        self._entries.append((_pathname(path), state))
        self._index += 1

    def replace_state(self, path: str, state: Any = None) -> None:
        self._entries[self._index] = (_pathname(path), state)

    def go(self, delta: int) -> bool:
        """Move the cursor by *delta* and dispatch ``popstate``.

        Returns ``False`` (no event) when the target is out of range.
        """
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        event = PopStateEvent(path=self.path, state=self.state)
        for listener in list(self._listeners):
            listener(event)
        return True

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)

    def add_popstate_listener(self, listener: PopStateListener) -> None:
        self._listeners.append(listener)

    def popstate_listeners(self) -> int:
        return len(self._listeners)


def _pathname(path: str) -> str:
    """Reduce *path* (or a full URL) to its path component."""
    return urlsplit(path).path or "/"
