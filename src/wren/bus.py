"""Application announcement bus.

Sibling components (overlay, gallery, project view, analytics) learn
about navigation through named announcements rather than direct calls.
Delivery is synchronous and fire-and-forget: ``fire()`` calls every
handler registered for the name, in registration order, and returns
nothing. Handler exceptions propagate to the caller of ``fire()``.

Announcements published by the navigator:

- ``ROOT_CLICKED``: the root link was clicked (no payload)
- ``PROJECT_ENDED``: the detail view closed (no payload)
- ``LOAD_ROOT``: root index fragment ready (payload: markup ``str``)
- ``ANALYTICS_PUSH``: content swapped (payload: ``ParsedDocument``)
"""

import threading
from collections.abc import Callable
from typing import Any, TypeAlias

ROOT_CLICKED = "app--root"
PROJECT_ENDED = "app--project-ended"
LOAD_ROOT = "app--load-root"
ANALYTICS_PUSH = "app--analytics-push"

Listener: TypeAlias = Callable[..., Any]


class Emitter:
    """Named publish/subscribe channel.

    Usage::

        emitter = Emitter()
        emitter.on(LOAD_ROOT, lambda html: panel.hydrate(html))
        emitter.fire(LOAD_ROOT, "<div>...</div>")

    Handlers registered without a payload parameter are called with no
    arguments when the announcement carries none.
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._lock = threading.Lock()

    def on(self, name: str, listener: Listener) -> None:
        with self._lock:
            self._listeners.setdefault(name, []).append(listener)

    def off(self, name: str, listener: Listener | None = None) -> None:
        """Remove *listener* from *name*, or every listener when omitted."""
        with self._lock:
            if listener is None:
                self._listeners.pop(name, None)
                return
            listeners = self._listeners.get(name)
            if listeners and listener in listeners:
                listeners.remove(listener)

    def fire(self, name: str, *payload: Any) -> None:
        with self._lock:
            listeners = list(self._listeners.get(name, ()))
        for listener in listeners:
            listener(*payload)

    def listeners(self, name: str) -> int:
        with self._lock:
            return len(self._listeners.get(name, ()))
