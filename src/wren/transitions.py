"""Page transition engine.

The ``PageController`` owns the mechanics of a navigation: fetching the
target page, pushing history, and announcing each lifecycle step so
listeners can animate and swap content. A full route fires, in order::

    TRANSITION_OUT -> REFRESH_DOCUMENT -> TRANSITION_IN

Routing to the path already displayed fires ``SAME_TARGET`` instead.
``restore()`` runs the same cycle without pushing history, bringing
the page back in line with the entry a traversal landed on.
``INITIALIZED`` fires once, from ``init_page()``.

Navigations are serialized by an ``asyncio.Lock``: a route requested
while another is in flight waits for it to finish. Listeners can rely
on never seeing two cycles interleave.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

from wren.api import ApiClient
from wren.history import History

logger = logging.getLogger("wren.transitions")


class TransitionEvent(StrEnum):
    TRANSITION_OUT = "page-controller-router-transition-out"
    REFRESH_DOCUMENT = "page-controller-router-refresh-document"
    TRANSITION_IN = "page-controller-router-transition-in"
    INITIALIZED = "page-controller-initialized-page"
    SAME_TARGET = "page-controller-router-samepage"


@dataclass(frozen=True, slots=True)
class TransitionPayload:
    """Data delivered with every lifecycle event.

    ``response`` holds the fetched markup for ``REFRESH_DOCUMENT`` and
    silent routes, and is ``None`` otherwise.
    """

    path: str
    response: str | None = None


TransitionHandler: TypeAlias = Callable[[TransitionPayload], Any]


class PageController:
    """Fetch-and-swap transition engine over an ``ApiClient``.

    The engine tracks which path's content is on screen separately from
    the history cursor. A silent route moves the cursor but keeps the
    content, and a traversal moves the cursor before ``restore()`` has
    swapped anything in.
    """

    __slots__ = (
        "_api",
        "_content_paths",
        "_displayed",
        "_handlers",
        "_history",
        "_initialized",
        "_lock",
    )

    def __init__(self, api: ApiClient, history: History) -> None:
        self._api = api
        self._history = history
        self._handlers: dict[TransitionEvent, list[TransitionHandler]] = {}
        self._lock = asyncio.Lock()
        self._initialized = False
        self._displayed = history.path
        # history path -> path whose content that entry shows
        self._content_paths: dict[str, str] = {}

    @property
    def history(self) -> History:
        return self._history

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def displayed(self) -> str:
        """Path of the content currently swapped into the page."""
        return self._displayed

    def on(self, event: TransitionEvent, handler: TransitionHandler) -> None:
        self._handlers.setdefault(TransitionEvent(event), []).append(handler)

    def _fire(self, event: TransitionEvent, payload: TransitionPayload) -> None:
        logger.debug("%s %s", event.value, payload.path)
        for handler in list(self._handlers.get(event, ())):
            handler(payload)

    def content_path(self, path: str) -> str:
        """Return the path whose content the history entry *path* shows."""
        return self._content_paths.get(path, path)

    def needs_restore(self, path: str) -> bool:
        return self.content_path(path) != self._displayed

    def init_page(self) -> None:
        """Announce the initially rendered page. Only the first call fires."""
        if self._initialized:
            return
        self._initialized = True
        self._fire(TransitionEvent.INITIALIZED, TransitionPayload(self._history.path))

    async def route(self, path: str) -> None:
        """Animated navigation to *path*, pushing a history entry.

        ``SAME_TARGET`` fires instead when *path* is both the current
        history entry and the displayed content.

        Raises:
            FetchFailure: when the page cannot be fetched. Raised after the
                ``TRANSITION_OUT`` handlers have run; no further events
                fire for the failed cycle.
        """
        async with self._lock:
            if path == self._history.path and path == self._displayed:
                self._fire(TransitionEvent.SAME_TARGET, TransitionPayload(path))
                return

            await self._cycle(path, push=path != self._history.path)

    async def restore(self) -> bool:
        """Swap in the content of the current history entry.

        Runs after a back/forward traversal. The cycle fires the same
        events as ``route()`` but never touches history. Returns
        ``False`` when the entry's content is already displayed.
        """
        async with self._lock:
            target = self.content_path(self._history.path)
            if target == self._displayed:
                return False

            await self._cycle(target, push=False)
            return True

    async def _cycle(self, path: str, *, push: bool) -> None:
        self._fire(TransitionEvent.TRANSITION_OUT, TransitionPayload(path))
        response = await self._api.collection(path, format="html")
        if push:
            self._history.push_state(path)
        self._displayed = path
        self._content_paths[path] = path
        self._fire(TransitionEvent.REFRESH_DOCUMENT, TransitionPayload(path, response))
        self._fire(TransitionEvent.TRANSITION_IN, TransitionPayload(path))

    async def route_silently(
        self,
        path: str,
        callback: Callable[[TransitionPayload], Any] | None = None,
    ) -> None:
        """Fetch *path* and push history without firing lifecycle events.

        The displayed content does not change; traversing back to the
        pushed entry later restores nothing. *callback* receives the
        payload and may be a coroutine function.
        """
        async with self._lock:
            response = await self._api.collection(path, format="html")
            self._history.push_state(path)
            self._content_paths[path] = self._displayed

        if callback is not None:
            result = callback(TransitionPayload(path, response))
            if inspect.isawaitable(result):
                await result
