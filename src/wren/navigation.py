"""Navigator — the SPA navigation lifecycle.

Bridges three event sources:

- the ``PageController``'s lifecycle events (transition-out,
  refresh-document, transition-in, initialized-page, same-target)
- native back/forward traversals (``popstate``)
- application announcements on the ``Emitter``

and keeps the DOM, the ephemeral per-cycle state and the root index in
step with them. Listener lifetime equals process lifetime: nothing the
navigator subscribes to is ever unsubscribed.

Failures propagate. ``route()`` and ``restore()`` first return the
machine to idle, and fall back to ``redirect()`` when the target does
not exist.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Coroutine, Mapping
from typing import Any

from wren.api import ApiClient
from wren.bus import ANALYTICS_PUSH, LOAD_ROOT, PROJECT_ENDED, ROOT_CLICKED, Emitter
from wren.components import Components
from wren.config import NavigatorConfig
from wren.document import ParsedDocument, parse_doc
from wren.dom import Dom
from wren.errors import FetchFailure
from wren.history import History, PopStateEvent
from wren.machine import NavigationMachine
from wren.state import EphemeralState
from wren.store import Store
from wren.transitions import PageController, TransitionEvent, TransitionPayload
from wren.tween import Animator, Tween, TweenAnimator, ease_in_out_cubic

logger = logging.getLogger("wren.navigation")


# -- Pure helpers --


def resolve_root(
    page_data: Mapping[str, Any],
    nav_data: Mapping[str, Any],
    current_path: str,
) -> str:
    """Return the ancestor index URL for the page described by *page_data*.

    - ``index`` pages are their own root.
    - ``offcanvas`` pages (about, index listing) belong to ``/``.
    - Anything else is looked up in the navigation tree: the index item
      holding a collection whose id equals the page id. When several
      match, the last one wins. No match falls back to ``/``.
    """
    page_type = page_data.get("type")
    if page_type == "index":
        return current_path
    if page_type == "offcanvas":
        return "/"

    root: str | None = None
    page_id = page_data.get("id")
    for index_item in nav_data.get("app_tree") or ():
        for collection_item in index_item.get("items") or ():
            if (collection_item.get("collection") or {}).get("id") == page_id:
                root = (index_item.get("collection") or {}).get("fullUrl")

    if not root:
        logger.debug("No index holds collection %r, using / as root", page_id)
        return "/"
    return root


def match_simple_route(path: str, simple_routes: tuple[str, ...], root_url_id: str) -> str | None:
    """Return the content-root identifier for a simple route, else ``None``.

    ``/`` maps to *root_url_id*; ``/about/`` maps to ``"about"``.
    """
    if path not in simple_routes:
        return None
    return path.replace("/", "") or root_url_id


# -- Navigator --


class Navigator:
    """Drives navigation for one page.

    Construct through ``App`` in production; every collaborator is
    injectable for tests::

        navigator = Navigator(dom=dom, engine=engine, api=api, emitter=emitter,
                              history=history, store=store)
        await navigator.init()
        await navigator.route("/about/")
    """

    def __init__(
        self,
        *,
        dom: Dom,
        engine: PageController,
        api: ApiClient,
        emitter: Emitter,
        history: History,
        store: Store,
        config: NavigatorConfig | None = None,
        animator: Animator | None = None,
        components: Components | None = None,
        state: EphemeralState | None = None,
    ) -> None:
        self.dom = dom
        self.engine = engine
        self.api = api
        self.emitter = emitter
        self.history = history
        self.store = store
        self.config = config or NavigatorConfig()
        self.animator = animator or TweenAnimator()
        self.components = components or Components()
        self.state = state if state is not None else EphemeralState()
        self.machine = NavigationMachine()

        self.root: str = "/"
        self.nav_data: dict[str, Any] = {}
        self.page_data: dict[str, Any] = {}
        self.is_pop = False
        self.tween_scroll: Tween | None = None

        self._initialized = False
        self._popstate_bound = False
        self._tasks: set[asyncio.Task[Any]] = set()

    # -- Ephemeral state --

    def set_state(self, name: str, value: Any) -> None:
        """Store *value* for the rest of this cycle and the next one."""
        self.state.set(name, value)

    def get_state(self, name: str) -> Any:
        return self.state.get(name)

    def check_state(self) -> None:
        self.state.check()

    # -- Setup --

    async def init(self) -> None:
        """Wire the navigator to the page, the engine and the bus.

        Non-index pages then fetch their root index so it is in the DOM
        for instant back-navigation. A failed fetch propagates after all
        wiring is in place.
        """
        if self._initialized:
            logger.debug("Navigator already initialized")
            return
        self._initialized = True

        self.nav_data = self.dom.data(self.dom.nav)
        self.page_data = self.dom.data(self.dom.page)

        self.prep_page()
        self._bind_engine()
        self.engine.init_page()

        logger.info("router initialized (root %s)", self.root)

        if self.page_data.get("type") != "index":
            await self.load_root_index()

    def prep_page(self) -> None:
        """Resolve the root path and bind the root link and project listener."""
        self.root = resolve_root(self.page_data, self.nav_data, self.history.location.pathname)

        self.dom.set_attr(self.dom.root, "href", self.root)
        self.dom.on(self.dom.root, "click", self._on_root_click)
        self.emitter.on(PROJECT_ENDED, self._on_project_ended)

    def _bind_engine(self) -> None:
        on = self.engine.on
        on(TransitionEvent.TRANSITION_OUT, self._on_transition_out)
        on(TransitionEvent.REFRESH_DOCUMENT, self._on_refresh_document)
        on(TransitionEvent.TRANSITION_IN, self._on_transition_in)
        on(TransitionEvent.INITIALIZED, self._on_initialized)
        on(TransitionEvent.SAME_TARGET, self._on_same_target)

    def init_page(self, payload: TransitionPayload | None = None) -> None:
        """Finish the first page setup and start listening for popstate."""
        self.dom.detach(self.dom.nav)
        self.dom.remove_class(self.dom.html, self.config.clipped_class)
        self.dom.remove_class(self.dom.body, self.config.clipped_class)

        if not self._popstate_bound:
            self._popstate_bound = True
            self.history.add_popstate_listener(self.handle_popstate)

    # -- Routing --

    async def route(self, path: str) -> None:
        """Animated, history-pushing navigation to *path*."""
        await self._navigate(path, self.engine.route(path))

    async def restore(self) -> None:
        """Swap in the content of the history entry a traversal landed on."""
        await self._navigate(self.history.path, self.engine.restore())

    async def _navigate(self, path: str, cycle: Awaitable[Any]) -> None:
        """Await an engine cycle, leaving the navigator idle if it fails.

        A 404 becomes a hard redirect to the origin. Every other error
        propagates once the machine and the routing class are reset.
        """
        try:
            await cycle
        except FetchFailure as exc:
            self._recover()
            if not exc.not_found:
                raise
            logger.warning("Nothing to route to at %s", path)
            self.redirect()
        except Exception:
            self._recover()
            raise

    def _recover(self) -> None:
        if self.machine.in_flight:
            logger.debug("Aborting cycle in %s", self.machine.phase)
            self.machine.abort()
        self.change_page_in()

    async def push(
        self,
        path: str,
        callback: Callable[[TransitionPayload], Any] | None = None,
    ) -> None:
        """Silent navigation to *path*; ends the cycle with a state checkpoint."""
        await self.engine.route_silently(path, callback)
        self.check_state()

    def redirect(self) -> None:
        """Hard navigation to the site origin."""
        location = self.history.location
        location.assign(location.origin)

    def handle_popstate(self, event: PopStateEvent | None = None) -> None:
        """React to a back/forward traversal.

        Simple routes are restored in place. Any other path reopens its
        detail view through ``open_detail()``. ``is_pop`` is set while
        this runs so ``PROJECT_ENDED`` does not trigger a second route.

        When the entry shows different content than the page, a
        background ``restore()`` swaps it in.
        """
        self.is_pop = True
        try:
            path = event.path if event is not None else self.history.location.pathname
            identifier = match_simple_route(
                path, self.config.simple_routes, self.config.root_url_id
            )

            if identifier is not None:
                self.dom.set_id(self.dom.main, f"{self.config.main_id_prefix}{identifier}")

                if identifier == self.config.root_url_id:
                    self.dom.remove_class(self.dom.html, *self.config.offcanvas_classes)

                if self.components.detail.is_active():
                    self.emitter.fire(PROJECT_ENDED)

                self.components.overlay.close()
            else:
                self.open_detail(path)

            self.components.gallery.close()
        finally:
            self.is_pop = False

        if self.engine.needs_restore(path):
            self._spawn(self.restore())

    def open_detail(self, path: str) -> bool:
        """Open the detail view for the tile linking to *path*.

        Returns ``False`` when no tile links there; that is not an error.
        """
        tile = self.dom.find_tile(path)
        if tile is None:
            logger.debug("No tile links to %s", path)
            return False

        self.components.detail.open(tile.get("href") or path)
        return True

    # -- Root index --

    async def load_root_index(self) -> ParsedDocument:
        """Fetch the root index markup and announce its page fragment."""
        try:
            response = await self.api.collection(self.root, format="html")
        except FetchFailure:
            logger.error("Root index %s could not be loaded", self.root)
            raise

        doc = self.parse_doc(response)
        self.emitter.fire(LOAD_ROOT, doc.page_html)
        return doc

    async def load_full_index(self, callback: Callable[[Any], Any]) -> Any:
        """Hand the root index JSON to *callback*.

        The payload is fetched once and cached in the store; callers
        always receive a copy.
        """
        key = f"index {self.root}"
        if key not in self.store:
            try:
                data = await self.api.collection(self.root, format="json")
            except FetchFailure:
                logger.error("Full index %s could not be loaded", self.root)
                raise
            self.store.set(key, data)

        data = self.store.get(key)
        result = callback(data)
        if inspect.isawaitable(result):
            await result
        return data

    def parse_doc(self, html: str) -> ParsedDocument:
        return parse_doc(html, self.dom.selectors.page)

    # -- Lifecycle work --

    def change_page_out(self) -> None:
        self.dom.add_class(self.dom.html, self.config.routing_class)

    def change_page_in(self) -> None:
        self.dom.remove_class(self.dom.html, self.config.routing_class)

    def change_content(self, payload: TransitionPayload) -> None:
        """Swap the fetched page into the DOM.

        The state checkpoint runs here, at swap time, so entries marked
        during this cycle expire during the next one.
        """
        doc = self.parse_doc(payload.response or "")

        self.dom.set_inner_html(self.dom.page, doc.page_html)
        self.emitter.fire(ANALYTICS_PUSH, doc)
        self.page_data = self.dom.data(doc.page)

        self.check_state()

    def same_page(self) -> bool:
        """Scroll the root panel back to the top when its root is re-selected.

        Returns ``True`` when a scroll tween was started.
        """
        panel = self.dom.root_panel
        offset = self.dom.scroll_top(panel)
        if (
            self.history.location.pathname != self.root
            or self.tween_scroll is not None
            or offset <= 0
        ):
            return False

        self.tween_scroll = self.animator.tween(
            start=offset,
            end=0,
            duration=self.config.scroll_duration,
            ease=ease_in_out_cubic,
            update=lambda top: self.dom.set_scroll_top(panel, top),
            complete=self._clear_scroll_tween,
        )
        return True

    def _clear_scroll_tween(self) -> None:
        self.tween_scroll = None

    # -- Engine handlers --

    def _on_transition_out(self, payload: TransitionPayload) -> None:
        self.machine.leave()
        self.change_page_out()

    def _on_refresh_document(self, payload: TransitionPayload) -> None:
        self.machine.refresh()
        self.change_content(payload)

    def _on_transition_in(self, payload: TransitionPayload) -> None:
        self.machine.arrive()
        self.change_page_in()
        self.machine.settle()

    def _on_initialized(self, payload: TransitionPayload) -> None:
        self.machine.ready()
        self.init_page(payload)

    def _on_same_target(self, payload: TransitionPayload) -> None:
        self.machine.repeat()
        try:
            self.same_page()
        finally:
            self.machine.settle()

    # -- Bus handlers --

    def _on_root_click(self, event: Any = None) -> None:
        self.dom.remove_class(self.dom.html, *self.config.offcanvas_classes)
        self.emitter.fire(ROOT_CLICKED)

    def _on_project_ended(self) -> None:
        if not self.is_pop:
            self._spawn(self.route(self.root))

    # -- Background work --

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background navigation failed", exc_info=exc)

    async def drain(self) -> None:
        """Wait for background navigations started by announcements."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def phase(self) -> str:
        return self.machine.phase
