"""App — the composition root.

Builds and owns one instance of every navigation service for the life
of the process. Services are created lazily on first access and never
replaced::

    app = App(AppConfig(origin="https://garber.co"), markup=initial_html)
    await app.start()
    await app.navigator.route("/about/")
    await app.close()

The single-Store guarantee lives here: the first ``provide_store()``
call builds the Store (running its flush + persist initialization);
every later call returns that instance and ignores its arguments.
"""

import logging

import httpx

from wren.api import ApiClient
from wren.bus import Emitter
from wren.components import Components
from wren.config import AppConfig, StoreConfig
from wren.dom import Dom
from wren.history import History
from wren.navigation import Navigator
from wren.state import EphemeralState
from wren.storage import MemoryStorage, SessionStorage
from wren.store import Store
from wren.transitions import PageController
from wren.tween import Animator

logger = logging.getLogger("wren.app")


class App:
    """Process-wide owner of the navigation services."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        markup: str = "",
        path: str = "/",
        storage: SessionStorage | None = None,
        http_client: httpx.AsyncClient | None = None,
        components: Components | None = None,
        animator: Animator | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.config.validate()

        self._markup = markup
        self._path = path
        self._storage = storage
        self._http_client = http_client
        self._components = components or Components()
        self._animator = animator

        self._store: Store | None = None
        self._api: ApiClient | None = None
        self._dom: Dom | None = None
        self._history: History | None = None
        self._emitter: Emitter | None = None
        self._engine: PageController | None = None
        self._navigator: Navigator | None = None

    # -- Services --

    def provide_store(
        self,
        config: StoreConfig | None = None,
        storage: SessionStorage | None = None,
    ) -> Store:
        """Return the application's Store, building it on first call."""
        if self._store is not None:
            if config is not None and config != self._store.config:
                logger.debug("Store already built; ignoring new configuration")
            return self._store

        self._store = Store(
            config or self.config.store,
            self._resolve_storage(storage),
        )
        return self._store

    def _resolve_storage(self, storage: SessionStorage | None) -> SessionStorage:
        # Backends define __len__, so an empty one is falsy
        if storage is not None:
            return storage
        if self._storage is not None:
            return self._storage
        return MemoryStorage()

    @property
    def store(self) -> Store:
        return self.provide_store()

    @property
    def api(self) -> ApiClient:
        if self._api is None:
            self._api = ApiClient(
                self.config.base_url,
                client=self._http_client,
                timeout=self.config.fetch_timeout,
            )
        return self._api

    @property
    def dom(self) -> Dom:
        if self._dom is None:
            self._dom = Dom(self._markup, self.config.selectors)
        return self._dom

    @property
    def history(self) -> History:
        if self._history is None:
            self._history = History(self.config.origin, self._path)
        return self._history

    @property
    def emitter(self) -> Emitter:
        if self._emitter is None:
            self._emitter = Emitter()
        return self._emitter

    @property
    def engine(self) -> PageController:
        if self._engine is None:
            self._engine = PageController(self.api, self.history)
        return self._engine

    @property
    def navigator(self) -> Navigator:
        if self._navigator is None:
            self._navigator = Navigator(
                dom=self.dom,
                engine=self.engine,
                api=self.api,
                emitter=self.emitter,
                history=self.history,
                store=self.store,
                config=self.config.navigator,
                animator=self._animator,
                components=self._components,
                state=EphemeralState(),
            )
        return self._navigator

    # -- Lifecycle --

    async def start(self) -> Navigator:
        """Initialize the navigator against the initial page."""
        navigator = self.navigator
        await navigator.init()
        return navigator

    async def close(self) -> None:
        if self._navigator is not None:
            await self._navigator.drain()
        if self._api is not None:
            await self._api.aclose()
