"""Configuration.

Every config object is a frozen dataclass and is never mutated after
construction. ``AppConfig.validate()`` checks cross-field invariants.
"""

from dataclasses import dataclass, field

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Persistent cache settings.

    ``enable_storage=False`` keeps the cache in memory only, even when
    session storage works.
    """

    enable_storage: bool = True
    storage_key: str = "garberco-cache"
    probe_key: str = "garberco-test"


@dataclass(frozen=True, slots=True)
class DomSelectors:
    """CSS selectors for the elements the navigator touches."""

    html: str = "html"
    body: str = "body"
    main: str = ".js-main"
    page: str = ".js-page"
    nav: str = ".js-navi"
    root: str = ".js-root"
    root_panel: str = ".js-main--garberco"
    tile: str = ".js-index-tile"


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Navigation lifecycle settings.

    ``simple_routes`` are the top-level paths handled in place on
    back/forward; every other path is treated as a detail view.
    """

    root_url_id: str = "garberco"
    main_id_prefix: str = "is-main--"
    offcanvas_classes: tuple[str, ...] = ("is-offcanvas", "is-offcanvas--about", "is-offcanvas--index")
    routing_class: str = "is-routing"
    clipped_class: str = "is-clipped"
    simple_routes: tuple[str, ...] = ("/", "/about/", "/index/")
    scroll_duration: float = 0.4  # seconds


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            origin="https://garber.co",
            store=StoreConfig(enable_storage=False),
        )
    """

    # Site
    origin: str = "http://localhost:8000"
    api_base_url: str | None = None  # Defaults to origin
    fetch_timeout: float = 30.0

    # Components
    store: StoreConfig = field(default_factory=StoreConfig)
    navigator: NavigatorConfig = field(default_factory=NavigatorConfig)
    selectors: DomSelectors = field(default_factory=DomSelectors)

    @property
    def base_url(self) -> str:
        return (self.api_base_url or self.origin).rstrip("/")

    def validate(self) -> None:
        """Raise ``ConfigurationError`` for settings that cannot work."""
        if not self.store.storage_key:
            msg = "StoreConfig.storage_key must not be empty."
            raise ConfigurationError(msg)
        if self.store.probe_key == self.store.storage_key:
            msg = "StoreConfig.probe_key must differ from storage_key."
            raise ConfigurationError(msg)
        if not self.navigator.root_url_id:
            msg = "NavigatorConfig.root_url_id must not be empty."
            raise ConfigurationError(msg)
        if self.fetch_timeout <= 0:
            msg = f"fetch_timeout must be positive, got {self.fetch_timeout!r}."
            raise ConfigurationError(msg)
        if not self.origin.startswith(("http://", "https://")):
            msg = f"origin must be an absolute http(s) URL, got {self.origin!r}."
            raise ConfigurationError(msg)
