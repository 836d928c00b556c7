"""Wren — single-page-application navigation core.

Coordinates content fetches, DOM swaps, transition lifecycles, history
synchronization and short-lived per-navigation state, backed by a small
session-storage cache.

Basic usage::

    from wren import App, AppConfig

    app = App(AppConfig(origin="https://garber.co"), markup=initial_html, path="/work/")
    navigator = await app.start()
    await navigator.route("/about/")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "EphemeralState",
    "FetchFailure",
    "Navigator",
    "NavigatorConfig",
    "ParsedDocument",
    "StorageUnavailable",
    "Store",
    "StoreConfig",
    "WrenError",
    "parse_doc",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name in ("AppConfig", "NavigatorConfig", "StoreConfig"):
        from wren import config as _config

        return getattr(_config, name)

    if name == "Navigator":
        from wren.navigation import Navigator

        return Navigator

    if name == "Store":
        from wren.store import Store

        return Store

    if name == "EphemeralState":
        from wren.state import EphemeralState

        return EphemeralState

    if name in ("ParsedDocument", "parse_doc"):
        from wren import document as _document

        return getattr(_document, name)

    if name in ("WrenError", "ConfigurationError", "FetchFailure", "StorageUnavailable"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
