"""Tests for wren.app — the composition root — and wren.config."""

import pytest

import wren
from wren.app import App
from wren.config import AppConfig, NavigatorConfig, StoreConfig
from wren.errors import ConfigurationError
from wren.navigation import Navigator
from wren.state import EphemeralState
from wren.storage import FileStorage
from wren.testing import page_markup


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.store.storage_key == "garberco-cache"
        assert config.navigator.root_url_id == "garberco"
        assert config.navigator.simple_routes == ("/", "/about/", "/index/")
        assert config.base_url == "http://localhost:8000"

    def test_api_base_url_overrides_origin(self) -> None:
        config = AppConfig(origin="https://garber.co", api_base_url="https://api.garber.co/")
        assert config.base_url == "https://api.garber.co"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            AppConfig().origin = "x"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "config",
        [
            AppConfig(store=StoreConfig(storage_key="")),
            AppConfig(store=StoreConfig(storage_key="same", probe_key="same")),
            AppConfig(navigator=NavigatorConfig(root_url_id="")),
            AppConfig(fetch_timeout=0),
            AppConfig(origin="garber.co"),
        ],
    )
    def test_invalid(self, config: AppConfig) -> None:
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_app_validates(self) -> None:
        with pytest.raises(ConfigurationError):
            App(AppConfig(fetch_timeout=-1))


class TestApp:
    def test_services_are_built_once(self) -> None:
        app = App(markup=page_markup())
        assert app.dom is app.dom
        assert app.history is app.history
        assert app.emitter is app.emitter
        assert app.engine is app.engine
        assert app.navigator is app.navigator
        assert app.navigator.store is app.store
        assert app.engine.history is app.history

    def test_injected_state_is_kept(self) -> None:
        app = App(markup=page_markup())
        state = EphemeralState()
        navigator = Navigator(
            dom=app.dom,
            engine=app.engine,
            api=app.api,
            emitter=app.emitter,
            history=app.history,
            store=app.store,
            state=state,
        )
        assert navigator.state is state

    def test_navigator_uses_app_config(self) -> None:
        app = App(AppConfig(navigator=NavigatorConfig(root_url_id="studio")))
        assert app.navigator.config.root_url_id == "studio"

    def test_file_backed_store(self, tmp_path) -> None:
        storage = FileStorage(tmp_path / "session.json")
        app = App(storage=storage)
        app.store.set("Some Key!", {"a": 1})
        assert '"some-key": {"a": 1}' in storage.get_item("garberco-cache")

    @pytest.mark.asyncio
    async def test_start_and_close(self, make_app) -> None:
        app = make_app("/work/")
        navigator = await app.start()
        assert navigator.phase == "idle"
        await app.close()


class TestPublicApi:
    def test_lazy_exports(self) -> None:
        assert wren.App is App
        assert wren.AppConfig is AppConfig
        assert wren.Store.__name__ == "Store"
        assert callable(wren.parse_doc)
        assert issubclass(wren.FetchFailure, wren.WrenError)

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError):
            wren.nonexistent  # noqa: B018
