"""Shared fixtures: a small site, a mocked HTTP layer and recording components."""

from typing import Any

import pytest

from wren.app import App
from wren.components import Components
from wren.config import AppConfig
from wren.testing import (
    MockSite,
    RecordingAnimator,
    RecordingClosable,
    RecordingDetailView,
    page_markup,
)

SITE_PAGES: dict[str, str] = {
    "/": page_markup("index", "home", "<p>Home</p>"),
    "/work/": page_markup("index", "work", "<p>Work</p>"),
    "/about/": page_markup("offcanvas", "about", "<p>About</p>"),
    "/index/": page_markup("offcanvas", "index", "<p>Index</p>"),
    "/some-project/": page_markup("project", "project-a", "<p>Some project</p>"),
}

SITE_JSON: dict[str, Any] = {
    "/work/": {"collection": {"id": "work"}, "items": [{"id": "project-a"}, {"id": "project-b"}]},
    "/": {"collection": {"id": "home"}, "items": []},
}


@pytest.fixture
def site() -> MockSite:
    return MockSite(SITE_PAGES, SITE_JSON)


@pytest.fixture
def overlay() -> RecordingClosable:
    return RecordingClosable()


@pytest.fixture
def gallery() -> RecordingClosable:
    return RecordingClosable()


@pytest.fixture
def detail() -> RecordingDetailView:
    return RecordingDetailView()


@pytest.fixture
def animator() -> RecordingAnimator:
    return RecordingAnimator()


@pytest.fixture
def make_app(site, overlay, gallery, detail, animator):
    """Factory: ``make_app(path)`` builds an App on the page served at *path*."""

    def factory(path: str = "/work/", markup: str | None = None, **config: Any) -> App:
        return App(
            AppConfig(origin="https://garber.test", **config),
            markup=site.pages.get(path, "") if markup is None else markup,
            path=path,
            http_client=site.client(),
            components=Components(overlay=overlay, gallery=gallery, detail=detail),
            animator=animator,
        )

    return factory
