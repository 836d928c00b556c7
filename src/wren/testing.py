"""Test utilities for wren applications.

Provides a page builder, a mocked site behind ``httpx.MockTransport``,
and recording stand-ins for the sibling components and the animator::

    site = MockSite({"/": page_markup("index", "home")})
    app = App(markup=site.pages["/"], http_client=site.client())
"""

import json
from typing import Any

import httpx

DEFAULT_APP_TREE: list[dict[str, Any]] = [
    {
        "collection": {"id": "work", "fullUrl": "/work/"},
        "items": [{"collection": {"id": "project-a"}}, {"collection": {"id": "project-b"}}],
    },
    {
        "collection": {"id": "press", "fullUrl": "/press/"},
        "items": [{"collection": {"id": "article-a"}}],
    },
]


def page_markup(
    page_type: str = "index",
    page_id: str = "work",
    body: str = "<p>Work</p>",
    *,
    tiles: tuple[str, ...] = ("/some-project/",),
    app_tree: list[dict[str, Any]] | None = None,
) -> str:
    """Render a full page in the shape the site serves."""
    tree = json.dumps(DEFAULT_APP_TREE if app_tree is None else app_tree).replace("'", "&#39;")
    tile_html = "".join(f'<a class="js-index-tile" href="{href}">{href}</a>' for href in tiles)
    return (
        "<!DOCTYPE html>"
        '<html class="is-clipped is-offcanvas"><head><title>Garber</title></head>'
        '<body class="is-clipped">'
        f"<div class=\"js-navi\" data-app-tree='{tree}'></div>"
        '<a class="js-root" href="#">Garber</a>'
        '<main class="js-main" id="is-main--garberco">'
        f'<div class="js-main--garberco">{tile_html}</div>'
        f'<div class="js-page" data-type="{page_type}" data-id="{page_id}">{body}</div>'
        "</main>"
        "</body></html>"
    )


class MockSite:
    """Serves canned pages through ``httpx.MockTransport``.

    ``?format=json`` requests are answered from *json_pages*, everything
    else from *pages*; unknown paths get a 404. Paths listed in
    ``errors`` answer with that status instead. Every request is
    recorded as ``(path, format)``.
    """

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        json_pages: dict[str, Any] | None = None,
        errors: dict[str, int] | None = None,
    ) -> None:
        self.pages = dict(pages or {})
        self.json_pages = dict(json_pages or {})
        self.errors = dict(errors or {})
        self.requests: list[tuple[str, str | None]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        fmt = request.url.params.get("format")
        self.requests.append((path, fmt))
        if path in self.errors:
            return httpx.Response(self.errors[path])
        if fmt == "json" and path in self.json_pages:
            return httpx.Response(200, json=self.json_pages[path])
        if fmt != "json" and path in self.pages:
            return httpx.Response(200, text=self.pages[path])
        return httpx.Response(404, text="Not Found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


class RecordingClosable:
    """Overlay/gallery stand-in counting ``close()`` calls."""

    def __init__(self) -> None:
        self.closed = 0

    def close(self) -> None:
        self.closed += 1


class RecordingDetailView:
    """Detail view stand-in recording the paths it was asked to open."""

    def __init__(self, active: bool = False) -> None:
        self.active = active
        self.opened: list[str] = []

    def is_active(self) -> bool:
        return self.active

    def open(self, path: str) -> None:
        self.opened.append(path)


class RecordedTween:
    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def finish(self) -> None:
        """Jump to the end value and run the completion callback."""
        self.kwargs["update"](self.kwargs["end"])
        if self.kwargs.get("complete") is not None:
            self.kwargs["complete"]()


class RecordingAnimator:
    """Animator that records tweens instead of running them."""

    def __init__(self) -> None:
        self.tweens: list[RecordedTween] = []

    def tween(self, **kwargs: Any) -> RecordedTween:
        tween = RecordedTween(**kwargs)
        self.tweens.append(tween)
        return tween
