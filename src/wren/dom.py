"""Headless DOM facade.

The navigator never touches a document directly; it goes through a
``Dom`` built from the initial page markup. The facade covers exactly
what navigation needs:

- class toggling (set/clear, never cumulative)
- ``data-*`` metadata reads
- ``id`` / attribute writes and inner-markup replacement
- element detachment (handles stay usable after detach)
- tile lookup by link path
- scroll offsets and simple event handlers, which markup cannot hold
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from bs4 import BeautifulSoup, Tag

from wren.config import DomSelectors
from wren.document import element_data

Handler: TypeAlias = Callable[[Any], Any]


class Dom:
    """Query and mutate a parsed page.

    Element handles (``html``, ``body``, ``main``, ``page``, ``nav``,
    ``root``, ``root_panel``) are resolved once at construction, like a
    cached ``core.dom`` lookup table. A handle is ``None`` when its
    selector matches nothing; every method accepts ``None`` and does
    nothing with it.
    """

    __slots__ = (
        "_handlers",
        "_scroll",
        "_selectors",
        "body",
        "html",
        "main",
        "nav",
        "page",
        "root",
        "root_panel",
        "soup",
    )

    def __init__(self, markup: str, selectors: DomSelectors | None = None) -> None:
        self._selectors = selectors or DomSelectors()
        self.soup = BeautifulSoup(markup, "html.parser")
        self._handlers: dict[tuple[int, str], list[Handler]] = {}
        self._scroll: dict[int, float] = {}

        s = self._selectors
        self.html = self.soup.select_one(s.html)
        self.body = self.soup.select_one(s.body)
        self.main = self.soup.select_one(s.main)
        self.page = self.soup.select_one(s.page)
        self.nav = self.soup.select_one(s.nav)
        self.root = self.soup.select_one(s.root)
        self.root_panel = self.soup.select_one(s.root_panel)

    @property
    def selectors(self) -> DomSelectors:
        return self._selectors

    # -- Classes --

    def add_class(self, element: Tag | None, *names: str) -> None:
        if element is None:
            return
        classes = list(element.get("class") or [])
        classes.extend(name for name in names if name not in classes)
        element["class"] = classes

    def remove_class(self, element: Tag | None, *names: str) -> None:
        if element is None:
            return
        classes = [name for name in element.get("class") or [] if name not in names]
        if classes:
            element["class"] = classes
        elif "class" in element.attrs:
            del element["class"]

    def has_class(self, element: Tag | None, name: str) -> bool:
        return element is not None and name in (element.get("class") or [])

    # -- Attributes and content --

    def data(self, element: Tag | None) -> dict[str, Any]:
        return element_data(element)

    def set_attr(self, element: Tag | None, name: str, value: str) -> None:
        if element is not None:
            element[name] = value

    def set_id(self, element: Tag | None, value: str) -> None:
        self.set_attr(element, "id", value)

    def set_inner_html(self, element: Tag | None, markup: str) -> None:
        """Replace *element*'s children with nodes parsed from *markup*."""
        if element is None:
            return
        element.clear()
        fragment = BeautifulSoup(markup, "html.parser")
        for node in list(fragment.contents):
            element.append(node.extract())

    def detach(self, element: Tag | None) -> None:
        """Remove *element* from the tree; the handle stays usable."""
        if element is not None and element.parent is not None:
            element.extract()

    def find_tile(self, path: str) -> Tag | None:
        """Return the first index tile whose ``href`` contains *path*."""
        for tile in self.soup.select(self._selectors.tile):
            href = tile.get("href") or ""
            if path and path in href:
                return tile
        return None

    # -- Scroll offsets --

    def scroll_top(self, element: Tag | None) -> float:
        if element is None:
            return 0.0
        return self._scroll.get(id(element), 0.0)

    def set_scroll_top(self, element: Tag | None, value: float) -> None:
        if element is not None:
            self._scroll[id(element)] = max(0.0, float(value))

    # -- Events --

    def on(self, element: Tag | None, event: str, handler: Handler) -> None:
        if element is not None:
            self._handlers.setdefault((id(element), event), []).append(handler)

    def trigger(self, element: Tag | None, event: str, detail: Any = None) -> None:
        """Call every *event* handler bound to *element*, in bind order."""
        if element is None:
            return
        for handler in list(self._handlers.get((id(element), event), [])):
            handler(detail)

    def render(self) -> str:
        return str(self.soup)
