"""HTML document parsing for content swaps.

``parse_doc()`` turns a fetched response body into a detached
BeautifulSoup tree and pulls out the page fragment the navigator swaps
into the live page. Parsing uses the lenient ``html.parser`` backend:
malformed markup is repaired the way the backend repairs it, never
rejected.

``element_data()`` reads an element's ``data-*`` attributes into a
plain dict, decoding values the way jQuery's ``.data()`` does::

    <div data-type="index" data-id="5a1f" data-app-tree='[{"a": 1}]'>
    -> {"type": "index", "id": "5a1f", "app_tree": [{"a": 1}]}
"""

import json
import re
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup, Tag

_NUMBER_RE = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?$")
_LITERALS: dict[str, Any] = {"true": True, "false": False, "null": None}


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Result of ``parse_doc()``.

    Attributes:
        document: The whole parsed tree.
        page: The page-content element, or ``None`` when absent.
        page_html: Inner markup of ``page`` (``""`` when absent).
    """

    document: BeautifulSoup
    page: Tag | None
    page_html: str


def parse_doc(html: str, page_selector: str = ".js-page") -> ParsedDocument:
    """Parse *html* and extract the page fragment."""
    document = BeautifulSoup(html or "", "html.parser")
    page = document.select_one(page_selector)
    page_html = page.decode_contents() if page is not None else ""
    return ParsedDocument(document=document, page=page, page_html=page_html)


def _decode(raw: str) -> Any:
    if raw in _LITERALS:
        return _LITERALS[raw]
    if _NUMBER_RE.match(raw):
        return float(raw) if "." in raw else int(raw)
    if raw[:1] in ("{", "["):
        try:
            return json.loads(raw)
        except ValueError:
            return raw
    return raw


def element_data(element: Tag | None) -> dict[str, Any]:
    """Return *element*'s ``data-*`` attributes as a decoded dict."""
    if element is None:
        return {}

    data: dict[str, Any] = {}
    for name, raw in element.attrs.items():
        if not name.startswith("data-"):
            continue
        if isinstance(raw, list):  # multi-valued attributes come back split
            raw = " ".join(raw)
        data[name[5:].replace("-", "_")] = _decode(raw)
    return data
