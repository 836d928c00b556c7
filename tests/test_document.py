"""Tests for wren.document — page parsing and data attributes."""

from bs4 import BeautifulSoup

from wren.document import element_data, parse_doc


class TestParseDoc:
    def test_extracts_page(self) -> None:
        doc = parse_doc('<html><body><div class="js-page" data-id="a"><p>Hi</p></div></body></html>')
        assert doc.page is not None
        assert doc.page_html == "<p>Hi</p>"
        assert doc.document.title is None

    def test_document_is_whole_tree(self) -> None:
        doc = parse_doc("<html><head><title>T</title></head><body></body></html>")
        assert doc.document.title.string == "T"

    def test_missing_page(self) -> None:
        doc = parse_doc("<html><body><main>no page</main></body></html>")
        assert doc.page is None
        assert doc.page_html == ""

    def test_empty_input(self) -> None:
        doc = parse_doc("")
        assert doc.page is None
        assert doc.page_html == ""

    def test_malformed_markup_is_tolerated(self) -> None:
        doc = parse_doc('<div class="js-page"><p>unclosed <b>bold</div>')
        assert doc.page is not None
        assert "unclosed" in doc.page_html

    def test_custom_selector(self) -> None:
        doc = parse_doc('<section id="content">x</section>', page_selector="#content")
        assert doc.page_html == "x"

    def test_first_match_wins(self) -> None:
        doc = parse_doc('<div class="js-page">one</div><div class="js-page">two</div>')
        assert doc.page_html == "one"


class TestElementData:
    def _tag(self, markup: str):
        return BeautifulSoup(markup, "html.parser").div

    def test_strings(self) -> None:
        assert element_data(self._tag('<div data-type="index" data-id="5a1f"></div>')) == {
            "type": "index",
            "id": "5a1f",
        }

    def test_hyphenated_keys(self) -> None:
        data = element_data(self._tag('<div data-full-url="/work/"></div>'))
        assert data == {"full_url": "/work/"}

    def test_json_values(self) -> None:
        data = element_data(self._tag("<div data-app-tree='[{\"a\": 1}]'></div>"))
        assert data == {"app_tree": [{"a": 1}]}

    def test_invalid_json_kept_as_string(self) -> None:
        data = element_data(self._tag('<div data-x="[not json"></div>'))
        assert data == {"x": "[not json"}

    def test_literals_and_numbers(self) -> None:
        data = element_data(
            self._tag('<div data-a="true" data-b="false" data-c="null" data-d="12" data-e="1.5"></div>')
        )
        assert data == {"a": True, "b": False, "c": None, "d": 12, "e": 1.5}

    def test_leading_zero_stays_string(self) -> None:
        assert element_data(self._tag('<div data-zip="02134"></div>')) == {"zip": "02134"}

    def test_ignores_other_attributes(self) -> None:
        assert element_data(self._tag('<div class="a" id="b" data-c="d"></div>')) == {"c": "d"}

    def test_none(self) -> None:
        assert element_data(None) == {}
