#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_dom.py
"""Unit tests for markup parsing and node classification."""

import pytest
from bs4 import BeautifulSoup

from htmlmark.dom import (
    NodeKind,
    child_nodes,
    element_siblings,
    get_attribute,
    get_classes,
    is_block,
    is_element,
    is_text,
    node_key,
    node_kind,
    to_dom,
)
from htmlmark.exceptions import DependencyError


@pytest.mark.unit
class TestToDom:
    def test_parses_markup(self) -> None:
        soup = to_dom("<p>x</p>")
        assert isinstance(soup, BeautifulSoup)
        assert soup.p.get_text() == "x"

    def test_unknown_parser_backend(self) -> None:
        with pytest.raises(DependencyError):
            to_dom("<p>x</p>", parser="no-such-parser")

    def test_missing_optional_backend_names_package(self) -> None:
        try:
            import lxml  # noqa: F401
        except ImportError:
            with pytest.raises(DependencyError) as exc_info:
                to_dom("<p>x</p>", parser="lxml")
            assert exc_info.value.missing_packages == ["lxml"]
            assert "pip install lxml" in str(exc_info.value)
        else:
            pytest.skip("lxml is installed")


@pytest.mark.unit
class TestNodeKinds:
    """Tests for classification of bs4 nodes."""

    @pytest.fixture
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup("<!DOCTYPE html><p class='a b'>text<!-- note --></p>", "html.parser")

    def test_kinds(self, soup: BeautifulSoup) -> None:
        doctype = soup.contents[0]
        text, comment = soup.p.contents
        assert node_kind(soup) is NodeKind.DOCUMENT
        assert node_kind(soup.p) is NodeKind.ELEMENT
        assert node_kind(text) is NodeKind.TEXT
        assert node_kind(comment) is NodeKind.COMMENT
        assert node_kind(doctype) is NodeKind.DOCTYPE

    def test_keys(self, soup: BeautifulSoup) -> None:
        text, comment = soup.p.contents
        assert node_key(soup.p) == "P"
        assert node_key(text) == "TEXT_NODE"
        assert node_key(comment) == "COMMENT_NODE"
        assert node_key(soup) == "DOCUMENT_NODE"

    def test_child_nodes(self, soup: BeautifulSoup) -> None:
        assert isinstance(child_nodes(soup.p), tuple)
        assert len(child_nodes(soup.p)) == 2
        assert child_nodes(soup.p.contents[0]) == ()

    def test_predicates(self, soup: BeautifulSoup) -> None:
        assert is_element(soup.p)
        assert is_element(soup.p, "p", "div")
        assert not is_element(soup.p, "div")
        assert not is_element(soup)
        assert is_block(soup.p)
        assert is_text(soup.p.contents[0])
        assert not is_text(soup.p.contents[1])

    def test_attributes(self, soup: BeautifulSoup) -> None:
        assert get_attribute(soup.p, "class") == "a b"
        assert get_attribute(soup.p, "id", "none") == "none"
        assert get_classes(soup.p) == ["a", "b"]
        assert get_attribute(soup.p.contents[0], "class") == ""

    def test_element_siblings(self) -> None:
        soup = BeautifulSoup("<ul><li>a</li> <li>b</li></ul>", "html.parser")
        assert [li.get_text() for li in element_siblings(soup.li, "li")] == ["a", "b"]
