#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_walker.py
"""Unit tests for the recursive tree walker.

Tests cover:
- Children-before-parent render order on parsed and generic trees
- Cursor/tree misalignment detection
- Depth limiting
- Wrapping of unexpected renderer failures

"""

from dataclasses import dataclass, field

import pytest
from bs4 import BeautifulSoup
from hypothesis import given
from utils import html_documents

from htmlmark.dom import child_nodes
from htmlmark.exceptions import DepthLimitError, RenderingError, TraversalError, ValidationError
from htmlmark.iterator import TreeIterator
from htmlmark.renderers import GFM_RENDERER
from htmlmark.walker import render_document, walk


@dataclass
class Node:
    label: str
    kids: list = field(default_factory=list)


def kids_of(node: Node) -> list:
    return node.kids


class RecordingRenderer:
    """Records every node it is asked to render and echoes the children."""

    def __init__(self) -> None:
        self.seen: list = []

    def convert(self, node, child_markdown: str) -> str:
        self.seen.append(node)
        return child_markdown


class BracketRenderer:
    def convert(self, node, child_markdown: str) -> str:
        return f"({node.label}{child_markdown})"


def postorder(node, children=child_nodes) -> list:
    order: list = []
    for child in children(node):
        order.extend(postorder(child, children))
    order.append(node)
    return order


@pytest.mark.unit
class TestRenderOrder:
    """Tests for the order in which nodes reach the renderer."""

    def test_generic_tree(self) -> None:
        tree = Node("a", [Node("b", [Node("c")]), Node("d")])
        result = walk(_started(TreeIterator(tree, children=kids_of)), BracketRenderer(), children=kids_of)
        assert result == "(a(b(c))(d))"

    def test_forest(self) -> None:
        iterator = TreeIterator(Node("x"), Node("y", [Node("z")]), children=kids_of)
        assert render_document(iterator, BracketRenderer(), children=kids_of) == "(x)(y(z))"

    def test_leaf_gets_empty_child_markdown(self) -> None:
        captured: list[str] = []

        class Capture:
            def convert(self, node, child_markdown):
                captured.append(child_markdown)
                return node.label

        render_document(TreeIterator(Node("leaf"), children=kids_of), Capture(), children=kids_of)
        assert captured == [""]

    def test_parsed_document_is_rendered_in_postorder(self) -> None:
        soup = BeautifulSoup("<div><p>a</p><p>b<em>c</em></p></div>", "html.parser")
        recorder = RecordingRenderer()
        render_document(TreeIterator(soup), recorder)
        assert [id(node) for node in recorder.seen] == [id(node) for node in postorder(soup)]

    @pytest.mark.property
    @given(html_documents)
    def test_render_order_matches_postorder(self, markup: str) -> None:
        soup = BeautifulSoup(markup, "html.parser")
        recorder = RecordingRenderer()
        render_document(TreeIterator(soup), recorder)
        assert [id(node) for node in recorder.seen] == [id(node) for node in postorder(soup)]

    @pytest.mark.property
    @given(html_documents)
    def test_rendering_is_deterministic(self, markup: str) -> None:
        first = render_document(TreeIterator(BeautifulSoup(markup, "html.parser")), GFM_RENDERER)
        second = render_document(TreeIterator(BeautifulSoup(markup, "html.parser")), GFM_RENDERER)
        assert first == second

    def test_cursor_rests_on_last_node_of_subtree(self) -> None:
        last = Node("c")
        tree = Node("a", [Node("b", [last]), Node("d")])
        iterator = TreeIterator(tree, children=kids_of)
        iterator.advance()
        iterator.advance()
        walk(iterator, BracketRenderer(), children=kids_of)
        assert iterator.current() is last


@pytest.mark.unit
class TestTraversalErrors:
    """Tests for contract violations between the iterator and the walker."""

    def test_misaligned_cursor(self) -> None:
        soup = BeautifulSoup("<p><b>x</b><i>y</i></p>", "html.parser")
        iterator = _started(TreeIterator(soup.p))

        def reversed_children(node):
            return tuple(reversed(child_nodes(node)))

        with pytest.raises(TraversalError, match="expected child"):
            walk(iterator, GFM_RENDERER, children=reversed_children)

    def test_iterator_exhausted_early(self) -> None:
        tree = Node("a", [Node("b")])
        ghost = Node("ghost")

        def kids_with_ghost(node: Node) -> list:
            return node.kids + [ghost] if node.label == "a" else node.kids

        iterator = _started(TreeIterator(tree, children=kids_of))
        with pytest.raises(TraversalError, match="exhausted"):
            walk(iterator, BracketRenderer(), children=kids_with_ghost)

    def test_traversal_error_is_a_rendering_error(self) -> None:
        assert issubclass(TraversalError, RenderingError)


@pytest.mark.unit
class TestDepthLimit:
    """Tests for the nesting guard."""

    def test_deep_tree_rejected(self) -> None:
        soup = BeautifulSoup("<div>" * 20 + "x" + "</div>" * 20, "html.parser")
        with pytest.raises(DepthLimitError) as exc_info:
            render_document(TreeIterator(soup), GFM_RENDERER, max_depth=5)
        assert exc_info.value.max_depth == 5

    def test_tree_at_limit_accepted(self) -> None:
        # document -> div -> div -> text is three levels below the root
        soup = BeautifulSoup("<div><div>x</div></div>", "html.parser")
        assert render_document(TreeIterator(soup), GFM_RENDERER, max_depth=3).strip() == "x"


@pytest.mark.unit
class TestRendererFailures:
    """Tests for exceptions raised inside renderers."""

    def test_unexpected_exception_wrapped(self) -> None:
        class Broken:
            def convert(self, node, child_markdown):
                raise KeyError("boom")

        with pytest.raises(RenderingError) as exc_info:
            render_document(TreeIterator(Node("a"), children=kids_of), Broken(), children=kids_of)
        assert isinstance(exc_info.value.original_error, KeyError)
        assert exc_info.value.rendering_stage == "node_rendering"

    def test_library_errors_propagate_unchanged(self) -> None:
        error = ValidationError("bad")

        class Strict:
            def convert(self, node, child_markdown):
                raise error

        with pytest.raises(ValidationError) as exc_info:
            render_document(TreeIterator(Node("a"), children=kids_of), Strict(), children=kids_of)
        assert exc_info.value is error


def _started(iterator: TreeIterator) -> TreeIterator:
    iterator.advance()
    return iterator
