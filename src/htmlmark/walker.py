#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/walker.py
"""Recursive-descent conversion over a shared document-order cursor.

The walker never asks the tree for "the next node". Node identity comes from
the ``TreeIterator`` cursor, while the number of recursive calls at each level
comes from the tree's own child counts. Because the iterator enumerates in
preorder, advancing once per child and letting each recursive call consume
that child's whole subtree keeps the cursor exactly on the node the walker
expects next.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from htmlmark.constants import DEFAULT_MAX_DEPTH
from htmlmark.dom import child_nodes
from htmlmark.exceptions import DepthLimitError, HtmlMarkError, RenderingError, TraversalError
from htmlmark.iterator import TreeIterator
from htmlmark.renderers.base import MarkdownRenderer

logger = logging.getLogger(__name__)


def walk(
    iterator: TreeIterator,
    renderer: MarkdownRenderer,
    children: Callable[[Any], Sequence[Any]] = child_nodes,
    max_depth: int = DEFAULT_MAX_DEPTH,
    _depth: int = 0,
) -> str:
    """Convert the subtree rooted at the iterator's current node.

    On return the cursor rests on the last node of that subtree.

    Parameters
    ----------
    iterator : TreeIterator
        Cursor positioned on the subtree root
    renderer : MarkdownRenderer
        Renderer invoked once per node, children before parents
    children : callable, default child_nodes
        Child accessor; must agree with the one the iterator uses
    max_depth : int
        Deepest nesting level accepted

    Returns
    -------
    str
        Markdown for the subtree

    Raises
    ------
    TraversalError
        If the cursor is not on the expected child after advancing
    DepthLimitError
        If the subtree is nested deeper than ``max_depth``

    """
    if _depth > max_depth:
        raise DepthLimitError(max_depth)

    node = iterator.current()
    parts: list[str] = []

    for child in children(node):
        if not iterator.advance():
            raise TraversalError(f"Iterator exhausted before reaching a child of {_describe(node)}")
        if iterator.current() is not child:
            raise TraversalError(
                f"Iterator on {_describe(iterator.current())}, expected child {_describe(child)} of {_describe(node)}"
            )
        parts.append(walk(iterator, renderer, children, max_depth, _depth + 1))

    try:
        return renderer.convert(node, "".join(parts))
    except HtmlMarkError:
        raise
    except Exception as e:
        raise RenderingError(
            f"Renderer failed on {_describe(node)}: {e}", rendering_stage="node_rendering", original_error=e
        ) from e


def render_document(
    iterator: TreeIterator,
    renderer: MarkdownRenderer,
    children: Callable[[Any], Sequence[Any]] = child_nodes,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Convert every top-level tree the iterator yields and concatenate the results."""
    parts: list[str] = []
    while iterator.advance():
        parts.append(walk(iterator, renderer, children, max_depth))
    logger.debug("Rendered %d top-level node(s)", len(parts))
    return "".join(parts)


def _describe(node: Any) -> str:
    name = getattr(node, "name", None)
    if name:
        return f"<{name}>"
    text = str(node)
    return repr(text[:20] + "..." if len(text) > 20 else text)
