#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/dom.py
"""Markup parsing and node classification.

This module is the boundary to the markup parser. ``to_dom`` turns raw HTML
into a BeautifulSoup tree, and the remaining helpers give the rest of the
library a small, read-only view of that tree: the kind of each node, its
dispatch key and its ordered children.

Nothing in this module (or anywhere in the conversion core) mutates the
parsed tree.

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Sequence

from bs4 import BeautifulSoup
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    PageElement,
    ProcessingInstruction,
    Tag,
)
from bs4.exceptions import FeatureNotFound

from htmlmark.constants import BLOCK_TAGS, DEFAULT_PARSER, PARSER_PACKAGES
from htmlmark.exceptions import DependencyError, ParsingError

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Kinds of nodes found in a parsed document tree."""

    DOCUMENT = "DOCUMENT_NODE"
    ELEMENT = "ELEMENT_NODE"
    TEXT = "TEXT_NODE"
    COMMENT = "COMMENT_NODE"
    DOCTYPE = "DOCTYPE_NODE"
    CDATA = "CDATA_SECTION_NODE"
    PROCESSING_INSTRUCTION = "PROCESSING_INSTRUCTION_NODE"
    DECLARATION = "DECLARATION_NODE"


def to_dom(markup: str, parser: str = DEFAULT_PARSER) -> BeautifulSoup:
    """Parse markup into a document tree.

    Parameters
    ----------
    markup : str
        HTML text to parse
    parser : str, default "html.parser"
        BeautifulSoup tree builder to use

    Returns
    -------
    BeautifulSoup
        Root of the parsed document

    Raises
    ------
    DependencyError
        If the requested parser backend is not installed
    ParsingError
        If the parser fails on the markup

    """
    try:
        soup = BeautifulSoup(markup, parser)
    except FeatureNotFound as e:
        missing = [PARSER_PACKAGES[parser]] if parser in PARSER_PACKAGES else []
        raise DependencyError(f"{parser} parser", missing_packages=missing, original_error=e) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse markup: {e}", parsing_stage="markup_parsing", original_error=e) from e

    logger.debug("Parsed %d characters of markup with %s", len(markup), parser)
    return soup


def node_kind(node: PageElement) -> NodeKind:
    """Classify a parsed node.

    The checks run from the most to the least specific bs4 class, since
    comments, doctypes and friends are all ``NavigableString`` subclasses and
    the document itself is a ``Tag``.
    """
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, Comment):
        return NodeKind.COMMENT
    if isinstance(node, Doctype):
        return NodeKind.DOCTYPE
    if isinstance(node, CData):
        return NodeKind.CDATA
    if isinstance(node, ProcessingInstruction):
        return NodeKind.PROCESSING_INSTRUCTION
    if isinstance(node, Declaration):
        return NodeKind.DECLARATION
    return NodeKind.TEXT


def node_key(node: PageElement) -> str:
    """Return the dispatch key of a node.

    Elements are keyed by their upper-cased tag name (``"P"``, ``"H1"``);
    every other node by its kind (``"TEXT_NODE"``, ``"COMMENT_NODE"``, ...).
    """
    kind = node_kind(node)
    if kind is NodeKind.ELEMENT:
        return str(node.name).upper()
    return kind.value


def child_nodes(node: Any) -> Sequence[PageElement]:
    """Return the ordered children of a node (empty for non-containers)."""
    if isinstance(node, Tag):
        return tuple(node.contents)
    return ()


def is_element(node: Any, *names: str) -> bool:
    """Check whether ``node`` is an element, optionally with one of ``names``."""
    if not isinstance(node, Tag) or isinstance(node, BeautifulSoup):
        return False
    return not names or str(node.name).upper() in {name.upper() for name in names}


def is_block(node: Any) -> bool:
    """Check whether ``node`` is a block-level element."""
    return is_element(node) and str(node.name).upper() in BLOCK_TAGS


def is_text(node: Any) -> bool:
    """Check whether ``node`` is a plain text node."""
    return isinstance(node, NavigableString) and node_kind(node) is NodeKind.TEXT


def get_attribute(node: Any, name: str, default: str = "") -> str:
    """Read an attribute as a string.

    Multi-valued attributes such as ``class`` are joined with spaces.
    """
    if not isinstance(node, Tag):
        return default
    value = node.get(name)
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def get_classes(node: Any) -> list[str]:
    """Return the class list of an element."""
    return get_attribute(node, "class").split()


def element_siblings(node: Any, *names: str) -> list[Tag]:
    """Return the element children of ``node``'s parent, filtered by tag name."""
    parent = node.parent
    if parent is None:
        return [node] if is_element(node, *names) else []
    return [child for child in parent.contents if is_element(child, *names)]
