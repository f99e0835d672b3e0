#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/renderers/__init__.py
"""Markdown renderers.

Two interchangeable rule tables ship with the library:

- ``BASIC_RENDERER``: constructs shared by every Markdown dialect
- ``GFM_RENDERER``: the basic table extended with GitHub Flavored Markdown
  (strikethrough, fenced code, pipe tables, task lists)

Any object satisfying ``MarkdownRenderer`` can replace them.
"""

from htmlmark.renderers.base import MarkdownRenderer, Renderer, RuleFunction, parse_selectors
from htmlmark.renderers.basic import BASIC_RENDERER, BASIC_RULES
from htmlmark.renderers.gfm import GFM_RENDERER, GFM_RULES


def get_renderer(extended_syntax: bool = True) -> Renderer:
    """Return the built-in renderer for the requested dialect."""
    return GFM_RENDERER if extended_syntax else BASIC_RENDERER


__all__ = [
    "BASIC_RENDERER",
    "BASIC_RULES",
    "GFM_RENDERER",
    "GFM_RULES",
    "MarkdownRenderer",
    "Renderer",
    "RuleFunction",
    "get_renderer",
    "parse_selectors",
]
