#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/renderers/base.py
"""Rule-table renderer and the renderer protocol.

A renderer turns one node, together with the Markdown already produced for
its children, into a Markdown fragment. The built-in renderers are instances
of ``Renderer``: an explicit table mapping selectors to rule functions, with
children passed through unchanged for anything the table does not list.

Selectors
---------
- ``"P"``, ``"H1"``: an element by tag name (case-insensitive)
- ``"TEXT_NODE"``, ``"COMMENT_NODE"``: a non-element node by kind
- ``"PRE CODE"``: a node whose direct parent matches the first key;
  parent-qualified selectors win over plain ones
- ``"EM, I"``: several selectors sharing one rule

"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from htmlmark.dom import node_key

logger = logging.getLogger(__name__)

RuleFunction = Callable[[Any, str], str]


@runtime_checkable
class MarkdownRenderer(Protocol):
    """Protocol for node renderers.

    Any object with a ``convert(node, child_markdown) -> str`` method can be
    passed as ``ConversionOptions.renderer``. Implementations must be pure:
    the same node and child text always produce the same fragment, and the
    traversal cursor is never touched.

    """

    def convert(self, node: Any, child_markdown: str) -> str:
        """Render ``node`` given the already converted Markdown of its children."""
        ...


def parse_selectors(selectors: str) -> list[str]:
    """Split and normalize a comma-separated selector string.

    Examples
    --------
        >>> parse_selectors("em, i")
        ['EM', 'I']
        >>> parse_selectors("pre   code")
        ['PRE CODE']

    """
    parsed = []
    for selector in selectors.split(","):
        parts = selector.upper().split()
        if not parts:
            continue
        if len(parts) > 2:
            raise ValueError(f"Selector {selector.strip()!r} may name at most a parent and a node")
        parsed.append(" ".join(parts))
    return parsed


class Renderer:
    """Markdown renderer driven by a table of rules.

    Parameters
    ----------
    rules : Mapping[str, RuleFunction]
        Selector strings mapped to rule functions ``(node, child_markdown) -> str``
    name : str, default "custom"
        Label used in logs and ``repr``

    Examples
    --------
    Deriving a renderer that drops images:

        >>> from htmlmark.renderers import GFM_RENDERER
        >>> no_images = GFM_RENDERER.extend({"IMG": lambda node, content: ""}, name="gfm-no-images")

    """

    def __init__(self, rules: Mapping[str, RuleFunction], name: str = "custom"):
        self.name = name
        self._rules: dict[str, RuleFunction] = {}
        for selectors, rule in rules.items():
            if not callable(rule):
                raise TypeError(f"Rule for {selectors!r} is not callable")
            for selector in parse_selectors(selectors):
                self._rules[selector] = rule

    @property
    def rules(self) -> Mapping[str, RuleFunction]:
        """Read-only view of the normalized rule table."""
        return MappingProxyType(self._rules)

    def find_rule(self, node: Any) -> RuleFunction | None:
        """Look up the rule for ``node``, parent-qualified selectors first."""
        key = node_key(node)
        parent = getattr(node, "parent", None)
        if parent is not None:
            rule = self._rules.get(f"{node_key(parent)} {key}")
            if rule is not None:
                return rule
        return self._rules.get(key)

    def convert(self, node: Any, child_markdown: str) -> str:
        """Render ``node``; nodes without a rule pass their children through."""
        rule = self.find_rule(node)
        if rule is None:
            return child_markdown
        return rule(node, child_markdown)

    def extend(self, rules: Mapping[str, RuleFunction], name: str | None = None) -> "Renderer":
        """Return a new renderer with ``rules`` layered over this one's."""
        merged: dict[str, RuleFunction] = dict(self._rules)
        merged.update(Renderer(rules)._rules)
        logger.debug("Extending renderer %s with %d rule(s)", self.name, len(rules))
        return Renderer(merged, name=name or self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, rules={len(self._rules)})"
