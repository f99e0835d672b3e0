#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/options.py
"""Configuration options for HTML to Markdown conversion.

Options are frozen dataclasses. Field metadata carries the help text and CLI
naming used by ``htmlmark.cli_builder`` to generate command-line flags.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from htmlmark.constants import (
    DEFAULT_EXTENDED_SYNTAX,
    DEFAULT_MAX_DEPTH,
    DEFAULT_PARSER,
    SUPPORTED_PARSERS,
)
from htmlmark.exceptions import ValidationError
from htmlmark.renderers import MarkdownRenderer, get_renderer


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        ValidationError
            If a keyword does not name a field

        """
        try:
            return replace(self, **kwargs)
        except TypeError as e:
            raise ValidationError(
                f"Unknown option for {self.__class__.__name__}: {e}",
                parameter_name=", ".join(sorted(kwargs)),
                parameter_value=kwargs,
                original_error=e,
            ) from e


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Configuration options for HTML to Markdown conversion.

    Parameters
    ----------
    extended_syntax : bool, default True
        Render GitHub Flavored Markdown (strikethrough, tables, task lists,
        fenced code). When False the basic dialect is used and forced line
        breaks keep their trailing double space.
    renderer : MarkdownRenderer or None, default None
        Renderer to use instead of the built-in one. Always takes precedence
        over ``extended_syntax`` for rendering; ``extended_syntax`` still
        controls hard-break normalization.
    parser : {"html.parser", "lxml", "html5lib"}, default "html.parser"
        BeautifulSoup tree builder used to parse the markup.
    max_depth : int, default 512
        Deepest element nesting accepted before conversion fails with
        ``DepthLimitError``.

    Examples
    --------
        >>> options = ConversionOptions(extended_syntax=False)
        >>> options.create_updated(max_depth=64).max_depth
        64

    """

    extended_syntax: bool = field(
        default=DEFAULT_EXTENDED_SYNTAX,
        metadata={
            "help": "Render GitHub Flavored Markdown (strikethrough, tables, task lists, fenced code)",
            "importance": "core",
        },
    )
    renderer: MarkdownRenderer | None = field(
        default=None,
        metadata={
            "help": "Custom renderer overriding the built-in dialects",
            "exclude_from_cli": True,
        },
    )
    parser: str = field(
        default=DEFAULT_PARSER,
        metadata={
            "help": "BeautifulSoup parser backend",
            "choices": SUPPORTED_PARSERS,
            "importance": "advanced",
        },
    )
    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={
            "help": "Maximum element nesting depth accepted",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        if self.max_depth <= 0:
            raise ValidationError(
                f"max_depth must be positive, got {self.max_depth}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )
        if self.parser not in SUPPORTED_PARSERS:
            raise ValidationError(
                f"parser must be one of {', '.join(SUPPORTED_PARSERS)}, got {self.parser!r}",
                parameter_name="parser",
                parameter_value=self.parser,
            )
        if self.renderer is not None and not callable(getattr(self.renderer, "convert", None)):
            raise ValidationError(
                "renderer must provide a convert(node, child_markdown) method",
                parameter_name="renderer",
                parameter_value=self.renderer,
            )

    def resolve_renderer(self) -> MarkdownRenderer:
        """Return the renderer to use: an explicit one wins over ``extended_syntax``."""
        if self.renderer is not None:
            return self.renderer
        return get_renderer(self.extended_syntax)
