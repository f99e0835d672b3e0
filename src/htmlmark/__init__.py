"""htmlmark - HTML to Markdown conversion.

htmlmark parses HTML with BeautifulSoup and renders it as Markdown, either
GitHub Flavored Markdown (the default) or the basic dialect every Markdown
implementation understands.

Conversion runs in three stages:

1. ``TreeIterator`` enumerates the parsed tree in document order through an
   externally advanced cursor.
2. The tree walker recurses once per child, advancing that cursor in step,
   and hands every node with its children's Markdown to a renderer.
3. ``normalize_markdown`` collapses the redundant blank lines and breaks the
   block rules leave behind.

Examples
--------
Basic usage:

    >>> from htmlmark import convert
    >>> convert("<h1>hello world</h1>")
    '# hello world'
    >>> convert("<p>a<br>b</p>", extended_syntax=False)
    'a  \\nb'

Customizing a renderer:

    >>> from htmlmark import GFM_RENDERER, ConversionOptions
    >>> shout = GFM_RENDERER.extend({"STRONG, B": lambda node, content: content.upper()})
    >>> convert("<b>loud</b>", ConversionOptions(renderer=shout))
    'LOUD'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "htmlmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from htmlmark.api import convert, convert_file
from htmlmark.exceptions import (
    DependencyError,
    DepthLimitError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    HtmlMarkError,
    ParsingError,
    RenderingError,
    TraversalError,
    ValidationError,
)
from htmlmark.iterator import TreeIterator
from htmlmark.normalize import normalize_markdown
from htmlmark.options import ConversionOptions
from htmlmark.renderers import BASIC_RENDERER, GFM_RENDERER, MarkdownRenderer, Renderer, get_renderer
from htmlmark.walker import render_document, walk

__all__ = [
    "__version__",
    "convert",
    "convert_file",
    "ConversionOptions",
    "TreeIterator",
    "walk",
    "render_document",
    "normalize_markdown",
    "Renderer",
    "MarkdownRenderer",
    "BASIC_RENDERER",
    "GFM_RENDERER",
    "get_renderer",
    "HtmlMarkError",
    "ValidationError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "ParsingError",
    "RenderingError",
    "TraversalError",
    "DepthLimitError",
    "DependencyError",
]
