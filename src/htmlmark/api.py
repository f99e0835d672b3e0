"""The exported API functions for HTML to Markdown conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/htmlmark/api.py
import logging
import os
from pathlib import Path
from typing import IO, Any, Optional, Union

from htmlmark.dom import to_dom
from htmlmark.exceptions import FileAccessError, FileNotFoundError
from htmlmark.iterator import TreeIterator
from htmlmark.normalize import normalize_markdown
from htmlmark.options import ConversionOptions
from htmlmark.utils.decorators import debug_timer
from htmlmark.walker import render_document

logger = logging.getLogger(__name__)


def _resolve_options(options: Optional[ConversionOptions], **kwargs: Any) -> ConversionOptions:
    """Merge keyword overrides into ``options`` (or the defaults)."""
    resolved = options if options is not None else ConversionOptions()
    if kwargs:
        resolved = resolved.create_updated(**kwargs)
    return resolved


def convert(markup: Optional[str], options: Optional[ConversionOptions] = None, **kwargs: Any) -> str:
    """Convert HTML markup to Markdown.

    Parameters
    ----------
    markup : str or None
        HTML text. Empty or None input yields an empty string.
    options : ConversionOptions, optional
        Conversion options; defaults to GitHub Flavored Markdown output
    **kwargs : Any
        Individual option overrides applied on top of ``options``
        (e.g. ``extended_syntax=False``)

    Returns
    -------
    str
        Normalized Markdown

    Raises
    ------
    ValidationError
        If an option is unknown or out of range
    DependencyError
        If the requested parser backend is not installed
    ParsingError
        If the markup cannot be parsed
    RenderingError
        If rendering fails, including ``DepthLimitError`` for overly deep trees

    Examples
    --------
        >>> convert("<h1>hello world</h1>")
        '# hello world'
        >>> convert("<del>strike</del>")
        '~~strike~~'
        >>> convert("<del>strike</del>", extended_syntax=False)
        'strike'

    """
    if not markup:
        return ""

    resolved = _resolve_options(options, **kwargs)
    renderer = resolved.resolve_renderer()
    logger.debug("Converting with renderer %r (extended_syntax=%s)", renderer, resolved.extended_syntax)

    root = to_dom(markup, resolved.parser)
    with debug_timer(logger, "Rendering"):
        markdown = render_document(TreeIterator(root), renderer, max_depth=resolved.max_depth)
    return normalize_markdown(markdown, resolved.extended_syntax)


def convert_file(
    source: Union[str, Path, IO[str], IO[bytes]],
    options: Optional[ConversionOptions] = None,
    **kwargs: Any,
) -> str:
    """Convert an HTML file or stream to Markdown.

    Parameters
    ----------
    source : str, Path, or file-like object
        Path to an HTML file, or a text or binary stream (bytes are decoded
        as UTF-8)
    options : ConversionOptions, optional
        Conversion options
    **kwargs : Any
        Individual option overrides

    Returns
    -------
    str
        Normalized Markdown

    Raises
    ------
    FileNotFoundError
        If ``source`` is a path that does not exist
    FileAccessError
        If the file or stream cannot be read or decoded

    """
    if isinstance(source, (str, Path, os.PathLike)):
        path = Path(source)
        if not path.is_file():
            raise FileNotFoundError(str(path))
        try:
            content: Union[str, bytes] = path.read_bytes()
        except OSError as e:
            raise FileAccessError(str(path), original_error=e) from e
        name = str(path)
    else:
        name = getattr(source, "name", "<stream>")
        try:
            content = source.read()
        except (OSError, ValueError) as e:
            raise FileAccessError(str(name), original_error=e) from e

    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileAccessError(str(name), message=f"Input is not valid UTF-8: {name}", original_error=e) from e

    logger.debug("Read %d characters from %s", len(content), name)
    return convert(content, options, **kwargs)
