#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/utils/escape.py
"""Markdown text escaping utilities.

This module provides the escaping and whitespace helpers the renderers use
to turn raw text nodes and code into safe Markdown fragments.

"""

from __future__ import annotations

from htmlmark.constants import (
    BACKTICK_RUN_RE,
    LINE_START_MARKER_RE,
    MARKDOWN_SPECIAL_CHARS,
    MIN_CODE_FENCE_LENGTH,
    WHITESPACE_RUN_RE,
)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of ASCII whitespace to a single space.

    Non-breaking spaces are left alone so that ``&nbsp;`` survives.
    """
    return WHITESPACE_RUN_RE.sub(" ", text)


def escape_markdown(text: str, special_chars: str = MARKDOWN_SPECIAL_CHARS) -> str:
    r"""Backslash-escape Markdown special characters.

    Parameters
    ----------
    text : str
        Text to escape
    special_chars : str
        Characters that must be escaped wherever they occur

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown("2 * 3 = [six]")
        '2 \\* 3 = \\[six\\]'

    """
    if not text:
        return text
    return "".join(f"\\{char}" if char in special_chars else char for char in text)


def escape_line_start(text: str) -> str:
    r"""Escape a block marker at the very start of ``text``.

    Only meaningful for text that opens a line, where ``#``, ``>``, ``-``,
    ``+`` or an ordered-list number would start a block construct.

    Examples
    --------
        >>> escape_line_start("# not a heading")
        '\\# not a heading'
        >>> escape_line_start("1. not a list")
        '1\\. not a list'

    """
    match = LINE_START_MARKER_RE.match(text)
    if not match:
        return text
    marker = match.group(1)
    if marker[0].isdigit():
        return f"{marker}\\{text[len(marker):]}"
    return f"\\{text}"


def escape_table_cell(text: str) -> str:
    """Escape pipes so text cannot split a table cell."""
    return text.replace("|", r"\|")


def longest_backtick_run(text: str) -> int:
    """Length of the longest run of consecutive backticks in ``text``."""
    return max((len(run) for run in BACKTICK_RUN_RE.findall(text)), default=0)


def code_fence(code: str, minimum: int = MIN_CODE_FENCE_LENGTH) -> str:
    """Pick a backtick fence long enough to enclose ``code``."""
    return "`" * max(minimum, longest_backtick_run(code) + 1)


def wrap_inline_code(code: str) -> str:
    """Wrap ``code`` in a backtick span that its own backticks cannot close.

    Examples
    --------
        >>> wrap_inline_code("x")
        '`x`'
        >>> wrap_inline_code("a ` b")
        '``a ` b``'
        >>> wrap_inline_code("`tick")
        '`` `tick ``'

    """
    if not code:
        return ""
    delimiter = "`" * (longest_backtick_run(code) + 1)
    if code.startswith("`") or code.endswith("`"):
        code = f" {code} "
    return f"{delimiter}{code}{delimiter}"


def link_title(title: str) -> str:
    """Format a link or image title, escaping embedded double quotes.

    Examples
    --------
        >>> link_title('say "hi"')
        ' "say \\\\"hi\\\\""'
        >>> link_title("")
        ''

    """
    if not title:
        return ""
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f' "{escaped}"'
