#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/utils/__init__.py
"""Utility modules for the htmlmark package.

This package contains the text escaping helpers shared by the Markdown renderers.
"""

from htmlmark.utils.escape import (
    code_fence,
    collapse_whitespace,
    escape_line_start,
    escape_markdown,
    escape_table_cell,
    link_title,
    wrap_inline_code,
)

__all__ = [
    "code_fence",
    "collapse_whitespace",
    "escape_line_start",
    "escape_markdown",
    "escape_table_cell",
    "link_title",
    "wrap_inline_code",
]
