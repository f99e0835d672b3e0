#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/renderers/gfm.py
"""GitHub Flavored Markdown renderer.

Extends the basic rule table with the GFM constructs: strikethrough, fenced
code blocks with an info string, pipe tables with alignment, and task list
items. Text escaping additionally protects ``~`` everywhere and ``|`` inside
table cells.

"""

from __future__ import annotations

import re
from typing import Any

from htmlmark.constants import (
    CODE_LANGUAGE_CLASS_RE,
    DEFAULT_TABLE_ALIGNMENT,
    GFM_SPECIAL_CHARS,
    TABLE_ALIGNMENT_MAPPING,
    TASK_CHECKED_CLASS,
    TASK_LIST_ITEM_CLASS,
)
from htmlmark.dom import get_attribute, get_classes, is_element, is_text
from htmlmark.renderers.base import RuleFunction
from htmlmark.renderers.basic import (
    BASIC_RENDERER,
    code_text,
    make_text_rule,
    render_list_item,
    wrap_inline,
)
from htmlmark.utils.escape import code_fence, collapse_whitespace, escape_table_cell

_CELL_NEWLINES_RE = re.compile(r"[ \t]*\n+[ \t]*")
_TEXT_ALIGN_RE = re.compile(r"text-align\s*:\s*(\w+)")


def _escape_cell_text(node: Any, text: str) -> str:
    if node.find_parent(["td", "th"]) is None:
        return text
    return escape_table_cell(text)


def code_language(node: Any) -> str:
    """Extract the language of a code block from its attributes.

    Checks, in order: ``data-language`` / ``data-lang`` on the ``pre``, then
    ``language-xxx`` / ``lang-xxx`` classes on the ``pre`` and on a direct
    ``code`` child.
    """
    for attribute in ("data-language", "data-lang"):
        language = get_attribute(node, attribute).strip()
        if language:
            return language

    candidates = [node] + [child for child in node.contents if is_element(child, "CODE")]
    for candidate in candidates:
        for css_class in get_classes(candidate):
            if match := CODE_LANGUAGE_CLASS_RE.match(css_class):
                return match.group(1)
    return ""


def cell_alignment(cell: Any) -> str:
    """Alignment row entry for a header cell, from ``align`` or ``text-align``."""
    align = get_attribute(cell, "align").strip().lower()
    if align in TABLE_ALIGNMENT_MAPPING:
        return TABLE_ALIGNMENT_MAPPING[align]

    style = get_attribute(cell, "style").lower()
    if match := _TEXT_ALIGN_RE.search(style):
        return TABLE_ALIGNMENT_MAPPING.get(match.group(1), DEFAULT_TABLE_ALIGNMENT)

    return DEFAULT_TABLE_ALIGNMENT


def is_header_row(row: Any) -> bool:
    """Check whether ``row`` is the row a pipe table uses as its header.

    GFM tables always need a header: the first row of the enclosing table
    that has cells is used, whether it sits in ``thead`` or not. Rows of
    nested tables do not count.
    """
    table = row.find_parent("table")
    if table is None:
        return False
    for candidate in table.find_all("tr"):
        if candidate.find_parent("table") is table and _row_cells(candidate):
            return candidate is row
    return False


def _row_cells(row: Any) -> list[Any]:
    return [child for child in row.contents if is_element(child, "TD", "TH")]


convert_text = make_text_rule(GFM_SPECIAL_CHARS, escape_cell=_escape_cell_text)


def convert_strikethrough(node: Any, child_markdown: str) -> str:
    return wrap_inline(child_markdown, "~~")


def convert_fenced_code(node: Any, child_markdown: str) -> str:
    code = code_text(child_markdown)
    if not code:
        return ""
    fence = code_fence(code)
    return f"\n\n{fence}{code_language(node)}\n{code}\n{fence}\n\n"


def convert_table(node: Any, child_markdown: str) -> str:
    body = child_markdown.strip("\n")
    if not body.strip():
        return ""
    return f"\n\n{body}\n\n"


def convert_table_caption(node: Any, child_markdown: str) -> str:
    text = collapse_whitespace(child_markdown).strip()
    return f"{text}\n\n" if text else ""


def convert_table_row(node: Any, child_markdown: str) -> str:
    cells = _row_cells(node)
    if not cells:
        return ""
    row = f"|{child_markdown}\n"
    if is_header_row(node):
        alignments = "|".join(f" {cell_alignment(cell)} " for cell in cells)
        row += f"|{alignments}|\n"
    return row


def convert_table_cell(node: Any, child_markdown: str) -> str:
    text = _CELL_NEWLINES_RE.sub(" ", child_markdown).strip()
    return f" {text} |"


def convert_cell_line_break(node: Any, child_markdown: str) -> str:
    return "<br>"


def convert_checkbox(node: Any, child_markdown: str) -> str:
    if get_attribute(node, "type").lower() != "checkbox":
        return ""
    marker = "[x]" if node.has_attr("checked") else "[ ]"
    following = node.next_sibling
    if is_text(following) and following[:1].isspace():
        return marker
    return f"{marker} "


def convert_task_list_item(node: Any, child_markdown: str) -> str:
    """List items marked up as task items get a checkbox prefix.

    Editors emit either ``<li class="task-list-item checked">`` or a nested
    ``<input type="checkbox">``; the input renders its own marker.
    """
    classes = get_classes(node)
    prefix = ""
    if TASK_LIST_ITEM_CLASS in classes and node.find("input", recursive=False) is None:
        prefix = "[x] " if TASK_CHECKED_CLASS in classes else "[ ] "
    return render_list_item(node, child_markdown, prefix=prefix)


GFM_RULES: dict[str, RuleFunction] = {
    "TEXT_NODE": convert_text,
    "DEL, S, STRIKE": convert_strikethrough,
    "PRE": convert_fenced_code,
    "TABLE": convert_table,
    "CAPTION": convert_table_caption,
    "TR": convert_table_row,
    "TD, TH": convert_table_cell,
    "TD BR, TH BR": convert_cell_line_break,
    "INPUT": convert_checkbox,
    "LI": convert_task_list_item,
}

GFM_RENDERER = BASIC_RENDERER.extend(GFM_RULES, name="gfm")
