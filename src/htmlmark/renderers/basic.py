#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/renderers/basic.py
"""Basic Markdown renderer.

Rules for the constructs every Markdown dialect understands: headings,
paragraphs, hard breaks, emphasis, inline and indented code, links, images,
block quotes, lists and thematic breaks. Constructs that need extended syntax
(strikethrough, tables, task lists, fenced code) have no markup here and
degrade to their plain content.

Block rules surround their output with blank lines freely; the text
normalizer collapses the surplus once the whole document is assembled.

"""

from __future__ import annotations

from typing import Any, Callable

from bs4 import BeautifulSoup

from htmlmark.constants import (
    ASCII_WHITESPACE,
    BASIC_CODE_INDENT,
    BULLET_MARKER,
    FIND_TRIPLE_OVER_RETURNS_RE,
    HARD_BREAK,
    MARKDOWN_SPECIAL_CHARS,
    OMITTED_TAGS,
    PREFORMATTED_TAGS,
    THEMATIC_BREAK,
)
from htmlmark.dom import element_siblings, get_attribute, is_block, is_element, is_text
from htmlmark.renderers.base import Renderer, RuleFunction
from htmlmark.utils.escape import (
    collapse_whitespace,
    escape_line_start,
    escape_markdown,
    link_title,
    wrap_inline_code,
)


# -----------------------------------------------------------------------------
# Shared helpers
# -----------------------------------------------------------------------------


def is_preformatted(node: Any) -> bool:
    """Check whether a text node sits inside ``pre`` or ``code``."""
    return node.find_parent(list(PREFORMATTED_TAGS)) is not None


def _edge_breaks_line(node: Any, from_end: bool) -> bool | None:
    """Check whether the near edge of a sibling is a line boundary.

    Returns None for siblings that render nothing (comments, blank text,
    omitted or empty inline elements), which the caller skips over.
    """
    if is_text(node):
        return False if node.strip(ASCII_WHITESPACE) else None
    if not is_element(node) or is_element(node, *OMITTED_TAGS):
        return None
    if is_block(node) or is_element(node, "BR"):
        return True

    children = node.contents[::-1] if from_end else node.contents
    for child in children:
        edge = _edge_breaks_line(child, from_end)
        if edge is not None:
            return edge
    return False if is_element(node, "IMG", "INPUT") else None


def _at_line_edge(node: Any, step: str, from_end: bool) -> bool:
    current = node
    while True:
        sibling = getattr(current, step)
        while sibling is not None:
            edge = _edge_breaks_line(sibling, from_end)
            if edge is not None:
                return edge
            sibling = getattr(sibling, step)

        parent = current.parent
        if parent is None or isinstance(parent, BeautifulSoup) or is_block(parent):
            return True
        # Inline wrappers such as <span> share the line of their surroundings
        current = parent


def opens_block(node: Any) -> bool:
    """Check whether a node is the first thing on its line."""
    return _at_line_edge(node, "previous_sibling", from_end=True)


def closes_block(node: Any) -> bool:
    """Check whether a node is the last thing on its line."""
    return _at_line_edge(node, "next_sibling", from_end=False)


def has_following_content(node: Any) -> bool:
    """Check whether any element or non-blank text follows ``node`` among its siblings."""
    for sibling in node.next_siblings:
        if is_element(sibling) or (is_text(sibling) and sibling.strip()):
            return True
    return False


def wrap_inline(content: str, marker: str) -> str:
    """Wrap content in an inline marker, keeping edge spaces outside it.

    ``"**"`` around ``" bold "`` gives ``" **bold** "``; Markdown does not
    recognise emphasis that starts or ends with whitespace.
    """
    text = content.strip()
    if not text:
        return content
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()):]
    return f"{leading}{marker}{text}{marker}{trailing}"


def make_text_rule(special_chars: str, escape_cell: Callable[[Any, str], str] | None = None) -> RuleFunction:
    """Build the text-node rule for a given escaping policy.

    Parameters
    ----------
    special_chars : str
        Characters escaped anywhere in ordinary text
    escape_cell : callable, optional
        Extra escaping applied to text inside table cells

    """

    def convert_text(node: Any, child_markdown: str) -> str:
        if is_preformatted(node):
            text = str(node)
            return escape_cell(node, text) if escape_cell is not None else text

        text = collapse_whitespace(str(node))
        at_line_start = opens_block(node)
        if at_line_start:
            text = text.lstrip(" ")
        if closes_block(node):
            text = text.rstrip(" ")
        if not text:
            return ""

        text = escape_markdown(text, special_chars)
        if at_line_start:
            text = escape_line_start(text)
        if escape_cell is not None:
            text = escape_cell(node, text)
        return text

    return convert_text


def indent_continuation(body: str, indent: str) -> str:
    """Indent every non-blank line of ``body`` after the first."""
    lines = body.split("\n")
    return "\n".join([lines[0]] + [f"{indent}{line}" if line.strip() else "" for line in lines[1:]])


def list_marker(node: Any) -> str:
    """Marker for a list item: ``"N. "`` inside ``ol`` (honouring ``start``), else a bullet."""
    parent = node.parent
    if not is_element(parent, "OL"):
        return BULLET_MARKER

    try:
        start = int(get_attribute(parent, "start", "1"))
    except ValueError:
        start = 1

    for index, item in enumerate(element_siblings(node, "LI")):
        if item is node:
            return f"{start + index}. "
    return f"{start}. "


def render_list_item(node: Any, content: str, prefix: str = "") -> str:
    """Render a list item with its marker and indented continuation lines."""
    marker = list_marker(node)
    body = FIND_TRIPLE_OVER_RETURNS_RE.sub("\n\n", content.strip())
    body = indent_continuation(f"{prefix}{body}", " " * len(marker))
    return f"\n{marker}{body}"


def code_text(content: str) -> str:
    """Trim the blank lines HTML keeps around preformatted text."""
    return content.strip("\n").rstrip()


# -----------------------------------------------------------------------------
# Rules
# -----------------------------------------------------------------------------


convert_text = make_text_rule(MARKDOWN_SPECIAL_CHARS)


def convert_omitted(node: Any, child_markdown: str) -> str:
    return ""


def convert_heading(node: Any, child_markdown: str) -> str:
    level = int(node.name[1])
    text = collapse_whitespace(child_markdown).strip(" ")
    if not text:
        return ""
    return f"\n\n{'#' * level} {text}\n\n"


def convert_paragraph(node: Any, child_markdown: str) -> str:
    if not child_markdown:
        return ""
    return f"\n\n{child_markdown}\n\n"


def convert_list_item_paragraph(node: Any, child_markdown: str) -> str:
    """Paragraphs inside a list item stay on the item's lines."""
    if has_following_content(node):
        return f"{child_markdown}\n\n"
    return child_markdown


def convert_line_break(node: Any, child_markdown: str) -> str:
    # A break with nothing before it on its line separates blocks
    if opens_block(node):
        return "\n\n"
    return HARD_BREAK


def convert_emphasis(node: Any, child_markdown: str) -> str:
    return wrap_inline(child_markdown, "*")


def convert_strong(node: Any, child_markdown: str) -> str:
    return wrap_inline(child_markdown, "**")


def convert_inline_code(node: Any, child_markdown: str) -> str:
    return wrap_inline_code(child_markdown)


def convert_preformatted_code(node: Any, child_markdown: str) -> str:
    return child_markdown


def convert_link(node: Any, child_markdown: str) -> str:
    href = get_attribute(node, "href").strip().replace(" ", "%20")
    if not href:
        return child_markdown
    title_part = link_title(get_attribute(node, "title"))
    return f"[{child_markdown.strip()}]({href}{title_part})"


def convert_image(node: Any, child_markdown: str) -> str:
    src = get_attribute(node, "src").strip().replace(" ", "%20")
    if not src:
        return ""
    alt = escape_markdown(collapse_whitespace(get_attribute(node, "alt")).strip(), "[]")
    title_part = link_title(get_attribute(node, "title"))
    return f"![{alt}]({src}{title_part})"


def convert_thematic_break(node: Any, child_markdown: str) -> str:
    return f"\n\n{THEMATIC_BREAK}\n\n"


def convert_block_quote(node: Any, child_markdown: str) -> str:
    body = FIND_TRIPLE_OVER_RETURNS_RE.sub("\n\n", child_markdown.strip("\n"))
    if not body.strip():
        return ""
    lines = [f"> {line}" if line.strip() else ">" for line in body.split("\n")]
    return "\n\n" + "\n".join(lines) + "\n\n"


def convert_list(node: Any, child_markdown: str) -> str:
    body = child_markdown.strip("\n")
    if not body.strip():
        return ""
    if is_element(node.parent, "LI"):
        return f"\n{body}\n"
    return f"\n\n{body}\n\n"


def convert_list_item(node: Any, child_markdown: str) -> str:
    return render_list_item(node, child_markdown)


def convert_indented_code(node: Any, child_markdown: str) -> str:
    code = code_text(child_markdown)
    if not code:
        return ""
    lines = [f"{BASIC_CODE_INDENT}{line}" if line else "" for line in code.split("\n")]
    return "\n\n" + "\n".join(lines) + "\n\n"


def convert_plain_cell(node: Any, child_markdown: str) -> str:
    text = collapse_whitespace(child_markdown).strip()
    return f"{text} " if text else ""


def convert_plain_row(node: Any, child_markdown: str) -> str:
    text = child_markdown.strip()
    if not text:
        return ""
    return f"\n\n{text}\n\n"


def convert_block_container(node: Any, child_markdown: str) -> str:
    if not child_markdown.strip():
        return child_markdown
    return f"\n\n{child_markdown}\n\n"


BASIC_RULES: dict[str, RuleFunction] = {
    "TEXT_NODE": convert_text,
    "COMMENT_NODE, DOCTYPE_NODE, CDATA_SECTION_NODE, PROCESSING_INSTRUCTION_NODE, DECLARATION_NODE": convert_omitted,
    ", ".join(OMITTED_TAGS): convert_omitted,
    "H1, H2, H3, H4, H5, H6": convert_heading,
    "P": convert_paragraph,
    "LI P": convert_list_item_paragraph,
    "DIV, SECTION, ARTICLE, MAIN, HEADER, FOOTER, ASIDE, NAV, ADDRESS, FIGURE, FIGCAPTION": convert_block_container,
    "DETAILS, SUMMARY, FORM, FIELDSET, DL, DT, DD, CAPTION": convert_block_container,
    "BR": convert_line_break,
    "EM, I": convert_emphasis,
    "STRONG, B": convert_strong,
    "CODE": convert_inline_code,
    "PRE CODE": convert_preformatted_code,
    "A": convert_link,
    "IMG": convert_image,
    "HR": convert_thematic_break,
    "BLOCKQUOTE": convert_block_quote,
    "UL, OL": convert_list,
    "LI": convert_list_item,
    "PRE": convert_indented_code,
    "TD, TH": convert_plain_cell,
    "TR": convert_plain_row,
}

BASIC_RENDERER = Renderer(BASIC_RULES, name="basic")
