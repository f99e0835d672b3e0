#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the htmlmark library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Conversion Defaults - option defaults
3. Logging - CLI log level and formats
4. HTML Structure - tag classifications used by the renderers
5. Markdown Output - escaping and formatting constants
6. Normalization Patterns - the regexes of the text normalizer
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ParserBackend = Literal["html.parser", "lxml", "html5lib"]

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_EXTENDED_SYNTAX = True
DEFAULT_PARSER: ParserBackend = "html.parser"
SUPPORTED_PARSERS: tuple[str, ...] = ("html.parser", "lxml", "html5lib")

# Distribution that provides each optional parser backend
PARSER_PACKAGES: dict[str, str] = {
    "lxml": "lxml",
    "html5lib": "html5lib",
}

# Stays below CPython's default recursion limit of 1000 frames
DEFAULT_MAX_DEPTH = 512

# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# =============================================================================
# HTML Structure
# =============================================================================

HEADING_TAGS = frozenset({"H1", "H2", "H3", "H4", "H5", "H6"})

BLOCK_TAGS = frozenset(
    {
        "ADDRESS",
        "ARTICLE",
        "ASIDE",
        "BLOCKQUOTE",
        "BODY",
        "CAPTION",
        "DD",
        "DETAILS",
        "DIV",
        "DL",
        "DT",
        "FIELDSET",
        "FIGCAPTION",
        "FIGURE",
        "FOOTER",
        "FORM",
        "HEADER",
        "HR",
        "HTML",
        "LI",
        "MAIN",
        "NAV",
        "OL",
        "P",
        "PRE",
        "SECTION",
        "SUMMARY",
        "TABLE",
        "TBODY",
        "TD",
        "TFOOT",
        "TH",
        "THEAD",
        "TR",
        "UL",
    }
    | HEADING_TAGS
)

# Elements whose text is emitted verbatim
PREFORMATTED_TAGS = ("code", "pre")

# Elements that never contribute content
OMITTED_TAGS = ("HEAD", "TITLE", "SCRIPT", "STYLE", "TEMPLATE", "NOSCRIPT")

TASK_LIST_ITEM_CLASS = "task-list-item"
TASK_CHECKED_CLASS = "checked"

# =============================================================================
# Markdown Output
# =============================================================================

HARD_BREAK = "  \n"
BASIC_CODE_INDENT = "    "
BULLET_MARKER = "* "
THEMATIC_BREAK = "---"

# Escaped wherever they appear in text
MARKDOWN_SPECIAL_CHARS = "\\`*_[]"
GFM_SPECIAL_CHARS = MARKDOWN_SPECIAL_CHARS + "~"

# Escaped only when they open a line, where they would start a block construct
LINE_START_MARKER_RE = re.compile(r"^(#{1,6}(?=\s|$)|>|[-+](?=\s)|\d+(?=[.)]\s))")

ASCII_WHITESPACE = " \t\r\n\f"
WHITESPACE_RUN_RE = re.compile(r"[ \t\r\n\f]+")
BACKTICK_RUN_RE = re.compile(r"`+")

CODE_LANGUAGE_CLASS_RE = re.compile(r"^(?:language|lang)-([\w#+.-]+)$")

MIN_CODE_FENCE_LENGTH = 3

TABLE_ALIGNMENT_MAPPING = {
    "left": ":---",
    "center": ":---:",
    "right": "---:",
    "justify": "---",
}
DEFAULT_TABLE_ALIGNMENT = "---"

# =============================================================================
# Normalization Patterns
# =============================================================================

FIND_DUPLICATED_2_RETURNS_WITH_BR_RE = re.compile(r"[ \xa0]+\n\n\n")
FIND_EMPTYLINE_WITH_RETURN_RE = re.compile(r"\n[ \xa0]+\n\n")
FIND_DUPLICATED_RETURN_WITH_BR_RE = re.compile(r"[ \xa0]+\n\n")
FIND_TRIPLE_OVER_RETURNS_RE = re.compile(r"\n{3,}")
FIND_MULTIPLE_EMPTYLINE_BETWEEN_BLOCK_RE = re.compile(r"(\n\n)?([ \xa0]+\n){2,}")
FIND_FIRST_LAST_WITH_SPACE_RETURNS_RE = re.compile(r"^\n+|\s+$")
FIND_HARD_BREAK_RE = re.compile(r"[ \xa0]{2,}\n")
