#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/normalize.py
"""Whitespace normalization of converted Markdown.

Block rules pad their output with blank lines and ``<br>`` leaves a trailing
double-space hard break, so the assembled document carries redundant
vertical space wherever blocks and breaks meet. ``normalize_markdown`` runs a
fixed sequence of regex rewrites once over the whole document to collapse it.

The passes depend on each other's output and must run in the listed order.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from htmlmark.constants import (
    FIND_DUPLICATED_2_RETURNS_WITH_BR_RE,
    FIND_DUPLICATED_RETURN_WITH_BR_RE,
    FIND_EMPTYLINE_WITH_RETURN_RE,
    FIND_FIRST_LAST_WITH_SPACE_RETURNS_RE,
    FIND_HARD_BREAK_RE,
    FIND_MULTIPLE_EMPTYLINE_BETWEEN_BLOCK_RE,
    FIND_TRIPLE_OVER_RETURNS_RE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationPass:
    """One regex rewrite of the normalization pipeline."""

    name: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


NORMALIZATION_PASSES: tuple[NormalizationPass, ...] = (
    # Hard break padding followed by a block's blank line
    NormalizationPass("collapse_break_before_block", FIND_DUPLICATED_2_RETURNS_WITH_BR_RE, "\n\n"),
    NormalizationPass("collapse_padded_empty_line", FIND_EMPTYLINE_WITH_RETURN_RE, "\n  \n"),
    NormalizationPass("collapse_break_before_blank_line", FIND_DUPLICATED_RETURN_WITH_BR_RE, "\n"),
    NormalizationPass("collapse_consecutive_returns", FIND_TRIPLE_OVER_RETURNS_RE, "\n\n"),
    NormalizationPass("collapse_empty_lines_between_blocks", FIND_MULTIPLE_EMPTYLINE_BETWEEN_BLOCK_RE, "\n\n"),
    NormalizationPass("trim_document", FIND_FIRST_LAST_WITH_SPACE_RETURNS_RE, ""),
)

# Extended syntax only: a break that survived the passes above becomes a plain newline
HARD_BREAK_PASS = NormalizationPass("demote_hard_breaks", FIND_HARD_BREAK_RE, "\n")


def normalize_markdown(text: str, extended_syntax: bool = True) -> str:
    """Collapse the whitespace artifacts of block and line-break conversion.

    Parameters
    ----------
    text : str
        Markdown assembled by the tree walker
    extended_syntax : bool, default True
        Whether hard breaks are demoted to plain newlines; basic Markdown
        keeps the trailing double space it needs to force a break

    Returns
    -------
    str
        Normalized Markdown

    Examples
    --------
        >>> normalize_markdown("\\n\\na\\n\\n\\n\\nb\\n\\n")
        'a\\n\\nb'
        >>> normalize_markdown("a  \\nb", extended_syntax=False)
        'a  \\nb'
        >>> normalize_markdown("a  \\nb")
        'a\\nb'

    """
    passes = NORMALIZATION_PASSES + (HARD_BREAK_PASS,) if extended_syntax else NORMALIZATION_PASSES
    for normalization_pass in passes:
        text = normalization_pass.apply(text)
    logger.debug("Applied %d normalization passes", len(passes))
    return text
