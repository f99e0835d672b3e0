#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/utils.py
"""Shared helpers for the htmlmark test suite."""

from hypothesis import strategies as st

FRAGMENT_TAGS = ["div", "p", "span", "em", "b", "ul", "li", "blockquote"]

words = st.text(alphabet="abcxyz ", min_size=1, max_size=6)

# Line breaks appear as leaves so they land next to blocks, inside inline
# wrappers and at the very start of a document
_leaves = st.one_of(words, st.just("<br>"))

fragments = st.recursive(
    _leaves,
    lambda inner: st.tuples(
        st.sampled_from(FRAGMENT_TAGS),
        st.lists(inner, max_size=4),
    ).map(lambda pair: f"<{pair[0]}>{''.join(pair[1])}</{pair[0]}>"),
    max_leaves=12,
)

html_documents = st.lists(fragments, min_size=1, max_size=4).map("".join)
