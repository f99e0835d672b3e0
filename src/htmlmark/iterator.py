#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlmark/iterator.py
"""Document-order cursor over a rooted, ordered tree.

``TreeIterator`` linearizes one or more trees into preorder (a node, then
each of its children left to right, recursively) and exposes the sequence
through a cursor that is advanced one step at a time. It knows nothing about
HTML or Markdown; the ``children`` callable supplies the structure.

"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, Sequence, TypeVar

from htmlmark.dom import child_nodes
from htmlmark.exceptions import TraversalError

N = TypeVar("N")


class TreeIterator(Generic[N]):
    """Externally driven preorder cursor.

    The cursor starts *before* the first node. Each call to ``advance`` moves
    it to the next node in document order and returns True, or returns False
    once the sequence is exhausted, leaving the cursor on the last node.
    Exhaustion is never an error: further calls keep returning False.

    Parameters
    ----------
    *roots : N
        Root nodes, visited left to right (a forest is allowed)
    children : callable, default child_nodes
        Returns the ordered children of a node

    Examples
    --------
        >>> from bs4 import BeautifulSoup
        >>> soup = BeautifulSoup("<p>a<b>c</b></p>", "html.parser")
        >>> it = TreeIterator(soup.p)
        >>> [node.name or str(node) for node in it]
        ['p', 'a', 'b', 'c']

    """

    def __init__(self, *roots: N, children: Callable[[N], Sequence[N]] = child_nodes):
        self._children = children
        # Reversed so the next node in document order is always on top
        self._pending: list[N] = list(reversed(roots))
        self._current: N | None = None
        self._started = False

    def advance(self) -> bool:
        """Move the cursor to the next node in document order.

        Returns
        -------
        bool
            True if the cursor now rests on a new node, False when exhausted

        """
        if not self._pending:
            return False

        node = self._pending.pop()
        self._pending.extend(reversed(self._children(node)))
        self._current = node
        self._started = True
        return True

    def current(self) -> N:
        """Return the node under the cursor.

        Raises
        ------
        TraversalError
            If ``advance`` has not yet produced a node

        """
        if not self._started:
            raise TraversalError("TreeIterator.current() called before advance() produced a node")
        return self._current  # type: ignore[return-value]

    @property
    def exhausted(self) -> bool:
        """Whether no node remains after the cursor."""
        return not self._pending

    def __iter__(self) -> Iterator[N]:
        while self.advance():
            yield self.current()
