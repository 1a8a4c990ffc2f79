"""Doubly linked chain of wrapped display lines and the reflow algorithm.

Nodes live in a slab (a list of slots with a free list) and refer to their
neighbours by slot id, so splicing a node in or out only rewrites ids.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Optional

from .constants import EntryConstants
from .errors import ConfigurationError, InvariantViolation
from .words import WordList

logger = logging.getLogger(__name__)


class Freshness(Enum):
    """How much of a line the renderer has to repaint."""
    WHOLE = "whole"
    CURSOR = "cursor"
    CLEAN = "clean"


class LineNode:
    """One display line: a WordList, a width budget and chain links."""

    def __init__(self, chain: "LineChain", node_id: int, width: int, text: str = ""):
        self._chain = chain
        self.id = node_id
        self.width = width
        self.words = WordList(text)
        self.previous: Optional[int] = None
        self.next: Optional[int] = None
        self.needs_reflow = not self.words.is_empty()
        self.fresh = Freshness.WHOLE

    def __repr__(self) -> str:
        return f"LineNode(id={self.id}, {self.words!r})"

    def is_paragraph_start(self) -> bool:
        previous = self._chain.previous_of(self)
        return previous is None or previous.words.eop

    @property
    def indent(self) -> int:
        return self._chain.indent if self.is_paragraph_start() else 0

    @property
    def budget(self) -> int:
        """Columns available to the words of this line."""
        return self.width - self.indent

    def row(self) -> int:
        """0-based position of this line in the chain."""
        row = 0
        line = self._chain.previous_of(self)
        while line is not None:
            row += 1
            line = self._chain.previous_of(line)
        return row

    def cursor_column(self) -> int:
        return self.words.linear + self.indent

    def display_text(self) -> str:
        return " " * self.indent + self.words.text

    def visible_text(self, from_column: int = 0) -> str:
        return self.display_text()[from_column:]

    def freshness(self) -> Freshness:
        return self.fresh

    def mark_painted(self) -> None:
        self.fresh = Freshness.CLEAN

    def touch(self) -> None:
        """Note an edit near the cursor unless a full repaint is already due."""
        if self.fresh is Freshness.CLEAN:
            self.fresh = Freshness.CURSOR

    def invalidate(self) -> None:
        self.fresh = Freshness.WHOLE


class LineChain:
    """The lines of one or more paragraphs, wrapped to a fixed width."""

    def __init__(self, width: int, indent: int = EntryConstants.PARAGRAPH_INDENT, text: str = ""):
        if width < 1 or indent < 0 or width <= indent:
            raise ConfigurationError(
                f"width {width} leaves no room after a paragraph indent of {indent}")
        self.width = width
        self.indent = indent
        self._slots: list[Optional[LineNode]] = []
        self._free: list[int] = []
        self.head_id = self._allocate(text).id
        self.reflow(self.head)

    # --- Slab management ---

    def _allocate(self, text: str = "") -> LineNode:
        if self._free:
            node_id = self._free.pop()
        else:
            node_id = len(self._slots)
            self._slots.append(None)
        node = LineNode(self, node_id, self.width, text)
        self._slots[node_id] = node
        return node

    def _release(self, node: LineNode) -> None:
        self._slots[node.id] = None
        self._free.append(node.id)

    def node(self, node_id: int) -> LineNode:
        node = self._slots[node_id] if 0 <= node_id < len(self._slots) else None
        if node is None:
            raise KeyError(node_id)
        return node

    # --- Traversal ---

    def next_of(self, node: LineNode) -> Optional[LineNode]:
        return None if node.next is None else self._slots[node.next]

    def previous_of(self, node: LineNode) -> Optional[LineNode]:
        return None if node.previous is None else self._slots[node.previous]

    @property
    def head(self) -> LineNode:
        return self.node(self.head_id)

    @property
    def tail(self) -> LineNode:
        line = self.head
        following = self.next_of(line)
        while following is not None:
            line = following
            following = self.next_of(line)
        return line

    def iter_from(self, node: Optional[LineNode]) -> Iterator[LineNode]:
        line = node
        while line is not None:
            yield line
            line = self.next_of(line)

    def __iter__(self) -> Iterator[LineNode]:
        return self.iter_from(self.head)

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)

    def __contains__(self, node: object) -> bool:
        if not isinstance(node, LineNode):
            return False
        return 0 <= node.id < len(self._slots) and self._slots[node.id] is node

    # --- Structure ---

    def insert_node_after(self, node: LineNode, text: str = "") -> LineNode:
        """Splice a new line in after ``node``."""
        new = self._allocate(text)
        following = self.next_of(node)
        new.previous, new.next = node.id, node.next
        if following is not None:
            following.previous = new.id
        node.next = new.id
        for line in self.iter_from(new):
            line.invalidate()
        logger.debug(f"inserted line {new.id} after line {node.id}")
        return new

    def remove_node(self, node: LineNode) -> None:
        """Splice ``node`` out; every line from the removal point needs repainting."""
        if node not in self:
            raise InvariantViolation(f"line {node.id} is not part of this chain")
        previous, following = self.previous_of(node), self.next_of(node)
        if previous is None and following is None:
            raise InvariantViolation("the only line of a chain cannot be removed")
        if previous is not None:
            previous.next = node.next
        else:
            self.head_id = node.next
        if following is not None:
            following.previous = node.previous
        self._release(node)
        for line in self.iter_from(previous or following):
            line.invalidate()
        logger.debug(f"removed line {node.id}")

    def join(self, other: "LineChain") -> None:
        """Attach ``other`` as the paragraphs following this chain's tail.

        The nodes move into this chain's slab; ``other`` is left holding a
        single empty line.
        """
        if (other.width, other.indent) != (self.width, self.indent):
            raise ConfigurationError("only chains of the same geometry can be joined")
        tail = self.tail
        tail.words.eop = True
        previous = tail
        for source in list(other):
            node = self._allocate()
            node.words = source.words
            node.needs_reflow = source.needs_reflow
            node.fresh = source.fresh
            node.previous, previous.next = previous.id, node.id
            previous = node
        other._slots, other._free = [], []
        other.head_id = other._allocate().id

    # --- Reflow ---

    def reflow(self, node: LineNode) -> None:
        """Restore the width bound from ``node`` forward.

        Overflow is pushed into the next line and slack is filled from it.
        The fix-up moves on to the next line only while lines keep being
        marked dirty, so it stops at the first line that needed no change.
        """
        node.needs_reflow = True
        line: Optional[LineNode] = node
        while line is not None and line.needs_reflow:
            while line.words.size > line.budget:
                if len(line.words.words) == 1:
                    raise ConfigurationError(
                        f"word {line.words.words[0]!r} does not fit in {line.budget} columns")
                self._push_to_next(line)
            while self.can_pull(line):
                self.pull_from_next(line)
            line.needs_reflow = False
            line = self.next_of(line)

    def can_pull(self, line: LineNode) -> bool:
        """True if the first word of the next line fits on ``line``.

        Every word, an empty one included, costs a separator on ``line``.
        """
        if line.words.eop:
            return False
        following = self.next_of(line)
        if following is None:
            return False
        first = following.words.words[0]
        return line.words.size + len(first) + 1 <= line.budget

    def _push_to_next(self, line: LineNode) -> None:
        following = self.next_of(line)
        if line.words.eop or following is None or following.words.is_empty():
            # A paragraph end moves onto a fresh line of its own, and a lone
            # empty word ahead stays where it is until reflow pulls it.
            following = self.insert_node_after(line)
        line.words.push_last_word_to(following.words)
        following.needs_reflow = True
        line.invalidate()
        following.invalidate()

    def pull_from_next(self, line: LineNode) -> None:
        """Move the first word of the next line up onto ``line``.

        A next line whose last word was taken is removed, its paragraph end
        and cursor having moved to ``line``.
        """
        following = self.next_of(line)
        if following is None:
            return
        ran_out = line.words.pull_first_word_from(following.words)
        following.needs_reflow = True
        line.invalidate()
        following.invalidate()
        if ran_out:
            self.remove_node(following)
