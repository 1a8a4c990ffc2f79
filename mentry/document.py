"""The multi-paragraph document behind a text entry field."""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Iterator, Optional, Union

from .chain import LineChain, LineNode
from .constants import EntryConstants
from .errors import ConfigurationError, InvariantViolation
from .operations import Operation, resolve_operation
from .words import CursorAddress, CursorIndex, LinearOffset, as_address

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = EntryConstants.PARAGRAPH_BREAK
SEPARATOR = EntryConstants.WORD_SEPARATOR


class RepaintHint(Enum):
    """What the renderer has to do after an operation."""
    FULL = "whole"
    CURSOR = "cursor"
    NOOP = "noop"


class LineTexts:
    """Restartable view of the display string of every line, in order."""

    def __init__(self, chain: LineChain):
        self._chain = chain

    def __iter__(self) -> Iterator[str]:
        return (node.words.text for node in self._chain)

    def __len__(self) -> int:
        return len(self._chain)


class Document:
    """Word-wrapped paragraphs with a single cursor.

    Every public operation returns a RepaintHint. Lines whose content
    changed carry their own freshness so the renderer can repaint only
    what moved.
    """

    def __init__(self, text: str = "", width: int = EntryConstants.DEFAULT_WIDTH,
                 indent: int = EntryConstants.PARAGRAPH_INDENT, headshift: int = 0):
        if width < 1 or indent < 0 or width <= indent:
            raise ConfigurationError(
                f"width {width} leaves no room after a paragraph indent of {indent}")
        self.width = width
        self.indent = indent
        self.headshift = headshift

        paragraphs = text.split(PARAGRAPH_BREAK)
        longest = max((word for p in paragraphs for word in p.split()), key=len, default="")
        if len(longest) > self.max_word_length:
            raise ConfigurationError(
                f"word {longest!r} is longer than the {self.max_word_length} columns of a line")

        chain = LineChain(width, indent, paragraphs[0])
        for paragraph in paragraphs[1:]:
            chain.join(LineChain(width, indent, paragraph))
        self.chain = chain
        self._current_id = chain.head_id
        self.current.words.focused = True
        self.current.words.to_line_start()
        logger.debug(f"built document: {len(paragraphs)} paragraphs on {len(chain)} lines")

    @property
    def max_word_length(self) -> int:
        """Longest word that fits on every line, including a paragraph's first."""
        return self.width - self.indent

    @property
    def current(self) -> LineNode:
        return self.chain.node(self._current_id)

    # --- Focus bookkeeping ---

    def _focus(self, node: LineNode, address: Optional[CursorAddress] = None) -> None:
        self.current.words.focused = False
        node.words.focused = True
        self._current_id = node.id
        if address is not None:
            node.words.move_to(address)

    def _find_focused(self, start: LineNode) -> LineNode:
        # Reflow moves the cursor at most one line away from where it started.
        for node in itertools.islice(self.chain.iter_from(start), 3):
            if node.words.focused:
                return node
        for node in self.chain:
            if node.words.focused:
                return node
        raise InvariantViolation("no line holds the cursor")

    def _settle(self, start: Optional[LineNode] = None) -> None:
        """Reflow after an edit and re-seat the cursor on its line."""
        current = self.current
        previous = self.chain.previous_of(current)
        if start is None:
            start = previous or current
        self.chain.reflow(start)
        if current in self.chain and previous is not None and current.words.is_at_line_start():
            # The edit may have made room for this line's start on the line above.
            previous.invalidate()
        self._current_id = self._find_focused(start).id

    def _locate(self, at: Union[int, CursorAddress, None]) -> CursorIndex:
        words = self.current.words
        return words.cursor if at is None else words.locate(as_address(at))

    # --- Editing ---

    def insert_char(self, ch: str, at: Union[int, CursorAddress, None] = None) -> RepaintHint:
        """Insert one character, optionally moving to ``at`` on the current line first.

        A paragraph break splits the paragraph at the cursor. Other
        whitespace is inserted as a word separator.
        """
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        node = self.current
        target = self._locate(at)
        if ch == PARAGRAPH_BREAK:
            node.words.cursor = target
            return self._split_paragraph()
        if ch.isspace():
            ch = SEPARATOR
        elif len(node.words.words[target.word]) >= self.max_word_length:
            return RepaintHint.NOOP

        node.words.cursor = target
        node.words.insert_char(ch)
        node.touch()
        node.needs_reflow = True
        self._settle()
        return RepaintHint.FULL

    def _split_paragraph(self) -> RepaintHint:
        node = self.current
        words = node.words
        previous = self.chain.previous_of(node)
        text = words.text
        prefix, suffix = text[:words.linear], text[words.linear:]

        if not prefix and previous is not None and not previous.words.eop:
            # At the start of a wrapped line the break falls on the line above.
            previous.words.eop = True
            previous.invalidate()
            target = node
        else:
            was_eop = words.eop
            following = self.chain.next_of(node)
            words.reset(prefix, len(prefix))
            words.eop = True
            if suffix.split() or was_eop or following is None:
                target = self.chain.insert_node_after(node, suffix)
                target.words.eop = was_eop
            else:
                target = following

        node.invalidate()
        node.needs_reflow = True
        self._focus(target, LinearOffset(0))
        target.invalidate()
        target.needs_reflow = True
        self._settle(previous or node)
        return RepaintHint.FULL

    def delete_forward(self, at: Union[int, CursorAddress, None] = None) -> RepaintHint:
        """Delete the character after the cursor.

        At the end of a paragraph this removes the paragraph break instead,
        merging the next paragraph into this one.
        """
        node = self.current
        words = node.words
        target = self._locate(at)
        following = self.chain.next_of(node)
        last = len(words.words) - 1
        at_line_end = target.word == last and target.inword == len(words.words[last])

        if at_line_end and following is None:
            return RepaintHint.NOOP

        if at_line_end and words.eop:
            words.cursor = target
            words.eop = False
            following.invalidate()
            following.needs_reflow = True
        elif at_line_end and following.words.is_empty():
            # Only a separator follows; drop it with its line.
            words.cursor = target
            words.eop, following.words.eop = following.words.eop, False
            self.chain.remove_node(following)
        elif at_line_end:
            # The separator to delete sits between this line and the next.
            if len(words.words[last]) + len(following.words.words[0]) > self.max_word_length:
                return RepaintHint.NOOP
            words.cursor = target
            self.chain.pull_from_next(node)
            words.delete_char()
        else:
            if target.inword == len(words.words[target.word]):
                joined = len(words.words[target.word]) + len(words.words[target.word + 1])
                if joined > self.max_word_length:
                    return RepaintHint.NOOP
            words.cursor = target
            words.delete_char()

        node.touch()
        node.needs_reflow = True
        self._settle()
        return RepaintHint.FULL

    def delete_backward(self, at: Union[int, CursorAddress, None] = None) -> RepaintHint:
        """Delete the character before the cursor."""
        node = self.current
        target = self._locate(at)
        if target.line == 0 and self.chain.previous_of(node) is None:
            return RepaintHint.NOOP

        saved = [(line, line.words.cursor) for line in (node, self.chain.previous_of(node)) if line]
        node.words.cursor = target
        self.prev_char()
        if self.delete_forward() is RepaintHint.NOOP:
            for line, cursor in saved:
                line.words.cursor = cursor
            self._focus(node)
            return RepaintHint.NOOP
        return RepaintHint.FULL

    # --- Navigation ---

    def prev_char(self) -> RepaintHint:
        node = self.current
        if node.words.prev_char():
            return RepaintHint.CURSOR
        previous = self.chain.previous_of(node)
        if previous is None:
            return RepaintHint.NOOP
        self._focus(previous)
        previous.words.to_line_end()
        return RepaintHint.CURSOR

    def next_char(self) -> RepaintHint:
        node = self.current
        if node.words.next_char():
            return RepaintHint.CURSOR
        following = self.chain.next_of(node)
        if following is None:
            return RepaintHint.NOOP
        self._focus(following)
        following.words.to_line_start()
        return RepaintHint.CURSOR

    def prev_word(self) -> RepaintHint:
        """Go to the start of this word, or of the word before it."""
        node = self.current
        cursor = node.words.cursor
        if cursor.inword > 0:
            node.words.set_word_offset(cursor.word, 0)
            return RepaintHint.CURSOR
        if cursor.word > 0:
            node.words.prev_word()
            return RepaintHint.CURSOR
        previous = self.chain.previous_of(node)
        if previous is None:
            return RepaintHint.NOOP
        self._focus(previous)
        previous.words.set_word_offset(len(previous.words.words) - 1, 0)
        return RepaintHint.CURSOR

    def next_word(self) -> RepaintHint:
        """Go to the start of the next word, crossing onto the next line."""
        node = self.current
        if not node.words.is_last_word():
            node.words.next_word()
            return RepaintHint.CURSOR
        following = self.chain.next_of(node)
        if following is not None:
            self._focus(following)
            following.words.to_line_start()
            return RepaintHint.CURSOR
        if node.words.is_at_line_end():
            return RepaintHint.NOOP
        node.words.to_line_end()
        return RepaintHint.CURSOR

    def line_start(self) -> RepaintHint:
        words = self.current.words
        if words.is_at_line_start():
            return RepaintHint.NOOP
        words.to_line_start()
        return RepaintHint.CURSOR

    def line_end(self) -> RepaintHint:
        words = self.current.words
        if words.is_at_line_end():
            return RepaintHint.NOOP
        words.to_line_end()
        return RepaintHint.CURSOR

    def prev_line(self) -> RepaintHint:
        node = self.current
        previous = self.chain.previous_of(node)
        if previous is None:
            return RepaintHint.NOOP
        self._focus(previous, LinearOffset(node.words.linear))
        return RepaintHint.CURSOR

    def next_line(self) -> RepaintHint:
        node = self.current
        following = self.chain.next_of(node)
        if following is None:
            return RepaintHint.NOOP
        self._focus(following, LinearOffset(node.words.linear))
        return RepaintHint.CURSOR

    def document_start(self) -> RepaintHint:
        head = self.chain.head
        if head is self.current and head.words.is_at_line_start():
            return RepaintHint.NOOP
        self._focus(head)
        head.words.to_line_start()
        return RepaintHint.CURSOR

    def document_end(self) -> RepaintHint:
        tail = self.chain.tail
        if tail is self.current and tail.words.is_at_line_end():
            return RepaintHint.NOOP
        self._focus(tail)
        tail.words.to_line_end()
        return RepaintHint.CURSOR

    def move_to(self, viewport_row: int, column: int) -> RepaintHint:
        """Put the cursor at a display column of a viewport row."""
        node = self.line_at(viewport_row)
        if node is None:
            return RepaintHint.NOOP
        address = LinearOffset(column - node.indent)
        if node is self.current and node.words.locate(address) == node.words.cursor:
            return RepaintHint.NOOP
        self._focus(node, address)
        return RepaintHint.CURSOR

    def perform(self, operation: Union[Operation, str], *args) -> RepaintHint:
        """Run an operation by enum member or method name."""
        return getattr(self, resolve_operation(operation).value)(*args)

    # --- Viewport ---

    def cursor_column(self) -> int:
        return self.current.cursor_column()

    def cursor_row(self) -> int:
        """Cursor row relative to the viewport; negative or past the bottom when off-screen."""
        return self.current.row() - self.headshift

    def scroll_by(self, rows: int) -> RepaintHint:
        headshift = max(0, self.headshift + rows)
        if headshift == self.headshift:
            return RepaintHint.NOOP
        self.headshift = headshift
        for node in self.chain:
            node.invalidate()
        return RepaintHint.FULL

    def line_at(self, viewport_row: int) -> Optional[LineNode]:
        row = viewport_row + self.headshift
        if row < 0:
            return None
        return next(itertools.islice(self.chain, row, None), None)

    def iterate_lines(self) -> Iterator[LineNode]:
        return iter(self.chain)

    # --- Export ---

    def to_text(self) -> str:
        paragraphs: list[str] = []
        words: list[str] = []
        for node in self.chain:
            words.extend(word for word in node.words.words if word)
            if node.words.eop:
                paragraphs.append(SEPARATOR.join(words))
                words = []
        paragraphs.append(SEPARATOR.join(words))
        return PARAGRAPH_BREAK.join(paragraphs)

    def to_paragraphs(self) -> LineTexts:
        """Display string of each line in order; iterate as often as needed."""
        return LineTexts(self.chain)

    def check_invariants(self) -> None:
        """Raise InvariantViolation if a line is overfull or underfilled, or the focus or cursor bookkeeping is off."""
        focused = [node for node in self.chain if node.words.focused]
        if len(focused) != 1 or focused[0] is not self.current:
            raise InvariantViolation(f"expected the current line to be the only focused one: {focused}")
        for node in self.chain:
            if node.words.size > node.budget:
                raise InvariantViolation(f"{node!r} is wider than {node.budget} columns")
            if self.chain.can_pull(node):
                raise InvariantViolation(f"{node!r} has room for the next line's first word")
            if node.words.locate(node.words.address) != node.words.cursor:
                raise InvariantViolation(f"{node!r} has an inconsistent cursor")
        if self.chain.tail.words.eop:
            raise InvariantViolation("the last line cannot end a paragraph")
