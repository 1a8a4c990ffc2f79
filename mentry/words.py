"""Word-segmented storage for a single display line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .constants import EntryConstants
from .errors import InvariantViolation

SEPARATOR = EntryConstants.WORD_SEPARATOR


@dataclass(frozen=True)
class LinearOffset:
    """Cursor given as a character count from the start of the line."""
    offset: int


@dataclass(frozen=True)
class WordOffset:
    """Cursor given as a word index plus an offset inside that word."""
    word: int
    inword: int


CursorAddress = Union[LinearOffset, WordOffset]


@dataclass(frozen=True)
class CursorIndex:
    """A resolved cursor where all three coordinates agree.

    ``line == sum(len(w) + 1 for w in words[:word]) + inword``
    """
    word: int = 0
    inword: int = 0
    line: int = 0


def as_address(value: Union[int, CursorAddress]) -> CursorAddress:
    """Accept a bare int as a linear offset."""
    if isinstance(value, (LinearOffset, WordOffset)):
        return value
    if isinstance(value, int):
        return LinearOffset(value)
    raise TypeError(f"not a cursor address: {value!r}")


class WordList:
    """The words of one display line plus a cursor inside them.

    ``focused`` is true for the one line in the document holding the
    cursor; ``eop`` marks the last line of a paragraph.
    """

    words: list[str]
    cursor: CursorIndex

    def __init__(self, text: str = "", line_offset: int = 0):
        self.focused = False
        self.eop = False
        self.reset(text, line_offset)

    def reset(self, text: str, line_offset: int = 0) -> None:
        """Replace the content, collapsing whitespace runs."""
        self.words = text.split() or [""]
        self.cursor = self.locate(LinearOffset(line_offset))

    @property
    def text(self) -> str:
        return SEPARATOR.join(self.words)

    @property
    def size(self) -> int:
        return sum(len(word) for word in self.words) + len(self.words) - 1

    def export_text(self) -> str:
        """Line text with empty words dropped."""
        return SEPARATOR.join(word for word in self.words if word)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        flags = "".join(f for f, on in (("F", self.focused), ("P", self.eop)) if on)
        return f"WordList({self.text!r}, cursor={self.cursor}, flags={flags!r})"

    # --- Addressing ---

    def locate(self, address: CursorAddress) -> CursorIndex:
        """Resolve an address to a consistent index, clamping out-of-range values."""
        if isinstance(address, LinearOffset):
            return self._from_linear(address.offset)
        if isinstance(address, WordOffset):
            return self._from_word(address.word, address.inword)
        raise TypeError(f"not a cursor address: {address!r}")

    def _from_linear(self, offset: int) -> CursorIndex:
        offset = max(0, min(offset, self.size))
        start = 0
        for index, word in enumerate(self.words[:-1]):
            if offset <= start + len(word):
                return CursorIndex(index, offset - start, offset)
            start += len(word) + 1
        return CursorIndex(len(self.words) - 1, offset - start, offset)

    def _from_word(self, word: int, inword: int) -> CursorIndex:
        last = len(self.words) - 1
        if word > last:
            word, inword = last, len(self.words[last])
        elif word < 0:
            word, inword = 0, 0
        inword = max(0, min(inword, len(self.words[word])))
        line = sum(len(w) + 1 for w in self.words[:word]) + inword
        return CursorIndex(word, inword, line)

    def move_to(self, address: CursorAddress) -> None:
        self.cursor = self.locate(address)

    def set_line_offset(self, offset: int) -> None:
        self.cursor = self._from_linear(offset)

    def set_word_offset(self, word: int, inword: int) -> None:
        self.cursor = self._from_word(word, inword)

    def _refresh_cursor(self) -> None:
        # Word content changed under the cursor; recompute the linear offset.
        self.cursor = self._from_word(self.cursor.word, self.cursor.inword)

    @property
    def linear(self) -> int:
        return self.cursor.line

    @property
    def address(self) -> WordOffset:
        return WordOffset(self.cursor.word, self.cursor.inword)

    @property
    def current_word(self) -> str:
        return self.words[self.cursor.word]

    # --- Predicates ---

    def is_empty(self) -> bool:
        return len(self.words) == 1 and self.words[0] == ""

    def is_first_word(self) -> bool:
        return self.cursor.word <= 0

    def is_last_word(self) -> bool:
        return self.cursor.word >= len(self.words) - 1

    def is_at_word_end(self) -> bool:
        return self.cursor.inword == len(self.current_word)

    def is_at_line_start(self) -> bool:
        return self.cursor.line == 0

    def is_at_line_end(self) -> bool:
        return self.is_last_word() and self.is_at_word_end()

    # --- Editing ---

    def insert_char(self, ch: str, at: Optional[CursorAddress] = None) -> None:
        """Insert one character at the cursor.

        The separator splits the current word in two and leaves the cursor
        at the start of the second half.
        """
        if at is not None:
            self.move_to(at)
        index = self.cursor
        word = self.words[index.word]
        if ch == SEPARATOR:
            self.words[index.word:index.word + 1] = [word[:index.inword], word[index.inword:]]
            self.cursor = CursorIndex(index.word + 1, 0, index.line + 1)
        else:
            self.words[index.word] = word[:index.inword] + ch + word[index.inword:]
            self.cursor = CursorIndex(index.word, index.inword + 1, index.line + 1)

    def delete_char(self, at: Optional[CursorAddress] = None) -> None:
        """Delete the character after the cursor.

        At the end of a word this removes the separator, joining the word
        with the next one. The cursor does not move.

        Raises:
            InvariantViolation: if the cursor is at the end of the line.
        """
        index = self.cursor if at is None else self.locate(at)
        word = self.words[index.word]
        at_word_end = index.inword == len(word)
        if at_word_end and index.word >= len(self.words) - 1:
            raise InvariantViolation("nothing to delete at the end of the line")
        self.cursor = index
        if at_word_end:
            self.words[index.word:index.word + 2] = [word + self.words[index.word + 1]]
        else:
            self.words[index.word] = word[:index.inword] + word[index.inword + 1:]

    def push_last_word_to(self, target: "WordList") -> None:
        """Move this line's last word to the front of ``target``.

        If the cursor was in the moved word of a focused line, focus follows
        the word. An empty ``target`` is a blank line and the word fills it.
        A paragraph end marker travels to ``target``, which must then be
        blank.
        """
        if self.eop and not target.is_empty():
            raise InvariantViolation("paragraph end cannot move onto a non-empty line")

        carry = self.focused and self.is_last_word()
        inword = self.cursor.inword
        target_was_empty = target.is_empty()

        if self.eop:
            target.eop, self.eop = True, False

        word = self.words.pop()
        if not self.words:
            self.words.append("")
        if target_was_empty:
            target.words[0] = word
        else:
            target.words.insert(0, word)

        if self.cursor.word >= len(self.words):
            self.to_line_end()
        else:
            self._refresh_cursor()

        if carry:
            self.focused, target.focused = False, True
            target.set_word_offset(0, inword)
        elif target_was_empty:
            target._refresh_cursor()
        else:
            target.set_word_offset(target.cursor.word + 1, target.cursor.inword)

    def pull_first_word_from(self, source: "WordList") -> bool:
        """Append ``source``'s first word to this line.

        An empty word on either side is a typed separator and stays a word
        of its own. A source whose last word was taken hands its paragraph
        end marker over to this line.

        Returns:
            True if ``source`` ran out of words and is now a blank line.
        """
        if self.eop:
            raise InvariantViolation("nothing can be pulled past the end of a paragraph")

        carry = source.focused and source.is_first_word()
        inword = source.cursor.inword

        word = source.words.pop(0)
        ran_out = not source.words
        if ran_out:
            source.words.append("")
            if source.eop:
                self.eop, source.eop = True, False

        self.words.append(word)

        if carry:
            self.focused, source.focused = True, False
            source.to_line_start()
            self.set_word_offset(len(self.words) - 1, inword)
        else:
            if source.cursor.word > 0:
                source.set_word_offset(source.cursor.word - 1, source.cursor.inword)
            else:
                source.to_line_start()
            self._refresh_cursor()
        return ran_out

    # --- Navigation ---

    def prev_word(self) -> None:
        self.set_word_offset(max(self.cursor.word - 1, 0), 0)

    def next_word(self) -> None:
        self.set_word_offset(min(self.cursor.word + 1, len(self.words) - 1), 0)

    def prev_char(self) -> bool:
        if self.is_at_line_start():
            return False
        self.set_line_offset(self.cursor.line - 1)
        return True

    def next_char(self) -> bool:
        if self.is_at_line_end():
            return False
        self.set_line_offset(self.cursor.line + 1)
        return True

    def to_line_start(self) -> None:
        self.cursor = CursorIndex()

    def to_line_end(self) -> None:
        last = len(self.words) - 1
        self.set_word_offset(last, len(self.words[last]))
