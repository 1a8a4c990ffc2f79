"""Terminal entry field: paints a Document into a rectangle of the screen."""

from __future__ import annotations

from typing import Optional, Union

import blessed

from .chain import Freshness, LineNode
from .constants import EntryConstants
from .document import Document, RepaintHint
from .errors import ConfigurationError
from .operations import Operation


class Entry:
    """A multi-line text entry field drawn with Blessed.

    The field owns a Document and a screen rectangle. ``rowshift`` and
    ``colshift`` place the rectangle; with a border they point at the
    inside of the box and the text area loses two columns.
    """

    def __init__(self, document: Optional[Document] = None,
                 height: int = EntryConstants.DEFAULT_HEIGHT,
                 width: int = EntryConstants.DEFAULT_WIDTH,
                 rowshift: int = 0, colshift: int = 0,
                 with_border: bool = False,
                 indent: int = EntryConstants.PARAGRAPH_INDENT,
                 terminal: Optional[blessed.Terminal] = None):
        if with_border:
            width -= 2
            rowshift += 1
            colshift += 1
        if height < 1:
            raise ConfigurationError(f"an entry needs at least one row, got {height}")
        if document is None:
            document = Document(width=width, indent=indent)
        elif document.width != width:
            raise ConfigurationError(
                f"document is {document.width} columns wide but the entry has {width}")
        self.document = document
        self.height = height
        self.width = width
        self.rowshift = rowshift
        self.colshift = colshift
        self.with_border = with_border
        self.term = terminal or blessed.Terminal()

    def driver(self, operation: Union[Operation, str], *args) -> RepaintHint:
        """Run a document operation and bring the screen up to date."""
        hint = self.document.perform(operation, *args)
        self.refresh(hint)
        return hint

    def paint(self) -> None:
        """Draw the whole field from scratch."""
        if self.with_border:
            self.draw_frame()
        for line in self.document.iterate_lines():
            line.invalidate()
        self.refresh(RepaintHint.FULL)

    def refresh(self, hint: RepaintHint = RepaintHint.FULL) -> None:
        if hint is RepaintHint.NOOP:
            return

        row = self.document.cursor_row()
        if row < 0:
            hint = self.scroll_up()
        elif row >= self.height:
            hint = self.scroll_down()

        if hint is RepaintHint.FULL:
            for i in range(self.height):
                self._paint_row(i)

        self.move_cursor()

    def scroll_up(self) -> RepaintHint:
        """Scroll so the cursor line becomes the top row."""
        self.document.scroll_by(self.document.cursor_row())
        return RepaintHint.FULL

    def scroll_down(self) -> RepaintHint:
        """Scroll so the cursor line becomes the bottom row."""
        self.document.scroll_by(self.document.cursor_row() - self.height + 1)
        return RepaintHint.FULL

    def _paint_row(self, i: int) -> None:
        line = self.document.line_at(i)
        if line is None:
            self._write(i, 0, " " * self.width)
            return
        if line.freshness() is Freshness.CLEAN:
            return
        column = self._first_dirty_column(line)
        self._write(i, column, line.visible_text(column).ljust(self.width - column))
        line.mark_painted()

    @staticmethod
    def _first_dirty_column(line: LineNode) -> int:
        if line.freshness() is Freshness.CURSOR:
            # The edit happened just left of the cursor.
            return max(0, line.cursor_column() - 1)
        return 0

    def _write(self, row: int, column: int, text: str) -> None:
        print(self.term.move(self.rowshift + row, self.colshift + column) + text, end='')

    def move_cursor(self) -> None:
        print(self.term.move(self.rowshift + self.document.cursor_row(),
                             self.colshift + self.document.cursor_column()) + self.term.normal_cursor,
              end='', flush=True)

    def draw_frame(self) -> None:
        """Draw a box one cell outside the text area."""
        top, left = self.rowshift - 1, self.colshift - 1
        horizontal = "─" * self.width
        print(self.term.move(top, left) + "┌" + horizontal + "┐", end='')
        for i in range(self.height):
            print(self.term.move(self.rowshift + i, left) + "│", end='')
            print(self.term.move(self.rowshift + i, self.colshift + self.width) + "│", end='')
        print(self.term.move(self.rowshift + self.height, left) + "└" + horizontal + "┘", end='')

    def to_text(self) -> str:
        return self.document.to_text()
