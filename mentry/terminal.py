"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed
from curtsies import Input


class TerminalInterface:
    """Handles fullscreen setup and key reads."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None

    def setup(self):
        """Enter fullscreen mode and start reading raw keys."""
        print(self.term.enter_fullscreen + self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._input is None:
            self._input = Input(keynames='curtsies')
            self._input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore the terminal."""
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen + self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Read one key token.

        Args:
            timeout: Seconds to wait (None blocks, 0 polls).

        Returns:
            The curtsies key name, or None if nothing arrived in time.
        """
        if self._input is None:
            return None
        if timeout is not None:
            ready, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not ready:
                return None
        return str(next(self._input))

    def show_status(self, message: str) -> None:
        """Write a message on the bottom row."""
        print(self.term.move(self.term.height - 1, 0) + message.ljust(self.term.width)[:self.term.width],
              end='', flush=True)

    @property
    def width(self):
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows (excluding status line)."""
        return self.term.height - 1
