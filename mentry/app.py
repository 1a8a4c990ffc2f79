"""Application controller: one entry field editing one file."""

import errno
import logging
import os
import sys
import tempfile
import termios
from typing import Optional

from .bindings import binding_for
from .constants import EntryConstants
from .document import Document, RepaintHint
from .entry import Entry
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .settings import EntrySettings, get_store
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


class EntryApp:
    """Runs an Entry in the terminal and handles load, save and quit."""

    def __init__(self, filename: Optional[str] = None,
                 settings: Optional[EntrySettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        self.settings = settings or get_store().load()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.filename = filename
        self.modified = False
        self.status_message: Optional[str] = None
        self.running = False
        self._quit_armed = False
        self.entry = self._build_entry("")
        if filename:
            self.load_file(filename)

    def _build_entry(self, text: str) -> Entry:
        s = self.settings
        width = s.width - 2 if s.with_border else s.width
        document = Document(text, width=width, indent=s.indent)
        return Entry(document, height=s.height, width=s.width, with_border=s.with_border,
                     indent=s.indent, terminal=self.terminal.term)

    def load_file(self, filename: str) -> None:
        """Load a file into the entry.

        A missing file starts an empty document. A file with a word too
        long for the configured width raises ConfigurationError.
        """
        self.filename = filename
        try:
            with open(filename, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"{filename} does not exist yet, starting empty")
            self.modified = False
            return
        if content.endswith('\n'):
            content = content[:-1]
        self.entry = self._build_entry(content)
        self.modified = False

    def save_file(self, filename: str) -> bool:
        """Save the document to a file atomically.

        Args:
            filename: Path to save file to

        Returns:
            True if save succeeded, False otherwise
        """
        temp_filename = None
        try:
            content = self.entry.to_text() + '\n'

            # Same directory, so the rename stays on one filesystem
            dir_name = os.path.dirname(filename) or '.'
            suffix = os.path.splitext(filename)[1]
            with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8',
                                             dir=dir_name, suffix=suffix,
                                             delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(content)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            os.replace(temp_filename, filename)

            self.filename = filename
            self.modified = False
            return True

        except PermissionError:
            self.status_message = EntryConstants.PERMISSION_DENIED_MESSAGE.format(filename)
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self.status_message = EntryConstants.NO_SPACE_MESSAGE
            else:
                self.status_message = EntryConstants.CANNOT_SAVE_MESSAGE.format(filename)
        logger.warning(f"Could not save {filename}: {self.status_message}")
        self._remove_temp(temp_filename)
        return False

    @staticmethod
    def _remove_temp(temp_filename: Optional[str]) -> None:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as e:
                logger.warning(f"Could not remove {temp_filename}: {e}")

    def _handle_save(self) -> None:
        """Handle Ctrl-S save command."""
        if not self.filename:
            self.status_message = EntryConstants.NO_FILENAME_MESSAGE
            return
        if self.save_file(self.filename):
            self.status_message = EntryConstants.SAVED_MESSAGE.format(self.filename)

    def _handle_quit(self) -> None:
        """Handle Ctrl-Q; unsaved changes need a second press."""
        if self.modified and not self._quit_armed:
            self._quit_armed = True
            self.status_message = EntryConstants.UNSAVED_MESSAGE
            return
        self.running = False

    def handle_key_event(self, key_event: KeyEvent) -> None:
        """Handle a keyboard event.

        Args:
            key_event: KeyEvent object with parsed key information
        """
        self.status_message = None

        if key_event.key_type == KeyType.CTRL and key_event.value == 'q':
            self._handle_quit()
            return
        self._quit_armed = False

        if key_event.key_type == KeyType.CTRL and key_event.value == 's':
            self._handle_save()
            return

        binding = binding_for(key_event)
        if binding is None:
            return
        operation, args = binding
        hint = self.entry.driver(operation, *args)
        if operation.edits and hint is not RepaintHint.NOOP:
            self.modified = True

    def _draw_status(self) -> None:
        self.terminal.show_status(self.status_message or "")
        self.entry.move_cursor()

    def _disable_flow_control(self):
        """Let Ctrl-S and Ctrl-Q through instead of pausing output."""
        try:
            old_settings = termios.tcgetattr(sys.stdin)
            new_settings = list(old_settings)
            new_settings[0] &= ~(termios.IXON | termios.IXOFF)
            termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
            return old_settings
        except (termios.error, OSError) as e:
            logger.warning(f"Could not disable flow control: {e}")
            return None

    def run(self) -> None:
        """Run the main loop."""
        self.terminal.setup()
        self.running = True
        try:
            with self.terminal.term.cbreak():
                old_settings = self._disable_flow_control()
                try:
                    self.entry.paint()
                    self._draw_status()
                    while self.running:
                        key_event = self.keyboard.get_key_event(timeout=None)
                        if key_event:
                            self.handle_key_event(key_event)
                            self._draw_status()
                finally:
                    if old_settings is not None:
                        termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
        except KeyboardInterrupt:
            pass
        finally:
            self.terminal.cleanup()
