"""Keyboard input handling using curtsies-style tokens."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass(frozen=True)
class KeyEvent:
    """A parsed key press."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as read from the terminal


SPECIAL_KEYS = frozenset({
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
})


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (``'<Ctrl-a>'``, ``'<Esc+b>'``) or a plain string."""
        key_str = str(key)
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                if ch in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                if ch == 'h':
                    return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
                return KeyEvent(KeyType.CTRL, ch, key_str)
            if o == 127:
                return KeyEvent(KeyType.SPECIAL, 'backspace', key_str)
            if key_str == '\x1b':
                return KeyEvent(KeyType.SPECIAL, 'escape', key_str)

        return KeyEvent(KeyType.REGULAR, key_str, key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Keep case for single letters ('<Esc+B>' is not '<Esc+b>')
        parts = name.replace('+', '-').split('-')
        base = parts[-1] if len(parts[-1]) == 1 else parts[-1].lower()
        if base == '' and len(parts) > 1:
            # '<Esc+->' style tokens name the '-' key itself
            base = '-'
        mods = {part.lower() for part in parts[:-1] if part}
        if mods & {'meta', 'esc'}:
            mods.add('alt')

        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(KeyType.REGULAR, ' ', key_str)
        if base == 'tab' and not mods:
            return KeyEvent(KeyType.REGULAR, '\t', key_str)
        if base in ('esc', 'escape') and not mods:
            return KeyEvent(KeyType.SPECIAL, 'escape', key_str)
        if 'ctrl' in mods:
            if len(base) == 1:
                lowered = base.lower()
                if lowered in ('j', 'm'):
                    return KeyEvent(KeyType.SPECIAL, 'enter', key_str)
                return KeyEvent(KeyType.CTRL, lowered, key_str)
            return KeyEvent(KeyType.CTRL, base, key_str)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(KeyType.ALT, base, key_str)
        return KeyEvent(KeyType.SPECIAL, base, key_str)
