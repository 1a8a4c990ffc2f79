"""Key bindings: which document operation a key event runs."""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .constants import EntryConstants
from .keyboard import KeyEvent, KeyType
from .operations import Operation

KEY_BINDINGS: Mapping[Tuple[KeyType, str], Operation] = MappingProxyType({
    # Character movement
    (KeyType.SPECIAL, 'left'): Operation.PREV_CHAR,
    (KeyType.SPECIAL, 'right'): Operation.NEXT_CHAR,
    (KeyType.CTRL, 'b'): Operation.PREV_CHAR,
    (KeyType.CTRL, 'f'): Operation.NEXT_CHAR,

    # Word movement
    (KeyType.ALT, 'left'): Operation.PREV_WORD,
    (KeyType.ALT, 'right'): Operation.NEXT_WORD,
    (KeyType.CTRL, 'left'): Operation.PREV_WORD,
    (KeyType.CTRL, 'right'): Operation.NEXT_WORD,
    (KeyType.ALT, 'b'): Operation.PREV_WORD,
    (KeyType.ALT, 'f'): Operation.NEXT_WORD,

    # Line movement
    (KeyType.SPECIAL, 'home'): Operation.LINE_START,
    (KeyType.SPECIAL, 'end'): Operation.LINE_END,
    (KeyType.CTRL, 'a'): Operation.LINE_START,
    (KeyType.CTRL, 'e'): Operation.LINE_END,
    (KeyType.SPECIAL, 'up'): Operation.PREV_LINE,
    (KeyType.SPECIAL, 'down'): Operation.NEXT_LINE,
    (KeyType.CTRL, 'p'): Operation.PREV_LINE,
    (KeyType.CTRL, 'n'): Operation.NEXT_LINE,

    # Whole field
    (KeyType.ALT, '<'): Operation.DOCUMENT_START,
    (KeyType.ALT, '>'): Operation.DOCUMENT_END,
    (KeyType.CTRL, 'home'): Operation.DOCUMENT_START,
    (KeyType.CTRL, 'end'): Operation.DOCUMENT_END,

    # Deletion
    (KeyType.SPECIAL, 'backspace'): Operation.DELETE_BACKWARD,
    (KeyType.SPECIAL, 'delete'): Operation.DELETE_FORWARD,
    (KeyType.CTRL, 'd'): Operation.DELETE_FORWARD,
})


def binding_for(event: KeyEvent) -> Optional[Tuple[Operation, tuple]]:
    """Return the operation and its arguments for a key event, if any.

    Printable characters insert themselves and Enter inserts a paragraph
    break; everything else goes through KEY_BINDINGS.
    """
    if event.key_type == KeyType.REGULAR:
        if len(event.value) == 1 and (event.value.isprintable() or event.value == '\t'):
            return Operation.INSERT_CHAR, (event.value,)
        return None
    if event.key_type == KeyType.SPECIAL and event.value == 'enter':
        return Operation.INSERT_CHAR, (EntryConstants.PARAGRAPH_BREAK,)
    operation = KEY_BINDINGS.get((event.key_type, event.value))
    if operation is None:
        return None
    return operation, ()
