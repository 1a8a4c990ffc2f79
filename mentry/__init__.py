"""mentry: a word-wrapping multi-paragraph text entry for the terminal."""

from .chain import Freshness, LineChain, LineNode
from .document import Document, RepaintHint
from .errors import ConfigurationError, InvariantViolation, MentryError
from .operations import Operation
from .words import CursorIndex, LinearOffset, WordList, WordOffset

__all__ = [
    "ConfigurationError",
    "CursorIndex",
    "Document",
    "Freshness",
    "InvariantViolation",
    "LineChain",
    "LineNode",
    "LinearOffset",
    "MentryError",
    "Operation",
    "RepaintHint",
    "WordList",
    "WordOffset",
]
