"""Exceptions raised by the mentry buffer."""


class MentryError(Exception):
    """Base class for mentry errors."""


class InvariantViolation(MentryError, AssertionError):
    """The line chain was asked to do something its state forbids.

    These are programming errors, not user input errors. Operations check
    their preconditions before mutating, so when this is raised the buffer
    is left as it was.
    """


class ConfigurationError(MentryError, ValueError):
    """The width, indent and text cannot be laid out.

    Raised when a line budget is too small to hold a single word.
    """
