"""Constants and configuration for the mentry text entry."""

class EntryConstants:
    """Central configuration constants for the entry field."""

    # Layout
    DEFAULT_WIDTH = 50  # Columns available to a line
    DEFAULT_HEIGHT = 23  # Visible rows of the entry window
    PARAGRAPH_INDENT = 4  # Columns reserved at the start of each paragraph

    # Text format
    PARAGRAPH_BREAK = "\n"
    WORD_SEPARATOR = " "

    # Accepted ranges for persisted settings
    MIN_WIDTH = 10
    MAX_WIDTH = 400
    MIN_HEIGHT = 1
    MAX_HEIGHT = 200
    MAX_INDENT = 16

    # Settings storage
    APP_NAME = "mentry"
    SETTINGS_FILENAME = "settings.json"

    # Status messages
    SAVED_MESSAGE = "Saved to {}"
    NO_FILENAME_MESSAGE = "No file name given; start mentry with a path to save"
    PERMISSION_DENIED_MESSAGE = "Error: Permission denied saving {}"
    NO_SPACE_MESSAGE = "Error: No space left on device"
    CANNOT_SAVE_MESSAGE = "Error: Cannot save to {}"
    UNSAVED_MESSAGE = "Unsaved changes; press Ctrl-Q again to quit"
