"""Persistent entry field settings.

Settings live in a JSON file in the user's config directory and fall back
to the defaults in EntryConstants whenever the file is missing or invalid.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EntryConstants

logger = logging.getLogger(__name__)


@dataclass
class EntrySettings:
    """Geometry of the entry field."""
    width: int = EntryConstants.DEFAULT_WIDTH
    height: int = EntryConstants.DEFAULT_HEIGHT
    indent: int = EntryConstants.PARAGRAPH_INDENT
    with_border: bool = False


class SettingsStore:
    """Reads and writes EntrySettings as JSON."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir(EntryConstants.APP_NAME))
        self._settings_file = self._config_dir / EntryConstants.SETTINGS_FILENAME
        self._cache: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._settings_file

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _read(self) -> Dict[str, Any]:
        if self._cache is not None:
            return self._cache

        if not self._settings_file.exists():
            self._cache = {}
            return self._cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._cache = {}
            return self._cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._cache = data
        return self._cache

    def validate_setting(self, key: str, value: Any) -> bool:
        """Check the type and range of one setting.

        Args:
            key: Setting name.
            value: Value read from the file.

        Returns:
            True if the value can be used.
        """
        if key == 'with_border':
            return isinstance(value, bool)
        # bool is an int subclass; a flag is never a size
        if not isinstance(value, int) or isinstance(value, bool):
            return False
        if key == 'width':
            return EntryConstants.MIN_WIDTH <= value <= EntryConstants.MAX_WIDTH
        if key == 'height':
            return EntryConstants.MIN_HEIGHT <= value <= EntryConstants.MAX_HEIGHT
        if key == 'indent':
            return 0 <= value <= EntryConstants.MAX_INDENT
        return False

    def load(self) -> EntrySettings:
        """Return the stored settings merged over the defaults."""
        values = {}
        for key, value in self._read().items():
            if key not in EntrySettings.__dataclass_fields__:
                continue
            if self.validate_setting(key, value):
                values[key] = value
            else:
                logger.warning(f"Ignoring invalid setting {key}={value!r}")
        settings = EntrySettings(**values)
        if settings.indent >= settings.width - (2 if settings.with_border else 0):
            logger.warning(f"Indent {settings.indent} does not fit width {settings.width}, using defaults")
            return EntrySettings()
        return settings

    def save(self, settings: EntrySettings) -> bool:
        """Write settings atomically.

        Returns:
            True if save was successful, False otherwise.
        """
        data = asdict(settings)
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError as cleanup_error:
                logger.warning(f"Could not remove {temp_file}: {cleanup_error}")
            return False
        self._cache = data
        return True

    def clear_cache(self) -> None:
        self._cache = None


_store: Optional[SettingsStore] = None


def get_store() -> SettingsStore:
    """Return the global settings store."""
    global _store
    if _store is None:
        _store = SettingsStore()
    return _store
