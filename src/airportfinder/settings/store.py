"""Settings persistence helpers.

Only user defaults are stored; searches themselves are never persisted.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from .schema import FinderSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Load and save :class:`FinderSettings` to disk."""

    @staticmethod
    def settings_path() -> Path:
        """Return the path to the settings JSON file."""
        home = os.environ.get("AIRPORTFINDER_HOME")
        if home:
            base = Path(home).expanduser()
        else:
            base = Path(os.path.expanduser("~/.airportfinder"))
        return base / "settings.json"

    @classmethod
    def ensure_home(cls) -> Path:
        """Ensure the settings directory exists and return it."""
        path = cls.settings_path().parent
        path.mkdir(parents=True, exist_ok=True)
        return path

    @classmethod
    def load(cls) -> FinderSettings:
        """Load settings from disk, returning defaults when absent or invalid."""
        path = cls.settings_path()
        if not path.exists():
            return FinderSettings()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return FinderSettings.model_validate(data)
        except (OSError, ValueError, ValidationError):
            logger.warning("Ignoring invalid settings file %s", path, exc_info=True)
            return FinderSettings()

    @classmethod
    def save(cls, settings: FinderSettings) -> None:
        """Atomically persist *settings* to disk."""
        path = cls.settings_path()
        cls.ensure_home()
        tmp = path.with_suffix(".tmp")
        tmp.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, path)
