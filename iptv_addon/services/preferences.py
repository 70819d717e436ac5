"""
Settings store for the user's country/genre selection.
Persists a small JSON file that is read at startup and rewritten on every change.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from iptv_addon.exceptions import SettingsFileError
from iptv_addon.models.settings import UserSettings

logger = logging.getLogger(__name__)


def split_form_list(value: Optional[str]) -> list[str]:
    """Split a comma-separated form value, dropping blank items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class SettingsStore:
    """Holds the current UserSettings and mirrors them to disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._settings = UserSettings()

    @property
    def current(self) -> UserSettings:
        return self._settings

    def load(self) -> UserSettings:
        """Load settings from disk; a missing file yields empty settings.

        Raises SettingsFileError if the file exists but cannot be parsed.
        """
        if not self.path.exists():
            logger.info(f"No settings file at {self.path}, using defaults")
            self._settings = UserSettings()
            return self._settings

        try:
            with open(self.path, encoding="utf-8") as f:
                self._settings = UserSettings.model_validate(json.load(f))
        except (OSError, ValueError, ValidationError) as e:
            raise SettingsFileError(f"Cannot read settings file {self.path}: {e}") from e

        logger.info(
            f"Loaded settings: {len(self._settings.countries)} countries, "
            f"{len(self._settings.genres)} genres"
        )
        return self._settings

    def update(self, countries: list[str], genres: list[str]) -> UserSettings:
        """Replace the settings and persist them.

        The file is written to a temporary sibling and renamed over the
        target, so readers never see a partial file. In-memory settings
        change only once the write succeeded.
        """
        new_settings = UserSettings(countries=list(countries), genres=list(genres))
        self._write(new_settings)
        self._settings = new_settings
        logger.info(f"Saved settings: countries={new_settings.countries} genres={new_settings.genres}")
        return new_settings

    def _write(self, settings: UserSettings):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".config-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(settings.model_dump(), f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
