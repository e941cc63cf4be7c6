from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError
from wvb_core.models import ConnectionSettings

logger = logging.getLogger(__name__)


class JsonSettingsStore:
    """Connection settings persisted as a small JSON file.

    Saves go through a temp file in the same directory and ``os.replace``,
    so a concurrent reader sees either the old pair or the new one.
    """

    def __init__(self, path: str, defaults: ConnectionSettings | None = None) -> None:
        self._path = Path(path)
        self._defaults = defaults or ConnectionSettings()

    def get_settings(self) -> ConnectionSettings:
        if not self._path.exists():
            return self._defaults.model_copy()
        try:
            return ConnectionSettings.model_validate_json(self._path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self._path, exc)
            return self._defaults.model_copy()

    def save_settings(self, settings: ConnectionSettings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(settings.model_dump_json(indent=2))
            os.replace(tmp_path, self._path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.info("Saved connection settings to %s", self._path)
