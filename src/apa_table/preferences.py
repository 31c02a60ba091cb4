"""Dark-mode preference, the only state kept across sessions.

Stored as a small JSON file under a fixed key; read at startup and written on
every toggle.
"""

import json
import logging
from pathlib import Path

from apa_table.config import get_settings

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"


def _preferences_path(path: Path | None = None) -> Path:
    return path or get_settings().preferences_file


def load_dark_mode(path: Path | None = None) -> bool:
    """Return the stored dark-mode flag, or False if nothing readable is stored."""
    prefs_file = _preferences_path(path)
    if not prefs_file.exists():
        return False
    try:
        with open(prefs_file, "r", encoding="utf-8") as fopen:
            prefs = json.load(fopen)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read preferences from %s: %s", prefs_file, exc)
        return False
    return isinstance(prefs, dict) and prefs.get(DARK_MODE_KEY) is True


def save_dark_mode(enabled: bool, path: Path | None = None) -> None:
    """Persist the dark-mode flag, keeping any other keys already in the file."""
    prefs_file = _preferences_path(path)
    prefs: dict = {}
    if prefs_file.exists():
        try:
            with open(prefs_file, "r", encoding="utf-8") as fopen:
                loaded = json.load(fopen)
            if isinstance(loaded, dict):
                prefs = loaded
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Overwriting unreadable preferences file %s: %s", prefs_file, exc)
    prefs[DARK_MODE_KEY] = bool(enabled)
    prefs_file.parent.mkdir(parents=True, exist_ok=True)
    with open(prefs_file, "w", encoding="utf-8") as fopen:
        json.dump(prefs, fopen, indent=2)
    logger.info("Dark mode %s (saved to %s)", "on" if enabled else "off", prefs_file)
