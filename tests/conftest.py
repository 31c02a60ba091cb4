"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


@pytest.fixture(autouse=True)
def isolated_preferences(tmp_path, monkeypatch):
    """Point the preference store at a per-test file so tests never touch data/."""
    prefs_file = tmp_path / "preferences.json"
    monkeypatch.setenv("APA_TABLE_PREFS_FILE", str(prefs_file))
    monkeypatch.delenv("APA_TABLE_FONT_DIR", raising=False)
    return prefs_file
