"""Runtime settings for the APA table web app and exporters.

Values come from environment variables, optionally loaded from ``ROOT/.env``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")


class Settings(BaseModel):
    """Settings read from the environment at call time."""

    preferences_file: Path
    host: str = "0.0.0.0"
    port: int = 8000
    font_dir: Path | None = None


def get_settings() -> Settings:
    """Build a Settings object from the current environment."""
    font_dir = os.getenv("APA_TABLE_FONT_DIR", "")
    return Settings(
        preferences_file=Path(os.getenv("APA_TABLE_PREFS_FILE", str(ROOT / "data" / "preferences.json"))),
        host=os.getenv("APA_TABLE_HOST", "0.0.0.0"),
        port=int(os.getenv("APA_TABLE_PORT", "8000")),
        font_dir=Path(font_dir) if font_dir else None,
    )
