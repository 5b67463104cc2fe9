# app/core/paths.py
import os
import sys
from pathlib import Path

def get_resource_path(relative_path: str) -> Path:
    """Get absolute path to resource, works for dev and for PyInstaller."""
    try:
        # PyInstaller creates a temporary folder and stores path in _MEIPASS
        base_path = Path(sys._MEIPASS)
    except AttributeError:
        # Fallback to dev mode: this file is in app/core/, so three levels up is project root
        base_path = Path(__file__).resolve().parent.parent.parent
    return base_path / relative_path

BASE_DIR = get_resource_path(".")
STATE_DIR = Path.home() / ".drawboy"
STATE_PATH = STATE_DIR / "state.json"

# Optional runtime overrides
PEDAL_PORT_ENV = "DRAWBOY_PEDAL_PORT"
LOG_FILE_ENV = "DRAWBOY_LOG_FILE"
LOG_LEVEL_ENV = "DRAWBOY_LOG_LEVEL"
THEME_ENV = "DRAWBOY_THEME"
FONT_ENV = "DRAWBOY_FONT"
FULLSCREEN_ENV = "DRAWBOY_FULLSCREEN"
TRUE_VALUES = ("1", "true", "yes", "on")

def _env_text(name: str) -> str | None:
    raw = os.environ.get(name, "").strip()
    return raw or None

def pedal_port_from_env() -> str | None:
    return _env_text(PEDAL_PORT_ENV)

def log_file_from_env() -> Path | None:
    raw = _env_text(LOG_FILE_ENV)
    return Path(raw).expanduser() if raw else None

def log_level_from_env() -> str | None:
    return _env_text(LOG_LEVEL_ENV)

def theme_name_from_env() -> str | None:
    raw = _env_text(THEME_ENV)
    return raw.lower() if raw else None

def font_family_from_env() -> str | None:
    return _env_text(FONT_ENV)

def fullscreen_from_env() -> bool:
    # Kiosk mode for a screen mounted on the loom
    return (_env_text(FULLSCREEN_ENV) or "").lower() in TRUE_VALUES
