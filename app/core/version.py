"""Version string for the window title and persisted state."""

from __future__ import annotations

from app.core.logger import APP_LOGGER
from app.core.paths import get_resource_path

APP_NAME = "Drawboy"
DEFAULT_APP_VERSION = "0.0.0"


def get_app_version(default: str = DEFAULT_APP_VERSION) -> str:
    """Read the VERSION file next to the project root, falling back to ``default``."""
    version_path = get_resource_path("VERSION")
    try:
        version = version_path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        APP_LOGGER.warning(f"Could not read {version_path}: {exc}")
        return default
    return version or default


def window_title(version: str | None = None) -> str:
    return f"{APP_NAME} {version or APP_VERSION}"


APP_VERSION = get_app_version()
