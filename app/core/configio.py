# configio.py - persisted UI state save/load for Drawboy
import json, tempfile
from pathlib import Path
from app.core.logger import APP_LOGGER
from app.core.paths import STATE_PATH

DEFAULT_PATH = STATE_PATH

def _fallback_path(p: Path) -> Path:
    return Path(tempfile.gettempdir()) / ".drawboy" / p.name

def ensure_dir(p: Path) -> Path:
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    except PermissionError:
        # Fallback to temp dir if home is not writable
        tmp = _fallback_path(p)
        APP_LOGGER.warning(f"Permission denied for {p}, falling back to {tmp}")
        tmp.parent.mkdir(parents=True, exist_ok=True)
        return tmp

def save_state(cfg: dict, path: Path = DEFAULT_PATH) -> bool:
    target_path = ensure_dir(Path(path))
    try:
        with open(target_path, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
        return True
    except Exception as e:
        APP_LOGGER.error(f"Failed to save state to {target_path}: {e}")
        return False

def load_state(path: Path = DEFAULT_PATH) -> dict | None:
    path = Path(path)
    try:
        if not path.exists():
            # Check temp fallback from an earlier permission failure
            tmp = _fallback_path(path)
            if tmp.exists():
                path = tmp

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except Exception as e:
        APP_LOGGER.warning(f"Failed to load state from {path}: {e}")
        return None
    if not isinstance(data, dict):
        APP_LOGGER.warning(f"Ignoring state in {path}: expected an object, got {type(data).__name__}")
        return None
    return data
