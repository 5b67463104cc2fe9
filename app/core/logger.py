# logger.py - the "drawboy_app" logger every module writes through
import logging
from pathlib import Path

LOGGER_NAME = "drawboy_app"
LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
DEFAULT_LEVEL = logging.INFO

APP_LOGGER = logging.getLogger(LOGGER_NAME)


def _formatted(handler: logging.Handler, level: int = logging.NOTSET) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler.setLevel(level)
    return handler


def _file_handlers() -> list:
    return [h for h in APP_LOGGER.handlers if isinstance(h, logging.FileHandler)]


def set_log_level(name: str) -> int:
    """Set the threshold from a level name such as "debug"; unknown names raise ValueError."""
    level = logging.getLevelName(str(name).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'")
    APP_LOGGER.setLevel(level)
    return level


def configure_file_logging(log_path, level: int = logging.DEBUG) -> Path:
    """Also write to ``log_path``; a previously configured log file is closed first."""
    for old in _file_handlers():
        APP_LOGGER.removeHandler(old)
        old.close()

    log_path = Path(log_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    APP_LOGGER.addHandler(_formatted(logging.FileHandler(log_path, encoding="utf-8"), level))
    APP_LOGGER.info(f"Writing log to {log_path}")
    return log_path


APP_LOGGER.setLevel(DEFAULT_LEVEL)
if not APP_LOGGER.handlers:
    APP_LOGGER.addHandler(_formatted(logging.StreamHandler()))
