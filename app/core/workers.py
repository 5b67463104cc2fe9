# app/core/workers.py
import threading
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal

from app.core.loader import PatternLoadError, load_pattern_into
from app.core.logger import APP_LOGGER
from app.core.pattern import PatternHandle

THREAD_JOIN_TIMEOUT_S = 0.2


class PatternLoadWorker(QObject):
    """
    Parses a pattern file off the GUI thread.

    Emits ``loaded(path)`` once the handle has been swapped, or
    ``failed(message)`` with the previous pattern left in place.
    """
    loaded = Signal(str)
    failed = Signal(str)

    def __init__(self, handle: PatternHandle):
        super().__init__()
        self._handle = handle
        self._thread: Optional[threading.Thread] = None

    def is_busy(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def start(self, path) -> bool:
        if self.is_busy():
            APP_LOGGER.warning("Pattern load already in progress; ignoring request")
            return False
        path = Path(path)
        self._thread = threading.Thread(target=self._run, args=(path,), name="PatternLoadWorker", daemon=True)
        self._thread.start()
        return True

    def wait(self, timeout: float = THREAD_JOIN_TIMEOUT_S) -> None:
        if self._thread:
            self._thread.join(timeout=timeout)

    def _run(self, path: Path):
        try:
            load_pattern_into(self._handle, path)
        except PatternLoadError as e:
            self.failed.emit(f"Could not open {path.name}: {e}")
            return
        except Exception as e:
            APP_LOGGER.error(f"Unexpected error loading {path}: {e}", exc_info=True)
            self.failed.emit(f"Could not open {path.name}: {e}")
            return
        self.loaded.emit(str(path))
