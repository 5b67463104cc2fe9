"""Operator session state: what is persisted between runs of the app."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

from .ewma import DEFAULT_ALPHA, ProgressEstimator
from .logger import APP_LOGGER
from .position import (
    DEFAULT_BATCH_SIZE,
    FIRST_INDEX,
    MAX_BATCH_SIZE,
    MIN_BATCH_SIZE,
    Mode,
    PatternPosition,
    ThreadingSubMode,
)

# Keys of the saved state file
KEY_ROW = "row"
KEY_THREAD = "warp"
KEY_MODE = "mode"
KEY_SUB_MODE = "threading_mode"
KEY_BATCH_SIZE = "threading_batch_size"
KEY_ESTIMATOR = "average_row_speed"
KEY_PATTERN_PATH = "wif_path"


@dataclass
class DrawboySession:
    """Owns the position, mode and timing state for one loom session."""

    position: PatternPosition = field(default_factory=PatternPosition)
    mode: Mode = Mode.LIFTPLAN
    threading_sub_mode: ThreadingSubMode = ThreadingSubMode.CONTINUOUS
    batch_size: int = DEFAULT_BATCH_SIZE
    estimator: ProgressEstimator = field(default_factory=lambda: ProgressEstimator(DEFAULT_ALPHA))
    pattern_path: Optional[str] = None

    # Runtime only, never persisted
    timer_paused: bool = False
    last_step_start: Optional[float] = None

    def reset_runtime_state(self) -> None:
        self.timer_paused = False
        self.last_step_start = None

    def to_config(self) -> dict:
        return {
            KEY_ROW: self.position.row,
            KEY_THREAD: self.position.thread,
            KEY_MODE: self.mode.value,
            KEY_SUB_MODE: self.threading_sub_mode.value,
            KEY_BATCH_SIZE: self.batch_size,
            KEY_ESTIMATOR: self.estimator.to_dict(),
            KEY_PATTERN_PATH: self.pattern_path,
        }

    @classmethod
    def from_config(cls, cfg: Optional[dict]) -> "DrawboySession":
        """Restore a session; every field falls back to its default on its own."""
        session = cls()
        if not isinstance(cfg, dict):
            return session
        session.position.row = _field(cfg, KEY_ROW, _parse_index, FIRST_INDEX)
        session.position.thread = _field(cfg, KEY_THREAD, _parse_index, FIRST_INDEX)
        session.mode = _field(cfg, KEY_MODE, Mode, Mode.LIFTPLAN)
        session.threading_sub_mode = _field(cfg, KEY_SUB_MODE, ThreadingSubMode, ThreadingSubMode.CONTINUOUS)
        session.batch_size = _field(cfg, KEY_BATCH_SIZE, _parse_batch_size, DEFAULT_BATCH_SIZE)
        session.estimator = _field(cfg, KEY_ESTIMATOR, ProgressEstimator.from_dict, None) or ProgressEstimator(DEFAULT_ALPHA)
        session.pattern_path = _field(cfg, KEY_PATTERN_PATH, _parse_path, None)
        return session


def _field(cfg: dict, key: str, parse: Callable[[Any], Any], default: Any) -> Any:
    if key not in cfg or cfg[key] is None:
        return default
    try:
        return parse(cfg[key])
    except (TypeError, ValueError) as e:
        APP_LOGGER.warning(f"Ignoring saved {key}={cfg[key]!r}: {e}")
        return default


def _parse_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError("expected an integer")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValueError("expected an integer")
    return int(raw)


def _parse_index(raw: Any) -> int:
    value = _parse_int(raw)
    if value < FIRST_INDEX:
        raise ValueError("index must be >= 1")
    return value


def _parse_batch_size(raw: Any) -> int:
    value = _parse_int(raw)
    if not MIN_BATCH_SIZE <= value <= MAX_BATCH_SIZE:
        raise ValueError(f"batch size must be in [{MIN_BATCH_SIZE}, {MAX_BATCH_SIZE}]")
    return value


def _parse_path(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError("expected a file path")
    return str(Path(raw))
