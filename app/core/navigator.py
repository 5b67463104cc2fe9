# navigator.py - advances the operator through a pattern and times each step
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .logger import APP_LOGGER
from .pattern import PatternData, PatternHandle
from .pedal import PedalLatch
from .position import Mode, ThreadingSubMode, clamp_batch_size, effective_last_index
from .session import DrawboySession
from .window import WindowCell, compute_window


@dataclass(frozen=True)
class DisplayState:
    """Everything the view needs for one repaint."""

    mode: Mode
    threading_sub_mode: ThreadingSubMode
    batch_size: int
    position: int
    last_index: int
    columns: int
    window: List[WindowCell]
    average_text: str
    eta_text: Optional[str]
    timer_paused: bool
    title: Optional[str]
    author: Optional[str]


class DrawboyEngine:
    """
    Single-owner state machine behind the drawboy display.

    Only the GUI thread calls into the engine. The pedal thread talks to it
    through ``PedalLatch`` and the loader thread through ``PatternHandle``;
    each operation takes one snapshot of the pattern and re-clamps the
    position against it, so a reload that shrinks the pattern is harmless.
    """

    def __init__(
        self,
        handle: PatternHandle,
        session: Optional[DrawboySession] = None,
        latch: Optional[PedalLatch] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.handle = handle
        self.session = session or DrawboySession()
        self.latch = latch or PedalLatch()
        self._clock = clock
        self.session.reset_runtime_state()
        self.session.last_step_start = self._clock()

    # --- accessors ---
    @property
    def mode(self) -> Mode:
        return self.session.mode

    @property
    def estimator(self):
        return self.session.estimator

    @property
    def paused(self) -> bool:
        return self.session.timer_paused

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else float(now)

    def _snapshot(self) -> tuple[PatternData, int]:
        data, _path = self.handle.snapshot()
        last = effective_last_index(data.last_index(self.session.mode))
        self.session.position.clamp(self.session.mode, last)
        return data, last

    def last_index(self) -> int:
        return self._snapshot()[1]

    def current(self) -> int:
        self._snapshot()
        return self.session.position.active(self.session.mode)

    def remaining_steps(self) -> int:
        _data, last = self._snapshot()
        return last - self.session.position.active(self.session.mode)

    # --- navigation ---
    def advance(self, now: Optional[float] = None) -> int:
        """Step forward one row/thread, recording how long the step took."""
        now = self._now(now)
        _data, last = self._snapshot()
        value = self.session.position.step_forward(self.session.mode, last)
        if not self.session.timer_paused:
            self.session.estimator.record(now - self.session.last_step_start)
        self.session.last_step_start = now
        return value

    def retreat(self, now: Optional[float] = None) -> int:
        """Step back one row/thread. Corrections never count as step time."""
        now = self._now(now)
        _data, last = self._snapshot()
        value = self.session.position.step_back(self.session.mode, last)
        self.session.last_step_start = now
        return value

    def set_position(self, value: int, now: Optional[float] = None) -> int:
        now = self._now(now)
        _data, last = self._snapshot()
        value = self.session.position.set_active(self.session.mode, value, last)
        self.session.last_step_start = now
        return value

    def poll(self, next_requested: bool = False, now: Optional[float] = None) -> bool:
        """One update cycle: at most one advance for a button and/or pedal press."""
        pedal = self.latch.consume()
        if not (next_requested or pedal):
            return False
        self.advance(now)
        return True

    # --- timer ---
    def pause(self, now: Optional[float] = None) -> None:
        self.session.timer_paused = True
        self.session.last_step_start = self._now(now)

    def resume(self, now: Optional[float] = None) -> None:
        self.session.timer_paused = False
        self.session.last_step_start = self._now(now)

    def toggle_pause(self, now: Optional[float] = None) -> bool:
        if self.session.timer_paused:
            self.resume(now)
        else:
            self.pause(now)
        return self.session.timer_paused

    def reset_timer(self) -> None:
        APP_LOGGER.info("Step timer reset")
        self.session.estimator.reset()

    # --- configuration ---
    def set_mode(self, mode: Mode) -> None:
        mode = Mode(mode)
        if mode is not self.session.mode:
            APP_LOGGER.info(f"Mode changed: {self.session.mode.label} -> {mode.label}")
        self.session.mode = mode

    def set_threading_sub_mode(self, sub_mode: ThreadingSubMode) -> None:
        self.session.threading_sub_mode = ThreadingSubMode(sub_mode)

    def set_batch_size(self, size: int) -> int:
        self.session.batch_size = clamp_batch_size(size)
        return self.session.batch_size

    # --- view ---
    def window(self) -> List[WindowCell]:
        data, last = self._snapshot()
        return compute_window(
            self.session.mode,
            self.session.position.active(self.session.mode),
            last,
            data,
            sub_mode=self.session.threading_sub_mode,
            batch_size=self.session.batch_size,
        )

    def columns(self) -> int:
        data, _last = self._snapshot()
        return data.column_count(self.session.mode)

    def display_state(self) -> DisplayState:
        data, last = self._snapshot()
        current = self.session.position.active(self.session.mode)
        return DisplayState(
            mode=self.session.mode,
            threading_sub_mode=self.session.threading_sub_mode,
            batch_size=self.session.batch_size,
            position=current,
            last_index=last,
            columns=data.column_count(self.session.mode),
            window=compute_window(
                self.session.mode,
                current,
                last,
                data,
                sub_mode=self.session.threading_sub_mode,
                batch_size=self.session.batch_size,
            ),
            average_text=self.session.estimator.format_average(),
            eta_text=self.session.estimator.format_eta(last - current),
            timer_paused=self.session.timer_paused,
            title=data.title,
            author=data.author,
        )

    # --- persistence ---
    def export_state(self) -> dict:
        path = self.handle.path
        self.session.pattern_path = str(path) if path is not None else None
        return self.session.to_config()
