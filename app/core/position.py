# position.py - operating modes and the row/thread cursor
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FIRST_INDEX = 1
MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 25
DEFAULT_BATCH_SIZE = 8


class Mode(str, Enum):
    """What the operator is working through."""

    LIFTPLAN = "liftplan"
    TREADLING = "treadling"
    THREADING = "threading"

    @property
    def uses_thread(self) -> bool:
        return self is Mode.THREADING

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def unit(self) -> str:
        return "Thread" if self.uses_thread else "Row"


class ThreadingSubMode(str, Enum):
    CONTINUOUS = "continuous"
    BATCHED = "batched"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def effective_last_index(last_index: int) -> int:
    """An empty pattern behaves like a one-row pattern."""
    return max(FIRST_INDEX, int(last_index))


def clamp_index(value: int, last_index: int) -> int:
    return max(FIRST_INDEX, min(int(value), effective_last_index(last_index)))


def clamp_batch_size(size: int) -> int:
    return max(MIN_BATCH_SIZE, min(int(size), MAX_BATCH_SIZE))


@dataclass
class PatternPosition:
    """Row and thread cursors; ``Mode`` decides which one is live.

    The inactive cursor keeps its value across mode switches so the operator
    can go back to threading without losing their place.
    """

    row: int = FIRST_INDEX
    thread: int = FIRST_INDEX

    def active(self, mode: Mode) -> int:
        return self.thread if mode.uses_thread else self.row

    def _store(self, mode: Mode, value: int) -> None:
        if mode.uses_thread:
            self.thread = value
        else:
            self.row = value

    def set_active(self, mode: Mode, value: int, last_index: int) -> int:
        value = clamp_index(value, last_index)
        self._store(mode, value)
        return value

    def clamp(self, mode: Mode, last_index: int) -> int:
        return self.set_active(mode, self.active(mode), last_index)

    def step_forward(self, mode: Mode, last_index: int) -> int:
        last = effective_last_index(last_index)
        value = self.active(mode) + 1
        if value > last:
            value = FIRST_INDEX
        self._store(mode, value)
        return value

    def step_back(self, mode: Mode, last_index: int) -> int:
        last = effective_last_index(last_index)
        value = self.active(mode) - 1
        if value < FIRST_INDEX:
            value = last
        self._store(mode, value)
        return value
