"""Read-only pattern data and the swappable handle the engine reads through."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Protocol, Tuple

from .position import Mode

RGB = Tuple[int, int, int]

DEFAULT_SHAFT_COUNT = 4
DEFAULT_TREADLE_COUNT = 6
DEFAULT_THREAD_COUNT = 1


class PatternProvider(Protocol):
    """What the engine needs from a loaded pattern."""

    title: Optional[str]
    author: Optional[str]

    def last_index(self, mode: Mode) -> int: ...

    def shaft_count(self) -> int: ...

    def treadle_count(self) -> int: ...

    def lookup(self, mode: Mode, index: int) -> Optional[frozenset]: ...

    def color(self, mode: Mode, index: int) -> Optional[RGB]: ...


@dataclass(frozen=True)
class PatternData:
    """One parsed weaving draft. Indices are 1-based throughout."""

    warp_threads: int = DEFAULT_THREAD_COUNT
    weft_threads: int = DEFAULT_THREAD_COUNT
    shafts: Optional[int] = None
    treadles: Optional[int] = None
    threading: Mapping[int, frozenset] = field(default_factory=dict)
    treadling: Mapping[int, frozenset] = field(default_factory=dict)
    tieup: Mapping[int, frozenset] = field(default_factory=dict)
    liftplan: Mapping[int, frozenset] = field(default_factory=dict)
    warp_colors: Mapping[int, RGB] = field(default_factory=dict)
    weft_colors: Mapping[int, RGB] = field(default_factory=dict)
    warp_default_color: Optional[RGB] = None
    weft_default_color: Optional[RGB] = None
    title: Optional[str] = None
    author: Optional[str] = None

    def last_index(self, mode: Mode) -> int:
        return self.warp_threads if mode.uses_thread else self.weft_threads

    def shaft_count(self) -> int:
        return self.shafts or DEFAULT_SHAFT_COUNT

    def treadle_count(self) -> int:
        return self.treadles or DEFAULT_TREADLE_COUNT

    def column_count(self, mode: Mode) -> int:
        """Treadling rows are drawn per treadle, everything else per shaft."""
        return self.treadle_count() if mode is Mode.TREADLING else self.shaft_count()

    def lookup(self, mode: Mode, index: int) -> Optional[frozenset]:
        if index < 1 or index > self.last_index(mode):
            return None
        if mode is Mode.THREADING:
            return self.threading.get(index)
        if mode is Mode.TREADLING:
            return self.treadling.get(index)
        return self.liftplan.get(index)

    def color(self, mode: Mode, index: int) -> Optional[RGB]:
        if index < 1 or index > self.last_index(mode):
            return None
        if mode.uses_thread:
            return self.warp_colors.get(index, self.warp_default_color)
        return self.weft_colors.get(index, self.weft_default_color)

    def with_liftplan(self) -> "PatternData":
        """Derive a liftplan from treadling + tie-up when the draft has none."""
        if self.liftplan or not self.treadling or not self.tieup:
            return self
        liftplan = {}
        for row, pressed in self.treadling.items():
            lifted: set[int] = set()
            for treadle in pressed:
                lifted.update(self.tieup.get(treadle, ()))
            liftplan[row] = frozenset(lifted)
        return replace(self, liftplan=liftplan)


class PatternHandle:
    """
    Holds the pattern currently on display together with the file it came from.

    The loader thread replaces both in one assignment; readers call
    ``snapshot()`` once per recompute and work from that tuple.
    """

    def __init__(self, data: PatternData, path: Optional[Path] = None):
        self._lock = threading.Lock()
        self._state: tuple[PatternData, Optional[Path]] = (data, _as_path(path))

    def snapshot(self) -> tuple[PatternData, Optional[Path]]:
        with self._lock:
            return self._state

    @property
    def data(self) -> PatternData:
        return self.snapshot()[0]

    @property
    def path(self) -> Optional[Path]:
        return self.snapshot()[1]

    def swap(self, data: PatternData, path: Optional[Path] = None) -> None:
        with self._lock:
            self._state = (data, _as_path(path))


def _as_path(path) -> Optional[Path]:
    return None if path is None else Path(path)


_BLACK: RGB = (20, 20, 20)
_WHITE: RGB = (235, 235, 225)
_HOUNDSTOOTH_THREADS = 16


def _houndstooth_colors() -> dict[int, RGB]:
    # Four dark, four light, repeated
    return {i: (_BLACK if ((i - 1) // 4) % 2 == 0 else _WHITE) for i in range(1, _HOUNDSTOOTH_THREADS + 1)}


def fallback_pattern() -> PatternData:
    """Small 2/2 twill houndstooth shown until a file has been opened."""
    straight = {i: frozenset({(i - 1) % 4 + 1}) for i in range(1, _HOUNDSTOOTH_THREADS + 1)}
    tieup = {
        1: frozenset({1, 2}),
        2: frozenset({2, 3}),
        3: frozenset({3, 4}),
        4: frozenset({4, 1}),
    }
    return PatternData(
        warp_threads=_HOUNDSTOOTH_THREADS,
        weft_threads=_HOUNDSTOOTH_THREADS,
        shafts=4,
        treadles=4,
        threading=straight,
        treadling=dict(straight),
        tieup=tieup,
        warp_colors=_houndstooth_colors(),
        weft_colors=_houndstooth_colors(),
        title="Houndstooth",
    ).with_liftplan()
