"""Which rows or threads are on screen around the current position.

Out-of-range slots come back as placeholder cells so the view can draw
blanks at the start and end of a pattern without special cases.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .pattern import RGB, PatternProvider
from .position import Mode, ThreadingSubMode, clamp_batch_size, effective_last_index

CONTINUOUS_LEAD = 2
ROW_OFFSETS = (-2, -1, 0, 1, 2, 3, 4, 5, 6)


@dataclass(frozen=True)
class WindowCell:
    index: int
    offset: int
    shafts: Optional[frozenset] = None
    color: Optional[RGB] = None
    placeholder: bool = False

    @property
    def is_current(self) -> bool:
        return self.offset == 0

    def is_active(self, column: int) -> bool:
        return bool(self.shafts) and column in self.shafts


def threading_window_range(current: int, batch_size: int, sub_mode: ThreadingSubMode) -> range:
    size = clamp_batch_size(batch_size)
    if sub_mode is ThreadingSubMode.BATCHED:
        start = (max(1, current) - 1) // size * size + 1
    else:
        # Current thread sits in the third column
        start = current - CONTINUOUS_LEAD
    return range(start, start + size)


def row_window_range(current: int) -> List[int]:
    return [current + offset for offset in ROW_OFFSETS]


def build_window(
    indices: Iterable[int],
    current: int,
    last_index: int,
    mode: Mode,
    pattern: PatternProvider,
) -> List[WindowCell]:
    last = effective_last_index(last_index)
    cells: List[WindowCell] = []
    for index in indices:
        offset = index - current
        if index <= 0 or index > last:
            cells.append(WindowCell(index=index, offset=offset, placeholder=True))
            continue
        shafts = pattern.lookup(mode, index)
        cells.append(
            WindowCell(
                index=index,
                offset=offset,
                # Missing entries (sparse treadling etc.) mean nothing is lifted
                shafts=frozenset(shafts) if shafts is not None else frozenset(),
                color=pattern.color(mode, index),
            )
        )
    return cells


def compute_window(
    mode: Mode,
    current: int,
    last_index: int,
    pattern: PatternProvider,
    sub_mode: ThreadingSubMode = ThreadingSubMode.CONTINUOUS,
    batch_size: int = 8,
) -> List[WindowCell]:
    if mode.uses_thread:
        indices = threading_window_range(current, batch_size, sub_mode)
    else:
        indices = row_window_range(current)
    return build_window(indices, current, last_index, mode, pattern)
