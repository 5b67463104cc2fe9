# pedal.py - one-shot "step requested" flag shared with the pedal thread
from __future__ import annotations

import threading
from typing import Callable, Optional


class PedalLatch:
    """
    Depth-one, coalescing event between a pedal reader thread and the GUI.

    ``press()`` may be called from any thread; ``consume()`` reads and clears
    in one step so a press is never lost or counted twice. Several presses
    between two polls still advance only once.
    """

    def __init__(self, on_press: Optional[Callable[[], None]] = None):
        self._lock = threading.Lock()
        self._pressed = False
        self._on_press = on_press

    def set_on_press(self, callback: Optional[Callable[[], None]]) -> None:
        self._on_press = callback

    def press(self) -> None:
        with self._lock:
            self._pressed = True
        callback = self._on_press
        if callback is not None:
            callback()

    def consume(self) -> bool:
        with self._lock:
            pressed = self._pressed
            self._pressed = False
        return pressed

    def is_set(self) -> bool:
        with self._lock:
            return self._pressed
