"""Common interface and exceptions for foot-pedal input drivers."""

from app.core.pedal import PedalLatch


class PedalDriverError(RuntimeError):
    """Raised when a pedal backend cannot be started."""


class PedalDriver:
    """Abstract interface for pedal backends.

    A driver watches its hardware on its own thread and calls
    ``latch.press()`` for every accepted press; it never touches the engine.
    """

    def __init__(self, latch: PedalLatch):
        self.latch = latch

    def open(self, *args, **kwargs):  # pragma: no cover - interface placeholder
        raise NotImplementedError

    def close(self):  # pragma: no cover - interface placeholder
        raise NotImplementedError

    def is_open(self) -> bool:  # pragma: no cover - interface placeholder
        raise NotImplementedError


class NullPedal(PedalDriver):
    """Used when no pedal is configured; the on-screen button still works."""

    def open(self, *args, **kwargs):
        return None

    def close(self):
        return None

    def is_open(self) -> bool:
        return False
