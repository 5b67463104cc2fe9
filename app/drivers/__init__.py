"""Foot-pedal input drivers for Drawboy."""

from .pedal_driver import NullPedal, PedalDriver, PedalDriverError
from .serial_pedal import SerialPedal

__all__ = [
    "NullPedal",
    "PedalDriver",
    "PedalDriverError",
    "SerialPedal",
]
