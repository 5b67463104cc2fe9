"""Core runtime modules bundled with the Drawboy application."""

from . import configio, ewma, logger, navigator, pattern, pedal, position, session, version, window, wif

__all__ = [
    "configio",
    "ewma",
    "logger",
    "navigator",
    "pattern",
    "pedal",
    "position",
    "session",
    "version",
    "window",
    "wif",
]
