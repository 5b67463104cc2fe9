"""Loading pattern files into the shared handle."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .logger import APP_LOGGER
from .pattern import PatternData, PatternHandle, fallback_pattern
from .wif import WifError, load_wif


class PatternLoadError(RuntimeError):
    """Raised when a chosen pattern file cannot be read or parsed."""


def load_pattern_into(handle: PatternHandle, path: Union[str, Path]) -> PatternData:
    """Parse ``path`` and swap it into ``handle``.

    The handle is only touched after the whole file parsed, so a failure
    leaves the previous pattern on screen.
    """
    path = Path(path)
    try:
        data = load_wif(path)
    except WifError as e:
        APP_LOGGER.error(f"Error loading pattern {path}: {e}")
        raise PatternLoadError(str(e)) from e
    handle.swap(data, path)
    APP_LOGGER.info(
        f"Loaded pattern {path.name}: {data.warp_threads} warp / {data.weft_threads} weft threads, "
        f"{data.shaft_count()} shafts"
    )
    return data


def initial_handle(saved_path: Optional[str]) -> PatternHandle:
    """Handle for startup: the remembered file if it still loads, else the built-in pattern."""
    handle = PatternHandle(fallback_pattern())
    if saved_path:
        try:
            load_pattern_into(handle, saved_path)
        except PatternLoadError:
            APP_LOGGER.warning(f"Falling back to built-in pattern; could not reopen {saved_path}")
    return handle
