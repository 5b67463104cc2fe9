# wif.py - Weaving Information File (WIF) reader
from __future__ import annotations

import configparser
from pathlib import Path
from typing import Dict, Optional, Union

from .logger import APP_LOGGER
from .pattern import RGB, PatternData

COLOR_MAX = 255
DEFAULT_PALETTE_RANGE = (0, 255)

SECTION_WIF = "WIF"
SECTION_TEXT = "TEXT"
SECTION_WEAVING = "WEAVING"
SECTION_WARP = "WARP"
SECTION_WEFT = "WEFT"
SECTION_THREADING = "THREADING"
SECTION_TREADLING = "TREADLING"
SECTION_TIEUP = "TIEUP"
SECTION_LIFTPLAN = "LIFTPLAN"
SECTION_PALETTE = "COLOR PALETTE"
SECTION_COLOR_TABLE = "COLOR TABLE"
SECTION_WARP_COLORS = "WARP COLORS"
SECTION_WEFT_COLORS = "WEFT COLORS"


class WifError(ValueError):
    """Raised when a WIF file cannot be understood."""


class _Sections:
    """Case-insensitive view over a parsed WIF file."""

    def __init__(self, parser: configparser.ConfigParser):
        self._parser = parser
        self._names = {name.strip().upper(): name for name in parser.sections()}

    def has(self, section: str) -> bool:
        return section in self._names

    def items(self, section: str) -> Dict[str, str]:
        name = self._names.get(section)
        if name is None:
            return {}
        return {key.strip().lower(): (value or "").strip() for key, value in self._parser.items(name)}

    def get(self, section: str, key: str) -> Optional[str]:
        value = self.items(section).get(key.lower())
        return value if value else None


def _int(value: str, where: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise WifError(f"{where}: expected an integer, got {value!r}") from exc


def _int_set(value: str, where: str) -> frozenset:
    parts = [p for p in value.replace(" ", "").split(",") if p]
    # 0 is used as "nothing" by some editors
    return frozenset(n for n in (_int(p, where) for p in parts) if n > 0)


def _indexed_sets(sections: _Sections, section: str) -> Dict[int, frozenset]:
    out: Dict[int, frozenset] = {}
    for key, value in sections.items(section).items():
        index = _int(key, f"[{section}] key")
        out[index] = _int_set(value, f"[{section}] {key}")
    return out


def _palette_range(sections: _Sections) -> tuple[int, int]:
    raw = sections.get(SECTION_PALETTE, "Range")
    if raw is None:
        return DEFAULT_PALETTE_RANGE
    parts = [p for p in raw.replace(" ", "").split(",") if p]
    if len(parts) != 2:
        raise WifError(f"[{SECTION_PALETTE}] Range: expected 'lo,hi', got {raw!r}")
    lo, hi = (_int(p, f"[{SECTION_PALETTE}] Range") for p in parts)
    if hi <= lo:
        raise WifError(f"[{SECTION_PALETTE}] Range: empty range {raw!r}")
    return lo, hi


def _color_table(sections: _Sections) -> Dict[int, RGB]:
    lo, hi = _palette_range(sections)
    span = hi - lo
    table: Dict[int, RGB] = {}
    for key, value in sections.items(SECTION_COLOR_TABLE).items():
        where = f"[{SECTION_COLOR_TABLE}] {key}"
        parts = [p for p in value.replace(" ", "").split(",") if p]
        if len(parts) != 3:
            raise WifError(f"{where}: expected 'r,g,b', got {value!r}")
        channels = [_int(p, where) for p in parts]
        scaled = tuple(
            max(0, min(COLOR_MAX, round((c - lo) * COLOR_MAX / span))) for c in channels
        )
        table[_int(key, f"[{SECTION_COLOR_TABLE}] key")] = scaled  # type: ignore[assignment]
    return table


def _indexed_colors(sections: _Sections, section: str, table: Dict[int, RGB]) -> Dict[int, RGB]:
    colors: Dict[int, RGB] = {}
    for key, value in sections.items(section).items():
        ref = _int(value, f"[{section}] {key}")
        if ref in table:
            colors[_int(key, f"[{section}] key")] = table[ref]
        else:
            APP_LOGGER.debug(f"[{section}] {key} refers to unknown colour {ref}")
    return colors


def _default_color(sections: _Sections, section: str, table: Dict[int, RGB]) -> Optional[RGB]:
    raw = sections.get(section, "Color")
    if raw is None:
        return None
    return table.get(_int(raw.split(",")[0], f"[{section}] Color"))


def _optional_int(sections: _Sections, section: str, key: str) -> Optional[int]:
    raw = sections.get(section, key)
    return None if raw is None else _int(raw, f"[{section}] {key}")


def parse_wif(text: str) -> PatternData:
    """Parse WIF text into ``PatternData``; a liftplan is derived if missing."""
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        comment_prefixes=(";",),
        inline_comment_prefixes=(";",),
        delimiters=("=",),
    )
    try:
        parser.read_string(text.lstrip("\ufeff"))
    except configparser.Error as exc:
        raise WifError(f"Malformed WIF file: {exc}") from exc

    sections = _Sections(parser)
    if not sections.has(SECTION_WIF):
        raise WifError("Not a WIF file: missing [WIF] section")

    table = _color_table(sections)
    data = PatternData(
        warp_threads=_optional_int(sections, SECTION_WARP, "Threads") or 0,
        weft_threads=_optional_int(sections, SECTION_WEFT, "Threads") or 0,
        shafts=_optional_int(sections, SECTION_WEAVING, "Shafts"),
        treadles=_optional_int(sections, SECTION_WEAVING, "Treadles"),
        threading=_indexed_sets(sections, SECTION_THREADING),
        treadling=_indexed_sets(sections, SECTION_TREADLING),
        tieup=_indexed_sets(sections, SECTION_TIEUP),
        liftplan=_indexed_sets(sections, SECTION_LIFTPLAN),
        warp_colors=_indexed_colors(sections, SECTION_WARP_COLORS, table),
        weft_colors=_indexed_colors(sections, SECTION_WEFT_COLORS, table),
        warp_default_color=_default_color(sections, SECTION_WARP, table),
        weft_default_color=_default_color(sections, SECTION_WEFT, table),
        title=sections.get(SECTION_TEXT, "Title"),
        author=sections.get(SECTION_TEXT, "Author"),
    )
    return data.with_liftplan()


def load_wif(path: Union[str, Path]) -> PatternData:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise WifError(f"Cannot read {path}: {exc}") from exc
    return parse_wif(text)
