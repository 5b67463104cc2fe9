# app/ui/theme.py
# Colours and the Qt stylesheet. Dark is the default: the display sits next
# to the loom and is read at a glance from a distance.

THEMES: dict[str, dict[str, str]] = {
    "dark": {
        "BG": "#000000",
        "MID": "#141414",
        "TEXT": "#f0f0f0",
        "SUBTXT": "#9c9c9c",
        "ACCENT": "#ffd24a",
        "BUTTON_BORDER": "#3a3a3a",
        "BUTTON_CHECKED_BG": "#2a2a2a",
        "INPUT_BORDER": "#3a3a3a",
        "DISABLED_TEXT": "#5a5a5a",
        "CELL_BG": "#000000",
        "CELL_CURRENT_BG": "#404040",
        "CELL_STROKE": "#404040",
        "CELL_HIGHLIGHT": "#ffffff",
    },
    "light": {
        "BG": "#ffffff",
        "MID": "#ececec",
        "TEXT": "#101010",
        "SUBTXT": "#5c5c5c",
        "ACCENT": "#b8860b",
        "BUTTON_BORDER": "#b4b4b4",
        "BUTTON_CHECKED_BG": "#d8d8d8",
        "INPUT_BORDER": "#b4b4b4",
        "DISABLED_TEXT": "#a0a0a0",
        "CELL_BG": "#ffffff",
        "CELL_CURRENT_BG": "#c8c8c8",
        "CELL_STROKE": "#a0a0a0",
        "CELL_HIGHLIGHT": "#000000",
    },
}

DEFAULT_THEME_NAME = "dark"
_ACTIVE_THEME_NAME = DEFAULT_THEME_NAME

# Shaft number font sizes by distance from the current row
CURRENT_ROW_PT = 48
NEIGHBOUR_ROW_PT = 24
OTHER_ROW_PT = 12
THREADING_PT = 18

def active_theme() -> dict[str, str]:
    return THEMES[_ACTIVE_THEME_NAME]

def set_active_theme(name: str) -> dict[str, str]:
    global _ACTIVE_THEME_NAME
    if name not in THEMES:
        raise ValueError(f"Unknown theme '{name}'")
    _ACTIVE_THEME_NAME = name
    return active_theme()

def row_font_pt(offset: int) -> int:
    if offset == 0:
        return CURRENT_ROW_PT
    if abs(offset) == 1:
        return NEIGHBOUR_ROW_PT
    return OTHER_ROW_PT

def cell_colors(current: bool, lifted: bool, theme: dict | None = None) -> tuple[str, str]:
    """(background, text/border) for one shaft cell.

    Lifted shafts on the current row stand out; lifted shafts elsewhere and
    unlifted shafts on the current row are outlined; the rest is blank.
    """
    if theme is None:
        theme = active_theme()
    if current and lifted:
        return theme["CELL_CURRENT_BG"], theme["CELL_HIGHLIGHT"]
    if current or lifted:
        return theme["CELL_BG"], theme["CELL_STROKE"]
    return theme["CELL_BG"], theme["CELL_BG"]

def rgb_hex(rgb) -> str:
    if rgb is None:
        return "#000000"
    r, g, b = (max(0, min(255, int(c))) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"

def build_stylesheet(font_family: str | None, scale: float = 1.0, theme: dict = None) -> str:
    if theme is None:
        theme = active_theme()

    bg = theme["BG"]
    mid = theme["MID"]
    text = theme["TEXT"]
    subtxt = theme["SUBTXT"]
    accent = theme["ACCENT"]
    btn_border = theme["BUTTON_BORDER"]
    btn_checked = theme["BUTTON_CHECKED_BG"]
    inp_border = theme["INPUT_BORDER"]
    dis_text = theme["DISABLED_TEXT"]

    s = max(0.7, min(scale, 2.0))
    family_rule = f"font-family: '{font_family}';" if font_family else ""
    font_pt = int(round(11 * s))
    btn_py = int(round(6 * s)); btn_px = int(round(10 * s))
    inp_py = int(round(4 * s)); inp_px = int(round(6 * s))
    step_btn = int(round(64 * s))

    return f"""
* {{ background: {bg}; color: {text}; font-size: {font_pt}pt; {family_rule} }}
QWidget {{ background: {bg}; }}
QLabel#PatternMeta {{ color: {subtxt}; }}
QPushButton {{ background: {mid}; border:1px solid {btn_border}; padding:{btn_py}px {btn_px}px; border-radius:0px; }}
QPushButton:hover {{ border-color: {accent}; }}
QPushButton:checked {{ background:{btn_checked}; border-color:{accent}; }}
QPushButton#StepButton {{ min-width:{step_btn}px; min-height:{step_btn}px; }}
QSpinBox {{ background:{mid}; border:1px solid {inp_border}; padding:{inp_py}px {inp_px}px; border-radius:0px; }}
QLabel:disabled, QSpinBox:disabled {{ color: {dis_text}; }}
QMenuBar::item:selected, QMenu::item:selected {{ background: {btn_checked}; }}
"""
