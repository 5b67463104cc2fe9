# app/ui/widgets/pattern_view.py
from PySide6.QtWidgets import QWidget, QGridLayout, QLabel, QSizePolicy
from PySide6.QtCore import Qt

from app.core.navigator import DisplayState
from app.core.window import WindowCell
from app.ui.theme import THREADING_PT, active_theme, cell_colors, rgb_hex, row_font_pt

GRID_SPACING_PX = 3
COLOR_BLOCK_PX = 20
CELL_BORDER_PX = 1


def _cell_label(text: str, bg: str, fg: str, pt: int) -> QLabel:
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
    label.setStyleSheet(
        f"background:{bg}; color:{fg}; border:{CELL_BORDER_PX}px solid {fg}; font-size:{pt}pt;"
    )
    return label


def _color_block(cell: WindowCell, highlight: bool) -> QLabel:
    theme = active_theme()
    stroke = theme["CELL_HIGHLIGHT"] if highlight else theme["CELL_STROKE"]
    block = QLabel(" ")
    block.setMinimumSize(COLOR_BLOCK_PX, COLOR_BLOCK_PX)
    block.setStyleSheet(f"background:{rgb_hex(cell.color)}; border:{CELL_BORDER_PX}px solid {stroke};")
    return block


class PatternView(QWidget):
    """Draws the engine's visible window.

    Liftplan/treadling: one horizontal strip per row, current row third from
    the top. Threading: one vertical strip per warp thread.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self._grid = QGridLayout(self)
        self._grid.setSpacing(GRID_SPACING_PX)
        self._grid.setContentsMargins(0, 0, 0, 0)

    def _clear(self):
        while self._grid.count():
            item = self._grid.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        for r in range(self._grid.rowCount()):
            self._grid.setRowStretch(r, 0)
        for c in range(self._grid.columnCount()):
            self._grid.setColumnStretch(c, 0)

    def set_state(self, state: DisplayState):
        self._clear()
        if state.mode.uses_thread:
            self._draw_threading(state)
        else:
            self._draw_rows(state)

    def _draw_rows(self, state: DisplayState):
        for col in range(1, state.columns + 1):
            self._grid.setColumnStretch(col, 1)
        for r, cell in enumerate(state.window):
            # every slot keeps its height so the current row never moves
            self._grid.setRowStretch(r, 1)
            if cell.placeholder:
                self._grid.addWidget(QLabel(""), r, 0)
                continue
            current = cell.is_current
            self._grid.addWidget(_color_block(cell, current), r, 0)
            pt = row_font_pt(cell.offset)
            for col in range(1, state.columns + 1):
                bg, fg = cell_colors(current, cell.is_active(col))
                self._grid.addWidget(_cell_label(str(col), bg, fg, pt), r, col)

    def _draw_threading(self, state: DisplayState):
        # Grid row n is always shaft n, lifted or not
        for shaft in range(1, state.columns + 1):
            self._grid.setRowStretch(shaft, 1)
        blank = active_theme()["CELL_BG"]
        for c, cell in enumerate(state.window):
            self._grid.setColumnStretch(c, 1)
            if cell.placeholder:
                self._grid.addWidget(QLabel(""), 0, c)
                continue
            current = cell.is_current
            self._grid.addWidget(_color_block(cell, current), 0, c)
            for shaft in range(1, state.columns + 1):
                if cell.is_active(shaft):
                    bg, fg = cell_colors(current, True)
                    label = _cell_label(str(shaft), bg, fg, THREADING_PT)
                else:
                    label = _cell_label("", blank, blank, THREADING_PT)
                self._grid.addWidget(label, shaft, c)
