# app/main.py - Drawboy UI: shows which shafts to lift or thread next
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QApplication, QWidget, QLabel, QPushButton, QFileDialog, QHBoxLayout, QVBoxLayout,
    QSpinBox, QMessageBox, QRadioButton, QButtonGroup, QMenuBar, QStyleFactory, QFrame
)
from PySide6.QtCore import QMetaObject, QTimer, Qt, Slot
from PySide6.QtGui import QAction, QActionGroup, QKeySequence

from .core import configio
from .core.loader import initial_handle
from .core.logger import APP_LOGGER, configure_file_logging, set_log_level
from .core.navigator import DrawboyEngine, DisplayState
from .core.paths import (
    font_family_from_env, fullscreen_from_env, log_file_from_env, log_level_from_env,
    pedal_port_from_env, theme_name_from_env,
)
from .core.pedal import PedalLatch
from .core.position import MAX_BATCH_SIZE, MIN_BATCH_SIZE, Mode, ThreadingSubMode
from .core.session import DrawboySession
from .core.version import window_title
from .core.workers import PatternLoadWorker
from .drivers import NullPedal, PedalDriverError, SerialPedal
from .ui.theme import DEFAULT_THEME_NAME, build_stylesheet, set_active_theme
from .ui.widgets.pattern_view import PatternView

POLL_INTERVAL_MS = 50
WINDOW_SIZE = (1024, 600)
LEFT_PANEL_WIDTH = 160
WIF_FILTER = "WIF files (*.wif);;All files (*)"


class DrawboyWindow(QWidget):
    def __init__(self, engine: DrawboyEngine, pedal=None, state_path: Optional[Path] = None):
        super().__init__()
        self.engine = engine
        self.pedal = pedal or NullPedal(engine.latch)
        self._state_path = state_path or configio.DEFAULT_PATH
        self._next_requested = False

        self.setWindowTitle(window_title())
        self.resize(*WINDOW_SIZE)

        self.loader = PatternLoadWorker(engine.handle)
        self.loader.loaded.connect(self._on_pattern_loaded, Qt.QueuedConnection)
        self.loader.failed.connect(self._on_pattern_failed, Qt.QueuedConnection)

        self._build_ui()

        # Pedal presses and button clicks are both folded into one poll per tick
        self.poll_timer = QTimer(self)
        self.poll_timer.setInterval(POLL_INTERVAL_MS)
        self.poll_timer.timeout.connect(self._poll)
        self.poll_timer.start()

        # Pedal thread asks for an immediate poll instead of waiting for the next tick
        self.engine.latch.set_on_press(self._request_poll)

        self._refresh()

    # --- layout ---
    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(6, 0, 6, 6)
        root.setMenuBar(self._build_menus())

        body = QHBoxLayout()
        root.addLayout(body, 1)

        left = QVBoxLayout()
        panel = QFrame()
        panel.setLayout(left)
        panel.setFixedWidth(LEFT_PANEL_WIDTH)
        body.addWidget(panel)

        counter = QHBoxLayout()
        self.unit_label = QLabel("Row")
        self.position_spin = QSpinBox()
        self.position_spin.setKeyboardTracking(False)
        self.position_spin.valueChanged.connect(self._on_position_edited)
        self.last_label = QLabel("/1")
        counter.addWidget(self.unit_label)
        counter.addWidget(self.position_spin)
        counter.addWidget(self.last_label)
        left.addLayout(counter)

        self.continuous_radio = QRadioButton(ThreadingSubMode.CONTINUOUS.label)
        self.batched_radio = QRadioButton(ThreadingSubMode.BATCHED.label)
        self.sub_mode_group = QButtonGroup(self)
        self.sub_mode_group.addButton(self.continuous_radio)
        self.sub_mode_group.addButton(self.batched_radio)
        self.continuous_radio.toggled.connect(self._on_sub_mode_toggled)
        self.batch_spin = QSpinBox()
        self.batch_spin.setRange(MIN_BATCH_SIZE, MAX_BATCH_SIZE)
        self.batch_spin.setKeyboardTracking(False)
        self.batch_spin.valueChanged.connect(self._on_batch_size_changed)
        for w in (self.continuous_radio, self.batched_radio, self.batch_spin):
            left.addWidget(w)

        self.next_btn = QPushButton("Next row")
        self.next_btn.setObjectName("StepButton")
        self.next_btn.clicked.connect(self._on_next_clicked)
        self.prev_btn = QPushButton("Prev row")
        self.prev_btn.clicked.connect(self._on_prev_clicked)
        left.addWidget(self.next_btn)
        left.addWidget(self.prev_btn)

        self.average_label = QLabel("")
        self.eta_label = QLabel("")
        self.reset_btn = QPushButton("Reset timer")
        self.reset_btn.clicked.connect(self._on_reset_timer)
        self.pause_btn = QPushButton("Pause timer")
        self.pause_btn.clicked.connect(self._on_pause_clicked)
        for w in (self.average_label, self.eta_label, self.reset_btn, self.pause_btn):
            left.addWidget(w)
        left.addStretch(1)

        center = QVBoxLayout()
        heading = QLabel("Drawboy")
        heading.setStyleSheet("font-size: 18pt;")
        self.title_label = QLabel("")
        self.title_label.setObjectName("PatternMeta")
        self.author_label = QLabel("")
        self.author_label.setObjectName("PatternMeta")
        self.pattern_view = PatternView()
        center.addWidget(heading)
        center.addWidget(self.title_label)
        center.addWidget(self.author_label)
        center.addWidget(self.pattern_view, 1)
        body.addLayout(center, 1)

    def _build_menus(self) -> QMenuBar:
        bar = QMenuBar(self)
        file_menu = bar.addMenu("File")
        open_action = QAction("Open", self)
        open_action.setShortcut(QKeySequence.Open)
        open_action.triggered.connect(self._open_pattern)
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(open_action)
        file_menu.addAction(quit_action)

        mode_menu = bar.addMenu("Mode")
        self.mode_group = QActionGroup(self)
        self.mode_group.setExclusive(True)
        self.mode_actions: dict[Mode, QAction] = {}
        for mode in Mode:
            action = QAction(mode.label, self)
            action.setCheckable(True)
            action.triggered.connect(lambda _checked=False, m=mode: self._on_mode_selected(m))
            self.mode_group.addAction(action)
            mode_menu.addAction(action)
            self.mode_actions[mode] = action
        return bar

    # --- refresh ---
    def _refresh(self):
        state = self.engine.display_state()
        self._sync_controls(state)
        self.pattern_view.set_state(state)

    def _sync_controls(self, state: DisplayState):
        is_threading = state.mode.uses_thread
        unit = state.mode.unit.lower()
        self.mode_actions[state.mode].setChecked(True)
        self.unit_label.setText(state.mode.unit)
        self.position_spin.blockSignals(True)
        self.position_spin.setRange(1, state.last_index)
        self.position_spin.setValue(state.position)
        self.position_spin.blockSignals(False)
        self.last_label.setText(f"/{state.last_index}")

        for w in (self.continuous_radio, self.batched_radio, self.batch_spin):
            w.setVisible(is_threading)
        self.continuous_radio.blockSignals(True)
        self.batched_radio.blockSignals(True)
        self.continuous_radio.setChecked(state.threading_sub_mode is ThreadingSubMode.CONTINUOUS)
        self.batched_radio.setChecked(state.threading_sub_mode is ThreadingSubMode.BATCHED)
        self.continuous_radio.blockSignals(False)
        self.batched_radio.blockSignals(False)
        self.batch_spin.blockSignals(True)
        self.batch_spin.setValue(state.batch_size)
        self.batch_spin.blockSignals(False)

        self.next_btn.setText(f"Next {unit}")
        self.prev_btn.setText(f"Prev {unit}")
        self.average_label.setText(state.average_text)
        self.eta_label.setText(state.eta_text or "")
        self.eta_label.setVisible(state.eta_text is not None)
        self.pause_btn.setText("Unpause timer" if state.timer_paused else "Pause timer")

        self.title_label.setText(f"Title: {state.title}" if state.title else "")
        self.author_label.setText(f"Author: {state.author}" if state.author else "")

    # --- input ---
    @Slot()
    def _poll(self):
        requested = self._next_requested
        self._next_requested = False
        if self.engine.poll(next_requested=requested):
            self._refresh()

    def _request_poll(self):
        QMetaObject.invokeMethod(self, "_poll", Qt.QueuedConnection)

    def _on_next_clicked(self):
        self._next_requested = True
        self._poll()

    def _on_prev_clicked(self):
        self.engine.retreat()
        self._refresh()

    def _on_position_edited(self, value: int):
        self.engine.set_position(value)
        self._refresh()

    def _on_mode_selected(self, mode: Mode):
        self.engine.set_mode(mode)
        self._refresh()

    def _on_sub_mode_toggled(self, _checked: bool):
        sub_mode = ThreadingSubMode.CONTINUOUS if self.continuous_radio.isChecked() else ThreadingSubMode.BATCHED
        self.engine.set_threading_sub_mode(sub_mode)
        self._refresh()

    def _on_batch_size_changed(self, value: int):
        self.engine.set_batch_size(value)
        self._refresh()

    def _on_reset_timer(self):
        self.engine.reset_timer()
        self._refresh()

    def _on_pause_clicked(self):
        self.engine.toggle_pause()
        self._refresh()

    # --- pattern files ---
    def _open_pattern(self):
        current = self.engine.handle.path
        start_dir = str(current.parent) if current else ""
        fname, _ = QFileDialog.getOpenFileName(self, "Open WIF file", start_dir, WIF_FILTER)
        if not fname:
            return
        self.loader.start(fname)

    @Slot(str)
    def _on_pattern_loaded(self, path: str):
        self._refresh()

    @Slot(str)
    def _on_pattern_failed(self, message: str):
        QMessageBox.warning(self, "Open pattern", message)

    # --- shutdown ---
    def save_state(self) -> bool:
        return configio.save_state(self.engine.export_state(), self._state_path)

    def closeEvent(self, event):
        self.poll_timer.stop()
        self.engine.latch.set_on_press(None)
        try:
            self.pedal.close()
        except Exception as e:
            APP_LOGGER.error(f"Failed to close pedal: {e}")
        self.loader.wait()
        self.save_state()
        super().closeEvent(event)


def _open_pedal(latch: PedalLatch):
    port = pedal_port_from_env()
    if not port:
        return NullPedal(latch)
    pedal = SerialPedal(latch)
    try:
        pedal.open(port)
    except PedalDriverError as e:
        APP_LOGGER.error(f"Pedal disabled: {e}")
        return NullPedal(latch)
    return pedal


def build_engine(cfg: Optional[dict]) -> DrawboyEngine:
    session = DrawboySession.from_config(cfg)
    handle = initial_handle(session.pattern_path)
    return DrawboyEngine(handle, session=session, latch=PedalLatch())


def _configure_logging():
    level = log_level_from_env()
    if level:
        try:
            set_log_level(level)
        except ValueError as e:
            APP_LOGGER.warning(f"{e}; keeping default level")
    log_file = log_file_from_env()
    if log_file is not None:
        configure_file_logging(log_file)


def appearance_stylesheet(scale: float = 1.5) -> str:
    """Select the theme and font from the environment and build the stylesheet."""
    name = theme_name_from_env()
    if name:
        try:
            set_active_theme(name)
        except ValueError as e:
            APP_LOGGER.warning(f"{e}; using '{DEFAULT_THEME_NAME}'")
            set_active_theme(DEFAULT_THEME_NAME)
    return build_stylesheet(font_family_from_env(), scale)


def main():
    _configure_logging()
    app = QApplication(sys.argv)
    try:
        app.setStyle(QStyleFactory.create("Fusion"))
    except Exception:
        pass
    app.setStyleSheet(appearance_stylesheet())

    engine = build_engine(configio.load_state())
    w = DrawboyWindow(engine, pedal=_open_pedal(engine.latch))
    if fullscreen_from_env():
        w.showFullScreen()
    else:
        w.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
