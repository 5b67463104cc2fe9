# serial_pedal.py - foot switch on a serial line (USB adapter or Arduino) with auto-reconnect
import threading, time
import serial
from typing import Callable, Optional

from app.core.logger import APP_LOGGER
from app.core.pedal import PedalLatch
from .pedal_driver import PedalDriver, PedalDriverError

DEFAULT_BAUD = 9600
DEFAULT_TIMEOUT_S = 0.0
DEFAULT_TRIGGER = "P"
DEBOUNCE_S = 0.020
RX_THREAD_JOIN_TIMEOUT_S = 1.0
CONNECTION_BACKOFF_START_S = 1.0
CONNECTION_BACKOFF_MAX_S = 10.0
CONNECTION_BACKOFF_MULTIPLIER = 2.0
READ_MIN_BYTES = 1
READ_IDLE_SLEEP_S = 0.005
NEWLINE_BYTES = (10, 13)


class SerialPedal(PedalDriver):
    """
    Reads newline-terminated messages from a serial foot switch.

    Every line equal to the trigger token is one press; presses closer than
    DEBOUNCE_S to the previously accepted one are contact bounce and dropped.
    """
    def __init__(
        self,
        latch: PedalLatch,
        trigger: str = DEFAULT_TRIGGER,
        debounce_s: float = DEBOUNCE_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(latch)
        self.ser: Optional[serial.Serial] = None
        self._rx_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._port: Optional[str] = None
        self._baudrate: int = DEFAULT_BAUD
        self._timeout: float = DEFAULT_TIMEOUT_S
        self._trigger = trigger.strip().upper()
        self._debounce_s = float(debounce_s)
        self._clock = clock
        self._last_press: Optional[float] = None
        self.presses = 0

    def open(self, port: str, baudrate: int = DEFAULT_BAUD, timeout: float = DEFAULT_TIMEOUT_S):
        if not port:
            raise PedalDriverError("No serial port given for the pedal")
        if self.is_open() and self._port == port:
            return

        self.close() # Ensure clean state
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout

        self._stop_event.clear()
        self._rx_thread = threading.Thread(target=self._connection_loop, daemon=True, name=f"SerialPedal-{port}")
        self._rx_thread.start()

    def is_open(self) -> bool:
        return bool(self.ser and self.ser.is_open)

    def close(self):
        self._stop_event.set()
        if self._rx_thread:
            if threading.current_thread() != self._rx_thread:
                self._rx_thread.join(timeout=RX_THREAD_JOIN_TIMEOUT_S)
            self._rx_thread = None

        self._close_internal()

    def _close_internal(self):
        if self.ser:
            try:
                self.ser.close()
            except Exception:
                pass
            self.ser = None

    def _connection_loop(self):
        """Connect, read until the line drops, back off and reconnect."""
        backoff = CONNECTION_BACKOFF_START_S

        while not self._stop_event.is_set():
            try:
                if not self.is_open():
                    APP_LOGGER.info(f"Connecting to pedal on {self._port}...")
                    self.ser = serial.Serial(port=self._port, baudrate=self._baudrate, timeout=self._timeout)
                    APP_LOGGER.info(f"Pedal connected on {self._port}")
                    backoff = CONNECTION_BACKOFF_START_S
            except Exception as e:
                APP_LOGGER.warning(f"Pedal connection failed on {self._port}: {e}. Retrying in {backoff}s")
                self._stop_event.wait(backoff)
                backoff = min(backoff * CONNECTION_BACKOFF_MULTIPLIER, CONNECTION_BACKOFF_MAX_S)
                continue

            self._reader_loop()

    def _reader_loop(self):
        try:
            self._read_loop_inner()
        except (OSError, serial.SerialException) as e:
            APP_LOGGER.error(f"Pedal connection lost: {e}")
            self._close_internal()
        except Exception as e:
            APP_LOGGER.error(f"Unexpected pedal error: {e}")
            self._close_internal()

    def _start_reader(self):
        """Start reader thread for an already-connected serial object (test helper)."""
        if self._rx_thread and self._rx_thread.is_alive():
            return
        self._stop_event.clear()
        self._rx_thread = threading.Thread(target=self._reader_loop, daemon=True, name="SerialPedal-Reader")
        self._rx_thread.start()

    def _read_loop_inner(self):
        """Read bytes until stopped; raises on disconnect."""
        buf = bytearray()
        while not self._stop_event.is_set() and self.ser and self.ser.is_open:
            try:
                waiting = int(getattr(self.ser, "in_waiting", 0) or 0)
            except Exception:
                waiting = 0
            data = self.ser.read(max(READ_MIN_BYTES, waiting))

            if not data:
                time.sleep(READ_IDLE_SLEEP_S)
                continue

            for b in data:
                if b in NEWLINE_BYTES:
                    if buf:
                        try:
                            self.handle_line(bytes(buf).decode(errors='replace'))
                        finally:
                            buf.clear()
                else:
                    buf.append(b)

    def handle_line(self, line: str) -> bool:
        """Feed one received line; returns True if it counted as a press."""
        if line.strip().upper() != self._trigger:
            APP_LOGGER.debug(f"Ignoring pedal line {line!r}")
            return False
        now = self._clock()
        if self._last_press is not None and now - self._last_press < self._debounce_s:
            return False
        self._last_press = now
        self.presses += 1
        self.latch.press()
        return True
