import time
from unittest.mock import MagicMock

import pytest

from app.core.pedal import PedalLatch
from app.drivers import NullPedal, PedalDriverError, SerialPedal


def _wait_until(predicate, timeout_s: float = 1.0) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_serial_pedal_press_sets_latch():
    latch = PedalLatch()
    pedal = SerialPedal(latch)
    mock_ser = MagicMock()
    mock_ser.read.side_effect = [b'P', b'\n', b'']
    mock_ser.is_open = True

    pedal.ser = mock_ser
    pedal._start_reader()

    assert _wait_until(latch.is_set)
    assert pedal.presses == 1

    pedal.close()


def test_serial_pedal_ignores_other_lines():
    latch = PedalLatch()
    pedal = SerialPedal(latch)
    assert pedal.handle_line("READY") is False
    assert pedal.handle_line("  p \r") is True
    assert latch.consume() is True


def test_serial_pedal_debounce():
    times = iter([0.0, 0.005, 0.050])
    latch = PedalLatch()
    pedal = SerialPedal(latch, clock=lambda: next(times))
    assert pedal.handle_line("P") is True
    assert pedal.handle_line("P") is False
    assert pedal.handle_line("P") is True
    assert pedal.presses == 2


def test_serial_pedal_disconnect_closes_port():
    latch = PedalLatch()
    pedal = SerialPedal(latch)
    mock_ser = MagicMock()
    mock_ser.read.side_effect = OSError("Hardware disconnected")
    mock_ser.is_open = True

    pedal.ser = mock_ser
    pedal._start_reader()

    assert _wait_until(lambda: pedal.ser is None)
    assert not pedal.is_open()
    assert latch.is_set() is False

    pedal.close()


def test_serial_pedal_requires_port():
    pedal = SerialPedal(PedalLatch())
    with pytest.raises(PedalDriverError):
        pedal.open("")
    assert not pedal.is_open()


def test_null_pedal():
    pedal = NullPedal(PedalLatch())
    pedal.open("anything")
    assert pedal.is_open() is False
    pedal.close()
