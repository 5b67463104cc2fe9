import threading
from app.core.pedal import PedalLatch


def test_consume_reads_and_clears():
    latch = PedalLatch()
    assert latch.consume() is False
    latch.press()
    assert latch.is_set()
    assert latch.consume() is True
    assert latch.consume() is False


def test_presses_coalesce():
    latch = PedalLatch()
    for _ in range(5):
        latch.press()
    assert latch.consume() is True
    assert latch.consume() is False


def test_on_press_callback():
    calls = []
    latch = PedalLatch(on_press=lambda: calls.append(1))
    latch.press()
    latch.press()
    assert calls == [1, 1]
    latch.set_on_press(None)
    latch.press()
    assert calls == [1, 1]


def test_concurrent_presses_consumed_once():
    latch = PedalLatch()
    threads = [threading.Thread(target=latch.press) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert latch.consume() is True
    assert latch.consume() is False
