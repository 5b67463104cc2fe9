import pytest

pytest.importorskip("PySide6")

from app.core.pattern import PatternHandle, fallback_pattern
from app.core.workers import PatternLoadWorker


def test_worker_emits_loaded(qt_app, sample_wif):
    handle = PatternHandle(fallback_pattern())
    worker = PatternLoadWorker(handle)
    loaded, failed = [], []
    worker.loaded.connect(loaded.append)
    worker.failed.connect(failed.append)

    worker._run(sample_wif)

    assert loaded == [str(sample_wif)]
    assert failed == []
    assert handle.data.title == "Test Twill"


def test_worker_emits_failed_and_keeps_pattern(qt_app, tmp_path):
    original = fallback_pattern()
    handle = PatternHandle(original)
    worker = PatternLoadWorker(handle)
    failed = []
    worker.failed.connect(failed.append)

    worker._run(tmp_path / "missing.wif")

    assert len(failed) == 1
    assert "missing.wif" in failed[0]
    assert handle.data is original
