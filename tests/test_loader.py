import pytest

from app.core.loader import PatternLoadError, initial_handle, load_pattern_into
from app.core.pattern import PatternHandle, fallback_pattern
from app.core.position import Mode


def test_load_swaps_handle(sample_wif):
    handle = PatternHandle(fallback_pattern())
    data = load_pattern_into(handle, sample_wif)
    snap, path = handle.snapshot()
    assert snap is data
    assert path == sample_wif
    assert snap.last_index(Mode.THREADING) == 8


def test_failed_load_keeps_previous_pattern(tmp_path):
    original = fallback_pattern()
    handle = PatternHandle(original)
    bad = tmp_path / "bad.wif"
    bad.write_text("[WEAVING]\nShafts=x\n", encoding="utf-8")
    with pytest.raises(PatternLoadError):
        load_pattern_into(handle, bad)
    assert handle.data is original
    assert handle.path is None


def test_initial_handle_uses_saved_file(sample_wif):
    handle = initial_handle(str(sample_wif))
    assert handle.data.title == "Test Twill"


def test_initial_handle_falls_back(tmp_path):
    handle = initial_handle(str(tmp_path / "gone.wif"))
    assert handle.data.title == "Houndstooth"
    assert handle.path is None
    assert initial_handle(None).data.title == "Houndstooth"
