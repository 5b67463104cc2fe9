import json
from app.core.configio import load_state, save_state

def test_state_save_load(tmp_path):
    cfg_path = tmp_path / "state.json"
    cfg = {"row": 10, "mode": "treadling"}

    assert save_state(cfg, cfg_path)
    assert cfg_path.exists()

    loaded = load_state(cfg_path)
    assert loaded == cfg

def test_load_nonexistent_state(tmp_path):
    assert load_state(tmp_path / "nope.json") is None

def test_load_corrupt_state(tmp_path):
    cfg_path = tmp_path / "state.json"
    cfg_path.write_text("{not json", encoding="utf-8")
    assert load_state(cfg_path) is None

def test_load_non_object_state(tmp_path):
    cfg_path = tmp_path / "state.json"
    cfg_path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert load_state(cfg_path) is None

def test_save_creates_parent_dirs(tmp_path):
    cfg_path = tmp_path / "nested" / "dir" / "state.json"
    assert save_state({"row": 1}, cfg_path)
    assert load_state(cfg_path) == {"row": 1}
