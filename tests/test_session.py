from app.core.ewma import ProgressEstimator
from app.core.position import Mode, ThreadingSubMode
from app.core.session import DrawboySession


def test_defaults_when_nothing_saved():
    for cfg in (None, {}, "garbage", [1, 2]):
        session = DrawboySession.from_config(cfg)
        assert session.position.row == 1
        assert session.position.thread == 1
        assert session.mode is Mode.LIFTPLAN
        assert session.threading_sub_mode is ThreadingSubMode.CONTINUOUS
        assert session.batch_size == 8
        assert session.estimator.alpha == 0.1
        assert session.estimator.sample_count == 0
        assert session.pattern_path is None


def test_config_roundtrip(tmp_path):
    session = DrawboySession()
    session.position.row = 12
    session.position.thread = 40
    session.mode = Mode.THREADING
    session.threading_sub_mode = ThreadingSubMode.BATCHED
    session.batch_size = 10
    session.estimator = ProgressEstimator(alpha=0.2)
    session.estimator.record(6.0)
    session.pattern_path = str(tmp_path / "a.wif")

    restored = DrawboySession.from_config(session.to_config())
    assert restored.position.row == 12
    assert restored.position.thread == 40
    assert restored.mode is Mode.THREADING
    assert restored.threading_sub_mode is ThreadingSubMode.BATCHED
    assert restored.batch_size == 10
    assert restored.estimator.to_dict() == session.estimator.to_dict()
    assert restored.pattern_path == session.pattern_path


def test_each_field_falls_back_independently():
    cfg = {
        "row": "abc",
        "warp": 7,
        "mode": "weird",
        "threading_mode": "batched",
        "threading_batch_size": 99,
        "average_row_speed": {"alpha": 0.2, "value": 3.5, "n": 4},
        "wif_path": 12,
    }
    session = DrawboySession.from_config(cfg)
    assert session.position.row == 1
    assert session.position.thread == 7
    assert session.mode is Mode.LIFTPLAN
    assert session.threading_sub_mode is ThreadingSubMode.BATCHED
    assert session.batch_size == 8
    assert session.estimator.smoothed_duration == 3.5
    assert session.estimator.sample_count == 4
    assert session.pattern_path is None


def test_rejects_out_of_range_and_non_integer_values():
    cfg = {"row": 0, "warp": 2.5, "threading_batch_size": True, "average_row_speed": {"n": "x"}}
    session = DrawboySession.from_config(cfg)
    assert session.position.row == 1
    assert session.position.thread == 1
    assert session.batch_size == 8
    assert session.estimator.sample_count == 0


def test_reset_runtime_state():
    session = DrawboySession()
    session.timer_paused = True
    session.last_step_start = 12.0
    session.reset_runtime_state()
    assert session.timer_paused is False
    assert session.last_step_start is None
    assert "timer_paused" not in session.to_config()
