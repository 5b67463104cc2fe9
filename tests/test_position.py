from app.core.position import (
    Mode,
    PatternPosition,
    ThreadingSubMode,
    clamp_batch_size,
    clamp_index,
    effective_last_index,
)


def test_active_follows_mode():
    pos = PatternPosition(row=3, thread=9)
    assert pos.active(Mode.LIFTPLAN) == 3
    assert pos.active(Mode.TREADLING) == 3
    assert pos.active(Mode.THREADING) == 9


def test_set_active_only_touches_mode_variable():
    pos = PatternPosition(row=3, thread=9)
    pos.set_active(Mode.THREADING, 5, last_index=20)
    assert (pos.row, pos.thread) == (3, 5)
    pos.set_active(Mode.TREADLING, 7, last_index=20)
    assert (pos.row, pos.thread) == (7, 5)


def test_set_active_clamps():
    pos = PatternPosition()
    assert pos.set_active(Mode.LIFTPLAN, 50, last_index=12) == 12
    assert pos.set_active(Mode.LIFTPLAN, -4, last_index=12) == 1


def test_wraparound_both_ends():
    pos = PatternPosition(row=4)
    assert pos.step_forward(Mode.LIFTPLAN, 4) == 1
    assert pos.step_back(Mode.LIFTPLAN, 4) == 4


def test_empty_pattern_treated_as_single_row():
    assert effective_last_index(0) == 1
    assert clamp_index(5, 0) == 1
    pos = PatternPosition()
    assert pos.step_forward(Mode.LIFTPLAN, 0) == 1
    assert pos.step_back(Mode.LIFTPLAN, 0) == 1


def test_batch_size_clamped():
    assert clamp_batch_size(0) == 1
    assert clamp_batch_size(8) == 8
    assert clamp_batch_size(40) == 25


def test_enum_values_are_persisted_names():
    assert Mode("threading") is Mode.THREADING
    assert ThreadingSubMode("batched") is ThreadingSubMode.BATCHED
    assert Mode.THREADING.unit == "Thread"
    assert Mode.LIFTPLAN.unit == "Row"
