import pytest
from app.core.ewma import EtaBreakdown, ProgressEstimator


def test_first_sample_sets_value_exactly():
    est = ProgressEstimator()
    est.record(7.25)
    assert est.smoothed_duration == 7.25
    assert est.sample_count == 1


def test_warmup_weights_new_samples_heavily():
    est = ProgressEstimator(alpha=0.1)
    est.record(5.0)
    # second sample: w = 0.1 + (1/2) * 0.9 = 0.55
    est.record(2.0)
    assert est.smoothed_duration == pytest.approx(0.55 * 2.0 + 0.45 * 5.0)
    assert est.sample_count == 2


def test_warmup_weight_decays_towards_alpha():
    est = ProgressEstimator(alpha=0.1)
    weights = []
    for _ in range(25):
        weights.append(est.weight())
        est.record(1.0)
    assert weights[0] == 1.0
    assert all(a > b for a, b in zip(weights[1:20], weights[2:20]))
    assert weights[20:] == [0.1] * 5


def test_steady_state_uses_alpha():
    est = ProgressEstimator(alpha=0.1)
    for _ in range(20):
        est.record(1.0)
    assert est.smoothed_duration == pytest.approx(1.0)
    est.record(11.0)
    assert est.smoothed_duration == pytest.approx(0.1 * 11.0 + 0.9 * 1.0)
    assert est.sample_count == 21


def test_reset_discards_history():
    est = ProgressEstimator()
    for s in (3.0, 4.0, 5.0):
        est.record(s)
    est.reset()
    assert est.sample_count == 0
    assert est.smoothed_duration == 0.0
    est.record(9.0)
    assert est.smoothed_duration == 9.0


def test_eta_hidden_until_estimate_exists():
    est = ProgressEstimator()
    assert est.eta(100) is None
    assert est.format_eta(100) is None
    est.record(0.05)
    assert est.eta(100) is None


def test_eta_breakdown():
    est = ProgressEstimator()
    est.record(2.0)
    eta = est.eta(90)
    assert eta == EtaBreakdown(0, 3, 0)
    assert eta.format() == "0h 03m 00s"
    assert est.format_eta(90) == "Time estimate:\n0h 03m 00s"


def test_eta_breakdown_hours():
    eta = EtaBreakdown.from_seconds(3725.9)
    assert (eta.hours, eta.minutes, eta.seconds) == (1, 2, 5)
    assert eta.total_seconds == 3725


def test_eta_zero_remaining():
    est = ProgressEstimator()
    est.record(4.0)
    assert est.eta(0) == EtaBreakdown(0, 0, 0)


def test_format_average():
    est = ProgressEstimator()
    est.record(12.345)
    assert est.format_average() == "Average time: 12.3s"


def test_dict_roundtrip():
    est = ProgressEstimator(alpha=0.2)
    est.record(3.0)
    est.record(5.0)
    restored = ProgressEstimator.from_dict(est.to_dict())
    assert restored.alpha == 0.2
    assert restored.smoothed_duration == est.smoothed_duration
    assert restored.sample_count == 2


@pytest.mark.parametrize("payload", [
    "nope",
    {"alpha": "x"},
    {"alpha": 0.1, "value": -1.0, "n": 2},
    {"alpha": 0.1, "value": 1.0, "n": -3},
    {"alpha": 5.0},
    {"alpha": 0.1, "value": float("nan")},
])
def test_from_dict_rejects_malformed(payload):
    with pytest.raises(ValueError):
        ProgressEstimator.from_dict(payload)


def test_invalid_alpha():
    with pytest.raises(ValueError):
        ProgressEstimator(alpha=0.0)
