# ewma.py - smoothed time-per-step estimate and completion ETA
from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_ALPHA = 0.1
WARMUP_SAMPLES = 20
# Below this the average is still meaningless (no samples yet)
ETA_DISPLAY_THRESHOLD_S = 0.1
SECONDS_PER_HOUR = 3600
SECONDS_PER_MIN = 60


@dataclass(frozen=True)
class EtaBreakdown:
    hours: int
    minutes: int
    seconds: int

    @classmethod
    def from_seconds(cls, total_s: float) -> "EtaBreakdown":
        total = int(total_s)
        return cls(
            hours=total // SECONDS_PER_HOUR,
            minutes=(total % SECONDS_PER_HOUR) // SECONDS_PER_MIN,
            seconds=total % SECONDS_PER_MIN,
        )

    @property
    def total_seconds(self) -> int:
        return self.hours * SECONDS_PER_HOUR + self.minutes * SECONDS_PER_MIN + self.seconds

    def format(self) -> str:
        return f"{self.hours}h {self.minutes:02}m {self.seconds:02}s"


class ProgressEstimator:
    """
    Exponentially weighted moving average of the time one step takes.

    While fewer than WARMUP_SAMPLES have been seen the weight given to a new
    sample starts at 1 and decays towards ``alpha``, so the estimate follows
    the first few real measurements instead of creeping up from zero.
    """

    def __init__(self, alpha: float = DEFAULT_ALPHA):
        if not 0.0 < alpha <= 1.0:
            raise ValueError("alpha must be in (0, 1]")
        self.alpha = float(alpha)
        self.smoothed_duration = 0.0
        self.sample_count = 0

    def weight(self) -> float:
        """Weight the next sample will receive."""
        if self.sample_count == 0:
            return 1.0
        if self.sample_count < WARMUP_SAMPLES:
            return self.alpha + (1.0 / (1 + self.sample_count)) * (1.0 - self.alpha)
        return self.alpha

    def record(self, sample: float) -> float:
        sample = float(sample)
        if self.sample_count == 0:
            self.smoothed_duration = sample
        else:
            w = self.weight()
            self.smoothed_duration = w * sample + (1.0 - w) * self.smoothed_duration
        self.sample_count += 1
        return self.smoothed_duration

    def reset(self) -> None:
        self.sample_count = 0
        self.smoothed_duration = 0.0

    @property
    def value(self) -> float:
        return self.smoothed_duration

    def has_estimate(self) -> bool:
        return self.smoothed_duration > ETA_DISPLAY_THRESHOLD_S

    def eta_seconds(self, remaining_steps: int) -> float | None:
        if not self.has_estimate() or remaining_steps < 0:
            return None
        return remaining_steps * self.smoothed_duration

    def eta(self, remaining_steps: int) -> EtaBreakdown | None:
        total = self.eta_seconds(remaining_steps)
        if total is None:
            return None
        return EtaBreakdown.from_seconds(total)

    def format_average(self) -> str:
        return f"Average time: {self.smoothed_duration:0.1f}s"

    def format_eta(self, remaining_steps: int) -> str | None:
        eta = self.eta(remaining_steps)
        return None if eta is None else f"Time estimate:\n{eta.format()}"

    # Persistence uses the short field names of the saved blob
    def to_dict(self) -> dict:
        return {"alpha": self.alpha, "value": self.smoothed_duration, "n": self.sample_count}

    @classmethod
    def from_dict(cls, data: dict) -> "ProgressEstimator":
        if not isinstance(data, dict):
            raise ValueError("estimator state must be an object")
        try:
            alpha = float(data.get("alpha", DEFAULT_ALPHA))
            value = float(data.get("value", 0.0))
            count = int(data.get("n", 0))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"malformed estimator state: {exc}") from exc
        if count < 0 or not math.isfinite(value) or value < 0:
            raise ValueError("estimator state must be non-negative")
        est = cls(alpha)
        est.smoothed_duration = value
        est.sample_count = count
        return est
