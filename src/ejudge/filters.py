"""
One Euro smoothing of pose samples before they reach the classifier.
Based on "The One Euro Filter" (Casiez et al., 2012).
"""
import math
import time

from ejudge.rep_logic import PoseSample


class OneEuroFilter:
    """Scalar low-pass filter whose cutoff rises with signal speed."""

    def __init__(self, freq=30.0, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        """
        Initialize filter.

        Args:
            freq: Nominal update frequency (Hz), used until timestamps arrive
            min_cutoff: Cutoff frequency at rest
            beta: How strongly speed raises the cutoff
            d_cutoff: Cutoff frequency for the derivative estimate
        """
        self.freq = float(freq)
        self.min_cutoff = float(min_cutoff)
        self.beta = float(beta)
        self.d_cutoff = float(d_cutoff)
        self.reset()

    def reset(self):
        self.x_prev = None
        self.dx_prev = 0.0
        self.t_prev = None

    @staticmethod
    def alpha(cutoff, freq):
        tau = 1.0 / (2.0 * math.pi * cutoff)
        return 1.0 / (1.0 + tau * freq)

    def __call__(self, x, t=None):
        """
        Filter a new value.

        Args:
            x: Raw value
            t: Timestamp in seconds (current time if None)

        Returns:
            Smoothed value
        """
        now = time.time() if t is None else t
        if self.x_prev is None:
            self.x_prev, self.t_prev = x, now
            return x

        dt = now - self.t_prev
        freq = 1.0 / dt if dt > 1e-6 else self.freq

        a_d = self.alpha(self.d_cutoff, freq)
        dx = a_d * (x - self.x_prev) * freq + (1.0 - a_d) * self.dx_prev

        a = self.alpha(self.min_cutoff + self.beta * abs(dx), freq)
        x_hat = a * x + (1.0 - a) * self.x_prev

        self.x_prev, self.dx_prev, self.t_prev = x_hat, dx, now
        return x_hat


class PoseSmoother:
    """One filter per PoseSample field."""

    FIELDS = ("hip_y", "knee_y", "shoulder_y", "bar_y")

    def __init__(self, freq=30.0, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        self.filters = {
            name: OneEuroFilter(freq, min_cutoff, beta, d_cutoff) for name in self.FIELDS
        }

    def reset(self):
        for f in self.filters.values():
            f.reset()

    def __call__(self, sample: PoseSample, t=None) -> PoseSample:
        now = time.time() if t is None else t
        values = {}
        for name, f in self.filters.items():
            raw = getattr(sample, name)
            if raw is None or not math.isfinite(raw):
                # Missing or non-finite: drop history so the field restarts cleanly
                f.reset()
                values[name] = raw
            else:
                values[name] = f(raw, now)
        return PoseSample(**values)
