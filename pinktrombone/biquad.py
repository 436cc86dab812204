"""Band-pass biquad filter."""

from __future__ import annotations

import math


class Biquad:
    """Second-order band-pass filter with unit gain at the centre frequency."""

    def __init__(self, sample_rate: float) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = float(sample_rate)
        self._two_pi_over_rate = 2.0 * math.pi / self.sample_rate
        self._frequency = 200.0
        self._q = 0.5
        self._gain = 1.0
        self._xm1 = self._xm2 = self._ym1 = self._ym2 = 0.0
        self._update_coefficients()

    @property
    def frequency(self) -> float:
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = float(value)
        self._update_coefficients()

    @property
    def q(self) -> float:
        return self._q

    @q.setter
    def q(self, value: float) -> None:
        if value == 0:
            raise ValueError("Q must be non-zero")
        self._q = float(value)
        self._update_coefficients()

    @property
    def gain(self) -> float:
        return self._gain

    @gain.setter
    def gain(self, value: float) -> None:
        self._gain = float(value)
        self._update_coefficients()

    def _update_coefficients(self) -> None:
        omega = self._frequency * self._two_pi_over_rate
        sn = math.sin(omega)
        cs = math.cos(omega)
        alpha = sn * 0.5 / self._q
        b0 = 1.0 / (1.0 + alpha)
        self._a0 = alpha * b0
        self._a1 = 0.0
        self._a2 = -alpha * b0
        self._b1 = -2.0 * cs * b0
        self._b2 = (1.0 - alpha) * b0

    def run_step(self, xn: float) -> float:
        """Filter one input sample and return the output sample."""
        yn = (
            self._a0 * xn
            + self._a1 * self._xm1
            + self._a2 * self._xm2
            - self._b1 * self._ym1
            - self._b2 * self._ym2
        )
        self._ym2, self._ym1 = self._ym1, yn
        self._xm2, self._xm1 = self._xm1, xn
        return yn