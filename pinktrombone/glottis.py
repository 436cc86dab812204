"""Glottal source based on the Liljencrants-Fant waveform model."""

from __future__ import annotations

import math
from collections.abc import Callable

from .noise import SimplexNoise, simplex1
from .util import VIBRATO_AMOUNT, VIBRATO_FREQUENCY, clamp


class Glottis:
    """Produces the voiced excitation plus aspiration noise, sample by sample."""

    def __init__(self, sample_rate: float, noise: SimplexNoise | None = None) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = float(sample_rate)
        self._simplex1: Callable[[float], float] = (
            noise.simplex1 if noise is not None else simplex1
        )
        self.time_in_waveform = 0.0
        self.old_frequency = 140.0
        self.new_frequency = 140.0
        self.smooth_frequency = 140.0
        self.target_frequency = 140.0
        self.old_tenseness = 0.6
        self.new_tenseness = 0.6
        self.target_tenseness = 0.6
        self.total_time = 0.0
        self.intensity = 0.0
        self.loudness = 1.0
        self.vibrato_amount = VIBRATO_AMOUNT
        self.vibrato_frequency = VIBRATO_FREQUENCY
        self.auto_wobble = False
        self.is_touched = False
        self.always_voice = True
        self._setup_waveform(0.0)

    def _setup_waveform(self, lam: float) -> None:
        self.frequency = self.old_frequency * (1 - lam) + self.new_frequency * lam
        tenseness = self.old_tenseness * (1 - lam) + self.new_tenseness * lam
        self.rd = 3 * (1 - tenseness)
        self.waveform_length = 1.0 / self.frequency

        rd = clamp(self.rd, 0.5, 2.7)
        ra = -0.01 + 0.048 * rd
        rk = 0.224 + 0.118 * rd
        rg = (rk / 4) * (0.5 + 1.2 * rk) / (0.11 * rd - ra * (0.5 + 1.2 * rk))

        ta = ra
        tp = 1 / (2.0 * rg)
        te = tp + tp * rk

        epsilon = 1 / ta
        shift = math.exp(-epsilon * (1 - te))
        delta = 1 - shift

        rhs_integral = ((1 / epsilon) * (shift - 1) + (1 - te) * shift) / delta
        total_lower_integral = -(te - tp) / 2.0 + rhs_integral
        total_upper_integral = -total_lower_integral

        omega = math.pi / tp
        s = math.sin(omega * te)
        y = -math.pi * s * total_upper_integral / (tp * 2.0)
        alpha = math.log(y) / (tp / 2.0 - te)
        self._alpha = alpha
        self._e0 = -1.0 / (s * math.exp(alpha * te))
        self._epsilon = epsilon
        self._shift = shift
        self._delta = delta
        self._te = te
        self._omega = omega

    def noise_modulator(self) -> float:
        """Gain applied to noise, higher while the glottis is open."""
        voiced = 0.1 + 0.2 * max(
            0.0, math.sin(math.pi * 2 * self.time_in_waveform / self.waveform_length)
        )
        voicing = self.target_tenseness * self.intensity
        return voicing * voiced + (1 - voicing) * 0.3

    def finish_block(self) -> None:
        """Advance pitch, tenseness and intensity at the end of an audio block."""
        t = self.total_time
        noise = self._simplex1
        vibrato = self.vibrato_amount * math.sin(2 * math.pi * t * self.vibrato_frequency)
        vibrato += 0.02 * noise(t * 4.07)
        vibrato += 0.04 * noise(t * 2.15)
        if self.auto_wobble:
            vibrato += 0.2 * noise(t * 0.98)
            vibrato += 0.4 * noise(t * 0.5)
        if self.target_frequency > self.smooth_frequency:
            self.smooth_frequency = min(self.smooth_frequency * 1.1, self.target_frequency)
        if self.target_frequency < self.smooth_frequency:
            self.smooth_frequency = max(self.smooth_frequency / 1.1, self.target_frequency)
        self.old_frequency = self.new_frequency
        self.new_frequency = self.smooth_frequency * (1 + vibrato)
        self.old_tenseness = self.new_tenseness
        self.new_tenseness = (
            self.target_tenseness + 0.1 * noise(t * 0.46) + 0.05 * noise(t * 0.36)
        )
        if not self.is_touched and self.always_voice:
            self.new_tenseness += (3 - self.target_tenseness) * (1 - self.intensity)

        if self.is_touched or self.always_voice:
            self.intensity += 0.13
        else:
            self.intensity -= 0.05
        self.intensity = clamp(self.intensity, 0.0, 1.0)

    def _normalized_lf_waveform(self, t: float) -> float:
        if t > self._te:
            output = (-math.exp(-self._epsilon * (t - self._te)) + self._shift) / self._delta
        else:
            output = self._e0 * math.exp(self._alpha * t) * math.sin(self._omega * t)
        return output * self.intensity * self.loudness

    def run_step(self, lam: float, noise_source: float) -> float:
        """Produce one sample; ``lam`` is the position within the block (0..1)."""
        time_step = 1.0 / self.sample_rate
        self.time_in_waveform += time_step
        self.total_time += time_step
        if self.time_in_waveform > self.waveform_length:
            self.time_in_waveform -= self.waveform_length
            self._setup_waveform(lam)
        out = self._normalized_lf_waveform(self.time_in_waveform / self.waveform_length)
        aspiration = (
            self.intensity
            * (1 - math.sqrt(self.target_tenseness))
            * self.noise_modulator()
            * noise_source
        )
        aspiration *= 0.2 + 0.02 * self._simplex1(self.total_time * 1.99)
        return out + aspiration