"""Complete voice engine: glottis, noise sources and vocal tract with smoothing."""

from __future__ import annotations

import math
import random

from .biquad import Biquad
from .glottis import Glottis
from .noise import SimplexNoise
from .tract import Tract
from .tract_shape import TractProps
from .util import clamp
from .white_noise import WhiteNoise

_TRACT_SEGMENTS = 44
_NOISE_BUFFER_LENGTH = 1024
_NOSE_MIX = 0.8


class PinkTrombone:
    """Voice synthesiser whose controls glide smoothly towards their targets."""

    def __init__(self, sample_rate: float, seed: int | None = None) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = float(sample_rate)
        self.block_time = 1.0 / self.sample_rate
        self.smoothing_time = 0.1

        self.target_frequency = self.current_frequency = 140.0
        self.target_tenseness = self.current_tenseness = 0.6
        self.target_tongue_index = self.current_tongue_index = 16.9
        self.target_tongue_diameter = self.current_tongue_diameter = 4.43
        self.target_constriction_index = self.current_constriction_index = -1.0
        self.target_constriction_diameter = self.current_constriction_diameter = 1.0
        self.target_fricative = self.current_fricative = 0.0

        rng = random.Random(seed)
        simplex = SimplexNoise(seed)
        self.props = TractProps.from_length(_TRACT_SEGMENTS)
        self.glottis = Glottis(self.sample_rate, simplex)
        self.tract = Tract(self.sample_rate, self.block_time, self.props, rng)
        self._white_noise = WhiteNoise(_NOISE_BUFFER_LENGTH, rng)

        self._aspirate_filter = Biquad(self.sample_rate)
        self._aspirate_filter.frequency = 500.0
        self._aspirate_filter.q = 0.5
        self._fricative_filter = Biquad(self.sample_rate)
        self._fricative_filter.frequency = 1000.0
        self._fricative_filter.q = 0.5

        self.tract.set_rest_diameter(self.target_tongue_index, self.target_tongue_diameter)

    @property
    def tract_diameters(self) -> list[float]:
        """Diameters of the oral tract segments, glottis first."""
        return self.props.tract_diameter

    @property
    def nose_diameters(self) -> list[float]:
        """Diameters of the nasal tract segments, velum first."""
        return self.props.nose_diameter

    @property
    def tract_length(self) -> int:
        return self.props.n

    @property
    def nose_length(self) -> int:
        return self.props.nose_length

    def synthesize(self, frames: int) -> list[float]:
        """Render ``frames`` samples, each limited to ``[-1, 1]``."""
        if frames < 0:
            raise ValueError("frame count must not be negative")
        output = []
        for i in range(frames):
            self._update_parameters()
            noise_source = self._white_noise.run_step()
            turbulence = self._fricative_filter.run_step(noise_source)
            lam = i / frames
            glottal_output = self.glottis.run_step(lam, noise_source)
            modulator = self.glottis.noise_modulator()
            self.tract.run_step(glottal_output, turbulence, lam, modulator)
            sample = self.tract.lip_output + _NOSE_MIX * self.tract.nose_output
            output.append(clamp(sample, -1.0, 1.0))
        self.glottis.finish_block()
        self.tract.finish_block()
        return output

    def _smooth(self, current: float, target: float) -> float:
        if self.smoothing_time <= 0.0:
            return target
        factor = 1.0 - math.exp(-self.block_time / self.smoothing_time)
        return current + factor * (target - current)

    def _update_parameters(self) -> None:
        smooth = self._smooth
        self.current_frequency = smooth(self.current_frequency, self.target_frequency)
        self.current_tenseness = smooth(self.current_tenseness, self.target_tenseness)
        self.current_tongue_index = smooth(
            self.current_tongue_index, self.target_tongue_index
        )
        self.current_tongue_diameter = smooth(
            self.current_tongue_diameter, self.target_tongue_diameter
        )
        self.current_constriction_index = smooth(
            self.current_constriction_index, self.target_constriction_index
        )
        self.current_constriction_diameter = smooth(
            self.current_constriction_diameter, self.target_constriction_diameter
        )
        self.current_fricative = smooth(self.current_fricative, self.target_fricative)

        self.glottis.target_frequency = self.current_frequency
        self.glottis.target_tenseness = self.current_tenseness
        self.tract.set_rest_diameter(
            self.current_tongue_index, self.current_tongue_diameter
        )
        self.tract.set_constriction(
            self.current_constriction_index,
            self.current_constriction_diameter,
            self.current_fricative,
        )

    def set_frequency(self, frequency: float) -> None:
        """Set the target pitch in Hz, limited to 50..800."""
        self.target_frequency = clamp(frequency, 50.0, 800.0)

    def set_tenseness(self, tenseness: float) -> None:
        """Set the target vocal-fold tension, limited to 0..1."""
        self.target_tenseness = clamp(tenseness, 0.0, 1.0)

    def set_tongue_position(self, index: float, diameter: float) -> None:
        """Move the tongue at once, bypassing smoothing."""
        self.target_tongue_index = self.current_tongue_index = index
        self.target_tongue_diameter = self.current_tongue_diameter = diameter
        self.tract.set_rest_diameter(index, diameter)

    def set_constriction(self, index: float, diameter: float, fricative: float) -> None:
        """Set the target constriction; fricative strength is limited to 0..1."""
        self.target_constriction_index = index
        self.target_constriction_diameter = diameter
        self.target_fricative = clamp(fricative, 0.0, 1.0)

    def set_vibrato(self, amount: float, frequency: float) -> None:
        """Set vibrato depth (0..0.1) and rate in Hz (1..15)."""
        self.glottis.vibrato_amount = clamp(amount, 0.0, 0.1)
        self.glottis.vibrato_frequency = clamp(frequency, 1.0, 15.0)

    def set_parameter_smoothing_time(self, seconds: float) -> None:
        """Set the smoothing time constant, limited to 0..2 seconds."""
        self.smoothing_time = clamp(seconds, 0.0, 2.0)