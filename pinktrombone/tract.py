"""Waveguide model of the oral and nasal tracts."""

from __future__ import annotations

import random
from dataclasses import dataclass

from .tract_shape import TractProps, TractShape
from .util import (
    GLOTTAL_REFLECTION,
    LIP_REFLECTION,
    MAX_TRANSIENTS,
    MOVEMENT_SPEED,
    TRACT_FADE,
    clamp,
)

_WALL_LOSS = 0.999
_AMPLITUDE_DECAY = 0.999
_AMPLITUDE_UPDATE_CHANCE = 0.1


@dataclass
class _Transient:
    position: int = 0
    time_alive: float = 0.0
    life_time: float = 0.0
    strength: float = 0.0
    exponent: float = 0.0
    living: bool = False


class Tract:
    """Propagates glottal and noise excitation through tract and nose segments."""

    def __init__(
        self,
        sample_rate: float,
        block_time: float,
        props: TractProps,
        rng: random.Random | None = None,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if block_time <= 0:
            raise ValueError("block time must be positive")
        self.sample_rate = float(sample_rate)
        self.block_time = float(block_time)
        self.props = props
        self._rng = rng if rng is not None else random.Random()

        self.lip_output = 0.0
        self.nose_output = 0.0
        self.glottal_reflection = GLOTTAL_REFLECTION
        self.lip_reflection = LIP_REFLECTION
        self.fade = TRACT_FADE
        self.movement_speed = MOVEMENT_SPEED
        self.fricative_intensity = 0.0

        self._transients = [_Transient() for _ in range(MAX_TRANSIENTS)]
        self._transient_count = 0

        self.shape = TractShape(props)
        n = props.n
        nose_length = props.nose_length

        self._right = [0.0] * n
        self._left = [0.0] * n
        self._reflection = [0.0] * (n + 1)
        self._new_reflection = [0.0] * (n + 1)
        self._junction_right = [0.0] * (n + 1)
        self._junction_left = [0.0] * (n + 1)
        self._area = [0.0] * n
        self.max_amplitude = [0.0] * n

        self._nose_right = [0.0] * nose_length
        self._nose_left = [0.0] * nose_length
        self._nose_junction_right = [0.0] * (nose_length + 1)
        self._nose_junction_left = [0.0] * (nose_length + 1)
        self._nose_reflection = [0.0] * (nose_length + 1)
        self.nose_max_amplitude = [0.0] * nose_length

        self._reflection_left = self._reflection_right = self._reflection_nose = 0.0
        self._new_reflection_left = 0.0
        self._new_reflection_right = 0.0
        self._new_reflection_nose = 0.0

        # The nasal areas are not yet known when the junction is first solved.
        self._calculate_reflections(nose_area0=0.0)
        self._calculate_nose_reflections()

    @property
    def diameter(self) -> list[float]:
        return self.shape.diameter

    @property
    def nose_diameter(self) -> list[float]:
        return self.shape.nose_diameter

    def tongue_index_lower_bound(self) -> int:
        """Lowest tract index the tongue body may be placed at."""
        return self.shape.tongue_index_lower_bound()

    def tongue_index_upper_bound(self) -> int:
        """Highest tract index the tongue body may be placed at."""
        return self.shape.tongue_index_upper_bound()

    def set_rest_diameter(self, tongue_index: float, tongue_diameter: float) -> None:
        """Place the tongue and snap the tract shape to the new resting form."""
        self.shape.set_rest_diameter(tongue_index, tongue_diameter)

    def set_constriction(
        self, index: float, diameter: float, fricative_intensity: float
    ) -> None:
        """Set a constriction and the strength of the noise it produces."""
        self.fricative_intensity = fricative_intensity
        self.shape.set_constriction(index, diameter)

    def _calculate_reflections(self, nose_area0: float | None = None) -> None:
        self._area = [d * d for d in self.shape.diameter]
        area = self._area
        for i in range(1, self.props.n):
            self._reflection[i] = self._new_reflection[i]
            if area[i] == 0:
                self._new_reflection[i] = 0.999
            else:
                self._new_reflection[i] = (area[i - 1] - area[i]) / (area[i - 1] + area[i])

        self._reflection_left = self._new_reflection_left
        self._reflection_right = self._new_reflection_right
        self._reflection_nose = self._new_reflection_nose
        nose_area = self.shape.nose_area[0] if nose_area0 is None else nose_area0
        start = self.props.nose_start
        total = area[start] + area[start + 1] + nose_area
        self._new_reflection_left = (2.0 * area[start] - total) / total
        self._new_reflection_right = (2.0 * area[start + 1] - total) / total
        self._new_reflection_nose = (2.0 * nose_area - total) / total

    def _calculate_nose_reflections(self) -> None:
        nose_area = self.shape.nose_area
        for i in range(1, self.props.nose_length):
            self._nose_reflection[i] = (nose_area[i - 1] - nose_area[i]) / (
                nose_area[i - 1] + nose_area[i]
            )

    def _add_transient(self, position: int) -> None:
        if self._transient_count >= MAX_TRANSIENTS:
            return
        slot = next(
            (t for t in self._transients if not t.living), self._transients[-1]
        )
        slot.position = position
        slot.time_alive = 0.0
        slot.life_time = 0.2
        slot.strength = 0.3
        slot.exponent = 200.0
        slot.living = True
        self._transient_count += 1

    def _process_transients(self) -> None:
        active = self._transients[: self._transient_count]
        step = 1.0 / (self.sample_rate * 2.0)
        for trans in active:
            amplitude = trans.strength * 2.0 ** (-trans.exponent * trans.time_alive)
            self._right[trans.position] += amplitude / 2.0
            self._left[trans.position] += amplitude / 2.0
            trans.time_alive += step
        for trans in active:
            if trans.time_alive > trans.life_time:
                trans.living = False

    def _add_turbulence_noise(
        self, turbulence_noise: float, glottal_noise_modulator: float
    ) -> None:
        index = self.shape.constriction_index
        diameter = self.shape.constriction_diameter
        if index < 2.0 or index > self.props.n:
            return
        if diameter <= 0.0:
            return
        self._add_turbulence_noise_at_index(
            0.66 * turbulence_noise * self.fricative_intensity,
            index,
            diameter,
            glottal_noise_modulator,
        )

    def _add_turbulence_noise_at_index(
        self,
        turbulence_noise: float,
        index: float,
        diameter: float,
        glottal_noise_modulator: float,
    ) -> None:
        i = int(index // 1)
        delta = index - i
        turbulence_noise *= glottal_noise_modulator
        thinness = clamp(8.0 * (0.7 - diameter), 0.0, 1.0)
        openness = clamp(30.0 * (diameter - 0.3), 0.0, 1.0)
        noise0 = turbulence_noise * (1.0 - delta) * thinness * openness
        noise1 = turbulence_noise * delta * thinness * openness
        n = self.props.n
        for position, noise in ((i + 1, noise0), (i + 2, noise1)):
            if 0 <= position < n:
                self._right[position] += noise / 2.0
                self._left[position] += noise / 2.0

    def run_step(
        self,
        glottal_output: float,
        turbulence_noise: float,
        lam: float,
        glottal_noise_modulator: float,
    ) -> None:
        """Advance the waveguides by one sample and update the outputs."""
        update_amplitudes = self._rng.random() < _AMPLITUDE_UPDATE_CHANCE

        self._process_transients()
        self._add_turbulence_noise(turbulence_noise, glottal_noise_modulator)

        n = self.props.n
        right, left = self._right, self._left
        jr, jl = self._junction_right, self._junction_left
        jr[0] = left[0] * self.glottal_reflection + glottal_output
        jl[n] = right[n - 1] * self.lip_reflection

        for i in range(1, n):
            r = self._reflection[i] * (1 - lam) + self._new_reflection[i] * lam
            w = r * (right[i - 1] + left[i])
            jr[i] = right[i - 1] - w
            jl[i] = left[i] + w

        i = self.props.nose_start
        nose_in = self._nose_left[0]
        r = self._new_reflection_left * (1 - lam) + self._reflection_left * lam
        jl[i] = r * right[i - 1] + (1 + r) * (nose_in + left[i])
        r = self._new_reflection_right * (1 - lam) + self._reflection_right * lam
        jr[i] = r * left[i] + (1 + r) * (right[i - 1] + nose_in)
        r = self._new_reflection_nose * (1 - lam) + self._reflection_nose * lam
        self._nose_junction_right[0] = r * nose_in + (1 + r) * (left[i] + right[i - 1])

        self._right = [value * _WALL_LOSS for value in jr[:n]]
        self._left = [value * _WALL_LOSS for value in jl[1 : n + 1]]
        if update_amplitudes:
            self._track_amplitudes(self.max_amplitude, self._right, self._left)
        self.lip_output = self._right[n - 1]

        nose_length = self.props.nose_length
        nose_right, nose_left = self._nose_right, self._nose_left
        njr, njl = self._nose_junction_right, self._nose_junction_left
        njl[nose_length] = nose_right[nose_length - 1] * self.lip_reflection
        for i in range(1, nose_length):
            # The scattering term is truncated to a whole number here.
            w = int(self._nose_reflection[i] * (nose_right[i - 1] + nose_left[i]))
            njr[i] = nose_right[i - 1] - w
            njl[i] = nose_left[i] + w

        self._nose_right = [value * self.fade for value in njr[:nose_length]]
        self._nose_left = [value * self.fade for value in njl[1 : nose_length + 1]]
        if update_amplitudes:
            self._track_amplitudes(
                self.nose_max_amplitude, self._nose_right, self._nose_left
            )
        self.nose_output = self._nose_right[nose_length - 1]

    @staticmethod
    def _track_amplitudes(
        maxima: list[float], right: list[float], left: list[float]
    ) -> None:
        for i, (r, l) in enumerate(zip(right, left)):
            amplitude = abs(r + l)
            if amplitude > maxima[i]:
                maxima[i] = amplitude
            else:
                maxima[i] *= _AMPLITUDE_DECAY

    def finish_block(self) -> None:
        """Move the tract shape for one block and recompute reflections."""
        released = self.shape.reshape(self.block_time, self.movement_speed)
        if released is not None:
            self._add_transient(released)
        self._calculate_reflections()
        self.props.tract_diameter[:] = self.shape.diameter
        self.props.nose_diameter[:] = self.shape.nose_diameter