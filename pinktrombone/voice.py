"""High-level voice with vowel presets and a setup/close life cycle."""

from __future__ import annotations

import enum

from .synth import PinkTrombone
from .util import clamp


class Vowel(enum.Enum):
    """Tongue placements for the five basic vowels."""

    A = (12.9, 2.43)
    E = (21.0, 2.36)
    I = (25.0, 2.05)  # noqa: E741
    O = (14.0, 2.7)  # noqa: E741
    U = (16.0, 2.8)

    def __init__(self, index: float, diameter: float) -> None:
        self.index = index
        self.diameter = diameter


class Voice:
    """Voice that stays silent until set up; controls are ignored meanwhile."""

    def __init__(self) -> None:
        self._engine: PinkTrombone | None = None
        self.sample_rate = 44100
        self.buffer_size = 512

    @property
    def engine(self) -> PinkTrombone | None:
        return self._engine

    @property
    def is_setup(self) -> bool:
        return self._engine is not None

    def setup(self, sample_rate: int = 44100, buffer_size: int = 512) -> None:
        """Create a fresh engine, discarding any previous one."""
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self._engine = PinkTrombone(sample_rate)

    def close(self) -> None:
        """Release the engine; later synthesis yields silence."""
        self._engine = None

    def __enter__(self) -> Voice:
        if self._engine is None:
            self.setup(self.sample_rate, self.buffer_size)
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def synthesize(self, frames: int) -> list[float]:
        """Render ``frames`` samples, or silence when not set up."""
        if frames < 0:
            raise ValueError("frame count must not be negative")
        if self._engine is None:
            return [0.0] * frames
        return self._engine.synthesize(frames)

    def set_frequency(self, frequency: float) -> None:
        if self._engine is not None:
            self._engine.set_frequency(frequency)

    def set_tenseness(self, tenseness: float) -> None:
        if self._engine is not None:
            self._engine.set_tenseness(clamp(tenseness, 0.0, 1.0))

    def set_tongue_position(self, index: float, diameter: float) -> None:
        """Place the tongue, kept within the tract's bounds and 1..3.5 wide."""
        if self._engine is None:
            return
        tract = self._engine.tract
        index = clamp(
            index,
            float(tract.tongue_index_lower_bound()),
            float(tract.tongue_index_upper_bound()),
        )
        self._engine.set_tongue_position(index, clamp(diameter, 1.0, 3.5))

    def set_constriction(
        self, index: float, diameter: float, fricative: float = 0.0
    ) -> None:
        if self._engine is not None:
            self._engine.set_constriction(index, diameter, fricative)

    def set_vibrato(self, amount: float, frequency: float) -> None:
        if self._engine is not None:
            self._engine.set_vibrato(amount, frequency)

    def set_parameter_smoothing_time(self, seconds: float) -> None:
        if self._engine is not None:
            self._engine.set_parameter_smoothing_time(seconds)

    @property
    def tract_diameters(self) -> list[float] | None:
        return list(self._engine.tract_diameters) if self._engine else None

    @property
    def nose_diameters(self) -> list[float] | None:
        return list(self._engine.nose_diameters) if self._engine else None

    @property
    def tract_length(self) -> int:
        return self._engine.tract_length if self._engine else 0

    @property
    def nose_length(self) -> int:
        return self._engine.nose_length if self._engine else 0

    def set_vowel(self, vowel: Vowel | str) -> None:
        """Shape the tract for a vowel, given as a ``Vowel`` or its letter."""
        if isinstance(vowel, str):
            try:
                vowel = Vowel[vowel.upper()]
            except KeyError:
                raise ValueError(f"unknown vowel: {vowel!r}") from None
        self.set_tongue_position(vowel.index, vowel.diameter)
        self.set_constriction(-1.0, 1.0, 0.0)

    def set_silence(self) -> None:
        """Relax the glottis and close the tract."""
        self.set_tenseness(0.0)
        self.set_constriction(15.0, 0.0, 0.0)