"""Looping buffer of uniform white noise."""

from __future__ import annotations

import random
from collections.abc import Iterator


class WhiteNoise(Iterator[float]):
    """Pre-generated uniform noise in ``[-1, 1]`` played back in a loop."""

    def __init__(self, length: int = 1024, rng: random.Random | None = None) -> None:
        if length <= 0:
            raise ValueError("noise buffer length must be positive")
        source = rng if rng is not None else random.Random()
        self._buffer = tuple(source.random() * 2.0 - 1.0 for _ in range(length))
        self._index = 0

    def __len__(self) -> int:
        return len(self._buffer)

    def run_step(self) -> float:
        """Return the next sample, wrapping to the start after the last one."""
        value = self._buffer[self._index]
        self._index = (self._index + 1) % len(self._buffer)
        return value

    def __iter__(self) -> WhiteNoise:
        return self

    def __next__(self) -> float:
        return self.run_step()