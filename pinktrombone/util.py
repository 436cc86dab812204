"""Shared constants and small numeric helpers for the voice model."""

from __future__ import annotations

import random

# Tract properties
MAX_TRANSIENTS = 20
NUM_CONSTRICTIONS = 44.0
BLADE_START = 10
NOSE_LENGTH = 28
TIP_START = 32
LIP_START = 39
TONGUE_DIAMETER = 3.5
NOSE_OFFSET = 0.8
GLOTTAL_REFLECTION = 0.75
LIP_REFLECTION = -0.85
TRACT_FADE = 1.0
MOVEMENT_SPEED = 15.0
TRACT_BOUND_A = 7.0 / 44.0
TRACT_DIAMETER_A = 0.6
TRACT_BOUND_B = 12.0 / 44.0
TRACT_DIAMETER_B = 1.1
TRACT_DIAMETER_C = 1.5

# Glottis properties
VIBRATO_AMOUNT = 0.005
VIBRATO_FREQUENCY = 6.0


def clamp(number: float, low: float, high: float) -> float:
    """Limit ``number`` to the closed range ``[low, high]``."""
    if number < low:
        return low
    if number > high:
        return high
    return number


def move_towards(
    current: float,
    target: float,
    amount_up: float,
    amount_down: float | None = None,
) -> float:
    """Step ``current`` towards ``target`` without overshooting it.

    ``amount_up`` is the step used when rising and ``amount_down`` the step
    used when falling; when ``amount_down`` is omitted both are the same.
    """
    if amount_down is None:
        amount_down = amount_up
    if current < target:
        return min(current + amount_up, target)
    return max(current - amount_down, target)


def gaussian(rng: random.Random | None = None) -> float:
    """Approximately normal value in ``[-2, 2]`` from sixteen uniform draws."""
    source = rng if rng is not None else random
    total = sum(source.random() for _ in range(16))
    return (total - 8.0) / 4.0