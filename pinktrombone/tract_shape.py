"""Geometry of the vocal tract: segment layout, diameters and their movement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .util import (
    BLADE_START,
    LIP_START,
    NOSE_LENGTH,
    NOSE_OFFSET,
    NUM_CONSTRICTIONS,
    TIP_START,
    TONGUE_DIAMETER,
    TRACT_BOUND_A,
    TRACT_BOUND_B,
    TRACT_DIAMETER_A,
    TRACT_DIAMETER_B,
    TRACT_DIAMETER_C,
    move_towards,
)

_MIN_SEGMENTS = 5
_CLOSED_VELUM = 0.01
_OPEN_VELUM = 0.4


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


@dataclass
class TractProps:
    """Segment layout of the tract and the most recently published diameters."""

    n: int
    blade_start: int
    tip_start: int
    lip_start: int
    nose_length: int
    nose_start: int
    nose_offset: float = NOSE_OFFSET
    tongue_index: float = 0.0
    tongue_diameter: float = TONGUE_DIAMETER
    tract_diameter: list[float] = field(default_factory=list)
    nose_diameter: list[float] = field(default_factory=list)

    @classmethod
    def from_length(cls, n: int) -> TractProps:
        """Scale the standard 44-segment layout to a tract of ``n`` segments."""
        if n < _MIN_SEGMENTS:
            raise ValueError(f"tract needs at least {_MIN_SEGMENTS} segments")
        scale = n / NUM_CONSTRICTIONS
        blade_start = math.floor(BLADE_START * scale)
        tip_start = math.floor(TIP_START * scale)
        lip_start = math.floor(LIP_START * scale)
        nose_length = math.floor(NOSE_LENGTH * scale)
        return cls(
            n=n,
            blade_start=blade_start,
            tip_start=tip_start,
            lip_start=lip_start,
            nose_length=nose_length,
            nose_start=n - nose_length + 1,
            tongue_index=float(blade_start),
            tract_diameter=[0.0] * n,
            nose_diameter=[0.0] * nose_length,
        )


class TractShape:
    """Current, resting and target diameters of the oral and nasal tracts."""

    def __init__(self, props: TractProps) -> None:
        self.props = props
        n = props.n
        initial = [self._initial_diameter(i, n) for i in range(n)]
        self.diameter = list(initial)
        self.rest_diameter = list(initial)
        self.target_diameter = list(initial)

        length = props.nose_length
        self.nose_diameter = [self._nose_profile(i, length) for i in range(length)]
        self.nose_area = [d * d for d in self.nose_diameter]

        self.velum_target = _CLOSED_VELUM
        self.nose_diameter[0] = self.velum_target
        self.last_obstruction = -1
        self.constriction_index = 3.0
        self.constriction_diameter = 1.0
        self._publish()

    @staticmethod
    def _initial_diameter(i: int, n: int) -> float:
        if i < TRACT_BOUND_A * n - 0.5:
            return TRACT_DIAMETER_A
        if i < TRACT_BOUND_B * n:
            return TRACT_DIAMETER_B
        return TRACT_DIAMETER_C

    @staticmethod
    def _nose_profile(i: int, length: int) -> float:
        d = 2.0 * (i / length)
        diameter = 0.4 + 1.6 * d if d < 1.0 else 0.5 + 1.5 * (2.0 - d)
        return min(diameter, 1.9)

    def _publish(self) -> None:
        self.props.tract_diameter[:] = self.diameter
        self.props.nose_diameter[:] = self.nose_diameter

    def tongue_index_lower_bound(self) -> int:
        """Lowest tract index the tongue body may be placed at."""
        return self.props.blade_start + 2

    def tongue_index_upper_bound(self) -> int:
        """Highest tract index the tongue body may be placed at."""
        return self.props.tip_start - 3

    def set_rest_diameter(self, tongue_index: float, tongue_diameter: float) -> None:
        """Shape the tract around the tongue and snap current diameters to it."""
        props = self.props
        props.tongue_index = tongue_index
        props.tongue_diameter = tongue_diameter
        span = props.tip_start - props.blade_start
        fixed_diameter = 2 + (tongue_diameter - 2) / 1.5
        for i in range(props.blade_start, props.lip_start):
            t = 1.1 * math.pi * (tongue_index - i) / span
            curve = (1.5 - fixed_diameter + 1.7) * math.cos(t)
            if i in (props.blade_start - 2, props.lip_start - 1):
                curve *= 0.8
            if i in (props.blade_start, props.lip_start - 2):
                curve *= 0.94
            self.rest_diameter[i] = 1.5 - curve
        self.target_diameter[:] = self.rest_diameter
        self.diameter[:] = self.rest_diameter

        if tongue_index > 20.0 and tongue_diameter < 2.5:
            openness = 0.4
        elif tongue_index > 15.0 and tongue_diameter < 3.0:
            openness = 0.2
        else:
            openness = _CLOSED_VELUM
        self.nose_diameter[0] = openness
        self.velum_target = openness
        self.nose_area[0] = openness * openness
        self._publish()

    def set_constriction(self, index: float, diameter: float) -> None:
        """Narrow the target shape around ``index`` and set the velum target."""
        props = self.props
        self.constriction_index = index
        self.constriction_diameter = diameter

        self.velum_target = _CLOSED_VELUM
        if index > props.nose_start and diameter < -props.nose_offset:
            self.velum_target = _OPEN_VELUM
        if diameter < -0.85 - props.nose_offset:
            return

        narrowed = max(diameter - 0.3, 0.0)
        if index < 25:
            width = 10
        elif index >= props.tip_start:
            width = 5
        else:
            width = int(10.0 - 5 * (index - 25) / (props.tip_start - 25.0))

        if not (2 <= index < props.n and narrowed < 3):
            return
        centre = _round_half_away(index)
        for offset in range(-width - 1, width + 1):
            j = centre + offset
            if j < 0 or j >= props.n:
                continue
            relpos = abs(j - index) - 0.5
            if relpos <= 0:
                shrink = 0.0
            elif relpos > width:
                shrink = 1.0
            else:
                shrink = 0.5 * (1 - math.cos(math.pi * relpos / width))
            target = self.target_diameter[j]
            if narrowed < target:
                self.target_diameter[j] = narrowed + (target - narrowed) * shrink

    def reshape(self, delta_time: float, movement_speed: float) -> int | None:
        """Move diameters towards their targets over ``delta_time`` seconds.

        Returns the index of an obstruction that has just opened while the
        nose was closed, or ``None`` when no release happened.
        """
        props = self.props
        amount = delta_time * movement_speed
        new_last_obstruction = -1
        for i, (current, target) in enumerate(zip(self.diameter, self.target_diameter)):
            if current <= 0:
                new_last_obstruction = i
            if i < props.nose_start:
                slow_return = 0.6
            elif i >= props.tip_start:
                slow_return = 1.0
            else:
                slow_return = 0.6 + 0.4 * (i - props.nose_start) / (
                    props.tip_start - props.nose_start
                )
            self.diameter[i] = move_towards(current, target, slow_return * amount, 2 * amount)

        released = None
        if (
            self.last_obstruction > -1
            and new_last_obstruction == -1
            and self.nose_area[0] < 0.05
        ):
            released = self.last_obstruction
        self.last_obstruction = new_last_obstruction

        self.nose_diameter[0] = move_towards(
            self.nose_diameter[0], self.velum_target, amount * 0.25, amount * 0.1
        )
        self.nose_area[0] = self.nose_diameter[0] * self.nose_diameter[0]
        self._publish()
        return released