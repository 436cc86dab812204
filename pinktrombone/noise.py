"""Seedable two-dimensional simplex noise and its one-dimensional slice."""

from __future__ import annotations

import functools
import math
import time

_GRAD3 = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)

_P = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def time_seed() -> int:
    """Current time in milliseconds, wrapped to a signed 16-bit seed."""
    return _to_int16(time.time_ns() // 1_000_000)


class SimplexNoise:
    """Simplex noise generator whose permutation depends on a 16-bit seed."""

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = time_seed()
        seed = _to_int16(seed)
        if seed < 256:
            seed = _to_int16(seed | (seed << 8))
        low = seed & 255
        high = (seed >> 8) & 255
        perm = [_P[i] ^ (low if i & 1 else high) for i in range(256)]
        self._perm = tuple(perm + perm)
        grads = [_GRAD3[v % 12] for v in perm]
        self._grad = tuple(grads + grads)

    def simplex2(self, x: float, y: float) -> float:
        """Noise value in about ``[-1, 1]`` at the point ``(x, y)``."""
        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * _G2
        x0 = x - i + t
        y0 = y - j + t
        i1, j1 = (1, 0) if x0 > y0 else (0, 1)
        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1 + 2 * _G2
        y2 = y0 - 1 + 2 * _G2
        i &= 255
        j &= 255
        perm = self._perm
        corners = (
            (self._grad[i + perm[j]], x0, y0),
            (self._grad[i + i1 + perm[j + j1]], x1, y1),
            (self._grad[i + 1 + perm[j + 1]], x2, y2),
        )
        total = 0.0
        for grad, cx, cy in corners:
            falloff = 0.5 - cx * cx - cy * cy
            if falloff >= 0:
                falloff *= falloff
                total += falloff * falloff * (grad[0] * cx + grad[1] * cy)
        return 70.0 * total

    def simplex1(self, x: float) -> float:
        """One-dimensional noise taken along a fixed line through the plane."""
        return self.simplex2(x * 1.2, -x * 0.7)


@functools.lru_cache(maxsize=None)
def _default_noise() -> SimplexNoise:
    return SimplexNoise(time_seed())


def simplex2(x: float, y: float) -> float:
    """2D noise from a shared generator seeded from the clock on first use."""
    return _default_noise().simplex2(x, y)


def simplex1(x: float) -> float:
    """1D noise from a shared generator seeded from the clock on first use."""
    return _default_noise().simplex1(x)