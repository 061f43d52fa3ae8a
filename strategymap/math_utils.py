from __future__ import annotations

import math
from typing import Tuple

Point = Tuple[float, float]

_DENOM_EPS = 1e-12

# Diagonal of the normalised 100 x 100 map.
MAX_MAP_DISTANCE = math.hypot(100.0, 100.0)


def _vec2(a: Point, b: Point) -> Point:
    return b[0] - a[0], b[1] - a[1]


def _norm_sq2(v: Point) -> float:
    return v[0] * v[0] + v[1] * v[1]


def _norm2(v: Point) -> float:
    return math.sqrt(max(_norm_sq2(v), 0.0))


def _midpoint2(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5


def _unit2(v: Point, fallback: Point = (1.0, 0.0)) -> Point:
    length = _norm2(v)
    if length <= _DENOM_EPS:
        return fallback
    return v[0] / length, v[1] / length


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


__all__ = [
    "MAX_MAP_DISTANCE",
    "Point",
    "_DENOM_EPS",
    "_clamp",
    "_midpoint2",
    "_norm2",
    "_norm_sq2",
    "_unit2",
    "_vec2",
]
