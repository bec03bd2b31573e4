from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Vector2:
    x: float = 0.0
    y: float = 0.0


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> tuple[float, float]:
    mag = math.hypot(x, y)
    if mag < eps:
        return 0.0, 0.0
    return x / mag, y / mag


def aabb_overlap(ax: float, ay: float, aw: float, ah: float,
                 bx: float, by: float, bw: float, bh: float) -> bool:
    """Strict overlap of two boxes given as top-left corner plus size.

    Boxes that only touch along an edge do not overlap.
    """
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah
