from __future__ import annotations

import math


def clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else x


# halves go up, not to even: 2.5 -> 3, -2.5 -> -2
def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)
