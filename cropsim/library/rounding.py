from __future__ import annotations

import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return int(math.floor(x + 0.5))


def quantize_half_up(x: float, step: float) -> float:
    """
    Round `x` to a multiple of `step`, halves towards +inf.

    Non-finite values are returned unchanged.

    Examples
    --------
    >>> quantize_half_up(22.5, 1)
    23.0
    >>> quantize_half_up(18500.0, 1000)
    19000.0
    """
    if not math.isfinite(x):
        return x
    return float(math.floor(x / step + 0.5) * step)
