"""
Articulation — Score arithmetic

Rounding and clamping shared by every scorer. Rounding is half-up
(70.5 → 71), not Python's round-half-to-even.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

import numpy as np


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: int = 0, high: int = 100) -> int:
    """Round half-up, then clamp into [low, high]."""
    return max(low, min(high, round_half_up(value)))


def rounded_mean(values: Iterable[int]) -> Optional[int]:
    """Half-up rounded mean, or None when there is nothing to average."""
    values = list(values)
    if not values:
        return None
    return round_half_up(float(np.mean(values)))
