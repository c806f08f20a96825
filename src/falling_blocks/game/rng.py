"""Explicit-seed pseudo random numbers.

The seed is a plain 32-bit integer threaded through every call; each draw
returns the advanced seed alongside the value, so the same seed always
yields the same sequence.
"""

from __future__ import annotations

import time
from typing import Tuple

Seed = int

_MASK = 0xFFFFFFFF
_MULTIPLIER = 0x41C64E6D
_INCREMENT = 0x3039


def initial_seed(value: int) -> Seed:
    return int(value) & _MASK


def seed_from_clock() -> Seed:
    return initial_seed(time.time_ns())


def next_seed(seed: Seed) -> Seed:
    return (seed * _MULTIPLIER + _INCREMENT) & _MASK


def randint(seed: Seed, low: int, high: int) -> Tuple[int, Seed]:
    """Draw an integer in [low, high] and return it with the advanced seed."""
    if high < low:
        raise ValueError(f"empty range [{low}, {high}]")
    advanced = next_seed(seed)
    value = (advanced >> 16) & 0x7FFF
    return low + value % (high - low + 1), advanced
