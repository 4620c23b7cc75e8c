"""
strength.py

Shannon entropy estimate and strength categories.

H = length * log2(alphabet_size): an upper bound on unpredictability that
assumes each character is chosen independently and uniformly, which is
exactly what the generator does. The category is descriptive only, it
never feeds back into generation.

>>> from passgen.strength import estimate_entropy, strength_for
>>> estimate_entropy(12, 26)
56
>>> strength_for(56).label
'Fair'
"""

from __future__ import annotations

from enum import Enum
import math

from .errors import InvalidArgumentError


class Strength(Enum):
    # (label, lowest bit count in the band, meter fill percentage)
    WEAK = ("Weak", 0, 15)
    FAIR = ("Fair", 40, 35)
    GOOD = ("Good", 60, 55)
    STRONG = ("Strong", 80, 75)
    VERY_STRONG = ("Very Strong", 100, 88)
    UNCRACKABLE = ("Uncrackable", 128, 100)

    def __init__(self, label: str, min_bits: int, meter_percent: int) -> None:
        self.label = label
        self.min_bits = min_bits
        self.meter_percent = meter_percent

    def __str__(self) -> str:
        return self.label


def estimate_entropy_bits(length: int, alphabet_size: int) -> float:
    """Exact entropy in bits: length * log2(alphabet_size)."""
    if length < 0:
        raise InvalidArgumentError("length must be non-negative")
    if alphabet_size <= 0:
        raise InvalidArgumentError("alphabet_size must be positive")
    return length * math.log2(alphabet_size)


def estimate_entropy(length: int, alphabet_size: int) -> int:
    """Entropy rounded (half up) to whole bits, for display and categorisation."""
    return math.floor(estimate_entropy_bits(length, alphabet_size) + 0.5)


def strength_for(bits: float) -> Strength:
    """Map a bit count to its strength band."""
    for band in reversed(Strength):
        if bits >= band.min_bits:
            return band
    return Strength.WEAK


__all__ = [
    "Strength",
    "estimate_entropy",
    "estimate_entropy_bits",
    "strength_for",
]
