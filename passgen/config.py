"""
Configuration for password generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from .errors import InvalidArgumentError
from .pools import AMBIGUOUS, POOL_ORDER, PoolId

# Shortest length accepted at the command-line boundary.
# The core itself only needs length >= 1.
MIN_LENGTH = 12

DEFAULT_LENGTH = 20


@dataclass(frozen=True)
class PasswordConfig:
    # Total number of characters in the generated password.
    length: int = DEFAULT_LENGTH

    # Which character pools may contribute characters.
    pools: FrozenSet[PoolId] = field(default_factory=lambda: frozenset(POOL_ORDER))

    # Strip visually confusable characters (0/O, l/1/I, ...) from every pool.
    exclude_ambiguous: bool = False

    # Characters removed when exclude_ambiguous is set. Never mutated.
    ambiguous: FrozenSet[str] = AMBIGUOUS

    # Seed one character from each enabled (post-filter) pool before the
    # random fill, so every selected type is present.
    guarantee_each_type: bool = True

    @classmethod
    def from_flags(
        cls,
        length: int = DEFAULT_LENGTH,
        *,
        upper: bool = True,
        lower: bool = True,
        digits: bool = True,
        symbols: bool = True,
        exclude_ambiguous: bool = False,
        guarantee_each_type: bool = True,
        ambiguous: FrozenSet[str] = AMBIGUOUS,
    ) -> "PasswordConfig":
        flags = {
            PoolId.UPPER: upper,
            PoolId.LOWER: lower,
            PoolId.DIGITS: digits,
            PoolId.SYMBOLS: symbols,
        }
        return cls(
            length=length,
            pools=frozenset(pid for pid, on in flags.items() if on),
            exclude_ambiguous=exclude_ambiguous,
            guarantee_each_type=guarantee_each_type,
            ambiguous=frozenset(ambiguous),
        )


def validate_length(length: int, minimum: int = MIN_LENGTH) -> int:
    """Boundary check: reject lengths below `minimum`."""
    if length < minimum:
        raise InvalidArgumentError(f"length must be at least {minimum}, got {length}")
    return length


# Default configuration instance you can import elsewhere
DEFAULT_CONFIG = PasswordConfig()
