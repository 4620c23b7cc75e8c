"""
pools.py

Character pools and the pool builder.

Pool definitions are fixed module constants; the builder never edits them,
it returns freshly filtered copies per call. Pools always come out in the
same order (upper, lower, digits, symbols) so the combined alphabet is
reproducible even though its use is random.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Iterable, Tuple
import logging
import string

from .errors import EmptyAfterFilteringError, InvalidArgumentError, NoPoolSelectedError

logger = logging.getLogger(__name__)


class PoolId(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    DIGITS = "digits"
    SYMBOLS = "symbols"


@dataclass(frozen=True)
class CharacterPool:
    pool_id: PoolId
    chars: str

    def __len__(self) -> int:
        return len(self.chars)

    def __contains__(self, ch: object) -> bool:
        return ch in self.chars

    def without(self, excluded: AbstractSet[str]) -> "CharacterPool":
        """Copy of this pool minus every character in `excluded`."""
        return CharacterPool(
            self.pool_id, "".join(c for c in self.chars if c not in excluded)
        )


#Definitions
UPPER = CharacterPool(PoolId.UPPER, string.ascii_uppercase)
LOWER = CharacterPool(PoolId.LOWER, string.ascii_lowercase)
DIGITS = CharacterPool(PoolId.DIGITS, string.digits)
SYMBOLS = CharacterPool(PoolId.SYMBOLS, "!@#$%^&*()-_=+[]{}|;:,.<>?/~")

POOL_ORDER: Tuple[PoolId, ...] = (PoolId.UPPER, PoolId.LOWER, PoolId.DIGITS, PoolId.SYMBOLS)
POOLS = {p.pool_id: p for p in (UPPER, LOWER, DIGITS, SYMBOLS)}

# Visually confusable in common fonts
AMBIGUOUS: frozenset = frozenset("0Ol1I|B8S5")


@dataclass(frozen=True)
class PoolSet:
    """Filtered, non-empty pools plus their concatenated alphabet."""

    pools: Tuple[CharacterPool, ...]
    alphabet: str

    @property
    def alphabet_size(self) -> int:
        return len(self.alphabet)

    @property
    def pool_ids(self) -> Tuple[PoolId, ...]:
        return tuple(p.pool_id for p in self.pools)


def build_pools(
    enabled: Iterable[PoolId],
    exclude_ambiguous: bool = False,
    ambiguous: AbstractSet[str] = AMBIGUOUS,
) -> PoolSet:
    """
    Assemble the enabled pools, optionally filtered by `ambiguous`.

    Pools left empty by filtering are dropped.

    Raises
    NoPoolSelectedError if `enabled` is empty.
    EmptyAfterFilteringError if every enabled pool was filtered away.
    """
    try:
        wanted = {PoolId(p) for p in enabled}
    except ValueError as exc:
        raise InvalidArgumentError(str(exc)) from exc
    if not wanted:
        raise NoPoolSelectedError("no character type selected")

    selected = [POOLS[pid] for pid in POOL_ORDER if pid in wanted]
    if exclude_ambiguous:
        selected = [p.without(ambiguous) for p in selected]

    pools = tuple(p for p in selected if len(p) > 0)
    if not pools:
        raise EmptyAfterFilteringError("no characters remain after filtering")

    if len(pools) < len(selected):
        logger.debug(
            "dropped %d pool(s) emptied by ambiguity filter",
            len(selected) - len(pools),
        )

    return PoolSet(pools=pools, alphabet="".join(p.chars for p in pools))


def build_pools_for(config) -> PoolSet:
    """`build_pools` driven by a PasswordConfig (its pools and ambiguous set)."""
    return build_pools(config.pools, config.exclude_ambiguous, ambiguous=config.ambiguous)


__all__ = [
    "AMBIGUOUS",
    "CharacterPool",
    "DIGITS",
    "LOWER",
    "POOLS",
    "POOL_ORDER",
    "PoolId",
    "PoolSet",
    "SYMBOLS",
    "UPPER",
    "build_pools",
    "build_pools_for",
]
