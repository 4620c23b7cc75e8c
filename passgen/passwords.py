"""
passwords.py

Aim:
1) Assemble passwords from filtered character pools with an unbiased sampler.
2) Optionally guarantee one character from every enabled pool.
3) Shuffle the result so guaranteed characters carry no positional pattern.
4) Report the Shannon entropy and strength category of what was produced.

Note:
- Every index comes from `sampler.UniformSampler.uniform_int`, which uses
  masked rejection sampling under the hood.
- Entropy = length * log2(alphabet_size), computed over the combined
  alphabet actually used.

Quick start
>>> from passgen.passwords import generate, make_password
>>> make_password(16)
# 16 chars from all four pools
>>> result = generate()
>>> result.entropy_bits, result.strength.label
(130, 'Uncrackable')

Custom configuration:
>>> from passgen.config import PasswordConfig
>>> cfg = PasswordConfig.from_flags(12, symbols=False, exclude_ambiguous=True)
>>> PasswordGenerator(config=cfg).passwords(count=5)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from .config import DEFAULT_CONFIG, PasswordConfig
from .errors import GuaranteeLengthMismatchError, InvalidArgumentError
from .pools import PoolId, PoolSet, build_pools_for
from .sampler import UniformSampler, default_sampler
from .strength import Strength, estimate_entropy, strength_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedPassword:
    """One generated password together with its strength estimate."""

    password: str = field(repr=False)
    entropy_bits: int
    strength: Strength
    alphabet_size: int
    pools: Tuple[PoolId, ...]

    def __str__(self) -> str:
        return self.password

    def __len__(self) -> int:
        return len(self.password)


#Assembly
def assemble(
    pool_set: PoolSet,
    length: int,
    guarantee: bool,
    sampler: Optional[UniformSampler] = None,
) -> List[str]:
    """
    Build the shuffled character sequence for one password.

    How it works

    1) If `guarantee`, draw one character from each pool (builder order).
    2) Fill the remaining positions independently from the combined alphabet.
    3) Fisher-Yates shuffle the whole sequence.

    Step 3 is what removes the positional bias of step 1.
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidArgumentError(f"length must be an integer, got {type(length).__name__}")
    if length <= 0:
        raise InvalidArgumentError("length must be positive")
    if guarantee and length < len(pool_set.pools):
        raise GuaranteeLengthMismatchError(
            f"length {length} cannot hold one character from each of "
            f"{len(pool_set.pools)} pools"
        )

    sampler = sampler or default_sampler()

    chars: List[str] = []
    if guarantee:
        for pool in pool_set.pools:
            chars.append(sampler.choice(pool.chars))

    alphabet = pool_set.alphabet
    for _ in range(length - len(chars)):
        chars.append(alphabet[sampler.uniform_int(len(alphabet))])

    return sampler.shuffle(chars)


#Password generator
@dataclass
class PasswordGenerator:
    """
    Generate passwords for a fixed configuration.

    Parameters

    config : PasswordConfig, default=DEFAULT_CONFIG
    sampler : UniformSampler, optional
        Source of unbiased indices. Defaults to the module's shared sampler.
    """

    config: PasswordConfig = DEFAULT_CONFIG
    sampler: Optional[UniformSampler] = None

    def __post_init__(self) -> None:
        if self.sampler is None:
            self.sampler = default_sampler()

    def generate(self) -> GeneratedPassword:
        """Create one password; raises a GenerationError on bad configuration."""
        cfg = self.config
        pool_set = build_pools_for(cfg)
        chars = assemble(pool_set, cfg.length, cfg.guarantee_each_type, self.sampler)

        bits = estimate_entropy(len(chars), pool_set.alphabet_size)
        strength = strength_for(bits)
        logger.debug(
            "generated %d-char password from %d pool(s): %d bits (%s)",
            len(chars),
            len(pool_set.pools),
            bits,
            strength.label,
        )
        return GeneratedPassword(
            password="".join(chars),
            entropy_bits=bits,
            strength=strength,
            alphabet_size=pool_set.alphabet_size,
            pools=pool_set.pool_ids,
        )

    def passwords(self, count: int) -> List[GeneratedPassword]:
        """Create `count` independent passwords."""
        if count < 0:
            raise InvalidArgumentError("count must be non-negative")
        return [self.generate() for _ in range(count)]


#Convenience helpers
def generate(
    config: Optional[PasswordConfig] = None,
    sampler: Optional[UniformSampler] = None,
) -> GeneratedPassword:
    """One-shot generation without creating a generator instance."""
    return PasswordGenerator(config=config or DEFAULT_CONFIG, sampler=sampler).generate()


def make_password(length: int, **flags) -> str:
    """Just the password string; `flags` as for `PasswordConfig.from_flags`."""
    return generate(PasswordConfig.from_flags(length, **flags)).password


__all__ = [
    "GeneratedPassword",
    "PasswordGenerator",
    "assemble",
    "generate",
    "make_password",
]


# Tiny demo when run directly
if __name__ == "__main__":
    result = generate()
    print("Password:", result.password)
    print("Entropy (bits) ~", result.entropy_bits, f"({result.strength})")
