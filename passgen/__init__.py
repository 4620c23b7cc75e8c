"""
Cryptographically strong password generator.
"""

from .config import DEFAULT_CONFIG, MIN_LENGTH, PasswordConfig, validate_length
from .csprng import EntropySource
from .errors import (
    EmptyAfterFilteringError,
    EntropySourceError,
    GenerationError,
    GuaranteeLengthMismatchError,
    InvalidArgumentError,
    NoPoolSelectedError,
)
from .history import SessionHistory
from .passwords import GeneratedPassword, PasswordGenerator, assemble, generate, make_password
from .pools import AMBIGUOUS, PoolId, PoolSet, build_pools
from .sampler import UniformSampler, shuffle, uniform_int
from .strength import Strength, estimate_entropy, estimate_entropy_bits, strength_for

__all__ = [
    "AMBIGUOUS",
    "DEFAULT_CONFIG",
    "EmptyAfterFilteringError",
    "EntropySource",
    "EntropySourceError",
    "GeneratedPassword",
    "GenerationError",
    "GuaranteeLengthMismatchError",
    "InvalidArgumentError",
    "MIN_LENGTH",
    "NoPoolSelectedError",
    "PasswordConfig",
    "PasswordGenerator",
    "PoolId",
    "PoolSet",
    "SessionHistory",
    "Strength",
    "UniformSampler",
    "assemble",
    "build_pools",
    "estimate_entropy",
    "estimate_entropy_bits",
    "generate",
    "make_password",
    "shuffle",
    "strength_for",
    "uniform_int",
    "validate_length",
]
