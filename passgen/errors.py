"""
errors.py

Error taxonomy for password generation.

Everything a caller can recover from derives from `GenerationError`.
`EntropySourceError` does not: a missing CSPRNG is fatal for the process,
no password may ever be produced without one.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for recoverable generation failures."""


class InvalidArgumentError(GenerationError, ValueError):
    """An argument is outside its allowed range (e.g. max <= 0, length too short)."""


class NoPoolSelectedError(GenerationError):
    """No character type selected."""


class EmptyAfterFilteringError(GenerationError):
    """No characters remain after filtering."""


class GuaranteeLengthMismatchError(GenerationError):
    """Length too small to seed one character per enabled pool."""


class EntropySourceError(RuntimeError):
    """The operating system cannot provide cryptographically secure randomness."""


__all__ = [
    "GenerationError",
    "InvalidArgumentError",
    "NoPoolSelectedError",
    "EmptyAfterFilteringError",
    "GuaranteeLengthMismatchError",
    "EntropySourceError",
]
