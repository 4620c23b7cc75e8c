"""
sampler.py

Purpose/Aim:
1) Keeps a small cache of secure 32-bit words drawn from the EntropySource.
2) Provides unbiased integers in [0, n) using masked rejection sampling.
3) Provides an unbiased in-place Fisher-Yates shuffle built on top of (2).

Why this shape?

- Reducing a random word with `% n` favors small values whenever n does not
  divide 2^32 (modulo bias). Masking down to the smallest all-ones value
  covering n - 1 and rejecting values >= n keeps every outcome equally likely.
- The mask is always < 2n, so more than half of all draws are accepted and
  the expected number of draws per sample is below 2.
- A word cache avoids one syscall per sample.

Quick start

>>> from passgen.sampler import uniform_int, shuffle
>>> uniform_int(10)              # unbiased integer 0..9
>>> shuffle(list("abcd"))        # uniformly random permutation, in place

If you want your own source (e.g. in tests):
>>> from passgen.sampler import UniformSampler
>>> s = UniformSampler(refill_words=1024)
>>> s.uniform_ints(6, size=100)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, MutableSequence, Optional, Sequence, TypeVar
import threading

import numpy as np

from .csprng import EntropySource, WORD_BITS, WORD_DTYPE
from .errors import InvalidArgumentError

T = TypeVar("T")

MAX_BOUND = 1 << WORD_BITS


def mask_for(n: int) -> int:
    """Smallest bitmask of the form 2^k - 1 that is >= n - 1."""
    return (1 << (n - 1).bit_length()) - 1


#Word cache & unbiased integers
@dataclass
class UniformSampler:
    """
    Unbiased integer sampler over a refillable cache of secure words.

    Parameters

    source : EntropySource, optional
        Where words come from. Defaults to the OS CSPRNG.
    refill_words : int, default=256
        How many words to pull each time the cache runs dry.
    """

    source: Optional[EntropySource] = None
    refill_words: int = 256
    _buf: np.ndarray = field(init=False, repr=False, compare=False)
    _pos: int = field(init=False, repr=False, compare=False, default=0)
    _lock: threading.Lock = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.source is None:
            self.source = EntropySource()
        if self.refill_words <= 0:
            raise InvalidArgumentError("refill_words must be positive")
        self._buf = np.empty(self.refill_words, dtype=WORD_DTYPE)
        self._pos = self.refill_words  # empty until first draw
        self._lock = threading.Lock()

    #internal
    def _next_word(self) -> int:
        with self._lock:
            if self._pos >= len(self._buf):
                self.source.fill(self._buf)
                self._pos = 0
            word = int(self._buf[self._pos])
            self._pos += 1
        return word

    #public API
    def uniform_int(self, n: int) -> int:
        """
        Unbiased integer in [0, n) via rejection sampling.

        - mask = smallest 2^k - 1 covering n - 1
        - draw a word, keep only the masked bits
        - accept if < n, otherwise draw again
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidArgumentError(f"n must be an integer, got {type(n).__name__}")
        n = int(n)
        if n <= 0:
            raise InvalidArgumentError("n must be positive")
        if n > MAX_BOUND:
            raise InvalidArgumentError(f"n must be <= 2**{WORD_BITS}")
        if n == 1:
            return 0

        mask = mask_for(n)
        while True:
            x = self._next_word() & mask
            if x < n:
                return x

    def uniform_ints(self, n: int, size: int) -> List[int]:
        """`size` many unbiased integers in [0, n)."""
        if size < 0:
            raise InvalidArgumentError("size must be non-negative")
        return [self.uniform_int(n) for _ in range(size)]

    def choice(self, seq: Sequence[T]) -> T:
        """Uniformly chosen element of a non-empty sequence."""
        if not seq:
            raise InvalidArgumentError("cannot choose from an empty sequence")
        return seq[self.uniform_int(len(seq))]

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """
        Fisher-Yates shuffle in place; every permutation is equally likely.

        Returns `items` for convenience.
        """
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform_int(i + 1)
            items[i], items[j] = items[j], items[i]
        return items


#Module-level convenience singleton
_default_sampler: Optional[UniformSampler] = None
_default_lock = threading.Lock()


def default_sampler() -> UniformSampler:
    """Lazily create (and reuse) a process-wide sampler."""
    global _default_sampler
    with _default_lock:
        if _default_sampler is None:
            _default_sampler = UniformSampler()
        return _default_sampler


def uniform_int(n: int) -> int:
    """Unbiased integer in [0, n) from the default sampler."""
    return default_sampler().uniform_int(n)


def uniform_ints(n: int, size: int) -> List[int]:
    """Unbiased integers in [0, n) from the default sampler."""
    return default_sampler().uniform_ints(n, size)


def shuffle(items: MutableSequence[T]) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place using the default sampler."""
    return default_sampler().shuffle(items)


__all__ = [
    "MAX_BOUND",
    "UniformSampler",
    "default_sampler",
    "mask_for",
    "shuffle",
    "uniform_int",
    "uniform_ints",
]


#Tiny smoke test when run directly
if __name__ == "__main__":
    xs = uniform_ints(10, size=5000)
    hist = np.bincount(xs, minlength=10)
    print("0..9 histogram:", hist.tolist())
