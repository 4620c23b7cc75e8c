"""
csprng.py

Aim:
1) Wrap the operating system CSPRNG (`os.urandom`) behind a tiny interface.
2) Hand out randomness as numpy `uint32` words, the unit the sampler consumes.
3) Fail loudly when no secure source exists. There is no fallback.

Quick start

>>> import numpy as np
>>> from passgen.csprng import EntropySource
>>> src = EntropySource()
>>> buf = np.zeros(4, dtype=np.uint32)
>>> src.fill(buf)                # 4 fresh 32-bit words, in place
>>> src.words(8)                 # new array of 8 words
"""

from __future__ import annotations

import logging
import os

import numpy as np

from .errors import EntropySourceError, InvalidArgumentError

logger = logging.getLogger(__name__)

WORD_DTYPE = np.uint32
WORD_BITS = 32


class EntropySource:
    """
    Source of cryptographically secure 32-bit words.

    `fill` writes into a caller-owned buffer so the sampler can reuse one
    allocation per refill. `os.urandom` is safe to call from several
    threads at once, so instances need no locking of their own.
    """

    def _random_bytes(self, n_bytes: int) -> bytes:
        try:
            return os.urandom(n_bytes)
        except (NotImplementedError, OSError) as exc:
            logger.critical("OS CSPRNG unavailable: %s", exc)
            raise EntropySourceError(
                "No cryptographically secure random source is available."
            ) from exc

    #public API
    def fill(self, buffer: np.ndarray) -> np.ndarray:
        """
        Fill `buffer` (dtype uint32) in place with secure random words.

        Returns the same buffer.
        """
        if not isinstance(buffer, np.ndarray) or buffer.dtype != WORD_DTYPE:
            raise InvalidArgumentError("buffer must be a numpy uint32 array")
        if buffer.size == 0:
            return buffer

        raw = self._random_bytes(buffer.nbytes)
        buffer[...] = np.frombuffer(raw, dtype=WORD_DTYPE).reshape(buffer.shape)
        return buffer

    def words(self, n_words: int) -> np.ndarray:
        """Return a new array of `n_words` secure random words."""
        if n_words < 0:
            raise InvalidArgumentError("n_words must be non-negative")
        return self.fill(np.empty(n_words, dtype=WORD_DTYPE))


__all__ = [
    "EntropySource",
    "WORD_BITS",
    "WORD_DTYPE",
]
