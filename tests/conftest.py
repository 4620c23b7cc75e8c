from __future__ import annotations

from typing import Iterable, List

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from passgen.csprng import EntropySource
from passgen.sampler import UniformSampler


class ScriptedSource(EntropySource):
    """Hands out a fixed list of words, in order."""

    def __init__(self, words: Iterable[int]) -> None:
        self.words_left: List[int] = list(words)

    def fill(self, buffer: np.ndarray) -> np.ndarray:
        n = buffer.size
        if n > len(self.words_left):
            raise AssertionError("scripted source exhausted")
        buffer[...] = np.asarray(self.words_left[:n], dtype=np.uint32).reshape(buffer.shape)
        del self.words_left[:n]
        return buffer


@pytest.fixture
def scripted():
    """Factory: scripted(words) -> sampler reading one word per refill."""

    def make(words: Iterable[int]) -> UniformSampler:
        return UniformSampler(source=ScriptedSource(words), refill_words=1)

    return make


@pytest.fixture
def sampler() -> UniformSampler:
    return UniformSampler()
