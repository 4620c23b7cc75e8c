"""
metrics.py

Statistical utilities for auditing the generator's randomness.

What this module does

- Builds histograms over integer outcomes, permutations and characters.
- Runs a Chi-square test against the uniform distribution.
- Measures how many bits the observed distribution diverges from uniform.
- Wraps the above into one-call audits of the sampler, the shuffler and
  the character frequencies of assembled passwords.

Design choices

- "Uniform" means: over all outcomes in the sample space you specify.
- Permutations of range(n) are ranked (Lehmer code) into [0, n!) so the
  shuffler can be tested with the same chi-square machinery.
- Divergence uses additive epsilon smoothing to avoid log(0).

Quick start

>>> from passgen.metrics import chi_square_uniform, audit_sampler
>>> counts = {0: 102, 1: 98}
>>> chi_square_uniform(counts, support_size=2)
ChiSquareResult(stat=0.08, df=1, pvalue=0.77..., expected=[100.0, 100.0])
>>> audit = audit_sampler(10, trials=10_000)
>>> audit.chi_square.pvalue, audit.kl_bits   # large p, tiny divergence

Dependencies

- numpy
- scipy (chi-square p-values)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
import logging
import math

import numpy as np
from scipy.stats import chisquare

from .errors import InvalidArgumentError
from .passwords import assemble
from .pools import PoolSet
from .sampler import UniformSampler, default_sampler

logger = logging.getLogger(__name__)


#Helpers: counts

def counts_to_vector(
    counts: Mapping[int, int],
    support_size: int,
) -> np.ndarray:
    """
    Dense vector of `counts` over 0..support_size-1; missing entries are 0.
    """
    v = np.zeros(support_size, dtype=float)
    for k, c in counts.items():
        if 0 <= k < support_size:
            v[k] = float(c)
    return v


def outcome_histogram(
    outcomes: Iterable[int],
    support_size: int,
) -> Dict[int, int]:
    """
    Make a histogram over integer outcomes in [0, support_size).

    Any outcome outside this range is ignored.
    """
    hist: Dict[int, int] = {}
    for x in outcomes:
        if 0 <= x < support_size:
            hist[x] = hist.get(x, 0) + 1
    return hist


def character_histogram(
    passwords: Iterable[str],
    alphabet: str,
) -> Dict[int, int]:
    """
    Count characters of `passwords` by their index in `alphabet`.

    Characters not in the alphabet are ignored.
    """
    index = {ch: i for i, ch in enumerate(alphabet)}
    hist: Dict[int, int] = {}
    for pw in passwords:
        for ch in pw:
            i = index.get(ch)
            if i is not None:
                hist[i] = hist.get(i, 0) + 1
    return hist


#Permutations

def permutation_index(perm: Sequence[int]) -> int:
    """
    Rank a permutation of range(n) into [0, n!) (Lehmer code).

    >>> permutation_index([0, 1, 2])
    0
    >>> permutation_index([2, 1, 0])
    5
    """
    n = len(perm)
    if sorted(perm) != list(range(n)):
        raise InvalidArgumentError("perm must be a permutation of range(n)")
    rank = 0
    for i, p in enumerate(perm):
        smaller_after = sum(1 for q in perm[i + 1:] if q < p)
        rank += smaller_after * math.factorial(n - 1 - i)
    return rank


def permutation_histogram(
    perms: Iterable[Sequence[int]],
    n: int,
) -> Dict[int, int]:
    """
    Histogram over [0, n!) of permutations of range(n), keyed by
    `permutation_index`. Every permutation must have length `n`.
    """
    hist: Dict[int, int] = {}
    for perm in perms:
        if len(perm) != n:
            raise InvalidArgumentError(f"expected a permutation of length {n}, got {len(perm)}")
        k = permutation_index(perm)
        hist[k] = hist.get(k, 0) + 1
    return hist


#Chi-square uniformity test

@dataclass
class ChiSquareResult:
    stat: float
    df: int
    pvalue: float
    expected: List[float]


def chi_square_uniform(
    counts: Mapping[int, int],
    support_size: Optional[int] = None,
) -> ChiSquareResult:
    """
    Chi-square goodness-of-fit against a uniform distribution.

    Parameters
    ----------
    counts : Mapping
        Outcome -> frequency (int).
    support_size : int, optional
        Total number of categories to test against.
        If omitted, we use max(counts)+1 as a heuristic.

    Returns

    ChiSquareResult(stat, df, pvalue, expected)

    Notes

    - df = (support_size - 1)
    """
    if support_size is None:
        if not counts:
            raise InvalidArgumentError("support_size could not be inferred; please pass it.")
        support_size = max(int(k) for k in counts.keys()) + 1
    if support_size < 2:
        raise InvalidArgumentError("support_size must be >= 2")

    observed = counts_to_vector(counts, support_size)
    total = observed.sum()
    if total <= 0:
        raise InvalidArgumentError("Empty counts supplied.")

    expected = np.ones(support_size, dtype=float) * (total / support_size)
    res = chisquare(f_obs=observed, f_exp=expected)

    return ChiSquareResult(
        stat=float(res.statistic),
        df=support_size - 1,
        pvalue=float(res.pvalue),
        expected=expected.tolist(),
    )


#Divergence from uniform

def kl_from_uniform(
    counts: Mapping[int, int],
    support_size: int,
    eps: float = 1e-12,
) -> float:
    """
    D_KL(observed || uniform) in bits.

    0 for a perfectly flat histogram; grows as mass concentrates on fewer
    outcomes, up to log2(support_size) when a single outcome takes it all.
    """
    observed = counts_to_vector(counts, support_size)
    total = observed.sum()
    if total <= 0:
        raise InvalidArgumentError("Empty counts supplied.")

    p = observed / total + eps
    p = p / p.sum()
    return float(np.sum(p * np.log2(p * support_size)))


#Audits

@dataclass
class AuditResult:
    """Outcome of one audit, including the histogram it was computed from."""

    support_size: int
    trials: int
    counts: Dict[int, int]
    chi_square: ChiSquareResult
    kl_bits: float

    def expected_counts(self) -> List[float]:
        return [self.trials / self.support_size] * self.support_size


def _audit(counts: Dict[int, int], support_size: int, trials: int, what: str) -> AuditResult:
    result = AuditResult(
        support_size=support_size,
        trials=trials,
        counts=counts,
        chi_square=chi_square_uniform(counts, support_size=support_size),
        kl_bits=kl_from_uniform(counts, support_size),
    )
    logger.info(
        "%s audit trials=%d: chi2=%.2f df=%d p=%.4f kl=%.2e bits",
        what, trials, result.chi_square.stat, result.chi_square.df,
        result.chi_square.pvalue, result.kl_bits,
    )
    return result


def audit_sampler(
    n: int,
    trials: int,
    sampler: Optional[UniformSampler] = None,
) -> AuditResult:
    """Draw `trials` integers in [0, n) and test them for uniformity."""
    if trials <= 0:
        raise InvalidArgumentError("trials must be positive")
    sampler = sampler or default_sampler()
    counts = outcome_histogram(sampler.uniform_ints(n, trials), n)
    return _audit(counts, n, trials, f"uniform_int({n})")


def audit_shuffle(
    n: int,
    trials: int,
    sampler: Optional[UniformSampler] = None,
) -> AuditResult:
    """Shuffle range(n) `trials` times and test the n! orderings for uniformity."""
    if n < 2:
        raise InvalidArgumentError("n must be >= 2")
    if trials <= 0:
        raise InvalidArgumentError("trials must be positive")
    sampler = sampler or default_sampler()
    perms = (sampler.shuffle(list(range(n))) for _ in range(trials))
    counts = permutation_histogram(perms, n)
    return _audit(counts, math.factorial(n), trials, f"shuffle(n={n})")


def audit_characters(
    pool_set: PoolSet,
    length: int,
    count: int,
    sampler: Optional[UniformSampler] = None,
) -> AuditResult:
    """
    Assemble `count` passwords of `length` without the per-type guarantee
    and test character frequencies over `pool_set.alphabet` for uniformity.

    The guarantee deliberately over-represents small pools, so it is off here.
    """
    if count <= 0:
        raise InvalidArgumentError("count must be positive")
    sampler = sampler or default_sampler()
    passwords = ("".join(assemble(pool_set, length, False, sampler)) for _ in range(count))
    counts = character_histogram(passwords, pool_set.alphabet)
    return _audit(counts, pool_set.alphabet_size, length * count, "characters")


__all__ = [
    "AuditResult",
    "ChiSquareResult",
    "audit_characters",
    "audit_sampler",
    "audit_shuffle",
    "character_histogram",
    "chi_square_uniform",
    "counts_to_vector",
    "kl_from_uniform",
    "outcome_histogram",
    "permutation_histogram",
    "permutation_index",
]
