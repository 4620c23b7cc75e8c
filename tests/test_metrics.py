from __future__ import annotations

import math

import pytest

from passgen.errors import InvalidArgumentError
from passgen.metrics import (
    audit_characters,
    audit_sampler,
    audit_shuffle,
    character_histogram,
    chi_square_uniform,
    counts_to_vector,
    kl_from_uniform,
    outcome_histogram,
    permutation_histogram,
    permutation_index,
)
from passgen.pools import PoolId, build_pools


class TestHistograms:
    def test_outcome_histogram_ignores_out_of_range(self):
        assert outcome_histogram([0, 1, 1, 5, -1], 3) == {0: 1, 1: 2}

    def test_counts_to_vector(self):
        assert counts_to_vector({2: 4, 0: 1}, 3).tolist() == [1.0, 0.0, 4.0]

    def test_character_histogram(self):
        assert character_histogram(["abca", "zz"], "abc") == {0: 2, 1: 1, 2: 1}


class TestPermutations:
    def test_identity_and_reverse(self):
        assert permutation_index([0, 1, 2]) == 0
        assert permutation_index([2, 1, 0]) == 5

    def test_ranks_are_a_bijection(self):
        from itertools import permutations

        ranks = {permutation_index(p) for p in permutations(range(4))}
        assert ranks == set(range(math.factorial(4)))

    def test_rejects_non_permutation(self):
        with pytest.raises(InvalidArgumentError):
            permutation_index([0, 0, 1])

    def test_histogram(self):
        assert permutation_histogram([[0, 1], [1, 0], [1, 0]], 2) == {0: 1, 1: 2}

    def test_histogram_wrong_length(self):
        with pytest.raises(InvalidArgumentError):
            permutation_histogram([[0, 1, 2]], 2)


class TestChiSquare:
    def test_known_statistic(self):
        res = chi_square_uniform({0: 102, 1: 98}, support_size=2)
        assert res.stat == pytest.approx(0.08)
        assert res.df == 1
        assert res.expected == [100.0, 100.0]
        assert 0.7 < res.pvalue < 0.8

    def test_infers_support(self):
        assert chi_square_uniform({0: 5, 1: 5, 2: 5}).df == 2

    def test_detects_modulo_bias(self):
        # reducing 2-bit values with % 3 favors 0
        counts = outcome_histogram([x % 3 for x in range(4)] * 1000, 3)
        assert chi_square_uniform(counts, support_size=3).pvalue < 1e-6

    def test_empty(self):
        with pytest.raises(InvalidArgumentError):
            chi_square_uniform({}, support_size=4)


class TestKL:
    def test_flat_is_zero(self):
        assert kl_from_uniform({0: 25, 1: 25, 2: 25, 3: 25}, 4) == pytest.approx(0.0, abs=1e-9)

    def test_single_outcome_is_log2_support(self):
        assert kl_from_uniform({0: 100}, 4) == pytest.approx(2.0, abs=1e-6)

    def test_positive_when_skewed(self):
        assert kl_from_uniform({0: 90, 1: 10}, 2) > 0

    def test_empty(self):
        with pytest.raises(InvalidArgumentError):
            kl_from_uniform({}, 4)


class TestAudits:
    def test_sampler(self, sampler):
        res = audit_sampler(90, trials=45_000, sampler=sampler)
        assert res.chi_square.df == 89
        assert res.chi_square.pvalue > 1e-4
        assert sum(res.counts.values()) == res.trials == 45_000
        assert res.kl_bits < 0.01

    def test_expected_counts_match_histogram_total(self, sampler):
        res = audit_sampler(6, trials=600, sampler=sampler)
        assert res.expected_counts() == [100.0] * 6
        assert sum(res.expected_counts()) == sum(res.counts.values())

    def test_shuffle(self, sampler):
        res = audit_shuffle(3, trials=6000, sampler=sampler)
        assert res.support_size == 6
        assert res.chi_square.df == 5
        assert res.chi_square.pvalue > 1e-4

    def test_characters(self, sampler):
        ps = build_pools(list(PoolId))
        res = audit_characters(ps, 16, 3000, sampler=sampler)
        assert res.support_size == 90
        assert res.trials == 16 * 3000
        assert sum(res.counts.values()) == res.trials
        assert res.chi_square.pvalue > 1e-4

    def test_characters_bad_count(self, sampler):
        with pytest.raises(InvalidArgumentError):
            audit_characters(build_pools(list(PoolId)), 16, 0, sampler=sampler)

    def test_bad_trials(self, sampler):
        with pytest.raises(InvalidArgumentError):
            audit_sampler(10, trials=0, sampler=sampler)
