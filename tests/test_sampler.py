from __future__ import annotations

import math
import threading

import pytest

from passgen.errors import InvalidArgumentError
from passgen.metrics import chi_square_uniform, outcome_histogram, permutation_histogram
from passgen.sampler import MAX_BOUND, UniformSampler, mask_for, shuffle, uniform_int, uniform_ints

P_MIN = 1e-4


class TestMask:
    @pytest.mark.parametrize(
        "n, mask",
        [(1, 0), (2, 1), (3, 3), (4, 3), (5, 7), (8, 7), (9, 15), (90, 127), (2**32, 2**32 - 1)],
    )
    def test_smallest_all_ones_mask(self, n, mask):
        assert mask_for(n) == mask

    @pytest.mark.parametrize("n", [2, 3, 7, 26, 91, 1000, 2**31 - 1])
    def test_mask_below_twice_n(self, n):
        assert n - 1 <= mask_for(n) < 2 * n


class TestRejection:
    def test_out_of_range_words_are_redrawn(self, scripted):
        # n=5 -> mask 7: 7, 6 and 5 are rejected, 3 accepted
        s = scripted([7, 6, 5, 3])
        assert s.uniform_int(5) == 3
        assert s.source.words_left == []

    def test_high_bits_are_masked_off(self, scripted):
        s = scripted([0xFFFFFFF8 | 2])
        assert s.uniform_int(3) == 2

    def test_n_equal_one_needs_no_draw(self, scripted):
        s = scripted([])
        assert s.uniform_int(1) == 0

    def test_full_word_range(self, scripted):
        s = scripted([0xFFFFFFFF])
        assert s.uniform_int(MAX_BOUND) == 0xFFFFFFFF


class TestArguments:
    @pytest.mark.parametrize("n", [0, -1, -(2**40)])
    def test_non_positive(self, sampler, n):
        with pytest.raises(InvalidArgumentError, match="positive"):
            sampler.uniform_int(n)

    def test_too_large(self, sampler):
        with pytest.raises(InvalidArgumentError):
            sampler.uniform_int(MAX_BOUND + 1)

    @pytest.mark.parametrize("n", [2.5, "10", None, True])
    def test_non_integer(self, sampler, n):
        with pytest.raises(InvalidArgumentError):
            sampler.uniform_int(n)

    def test_negative_size(self, sampler):
        with pytest.raises(InvalidArgumentError):
            sampler.uniform_ints(10, size=-1)

    def test_bad_refill(self):
        with pytest.raises(InvalidArgumentError):
            UniformSampler(refill_words=0)

    def test_choice_from_empty(self, sampler):
        with pytest.raises(InvalidArgumentError):
            sampler.choice("")


class TestUniformity:
    @pytest.mark.parametrize("n", [1, 2, 3, 10, 90, 1000, 2**20 + 1, 2**31 - 1])
    def test_values_in_range(self, sampler, n):
        xs = sampler.uniform_ints(n, size=500)
        assert all(0 <= x < n for x in xs)

    @pytest.mark.parametrize("n", [3, 10, 26, 91])
    def test_chi_square(self, sampler, n):
        xs = sampler.uniform_ints(n, size=2000 * n)
        res = chi_square_uniform(outcome_histogram(xs, n), support_size=n)
        assert res.pvalue > P_MIN

    def test_module_helpers(self):
        assert 0 <= uniform_int(7) < 7
        assert len(uniform_ints(7, 5)) == 5


class TestShuffle:
    def test_is_permutation(self, sampler):
        items = list(range(50))
        sampler.shuffle(items)
        assert sorted(items) == list(range(50))

    @pytest.mark.parametrize("items", [[], ["x"]])
    def test_short_sequences_untouched(self, scripted, items):
        s = scripted([])
        assert s.shuffle(list(items)) == items

    def test_fisher_yates_swaps(self, scripted):
        # i=2: j=uniform_int(3) -> 0 ; i=1: j=uniform_int(2) -> 1
        s = scripted([0, 1])
        assert s.shuffle(["a", "b", "c"]) == ["c", "b", "a"]

    def test_all_orderings_equally_likely(self, sampler):
        n = 4
        trials = 24 * 1000
        perms = (sampler.shuffle(list(range(n))) for _ in range(trials))
        res = chi_square_uniform(permutation_histogram(perms, n), support_size=math.factorial(n))
        assert res.pvalue > P_MIN

    def test_module_shuffle(self):
        items = list("abcdef")
        assert shuffle(items) is items


def test_shared_sampler_across_threads(sampler):
    out = []

    def work():
        out.extend(sampler.uniform_ints(50, size=1000))

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(out) == 4000
    assert all(0 <= x < 50 for x in out)
