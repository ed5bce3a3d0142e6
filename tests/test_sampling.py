"""
Tests for the random sort pipeline.

INVARIANTS:
- Cache hit returns the stored sample, whatever cards/sizes are passed
- Sample length is min(sample_size, reservoir_size, len(cards))
- Entries only go away through clear() / invalidate()
"""

import itertools
import random
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from cardsieve.filtering.sampling import (
    SamplingCache,
    fisher_yates_shuffle,
    get_random,
    get_sampling_cache,
    reservoir_sample,
    reset_sampling_cache,
)


class FixedRandom(random.Random):
    """Random source that always returns the same float."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


def _cards(count: int) -> list[dict]:
    return [{"id": f"card-{i}"} for i in range(count)]


class TestGetRandom:
    def test_lower_bound_inclusive(self) -> None:
        assert get_random(FixedRandom(0.0), 3, 10) == 3

    def test_upper_bound_exclusive(self) -> None:
        assert get_random(FixedRandom(0.9999), 0, 10) == 9


class TestFisherYatesShuffle:
    def test_is_a_permutation(self, rng: random.Random) -> None:
        items = list(range(20))

        shuffled = fisher_yates_shuffle(list(items), rng)

        assert sorted(shuffled) == items

    def test_shuffles_in_place(self, rng: random.Random) -> None:
        items = [1, 2, 3]

        assert fisher_yates_shuffle(items, rng) is items

    def test_swap_sequence(self) -> None:
        # Always drawing index 0 rotates the front element to the back
        assert fisher_yates_shuffle([1, 2, 3, 4], FixedRandom(0.0)) == [2, 3, 4, 1]

    def test_empty(self, rng: random.Random) -> None:
        assert fisher_yates_shuffle([], rng) == []

    def test_every_permutation_reachable(self) -> None:
        rng = random.Random(42)
        counts = Counter(tuple(fisher_yates_shuffle([0, 1, 2], rng)) for _ in range(3000))

        assert set(counts) == set(itertools.permutations([0, 1, 2]))
        assert all(400 < count < 600 for count in counts.values())


class TestReservoirSample:
    def test_first_items_seed_the_reservoir(self) -> None:
        # Draws land at the top of [0, i], never inside the reservoir
        assert reservoir_sample(["a", "b", "c", "d", "e"], 2, FixedRandom(0.9999)) == ["a", "b"]

    def test_replacement_slot(self) -> None:
        # Draws of 0 overwrite slot 0 with each later item
        assert reservoir_sample(["a", "b", "c", "d", "e"], 2, FixedRandom(0.0)) == ["e", "b"]

    def test_sample_larger_than_stream(self, rng: random.Random) -> None:
        assert reservoir_sample(["a", "b"], 5, rng) == ["a", "b"]

    def test_zero_sample(self, rng: random.Random) -> None:
        assert reservoir_sample(["a", "b"], 0, rng) == []


class TestSamplingCache:
    @pytest.mark.parametrize(
        ("count", "sample_size", "reservoir_size"),
        [(10, 3, 5), (10, 5, 3), (2, 5, 8), (0, 3, 3), (10, 0, 10), (10, 4, 0)],
    )
    def test_sample_length(
        self, rng: random.Random, count: int, sample_size: int, reservoir_size: int
    ) -> None:
        cache = SamplingCache(rng=rng)

        result = cache.random_sort(_cards(count), "c", sample_size, reservoir_size)

        assert len(result) == min(sample_size, reservoir_size, count)

    def test_sample_drawn_from_reservoir_prefix(self, rng: random.Random) -> None:
        cards = _cards(10)
        cache = SamplingCache(rng=rng)

        result = cache.random_sort(cards, 1, 3, 3)

        assert sorted(card["id"] for card in result) == ["card-0", "card-1", "card-2"]

    def test_no_duplicates(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)

        result = cache.random_sort(_cards(50), 1, 20, 50)

        assert len({card["id"] for card in result}) == 20

    def test_same_id_returns_cached_sample(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)

        first = cache.random_sort(_cards(10), 42, 4, 10)
        second = cache.random_sort(_cards(3), 42, 1, 1)

        assert second == first
        assert len(second) == 4

    def test_ids_are_independent(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)

        cache.random_sort(_cards(10), "a", 4, 10)
        other = cache.random_sort(_cards(2), "b", 4, 10)

        assert len(other) == 2
        assert len(cache) == 2
        assert "a" in cache and "b" in cache

    def test_returned_list_is_a_copy(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)

        first = cache.random_sort(_cards(5), 1, 5, 5)
        first.clear()

        assert len(cache.random_sort(_cards(5), 1, 5, 5)) == 5

    def test_does_not_reorder_input(self, rng: random.Random) -> None:
        cards = _cards(10)
        before = list(cards)

        SamplingCache(rng=rng).random_sort(cards, 1, 5, 10)

        assert cards == before

    def test_invalidate_recomputes(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)
        cache.random_sort(_cards(10), 1, 4, 10)

        assert cache.invalidate(1) is True
        assert cache.invalidate(1) is False
        assert 1 not in cache
        assert len(cache.random_sort(_cards(2), 1, 4, 10)) == 2

    def test_clear_drops_everything(self, rng: random.Random) -> None:
        cache = SamplingCache(rng=rng)
        cache.random_sort(_cards(3), 1, 2, 3)
        cache.random_sort(_cards(3), 2, 2, 3)

        cache.clear()

        assert len(cache) == 0

    def test_seeded_caches_agree(self) -> None:
        first = SamplingCache(rng=random.Random(99)).random_sort(_cards(30), 1, 10, 30)
        second = SamplingCache(rng=random.Random(99)).random_sort(_cards(30), 1, 10, 30)

        assert first == second

    def test_concurrent_callers_share_one_sample(self) -> None:
        cache = SamplingCache(rng=random.Random(5))
        cards = _cards(40)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: cache.random_sort(cards, "shared", 10, 40), range(32)))

        assert all(result == results[0] for result in results)
        assert len(cache) == 1


class TestProcessWideCache:
    def test_same_instance_until_reset(self) -> None:
        cache = get_sampling_cache()

        assert get_sampling_cache() is cache

        reset_sampling_cache()

        assert get_sampling_cache() is not cache
