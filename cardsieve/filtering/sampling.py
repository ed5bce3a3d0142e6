"""
Random Sort: Shuffled Reservoir Sample, Memoized per Collection.

A collection shown in random order must keep the same order while the
visitor pages through it. The first request for a collection id shuffles
the first `reservoir_size` cards (Fisher-Yates), reservoir-samples
`sample_size` of them, and stores the sample under the id.

INVARIANTS:
- Cache hit returns the stored sample, whatever cards/sizes are passed
- Sample length is min(sample_size, reservoir_size, len(cards))
- Entries are never invalidated automatically; the owner calls
  clear() or invalidate()

A collection id must therefore identify one card set for the lifetime of the
cache. Reusing an id for different cards returns the stale sample.
"""

import logging
import random
from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from threading import Lock
from typing import TypeVar

from cardsieve.models.card import Card

logger = logging.getLogger(__name__)

T = TypeVar("T")


def get_random(rng: random.Random, start: int, end: int) -> int:
    """Random integer in [start, end)."""
    return int(rng.random() * (end - start)) + start


def fisher_yates_shuffle(items: list[T], rng: random.Random) -> list[T]:
    """Shuffle ``items`` in place and return it."""
    current_index = len(items)
    while current_index != 0:
        random_index = get_random(rng, 0, current_index)
        current_index -= 1
        items[current_index], items[random_index] = items[random_index], items[current_index]
    return items


def reservoir_sample(stream: Sequence[T], sample_size: int, rng: random.Random) -> list[T]:
    """
    Uniform sample of ``sample_size`` items from ``stream`` in one pass.

    The first ``sample_size`` items seed the reservoir. Item ``i`` (0-based)
    afterwards draws ``j`` from [0, i] and replaces slot ``j`` when
    ``j < sample_size``.
    """
    reservoir: list[T] = []
    for i, value in enumerate(stream):
        if len(reservoir) < sample_size:
            reservoir.append(value)
        else:
            j = get_random(rng, 0, i + 1)
            if j < sample_size:
                reservoir[j] = value
    return reservoir


@dataclass
class SamplingCache:
    """
    Thread-safe store of random samples keyed by collection id.

    Construct one per session (or per process) and clear it to reshuffle.
    The lock covers lookup, computation and store, so concurrent requests
    for one id all see the same sample.
    """

    rng: random.Random = field(default_factory=random.Random)

    _entries: dict[Hashable, list[Card]] = field(default_factory=dict)
    _lock: Lock = field(default_factory=Lock)

    def random_sort(
        self,
        cards: Sequence[Card],
        collection_id: Hashable,
        sample_size: int,
        reservoir_size: int,
    ) -> list[Card]:
        """
        Randomly ordered sample of cards for a collection.

        Args:
            cards: Cards to sample from
            collection_id: Id of the collection the cards belong to
            sample_size: Number of cards in the sample
            reservoir_size: Number of leading cards eligible for the sample

        Returns:
            A copy of the cached sample for ``collection_id``.
        """
        with self._lock:
            sample = self._entries.get(collection_id)
            if sample is None:
                stream = fisher_yates_shuffle(list(cards[: max(reservoir_size, 0)]), self.rng)
                sample = reservoir_sample(stream, max(sample_size, 0), self.rng)
                self._entries[collection_id] = sample
                logger.info(
                    "sampling_cache_miss",
                    extra={
                        "collection_id": collection_id,
                        "cards": len(cards),
                        "reservoir_size": reservoir_size,
                        "sample_size": len(sample),
                    },
                )
            return list(sample)

    def invalidate(self, collection_id: Hashable) -> bool:
        """Drop one collection's sample. Returns whether it was cached."""
        with self._lock:
            return self._entries.pop(collection_id, None) is not None

    def clear(self) -> None:
        """Drop every cached sample."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, collection_id: Hashable) -> bool:
        with self._lock:
            return collection_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Process-wide cache used by the HTTP layer
_sampling_cache: SamplingCache | None = None
_sampling_cache_lock = Lock()


def get_sampling_cache() -> SamplingCache:
    """Get the process-wide sampling cache, creating it on first use."""
    global _sampling_cache
    with _sampling_cache_lock:
        if _sampling_cache is None:
            _sampling_cache = SamplingCache()
        return _sampling_cache


def reset_sampling_cache() -> None:
    """Discard the process-wide sampling cache (for testing and reshuffles)."""
    global _sampling_cache
    with _sampling_cache_lock:
        _sampling_cache = None
