"""
Live index of pairwise intersections for the weighted splitter.

Sets are addressed by their handle (position in the node list) and
intersections by the hashable key the caller's join function gives them.
Four structures are kept in step:

    pairs         key -> participant pairs whose intersection is exactly key
    participants  key -> {handle: number of pairs of key involving handle}
    keys_by_set   handle -> keys the handle participates in
    buckets       primary weight -> keys currently holding that weight

Ordered dicts stand in for ordered sets everywhere, so ties always resolve
to the entry inserted first and a run is reproducible.

The weight of a key is primary_weight(len(elements), len(participants)).
Removing a participant only drops a key's set count once the participant
took part in no remaining pair of that key.
"""

import logging
import math
from collections.abc import Callable, Collection, Hashable, Iterable
from typing import Generic, TypeVar

from .types import WeightFunction

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)
K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)

type Pair = tuple[int, int]


def _add_to_group(mapping: dict[V, dict[K, None]], group: V, item: K) -> None:
    mapping.setdefault(group, {})[item] = None


def _discard_from_group(mapping: dict[V, dict[K, None]], group: V, item: K) -> None:
    """Removes item from its group, dropping the group along with its last item."""
    items = mapping[group]
    if len(items) > 1:
        del items[item]
    else:
        del mapping[group]


class OverlapIndex(Generic[T, K]):
    """
    Intersections between live sets, ranked by weight.

    Operations:
        populate(intersections)     - Bulk load the initial all-pairs intersections
        insert(left, right, elems)  - Register one more intersecting pair
        select_max()                - Highest weighted key (ties: secondary weight)
        affected_by(key)            - Keys and sets touched by extracting key
        overlapping_keys(key, hs)   - Keys of the sets hs sharing elements with key
        invalidate(...)             - Drop key and the pairs extraction makes stale
        remove_participant(key, h)  - Drop one pair's worth of h from key
    """

    def __init__(
        self,
        join: Callable[[list[T]], K],
        split: Callable[[K], Iterable[T]],
        primary_weight: WeightFunction,
        secondary_weight: WeightFunction,
    ) -> None:
        self._join = join
        self._split = split
        self._primary_weight = primary_weight
        self._secondary_weight = secondary_weight

        self.pairs: dict[K, list[Pair]] = {}
        self.participants: dict[K, dict[int, int]] = {}
        self.keys_by_set: dict[int, dict[K, None]] = {}
        self.buckets: dict[float, dict[K, None]] = {}
        self.elements: dict[K, frozenset[T]] = {}

    def __len__(self) -> int:
        return len(self.pairs)

    def __contains__(self, key: object) -> bool:
        return key in self.pairs

    def weight(self, key: K) -> float:
        """Current primary weight of a key."""
        return self._primary_weight(len(self.elements[key]), len(self.participants[key]))

    def populate(self, intersections: Iterable[tuple[int, int, Collection[T]]]) -> None:
        """
        Loads the initial intersections of an empty index.

        Args:
            intersections: (left, right, elements) for every pair of sets with
                a non-empty intersection, in scan order.
        """
        assert not self.pairs, "populate() expects an empty index"

        for left, right, elements in intersections:
            key = self._join(list(elements))
            self.pairs.setdefault(key, []).append((left, right))

        for key, pairs in self.pairs.items():
            participants: dict[int, int] = {}
            for left, right in pairs:
                participants[left] = participants.get(left, 0) + 1
                participants[right] = participants.get(right, 0) + 1
            self.participants[key] = participants
            self.elements[key] = frozenset(self._split(key))

        for key, participants in self.participants.items():
            for handle in participants:
                _add_to_group(self.keys_by_set, handle, key)

        for key in self.participants:
            _add_to_group(self.buckets, self.weight(key), key)

        logger.debug(
            f"Indexed {len(self.pairs)} intersections over {len(self.keys_by_set)} sets"
        )

    def insert(self, left: int, right: int, elements: Collection[T]) -> None:
        """Registers the non-empty intersection of the sets `left` and `right`."""
        key = self._join(list(elements))
        self.pairs.setdefault(key, []).append((left, right))

        participants = self.participants.get(key)
        if participants is None:
            participants = self.participants[key] = {}
            self.elements[key] = frozenset(self._split(key))
        else:
            _discard_from_group(self.buckets, self.weight(key), key)

        participants[left] = participants.get(left, 0) + 1
        participants[right] = participants.get(right, 0) + 1

        _add_to_group(self.buckets, self.weight(key), key)
        _add_to_group(self.keys_by_set, left, key)
        _add_to_group(self.keys_by_set, right, key)

    def select_max(self) -> tuple[K, float]:
        """
        Returns the key with the highest primary weight, and that weight.

        Ties are resolved by the secondary weight, computed from the live
        participant count. Remaining ties go to the key inserted first into
        the bucket.
        """
        highest_weight = max(self.buckets)
        candidates = self.buckets[highest_weight]
        selected = next(iter(candidates))

        if len(candidates) > 1:
            best_secondary = -math.inf
            for key in candidates:
                secondary = self._secondary_weight(
                    len(self.elements[key]), len(self.participants[key])
                )
                if secondary > best_secondary:
                    best_secondary, selected = secondary, key

        return selected, highest_weight

    def overlapping_keys(self, key: K, handles: Iterable[int]) -> dict[K, None]:
        """Keys other than `key` sharing an element with it, among the keys of `handles`."""
        extracted = self.elements[key]
        found: dict[K, None] = {}
        for handle in handles:
            for other in self.keys_by_set.get(handle, ()):
                if other != key and not extracted.isdisjoint(self.elements[other]):
                    found[other] = None
        return found

    def affected_by(self, key: K) -> tuple[dict[K, None], dict[int, None]]:
        """
        Finds what extracting `key` touches through its participants.

        Returns:
            The other keys sharing at least one element with `key` among the
            keys of its participants, and the sets taking part in those keys
            without being participants of `key` themselves.
        """
        participants = self.participants[key]
        affected_keys = self.overlapping_keys(key, participants)

        affected_sets: dict[int, None] = {}
        for other in affected_keys:
            for other_handle in self.participants[other]:
                if other_handle not in participants:
                    affected_sets[other_handle] = None

        return affected_keys, affected_sets

    def invalidate(
        self,
        key: K,
        weight: float,
        changed_sets: Collection[int],
        affected_keys: Iterable[K],
        affected_sets: Collection[int],
    ) -> list[Pair]:
        """
        Removes `key` and every pair its extraction makes stale.

        A pair of an affected key is stale when one of its sets gives up the
        extracted elements (`changed_sets`: the participants of `key` and the
        affected sets holding all of its elements), or when both of its sets
        are affected sets. `affected_keys` must cover every key of the
        changed sets that shares an element with `key`. Affected keys left
        without pairs disappear; the others move to the bucket of their new
        weight.

        Returns:
            The stale pairs, to be intersected again once the extraction is
            applied.
        """
        for handle in self.participants[key]:
            _discard_from_group(self.keys_by_set, handle, key)
        del self.pairs[key]
        del self.participants[key]
        del self.elements[key]
        _discard_from_group(self.buckets, weight, key)

        stale: list[Pair] = []
        for other in affected_keys:
            kept: list[Pair] = []
            for left, right in self.pairs[other]:
                if (
                    left in changed_sets
                    or right in changed_sets
                    or (left in affected_sets and right in affected_sets)
                ):
                    stale.append((left, right))
                    self.remove_participant(other, left)
                    self.remove_participant(other, right)
                else:
                    kept.append((left, right))

            if kept:
                self.pairs[other] = kept
            else:
                del self.pairs[other]

        return stale

    def remove_participant(self, key: K, handle: int) -> None:
        """
        Removes one pair's worth of `handle` from `key`.

        The set count, and thus the weight, of `key` only changes when
        `handle` has no pair of `key` left.
        """
        participants = self.participants[key]
        count = participants[handle]
        if count > 1:
            participants[handle] = count - 1
        else:
            element_count = len(self.elements[key])
            set_count = len(participants)
            _discard_from_group(
                self.buckets, self._primary_weight(element_count, set_count), key
            )
            if set_count > 1:
                _add_to_group(
                    self.buckets,
                    self._primary_weight(element_count, set_count - 1),
                    key,
                )
            _discard_from_group(self.keys_by_set, handle, key)
            del participants[handle]

        if not participants:
            del self.participants[key]
            del self.elements[key]
