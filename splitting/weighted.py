"""
Weighted incremental splitting.

Keeps every pairwise intersection of the live sets in an OverlapIndex and
repeatedly extracts the intersection with the highest weight. After each
extraction only the intersections the extraction touched are recomputed:
those of the new node with every other set, and the pairs the index reports
as stale. Work per step is proportional to the number of sets touched
rather than to the square of the number of sets.

Steps of one extraction:
1. Select the highest weighted key (ties: secondary weight, then first inserted)
2. Collect the keys sharing elements with it and the sets behind them
3. Find the affected sets still holding every extracted element; their
   overlapping keys are collected too
4. Drop the key and the stale pairs from the index
5. Create the new node; participants and the sets of step 3 give the
   elements up and import it
6. Intersect the new node with every other set, and the stale pairs again
"""

import logging
from collections.abc import Callable, Hashable, Iterable
from typing import Generic, TypeVar

from utils.algorithms.sets import clone_set, intersect_sets, overlapping_pairs

from .adapters import convert_sequences_and_split
from .overlap_index import OverlapIndex
from .types import SequenceNode, Sequences, SetNode, Sets, WeightFunction
from .weights import elements_count, frozen_elements, frozen_key, sets_count

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)
K = TypeVar("K", bound=Hashable)


class WeightedIntersectionsSplitter(Generic[T, K]):
    """
    Pulls intersecting elements of sets out into their own nodes by weight.

    Intersections are used as dictionary keys through a bijection between
    element groups and hashable keys. The default bijection is
    frozenset / identity; any other pair must be exact inverses, which is
    not checked: colliding keys silently merge unrelated groups.

    Example:
        >>> splitter = WeightedIntersectionsSplitter()
        >>> nodes = splitter.split_sets([{1, 2, 3}, {2, 3, 4}])
        >>> [node.rest for node in nodes]
        [{1}, {4}, {2, 3}]
    """

    def __init__(
        self,
        join: Callable[[list[T]], K] = frozen_key,
        split: Callable[[K], Iterable[T]] = frozen_elements,
        primary_weight: WeightFunction = elements_count,
        secondary_weight: WeightFunction = sets_count,
    ) -> None:
        """
        Args:
            join: Maps a group of elements to a hashable key.
            split: Inverse of join.
            primary_weight: Ranks candidate intersections. Defaults to the
                number of elements.
            secondary_weight: Ranks candidates sharing the highest primary
                weight. Defaults to the number of sets holding them.
        """
        self.join = join
        self.split = split
        self.primary_weight = primary_weight
        self.secondary_weight = secondary_weight

    def split_sequences(self, sequences: Sequences[T]) -> list[SequenceNode[T]]:
        """Splits a family of sequences, running on their set form."""
        return convert_sequences_and_split(sequences, self.split_sets)

    def split_sets(self, sets: Sets[T]) -> list[SetNode[T]]:
        """
        Splits a family of sets.

        Args:
            sets: The input sets. They are not modified.

        Returns:
            The root nodes in input order followed by the generated nodes in
            creation order.
        """
        nodes: list[SetNode[T]] = [
            SetNode(members, clone_set(members)) for members in sets
        ]

        index: OverlapIndex[T, K] = OverlapIndex(
            self.join, self.split, self.primary_weight, self.secondary_weight
        )
        initial_pairs = overlapping_pairs([node.rest for node in nodes])
        index.populate(self._intersections(nodes, initial_pairs))

        while index:
            key, weight = index.select_max()
            extracted = index.elements[key]
            participants = dict.fromkeys(index.participants[key])
            affected_keys, affected_sets = index.affected_by(key)

            # Affected sets holding every extracted element give them up too,
            # so their own overlapping keys go stale as well
            delegated = [
                handle for handle in affected_sets if extracted <= nodes[handle].rest
            ]
            affected_keys.update(index.overlapping_keys(key, delegated))
            changed_sets = participants | dict.fromkeys(delegated)
            stale_pairs = index.invalidate(
                key, weight, changed_sets, affected_keys, affected_sets
            )

            new_index = len(nodes)
            depth = 1
            for handle in changed_sets:
                depth = self._delegate(nodes[handle], new_index, extracted, depth)

            nodes.append(SetNode(set(extracted), set(extracted), depth=depth))

            retested = [(handle, new_index) for handle in range(new_index)]
            for left, right, intersection in self._intersections(
                nodes, retested + stale_pairs
            ):
                index.insert(left, right, intersection)
            logger.debug(
                f"Extracted node {new_index} ({len(extracted)} elements, weight {weight}) "
                f"from {len(changed_sets)} sets, {len(affected_keys)} intersections touched"
            )

        logger.debug(f"Split {len(sets)} sets into {len(nodes)} nodes")
        return nodes

    @staticmethod
    def _intersections(
        nodes: list[SetNode[T]], pairs: Iterable[tuple[int, int]]
    ) -> Iterable[tuple[int, int, set[T]]]:
        """Yields (left, right, intersection) for the pairs whose rests intersect."""
        for left, right in pairs:
            intersection = intersect_sets(nodes[left].rest, nodes[right].rest)
            if intersection:
                yield left, right, intersection

    @staticmethod
    def _delegate(
        node: SetNode[T], new_index: int, extracted: frozenset[T], depth: int
    ) -> int:
        """
        Moves the extracted elements out of a node's rest into an import.

        Returns:
            The depth of the new node, raised to stay below this node.
        """
        assert extracted <= node.rest, "A delegating set holds every extracted element"
        node.rest -= extracted
        node.imports.append(new_index)
        return max(depth, node.depth + 1)
