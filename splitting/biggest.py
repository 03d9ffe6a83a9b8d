"""
Greedy splitting by largest intersection.

Repeatedly finds the longest group of elements shared by at least two node
rests, moves it into a new node and starts over, until no element occurs in
more than one rest. Depths are assigned in a final pass.

Complexity (n=nodes, m=rest length, P=passes):
- Unordered comparison: O(P × n² × m) with hashing per pair
- Sorted comparison: O(P × n² × m) merges, no per-pair hashing

Enumeration order, which decides ties, is fixed:
1. Occurrence counts from highest to lowest (count-1 elements never start a group)
2. Inside a count, elements by first occurrence, scanning rests in node order
3. Pairs of rests in classification order
The first intersection reaching the maximal length wins.
"""

import functools
import logging
from collections import Counter
from collections.abc import Hashable, Sequence
from typing import Generic, TypeVar

from utils.algorithms.sequences import (
    IntersectionFunction,
    comparator_intersection,
    contains_all,
    intersect_sorted,
    intersect_unordered,
    remove_all,
)

from .adapters import convert_sets_and_split
from .depth import assign_depths
from .types import Comparator, SequenceNode, Sequences, SetNode, Sets

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class BiggestIntersectionsSplitter(Generic[T]):
    """
    Pulls the biggest intersections of sequences out into their own nodes.

    Works on any hashable elements. Supplying an ordering lets every pairwise
    intersection run as a linear merge over sorted rests, which dominates the
    running time on large inputs.

    Example:
        >>> splitter = BiggestIntersectionsSplitter(sort=True)
        >>> nodes = splitter.split_sequences([[1, 2, 3], [2, 3, 4]])
        >>> [node.rest for node in nodes]
        [[1], [4], [2, 3]]
    """

    def __init__(self, sort: bool | Comparator[T] = False) -> None:
        """
        Args:
            sort: False compares elements without any ordering. True sorts every
                rest in natural order. A comparator sorts every rest with it and
                is also used to decide equality during intersections; it must
                agree with `==`.
        """
        self.sort = sort
        if sort is True:
            self._intersection: IntersectionFunction[T] = intersect_sorted
        elif sort is False:
            self._intersection = intersect_unordered
        else:
            self._intersection = comparator_intersection(sort)

    def split_sets(self, sets: Sets[T]) -> list[SetNode[T]]:
        """Splits a family of sets, running on their sequence form."""
        return convert_sets_and_split(sets, self.split_sequences)

    def split_sequences(self, sequences: Sequences[T]) -> list[SequenceNode[T]]:
        """
        Splits a family of sequences.

        Args:
            sequences: The input sequences. They are not modified.

        Returns:
            The root nodes in input order followed by the generated nodes in
            creation order.
        """
        nodes: list[SequenceNode[T]] = [
            SequenceNode(sequence, self._prepare(sequence)) for sequence in sequences
        ]

        passes = 0
        while self._split_pass(nodes):
            passes += 1

        assign_depths(nodes)
        logger.debug(
            f"Split {len(sequences)} sequences into {len(nodes)} nodes in {passes} passes"
        )
        return nodes

    def _prepare(self, sequence: Sequence[T]) -> list[T]:
        if self.sort is True:
            return sorted(sequence)  # type: ignore[type-var]
        if self.sort is False:
            return list(sequence)
        return sorted(sequence, key=functools.cmp_to_key(self.sort))

    def _split_pass(self, nodes: list[SequenceNode[T]]) -> bool:
        """
        Extracts the longest intersection found among the current rests.

        Returns:
            True if a node was extracted, False once the fixpoint is reached.
        """
        element_count = Counter(element for node in nodes for element in node.rest)
        if not element_count or max(element_count.values()) == 1:
            return False

        elements_by_count: dict[int, list[T]] = {}
        for element, count in element_count.items():
            elements_by_count.setdefault(count, []).append(element)

        # Elements found in a single rest can never be part of an intersection
        single_elements = set(elements_by_count.get(1, ()))
        unclassified: list[list[T]] = [
            [element for element in node.rest if element not in single_elements]
            for node in nodes
        ]

        longest_intersection: list[T] = []
        classified: list[list[T]] = []

        for count in sorted(elements_by_count, reverse=True):
            if count == 1 or not unclassified:
                break
            for element in elements_by_count[count]:
                containing: list[list[T]] = []
                remaining: list[list[T]] = []
                for rest in unclassified:
                    # Rests not longer than the best intersection cannot beat it
                    if len(rest) > len(longest_intersection):
                        if element in rest:
                            containing.append(rest)
                        else:
                            remaining.append(rest)

                intersection = self._longest_intersection(
                    classified, containing, len(longest_intersection)
                )
                if len(intersection) > len(longest_intersection):
                    longest_intersection = intersection

                classified.extend(containing)
                unclassified = remaining
                if not unclassified:
                    break

        if not longest_intersection:
            return False

        self._extract(nodes, longest_intersection)
        return True

    def _longest_intersection(
        self,
        classified: list[list[T]],
        containing: list[list[T]],
        longest: int,
    ) -> list[T]:
        """
        Longest intersection of a newly classified rest with any later newly
        classified rest or any previously classified rest, if longer than
        `longest`.
        """
        candidates = containing + classified
        longest_intersection: list[T] = []
        for i, rest in enumerate(containing):
            for other in candidates[i + 1 :]:
                intersection = self._intersection(rest, other)
                if len(intersection) > longest:
                    longest = len(intersection)
                    longest_intersection = intersection
        return longest_intersection

    def _extract(self, nodes: list[SequenceNode[T]], elements: list[T]) -> None:
        """Moves `elements` out of every rest holding all of them into a new node."""
        new_index = len(nodes)
        new_node = SequenceNode(list(elements), list(elements), depth=1)

        participants = 0
        for node in nodes:
            if contains_all(node.rest, elements):
                node.rest = remove_all(node.rest, elements)
                node.imports.append(new_index)
                participants += 1

        assert participants >= 2, "An intersection is held by at least two rests"
        nodes.append(new_node)
        logger.debug(
            f"Extracted node {new_index} with {len(elements)} elements "
            f"shared by {participants} nodes"
        )
