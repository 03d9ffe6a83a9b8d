"""
Functions for working with sequences as multisets.

Intersections come in three flavours, matching how the sequences are
ordered:
- intersect_unordered: no ordering, exact comparison
- intersect_sorted: natural ordering, two-pointer merge
- comparator_intersection: caller ordering, two-pointer merge

All of them are multiset intersections: an element occurring twice in both
inputs occurs twice in the result.
"""

from collections import Counter
from collections.abc import Callable, Hashable, Sequence
from typing import Any, TypeVar

T = TypeVar("T", bound=Hashable)

type Comparator[T] = Callable[[T, T], int]
type IntersectionFunction[T] = Callable[[Sequence[T], Sequence[T]], list[T]]


def intersect_unordered(first: Sequence[T], second: Sequence[T]) -> list[T]:
    """
    Multiset intersection of two unordered sequences.

    The shorter sequence is scanned (the second one on equal lengths), so the
    result follows its order.
    """
    shorter, longer = (first, second) if len(first) < len(second) else (second, first)
    available = Counter(longer)
    intersection: list[T] = []
    for element in shorter:
        if available[element] > 0:
            available[element] -= 1
            intersection.append(element)
    return intersection


def intersect_sorted(first: Sequence[Any], second: Sequence[Any]) -> list[Any]:
    """Multiset intersection of two sequences sorted in natural order."""
    intersection = []
    i = j = 0
    while i < len(first) and j < len(second):
        value1, value2 = first[i], second[j]
        if value1 < value2:
            i += 1
        elif value2 < value1:
            j += 1
        else:
            intersection.append(value1)
            i += 1
            j += 1
    return intersection


def comparator_intersection(compare: Comparator[T]) -> IntersectionFunction[T]:
    """
    Builds a multiset intersection over sequences sorted with `compare`.

    Two elements are considered equal when compare returns 0; the element of
    the first sequence is kept.
    """

    def intersection_function(first: Sequence[T], second: Sequence[T]) -> list[T]:
        intersection: list[T] = []
        i = j = 0
        while i < len(first) and j < len(second):
            ordering = compare(first[i], second[j])
            if ordering < 0:
                i += 1
            elif ordering > 0:
                j += 1
            else:
                intersection.append(first[i])
                i += 1
                j += 1
        return intersection

    return intersection_function


def contains_all(sequence: Sequence[T], items: Sequence[T]) -> bool:
    """True when `sequence` holds every item at least as often as `items` does."""
    available = Counter(sequence)
    return all(available[element] >= count for element, count in Counter(items).items())


def remove_all(sequence: Sequence[T], items: Sequence[T]) -> list[T]:
    """
    Removes from `sequence` one occurrence per item, keeping the order.

    Earliest occurrences are removed first, so a sorted sequence stays sorted.
    """
    pending = Counter(items)
    remaining: list[T] = []
    for element in sequence:
        if pending[element] > 0:
            pending[element] -= 1
        else:
            remaining.append(element)
    return remaining
