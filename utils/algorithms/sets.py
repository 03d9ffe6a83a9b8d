"""
Functions for working with sets.
"""

from collections.abc import Hashable, Sequence, Set
from typing import TypeVar

import numpy as np
from scipy import sparse

T = TypeVar("T", bound=Hashable)


def clone_set(source: Set[T]) -> set[T]:
    """Returns a shallow copy: a new set holding the same element references."""
    return set(source)


def intersect_sets(first: Set[T], second: Set[T]) -> set[T]:
    """
    Intersection of two sets, scanning the smaller one against the larger.

    The result keeps the iteration order of the scanned set.
    """
    smaller, larger = (first, second) if len(first) <= len(second) else (second, first)
    return {element for element in smaller if element in larger}


def overlapping_pairs(sets: Sequence[Set[T]]) -> list[tuple[int, int]]:
    """
    Returns every index pair (i, j), i < j, whose sets share an element.

    Builds the sparse set/element incidence matrix A and reads the pairs off
    the strict upper triangle of A @ A.T, whose entries are the pairwise
    intersection sizes. Pairs are returned in lexicographic order, the order
    a nested i < j scan would visit them.
    """
    if len(sets) < 2:
        return []

    columns: dict[T, int] = {}
    rows: list[int] = []
    cols: list[int] = []
    for row, members in enumerate(sets):
        for element in members:
            rows.append(row)
            cols.append(columns.setdefault(element, len(columns)))

    if not columns:
        return []

    incidence = sparse.csr_matrix(
        (np.ones(len(rows), dtype=np.int64), (rows, cols)),
        shape=(len(sets), len(columns)),
    )
    overlaps = sparse.triu(incidence @ incidence.T, k=1).tocoo()

    return sorted(
        (int(i), int(j))
        for i, j, size in zip(overlaps.row, overlaps.col, overlaps.data)
        if size > 0
    )
