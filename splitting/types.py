"""
Type definitions for intersection splitting.

A splitter turns a family of collections into a flat list of nodes. The
first nodes of the list stand for the input collections (root nodes), the
following ones hold the element groups extracted from them (generated
nodes). Nodes refer to each other by their position in that list.
"""

from collections.abc import Callable, Hashable, Iterable
from collections.abc import Sequence as AbstractSequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass(slots=True)
class SetNode(Generic[T]):
    """
    A node of the extraction DAG over sets.

    Attributes:
        collection: The input set for root nodes (the caller's object, never
            modified) or the set created by an extraction.
        rest: Elements of `collection` not delegated to any import.
        imports: Positions, in the node list, of the nodes holding the other
            elements of `collection`.
        depth: Longest distance to a root node. Roots have depth 0.
    """

    collection: AbstractSet[T]
    rest: set[T]
    imports: list[int] = field(default_factory=list)
    depth: int = 0


@dataclass(slots=True)
class SequenceNode(Generic[T]):
    """
    A node of the extraction DAG over sequences.

    Same fields as SetNode. `rest` keeps the order of `collection` and may
    hold duplicates.
    """

    collection: AbstractSequence[T]
    rest: list[T]
    imports: list[int] = field(default_factory=list)
    depth: int = 0


type Node[T] = SetNode[T] | SequenceNode[T]

type Sets[T] = AbstractSequence[AbstractSet[T]]
type Sequences[T] = AbstractSequence[AbstractSequence[T]]

type SetSplitFunction[T] = Callable[[Sets[T]], list[SetNode[T]]]
type SequenceSplitFunction[T] = Callable[[Sequences[T]], list[SequenceNode[T]]]

# Weight of a candidate intersection: (intersecting elements, intersecting sets) -> weight
type WeightFunction = Callable[[int, int], float]

# Sort function as used by functools.cmp_to_key
type Comparator[T] = Callable[[T, T], int]

# Bijection between element groups and hashable keys
type Joiner[T, K] = Callable[[list[T]], K]
type Splitter[T, K] = Callable[[K], Iterable[T]]


__all__ = [
    "SetNode",
    "SequenceNode",
    "Node",
    "Sets",
    "Sequences",
    "SetSplitFunction",
    "SequenceSplitFunction",
    "WeightFunction",
    "Comparator",
    "Joiner",
    "Splitter",
]
