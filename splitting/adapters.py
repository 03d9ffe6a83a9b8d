"""
Conversion between set-shaped and sequence-shaped splitting.

A splitter working on sequences can be run on sets (and the other way
around) by converting the input family, splitting, and translating the
resulting nodes back. Imports and depths are positions and integers, so they
carry over unchanged; only collections and rests are converted.

Root nodes always get the caller's original collection back.
"""

from collections.abc import Hashable
from typing import TypeVar

from .types import (
    SequenceNode,
    Sequences,
    SequenceSplitFunction,
    SetNode,
    Sets,
    SetSplitFunction,
)

T = TypeVar("T", bound=Hashable)


def sets_to_sequences(sets: Sets[T]) -> list[list[T]]:
    """One list per set, in the set's iteration order."""
    return [list(members) for members in sets]


def sequences_to_sets(sequences: Sequences[T]) -> list[set[T]]:
    """One set per sequence. Duplicate occurrences collapse."""
    return [set(sequence) for sequence in sequences]


def _first_occurrences(sequences: Sequences[T]) -> dict[T, int]:
    """Rank of each element by its first occurrence across the sequences."""
    rank: dict[T, int] = {}
    for sequence in sequences:
        for element in sequence:
            rank.setdefault(element, len(rank))
    return rank


def sequence_nodes_to_set_nodes(
    nodes: list[SequenceNode[T]], sets: Sets[T]
) -> list[SetNode[T]]:
    """
    Translates the result of a sequence splitter back to set nodes.

    Args:
        nodes: Nodes produced from `sets_to_sequences(sets)`.
        sets: The original sets, giving the collections of the root nodes.
    """
    set_nodes: list[SetNode[T]] = []
    for index, node in enumerate(nodes):
        collection = sets[index] if index < len(sets) else set(node.collection)
        set_nodes.append(
            SetNode(collection, set(node.rest), list(node.imports), node.depth)
        )
    return set_nodes


def set_nodes_to_sequence_nodes(
    nodes: list[SetNode[T]], sequences: Sequences[T]
) -> list[SequenceNode[T]]:
    """
    Translates the result of a set splitter back to sequence nodes.

    The rest of a root keeps the order of its sequence. Repeated occurrences
    of an element, which the set splitter could not see, stay in the rest of
    their root, so reconstructing a root still gives back its sequence as a
    multiset. Generated nodes list their elements by first occurrence across
    all sequences.

    Args:
        nodes: Nodes produced from `sequences_to_sets(sequences)`.
        sequences: The original sequences, giving the collections of the roots.
    """
    rank = _first_occurrences(sequences)
    sequence_nodes: list[SequenceNode[T]] = []
    for index, node in enumerate(nodes):
        if index < len(sequences):
            collection = sequences[index]
            seen: set[T] = set()
            rest: list[T] = []
            for element in collection:
                if element in node.rest or element in seen:
                    rest.append(element)
                seen.add(element)
            sequence_nodes.append(
                SequenceNode(collection, rest, list(node.imports), node.depth)
            )
        else:
            sequence_nodes.append(
                SequenceNode(
                    sorted(node.collection, key=rank.__getitem__),
                    sorted(node.rest, key=rank.__getitem__),
                    list(node.imports),
                    node.depth,
                )
            )
    return sequence_nodes


def convert_sets_and_split(
    sets: Sets[T], split_sequences: SequenceSplitFunction[T]
) -> list[SetNode[T]]:
    """Runs a sequence splitter on a family of sets."""
    sequence_nodes = split_sequences(sets_to_sequences(sets))
    return sequence_nodes_to_set_nodes(sequence_nodes, sets)


def convert_sequences_and_split(
    sequences: Sequences[T], split_sets: SetSplitFunction[T]
) -> list[SequenceNode[T]]:
    """Runs a set splitter on a family of sequences."""
    set_nodes = split_sets(sequences_to_sets(sequences))
    return set_nodes_to_sequence_nodes(set_nodes, sequences)
