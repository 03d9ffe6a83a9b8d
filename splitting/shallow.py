"""
Shallow splitting: every shared element gets its own node.

An element is shared when it occurs in at least two input collections. Each
shared element is moved to a singleton node at depth 1 and every input
collection imports the singletons of its shared elements. Co-occurring
elements are never grouped, so the result is flat but can be large.

The pass is linear in the total number of elements and fully deterministic.
"""

import logging
from collections.abc import Hashable
from collections.abc import Sequence as AbstractSequence
from collections.abc import Set as AbstractSet
from typing import TypeVar

from .types import SequenceNode, Sequences, SetNode, Sets

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def _shared_elements(collections: AbstractSequence[AbstractSequence[T] | AbstractSet[T]]) -> list[T]:
    """
    Elements occurring in at least two collections.

    Ordered by the moment they become shared when scanning the collections
    in order.
    """
    owner: dict[T, int] = {}
    shared: dict[T, None] = {}
    for index, collection in enumerate(collections):
        for element in collection:
            first_owner = owner.setdefault(element, index)
            if first_owner != index:
                shared.setdefault(element)
    return list(shared)


def split_sets_shallow(sets: Sets[T]) -> list[SetNode[T]]:
    """Shallow split of a family of sets."""
    shared = _shared_elements(sets)
    generated_offset = len(sets)
    position = {element: generated_offset + i for i, element in enumerate(shared)}

    nodes: list[SetNode[T]] = []
    for collection in sets:
        rest: set[T] = set()
        imports: list[int] = []
        for element in collection:
            if element in position:
                imports.append(position[element])
            else:
                rest.add(element)
        nodes.append(SetNode(collection, rest, imports, depth=0))

    nodes.extend(SetNode({element}, {element}, depth=1) for element in shared)

    logger.debug(f"Shallow split of {len(sets)} sets: {len(shared)} shared elements")
    return nodes


def split_sequences_shallow(sequences: Sequences[T]) -> list[SequenceNode[T]]:
    """
    Shallow split of a family of sequences.

    Every occurrence of a shared element becomes one import, so a sequence
    holding a shared element twice imports its singleton twice. Duplicates of
    an element found in a single sequence stay in its rest.
    """
    shared = _shared_elements(sequences)
    generated_offset = len(sequences)
    position = {element: generated_offset + i for i, element in enumerate(shared)}

    nodes: list[SequenceNode[T]] = []
    for collection in sequences:
        rest: list[T] = []
        imports: list[int] = []
        for element in collection:
            if element in position:
                imports.append(position[element])
            else:
                rest.append(element)
        nodes.append(SequenceNode(collection, rest, imports, depth=0))

    nodes.extend(SequenceNode([element], [element], depth=1) for element in shared)

    logger.debug(
        f"Shallow split of {len(sequences)} sequences: {len(shared)} shared elements"
    )
    return nodes


def split_intersections_shallow(
    collections: Sets[T] | Sequences[T],
) -> list[SetNode[T]] | list[SequenceNode[T]]:
    """
    Splits every element shared by several collections into its own node.

    Dispatches on the shape of the collections: a family of sets gives
    SetNodes, a family of sequences gives SequenceNodes.

    Args:
        collections: The input collections, all sets or all sequences.

    Returns:
        The root nodes in input order followed by one singleton node per
        shared element.

    Raises:
        TypeError: If sets and sequences are mixed, or a collection is neither.
    """
    if not collections:
        return []

    if all(isinstance(collection, AbstractSet) for collection in collections):
        return split_sets_shallow(collections)  # type: ignore[arg-type]

    if all(
        isinstance(collection, AbstractSequence) and not isinstance(collection, str)
        for collection in collections
    ):
        return split_sequences_shallow(collections)  # type: ignore[arg-type]

    raise TypeError("Collections must be either all sets or all sequences")
