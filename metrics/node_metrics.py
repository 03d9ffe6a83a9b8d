"""
Structural metrics of a split node list.

The walk from a node follows its imports recursively. A node imported along
several paths is visited once per path, so the counts describe the cost of
expanding the node back into its collection.

While walking, the rests of every visited node are collected and checked
against the collection of the starting node: a split is only valid if it
gives back exactly what went in.
"""

import logging
from collections import Counter
from collections.abc import Hashable, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from splitting.types import Node

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


class ReconstructionError(Exception):
    """Raised when the imports of a node do not give back its collection."""

    pass


@dataclass(frozen=True, slots=True)
class NodeMetric:
    """
    Attributes:
        max_depth: Longest import path from the node.
        leaves: Visited nodes below the start that import nothing.
        imports: Import edges followed.
        nodes: Visited nodes, the start included.
        avg_depth: Mean path length to the leaves, 0.0 without leaves.
    """

    max_depth: int
    leaves: int
    imports: int
    nodes: int
    avg_depth: float


@dataclass(frozen=True, slots=True)
class Metric:
    """Summary over the root nodes of a node list."""

    max_depth: int
    avg_max_depth: float
    avg_depth: float
    avg_leaves: float
    avg_imports: float
    avg_nodes: float
    generated_nodes: int
    root_nodes: int
    elements_count: int
    unique_elements: int


class NodeMetrics(Generic[T]):
    """
    Computes metrics for a single node or for a whole node list.

    Example:
        >>> from splitting import split_intersections_shallow
        >>> nodes = split_intersections_shallow([{1, 2}, {2, 3}])
        >>> NodeMetrics().node_metrics(nodes).generated_nodes
        1
    """

    def node_metrics(self, nodes: Sequence[Node[T]]) -> Metric:
        """
        Aggregates the metrics of every root node.

        Root nodes are the nodes at depth 0, every other node counts as
        generated. Averages are taken over the roots and are 0.0 when there
        are none.

        Raises:
            ReconstructionError: If a root cannot be rebuilt from its imports.
        """
        roots = [index for index, node in enumerate(nodes) if node.depth == 0]
        generated_nodes = len(nodes) - len(roots)

        elements_count = 0
        unique: set[T] = set()
        for index in roots:
            collection = nodes[index].collection
            elements_count += len(collection)
            unique.update(collection)

        per_root = [self.node_metric(nodes, index) for index in roots]

        if per_root:
            max_depths = np.array([metric.max_depth for metric in per_root])
            table = np.array(
                [
                    [metric.avg_depth, metric.leaves, metric.imports, metric.nodes]
                    for metric in per_root
                ],
                dtype=float,
            )
            avg_depth, avg_leaves, avg_imports, avg_nodes = table.mean(axis=0)
            max_depth = int(max_depths.max())
            avg_max_depth = float(max_depths.mean())
        else:
            avg_depth = avg_leaves = avg_imports = avg_nodes = 0.0
            max_depth = 0
            avg_max_depth = 0.0

        logger.debug(
            f"Metrics over {len(roots)} roots and {generated_nodes} generated nodes"
        )
        return Metric(
            max_depth=max_depth,
            avg_max_depth=avg_max_depth,
            avg_depth=float(avg_depth),
            avg_leaves=float(avg_leaves),
            avg_imports=float(avg_imports),
            avg_nodes=float(avg_nodes),
            generated_nodes=generated_nodes,
            root_nodes=len(roots),
            elements_count=elements_count,
            unique_elements=len(unique),
        )

    def node_metric(self, nodes: Sequence[Node[T]], index: int) -> NodeMetric:
        """
        Walks the imports of `nodes[index]` and measures the walk.

        Args:
            nodes: The full node list, as returned by a splitter.
            index: Position of the node to measure.

        Raises:
            ReconstructionError: If the rests met along the walk are not
                exactly the node's collection (as a set for set nodes, as a
                multiset for sequence nodes).
        """
        counts = {"max_depth": 0, "leaves": 0, "imports": 0, "nodes": 0, "depth_sum": 0}
        elements: list[T] = []
        self._walk(nodes, index, 0, counts, elements)

        collection = nodes[index].collection
        if isinstance(collection, AbstractSet):
            valid = set(elements) == set(collection)
        else:
            valid = Counter(elements) == Counter(collection)
        if not valid:
            raise ReconstructionError(
                f"Node {index} does not reconstruct from its imports"
            )

        leaves = counts["leaves"]
        return NodeMetric(
            max_depth=counts["max_depth"],
            leaves=leaves,
            imports=counts["imports"],
            nodes=counts["nodes"],
            avg_depth=counts["depth_sum"] / leaves if leaves else 0.0,
        )

    def _walk(
        self,
        nodes: Sequence[Node[T]],
        index: int,
        depth: int,
        counts: dict[str, int],
        elements: list[T],
    ) -> None:
        node = nodes[index]
        counts["nodes"] += 1
        counts["max_depth"] = max(counts["max_depth"], depth)
        elements.extend(node.rest)

        if not node.imports:
            if depth > 0:
                counts["leaves"] += 1
                counts["depth_sum"] += depth
            return

        counts["imports"] += len(node.imports)
        for child in node.imports:
            self._walk(nodes, child, depth + 1, counts, elements)
