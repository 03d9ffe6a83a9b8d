"""
Depth assignment for finished node lists.
"""

import logging
from collections.abc import Sequence

from utils.algorithms.dag import parents, topological_order

from .types import Node

logger = logging.getLogger(__name__)


def assign_depths(nodes: Sequence[Node]) -> None:
    """
    Sets the depth of every node that does not already carry depth 0.

    Nodes with depth 0 are the roots and keep it. Every other node gets
    1 + the maximum depth of the nodes importing it. Nodes are visited in
    topological order of the import graph, so importers are always resolved
    first.

    Raises:
        ValueError: If the import graph has a cycle, or if a non-root node is
            imported by nobody.
    """
    imports = [node.imports for node in nodes]
    importers = parents(imports)

    for index in topological_order(imports):
        node = nodes[index]
        if node.depth == 0:
            continue
        if not importers[index]:
            raise ValueError(f"Node {index} is not reachable from any root node")
        node.depth = 1 + max(nodes[parent].depth for parent in importers[index])

    logger.debug(f"Assigned depths to {len(nodes)} nodes")
