"""
DAG (Directed Acyclic Graph) utilities over index-addressed nodes.

A graph is given as an adjacency list: children[i] holds the indices
node i points to. Indices are positions in a flat node list.

Functions:
    parents(children)          - Reverse adjacency list
    topological_order(children) - Kahn's algorithm, stable on index order
"""

from collections import deque
from collections.abc import Sequence


def parents(children: Sequence[Sequence[int]]) -> list[list[int]]:
    """
    Returns the reverse adjacency list.

    parents(children)[j] lists every i with j in children[i], in increasing
    order of i. An edge repeated in children[i] is reported once.
    """
    result: list[list[int]] = [[] for _ in children]
    for parent, targets in enumerate(children):
        for child in dict.fromkeys(targets):
            result[child].append(parent)
    return result


def topological_order(children: Sequence[Sequence[int]]) -> list[int]:
    """
    Returns node indices ordered so parents come before children.

    Uses Kahn's algorithm. Among nodes that become available at the same
    time, lower indices come first, which makes the order deterministic.

    Args:
        children: Graph as adjacency list (node -> indices it points to).

    Returns:
        List of all node indices in topological order.

    Raises:
        ValueError: If the graph contains a cycle.
    """
    in_degree = [0] * len(children)
    for targets in children:
        for child in dict.fromkeys(targets):
            in_degree[child] += 1

    queue = deque(index for index, degree in enumerate(in_degree) if degree == 0)
    order: list[int] = []

    while queue:
        node = queue.popleft()
        order.append(node)

        for child in dict.fromkeys(children[node]):
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    if len(order) != len(children):
        raise ValueError("Graph contains a cycle")

    return order
