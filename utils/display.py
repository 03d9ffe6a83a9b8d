from collections.abc import Sequence
from dataclasses import fields

from metrics import Metric
from splitting import Node


def format_collection(collection) -> str:
    if isinstance(collection, (set, frozenset)):
        return "{" + ", ".join(map(repr, collection)) + "}"
    return "[" + ", ".join(map(repr, collection)) + "]"


def format_node(index: int, node: Node) -> str:
    kind = "root" if node.depth == 0 else f"depth {node.depth}"
    return (
        f"Node n°{index} ({kind}): rest {format_collection(node.rest)}, "
        f"imports {node.imports}"
    )


def display_nodes(nodes: Sequence[Node]):
    for index, node in enumerate(nodes):
        print(format_node(index, node))


def display_metric(metric: Metric):
    print("Metrics: ")
    for field in fields(metric):
        name, value = field.name, getattr(metric, field.name)
        if isinstance(value, float):
            print(f"{name}: {value:.3f}")
        else:
            print(f"{name}: {value}")
