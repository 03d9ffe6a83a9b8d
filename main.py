"""
Split a family of collections and report the resulting node list.

Usage:
    python main.py [--file FAMILY.json] [--splitter shallow|biggest|weighted]
                   [--sets] [--debug]

Without --file the built-in example family is used.
"""

import logging
from collections.abc import Sequence
from enum import Enum

from constants import DEBUG, LOG_FORMAT
from metrics import Metric, NodeMetrics
from splitting import (
    BiggestIntersectionsSplitter,
    Node,
    WeightedIntersectionsSplitter,
    split_intersections_shallow,
)
from utils.display import display_metric, display_nodes
from utils.loader import load_family

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format=LOG_FORMAT,
)
logger = logging.getLogger(__name__)


class SplitterKind(Enum):
    """Available splitters."""

    SHALLOW = "shallow"  # One singleton node per shared element
    BIGGEST = "biggest"  # Greedy largest intersection first
    WEIGHTED = "weighted"  # Weighted incremental extraction


EXAMPLE_FAMILY: list[list[str]] = [
    ["a", "b", "c", "d", "e"],
    ["b", "c", "d", "f"],
    ["c", "d", "e", "f", "g"],
    ["a", "g"],
]


def split_family(
    family: Sequence[Sequence], kind: SplitterKind, as_sets: bool = False
) -> list[Node]:
    """Runs the chosen splitter on the family, as sets or as sequences."""
    collections = [set(collection) for collection in family] if as_sets else family

    match kind:
        case SplitterKind.SHALLOW:
            return split_intersections_shallow(collections)
        case SplitterKind.BIGGEST:
            splitter = BiggestIntersectionsSplitter()
        case SplitterKind.WEIGHTED:
            splitter = WeightedIntersectionsSplitter()

    if as_sets:
        return splitter.split_sets(collections)
    return splitter.split_sequences(collections)


def run(
    family: Sequence[Sequence], kind: SplitterKind, as_sets: bool = False
) -> tuple[list[Node], Metric]:
    logger.info(
        f"Splitting {len(family)} collections with the {kind.value} splitter"
    )
    nodes = split_family(family, kind, as_sets)
    metric = NodeMetrics().node_metrics(nodes)
    return nodes, metric


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Extract shared elements of a family of collections"
    )
    parser.add_argument(
        "--file", default=None, help="JSON family under the data directory"
    )
    parser.add_argument(
        "--splitter",
        choices=[kind.value for kind in SplitterKind],
        default=SplitterKind.WEIGHTED.value,
        help="Splitter to use",
    )
    parser.add_argument(
        "--sets", action="store_true", help="Treat collections as sets"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    family = load_family(args.file) if args.file else EXAMPLE_FAMILY
    nodes, metric = run(family, SplitterKind(args.splitter), as_sets=args.sets)

    display_nodes(nodes)
    print()
    display_metric(metric)
