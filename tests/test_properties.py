"""
Properties every splitter must hold on arbitrary families.

Families are drawn from a seeded generator so every run checks the same
inputs.
"""

import random
from collections import Counter

import pytest

from metrics import NodeMetrics
from splitting import (
    WEIGHT_FUNCTIONS,
    BiggestIntersectionsSplitter,
    WeightedIntersectionsSplitter,
    elements_count,
    sets_count,
    split_intersections_shallow,
)
from utils.algorithms.dag import topological_order


def random_families(
    seed: int, count: int = 12, max_size: int = 8, max_universe: int = 12
) -> list[list[list[int]]]:
    generator = random.Random(seed)
    families = []
    for _ in range(count):
        size = generator.randint(0, max_size)
        universe = generator.randint(3, max_universe)
        families.append(
            [
                [generator.randrange(universe) for _ in range(generator.randint(0, 8))]
                for _ in range(size)
            ]
        )
    return families


FAMILIES = random_families(seed=7) + random_families(
    seed=11, count=8, max_size=12, max_universe=15
)

SPLITTERS = {
    "shallow": lambda: split_intersections_shallow,
    "biggest": lambda: BiggestIntersectionsSplitter().split_sequences,
    "biggest_sorted": lambda: BiggestIntersectionsSplitter(sort=True).split_sequences,
    "weighted": lambda: WeightedIntersectionsSplitter().split_sequences,
}

SET_SPLITTERS = {
    "shallow": lambda: split_intersections_shallow,
    "biggest": lambda: BiggestIntersectionsSplitter().split_sets,
    "biggest_sorted": lambda: BiggestIntersectionsSplitter(sort=True).split_sets,
    "weighted": lambda: WeightedIntersectionsSplitter().split_sets,
}


def check_structure(nodes, roots: int):
    """Imports form a DAG and every edge goes at least one level deeper."""
    topological_order([node.imports for node in nodes])
    assert all(node.depth == 0 for node in nodes[:roots])
    assert all(node.depth > 0 for node in nodes[roots:])
    for node in nodes:
        for child in node.imports:
            assert nodes[child].depth >= node.depth + 1


def expanded(nodes, index: int) -> list:
    """Every element reached from a node, one entry per rest it sits in."""
    node = nodes[index]
    elements = list(node.rest)
    for child in node.imports:
        elements.extend(expanded(nodes, child))
    return elements


def check_disjoint_union(nodes, sets):
    """Each set is rebuilt from its imports without any element counted twice."""
    for index, members in enumerate(sets):
        elements = expanded(nodes, index)
        assert len(elements) == len(members)
        assert set(elements) == members


@pytest.mark.parametrize("name", SPLITTERS)
@pytest.mark.parametrize("family", FAMILIES)
class TestSequenceSplitters:
    def test_reconstruction(self, name, family):
        nodes = SPLITTERS[name]()(family)
        metric = NodeMetrics().node_metrics(nodes)
        assert metric.root_nodes == len(family)
        assert metric.elements_count == sum(len(sequence) for sequence in family)

    def test_structure(self, name, family):
        check_structure(SPLITTERS[name]()(family), len(family))


@pytest.mark.parametrize("family", FAMILIES)
class TestWeightedSequences:
    @pytest.mark.parametrize("weight", WEIGHT_FUNCTIONS)
    def test_primary_weight(self, family, weight):
        splitter = WeightedIntersectionsSplitter(primary_weight=WEIGHT_FUNCTIONS[weight])
        nodes = splitter.split_sequences(family)
        NodeMetrics().node_metrics(nodes)
        check_structure(nodes, len(family))

    @pytest.mark.parametrize("weight", WEIGHT_FUNCTIONS)
    def test_secondary_weight(self, family, weight):
        splitter = WeightedIntersectionsSplitter(
            primary_weight=sets_count, secondary_weight=WEIGHT_FUNCTIONS[weight]
        )
        nodes = splitter.split_sequences(family)
        NodeMetrics().node_metrics(nodes)
        check_structure(nodes, len(family))


@pytest.mark.parametrize("family", FAMILIES)
class TestSetSplitters:
    @pytest.mark.parametrize("name", SET_SPLITTERS)
    def test_disjoint_union(self, family, name):
        sets = [set(sequence) for sequence in family]
        nodes = SET_SPLITTERS[name]()(sets)
        NodeMetrics().node_metrics(nodes)
        check_structure(nodes, len(sets))
        check_disjoint_union(nodes, sets)

    @pytest.mark.parametrize("weight", WEIGHT_FUNCTIONS)
    def test_weighted(self, family, weight):
        sets = [set(sequence) for sequence in family]
        splitter = WeightedIntersectionsSplitter(primary_weight=WEIGHT_FUNCTIONS[weight])
        nodes = splitter.split_sets(sets)
        NodeMetrics().node_metrics(nodes)
        check_structure(nodes, len(sets))
        check_disjoint_union(nodes, sets)

    @pytest.mark.parametrize("weight", WEIGHT_FUNCTIONS)
    def test_weighted_secondary(self, family, weight):
        sets = [set(sequence) for sequence in family]
        splitter = WeightedIntersectionsSplitter(
            primary_weight=elements_count, secondary_weight=WEIGHT_FUNCTIONS[weight]
        )
        nodes = splitter.split_sets(sets)
        check_disjoint_union(nodes, sets)

    def test_biggest_fixpoint(self, family):
        nodes = BiggestIntersectionsSplitter().split_sequences(family)
        counts = Counter(element for node in nodes for element in set(node.rest))
        assert all(count == 1 for count in counts.values())
