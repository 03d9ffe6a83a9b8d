"""Tests for splitting/depth.py and splitting/adapters.py"""

import pytest

from splitting import (
    SequenceNode,
    SetNode,
    assign_depths,
    convert_sequences_and_split,
    convert_sets_and_split,
    sequence_nodes_to_set_nodes,
    sequences_to_sets,
    set_nodes_to_sequence_nodes,
    sets_to_sequences,
    split_sequences_shallow,
    split_sets_shallow,
)


class TestAssignDepths:
    def test_longest_path(self):
        """A node imported by a root and by a depth-1 node ends at depth 2."""
        nodes = [
            SequenceNode([1, 2], [], [2, 3]),
            SequenceNode([1, 3], [3], [2]),
            SequenceNode([1, 2], [2], [3], depth=1),
            SequenceNode([1], [1], depth=1),
        ]
        assign_depths(nodes)
        assert [node.depth for node in nodes] == [0, 0, 1, 2]

    def test_roots_are_fixed(self):
        nodes = [SetNode({1}, {1}), SetNode({2}, {2})]
        assign_depths(nodes)
        assert [node.depth for node in nodes] == [0, 0]

    def test_unreachable_node(self):
        nodes = [SetNode({1}, {1}), SetNode({2}, {2}, depth=1)]
        with pytest.raises(ValueError, match="not reachable"):
            assign_depths(nodes)

    def test_cycle(self):
        nodes = [
            SetNode({1, 2}, set(), [1]),
            SetNode({1, 2}, {1}, [2], depth=1),
            SetNode({2}, {2}, [1], depth=1),
        ]
        with pytest.raises(ValueError, match="cycle"):
            assign_depths(nodes)

    def test_empty(self):
        assign_depths([])


class TestConversions:
    def test_sets_to_sequences(self):
        assert sets_to_sequences([{1}, set()]) == [[1], []]

    def test_sequences_to_sets(self):
        assert sequences_to_sets([[1, 1, 2], []]) == [{1, 2}, set()]


class TestNodeTranslation:
    def test_sequence_nodes_to_set_nodes(self):
        sets = [{1, 2}, {2, 3}]
        sequence_nodes = split_sequences_shallow(sets_to_sequences(sets))
        nodes = sequence_nodes_to_set_nodes(sequence_nodes, sets)

        assert nodes == [
            SetNode(sets[0], {1}, [2]),
            SetNode(sets[1], {3}, [2]),
            SetNode({2}, {2}, depth=1),
        ]
        assert nodes[0].collection is sets[0]

    def test_set_nodes_to_sequence_nodes(self):
        sequences = [["c", "a", "b", "c"], ["b", "a", "d"]]
        set_nodes = split_sets_shallow(sequences_to_sets(sequences))
        nodes = set_nodes_to_sequence_nodes(set_nodes, sequences)

        assert sorted(node.collection for node in nodes[2:]) == [["a"], ["b"]]
        assert nodes[0].collection is sequences[0]
        assert nodes[0].rest == ["c", "c"]
        assert nodes[1].rest == ["d"]
        assert sorted(nodes[0].imports) == [2, 3]

    def test_generated_nodes_sorted_by_first_occurrence(self):
        nodes = set_nodes_to_sequence_nodes(
            [SetNode({1, 2, 3}, set(), [1]), SetNode({3, 1, 2}, {3, 1}, depth=1)],
            [[3, 2, 1]],
        )
        assert nodes[1].collection == [3, 2, 1]
        assert nodes[1].rest == [3, 1]


class TestConvertAndSplit:
    def test_convert_sets_and_split(self):
        sets = [{1, 2}, {2}]
        nodes = convert_sets_and_split(sets, split_sequences_shallow)
        assert all(isinstance(node, SetNode) for node in nodes)
        assert [node.rest for node in nodes] == [{1}, set(), {2}]

    def test_convert_sequences_and_split(self):
        sequences = [[1, 2, 2], [2]]
        nodes = convert_sequences_and_split(sequences, split_sets_shallow)
        assert all(isinstance(node, SequenceNode) for node in nodes)
        assert [node.rest for node in nodes] == [[1, 2], [], [2]]
