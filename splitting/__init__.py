"""
Extraction of shared sub-structure from families of collections.

Every input collection becomes a root node whose elements are split between
its own `rest` and imports of generated nodes holding elements it shares with
other collections. Each shared group is stored once.

**Splitters**
    - split_intersections_shallow: one singleton node per shared element
    - BiggestIntersectionsSplitter: repeatedly extracts the largest intersection
    - WeightedIntersectionsSplitter: extracts by weight, maintaining a live
      index of intersections

**Model** (types.py)
    SetNode / SequenceNode, with imports addressed by position in the node list.

**Adapters** (adapters.py)
    Run a set splitter on sequences or a sequence splitter on sets.
"""

from .adapters import (
    convert_sequences_and_split,
    convert_sets_and_split,
    sequence_nodes_to_set_nodes,
    sequences_to_sets,
    set_nodes_to_sequence_nodes,
    sets_to_sequences,
)
from .biggest import BiggestIntersectionsSplitter
from .depth import assign_depths
from .overlap_index import OverlapIndex
from .shallow import (
    split_intersections_shallow,
    split_sequences_shallow,
    split_sets_shallow,
)
from .types import (
    Comparator,
    Joiner,
    Node,
    SequenceNode,
    Sequences,
    SequenceSplitFunction,
    SetNode,
    Sets,
    SetSplitFunction,
    Splitter,
    WeightFunction,
)
from .weighted import WeightedIntersectionsSplitter
from .weights import (
    WEIGHT_FUNCTIONS,
    elements_count,
    elements_count_reverse,
    frozen_elements,
    frozen_key,
    join_sorted_strings,
    product_sets_elements_count,
    product_sets_elements_count_reverse,
    sets_count,
    sets_count_reverse,
    split_joined_strings,
)

__all__ = [
    # Model
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
    "assign_depths",
    # Splitters
    "split_intersections_shallow",
    "split_sets_shallow",
    "split_sequences_shallow",
    "BiggestIntersectionsSplitter",
    "WeightedIntersectionsSplitter",
    "OverlapIndex",
    # Weights
    "WEIGHT_FUNCTIONS",
    "elements_count",
    "sets_count",
    "product_sets_elements_count",
    "elements_count_reverse",
    "sets_count_reverse",
    "product_sets_elements_count_reverse",
    "join_sorted_strings",
    "split_joined_strings",
    "frozen_key",
    "frozen_elements",
    # Adapters
    "sets_to_sequences",
    "sequences_to_sets",
    "sequence_nodes_to_set_nodes",
    "set_nodes_to_sequence_nodes",
    "convert_sets_and_split",
    "convert_sequences_and_split",
]
