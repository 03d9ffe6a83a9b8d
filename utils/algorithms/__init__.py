"""
Pure algorithms with no domain-specific dependencies.

Modules:
    dag         - Index-based DAG operations (topological order, importers)
    sets        - Set operations (cloning, intersection, overlapping pairs)
    sequences   - Sequence intersections and multiset edits
"""
