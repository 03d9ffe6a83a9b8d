"""
Metrics over split node lists.

- NodeMetrics.node_metric: walk metrics of one node, with reconstruction check
- NodeMetrics.node_metrics: summary over every root node
"""

from .node_metrics import Metric, NodeMetric, NodeMetrics, ReconstructionError

__all__ = ["Metric", "NodeMetric", "NodeMetrics", "ReconstructionError"]
