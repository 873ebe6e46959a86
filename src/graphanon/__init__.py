from __future__ import annotations

__all__ = [
    "FileFormat",
    "GraphAnonError",
    "GraphFormatError",
    "LabelAssignment",
    "LabelDistribution",
    "ThresholdInfeasibleError",
    "UndirectedGraph",
    "UnreachableTargetError",
]
from .exceptions import GraphAnonError, GraphFormatError, ThresholdInfeasibleError, UnreachableTargetError
from .graph import LabelAssignment, UndirectedGraph
from .io import FileFormat
from .label_distribution import LabelDistribution
