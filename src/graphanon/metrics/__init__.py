__all__ = ["AbstractMetric", "Evaluator", "default_metrics"]

from .abstract_metric import AbstractMetric
from .evaluator import Evaluator
from .utility.structural import (
    AveragePathLengthMetric,
    ClusteringCoefficientMetric,
    EdgeJaccardMetric,
    HarmonicMeanMetric,
    MaxLabelDistanceMetric,
    NumberOfEdgesMetric,
    NumberOfNodesMetric,
    OccupancyMetric,
    PercentageKDegreeAnonMetric,
    SubgraphCentralityMetric,
)


def default_metrics(k=None, labelled=False):
    """The metrics reported after an anonymization run."""
    metrics = {
        "num_nodes": NumberOfNodesMetric(),
        "num_edges": NumberOfEdgesMetric(),
        "occupancy": OccupancyMetric(),
        "clustering_coefficient": ClusteringCoefficientMetric(),
        "average_path_length": AveragePathLengthMetric(),
        "harmonic_mean": HarmonicMeanMetric(),
        "subgraph_centrality": SubgraphCentralityMetric(),
        "edge_jaccard": EdgeJaccardMetric(),
    }
    if k is not None:
        metrics["k_degree_anonymous"] = PercentageKDegreeAnonMetric(k)
    if labelled:
        metrics["max_label_distance"] = MaxLabelDistanceMetric()
    return metrics
