__all__ = [
    "AveragePathLengthMetric",
    "ClusteringCoefficientMetric",
    "EdgeJaccardMetric",
    "HarmonicMeanMetric",
    "MaxLabelDistanceMetric",
    "NumberOfEdgesMetric",
    "NumberOfNodesMetric",
    "OccupancyMetric",
    "PercentageKDegreeAnonMetric",
    "SubgraphCentralityMetric",
    "hop_plot",
]

from .graph_properties import (
    AveragePathLengthMetric,
    ClusteringCoefficientMetric,
    HarmonicMeanMetric,
    NumberOfEdgesMetric,
    NumberOfNodesMetric,
    OccupancyMetric,
    SubgraphCentralityMetric,
    hop_plot,
)
from .privacy_metrics import (
    EdgeJaccardMetric,
    MaxLabelDistanceMetric,
    PercentageKDegreeAnonMetric,
)
