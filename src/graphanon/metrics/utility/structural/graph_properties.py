import math
from collections import Counter
from typing import Dict, Union

import igraph as ig
import networkx as nx
import numpy as np

from graphanon.metrics.utility.structural.abstract_graph_metric import (
    AbstractGraphMetric,
)

DEFAULT_SUBGRAPH_CENTRALITY_LIMIT = 10

HopPlot = Dict[int, int]


def hop_plot(G: Union[nx.Graph, ig.Graph]) -> HopPlot:
    """
    Histogram of shortest path lengths: maps i = 1, 2, ... to the number of ordered vertex pairs (u, v) whose
    shortest path has exactly i edges. Disconnected pairs are not counted.
    """
    plot = Counter()
    if isinstance(G, ig.Graph):
        # igraph counts every unordered pair once
        for start, _, count in G.path_length_hist(directed=False).bins():
            if count:
                plot[int(start)] += 2 * int(count)
    else:
        for _, lengths in nx.all_pairs_shortest_path_length(G):
            for d in lengths.values():
                if d > 0:
                    plot[d] += 1
    return dict(sorted(plot.items()))


def _num_nodes(G: Union[nx.Graph, ig.Graph]) -> int:
    return G.vcount() if isinstance(G, ig.Graph) else G.number_of_nodes()


class NumberOfNodesMetric(AbstractGraphMetric):
    def compute_scalar(self, G: nx.Graph):
        return G.number_of_nodes()


class NumberOfEdgesMetric(AbstractGraphMetric):
    def compute_scalar(self, G: nx.Graph):
        return G.number_of_edges()


class OccupancyMetric(AbstractGraphMetric):
    """Fraction of the n(n-1)/2 possible edges present in the graph."""

    def compute_scalar(self, G: nx.Graph):
        return nx.density(G)


class ClusteringCoefficientMetric(AbstractGraphMetric):
    """Global clustering coefficient: closed over all connected triplets (transitivity)."""

    def compute_scalar(self, G: nx.Graph):
        return nx.transitivity(G)


class AveragePathLengthMetric(AbstractGraphMetric):
    """
    Average shortest path length over all connected ordered vertex pairs.

    Args:
        include_self_paths (bool): Whether the n zero-length paths (u, u) are counted in the denominator.
    """

    def __init__(self, include_self_paths=False):
        super().__init__(pass_graph_as_igraph=True)
        self.include_self_paths = include_self_paths

    def compute_scalar(self, G):
        plot = hop_plot(G)
        num_paths = sum(plot.values())
        if self.include_self_paths:
            num_paths += _num_nodes(G)
        if num_paths == 0:
            return 0.0
        return sum(length * count for length, count in plot.items()) / num_paths


class HarmonicMeanMetric(AbstractGraphMetric):
    """
    Harmonic mean of the shortest path lengths over all ordered vertex pairs. Disconnected pairs contribute an
    infinite length. Infinite if no pair is connected.
    """

    def __init__(self):
        super().__init__(pass_graph_as_igraph=True)

    def compute_scalar(self, G):
        n = _num_nodes(G)
        h = sum(count / length for length, count in hop_plot(G).items())
        if h == 0:
            return math.inf
        return n * (n - 1) / h


class SubgraphCentralityMetric(AbstractGraphMetric):
    """
    Mean subgraph centrality, with the series sum_l trace(A^l) / l! truncated after walks of length limit.
    """

    def __init__(self, limit=DEFAULT_SUBGRAPH_CENTRALITY_LIMIT):
        super().__init__(pass_graph_as_igraph=False)
        self.limit = limit

    def compute_scalar(self, G: nx.Graph):
        n = G.number_of_nodes()
        if n == 0:
            return 0.0

        A = nx.to_scipy_sparse_array(G, nodelist=sorted(G.nodes()), dtype=np.float64, format="csr")
        A_power = A
        factorial = 1.0
        summation = 0.0
        for length in range(2, self.limit + 1):
            A_power = A_power @ A
            factorial *= length
            summation += A_power.diagonal().sum() / factorial
        return summation / n
