from collections import Counter

import networkx as nx

from graphanon.anonymization.method_alpha_proximity import max_label_distance
from graphanon.graph import UndirectedGraph
from graphanon.metrics.abstract_metric import AbstractMetric
from graphanon.metrics.utility.structural.abstract_graph_metric import (
    AbstractGraphMetric,
)


class EdgeJaccardMetric(AbstractMetric):
    """Compute the Jaccard Index of the original and anonymized edge sets"""

    def evaluate(self, G: nx.Graph, Ga: nx.Graph):
        edges_G = {frozenset(edge) for edge in G.edges()}
        edges_Ga = {frozenset(edge) for edge in Ga.edges()}

        intersection = edges_G.intersection(edges_Ga)
        union = edges_G.union(edges_Ga)

        if not union:
            return 1.0
        return len(intersection) / len(union)


class PercentageKDegreeAnonMetric(AbstractGraphMetric):
    """Compute the fraction of nodes that are k degree anonymous."""

    def __init__(self, k):
        super().__init__(pass_graph_as_igraph=False)

        self.k = k

    def compute_scalar(self, G: nx.Graph):
        if G.number_of_nodes() == 0:
            return 1.0
        counts = Counter(dict(G.degree()).values())
        return sum(count for count in counts.values() if count >= self.k) / G.number_of_nodes()


class MaxLabelDistanceMetric(AbstractGraphMetric):
    """
    Compute the largest distance between a closed-neighbourhood label distribution and the global one, i.e. the
    smallest alpha for which the graph is alpha-proximal. Labels are read from the "label" node attribute.
    """

    requires_labels = True

    def __init__(self, num_labels=None):
        super().__init__(pass_graph_as_igraph=False)

        self.num_labels = num_labels

    def compute_scalar(self, G: nx.Graph):
        graph = UndirectedGraph.from_networkx(G, label_attribute="label", num_labels=self.num_labels)
        return max_label_distance(graph)
