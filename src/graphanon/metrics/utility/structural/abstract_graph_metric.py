from abc import abstractmethod

import networkx as nx

from graphanon.metrics.abstract_metric import AbstractMetric


class AbstractGraphMetric(AbstractMetric):
    """
    Base class for metrics that reduce a graph to a single value, evaluated separately on G and Ga.
    """

    def evaluate(self, G: nx.Graph, Ga: nx.Graph):
        return {"G": self.compute_scalar(G), "Ga": self.compute_scalar(Ga)}

    @abstractmethod
    def compute_scalar(self, G: nx.Graph):
        """
        Computes the value of the metric for a single graph.
        """
