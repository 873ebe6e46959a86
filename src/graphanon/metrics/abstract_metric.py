from abc import ABC, abstractmethod
from typing import Any

import networkx as nx


class AbstractMetric(ABC):
    """
    Compares an original graph G with its anonymized version Ga.

    Metrics receive networkx graphs whose vertex labels, if any, are stored in the "label" node attribute. A metric
    that can work on iGraph graphs sets pass_graph_as_igraph and then receives those instead when the Evaluator has
    igraph enabled.

    Attributes:
        requires_labels (bool): Whether the metric can only be evaluated on vertex-labelled graphs.
    """

    requires_labels = False

    def __init__(self, pass_graph_as_igraph=False):
        self.pass_graph_as_igraph = pass_graph_as_igraph

    @abstractmethod
    def evaluate(self, G: nx.Graph, Ga: nx.Graph) -> Any:
        """
        Returns either a single value describing both graphs (e.g. edge overlap) or a dictionary with keys "G" and
        "Ga" holding one value per graph.
        """
