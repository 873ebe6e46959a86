import logging
from typing import Dict, Union

import igraph as ig
import networkx as nx

from graphanon.graph import UndirectedGraph
from graphanon.metrics.abstract_metric import AbstractMetric

logger = logging.getLogger(__name__)


def _as_networkx(G: Union[nx.Graph, UndirectedGraph]) -> nx.Graph:
    if isinstance(G, UndirectedGraph):
        return G.to_networkx()
    return G


def _is_labelled(G: nx.Graph) -> bool:
    return all("label" in data for _, data in G.nodes(data=True))


class Evaluator:
    """
    Evaluator class for comparing a graph with its anonymized version.

    Args:
        metrics (Dict[str, AbstractMetric]): A dictionary of metrics to be evaluated.
        use_igraph (bool, optional): Flag indicating whether to pass iGraph graphs to metrics that can use them.
                                        Defaults to False.
    """

    def __init__(self, metrics: Dict[str, AbstractMetric], use_igraph=False):
        self.metrics = metrics
        self.use_igraph = use_igraph

    def evaluate(self, G: Union[nx.Graph, UndirectedGraph], Ga: Union[nx.Graph, UndirectedGraph]):
        """
        Evaluate the metrics on the given graphs.

        Args:
            G (nx.Graph | UndirectedGraph): The original graph.
            Ga (nx.Graph | UndirectedGraph): The anonymized graph.

        Returns:
            dict: A dictionary containing the evaluation results for each metric.

        Raises:
            ValueError: If a metric needs vertex labels and one of the graphs has none.
        """
        G = _as_networkx(G)
        Ga = _as_networkx(Ga)

        for metric_name, metric in self.metrics.items():
            if metric.requires_labels and not (_is_labelled(G) and _is_labelled(Ga)):
                raise ValueError(f"Metric {metric_name} needs vertex-labelled graphs but got unlabelled ones.")

        if self.use_igraph:
            logger.info("Converting graphs to igraph")
            G_ig = ig.Graph.from_networkx(G)
            Ga_ig = ig.Graph.from_networkx(Ga)

        results = {}
        for metric_name, metric in self.metrics.items():
            logger.info(f"Evaluating Metric {metric_name}")
            if metric.pass_graph_as_igraph and self.use_igraph:
                result = metric.evaluate(G_ig, Ga_ig)
            else:
                result = metric.evaluate(G, Ga)
            results[metric_name] = result
        return results

    def __call__(self, G, Ga):
        return self.evaluate(G, Ga)
