import logging
from typing import Optional

import numpy as np

from graphanon.graph import LabelAssignment, UndirectedGraph
from graphanon.utils import check_random_state

logger = logging.getLogger(__name__)


def populate_uniformly(graph: UndirectedGraph, num_edges: int, rng=None) -> bool:
    """
    Insert num_edges edges chosen uniformly at random among the vertex pairs not yet connected.

    Returns False and leaves graph unchanged if fewer than num_edges pairs are still unconnected.
    """
    rng = check_random_state(rng)
    n = graph.num_vertices()
    if num_edges > graph.max_num_edges() - graph.num_edges():
        logger.warning(
            f"Cannot add {num_edges} edges to a graph with {n} vertices and {graph.num_edges()} edges. "
            f"At most {graph.max_num_edges() - graph.num_edges()} more edges fit."
        )
        return False

    if num_edges <= 0:
        return True

    candidates = [(u, v) for u in range(n) for v in range(u + 1, n) if not graph.has_edge(u, v)]
    for idx in rng.choice(len(candidates), size=num_edges, replace=False):
        u, v = candidates[idx]
        graph.add_edge(u, v)
    return True


def evenly_distribute_labels(num_vertices: int, num_labels: int, rng=None) -> LabelAssignment:
    """Randomly label num_vertices vertices so that every label occurs floor(n/l) or ceil(n/l) times."""
    rng = check_random_state(rng)
    if num_labels < 1:
        raise ValueError(f"The label alphabet must contain at least one label, got num_labels={num_labels}.")

    # Which labels receive the ceil(n/l) share is random too.
    label_order = rng.permutation(num_labels)
    labels = label_order[np.arange(num_vertices) % num_labels]
    return LabelAssignment(rng.permutation(labels).tolist(), num_labels)


def random_graph(
    num_vertices: int, occupancy: float, num_labels: Optional[int] = None, rng=None
) -> UndirectedGraph:
    """
    Create a uniformly random graph with int(occupancy * n(n-1)/2) edges.

    Args:
        num_vertices (int): Number of vertices.
        occupancy (float): Fraction of all possible edges to insert, in [0, 1].
        num_labels (int, optional): If given, labels are spread evenly over the vertices.
        rng (None | int | np.random.Generator): Source of randomness.
    """
    if not 0 <= occupancy <= 1:
        raise ValueError(f"occupancy must lie in [0, 1], got {occupancy}.")

    rng = check_random_state(rng)
    labels = None
    if num_labels is not None:
        labels = evenly_distribute_labels(num_vertices, num_labels, rng=rng)

    graph = UndirectedGraph(num_vertices, labels=labels)
    num_edges = int(occupancy * graph.max_num_edges())
    populate_uniformly(graph, num_edges, rng=rng)

    logger.info(f"Generated random graph with {num_vertices} vertices and {graph.num_edges()} edges")
    return graph
