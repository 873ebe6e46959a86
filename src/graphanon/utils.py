import logging
import numbers

import networkx as nx
import numpy as np

logger = logging.getLogger(__name__)


def _validate_input_graph(G: nx.Graph):
    if not isinstance(G, nx.Graph) or G.is_directed():
        raise TypeError("The graph must be undirected. Please provide an undirected graph.")

    if G.is_multigraph():
        raise TypeError("The graph must be simple. Multigraphs are not supported.")

    nodes = sorted(G.nodes())
    expected_labels = list(range(len(G)))

    if nodes != expected_labels:
        raise ValueError(
            "Graph nodes must be labeled with integers from 0 to G.number_of_nodes() - 1. Please relabel the graph "
            "accordingly or use `utils.relabel_graph`."
        )


def relabel_graph(G: nx.Graph) -> nx.Graph:
    """
    Returns a copy of the graph G with nodes relabeled to integers from 0 to G.number_of_nodes() - 1.

    Nodes are numbered in sorted order when they are sortable and in insertion order otherwise.

    Parameters:
    - G (nx.Graph): The graph to relabel.

    Returns:
    - nx.Graph: A copy of G with sequentially labeled nodes.
    """
    try:
        order = sorted(G.nodes())
    except TypeError:
        logger.debug("Graph nodes are not sortable, numbering them in insertion order")
        order = list(G.nodes())
    mapping = {node: i for i, node in enumerate(order)}
    logger.debug(f"Relabelling {len(mapping)} nodes to 0..{len(mapping) - 1}")
    return nx.relabel_nodes(G, mapping, copy=True)


def check_random_state(seed=None) -> np.random.Generator:
    """
    Turn seed into a numpy Generator.

    Args:
        seed (None | int | np.random.Generator): None gives a fresh unseeded generator, an int a seeded one and an
            existing Generator is passed through untouched.
    """
    if seed is None or isinstance(seed, numbers.Integral):
        return np.random.default_rng(seed)
    if isinstance(seed, np.random.Generator):
        return seed
    raise TypeError(f"{seed!r} cannot be used to seed a numpy.random.Generator instance.")
