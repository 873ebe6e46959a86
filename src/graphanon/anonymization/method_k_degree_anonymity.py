import logging
from collections import Counter
from typing import Callable, Iterable, Optional

from graphanon.anonymization._method_k_degree.degree_sequence import anonymize_degree_sequence
from graphanon.exceptions import ThresholdInfeasibleError, UnreachableTargetError
from graphanon.graph import UndirectedGraph

from .abstract_anonymizer import AbstractAnonymizer

logger = logging.getLogger(__name__)


class KDegreeAnonymizer(AbstractAnonymizer):
    """
    Protects a graph against degree-based re-identification by making it k-degree anonymous, i.e. every degree
    value is shared by at least k vertices.

    The degree sequence is anonymized with an exact dynamic program minimizing the largest degree increase of any
    vertex. The missing degree is then supplied by edges to newly inserted dummy vertices [1].

    Args:
        k (int): The privacy threshold.
        hide_new_vertices (bool): If True the dummy vertices are anonymized too, otherwise only the original vertices
            are guaranteed to be k-degree anonymous.

    References:
        [1] Chester et al. (2013). "Why Waldo befriended the dummy? k-Anonymization of social networks with pseudo-nodes."
    """

    def __init__(self, k: int, hide_new_vertices: bool = False):
        self.k = k
        self.hide_new_vertices = hide_new_vertices

    def anonymize(self, graph: UndirectedGraph, random_seed=None) -> UndirectedGraph:
        # deterministic, random_seed is accepted for interface compatibility
        run_identity_anonymization(graph, self.k, hide_new_vertices=self.hide_new_vertices)
        return graph


def is_k_degree_anonymous(graph: UndirectedGraph, k: int, vertices: Optional[Iterable[int]] = None) -> bool:
    """
    Check whether every degree occurs at least k times.

    Args:
        graph (UndirectedGraph): The graph to check.
        k (int): The privacy threshold.
        vertices (Iterable[int], optional): Only count the degrees of these vertices. Defaults to all vertices.
    """
    if vertices is None:
        vertices = range(graph.num_vertices())
    counts = Counter(graph.degree(v) for v in vertices)
    return all(count >= k for count in counts.values())


def _connect_new_vertices(graph: UndirectedGraph, new_vertices: range):
    """
    Insert edges among the dummy vertices so that they all end up with the same degree.

    After the cyclic pass their degrees take at most two adjacent values. An even number of low vertices is joined
    pairwise in id order. An odd number is instead chained in id order, the chain closed by the first two high
    vertices, and the remaining high vertices are joined pairwise. Either way every dummy vertex ends with the same
    degree, so the dummies form a single degree class of odd size >= max(max deficiency, k).

    This replaces plain pairing of all dummy vertices in id order with the odd one closed back to the first, which
    only guarantees degree classes of size >= 2.
    """
    degrees = {v: graph.degree(v) for v in new_vertices}
    high_degree = max(degrees.values())
    if min(degrees.values()) == high_degree:
        return

    high = [v for v in new_vertices if degrees[v] == high_degree]
    low = [v for v in new_vertices if degrees[v] < high_degree]

    if len(low) % 2 == 0:
        for u, v in zip(low[0::2], low[1::2]):
            graph.add_edge(u, v)
        return

    # len(new_vertices) is odd, so the high group is even and holds at least two vertices
    chain = [high[0], *low, high[1]]
    for u, v in zip(chain, chain[1:]):
        graph.add_edge(u, v)
    for u, v in zip(high[2::2], high[3::2]):
        graph.add_edge(u, v)
    logger.debug(f"Chained {len(low)} low degree dummy vertices between dummy vertices {high[0]} and {high[1]}")


def run_identity_anonymization(
    graph: UndirectedGraph,
    k: int,
    hide_new_vertices: bool = False,
    reporter: Optional[Callable[[UndirectedGraph], None]] = None,
):
    """
    Make graph k-degree anonymous by adding dummy vertices and edges.

    Args:
        graph (UndirectedGraph): The graph to anonymize, mutated in place.
        k (int): The privacy threshold, 1 <= k <= number of vertices.
        hide_new_vertices (bool): Whether the dummy vertices must be k-degree anonymous as well.
        reporter (Callable, optional): Called with the anonymized graph once it is verified to be anonymous.

    Raises:
        ThresholdInfeasibleError: If k < 1 or k exceeds the number of vertices.
        UnreachableTargetError: If the anonymity check fails after the algorithm finished.
    """
    n = graph.num_vertices()
    if k < 1 or k > n:
        raise ThresholdInfeasibleError(f"k must lie in [1, {n}] for a graph with {n} vertices, got k={k}.")

    degree_sequence = graph.degree_sequence()
    original_degrees = [d for d, _ in degree_sequence]
    anonymized_degrees, max_deficiency = anonymize_degree_sequence(original_degrees, k)

    if max_deficiency == 0:
        logger.info(f"Graph is already {k}-degree anonymous")
    else:
        md_or_k = max(max_deficiency, k)
        if hide_new_vertices:
            # the dummy vertices are later joined in pairs, so their number is kept odd
            num_new_vertices = md_or_k if md_or_k % 2 == 1 else md_or_k + 1
        else:
            num_new_vertices = max_deficiency

        graph.add_vertices(num_new_vertices)
        new_vertices = range(n, n + num_new_vertices)

        cursor = 0
        for (degree, v), target in zip(degree_sequence, anonymized_degrees):
            for _ in range(int(target) - degree):
                graph.add_edge(v, new_vertices[cursor])
                cursor = (cursor + 1) % num_new_vertices

        if hide_new_vertices and not is_k_degree_anonymous(graph, k):
            _connect_new_vertices(graph, new_vertices)

        logger.info(
            f"Added {num_new_vertices} dummy vertices and {int(sum(anonymized_degrees)) - sum(original_degrees)} "
            f"edges to original vertices (max deficiency {max_deficiency})"
        )

    checked_vertices = None if hide_new_vertices else range(n)
    if not is_k_degree_anonymous(graph, k, vertices=checked_vertices):
        degree_counts = Counter(graph.degree(v) for v in (checked_vertices or range(graph.num_vertices())))
        raise UnreachableTargetError(
            f"The {k}-degree anonymization finished without reaching its target: "
            f"hide_new_vertices={hide_new_vertices}, original n={n}, n={graph.num_vertices()}, "
            f"m={graph.num_edges()}, max deficiency={max_deficiency}, "
            f"undersized degree classes={ {d: c for d, c in degree_counts.items() if c < k} }."
        )

    if reporter is not None:
        reporter(graph)
