import logging
from typing import Callable, List, Optional

import numpy as np

from graphanon.exceptions import ThresholdInfeasibleError, UnreachableTargetError
from graphanon.graph import UndirectedGraph
from graphanon.label_distribution import LabelDistribution
from graphanon.utils import check_random_state

from .abstract_anonymizer import AbstractAnonymizer

logger = logging.getLogger(__name__)

DEFAULT_METHOD = "greedy"
METHODS = ("greedy", "hopeful")


class AlphaProximityAnonymizer(AbstractAnonymizer):
    """
    Protects a vertex-labelled graph against neighbourhood attribute disclosure by inserting edges until it is
    alpha-proximal, i.e. the label distribution of every closed neighbourhood is within distance alpha of the global
    label distribution [1].

    Args:
        alpha (float): The privacy threshold. Note that values such as 0.1 are not exactly representable as floats,
            adding a small correction (e.g. 1e-5) avoids surprises at the boundary.
        method (str): "greedy" for the greedy mate-matching algorithm or "hopeful" for the naive baseline that adds
            random edges one at a time.

    References:
        [1] Chester and Srivastava (2011). "Social network privacy for attribute disclosure attacks."
    """

    def __init__(self, alpha: float, method: str = DEFAULT_METHOD):
        if method not in METHODS:
            raise ValueError(f"Unknown method {method!r}. Expected one of {METHODS}.")
        self.alpha = alpha
        self.method = method

    def anonymize(self, graph: UndirectedGraph, random_seed=None) -> UndirectedGraph:
        run_attribute_anonymization(graph, self.alpha, rng=random_seed, method=self.method)
        return graph


def max_label_distance(graph: UndirectedGraph) -> float:
    """The largest distance between any closed-neighbourhood label distribution and the global one."""
    global_ld = LabelDistribution.of_graph(graph)
    return max(
        (LabelDistribution.of_neighbourhood(graph, v).distance(global_ld) for v in range(graph.num_vertices())),
        default=0.0,
    )


def is_alpha_proximal(graph: UndirectedGraph, alpha: float) -> bool:
    return max_label_distance(graph) <= alpha


def _add_random_edge(graph: UndirectedGraph, rng: np.random.Generator) -> bool:
    """Insert one uniformly random absent edge. Returns False if the graph is already complete."""
    if graph.is_complete():
        return False

    n = graph.num_vertices()
    while True:
        u, v = rng.integers(n, size=2)
        if graph.add_edge(int(u), int(v)):
            return True


def _run_greedy_iteration(graph: UndirectedGraph, alpha: float, rng: np.random.Generator) -> int:
    """
    One round of the greedy algorithm. Returns the number of edges inserted.

    Every vertex whose neighbourhood is not alpha-proximal is deficient in some labels. The deficient vertices are
    visited in random order and each one, for each label l it lacks, searches the vertices after it in that order for
    a mate that carries l and in turn lacks the label of the visiting vertex.
    """
    labels = graph.require_labels()
    global_ld = LabelDistribution.of_graph(graph)

    # entries are [vertex, deficiency mask, label]; masks of later entries shrink as mates are found
    deficient: List[list] = []
    for v in range(graph.num_vertices()):
        mask = LabelDistribution.of_neighbourhood(graph, v).deficiencies(global_ld, alpha)
        if mask:
            deficient.append([v, mask, labels[v]])

    # Random visit order keeps low vertex ids from taking all the mates.
    visit_order = [deficient[i] for i in rng.permutation(len(deficient))]

    num_edges_added = 0
    for pos, (v, defs, v_label) in enumerate(visit_order):
        v_bit = 1 << v_label
        while defs:
            lowest = defs & -defs
            wanted_label = lowest.bit_length() - 1
            defs ^= lowest

            for mate in visit_order[pos + 1 :]:
                if mate[1] & v_bit and mate[2] == wanted_label and graph.add_edge(v, mate[0]):
                    mate[1] ^= v_bit
                    num_edges_added += 1
                    break

    logger.debug(f"Greedy round: {len(deficient)} deficient vertices, {num_edges_added} edges added")
    return num_edges_added


def _greedy(graph: UndirectedGraph, alpha: float, rng: np.random.Generator) -> int:
    num_rounds = 0
    while not is_alpha_proximal(graph, alpha) and not graph.is_complete():
        num_rounds += 1
        if _run_greedy_iteration(graph, alpha, rng) == 0 and not is_alpha_proximal(graph, alpha):
            # no compatible mates left, break the stall
            _add_random_edge(graph, rng)
    return num_rounds


def _hopeful(graph: UndirectedGraph, alpha: float, rng: np.random.Generator) -> int:
    num_rounds = 0
    while not is_alpha_proximal(graph, alpha) and not graph.is_complete():
        num_rounds += 1
        _add_random_edge(graph, rng)
    return num_rounds


def run_attribute_anonymization(
    graph: UndirectedGraph,
    alpha: float,
    rng=None,
    method: str = DEFAULT_METHOD,
    reporter: Optional[Callable[[UndirectedGraph], None]] = None,
):
    """
    Insert edges into the labelled graph until it is alpha-proximal.

    Terminates because the graph only grows and the complete graph is alpha-proximal for every alpha >= 0.

    Args:
        graph (UndirectedGraph): A vertex-labelled graph, mutated in place.
        alpha (float): The privacy threshold, at least 0.
        rng (None | int | np.random.Generator): Source of randomness.
        method (str): "greedy" or "hopeful".
        reporter (Callable, optional): Called with the anonymized graph once it is verified to be alpha-proximal.

    Raises:
        ThresholdInfeasibleError: If alpha is negative.
        UnreachableTargetError: If the graph is not alpha-proximal after the algorithm finished.
    """
    graph.require_labels()
    if alpha < 0:
        raise ThresholdInfeasibleError(f"alpha must be non-negative, got alpha={alpha}.")
    if method not in METHODS:
        raise ValueError(f"Unknown method {method!r}. Expected one of {METHODS}.")

    rng = check_random_state(rng)
    num_edges_before = graph.num_edges()

    if method == "greedy":
        num_rounds = _greedy(graph, alpha, rng)
    else:
        num_rounds = _hopeful(graph, alpha, rng)

    distance = max_label_distance(graph)
    if distance > alpha:
        raise UnreachableTargetError(
            f"The {method} alpha-proximity anonymization finished without reaching its target: alpha={alpha}, "
            f"max distance={distance}, n={graph.num_vertices()}, m={graph.num_edges()}, "
            f"complete={graph.is_complete()}, rounds={num_rounds}."
        )

    logger.info(
        f"Alpha-proximity ({method}) reached alpha={alpha} after {num_rounds} rounds, "
        f"added {graph.num_edges() - num_edges_before} edges"
    )

    if reporter is not None:
        reporter(graph)
