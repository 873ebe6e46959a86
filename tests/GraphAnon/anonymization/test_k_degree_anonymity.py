import networkx as nx
import numpy as np
import pytest

from graphanon.anonymization import KDegreeAnonymizer, is_k_degree_anonymous, run_identity_anonymization
from graphanon.anonymization.method_k_degree_anonymity import _connect_new_vertices
from graphanon.exceptions import ThresholdInfeasibleError
from graphanon.generators import random_graph
from graphanon.graph import UndirectedGraph


def test_is_k_degree_anonymous():
    graph = UndirectedGraph(4)
    graph.add_edge(0, 1)
    graph.add_edge(2, 3)

    assert is_k_degree_anonymous(graph, 4)
    assert not is_k_degree_anonymous(graph, 5)

    graph.add_edge(1, 2)
    assert is_k_degree_anonymous(graph, 2)
    assert not is_k_degree_anonymous(graph, 3)
    assert is_k_degree_anonymous(graph, 2, vertices=[0, 3])
    assert is_k_degree_anonymous(UndirectedGraph(0), 3)


@pytest.mark.parametrize("hide_new_vertices", [False, True])
def test_anonymization_reaches_k(hide_new_vertices):
    for seed in range(40):
        rng = np.random.default_rng(seed)
        n = int(rng.integers(1, 60))
        k = int(rng.integers(1, n + 1))
        graph = random_graph(n, float(rng.uniform(0.0, 0.3)), rng=rng)
        edges_before = set(graph.edges())

        run_identity_anonymization(graph, k, hide_new_vertices=hide_new_vertices)

        assert is_k_degree_anonymous(graph, k, vertices=range(n))
        if hide_new_vertices:
            assert graph.is_anonymous(k)
        assert edges_before <= set(graph.edges())
        assert graph.num_vertices() >= n


def test_new_vertices_are_anonymous_for_large_k():
    for seed in range(20):
        G = nx.barabasi_albert_graph(80, 3, seed=seed)
        graph = UndirectedGraph.from_networkx(G)

        for k in (2, 5, 9, 16):
            anonymized = graph.copy()
            run_identity_anonymization(anonymized, k, hide_new_vertices=True)
            assert anonymized.is_anonymous(k)


def test_edges_only_added_towards_new_vertices():
    G = nx.barabasi_albert_graph(50, 2, seed=1)
    graph = UndirectedGraph.from_networkx(G)
    edges_before = set(graph.edges())

    run_identity_anonymization(graph, 4)

    for u, v in set(graph.edges()) - edges_before:
        assert v >= 50
        assert u < 50


def test_already_anonymous_graph_is_unchanged():
    graph = UndirectedGraph.from_networkx(nx.cycle_graph(10))

    run_identity_anonymization(graph, 10, hide_new_vertices=True)

    assert graph.num_vertices() == 10
    assert graph.num_edges() == 10


def test_star_graph():
    # two leaves are raised to the degree of the hub through four dummy vertices
    graph = UndirectedGraph.from_networkx(nx.star_graph(5))

    run_identity_anonymization(graph, 3)

    assert graph.num_vertices() == 6 + 4
    assert is_k_degree_anonymous(graph, 3, vertices=range(6))


def test_threshold_infeasible():
    graph = random_graph(5, 0.5, rng=0)

    with pytest.raises(ThresholdInfeasibleError):
        run_identity_anonymization(graph, 6)
    with pytest.raises(ThresholdInfeasibleError):
        run_identity_anonymization(graph, 0)


def test_anonymizer_class_and_reporter():
    graph = random_graph(30, 0.1, rng=2)
    reported = []

    KDegreeAnonymizer(k=4, hide_new_vertices=True).anonymize(graph)
    run_identity_anonymization(graph, 4, reporter=reported.append)

    assert graph.is_anonymous(4)
    assert reported == [graph]


@pytest.mark.parametrize("num_high", [3, 2])
def test_connect_new_vertices_equalizes_degrees(num_high):
    # vertices 3..7 are dummies, num_high of them already have one edge to vertex 0
    graph = UndirectedGraph(8)
    for v in range(3, 3 + num_high):
        graph.add_edge(0, v)

    _connect_new_vertices(graph, range(3, 8))

    assert len({graph.degree(v) for v in range(3, 8)}) == 1
    for u, v in graph.edges():
        assert u == 0 or u >= 3


def test_new_vertices_are_anonymous_after_fallback():
    for seed in range(30):
        graph = UndirectedGraph.from_networkx(nx.gnp_random_graph(40, 0.1, seed=seed))

        for k in (3, 4, 7):
            anonymized = graph.copy()
            run_identity_anonymization(anonymized, k, hide_new_vertices=True)

            assert is_k_degree_anonymous(anonymized, k)
            assert anonymized.num_vertices() == 40 or (anonymized.num_vertices() - 40) % 2 == 1
