import logging

import networkx as nx
import pytest

from graphanon.graph import LabelAssignment, UndirectedGraph
from graphanon.utils import relabel_graph


def test_add_edge():
    graph = UndirectedGraph(3)

    assert graph.add_edge(0, 1)
    assert not graph.add_edge(1, 0)
    assert not graph.add_edge(2, 2)
    assert graph.has_edge(1, 0)
    assert graph.num_edges() == 1
    assert graph.edges() == [(0, 1)]

    with pytest.raises(ValueError):
        graph.add_edge(0, 3)


def test_add_vertices_keeps_edges():
    graph = UndirectedGraph(2)
    graph.add_edge(0, 1)
    graph.add_vertices(3)

    assert graph.num_vertices() == 5
    assert graph.edges() == [(0, 1)]
    assert graph.degree(4) == 0


def test_add_vertices_labelled():
    graph = UndirectedGraph(2, labels=LabelAssignment([1, 1], 2))
    graph.add_vertices(2)
    graph.add_vertices(1, labels=[1])

    assert list(graph.labels) == [1, 1, 0, 0, 1]

    with pytest.raises(ValueError):
        graph.add_vertices(1, labels=[2])
    with pytest.raises(ValueError):
        UndirectedGraph(2).add_vertices(1, labels=[0])


def test_label_assignment_validation():
    with pytest.raises(ValueError):
        LabelAssignment([0, 3], 3)
    with pytest.raises(ValueError):
        LabelAssignment([], 0)
    with pytest.raises(ValueError):
        UndirectedGraph(3, labels=LabelAssignment([0, 1], 2))


def test_occupancy_and_completeness():
    assert UndirectedGraph(0).occupancy() == 0.0
    assert UndirectedGraph(1).occupancy() == 0.0
    assert UndirectedGraph(1).is_complete()

    for n in range(2, 8):
        graph = UndirectedGraph(n)
        for u in range(n):
            for v in range(u + 1, n):
                assert not graph.is_complete()
                graph.add_edge(u, v)
        assert graph.is_complete()
        assert graph.num_edges() == n * (n - 1) // 2
        assert graph.occupancy() == 1.0


def test_degree_sequence_ties_by_vertex_id():
    graph = UndirectedGraph(5)
    graph.add_edge(3, 0)
    graph.add_edge(3, 1)
    graph.add_edge(4, 2)

    assert graph.degree_sequence() == [(2, 3), (1, 0), (1, 1), (1, 2), (1, 4)]
    assert graph.degrees().tolist() == [1, 1, 1, 2, 1]


def test_networkx_conversion():
    G = nx.karate_club_graph()
    nx.set_node_attributes(G, {v: v % 3 for v in G.nodes()}, "group")

    graph = UndirectedGraph.from_networkx(G, label_attribute="group")

    assert graph.num_vertices() == G.number_of_nodes()
    assert graph.num_edges() == G.number_of_edges()
    assert graph.labels.num_labels == 3
    assert graph.labels[4] == 1

    H = graph.to_networkx()
    assert {frozenset(e) for e in H.edges()} == {frozenset(e) for e in G.edges()}
    assert H.nodes[5]["label"] == 2


def test_from_networkx_requires_consecutive_nodes():
    G = nx.Graph()
    G.add_edge("a", "b")
    with pytest.raises(ValueError):
        UndirectedGraph.from_networkx(G)

    with pytest.raises(TypeError):
        UndirectedGraph.from_networkx(nx.DiGraph([(0, 1)]))


def test_copy_is_independent():
    graph = UndirectedGraph(3, labels=LabelAssignment([0, 1, 0], 2))
    graph.add_edge(0, 1)

    clone = graph.copy()
    clone.add_edge(1, 2)
    clone.add_vertices(1)

    assert graph.num_edges() == 1
    assert graph.num_vertices() == 3
    assert len(graph.labels) == 3
    assert clone.num_edges() == 2


def test_networkx_round_trip_keeps_alphabet_size():
    graph = UndirectedGraph(3, labels=LabelAssignment([0, 1, 0], 4))

    G = graph.to_networkx()
    restored = UndirectedGraph.from_networkx(G, label_attribute="label")

    assert G.graph["num_labels"] == 4
    assert restored.labels == graph.labels
    assert UndirectedGraph.from_networkx(G, label_attribute="label", num_labels=2).labels.num_labels == 2


def test_relabel_graph(caplog):
    G = nx.Graph()
    G.add_edge("b", "c")
    G.add_node("a")

    with caplog.at_level(logging.DEBUG, logger="graphanon.utils"):
        H = relabel_graph(G)

    assert sorted(H.nodes()) == [0, 1, 2]
    assert set(H.edges()) == {(1, 2)}
    assert "Relabelling 3 nodes" in caplog.text
