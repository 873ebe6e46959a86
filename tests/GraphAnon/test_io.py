import networkx as nx
import numpy as np
import pytest

from graphanon.exceptions import GraphFormatError
from graphanon.generators import evenly_distribute_labels, populate_uniformly, random_graph
from graphanon.graph import UndirectedGraph
from graphanon.io import FileFormat, dump_graph, parse_graph, read_gml, read_graph, write_graph

LABELLED_EXAMPLE = """5 2
0 1 2
1 3
0
1 4
0
"""


def edge_set(graph):
    return set(graph.edges())


def test_parse_labelled_adjacency_list():
    graph = parse_graph(LABELLED_EXAMPLE, FileFormat.LABELLED_ADJACENCY_LIST)

    assert graph.num_vertices() == 5
    assert list(graph.labels) == [0, 1, 0, 1, 0]
    assert graph.labels.num_labels == 2
    # edges listed by only one endpoint are still reciprocal
    assert edge_set(graph) == {(0, 1), (0, 2), (1, 3), (3, 4)}
    assert graph.has_edge(2, 0)


def test_parse_accepts_format_names():
    graph = parse_graph("3\n0 1\n1 2\n", "edge_list")
    assert edge_set(graph) == {(0, 1), (1, 2)}


def test_round_trip_all_formats():
    for seed in range(20):
        rng = np.random.default_rng(seed)
        graph = random_graph(int(rng.integers(1, 25)), float(rng.random()), num_labels=3, rng=rng)

        for format in FileFormat:
            parsed = parse_graph(dump_graph(graph, format), format)
            assert parsed.num_vertices() == graph.num_vertices()
            assert edge_set(parsed) == edge_set(graph)
            if format == FileFormat.LABELLED_ADJACENCY_LIST:
                assert parsed.labels == graph.labels


def test_dump_adjacency_list_is_symmetric():
    graph = UndirectedGraph(3)
    graph.add_edge(2, 0)

    assert dump_graph(graph, FileFormat.ADJACENCY_LIST) == "3\n2\n\n0\n"
    assert dump_graph(graph, FileFormat.EDGE_LIST) == "3\n0 2\n"


def test_dump_unlabelled_as_labelled_fails():
    with pytest.raises(ValueError):
        dump_graph(UndirectedGraph(2), FileFormat.LABELLED_ADJACENCY_LIST)


@pytest.mark.parametrize(
    "text, format",
    [
        ("", FileFormat.ADJACENCY_LIST),
        ("x\n", FileFormat.ADJACENCY_LIST),
        ("3\n1\n", FileFormat.ADJACENCY_LIST),
        ("2\n1\n5\n", FileFormat.ADJACENCY_LIST),
        ("2\n0 1 1\n", FileFormat.EDGE_LIST),
        ("2\n0 2\n", FileFormat.EDGE_LIST),
        ("2\n0\n1\n", FileFormat.LABELLED_ADJACENCY_LIST),
        ("2 2\n0 1\n\n", FileFormat.LABELLED_ADJACENCY_LIST),
        ("2 2\n0 1\n3\n", FileFormat.LABELLED_ADJACENCY_LIST),
    ],
)
def test_malformed_input(text, format):
    with pytest.raises(GraphFormatError):
        parse_graph(text, format)


def test_unknown_format():
    with pytest.raises(ValueError):
        parse_graph("1\n\n", "matrix")


def test_read_write_files(tmp_path):
    graph = parse_graph(LABELLED_EXAMPLE, FileFormat.LABELLED_ADJACENCY_LIST)
    path = tmp_path / "example.adjList"

    write_graph(graph, path, FileFormat.LABELLED_ADJACENCY_LIST)
    reread = read_graph(path, FileFormat.LABELLED_ADJACENCY_LIST)

    assert edge_set(reread) == edge_set(graph)
    assert reread.labels == graph.labels


def test_read_gml(tmp_path):
    G = nx.Graph()
    G.add_edge("alice", "bob")
    G.add_edge("bob", "carol")
    nx.set_node_attributes(G, {"alice": 0, "bob": 1, "carol": 0}, "group")
    path = tmp_path / "people.gml"
    nx.write_gml(G, path)

    graph = read_gml(path, label_attribute="group")

    assert graph.num_vertices() == 3
    assert graph.num_edges() == 2
    assert sorted(graph.labels) == [0, 0, 1]


def test_read_gml_malformed(tmp_path):
    path = tmp_path / "broken.gml"
    path.write_text("graph [ node [ id 0 ] edge [ source 0 ]")

    with pytest.raises(GraphFormatError):
        read_gml(path)


def test_populate_uniformly():
    graph = UndirectedGraph(6)

    assert populate_uniformly(graph, 10, rng=1)
    assert graph.num_edges() == 10
    assert populate_uniformly(graph, 5, rng=1)
    assert graph.is_complete()


def test_populate_uniformly_infeasible():
    graph = UndirectedGraph(4)
    graph.add_edge(0, 1)

    assert not populate_uniformly(graph, 6, rng=0)
    assert graph.num_edges() == 1


def test_random_graph_is_reproducible():
    a = random_graph(30, 0.2, num_labels=3, rng=42)
    b = random_graph(30, 0.2, num_labels=3, rng=42)

    assert edge_set(a) == edge_set(b)
    assert a.labels == b.labels
    assert a.num_edges() == int(0.2 * a.max_num_edges())


def test_evenly_distribute_labels():
    for seed in range(10):
        labels = evenly_distribute_labels(17, 5, rng=seed)
        counts = np.bincount(labels.as_array(), minlength=5)

        assert len(labels) == 17
        assert counts.max() - counts.min() <= 1
