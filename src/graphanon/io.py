"""
Reading and writing graphs in the plain-text formats of the anonymization suite.

Three formats are supported:

- ``adjacency_list``: the first line holds the number of vertices n. Each of the next n lines lists the neighbour ids
  of one vertex (vertex 0 first). Edges are undirected, so an edge only has to be listed by one endpoint.
- ``labelled_adjacency_list``: like ``adjacency_list`` but the first line holds n and the label alphabet size l, and
  every vertex line starts with the label of that vertex.
- ``edge_list``: the first line holds n. Every following line holds one edge ``u v``.
"""

import enum
import logging
from pathlib import Path
from typing import List, Union

import networkx as nx

from graphanon.exceptions import GraphFormatError
from graphanon.graph import LabelAssignment, UndirectedGraph
from graphanon.utils import relabel_graph

logger = logging.getLogger(__name__)


class FileFormat(enum.Enum):
    ADJACENCY_LIST = "adjacency_list"
    EDGE_LIST = "edge_list"
    LABELLED_ADJACENCY_LIST = "labelled_adjacency_list"


def _to_format(format) -> FileFormat:
    try:
        return FileFormat(format)
    except ValueError:
        raise ValueError(
            f"Unknown graph format {format!r}. Expected one of {[f.value for f in FileFormat]}."
        ) from None


def _parse_ints(line: str, line_no: int) -> List[int]:
    try:
        return [int(token) for token in line.split()]
    except ValueError:
        raise GraphFormatError(f"Line {line_no}: expected whitespace separated integers, got {line!r}.") from None


def _add_parsed_edge(graph: UndirectedGraph, u: int, v: int, line_no: int):
    n = graph.num_vertices()
    if not (0 <= u < n and 0 <= v < n):
        raise GraphFormatError(f"Line {line_no}: edge ({u}, {v}) refers to a vertex outside of [0, {n}).")
    graph.add_edge(u, v)


def parse_graph(text: str, format=FileFormat.ADJACENCY_LIST) -> UndirectedGraph:
    """
    Parse a serialized graph.

    Args:
        text (str): The serialized graph.
        format (FileFormat | str): The format text is in.

    Returns:
        UndirectedGraph: The parsed graph, labelled iff format is labelled_adjacency_list.

    Raises:
        GraphFormatError: If text is not a valid graph in the given format.
    """
    format = _to_format(format)
    lines = text.splitlines()
    if not lines or not lines[0].strip():
        raise GraphFormatError("Missing header line with the number of vertices.")

    header = _parse_ints(lines[0], 1)
    expected_header_len = 2 if format == FileFormat.LABELLED_ADJACENCY_LIST else 1
    if len(header) != expected_header_len:
        raise GraphFormatError(f"Line 1: expected {expected_header_len} header value(s), got {len(header)}.")
    n = header[0]
    if n < 0:
        raise GraphFormatError(f"Line 1: the number of vertices must be non-negative, got {n}.")

    if format == FileFormat.EDGE_LIST:
        graph = UndirectedGraph(n)
        for line_no, line in enumerate(lines[1:], start=2):
            values = _parse_ints(line, line_no)
            if not values:
                continue
            if len(values) != 2:
                raise GraphFormatError(f"Line {line_no}: expected exactly two vertex ids, got {len(values)}.")
            _add_parsed_edge(graph, values[0], values[1], line_no)
        return graph

    vertex_lines = lines[1 : n + 1]
    if len(vertex_lines) < n:
        raise GraphFormatError(f"Expected {n} vertex lines after the header but found only {len(vertex_lines)}.")

    rows = [_parse_ints(line, line_no) for line_no, line in enumerate(vertex_lines, start=2)]

    labels = None
    if format == FileFormat.LABELLED_ADJACENCY_LIST:
        num_labels = header[1]
        vertex_labels = []
        for u, row in enumerate(rows):
            if not row:
                raise GraphFormatError(f"Line {u + 2}: missing the label of vertex {u}.")
            vertex_labels.append(row.pop(0))
        try:
            labels = LabelAssignment(vertex_labels, num_labels)
        except ValueError as e:
            raise GraphFormatError(str(e)) from e

    graph = UndirectedGraph(n, labels=labels)
    for u, row in enumerate(rows):
        for v in row:
            _add_parsed_edge(graph, u, v, u + 2)

    if any(line.strip() for line in lines[n + 1 :]):
        logger.warning(f"Ignoring {len(lines) - n - 1} trailing line(s) after the {n} vertex lines.")

    return graph


def dump_graph(graph: UndirectedGraph, format=FileFormat.ADJACENCY_LIST) -> str:
    """Serialize graph. Neighbour lists are written in increasing order, edges once each as ``u v`` with u < v."""
    format = _to_format(format)
    n = graph.num_vertices()

    if format == FileFormat.EDGE_LIST:
        out = [str(n)]
        out.extend(f"{u} {v}" for u, v in graph.edges())
        return "\n".join(out) + "\n"

    if format == FileFormat.LABELLED_ADJACENCY_LIST:
        labels = graph.require_labels()
        out = [f"{n} {labels.num_labels}"]
        for v in range(n):
            out.append(" ".join(str(x) for x in [labels[v], *sorted(graph.neighbours(v))]))
    else:
        out = [str(n)]
        for v in range(n):
            out.append(" ".join(str(x) for x in sorted(graph.neighbours(v))))
    return "\n".join(out) + "\n"


def read_graph(path: Union[str, Path], format=FileFormat.ADJACENCY_LIST) -> UndirectedGraph:
    path = Path(path)
    logger.info(f"Reading {_to_format(format).value} graph from {path}")
    return parse_graph(path.read_text(), format)


def write_graph(graph: UndirectedGraph, path: Union[str, Path], format=FileFormat.ADJACENCY_LIST):
    path = Path(path)
    logger.info(f"Writing {_to_format(format).value} graph to {path}")
    path.write_text(dump_graph(graph, format))


def read_gml(path: Union[str, Path], label_attribute=None, num_labels=None) -> UndirectedGraph:
    """
    Read a GML file and renumber its nodes to 0..n-1.

    Directed or multi-edge GML graphs are collapsed to a simple undirected graph.
    """
    try:
        G = nx.read_gml(path, label=None)
    except nx.NetworkXError as e:
        raise GraphFormatError(f"Could not parse GML file {path}: {e}") from e

    G = nx.Graph(G)
    G.remove_edges_from(list(nx.selfloop_edges(G)))
    return UndirectedGraph.from_networkx(relabel_graph(G), label_attribute=label_attribute, num_labels=num_labels)
