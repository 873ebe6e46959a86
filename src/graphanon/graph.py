import logging
from typing import Iterable, List, Optional, Tuple

import networkx as nx
import numpy as np

from graphanon.utils import _validate_input_graph

logger = logging.getLogger(__name__)

# (degree, vertex) pairs sorted by non-increasing degree.
DegreeSequence = List[Tuple[int, int]]


class LabelAssignment:
    """
    Maps every vertex to a label from an alphabet of size num_labels.

    Args:
        labels (Iterable[int]): labels[v] is the label of vertex v.
        num_labels (int): Size of the label alphabet. Every label must lie in [0, num_labels).
    """

    def __init__(self, labels: Iterable[int], num_labels: int):
        labels = [int(label) for label in labels]
        if num_labels < 1:
            raise ValueError(f"The label alphabet must contain at least one label, got num_labels={num_labels}.")
        for v, label in enumerate(labels):
            if not 0 <= label < num_labels:
                raise ValueError(f"Label {label} of vertex {v} lies outside of [0, {num_labels}).")

        self._labels = labels
        self.num_labels = num_labels

    def __len__(self):
        return len(self._labels)

    def __getitem__(self, v):
        return self._labels[v]

    def __iter__(self):
        return iter(self._labels)

    def __eq__(self, other):
        if not isinstance(other, LabelAssignment):
            return NotImplemented
        return self.num_labels == other.num_labels and self._labels == other._labels

    def __repr__(self):
        return f"LabelAssignment(num_labels={self.num_labels}, labels={self._labels})"

    def as_array(self) -> np.ndarray:
        return np.array(self._labels, dtype=np.int64)

    def extend(self, labels: Iterable[int]):
        new_labels = [int(label) for label in labels]
        for label in new_labels:
            if not 0 <= label < self.num_labels:
                raise ValueError(f"Label {label} lies outside of [0, {self.num_labels}).")
        self._labels.extend(new_labels)

    def copy(self) -> "LabelAssignment":
        return LabelAssignment(self._labels, self.num_labels)


class UndirectedGraph:
    """
    A simple undirected graph on the vertices 0..n-1 that only ever grows.

    Edges and vertices can be added but never removed, so every anonymization moves the graph towards the complete
    graph. A LabelAssignment can be attached for attribute disclosure protection.

    Args:
        num_vertices (int): Number of initially isolated vertices.
        labels (LabelAssignment, optional): One label per vertex.
    """

    def __init__(self, num_vertices: int = 0, labels: Optional[LabelAssignment] = None):
        if num_vertices < 0:
            raise ValueError(f"The number of vertices must be non-negative, got {num_vertices}.")
        if labels is not None and len(labels) != num_vertices:
            raise ValueError(f"Got {len(labels)} labels for {num_vertices} vertices.")

        self._G = nx.empty_graph(num_vertices)
        self.labels = labels

    @classmethod
    def from_networkx(cls, G: nx.Graph, label_attribute: Optional[str] = None, num_labels: Optional[int] = None):
        """
        Build an UndirectedGraph from a networkx graph whose nodes are 0..n-1.

        Args:
            G (nx.Graph): The graph to copy. Self-loops are dropped.
            label_attribute (str, optional): Node attribute holding the vertex labels.
            num_labels (int, optional): Alphabet size. Defaults to the "num_labels" graph attribute written by
                to_networkx, or else the largest label plus one.
        """
        _validate_input_graph(G)

        labels = None
        if label_attribute is not None:
            values = [G.nodes[v][label_attribute] for v in range(len(G))]
            if num_labels is None:
                num_labels = G.graph.get("num_labels")
            if num_labels is None:
                num_labels = max(values, default=0) + 1
            labels = LabelAssignment(values, num_labels)

        graph = cls(G.number_of_nodes(), labels=labels)
        for u, v in G.edges():
            graph.add_edge(u, v)
        return graph

    @classmethod
    def from_serialized(cls, data: str, format) -> "UndirectedGraph":
        from graphanon.io import parse_graph

        return parse_graph(data, format)

    def to_serialized(self, format) -> str:
        from graphanon.io import dump_graph

        return dump_graph(self, format)

    def to_networkx(self) -> nx.Graph:
        G = self._G.copy()
        if self.labels is not None:
            nx.set_node_attributes(G, {v: label for v, label in enumerate(self.labels)}, "label")
            G.graph["num_labels"] = self.labels.num_labels
        return G

    def copy(self) -> "UndirectedGraph":
        graph = UndirectedGraph.__new__(UndirectedGraph)
        graph._G = self._G.copy()
        graph.labels = None if self.labels is None else self.labels.copy()
        return graph

    def __repr__(self):
        labelled = "" if self.labels is None else f", num_labels={self.labels.num_labels}"
        return f"UndirectedGraph(n={self.num_vertices()}, m={self.num_edges()}{labelled})"

    def _check_vertex(self, v):
        if not 0 <= v < self._G.number_of_nodes():
            raise ValueError(f"Vertex {v} does not exist in a graph with {self._G.number_of_nodes()} vertices.")

    def add_edge(self, u: int, v: int) -> bool:
        """Insert the edge {u, v}. Returns False if u == v or the edge already exists."""
        self._check_vertex(u)
        self._check_vertex(v)
        if u == v or self._G.has_edge(u, v):
            return False
        self._G.add_edge(u, v)
        return True

    def add_vertices(self, num_vertices: int, labels: Optional[Iterable[int]] = None):
        """
        Append num_vertices isolated vertices. Existing ids and edges are unaffected.

        On a labelled graph the new vertices take the given labels, or label 0 when none are given.
        """
        if num_vertices < 0:
            raise ValueError(f"Cannot add a negative number of vertices ({num_vertices}).")

        n = self._G.number_of_nodes()
        if self.labels is not None:
            labels = [0] * num_vertices if labels is None else list(labels)
            if len(labels) != num_vertices:
                raise ValueError(f"Got {len(labels)} labels for {num_vertices} new vertices.")
            self.labels.extend(labels)
        elif labels is not None:
            raise ValueError("Cannot assign labels to vertices of an unlabelled graph.")

        self._G.add_nodes_from(range(n, n + num_vertices))

    def require_labels(self) -> LabelAssignment:
        if self.labels is None:
            raise ValueError("This operation needs a vertex-labelled graph but the graph has no labels.")
        return self.labels

    def has_edge(self, u: int, v: int) -> bool:
        return self._G.has_edge(u, v)

    def edges(self):
        """All edges as (u, v) tuples with u < v, sorted."""
        return sorted((min(u, v), max(u, v)) for u, v in self._G.edges())

    def neighbours(self, v: int):
        return self._G.adj[v].keys()

    def degree(self, v: int) -> int:
        return self._G.degree[v]

    def degrees(self) -> np.ndarray:
        return np.array([d for _, d in sorted(self._G.degree())], dtype=np.int64)

    def degree_sequence(self) -> DegreeSequence:
        """The (degree, vertex) pairs of all vertices by non-increasing degree, ties by increasing vertex id."""
        return sorted(((d, v) for v, d in self._G.degree()), key=lambda pair: (-pair[0], pair[1]))

    def num_vertices(self) -> int:
        return self._G.number_of_nodes()

    def num_edges(self) -> int:
        return self._G.number_of_edges()

    def max_num_edges(self) -> int:
        n = self.num_vertices()
        return n * (n - 1) // 2

    def is_complete(self) -> bool:
        return self.num_edges() == self.max_num_edges()

    def occupancy(self) -> float:
        """Fraction of the n(n-1)/2 possible edges that are present, 0 for fewer than two vertices."""
        if self.num_vertices() < 2:
            return 0.0
        return self.num_edges() / self.max_num_edges()

    def is_alpha_proximal(self, alpha: float) -> bool:
        from graphanon.anonymization.method_alpha_proximity import is_alpha_proximal

        return is_alpha_proximal(self, alpha)

    def is_anonymous(self, k: int) -> bool:
        from graphanon.anonymization.method_k_degree_anonymity import is_k_degree_anonymous

        return is_k_degree_anonymous(self, k)
