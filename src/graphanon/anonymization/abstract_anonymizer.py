from abc import ABC, abstractmethod

from graphanon.graph import UndirectedGraph


class AbstractAnonymizer(ABC):
    """
    Base class for anonymizers that insert edges (and possibly vertices) until a privacy predicate holds.
    """

    @abstractmethod
    def anonymize(self, graph: UndirectedGraph, random_seed=None) -> UndirectedGraph:
        """
        Anonymizes graph in place.

        Args:
            graph (UndirectedGraph): The graph to anonymize. It is mutated.
            random_seed (None | int | np.random.Generator): Source of randomness for randomized anonymizers.

        Returns:
            UndirectedGraph: The anonymized graph (the same object as graph).
        """
