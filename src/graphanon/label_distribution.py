import numpy as np

# Returned by LabelDistribution.distance when the two distributions have different lengths.
INCOMPARABLE = -1.0


class LabelDistribution:
    """
    Absolute frequencies of each label of an alphabet of size l, together with their sum.

    Distributions are immutable. Whenever the underlying graph changes they are recomputed rather than updated.

    Args:
        counts (Sequence[int]): counts[i] is the number of occurrences of label i.
    """

    def __init__(self, counts):
        counts = np.array(counts, dtype=np.int64).ravel()
        if np.any(counts < 0):
            raise ValueError("Label counts must be non-negative.")
        counts.setflags(write=False)
        self._counts = counts
        self._total = int(counts.sum())

    @classmethod
    def zeros(cls, num_labels: int) -> "LabelDistribution":
        return cls(np.zeros(num_labels, dtype=np.int64))

    @classmethod
    def of_graph(cls, graph) -> "LabelDistribution":
        """The global distribution over the labels of every vertex of graph."""
        labels = graph.require_labels()
        return cls(np.bincount(labels.as_array(), minlength=labels.num_labels))

    @classmethod
    def of_neighbourhood(cls, graph, v: int) -> "LabelDistribution":
        """The local distribution over the labels of v and its neighbours (the closed neighbourhood)."""
        labels = graph.require_labels()
        members = [labels[u] for u in (v, *graph.neighbours(v))]
        return cls(np.bincount(members, minlength=labels.num_labels))

    def __len__(self):
        return len(self._counts)

    def __eq__(self, other):
        if not isinstance(other, LabelDistribution):
            return NotImplemented
        return np.array_equal(self._counts, other._counts)

    def __hash__(self):
        return hash(self._counts.tobytes())

    def __repr__(self):
        return f"LabelDistribution({self._counts.tolist()})"

    @property
    def counts(self) -> np.ndarray:
        return self._counts

    @property
    def total(self) -> int:
        return self._total

    def frequency(self, pos: int) -> float:
        """Relative frequency of label pos, or 0 if there is no such label or the distribution is empty."""
        if pos < 0 or pos >= len(self._counts) or self._total == 0:
            return 0.0
        return self._counts[pos] / self._total

    def frequencies(self) -> np.ndarray:
        if self._total == 0:
            return np.zeros(len(self._counts), dtype=np.float64)
        return self._counts / self._total

    def distance(self, other: "LabelDistribution") -> float:
        """
        L1 distance between the relative frequencies of the first l - 1 labels.

        The last label is left out because its relative frequency is fixed by the others. Returns INCOMPARABLE when
        the distributions have different lengths.
        """
        if len(self) != len(other):
            return INCOMPARABLE
        if len(self) < 2:
            return 0.0
        diff = self.frequencies()[:-1] - other.frequencies()[:-1]
        return float(np.abs(diff).sum())

    def deficiencies(self, reference: "LabelDistribution", alpha: float) -> int:
        """
        Determine which labels this distribution lacks relative to reference (typically the global distribution).

        Returns 0 when the L1 difference over all labels is below alpha. Otherwise bit i of the returned mask is set
        iff reference has a higher relative frequency of label i than this distribution.
        """
        if len(self) != len(reference):
            raise ValueError(
                f"Cannot compare label distributions of different lengths ({len(self)} and {len(reference)})."
            )

        diff = reference.frequencies() - self.frequencies()
        if np.abs(diff).sum() < alpha:
            return 0

        mask = 0
        for label in np.flatnonzero(diff > 0):
            mask |= 1 << int(label)
        return mask
