import logging

import numpy as np
from numba import njit

logger = logging.getLogger(__name__)

_UNSET = 2**62


@njit
def _min_max_deficiency_partition(degrees, k):
    """
    Dynamic program over a non-increasing degree sequence of length n >= 2k.

    cost[i] is the smallest achievable maximum deficiency of a partition of degrees[:i + 1] into contiguous blocks of
    size >= k, and start[i] is where the last block of that partition begins. Blocks never need more than 2k - 1
    elements since a longer block can be split without raising any deficiency.
    Time Complexity: O(n * k)
    """
    n = len(degrees)
    cost = np.full(n, _UNSET, dtype=np.int64)
    start = np.zeros(n, dtype=np.int64)

    # a prefix shorter than 2k can only be a single block
    for i in range(k - 1, min(2 * k - 1, n)):
        cost[i] = degrees[0] - degrees[i]
        start[i] = 0

    for i in range(2 * k - 1, n):
        best = _UNSET
        best_total = _UNSET
        best_j = -1
        for j in range(max(k - 1, i - 2 * k + 1), i - k + 1):
            # degrees is sorted, so the block [j + 1, i] costs at most its first minus its last degree
            block = degrees[j + 1] - degrees[i]
            candidate = max(cost[j], block)
            total = cost[j] + block
            if candidate < best or (candidate == best and total < best_total):
                best = candidate
                best_total = total
                best_j = j
        cost[i] = best
        start[i] = best_j + 1

    return cost[n - 1], start


def anonymize_degree_sequence(degrees, k):
    """
    Raise the degrees of a non-increasing degree sequence so that every value occurs at least k times.

    The sequence is split into contiguous blocks of at least k vertices and every vertex takes the largest degree of
    its block. The partition minimizes the maximum deficiency (anonymized minus original degree) of any vertex.

    Args:
        degrees (array-like of int): Degrees sorted in non-increasing order.
        k (int): The anonymity threshold, 1 <= k <= len(degrees).

    Returns:
        tuple: The anonymized degrees (np.ndarray) and the maximum deficiency (int).
    """
    degrees = np.asarray(degrees, dtype=np.int64)
    n = len(degrees)
    if not 1 <= k <= n:
        raise ValueError(f"k must lie in [1, {n}] for a degree sequence of length {n}, got k={k}.")
    if np.any(np.diff(degrees) > 0):
        raise ValueError("The degree sequence must be sorted in non-increasing order.")

    if n < 2 * k:
        return np.full(n, degrees[0], dtype=np.int64), int(degrees[0] - degrees[-1])

    max_deficiency, start = _min_max_deficiency_partition(degrees, k)

    anonymized = degrees.copy()
    i = n - 1
    num_blocks = 0
    while i >= 0:
        s = start[i]
        anonymized[s : i + 1] = degrees[s]
        i = s - 1
        num_blocks += 1

    logger.debug(f"Degree sequence of length {n} split into {num_blocks} blocks, max deficiency {max_deficiency}")
    return anonymized, int(max_deficiency)
