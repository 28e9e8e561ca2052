"""Structural similarity between modules, for near-duplicate detection.

Each module is reduced to a fingerprint: a set of structural tokens (its
kind, interface members, state item names, dependency targets and children).
Pairwise similarity blends token overlap with size agreement:

    sim(A, B) = w * Jaccard(tokens(A), tokens(B)) + (1 - w) * min(L_A, L_B) / max(L_A, L_B)

where L is line count. Computed for all pairs at once with a binary
incidence matrix: |A ∩ B| is the (A, B) entry of M·Mᵀ.
"""

from typing import Dict, List, Sequence, Set, Tuple

import numpy as np

# Weight of token overlap vs size agreement
TOKEN_WEIGHT = 0.7


class StructuralSimilarity:
    """Pairwise structural similarity calculations."""

    @staticmethod
    def jaccard_matrix(token_sets: Sequence[Set[str]]) -> np.ndarray:
        """Jaccard index for every pair of token sets.

        Two empty sets have similarity 0.0 (nothing in common to compare).

        Args:
            token_sets: One token set per item

        Returns:
            Symmetric (n, n) array of values in [0, 1]
        """
        n = len(token_sets)
        if n == 0:
            return np.zeros((0, 0))

        vocabulary = sorted(set().union(*token_sets))
        index = {tok: i for i, tok in enumerate(vocabulary)}
        incidence = np.zeros((n, len(vocabulary)), dtype=np.float64)
        for row, tokens in enumerate(token_sets):
            for tok in tokens:
                incidence[row, index[tok]] = 1.0

        intersections = incidence @ incidence.T
        sizes = incidence.sum(axis=1)
        unions = sizes[:, None] + sizes[None, :] - intersections
        with np.errstate(divide="ignore", invalid="ignore"):
            jaccard = np.where(unions > 0, intersections / unions, 0.0)
        return jaccard

    @staticmethod
    def size_ratio_matrix(sizes: Sequence[float]) -> np.ndarray:
        """min/max ratio of sizes for every pair (1.0 = same size)."""
        arr = np.asarray(sizes, dtype=np.float64)
        if arr.size == 0:
            return np.zeros((0, 0))
        lo = np.minimum.outer(arr, arr)
        hi = np.maximum.outer(arr, arr)
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.where(hi > 0, lo / hi, 1.0)

    @staticmethod
    def similarity_matrix(
        token_sets: Sequence[Set[str]],
        sizes: Sequence[float],
        token_weight: float = TOKEN_WEIGHT,
    ) -> np.ndarray:
        """Blended structural similarity for every pair."""
        jaccard = StructuralSimilarity.jaccard_matrix(token_sets)
        ratio = StructuralSimilarity.size_ratio_matrix(sizes)
        return token_weight * jaccard + (1.0 - token_weight) * ratio

    @staticmethod
    def similar_pairs(
        labels: Sequence[str], matrix: np.ndarray, threshold: float
    ) -> List[Tuple[str, str, float]]:
        """Pairs (a, b, similarity) with a < b and similarity >= threshold.

        Sorted by label pair so output order never depends on numpy internals.
        """
        pairs = []
        n = len(labels)
        rows, cols = np.triu_indices(n, k=1)
        for i, j in zip(rows.tolist(), cols.tolist()):
            sim = float(matrix[i, j])
            if sim >= threshold:
                a, b = sorted((labels[i], labels[j]))
                pairs.append((a, b, round(sim, 6)))
        return sorted(pairs)


def connected_groups(pairs: Sequence[Tuple[str, str, float]]) -> List[List[str]]:
    """Group labels linked by any pair into sorted clusters (union-find)."""
    parent: Dict[str, str] = {}

    def find(x: str) -> str:
        parent.setdefault(x, x)
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    for a, b, _sim in pairs:
        ra, rb = find(a), find(b)
        if ra != rb:
            parent[max(ra, rb)] = min(ra, rb)

    groups: Dict[str, List[str]] = {}
    for label in parent:
        groups.setdefault(find(label), []).append(label)
    return sorted(sorted(g) for g in groups.values())
