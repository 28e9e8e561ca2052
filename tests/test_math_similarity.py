"""Tests for structural similarity math."""

import numpy as np
import pytest

from depth_lens.math import StructuralSimilarity, connected_groups


class TestJaccardMatrix:
    def test_identical_and_disjoint(self):
        m = StructuralSimilarity.jaccard_matrix([{"a", "b"}, {"a", "b"}, {"c"}])
        assert m[0, 1] == pytest.approx(1.0)
        assert m[0, 2] == pytest.approx(0.0)

    def test_partial_overlap(self):
        m = StructuralSimilarity.jaccard_matrix([{"a", "b", "c"}, {"b", "c", "d"}])
        assert m[0, 1] == pytest.approx(2 / 4)

    def test_symmetric(self):
        m = StructuralSimilarity.jaccard_matrix([{"a"}, {"a", "b"}, {"b", "c"}])
        assert np.allclose(m, m.T)

    def test_empty_sets(self):
        """Two empty fingerprints share nothing to compare."""
        m = StructuralSimilarity.jaccard_matrix([set(), set()])
        assert m[0, 1] == 0.0

    def test_no_items(self):
        assert StructuralSimilarity.jaccard_matrix([]).shape == (0, 0)


class TestSizeRatio:
    def test_ratio(self):
        m = StructuralSimilarity.size_ratio_matrix([50, 100])
        assert m[0, 1] == pytest.approx(0.5)
        assert m[0, 0] == pytest.approx(1.0)

    def test_zero_sizes_are_equal(self):
        assert StructuralSimilarity.size_ratio_matrix([0, 0])[0, 1] == 1.0


class TestSimilarPairs:
    def test_blend_and_threshold(self):
        tokens = [{"a", "b"}, {"a", "b"}, {"a", "x"}]
        matrix = StructuralSimilarity.similarity_matrix(tokens, [100, 50, 100])
        # 0.7 * 1.0 + 0.3 * 0.5
        assert matrix[0, 1] == pytest.approx(0.85)
        pairs = StructuralSimilarity.similar_pairs(["m0", "m1", "m2"], matrix, 0.8)
        assert pairs == [("m0", "m1", 0.85)]

    def test_pairs_sorted_by_label(self):
        matrix = np.ones((3, 3))
        pairs = StructuralSimilarity.similar_pairs(["c", "a", "b"], matrix, 0.5)
        assert [(a, b) for a, b, _ in pairs] == [("a", "b"), ("a", "c"), ("b", "c")]


class TestConnectedGroups:
    def test_transitive_grouping(self):
        pairs = [("a", "b", 1.0), ("b", "c", 1.0), ("x", "y", 1.0)]
        assert connected_groups(pairs) == [["a", "b", "c"], ["x", "y"]]

    def test_empty(self):
        assert connected_groups([]) == []
