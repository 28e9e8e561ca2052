"""Numerical helpers."""

from .similarity import StructuralSimilarity, connected_groups

__all__ = ["StructuralSimilarity", "connected_groups"]
