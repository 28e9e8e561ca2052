"""Tests for prioritization: total order, no drops."""

import random

import pytest

from depth_lens.insights.classifier import classify_findings
from depth_lens.insights.detectors import build_registry
from depth_lens.insights.models import Category, Severity, Symptom
from depth_lens.insights.ranking import (
    prioritize,
    priority_key,
    severity_counts,
    top_priority,
)

ONE = frozenset({Symptom.COGNITIVE_LOAD})
TWO = frozenset({Symptom.COGNITIVE_LOAD, Symptom.UNKNOWN_UNKNOWNS})


class TestPrioritize:
    def test_documented_key_order(self, make_finding):
        findings = [
            make_finding("minor", severity=Severity.MINOR, symptoms=TWO, target_lines=999),
            make_finding("mod_small", severity=Severity.MODERATE, symptoms=ONE, target_lines=10),
            make_finding("mod_big", severity=Severity.MODERATE, symptoms=ONE, target_lines=500),
            make_finding("mod_two", severity=Severity.MODERATE, symptoms=TWO, target_lines=1),
            make_finding("struct", severity=Severity.STRUCTURAL, symptoms=ONE, target_lines=1),
        ]
        ordered = [f.target for f in prioritize(findings)]
        assert ordered == ["struct", "mod_two", "mod_big", "mod_small", "minor"]

    def test_detector_id_then_target_break_ties(self, make_finding):
        a = make_finding("B", detector_id="alpha", severity=Severity.MODERATE)
        b = make_finding("A", detector_id="beta", severity=Severity.MODERATE)
        c = make_finding("A", detector_id="alpha", severity=Severity.MODERATE)
        assert [(f.detector_id, f.target) for f in prioritize([b, a, c])] == [
            ("alpha", "A"),
            ("alpha", "B"),
            ("beta", "A"),
        ]

    def test_total_order_independent_of_input_order(self, checkout_model):
        findings = classify_findings(build_registry().run(checkout_model).findings)
        expected = prioritize(findings)
        rng = random.Random(7)
        for _ in range(5):
            shuffled = findings[:]
            rng.shuffle(shuffled)
            assert prioritize(shuffled) == expected

    def test_adjacent_pairs_respect_key(self, checkout_model):
        ordered = prioritize(build_registry().run(checkout_model).findings)
        for left, right in zip(ordered, ordered[1:]):
            assert priority_key(left) < priority_key(right)

    def test_unclassified_key_rejected(self, make_finding):
        with pytest.raises(ValueError, match="no severity"):
            priority_key(make_finding())

    def test_never_drops(self, make_finding):
        findings = [make_finding(str(i), severity=Severity.MINOR) for i in range(20)]
        assert len(prioritize(findings)) == 20

    def test_raw_findings_classified_on_the_fly(self, make_finding):
        [f] = prioritize([make_finding(category=Category.TACTICAL_DEBT)])
        assert f.severity is Severity.MINOR


class TestHelpers:
    def test_top_priority(self, make_finding):
        assert top_priority([]) is None
        low = make_finding("low", severity=Severity.MINOR)
        high = make_finding("high", severity=Severity.STRUCTURAL)
        assert top_priority([low, high]).target == "high"

    def test_severity_counts_has_every_tier(self, make_finding):
        counts = severity_counts([make_finding(severity=Severity.MINOR)])
        assert counts == {Severity.MINOR: 1, Severity.MODERATE: 0, Severity.STRUCTURAL: 0}
