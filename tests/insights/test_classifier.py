"""Tests for table-driven severity and symptom classification."""

import pytest

from depth_lens.config import ThresholdConfig
from depth_lens.insights.classifier import CATEGORY_TABLE, classify, classify_finding, classify_findings
from depth_lens.insights.models import Category, Severity, Symptom


class TestCategoryTable:
    """Defaults per category."""

    @pytest.mark.parametrize(
        "category, severity, symptoms",
        [
            (Category.WRONG_STATE_BOUNDARY, Severity.STRUCTURAL, {Symptom.COGNITIVE_LOAD, Symptom.UNKNOWN_UNKNOWNS}),
            (Category.LEAKED_ABSTRACTION, Severity.STRUCTURAL, {Symptom.CHANGE_AMPLIFICATION, Symptom.UNKNOWN_UNKNOWNS}),
            (Category.SHALLOW_MODULE, Severity.MODERATE, {Symptom.CHANGE_AMPLIFICATION}),
            (Category.MIXED_CONCERNS, Severity.STRUCTURAL, {Symptom.COGNITIVE_LOAD}),
            (Category.RE_RENDER_CASCADE, Severity.MODERATE, {Symptom.COGNITIVE_LOAD}),
            (Category.TACTICAL_DEBT, Severity.MINOR, {Symptom.CHANGE_AMPLIFICATION}),
        ],
    )
    def test_defaults(self, make_finding, category, severity, symptoms):
        assert classify(make_finding(category=category, raw_weight=1.0)) == (severity, frozenset(symptoms))

    def test_every_category_has_a_rule(self):
        assert set(CATEGORY_TABLE) == set(Category)

    def test_every_rule_has_one_to_three_symptoms(self):
        for rule in CATEGORY_TABLE.values():
            assert 1 <= len(rule.symptoms) <= 3


class TestEscalation:
    """Promotion by raw weight: exactly one tier, never more."""

    def test_tactical_debt_escalates_at_three_copies(self, make_finding):
        assert classify(make_finding(category=Category.TACTICAL_DEBT, raw_weight=2.0))[0] is Severity.MINOR
        assert classify(make_finding(category=Category.TACTICAL_DEBT, raw_weight=3.0))[0] is Severity.MODERATE

    def test_promotion_capped_at_structural(self, make_finding):
        f = make_finding(category=Category.LEAKED_ABSTRACTION, raw_weight=100.0)
        assert classify(f)[0] is Severity.STRUCTURAL

    @pytest.mark.parametrize("category", list(Category))
    @pytest.mark.parametrize("weight", [0.0, 1.0, 2.5, 3.0, 3.5, 5.0, 6.0, 50.0])
    def test_monotonic_one_tier(self, make_finding, category, weight):
        """Severity is the default or exactly one tier above it."""
        default = CATEGORY_TABLE[category].default
        severity, _ = classify(make_finding(category=category, raw_weight=weight))
        assert severity in {default, default.promote()}
        assert severity.value - default.value in (0, 1)

    def test_reclassifying_never_promotes_twice(self, make_finding):
        f = classify_finding(make_finding(category=Category.SHALLOW_MODULE, raw_weight=9.0))
        assert f.severity is Severity.STRUCTURAL
        assert classify_finding(f).severity is Severity.STRUCTURAL

    def test_custom_threshold(self, make_finding):
        lenient = ThresholdConfig(escalate_re_render_cascade=1.0)
        f = make_finding(category=Category.RE_RENDER_CASCADE, raw_weight=2.0)
        assert classify(f)[0] is Severity.MODERATE
        assert classify(f, lenient)[0] is Severity.STRUCTURAL


class TestClassifyFindings:
    def test_returns_new_instances(self, make_finding):
        raw = [make_finding(target="A"), make_finding(target="B")]
        classified = classify_findings(raw)
        assert all(f.severity is None for f in raw)
        assert all(f.classified for f in classified)
        assert [f.target for f in classified] == ["A", "B"]
