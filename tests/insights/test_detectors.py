"""Tests for the built-in detectors, one class per detector."""

import pytest

from depth_lens.config import ThresholdConfig
from depth_lens.insights.classifier import classify_finding
from depth_lens.insights.detectors import (
    DuplicateModuleDetector,
    EscapeHatchDetector,
    LeakedAbstractionDetector,
    MixedConcernsDetector,
    PassThroughDetector,
    RerenderCascadeDetector,
    ShallowModuleDetector,
    StoredDerivedStateDetector,
    SyncedStateDetector,
    get_default_detectors,
)
from depth_lens.insights.detectors.duplicate_module import fingerprint
from depth_lens.insights.detectors.helpers import module_depth
from depth_lens.insights.detectors.mixed_concerns import dependency_clusters
from depth_lens.insights.models import Category, Severity, Symptom
from depth_lens.model import Dependency, Module, ModuleModel, StateItem, StateOrigin


def _targets(findings):
    return [f.target for f in findings]


class TestDetectorContract:
    """Properties every built-in detector shares."""

    def test_unique_names(self):
        names = [d.name for d in get_default_detectors()]
        assert len(names) == len(set(names)) == 9

    def test_every_category_covered(self):
        assert {d.category for d in get_default_detectors()} == set(Category)

    @pytest.mark.parametrize("detector", get_default_detectors(), ids=lambda d: d.name)
    def test_total_on_empty_model(self, detector, thresholds):
        """An empty model yields no findings rather than an error."""
        assert detector.find(ModuleModel(), thresholds) == []

    @pytest.mark.parametrize("detector", get_default_detectors(), ids=lambda d: d.name)
    def test_deterministic(self, detector, checkout_model, thresholds):
        assert detector.find(checkout_model, thresholds) == detector.find(checkout_model, thresholds)

    @pytest.mark.parametrize("detector", get_default_detectors(), ids=lambda d: d.name)
    def test_raw_findings_unclassified(self, detector, checkout_model, thresholds):
        """Detectors never pick their own severity."""
        for f in detector.find(checkout_model, thresholds):
            assert f.severity is None
            assert f.detector_id == detector.name
            assert f.category is detector.category


class TestShallowModule:
    """depth = (lines / lines_per_unit + hidden deps) / interface size."""

    def test_depth_formula(self, thresholds):
        m = Module("A", line_count=50, interface_size=2, dependencies=(Dependency("x"), Dependency("y", leak=True)))
        # (50 / 10 + 1 hidden) / 2
        assert module_depth(m, thresholds) == pytest.approx(3.0)

    def test_no_interface_is_infinitely_deep(self, thresholds):
        assert module_depth(Module("A", line_count=5), thresholds) == float("inf")

    def test_fires_on_checkout_model(self, checkout_model, thresholds):
        findings = ShallowModuleDetector().find(checkout_model, thresholds)
        assert _targets(findings) == ["FieldWrapper", "FormField"]

    def test_deep_module_with_many_hidden_dependencies(self):
        """Interface size 2 hiding 9 dependencies, none leaking: not shallow.

        The interface floor is lowered so the depth check itself decides.
        """
        thresholds = ThresholdConfig(shallow_min_interface=1)
        m = Module(
            "Gateway",
            line_count=0,
            interface_size=2,
            dependencies=tuple(Dependency(f"dep{i}") for i in range(9)),
        )
        assert module_depth(m, thresholds) == pytest.approx(4.5)
        assert ShallowModuleDetector().find(ModuleModel.of(m), thresholds) == []

    def test_small_interface_never_fires(self, thresholds):
        m = Module("A", line_count=1, interface_size=2)
        assert ShallowModuleDetector().find(ModuleModel.of(m), thresholds) == []

    def test_weight_capped(self, thresholds):
        m = Module("A", line_count=0, interface_size=5)
        [f] = ShallowModuleDetector().find(ModuleModel.of(m), thresholds)
        assert f.raw_weight == ShallowModuleDetector.MAX_WEIGHT

    def test_threshold_is_configurable(self):
        m = Module("A", line_count=100, interface_size=4)  # depth 2.5
        strict = ThresholdConfig(shallow_depth_threshold=3.0)
        assert len(ShallowModuleDetector().find(ModuleModel.of(m), strict)) == 1


class TestPassThrough:
    def test_wrapper_without_declared_members(self, checkout_model, thresholds):
        [f] = PassThroughDetector().find(checkout_model, thresholds)
        assert f.target == "FieldWrapper"
        assert f.related == ("FormField",)

    def test_equal_member_sets(self, thresholds):
        model = ModuleModel.of(
            Module("Outer", interface_size=2, interface=("a", "b"), children=("Inner",),
                   dependencies=(Dependency("x"),)),
            Module("Inner", interface_size=2, interface=("b", "a")),
        )
        assert _targets(PassThroughDetector().find(model, thresholds)) == ["Outer"]

    def test_different_member_sets(self, thresholds):
        model = ModuleModel.of(
            Module("Outer", interface_size=2, interface=("a", "c"), children=("Inner",)),
            Module("Inner", interface_size=2, interface=("a", "b")),
        )
        assert PassThroughDetector().find(model, thresholds) == []

    def test_wrapper_that_adds_state_is_not_pass_through(self, thresholds):
        model = ModuleModel.of(
            Module("Outer", interface_size=2, children=("Inner",), state=(StateItem("open"),)),
            Module("Inner", interface_size=2),
        )
        assert PassThroughDetector().find(model, thresholds) == []


class TestLeakedAbstraction:
    def test_one_finding_per_module(self, thresholds):
        m = Module(
            "Repo",
            dependencies=(Dependency("pg.Pool", leak=True), Dependency("pg.Row", leak=True), Dependency("x")),
        )
        [f] = LeakedAbstractionDetector().find(ModuleModel.of(m), thresholds)
        assert f.raw_weight == 2.0
        assert "pg.Pool" in f.rationale

    def test_no_leak_no_finding(self, thresholds):
        m = Module("Repo", dependencies=(Dependency("pg.Pool"),))
        assert LeakedAbstractionDetector().find(ModuleModel.of(m), thresholds) == []


class TestSyncedState:
    def test_synced_pair_is_structural(self, thresholds):
        """State synced between A and B: STRUCTURAL, cognitive load + unknown unknowns."""
        model = ModuleModel.of(
            Module("A", state=(StateItem("filter", origin=StateOrigin.SYNCED, synced_with=("B",)),)),
            Module("B"),
        )
        [raw] = SyncedStateDetector().find(model, thresholds)
        f = classify_finding(raw)

        assert f.category is Category.WRONG_STATE_BOUNDARY
        assert f.target == "A"
        assert f.related == ("B",)
        assert f.severity is Severity.STRUCTURAL
        assert f.symptoms == frozenset({Symptom.COGNITIVE_LOAD, Symptom.UNKNOWN_UNKNOWNS})

    def test_owned_state_ignored(self, thresholds):
        model = ModuleModel.of(Module("A", state=(StateItem("filter"),)))
        assert SyncedStateDetector().find(model, thresholds) == []


class TestStoredDerivedState:
    def test_owned_with_inputs_fires(self, checkout_model, thresholds):
        [f] = StoredDerivedStateDetector().find(checkout_model, thresholds)
        assert f.target == "PriceRow"
        assert "total" in f.rationale

    def test_declared_derived_is_fine(self, thresholds):
        model = ModuleModel.of(
            Module("A", state=(StateItem("total", origin=StateOrigin.DERIVED, derived_from=("items",)),))
        )
        assert StoredDerivedStateDetector().find(model, thresholds) == []


class TestMixedConcerns:
    def test_clusters_ignore_ambient_and_merge_related(self, thresholds):
        m = Module(
            "A",
            dependencies=(
                Dependency("axios.get"),
                Dependency("fetch"),
                Dependency("logging.getLogger"),
                Dependency("prisma.client"),
            ),
        )
        clusters = dependency_clusters(m, thresholds)
        # axios + fetch merge into the http group, logging is ambient
        assert list(clusters) == ["api", "db"]
        assert clusters["api"] == ["axios.get", "fetch"]

    def test_internal_dependencies_ignored(self, thresholds):
        model = ModuleModel.of(
            Module("A", dependencies=(Dependency("B", internal=True), Dependency("stripe.Client"))),
            Module("B"),
        )
        assert MixedConcernsDetector().find(model, thresholds) == []

    def test_fires_on_checkout_model(self, checkout_model, thresholds):
        [f] = MixedConcernsDetector().find(checkout_model, thresholds)
        assert f.target == "CheckoutForm"
        assert f.raw_weight == 2.0


class TestRerenderCascade:
    def test_non_readers_counted(self, checkout_model, thresholds):
        [f] = RerenderCascadeDetector().find(checkout_model, thresholds)
        assert f.target == "CheckoutForm"
        assert f.related == ("CartBadge",)
        assert f.raw_weight == 1.0

    def test_owner_always_counts_as_reader(self, thresholds):
        model = ModuleModel.of(Module("A", state=(StateItem("n", rerender_scope=("A",)),)))
        assert RerenderCascadeDetector().find(model, thresholds) == []


class TestDuplicateModule:
    def test_fingerprint_ignores_name(self):
        assert fingerprint(Module("A", line_count=3)) == fingerprint(Module("B", line_count=9))

    def test_triplet_flagged(self, checkout_model, thresholds):
        findings = DuplicateModuleDetector().find(checkout_model, thresholds)
        assert _targets(findings) == ["AddressForm", "BillingForm", "ShippingForm"]
        assert all(f.raw_weight == 3.0 for f in findings)
        assert findings[0].related == ("BillingForm", "ShippingForm")

    def test_triplet_escalates_to_moderate(self, checkout_model, thresholds):
        """Duplication count 3 promotes tactical debt from MINOR to MODERATE."""
        findings = DuplicateModuleDetector().find(checkout_model, thresholds)
        assert {classify_finding(f).severity for f in findings} == {Severity.MODERATE}

    def test_pair_stays_minor(self, thresholds):
        shape = dict(line_count=50, interface_size=2, interface=("a", "b"), dependencies=(Dependency("x"),))
        model = ModuleModel.of(Module("A", **shape), Module("B", **shape))
        findings = DuplicateModuleDetector().find(model, thresholds)
        assert len(findings) == 2
        assert {classify_finding(f).severity for f in findings} == {Severity.MINOR}

    def test_small_modules_skipped(self, thresholds):
        shape = dict(line_count=5, interface_size=2, interface=("a", "b"))
        model = ModuleModel.of(Module("A", **shape), Module("B", **shape))
        assert DuplicateModuleDetector().find(model, thresholds) == []


class TestEscapeHatch:
    def test_any_typed_dependency(self, checkout_model, thresholds):
        [f] = EscapeHatchDetector().find(checkout_model, thresholds)
        assert f.target == "FormField"

    def test_case_insensitive(self, thresholds):
        model = ModuleModel.of(Module("A", dependencies=(Dependency("x", type_name="Unknown"),)))
        assert len(EscapeHatchDetector().find(model, thresholds)) == 1

    def test_real_types_ignored(self, thresholds):
        model = ModuleModel.of(Module("A", dependencies=(Dependency("x", type_name="Client"),)))
        assert EscapeHatchDetector().find(model, thresholds) == []
