"""Tests for the detector registry: conflicts, isolation, concurrency, cancel."""

import threading

import pytest

from depth_lens.exceptions import AnalysisCancelled, ConflictError, ErrorCode
from depth_lens.insights.detectors import (
    DetectorRegistry,
    LeakedAbstractionDetector,
    build_registry,
    get_default_detectors,
    get_default_registry,
)
from depth_lens.insights.models import Category, Finding


class _ExplodingDetector:
    name = "exploding"
    category = Category.TACTICAL_DEBT
    description = "always raises"

    def find(self, model, thresholds):
        raise RuntimeError("boom")


class _EveryModuleDetector:
    """Flags every module; used to check registration-order concatenation."""

    name = "every_module"
    category = Category.TACTICAL_DEBT
    description = "flags everything"

    def find(self, model, thresholds):
        return [
            Finding(self.name, self.category, m.id, "flagged", 1.0, target_lines=m.line_count)
            for m in model
        ]


class _MislabelledDetector:
    name = "mislabelled"
    category = Category.TACTICAL_DEBT
    description = "claims a category it does not own"

    def find(self, model, thresholds):
        return [Finding(self.name, Category.MIXED_CONCERNS, m.id, "x", 1.0) for m in model]


class _GhostTargetDetector:
    name = "ghost"
    category = Category.TACTICAL_DEBT
    description = "targets a module that does not exist"

    def find(self, model, thresholds):
        return [Finding(self.name, self.category, "Nowhere", "x", 1.0)]


class TestRegistration:
    def test_duplicate_name_conflicts(self):
        registry = DetectorRegistry([LeakedAbstractionDetector()])
        with pytest.raises(ConflictError) as exc:
            registry.register(LeakedAbstractionDetector())
        assert exc.value.code is ErrorCode.DL200
        assert exc.value.detector_id == "leaked_abstraction"

    def test_frozen_registry_rejects_registration(self):
        registry = DetectorRegistry().freeze()
        with pytest.raises(ConflictError) as exc:
            registry.register(_ExplodingDetector())
        assert exc.value.code is ErrorCode.DL201

    def test_default_registry_is_cached_and_frozen(self):
        assert get_default_registry() is get_default_registry()
        assert get_default_registry().frozen
        assert get_default_registry().names == [d.name for d in get_default_detectors()]

    def test_build_registry_with_extra(self):
        registry = build_registry(extra=[_EveryModuleDetector()])
        assert "every_module" in registry
        assert len(registry) == len(get_default_detectors()) + 1
        assert not registry.frozen

    def test_get_unknown(self):
        with pytest.raises(KeyError):
            DetectorRegistry().get("missing")


class TestRun:
    def test_failure_is_isolated(self, checkout_model):
        """One detector raising never stops the others."""
        baseline = build_registry().run(checkout_model)
        run = build_registry(extra=[_ExplodingDetector()]).run(checkout_model)

        assert run.findings == baseline.findings
        assert len(run.failures) == 1
        assert run.failures[0].detector_id == "exploding"
        assert isinstance(run.failures[0].error, RuntimeError)

    def test_failure_is_logged(self, checkout_model, caplog):
        with caplog.at_level("WARNING", logger="depth_lens"):
            DetectorRegistry([_ExplodingDetector()]).run(checkout_model)
        assert any("exploding" in r.getMessage() for r in caplog.records)

    @pytest.mark.parametrize("detector", [_MislabelledDetector(), _GhostTargetDetector()])
    def test_malformed_output_is_a_failure(self, detector, checkout_model):
        run = DetectorRegistry([detector]).run(checkout_model)
        assert run.findings == []
        assert [f.detector_id for f in run.failures] == [detector.name]

    def test_adding_a_detector_keeps_existing_findings(self, checkout_model):
        """Findings of existing detectors do not change when one is added."""
        before = build_registry().run(checkout_model).findings
        after = build_registry(extra=[_EveryModuleDetector()]).run(checkout_model).findings
        assert [f for f in after if f.detector_id != "every_module"] == before

    def test_registration_order_concatenation(self, checkout_model):
        registry = DetectorRegistry([_EveryModuleDetector(), LeakedAbstractionDetector()])
        ids = [f.detector_id for f in registry.run(checkout_model).findings]
        first_leak = ids.index("leaked_abstraction")
        assert set(ids[:first_leak]) == {"every_module"}

    def test_parallel_equals_sequential(self, checkout_model):
        registry = build_registry(extra=[_ExplodingDetector()])
        sequential = registry.run(checkout_model, workers=1)
        parallel = registry.run(checkout_model, workers=4)
        assert parallel.findings == sequential.findings
        assert [f.detector_id for f in parallel.failures] == ["exploding"]

    def test_cancel_before_first_detector(self, checkout_model):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(AnalysisCancelled) as exc:
            build_registry().run(checkout_model, cancel=cancel)
        assert exc.value.completed == 0

    def test_cancel_between_detectors(self, checkout_model):
        """Setting the event mid-run stops before the next detector."""
        cancel = threading.Event()
        seen = []

        def on_progress(msg):
            seen.append(msg)
            if len(seen) == 2:
                cancel.set()

        with pytest.raises(AnalysisCancelled) as exc:
            build_registry().run(checkout_model, cancel=cancel, on_progress=on_progress)
        assert exc.value.completed == 2
