"""Shared test fixtures for depth-lens tests."""

import logging
import os

import pytest

from depth_lens.config import ThresholdConfig
from depth_lens.insights.models import Category, Finding, Symptom
from depth_lens.logging_config import LOGGER_NAME
from depth_lens.model import (
    Dependency,
    Module,
    ModuleKind,
    ModuleModel,
    StateItem,
    StateOrigin,
)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def thresholds():
    """Default detector thresholds."""
    return ThresholdConfig()


@pytest.fixture
def make_finding():
    """Factory for findings; classified when ``severity`` is given."""

    def _make(
        target="A",
        category=Category.LEAKED_ABSTRACTION,
        detector_id=None,
        severity=None,
        symptoms=None,
        raw_weight=1.0,
        target_lines=100,
    ):
        if severity is not None and symptoms is None:
            symptoms = frozenset({Symptom.COGNITIVE_LOAD})
        return Finding(
            detector_id=detector_id or category.value.replace("-", "_"),
            category=category,
            target=target,
            rationale=f"{category.value} on {target}",
            raw_weight=raw_weight,
            target_lines=target_lines,
            severity=severity,
            symptoms=symptoms or frozenset(),
        )

    return _make


@pytest.fixture
def checkout_model():
    """Small front-end model exercising every built-in detector family.

    - CheckoutForm: leaks stripe, mixes payments/http, re-renders a non-reader
    - CartBadge / CartPanel: synced cart count
    - PriceRow: stores a derived total
    - AddressForm / ShippingForm / BillingForm: near-identical triplets
    - FormField: shallow, typed with an escape hatch
    - FieldWrapper: passes FormField's interface straight through
    """
    address_like = dict(
        kind=ModuleKind.COMPONENT,
        line_count=80,
        interface_size=4,
        interface=("values", "onSubmit", "errors", "reset"),
        state=(StateItem("draft"), StateItem("touched")),
        dependencies=(
            Dependency("formik.useFormik", domain="forms"),
            Dependency("yup.object", domain="forms"),
        ),
        children=("FormField",),
    )
    modules = [
        Module(
            id="CheckoutForm",
            kind=ModuleKind.COMPONENT,
            line_count=240,
            interface_size=2,
            state=(
                StateItem(
                    "paymentIntent",
                    rerender_scope=("CheckoutForm", "PriceRow", "CartBadge"),
                    readers=("PriceRow",),
                ),
            ),
            dependencies=(
                Dependency("stripe.Client", leak=True, domain="payments"),
                Dependency("axios.post"),
                Dependency("logging.getLogger"),
            ),
            children=("PriceRow", "AddressForm"),
        ),
        Module(
            id="CartBadge",
            kind=ModuleKind.COMPONENT,
            line_count=30,
            interface_size=1,
            state=(StateItem("count", origin=StateOrigin.SYNCED, synced_with=("CartPanel",)),),
        ),
        Module(id="CartPanel", kind=ModuleKind.COMPONENT, line_count=120, interface_size=2),
        Module(
            id="PriceRow",
            kind=ModuleKind.COMPONENT,
            line_count=40,
            interface_size=2,
            state=(StateItem("total", derived_from=("price", "quantity")),),
        ),
        Module(id="AddressForm", **address_like),
        Module(id="ShippingForm", **address_like),
        Module(id="BillingForm", **address_like),
        Module(
            id="FormField",
            kind=ModuleKind.COMPONENT,
            line_count=12,
            interface_size=4,
            interface=("value", "onChange", "errors", "disabled"),
            dependencies=(Dependency("dom.input", type_name="any"),),
        ),
        Module(
            id="FieldWrapper",
            kind=ModuleKind.COMPONENT,
            line_count=30,
            interface_size=4,
            children=("FormField",),
        ),
    ]
    return ModuleModel.of(*modules)


@pytest.fixture
def checkout_data():
    """Serialized form of a small model, as a front-end would send it."""
    return {
        "modules": {
            "CheckoutForm": {
                "kind": "component",
                "lineCount": 240,
                "interfaceSize": 2,
                "state": [
                    {
                        "name": "paymentIntent",
                        "rerenderScope": ["PriceRow"],
                        "readers": [],
                    }
                ],
                "dependencies": [
                    {"target": "stripe.Client", "leak": True},
                    "axios.post",
                ],
                "children": ["PriceRow"],
            },
            "PriceRow": {
                "kind": "component",
                "line_count": 40,
                "interface": ["price", "quantity"],
            },
        }
    }


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """No user or project config file, no DEPTH_LENS_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("DEPTH_LENS_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging between tests so caplog keeps seeing records."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
