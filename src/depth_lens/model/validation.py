"""Module model validation.

Run before any detector sees a model: a malformed or inconsistent model is
rejected as a whole, with every problem listed, instead of producing
findings against half-valid structure.

Checks:
    - numeric fields are non-negative and declared interfaces match their size
    - child, sync-partner, re-render-scope, reader and internal dependency
      references all name modules in the model
    - state item names are unique per module
    - synced state names at least one partner other than its owner
    - derived state says what it is derived from
    - composition (children) is acyclic
"""

from __future__ import annotations

from graphlib import CycleError, TopologicalSorter

from ..exceptions import ValidationError
from ..logging_config import get_logger
from .entities import Module, ModuleModel, StateItem, StateOrigin

logger = get_logger(__name__)


def collect_problems(model: ModuleModel) -> list[str]:
    """Return every consistency problem in the model (empty if valid)."""
    problems: list[str] = []

    for module in model:
        problems.extend(_check_module(module, model))

    problems.extend(_check_composition_cycles(model))
    return problems


def validate_model(model: ModuleModel) -> None:
    """Raise ValidationError listing all problems, or return silently."""
    problems = collect_problems(model)
    if problems:
        logger.debug(f"Model rejected with {len(problems)} problem(s)")
        raise ValidationError(problems)


def _check_module(module: Module, model: ModuleModel) -> list[str]:
    problems: list[str] = []
    mid = module.id

    if not mid:
        problems.append("module with empty id")
    if module.line_count < 0:
        problems.append(f"{mid}: line_count must be non-negative")
    if module.interface_size < 0:
        problems.append(f"{mid}: interface_size must be non-negative")
    if module.interface is not None and len(module.interface) != module.interface_size:
        problems.append(
            f"{mid}: interface lists {len(module.interface)} members "
            f"but interface_size is {module.interface_size}"
        )

    for child in module.children:
        if child == mid:
            problems.append(f"{mid}: module lists itself as a child")
        elif child not in model:
            problems.append(f"{mid}: dangling child reference '{child}'")

    for dep in module.dependencies:
        if not dep.target.strip():
            problems.append(f"{mid}: dependency with empty target")
        elif dep.internal and dep.target not in model:
            problems.append(f"{mid}: dangling dependency reference '{dep.target}'")

    seen: set[str] = set()
    for item in module.state:
        if not item.name:
            problems.append(f"{mid}: state item with empty name")
        elif item.name in seen:
            problems.append(f"{mid}: duplicate state item '{item.name}'")
        seen.add(item.name)
        problems.extend(_check_state_item(mid, item, model))

    return problems


def _check_state_item(owner: str, item: StateItem, model: ModuleModel) -> list[str]:
    problems: list[str] = []
    label = f"{owner}.{item.name}"

    if item.origin is StateOrigin.SYNCED:
        partners = [p for p in item.synced_with if p != owner]
        if not partners:
            problems.append(f"{label}: synced state must name a partner module")
    elif item.synced_with:
        problems.append(f"{label}: synced_with given but origin is '{item.origin.value}'")

    if item.origin is StateOrigin.DERIVED and not (item.derived_from or item.source):
        problems.append(f"{label}: derived state must name its source or inputs")

    for ref_kind, refs in (
        ("sync partner", item.synced_with),
        ("re-render scope", item.rerender_scope),
        ("reader", item.readers),
    ):
        for ref in refs:
            if ref not in model:
                problems.append(f"{label}: dangling {ref_kind} reference '{ref}'")

    return problems


def _check_composition_cycles(model: ModuleModel) -> list[str]:
    graph = {
        m.id: [c for c in m.children if c in model and c != m.id]
        for m in model
    }
    try:
        TopologicalSorter(graph).prepare()
    except CycleError as e:
        cycle = e.args[1] if len(e.args) > 1 else []
        return [f"composition cycle: {' -> '.join(cycle)}"]
    return []
