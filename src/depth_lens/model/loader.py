"""Build a ModuleModel from its serialized form.

The serialized form is a mapping of module id -> module record, optionally
wrapped as ``{"modules": {...}}``. Keys are snake_case; the camelCase
spellings a JavaScript front-end tends to emit (``lineCount``,
``interfaceSize``, ``rerenderScope``...) are accepted as aliases.

Example record::

    "CheckoutForm": {
        "kind": "component",
        "line_count": 240,
        "interface_size": 7,
        "state": [{"name": "total", "origin": "owned", "derived_from": ["items"]}],
        "dependencies": [{"target": "stripe.Client", "leak": true}],
        "children": ["PriceRow"]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from ..exceptions import ModelLoadError, ValidationError
from ..logging_config import get_logger
from .entities import Dependency, Module, ModuleKind, ModuleModel, StateItem, StateOrigin
from .validation import collect_problems

logger = get_logger(__name__)

_ALIASES: dict[str, tuple[str, ...]] = {
    "line_count": ("lineCount", "lines"),
    "interface_size": ("interfaceSize",),
    "type_name": ("typeName", "type"),
    "derived_from": ("derivedFrom",),
    "synced_with": ("syncedWith",),
    "rerender_scope": ("rerenderScope", "reRenderScope"),
}

_MISSING = object()


def _get(record: Mapping[str, Any], key: str, default: Any = _MISSING) -> Any:
    if key in record:
        return record[key]
    for alias in _ALIASES.get(key, ()):
        if alias in record:
            return record[alias]
    return default


def read_names(value: Any, where: str, problems: list[str]) -> tuple[str, ...]:
    if value is _MISSING or value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        problems.append(f"{where}: expected a list of names")
        return ()
    if not all(isinstance(v, str) for v in value):
        problems.append(f"{where}: expected a list of names")
        return ()
    return tuple(value)


def read_list(value: Any, where: str, problems: list[str]) -> list[Any]:
    if value is _MISSING or value is None:
        return []
    if not isinstance(value, (list, tuple)):
        problems.append(f"{where}: expected a list")
        return []
    return list(value)


def _bool_field(record: Mapping[str, Any], key: str, where: str, problems: list[str]) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        problems.append(f"{where}: '{key}' must be a boolean")
        return False
    return value


def _int_field(record: Mapping[str, Any], key: str, where: str, problems: list[str]) -> Optional[int]:
    value = _get(record, key)
    if value is _MISSING:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        problems.append(f"{where}: '{key}' must be an integer")
        return None
    return value


def parse_dependency(raw: Any, where: str, problems: list[str]) -> Optional[Dependency]:
    if isinstance(raw, str):
        return Dependency(target=raw)
    if not isinstance(raw, Mapping):
        problems.append(f"{where}: dependency must be a name or a record")
        return None
    target = raw.get("target")
    if not isinstance(target, str):
        problems.append(f"{where}: dependency missing required field 'target'")
        return None
    type_name = _get(raw, "type_name", None)
    domain = raw.get("domain")
    return Dependency(
        target=target,
        leak=_bool_field(raw, "leak", where, problems),
        type_name=str(type_name) if type_name is not None else None,
        domain=str(domain) if domain is not None else None,
        internal=_bool_field(raw, "internal", where, problems),
    )


def _parse_state_item(raw: Any, where: str, problems: list[str]) -> Optional[StateItem]:
    if not isinstance(raw, Mapping):
        problems.append(f"{where}: state item must be a record")
        return None
    name = raw.get("name")
    if not isinstance(name, str):
        problems.append(f"{where}: state item missing required field 'name'")
        return None
    label = f"{where}.{name}"
    origin_raw = raw.get("origin", StateOrigin.OWNED.value)
    try:
        origin = StateOrigin(origin_raw)
    except ValueError:
        problems.append(f"{label}: unknown origin '{origin_raw}'")
        return None
    source = raw.get("source")
    return StateItem(
        name=name,
        origin=origin,
        source=str(source) if source is not None else None,
        derived_from=read_names(_get(raw, "derived_from"), f"{label}.derived_from", problems),
        synced_with=read_names(_get(raw, "synced_with"), f"{label}.synced_with", problems),
        rerender_scope=read_names(_get(raw, "rerender_scope"), f"{label}.rerender_scope", problems),
        readers=read_names(raw.get("readers"), f"{label}.readers", problems),
    )


def _parse_module(module_id: str, record: Any, problems: list[str]) -> Optional[Module]:
    if not isinstance(record, Mapping):
        problems.append(f"{module_id}: module record must be a mapping")
        return None

    declared_id = record.get("id", module_id)
    if declared_id != module_id:
        problems.append(f"{module_id}: record id '{declared_id}' does not match its key")

    kind_raw = record.get("kind", _MISSING)
    kind = ModuleKind.MODULE
    if kind_raw is _MISSING:
        problems.append(f"{module_id}: missing required field 'kind'")
    else:
        try:
            kind = ModuleKind(kind_raw)
        except ValueError:
            problems.append(f"{module_id}: unknown kind '{kind_raw}'")

    line_count = _int_field(record, "line_count", module_id, problems)
    if line_count is None and _get(record, "line_count") is _MISSING:
        problems.append(f"{module_id}: missing required field 'line_count'")

    interface: Optional[tuple[str, ...]] = None
    if "interface" in record:
        interface = read_names(record["interface"], f"{module_id}.interface", problems)

    interface_size = _int_field(record, "interface_size", module_id, problems)
    if interface_size is None and _get(record, "interface_size") is _MISSING:
        if interface is None:
            problems.append(f"{module_id}: missing required field 'interface_size'")
        else:
            interface_size = len(interface)

    state = []
    for i, raw in enumerate(read_list(record.get("state"), f"{module_id}.state", problems)):
        item = _parse_state_item(raw, f"{module_id}.state[{i}]", problems)
        if item is not None:
            state.append(item)

    dependencies = []
    for i, raw in enumerate(
        read_list(record.get("dependencies"), f"{module_id}.dependencies", problems)
    ):
        dep = parse_dependency(raw, f"{module_id}.dependencies[{i}]", problems)
        if dep is not None:
            dependencies.append(dep)

    return Module(
        id=module_id,
        kind=kind,
        line_count=line_count or 0,
        interface_size=interface_size or 0,
        interface=interface,
        state=tuple(state),
        dependencies=tuple(dependencies),
        children=read_names(record.get("children"), f"{module_id}.children", problems),
    )


def _unwrap(data: Mapping[str, Any]) -> Mapping[str, Any]:
    inner = data.get("modules")
    if (
        len(data) == 1
        and isinstance(inner, Mapping)
        and all(isinstance(record, Mapping) for record in inner.values())
    ):
        return inner
    return data


def parse_model(data: Mapping[str, Any]) -> ModuleModel:
    """Parse and validate a serialized module model.

    Accepts a bare mapping of module id to record, or the same mapping
    wrapped as ``{"modules": {...}}``. A lone module named ``modules`` is read as
    a module, not as the wrapper.

    Raises:
        ValidationError: If any record is malformed or any reference dangles.
            Raised before the model reaches a detector.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(["model must be a mapping of module id to module record"])

    records = _unwrap(data)

    problems: list[str] = []
    modules: dict[str, Module] = {}
    for module_id, record in records.items():
        module = _parse_module(str(module_id), record, problems)
        if module is not None:
            modules[module.id] = module

    model = ModuleModel(modules)
    problems.extend(collect_problems(model))
    if problems:
        raise ValidationError(problems)

    logger.debug(f"Parsed model with {len(model)} modules")
    return model


def load_model_file(path: Path) -> ModuleModel:
    """Read a JSON or TOML model file and parse it."""
    return parse_model(read_structured_file(path))


def read_structured_file(path: Path) -> Any:
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ModelLoadError(str(path), str(e))

    if path.suffix.lower() == ".toml":
        try:
            import tomllib
        except ModuleNotFoundError:
            import tomli as tomllib  # type: ignore[no-redef]
        try:
            return tomllib.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            raise ModelLoadError(str(path), str(e))

    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ModelLoadError(str(path), str(e))
