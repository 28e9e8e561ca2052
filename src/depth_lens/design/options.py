"""Candidate interface designs and their scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import ValidationError
from ..model import Dependency
from ..model.loader import parse_dependency, read_list, read_names


class Level(IntEnum):
    """Ordinal score on one axis."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def label(self) -> str:
        return self.name.lower()


AXES: tuple[str, ...] = ("depth", "generality", "information_hiding", "rerender_impact")


@dataclass(frozen=True)
class DesignOption:
    """A candidate interface for a module that does not exist yet.

    Lives only for one evaluation call.

    Attributes:
        name: Label, unique within one comparison
        description: Informal account of what complexity the design hides
        surface: Public member names
        interface_size: Explicit surface size (defaults to ``len(surface)``)
        dependencies: Resources used behind (or leaked through) the interface
        call_site_shapes: Distinct call-site shapes served without modification
        rerender_scope: Modules re-rendered when the design's state changes
    """

    name: str
    description: str = ""
    surface: tuple[str, ...] = ()
    interface_size: Optional[int] = None
    dependencies: tuple[Dependency, ...] = ()
    call_site_shapes: int = 1
    rerender_scope: tuple[str, ...] = ()

    @property
    def size(self) -> int:
        return self.interface_size if self.interface_size is not None else len(self.surface)

    @property
    def leaked_count(self) -> int:
        return sum(1 for d in self.dependencies if d.leak)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "interfaceSize": self.size,
            "surface": list(self.surface),
            "dependencies": [{"target": d.target, "leak": d.leak} for d in self.dependencies],
            "callSiteShapes": self.call_site_shapes,
            "rerenderScope": list(self.rerender_scope),
        }


@dataclass(frozen=True)
class ScoreVector:
    """Four independent ordinal axes plus the proxy values behind them."""

    depth: Level
    generality: Level
    information_hiding: Level
    rerender_impact: Level
    raw: Mapping[str, float] = field(default_factory=dict, compare=False)

    def axes(self) -> dict[str, Level]:
        return {axis: getattr(self, axis) for axis in AXES}

    @property
    def total(self) -> int:
        return sum(level.value for level in self.axes().values())

    def dominates(self, other: ScoreVector) -> bool:
        """At least as good on every axis and strictly better on one."""
        mine, theirs = self.axes(), other.axes()
        return all(mine[a] >= theirs[a] for a in AXES) and any(mine[a] > theirs[a] for a in AXES)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {axis: level.label for axis, level in self.axes().items()}
        data["raw"] = dict(self.raw)
        return data


def parse_design_options(data: Any) -> list[DesignOption]:
    """Parse ``{"options": [...]}`` or a bare list of option records.

    Raises:
        ValidationError: If any record is malformed
    """
    records = data.get("options") if isinstance(data, Mapping) else data
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise ValidationError(["expected a list of design options"], subject="design options")

    problems: list[str] = []
    options: list[DesignOption] = []
    for i, raw in enumerate(records):
        where = f"options[{i}]"
        if not isinstance(raw, Mapping) or not isinstance(raw.get("name"), str):
            problems.append(f"{where}: option must be a record with a 'name'")
            continue
        raw_deps = read_list(raw.get("dependencies"), f"{where}.dependencies", problems)
        deps = [
            parse_dependency(d, f"{where}.dependencies[{j}]", problems)
            for j, d in enumerate(raw_deps)
        ]
        surface = read_names(raw.get("surface"), f"{where}.surface", problems)
        scope = read_names(
            raw.get("rerender_scope", raw.get("rerenderScope")), f"{where}.rerender_scope", problems
        )
        size = raw.get("interface_size", raw.get("interfaceSize"))
        shapes = raw.get("call_site_shapes", raw.get("callSiteShapes", 1))
        if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
            problems.append(f"{where}: interface_size must be an integer")
            size = None
        if isinstance(shapes, bool) or not isinstance(shapes, int):
            problems.append(f"{where}: call_site_shapes must be an integer")
            shapes = 1
        options.append(
            DesignOption(
                name=raw["name"],
                description=str(raw.get("description", "")),
                surface=surface,
                interface_size=size,
                dependencies=tuple(d for d in deps if d is not None),
                call_site_shapes=shapes,
                rerender_scope=scope,
            )
        )

    if problems:
        raise ValidationError(problems, subject="design options")
    return options
