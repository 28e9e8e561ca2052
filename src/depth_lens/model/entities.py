"""Module model: language-agnostic structure of the code under review.

A model is built fresh per analysis request by an external front-end and is
read-only to the engine. It carries no behavior, only structure: modules,
the state they own, the resources they depend on, and what they compose.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, Optional


class ModuleKind(Enum):
    """What kind of unit a module is."""

    COMPONENT = "component"
    HOOK = "hook"
    SERVICE = "service"
    REPOSITORY = "repository"
    MODULE = "module"


class StateOrigin(Enum):
    """Where a state item's value comes from."""

    OWNED = "owned"  # source of truth lives here
    DERIVED = "derived"  # computed from other values on read
    SYNCED = "synced"  # copied and kept in step with another module


@dataclass(frozen=True)
class Dependency:
    """A reference from a module to a concrete external resource.

    Attributes:
        target: Resource name ("stripe.Client", "@tanstack/react-query", ...)
        leak: True if the resource's type crosses the module's public interface
        type_name: Declared type of the reference, when the front-end knows it
        domain: Concern label; derived from ``target`` when absent
        internal: True if ``target`` names another module in the model
    """

    target: str
    leak: bool = False
    type_name: Optional[str] = None
    domain: Optional[str] = None
    internal: bool = False

    @property
    def concern(self) -> str:
        """Domain of this dependency, normalized to lower case.

        Without an explicit domain the first segment of the target is used:
        ``stripe.Client`` -> ``stripe``, ``@tanstack/react-query`` -> ``tanstack``.
        """
        if self.domain:
            return self.domain.strip().lower()
        name = self.target.strip().lstrip("@")
        for sep in ("/", ".", ":"):
            name = name.split(sep, 1)[0]
        return name.lower()


@dataclass(frozen=True)
class StateItem:
    """A piece of mutable or derived data owned by exactly one module."""

    name: str
    origin: StateOrigin = StateOrigin.OWNED
    source: Optional[str] = None
    derived_from: tuple[str, ...] = ()
    synced_with: tuple[str, ...] = ()
    rerender_scope: tuple[str, ...] = ()
    readers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Module:
    """A named unit of code: component, hook, service, repository or module."""

    id: str
    kind: ModuleKind = ModuleKind.MODULE
    line_count: int = 0
    interface_size: int = 0
    interface: Optional[tuple[str, ...]] = None
    state: tuple[StateItem, ...] = ()
    dependencies: tuple[Dependency, ...] = ()
    children: tuple[str, ...] = ()

    @property
    def leaked_dependencies(self) -> tuple[Dependency, ...]:
        return tuple(d for d in self.dependencies if d.leak)

    @property
    def hidden_dependencies(self) -> tuple[Dependency, ...]:
        return tuple(d for d in self.dependencies if not d.leak)

    def state_item(self, name: str) -> Optional[StateItem]:
        for item in self.state:
            if item.name == name:
                return item
        return None


@dataclass(frozen=True)
class ModuleModel:
    """Mapping of module id -> Module.

    Iteration is always in sorted id order so every consumer (detectors in
    particular) sees modules in the same sequence.
    """

    modules: Mapping[str, Module] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = {key: self.modules[key] for key in sorted(self.modules)}
        object.__setattr__(self, "modules", ordered)

    @classmethod
    def of(cls, *modules: Module) -> ModuleModel:
        return cls({m.id: m for m in modules})

    def __iter__(self) -> Iterator[Module]:
        return iter(self.modules.values())

    def __len__(self) -> int:
        return len(self.modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self.modules

    def get(self, module_id: str) -> Optional[Module]:
        return self.modules.get(module_id)

    @property
    def ids(self) -> list[str]:
        return list(self.modules)
