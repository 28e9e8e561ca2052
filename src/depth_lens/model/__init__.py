"""Module model — normalized structure handed to the engine by a front-end."""

from .entities import Dependency, Module, ModuleKind, ModuleModel, StateItem, StateOrigin
from .loader import load_model_file, parse_model
from .validation import collect_problems, validate_model

__all__ = [
    "Dependency",
    "Module",
    "ModuleKind",
    "ModuleModel",
    "StateItem",
    "StateOrigin",
    "load_model_file",
    "parse_model",
    "collect_problems",
    "validate_model",
]
