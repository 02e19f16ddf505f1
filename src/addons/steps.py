from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Union


class RecipeParseError(ValueError):
    pass


@dataclass(frozen=True)
class VersionStep:
    key: str
    value: str


@dataclass(frozen=True)
class LibraryStep:
    key: str
    # Either a "group:name:version" coordinate or a pre-formatted inline table.
    value: str


@dataclass(frozen=True)
class PluginStep:
    key: str
    value: str


@dataclass(frozen=True)
class RootPluginStep:
    key: str


@dataclass(frozen=True)
class ModulePluginStep:
    key: str


@dataclass(frozen=True)
class ImplementationStep:
    value: str


@dataclass(frozen=True)
class KspStep:
    value: str


@dataclass(frozen=True)
class PatchFileStep:
    file: str
    pattern: str
    replacement: str


@dataclass(frozen=True)
class CreateFileStep:
    file: str
    content: str


AddonStep = Union[
    VersionStep,
    LibraryStep,
    PluginStep,
    RootPluginStep,
    ModulePluginStep,
    ImplementationStep,
    KspStep,
    PatchFileStep,
    CreateFileStep,
]

# Wire tag -> (step class, required fields).
_STEP_TYPES: dict[str, tuple[type, tuple[str, ...]]] = {
    "toml_version": (VersionStep, ("key", "value")),
    "toml_library": (LibraryStep, ("key", "value")),
    "toml_plugin": (PluginStep, ("key", "value")),
    "gradle_plugin_root": (RootPluginStep, ("key",)),
    "gradle_plugin_module": (ModulePluginStep, ("key",)),
    "gradle_implementation": (ImplementationStep, ("value",)),
    "gradle_ksp": (KspStep, ("value",)),
    "patch_file": (PatchFileStep, ("file", "pattern", "replacement")),
    "create_file": (CreateFileStep, ("file", "content")),
}

STEP_TAGS: tuple[str, ...] = tuple(_STEP_TYPES)


def step_tag(step: AddonStep) -> str:
    for tag, (cls, _fields) in _STEP_TYPES.items():
        if type(step) is cls:
            return tag
    raise TypeError(f"not an addon step: {step!r}")


def parse_step(data: Any) -> AddonStep:
    if not isinstance(data, dict):
        raise RecipeParseError(f"step must be an object, got {type(data).__name__}")
    tag = str(data.get("type") or "").strip()
    if tag not in _STEP_TYPES:
        raise RecipeParseError(f"unknown step type: {tag!r}")
    cls, fields = _STEP_TYPES[tag]
    kwargs: dict[str, str] = {}
    for f in fields:
        v = data.get(f)
        if not isinstance(v, str) or (f != "content" and not v):
            raise RecipeParseError(f"{tag} step requires string field {f!r}")
        kwargs[f] = v
    return cls(**kwargs)


def map_templated_fields(step: AddonStep, fn: Callable[[str], str]) -> AddonStep:
    """Apply ``fn`` to the fields that may carry version tokens."""
    changes: dict[str, str] = {}
    for f in ("value", "replacement", "content"):
        if hasattr(step, f):
            changes[f] = fn(getattr(step, f))
    return replace(step, **changes) if changes else step
