from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from src.scaffold.config import templates_dir_override

VariantId = Literal[
    "compose",
    "mobile-compose-navigation",
    "tv-compose",
    "compose-library",
    "views",
]

DEFAULT_VARIANT_ID: VariantId = "compose"

BASE_LAYER = "base"
DEFAULT_MODULE = "app"

_ASSETS_DIR = Path(__file__).resolve().parent / "assets"


@dataclass(frozen=True)
class VariantSpec:
    variant_id: VariantId
    label: str
    description: str
    # Gradle module the overlay provides; addons and patches target it.
    module_name: str
    # Library variants drop the base application module.
    is_library: bool = False


_DEFAULT_SPECS: dict[VariantId, VariantSpec] = {
    "compose": VariantSpec(
        variant_id="compose",
        label="Jetpack Compose (Mobile)",
        description="Recommended for phone/tablet apps",
        module_name="app",
    ),
    "mobile-compose-navigation": VariantSpec(
        variant_id="mobile-compose-navigation",
        label="Compose with Navigation",
        description="Includes Navigation, BottomBar, Screens",
        module_name="app",
    ),
    "tv-compose": VariantSpec(
        variant_id="tv-compose",
        label="Compose for TV",
        description="Optimized for Android TV (Leanback)",
        module_name="app",
    ),
    "compose-library": VariantSpec(
        variant_id="compose-library",
        label="Compose Library",
        description="Scaffold for publishing UI libraries",
        module_name="library",
        is_library=True,
    ),
    "views": VariantSpec(
        variant_id="views",
        label="XML Views (Legacy)",
        description="Classic View-based Android development",
        module_name="app",
    ),
}


def parse_variant_id(raw: Any) -> VariantId | None:
    """Normalize user input (case, ``_`` for ``-``) to a known variant id."""
    v = str(raw or "").strip().lower().replace("_", "-")
    return v if v in _DEFAULT_SPECS else None  # type: ignore[return-value]


class UnknownVariantError(ValueError):
    pass


def variant_spec(variant_id: str | None = None) -> VariantSpec:
    """Look up a variant; an empty id selects the default.

    Raises UnknownVariantError for ids that are not registered.
    """
    if not str(variant_id or "").strip():
        return _DEFAULT_SPECS[DEFAULT_VARIANT_ID]
    vid = parse_variant_id(variant_id)
    if vid is None:
        known = ", ".join(_DEFAULT_SPECS)
        raise UnknownVariantError(f"unknown variant {variant_id!r} (expected one of: {known})")
    return _DEFAULT_SPECS[vid]


def all_variants() -> list[VariantSpec]:
    return list(_DEFAULT_SPECS.values())


def template_root() -> Path:
    """Return the directory holding the template layers.

    Can be overridden by CREATE_DROID_TEMPLATES_DIR.
    """
    override = templates_dir_override()
    return Path(override).expanduser() if override else _ASSETS_DIR


def layer_dir(layer: str, *, root: Path | None = None) -> Path:
    return (root or template_root()) / layer
