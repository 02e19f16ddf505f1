"""Materialize an Android project from the template layers.

The base layer is copied first, the variant overlay on top of it; then
placeholders are patched, the template package directory is moved to the
real package path and the requested addons are installed.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from src.addons.installer import AddonInstaller
from src.addons.resolver import RecipeResolver
from src.scaffold.config import git_init_enabled
from src.scaffold.git import init_repository
from src.scaffold.manifest import render_local_properties, write_manifest
from src.scaffold.patcher import (
    android_string,
    kotlin_string,
    package_name_for,
    package_path,
    patch_file,
    patch_tree,
    token,
)
from src.templates.registry import BASE_LAYER, DEFAULT_MODULE, layer_dir, variant_spec
from src.versions.defaults import DEFAULT_VERSIONS

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

    from src.scaffold.git import CommandRunner

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE_PATH = Path("com", "example", "template")
SOURCE_ROOTS = ("kotlin", "java")

_NAMESPACE_RE = re.compile(r'^\s*namespace\s*=\s*"([^"]+)"', re.MULTILINE)


class TemplateNotFoundError(RuntimeError):
    pass


@dataclass(frozen=True)
class ProjectOptions:
    project_path: Path
    project_name: str
    variant: str
    sdk_path: str
    addons: tuple[str, ...] = ()
    versions: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_VERSIONS))
    init_git: bool | None = None


def _copy_tree(src: Path, dst: Path) -> None:
    shutil.copytree(src, dst, dirs_exist_ok=True)


def _move_replacing(src: Path, dst: Path) -> None:
    if dst.exists():
        shutil.rmtree(dst)
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(src), str(dst))


def remove_empty_parents(path: Path, *, stop_at: Path) -> None:
    """Remove ``path`` and its ancestors while they are empty.

    Stops at the first non-empty directory and never removes ``stop_at``.
    """
    cur = path.resolve()
    stop = stop_at.resolve()
    while cur != stop and stop in cur.parents:
        # An already-moved leaf no longer exists; its parents may still be empty.
        if cur.exists():
            if not cur.is_dir() or any(cur.iterdir()):
                break
            cur.rmdir()
        cur = cur.parent


def relocate_sources(
    module_dir: Path, package_name: str, replacements: Mapping[str, str]
) -> list[Path]:
    """Move ``com/example/template`` to the package path in every source root."""
    moved: list[Path] = []
    for root_name in SOURCE_ROOTS:
        src_root = module_dir / "src" / "main" / root_name
        old = src_root / TEMPLATE_PACKAGE_PATH
        if not old.is_dir():
            continue
        new = src_root / package_path(package_name)
        if new.resolve() != old.resolve():
            _move_replacing(old, new)
        patch_tree(new, replacements)
        if new.resolve() != old.resolve():
            remove_empty_parents(old, stop_at=src_root)
        moved.append(new)
    return moved


def _version_tokens(versions: Mapping[str, str]) -> dict[str, str]:
    return {token(k): str(v) for k, v in versions.items()}


def generate_project(
    options: ProjectOptions,
    *,
    resolver: RecipeResolver | None = None,
    git_runner: CommandRunner | None = None,
) -> Path:
    spec = variant_spec(options.variant)
    module = spec.module_name
    dest = Path(options.project_path)

    base_template = layer_dir(BASE_LAYER)
    variant_template = layer_dir(spec.variant_id)
    # Packaging check: runs before the destination is touched.
    if not base_template.is_dir():
        raise TemplateNotFoundError(f"Base template not found at {base_template}")
    if not variant_template.is_dir():
        raise TemplateNotFoundError(
            f"Variant template not found: {spec.variant_id} at {variant_template}"
        )

    dest.mkdir(parents=True, exist_ok=True)

    logger.info("Copying base template...")
    _copy_tree(base_template, dest)
    if spec.is_library:
        shutil.rmtree(dest / DEFAULT_MODULE, ignore_errors=True)

    gitignore = dest / "_gitignore"
    if gitignore.exists():
        gitignore.replace(dest / ".gitignore")

    logger.info("Applying %s template...", spec.variant_id)
    _copy_tree(variant_template, dest)

    logger.info("Patching configuration...")
    package_name = package_name_for(options.project_name)
    versions = {**DEFAULT_VERSIONS, **dict(options.versions)}
    version_tokens = _version_tokens(versions)

    patch_file(
        dest / "settings.gradle.kts",
        {
            "{{PROJECT_NAME}}": kotlin_string(options.project_name),
            'include(":app")': f'include(":{module}")',
        },
    )
    patch_file(
        dest / module / "build.gradle.kts",
        {
            **version_tokens,
            "{{APPLICATION_ID}}": package_name,
            "{{PACKAGE_NAME}}": package_name,
        },
    )
    patch_file(dest / "gradle" / "libs.versions.toml", version_tokens)
    patch_file(dest / "gradle" / "wrapper" / "gradle-wrapper.properties", version_tokens)
    patch_file(
        dest / module / "src" / "main" / "res" / "values" / "strings.xml",
        {"{{PROJECT_NAME}}": android_string(options.project_name)},
    )

    source_tokens = {
        "{{PACKAGE_NAME}}": package_name,
        "{{APPLICATION_ID}}": package_name,
        "{{PROJECT_NAME}}": kotlin_string(options.project_name),
    }
    relocate_sources(dest / module, package_name, source_tokens)

    if options.addons:
        installer = AddonInstaller(
            dest,
            module,
            package_name,
            resolver=resolver or RecipeResolver(),
            versions=versions,
        )
        installer.install_all(options.addons)

    (dest / "local.properties").write_text(
        render_local_properties(options.sdk_path), encoding="utf-8"
    )

    logger.info("Adding npm convenience scripts...")
    write_manifest(
        dest,
        project_name=options.project_name,
        module_name=module,
        package_name=package_name,
    )

    init_git = git_init_enabled() if options.init_git is None else options.init_git
    if init_git:
        init_repository(dest, runner=git_runner)

    return dest


def detect_module(project_path: Path) -> str:
    settings = project_path / "settings.gradle.kts"
    if settings.is_file() and 'include(":library")' in settings.read_text(encoding="utf-8"):
        return "library"
    return DEFAULT_MODULE


def detect_package(project_path: Path, module: str) -> str | None:
    build_file = project_path / module / "build.gradle.kts"
    if not build_file.is_file():
        return None
    m = _NAMESPACE_RE.search(build_file.read_text(encoding="utf-8"))
    return m.group(1) if m else None


def install_addons(
    project_path: str | Path,
    names: list[str],
    *,
    versions: Mapping[str, str] | None = None,
    resolver: RecipeResolver | None = None,
) -> list[str]:
    """Install addons into an already generated project."""
    root = Path(project_path)
    module = detect_module(root)
    package_name = detect_package(root, module)
    if not package_name:
        raise FileNotFoundError(
            f"No Android module with a namespace found at {root / module / 'build.gradle.kts'}"
        )
    installer = AddonInstaller(
        root,
        module,
        package_name,
        resolver=resolver or RecipeResolver(),
        versions={**DEFAULT_VERSIONS, **dict(versions or {})},
    )
    return installer.install_all(names)
