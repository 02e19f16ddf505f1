from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from src.addons.steps import (
    AddonStep,
    CreateFileStep,
    ImplementationStep,
    KspStep,
    LibraryStep,
    ModulePluginStep,
    PatchFileStep,
    PluginStep,
    RootPluginStep,
    VersionStep,
    map_templated_fields,
    step_tag,
)
from src.scaffold import catalog
from src.scaffold.patcher import package_path, substitute, token

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Mapping

    from src.addons.resolver import RecipeResolver

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+|[^\w\s]")
_WORD_RE = re.compile(r"\w")


class UnsafePathError(ValueError):
    pass


def _plugin_alias(key: str) -> str:
    return f"alias(libs.plugins.{key.replace('-', '.')})"


def _is_word(tok: str) -> bool:
    return bool(_WORD_RE.match(tok))


def _line_re(line: str) -> re.Pattern[str]:
    """Match ``line`` as a whole line, ignoring indentation and spacing."""
    parts = _TOKEN_RE.findall(line)
    body = ""
    for prev, cur in zip([None, *parts], parts):
        if prev is not None:
            body += r"[ \t]+" if _is_word(prev) and _is_word(cur) else r"[ \t]*"
        body += re.escape(cur)
    return re.compile(rf"^[ \t]*{body}[ \t]*(//.*)?\r?$", re.MULTILINE)


def insert_after_opener(path: Path, opener: str, line: str) -> bool:
    """Insert an indented ``line`` right after the first ``opener``.

    Skipped when an equivalent line (same tokens, any spacing) is already in
    the file or the opener is missing.
    """
    if not path.is_file():
        return False
    content = path.read_text(encoding="utf-8")
    if _line_re(line).search(content):
        return False
    idx = content.find(opener)
    if idx == -1:
        return False
    cut = idx + len(opener)
    patched = content[:cut] + "\n    " + line.strip() + content[cut:]
    path.write_text(patched, encoding="utf-8")
    return True


def patch_once(path: Path, pattern: str, replacement: str) -> bool:
    """Replace the first literal ``pattern`` unless ``replacement`` is already there."""
    if not path.is_file():
        return False
    content = path.read_text(encoding="utf-8")
    if replacement.strip() in content or pattern not in content:
        return False
    path.write_text(content.replace(pattern, replacement, 1), encoding="utf-8")
    return True


class AddonInstaller:
    """Apply addon recipes to a generated project tree.

    Prerequisites install first (depth-first, in listed order). Each step is
    isolated: a failing step is logged and the remaining steps still run.
    """

    def __init__(
        self,
        project_path: str | Path,
        module_name: str,
        package_name: str,
        *,
        resolver: RecipeResolver,
        versions: Mapping[str, str] | None = None,
    ) -> None:
        self.project_path = Path(project_path)
        self.module_name = module_name
        self.package_name = package_name
        self._resolver = resolver
        self._version_tokens = {token(k): str(v) for k, v in (versions or {}).items()}
        self._in_progress: set[str] = set()

    @property
    def catalog_path(self) -> Path:
        return self.project_path / "gradle" / "libs.versions.toml"

    @property
    def module_build_file(self) -> Path:
        return self.project_path / self.module_name / "build.gradle.kts"

    @property
    def root_build_file(self) -> Path:
        return self.project_path / "build.gradle.kts"

    def install_all(self, names: Iterable[str]) -> list[str]:
        return [n for n in names if self.install(n)]

    def install(self, name: str) -> bool:
        if name in self._in_progress:
            logger.warning("Addon %s depends on itself; skipping repeated install", name)
            return False

        recipe = self._resolver.resolve(name)
        if recipe is None:
            logger.error("Recipe not found: %s", name)
            return False

        logger.info("Installing addon: %s", recipe.name)
        self._in_progress.add(name)
        try:
            for dep in recipe.dependencies:
                self.install(dep)

            for step in recipe.steps:
                try:
                    self.execute_step(map_templated_fields(step, self.apply_versions))
                except Exception as exc:
                    logger.warning(
                        "Failed to execute %s step for %s: %s",
                        step_tag(step),
                        recipe.name,
                        exc,
                    )
        finally:
            self._in_progress.discard(name)
        return True

    def apply_versions(self, value: str) -> str:
        return substitute(value, self._version_tokens)

    def resolve_path(self, template: str) -> Path:
        rel = template.replace("{{MODULE}}", self.module_name).replace(
            "{{PACKAGE_PATH}}", package_path(self.package_name).as_posix()
        )
        root = self.project_path.resolve()
        target = (root / rel).resolve()
        if target != root and root not in target.parents:
            raise UnsafePathError(f"path escapes project directory: {template}")
        return target

    def execute_step(self, step: AddonStep) -> bool:
        if isinstance(step, VersionStep):
            return catalog.merge_line(
                self.catalog_path, catalog.VERSIONS, f'{step.key} = "{step.value}"'
            )
        if isinstance(step, LibraryStep):
            return catalog.merge_line(
                self.catalog_path,
                catalog.LIBRARIES,
                f"{step.key} = {catalog.format_value(step.value)}",
            )
        if isinstance(step, PluginStep):
            return catalog.merge_line(
                self.catalog_path,
                catalog.PLUGINS,
                f"{step.key} = {catalog.format_value(step.value)}",
            )
        if isinstance(step, RootPluginStep):
            return insert_after_opener(
                self.root_build_file, "plugins {", f"{_plugin_alias(step.key)} apply false"
            )
        if isinstance(step, ModulePluginStep):
            return insert_after_opener(
                self.module_build_file, "plugins {", _plugin_alias(step.key)
            )
        if isinstance(step, ImplementationStep):
            return insert_after_opener(
                self.module_build_file, "dependencies {", f"implementation({step.value})"
            )
        if isinstance(step, KspStep):
            return insert_after_opener(
                self.module_build_file, "dependencies {", f"ksp({step.value})"
            )
        if isinstance(step, PatchFileStep):
            return patch_once(self.resolve_path(step.file), step.pattern, step.replacement)
        if isinstance(step, CreateFileStep):
            target = self.resolve_path(step.file)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(
                step.content.replace("{{PACKAGE_NAME}}", self.package_name),
                encoding="utf-8",
            )
            return True
        raise TypeError(f"unsupported addon step: {step!r}")
