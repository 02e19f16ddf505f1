"""Companion script manifest (package.json) written into generated projects.

The scripts wrap the Gradle wrapper and the adb forwarder in
``scripts/adb.js`` so a project can be driven with ``npm run <task>``.
Module-scoped tasks use the Gradle module name; device tasks use the
application package.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from src.scaffold.patcher import npm_package_name

MANIFEST_FILENAME = "package.json"


def build_scripts(module_name: str, package_name: str) -> dict[str, str]:
    return {
        "dev": "./gradlew installDebug --continuous --configuration-cache --parallel --offline",
        "start": "npm run dev",
        "build": "./gradlew assembleRelease",
        "build:debug": "./gradlew assembleDebug",
        "test": "./gradlew test",
        "lint": "./gradlew lint",
        "clean": "./gradlew clean",
        "clean:deep": f"rm -rf .gradle build {module_name}/build",
        "lsp:sync": f"./gradlew :{module_name}:compileDebugKotlin",
        "help": "./gradlew --help",
        "adb": "node scripts/adb.js",
        "adb:devices": "npm run adb devices",
        "adb:connect": "npm run adb connect",
        "adb:pair": "npm run adb pair",
        "adb:logcat": "npm run adb logcat",
        "adb:reverse": "npm run adb reverse tcp:8081 tcp:8081",
        "adb:launch": (
            f"npm run adb shell monkey -p {package_name} -c android.intent.category.LAUNCHER 1"
        ),
        "adb:uninstall": f"npm run adb uninstall {package_name}",
        "add": "create-droid install",
    }


def build_manifest(*, project_name: str, module_name: str, package_name: str) -> dict[str, Any]:
    return {
        "name": npm_package_name(project_name),
        "version": "0.1.0",
        "private": True,
        "type": "module",
        "license": "MIT",
        "scripts": build_scripts(module_name, package_name),
    }


def render_manifest(*, project_name: str, module_name: str, package_name: str) -> str:
    data = build_manifest(
        project_name=project_name, module_name=module_name, package_name=package_name
    )
    return json.dumps(data, indent=2) + "\n"


def write_manifest(
    project_path: str | Path, *, project_name: str, module_name: str, package_name: str
) -> Path:
    path = Path(project_path) / MANIFEST_FILENAME
    path.write_text(
        render_manifest(
            project_name=project_name, module_name=module_name, package_name=package_name
        ),
        encoding="utf-8",
    )
    return path


def render_local_properties(sdk_path: str) -> str:
    # Backslash is the escape character in .properties files.
    escaped = str(sdk_path).replace("\\", "\\\\")
    return f"sdk.dir={escaped}\n"
