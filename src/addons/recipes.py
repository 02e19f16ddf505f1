"""Addon recipes and the built-in recipe registry."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from src.addons.steps import (
    AddonStep,
    CreateFileStep,
    ImplementationStep,
    KspStep,
    LibraryStep,
    ModulePluginStep,
    PatchFileStep,
    PluginStep,
    RecipeParseError,
    RootPluginStep,
    VersionStep,
    parse_step,
)


@dataclass(frozen=True)
class AddonRecipe:
    name: str
    description: str
    steps: tuple[AddonStep, ...]
    dependencies: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, d: Any) -> AddonRecipe:
        if not isinstance(d, dict):
            raise RecipeParseError("recipe must be a JSON object")
        name = str(d.get("name") or "").strip()
        if not name:
            raise RecipeParseError("recipe is missing a name")
        steps = d.get("steps")
        if not isinstance(steps, list):
            raise RecipeParseError(f"recipe {name!r} has no step list")
        deps = d.get("dependencies") or []
        if not isinstance(deps, list) or not all(isinstance(x, str) for x in deps):
            raise RecipeParseError(f"recipe {name!r} has invalid dependencies")
        return cls(
            name=name,
            description=str(d.get("description") or ""),
            steps=tuple(parse_step(s) for s in steps),
            dependencies=tuple(x.strip() for x in deps if x.strip()),
        )


class RecipeRegistry(Mapping[str, AddonRecipe]):
    """Read-only name -> recipe table."""

    def __init__(self, recipes: Mapping[str, AddonRecipe] | None = None) -> None:
        self._recipes = MappingProxyType(dict(recipes or {}))

    def __getitem__(self, name: str) -> AddonRecipe:
        return self._recipes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._recipes)

    def __len__(self) -> int:
        return len(self._recipes)

    @classmethod
    def of(cls, *recipes: AddonRecipe) -> RecipeRegistry:
        return cls({r.name: r for r in recipes})


_MAIN_SRC = "{{MODULE}}/src/main/kotlin/{{PACKAGE_PATH}}"

_COIL = AddonRecipe(
    name="coil",
    description="Image loading for Compose",
    steps=(
        VersionStep("coil", "2.6.0"),
        LibraryStep("androidx-coil", "io.coil-kt:coil-compose:2.6.0"),
        ImplementationStep("libs.androidx.coil"),
    ),
)

_KSP = AddonRecipe(
    name="ksp",
    description="Kotlin Symbol Processing",
    steps=(
        VersionStep("ksp", "{{KSP_VERSION}}"),
        PluginStep("ksp", '{ id = "com.google.devtools.ksp", version.ref = "ksp" }'),
        RootPluginStep("ksp"),
        ModulePluginStep("ksp"),
    ),
)

_HILT = AddonRecipe(
    name="hilt",
    description="Dependency Injection (includes KSP & App setup)",
    dependencies=("ksp",),
    steps=(
        VersionStep("hilt", "2.51.1"),
        PluginStep("hilt", '{ id = "com.google.dagger.hilt.android", version.ref = "hilt" }'),
        LibraryStep(
            "hilt-android",
            '{ group = "com.google.dagger", name = "hilt-android", version.ref = "hilt" }',
        ),
        LibraryStep(
            "hilt-compiler",
            '{ group = "com.google.dagger", name = "hilt-compiler", version.ref = "hilt" }',
        ),
        RootPluginStep("hilt"),
        ModulePluginStep("hilt"),
        ImplementationStep("libs.hilt.android"),
        KspStep("libs.hilt.compiler"),
        CreateFileStep(
            f"{_MAIN_SRC}/MainApplication.kt",
            "package {{PACKAGE_NAME}}\n"
            "\n"
            "import android.app.Application\n"
            "import dagger.hilt.android.HiltAndroidApp\n"
            "\n"
            "@HiltAndroidApp\n"
            "class MainApplication : Application()\n",
        ),
        PatchFileStep(
            "{{MODULE}}/src/main/AndroidManifest.xml",
            "<application",
            '<application\n        android:name=".MainApplication"',
        ),
        PatchFileStep(
            f"{_MAIN_SRC}/MainActivity.kt",
            "import android.os.Bundle",
            "import android.os.Bundle\nimport dagger.hilt.android.AndroidEntryPoint",
        ),
        PatchFileStep(
            f"{_MAIN_SRC}/MainActivity.kt",
            "class MainActivity",
            "@AndroidEntryPoint\nclass MainActivity",
        ),
    ),
)

_RETROFIT = AddonRecipe(
    name="retrofit",
    description="Type-safe HTTP client",
    steps=(
        VersionStep("retrofit", "{{RETROFIT_VERSION}}"),
        LibraryStep("retrofit", "com.squareup.retrofit2:retrofit:{{RETROFIT_VERSION}}"),
        LibraryStep("converter-gson", "com.squareup.retrofit2:converter-gson:{{RETROFIT_VERSION}}"),
        ImplementationStep("libs.retrofit"),
        ImplementationStep("libs.converter.gson"),
    ),
)

_KTOR = AddonRecipe(
    name="ktor",
    description="Multiplatform HTTP client",
    steps=(
        VersionStep("ktor", "{{KTOR_VERSION}}"),
        LibraryStep("ktor-client-core", "io.ktor:ktor-client-core:{{KTOR_VERSION}}"),
        LibraryStep("ktor-client-okhttp", "io.ktor:ktor-client-okhttp:{{KTOR_VERSION}}"),
        ImplementationStep("libs.ktor.client.core"),
        ImplementationStep("libs.ktor.client.okhttp"),
    ),
)

_SERIALIZATION = AddonRecipe(
    name="serialization",
    description="Kotlin JSON serialization",
    steps=(
        PluginStep(
            "kotlin-serialization",
            '{ id = "org.jetbrains.kotlin.plugin.serialization", version = "{{KOTLIN_VERSION}}" }',
        ),
        LibraryStep(
            "kotlinx-serialization-json",
            "org.jetbrains.kotlinx:kotlinx-serialization-json:1.6.3",
        ),
        RootPluginStep("kotlin-serialization"),
        ModulePluginStep("kotlin-serialization"),
        ImplementationStep("libs.kotlinx.serialization.json"),
    ),
)

_DATASTORE = AddonRecipe(
    name="datastore",
    description="Modern alternative to SharedPreferences",
    steps=(
        VersionStep("datastore", "1.1.1"),
        LibraryStep(
            "androidx-datastore-preferences",
            "androidx.datastore:datastore-preferences:1.1.1",
        ),
        ImplementationStep("libs.androidx.datastore.preferences"),
    ),
)

_ROOM = AddonRecipe(
    name="room",
    description="Room Database",
    dependencies=("ksp",),
    steps=(
        VersionStep("room", "2.6.1"),
        LibraryStep(
            "androidx-room-runtime",
            '{ group = "androidx.room", name = "room-runtime", version.ref = "room" }',
        ),
        LibraryStep(
            "androidx-room-compiler",
            '{ group = "androidx.room", name = "room-compiler", version.ref = "room" }',
        ),
        LibraryStep(
            "androidx-room-ktx",
            '{ group = "androidx.room", name = "room-ktx", version.ref = "room" }',
        ),
        ImplementationStep("libs.androidx.room.runtime"),
        ImplementationStep("libs.androidx.room.ktx"),
        KspStep("libs.androidx.room.compiler"),
    ),
)


def builtin_registry() -> RecipeRegistry:
    return RecipeRegistry.of(
        _COIL, _HILT, _KSP, _RETROFIT, _KTOR, _SERIALIZATION, _DATASTORE, _ROOM
    )
