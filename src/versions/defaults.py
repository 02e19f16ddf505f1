from __future__ import annotations

from dataclasses import dataclass

# Pinned fallbacks, used when neither the package registries nor the remote
# fallback document answer.
DEFAULT_VERSIONS: dict[str, str] = {
    "AGP_VERSION": "8.8.0",
    "KOTLIN_VERSION": "2.1.0",
    "KSP_VERSION": "2.1.0-1.0.29",
    "CORE_KTX_VERSION": "1.15.0",
    "JUNIT_VERSION": "4.13.2",
    "JUNIT_ANDROIDX_VERSION": "1.2.1",
    "ESPRESSO_CORE_VERSION": "3.6.1",
    "LIFECYCLE_RUNTIME_KTX_VERSION": "2.8.7",
    "ACTIVITY_COMPOSE_VERSION": "1.10.0",
    "COMPOSE_BOM_VERSION": "2025.02.00",
    "APPCOMPAT_VERSION": "1.7.0",
    "MATERIAL_VERSION": "1.12.0",
    "NAVIGATION_COMPOSE_VERSION": "2.8.7",
    "TV_FOUNDATION_VERSION": "1.0.0-alpha12",
    "TV_MATERIAL_VERSION": "1.0.0",
    "CONSTRAINTLAYOUT_VERSION": "2.2.0",
    "RETROFIT_VERSION": "2.11.0",
    "KTOR_VERSION": "3.0.3",
    "COMPILE_SDK": "35",
    "TARGET_SDK": "35",
    "MIN_SDK": "24",
    "GRADLE_VERSION": "8.12",
}


@dataclass(frozen=True)
class Artifact:
    group: str
    name: str
    stable_only: bool = True

    @property
    def metadata_path(self) -> str:
        return f"{self.group.replace('.', '/')}/{self.name}/maven-metadata.xml"

    def __str__(self) -> str:
        return f"{self.group}:{self.name}"


TRACKED_ARTIFACTS: dict[str, Artifact] = {
    "AGP_VERSION": Artifact("com.android.tools.build", "gradle"),
    "KOTLIN_VERSION": Artifact("org.jetbrains.kotlin", "kotlin-gradle-plugin"),
    "CORE_KTX_VERSION": Artifact("androidx.core", "core-ktx"),
    "JUNIT_VERSION": Artifact("junit", "junit"),
    "JUNIT_ANDROIDX_VERSION": Artifact("androidx.test.ext", "junit"),
    "ESPRESSO_CORE_VERSION": Artifact("androidx.test.espresso", "espresso-core"),
    "LIFECYCLE_RUNTIME_KTX_VERSION": Artifact("androidx.lifecycle", "lifecycle-runtime-ktx"),
    "ACTIVITY_COMPOSE_VERSION": Artifact("androidx.activity", "activity-compose"),
    "COMPOSE_BOM_VERSION": Artifact("androidx.compose", "compose-bom"),
    "APPCOMPAT_VERSION": Artifact("androidx.appcompat", "appcompat"),
    "MATERIAL_VERSION": Artifact("com.google.android.material", "material"),
    "NAVIGATION_COMPOSE_VERSION": Artifact("androidx.navigation", "navigation-compose"),
    "TV_FOUNDATION_VERSION": Artifact("androidx.tv", "tv-foundation", stable_only=False),
    "TV_MATERIAL_VERSION": Artifact("androidx.tv", "tv-material"),
    "CONSTRAINTLAYOUT_VERSION": Artifact("androidx.constraintlayout", "constraintlayout"),
    "RETROFIT_VERSION": Artifact("com.squareup.retrofit2", "retrofit"),
    "KTOR_VERSION": Artifact("io.ktor", "ktor-client-core"),
}

KSP_ARTIFACT = Artifact("com.google.devtools.ksp", "com.google.devtools.ksp.gradle.plugin")
