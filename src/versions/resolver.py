"""Resolve dependency versions for the generated project.

Versions come from, in priority order: the live Maven registries (Google
Maven, then Maven Central), a remote fallback JSON document, and the local
DEFAULT_VERSIONS table. Lookups run concurrently and finish before any file
is touched.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING

import httpx

from src.scaffold.config import http_timeout_s, versions_fallback_url
from src.versions.defaults import (
    DEFAULT_VERSIONS,
    KSP_ARTIFACT,
    TRACKED_ARTIFACTS,
    Artifact,
)

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

GOOGLE_MAVEN = "https://dl.google.com/dl/android/maven2"
MAVEN_CENTRAL = "https://repo1.maven.org/maven2"

_VERSION_RE = re.compile(r"<version>([^<]+)</version>")
_UNSTABLE_MARKERS = ("alpha", "beta", "rc", "dev", "snapshot")


def is_stable(version: str) -> bool:
    v = (version or "").lower()
    return not any(m in v for m in _UNSTABLE_MARKERS)


def pick_version(
    metadata_xml: str, *, stable_only: bool = True, prefix: str | None = None
) -> str | None:
    """Pick the newest version listed in a maven-metadata.xml document.

    Versions are taken in document order (Maven appends new releases). When
    ``stable_only`` is set and no stable version matches, the newest unstable
    one is returned instead.
    """
    versions = [v.strip() for v in _VERSION_RE.findall(metadata_xml or "") if v.strip()]
    if prefix:
        versions = [v for v in versions if v.startswith(prefix)]
    if stable_only:
        stable = [v for v in versions if is_stable(v)]
        if stable:
            return stable[-1]
    return versions[-1] if versions else None


async def _fetch_metadata(client: httpx.AsyncClient, repo: str, path: str) -> str | None:
    try:
        res = await client.get(f"{repo}/{path}")
    except httpx.HTTPError as exc:
        logger.debug("Metadata fetch failed for %s/%s: %s", repo, path, exc)
        return None
    if res.status_code != 200:
        return None
    return res.text


async def latest_version(
    client: httpx.AsyncClient,
    artifact: Artifact,
    *,
    repos: tuple[str, ...] = (GOOGLE_MAVEN, MAVEN_CENTRAL),
    prefix: str | None = None,
) -> str | None:
    for repo in repos:
        xml = await _fetch_metadata(client, repo, artifact.metadata_path)
        if xml is None:
            continue
        v = pick_version(xml, stable_only=artifact.stable_only, prefix=prefix)
        if v:
            return v
    return None


async def latest_ksp_version(client: httpx.AsyncClient, kotlin_version: str) -> str | None:
    # KSP releases are versioned "<kotlin>-<ksp>", so filter on the Kotlin prefix.
    return await latest_version(
        client,
        KSP_ARTIFACT,
        repos=(MAVEN_CENTRAL, GOOGLE_MAVEN),
        prefix=f"{kotlin_version}-",
    )


async def remote_defaults(client: httpx.AsyncClient, url: str | None = None) -> dict[str, str]:
    try:
        res = await client.get(url or versions_fallback_url())
    except httpx.HTTPError as exc:
        logger.info("Remote version fallback unavailable: %s", exc)
        return {}
    if res.status_code != 200:
        return {}
    try:
        data = res.json()
    except ValueError:
        logger.warning("Remote version fallback is not valid JSON")
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(k): str(v) for k, v in data.items() if isinstance(v, (str, int, float))}


async def resolve_all(
    client: httpx.AsyncClient, artifacts: Mapping[str, Artifact]
) -> dict[str, str]:
    keys = list(artifacts)
    found = await asyncio.gather(*[latest_version(client, artifacts[k]) for k in keys])
    out: dict[str, str] = {}
    for key, version in zip(keys, found):
        if version:
            out[key] = version
        else:
            logger.warning("Failed to resolve version for %s", artifacts[key])
    return out


async def build_version_patch_map_async(
    *,
    client: httpx.AsyncClient | None = None,
    artifacts: Mapping[str, Artifact] | None = None,
) -> dict[str, str]:
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=http_timeout_s(), follow_redirects=True)
    try:
        remote, live = await asyncio.gather(
            remote_defaults(http),
            resolve_all(http, TRACKED_ARTIFACTS if artifacts is None else artifacts),
        )
        versions = {**DEFAULT_VERSIONS, **remote, **live}
        ksp = await latest_ksp_version(http, versions["KOTLIN_VERSION"])
        if ksp:
            versions["KSP_VERSION"] = ksp
        else:
            logger.warning(
                "No KSP release found for Kotlin %s, keeping %s",
                versions["KOTLIN_VERSION"],
                versions.get("KSP_VERSION"),
            )
        return versions
    finally:
        if owns_client:
            await http.aclose()


def build_version_patch_map(*, offline: bool = False) -> dict[str, str]:
    if offline:
        return dict(DEFAULT_VERSIONS)
    return asyncio.run(build_version_patch_map_async())
