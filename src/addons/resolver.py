from __future__ import annotations

import logging
import re

import requests

from src.addons.recipes import AddonRecipe, RecipeRegistry, builtin_registry
from src.scaffold.config import addon_registry_url, http_timeout_s

logger = logging.getLogger(__name__)

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class RecipeResolver:
    """Look up addon recipes: built-in registry first, then the remote registry.

    Remote lookups are a single GET per call with no retry and no caching; any
    failure is reported as "not found" (None).
    """

    def __init__(
        self,
        registry: RecipeRegistry | None = None,
        *,
        url_template: str | None = None,
        session: requests.Session | None = None,
        timeout_s: int | None = None,
        allow_remote: bool = True,
    ) -> None:
        self._registry = registry if registry is not None else builtin_registry()
        self._url_template = url_template or addon_registry_url()
        self._http = session or requests.Session()
        self._timeout = timeout_s or http_timeout_s()
        self._allow_remote = allow_remote

    @property
    def registry(self) -> RecipeRegistry:
        return self._registry

    def resolve(self, name: str) -> AddonRecipe | None:
        n = str(name or "").strip()
        if n in self._registry:
            return self._registry[n]
        if not self._allow_remote:
            return None
        if not _SAFE_NAME_RE.match(n) or n.startswith("."):
            logger.warning("Refusing to look up addon with invalid name %r", name)
            return None
        return self._fetch_remote(n)

    def _fetch_remote(self, name: str) -> AddonRecipe | None:
        url = self._url_template.format(name=name)
        try:
            res = self._http.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Remote recipe lookup failed for %s: %s", name, exc)
            return None
        if res.status_code != 200:
            logger.info("Remote recipe %s not available (HTTP %d)", name, res.status_code)
            return None
        try:
            return AddonRecipe.from_dict(res.json())
        except ValueError as exc:
            logger.warning("Remote recipe %s is malformed: %s", name, exc)
            return None
