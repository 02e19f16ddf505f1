from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_ADDON_REGISTRY_URL = (
    "https://raw.githubusercontent.com/YELrhilassi/create-android-app/main/addons/{name}.json"
)
_DEFAULT_VERSIONS_FALLBACK_URL = (
    "https://raw.githubusercontent.com/YELrhilassi/create-android-app/main/versions-fallback.json"
)


def _env_str(name: str) -> str:
    return str(os.environ.get(name) or "").strip()


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    return default


def _env_int(name: str, default: int) -> int:
    raw = _env_str(name)
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


def templates_dir_override() -> str:
    return _env_str("CREATE_DROID_TEMPLATES_DIR")


def addon_registry_url() -> str:
    # Must keep a `{name}` field; fall back when an override forgets it.
    raw = _env_str("CREATE_DROID_ADDON_REGISTRY_URL")
    if raw and "{name}" in raw:
        return raw
    return _DEFAULT_ADDON_REGISTRY_URL


def versions_fallback_url() -> str:
    return _env_str("CREATE_DROID_VERSIONS_FALLBACK_URL") or _DEFAULT_VERSIONS_FALLBACK_URL


def http_timeout_s() -> int:
    return max(1, _env_int("CREATE_DROID_HTTP_TIMEOUT_S", 10))


def git_init_enabled() -> bool:
    return _env_bool("CREATE_DROID_GIT_INIT", default=True)


def git_commit_message() -> str:
    return _env_str("CREATE_DROID_GIT_COMMIT_MESSAGE") or "Initial commit via create-droid"


def log_level() -> str:
    return (_env_str("CREATE_DROID_LOG_LEVEL") or "INFO").upper()


def default_sdk_dir() -> str:
    """Return the toolchain path recorded in local.properties.

    ANDROID_HOME wins, then ANDROID_SDK_ROOT, then CREATE_DROID_SDK_DIR and
    finally the per-user location the SDK installer uses.
    """
    for name in ("ANDROID_HOME", "ANDROID_SDK_ROOT", "CREATE_DROID_SDK_DIR"):
        v = _env_str(name)
        if v:
            return v
    return str(Path.home() / ".local" / "share" / "create-android-app" / "sdk")
