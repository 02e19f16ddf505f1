"""Literal placeholder substitution for template files.

Tokens look like ``{{NAME}}``. Substitution is a single regex pass over the
file, so a token that appears inside a replacement value is left as-is.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_SEGMENT = "androidapp"
PACKAGE_PREFIX = "com.example"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_LEADING_DIGITS_RE = re.compile(r"^[0-9]+")
_NPM_NAME_RE = re.compile(r"[^a-z0-9-]")


def token(name: str) -> str:
    """Wrap a bare key as ``{{KEY}}``; already-wrapped keys pass through."""
    k = str(name or "").strip()
    if k.startswith("{{") and k.endswith("}}"):
        return k
    return "{{" + k + "}}"


def substitute(text: str, replacements: Mapping[str, str]) -> str:
    keys = [k for k in replacements if k]
    if not text or not keys:
        return text
    # Longest first so that overlapping keys resolve to the most specific one.
    pattern = re.compile("|".join(re.escape(k) for k in sorted(keys, key=len, reverse=True)))
    return pattern.sub(lambda m: str(replacements[m.group(0)]), text)


def patch_file(path: str | Path, replacements: Mapping[str, str]) -> bool:
    """Replace every occurrence of each key in ``path``.

    Returns True when the file was rewritten. A missing file or one that is
    not UTF-8 text is left untouched.
    """
    p = Path(path)
    if not p.is_file():
        return False
    try:
        content = p.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping non-text file %s", p)
        return False

    if not any(k and k in content for k in replacements):
        return False

    patched = substitute(content, replacements)
    if patched == content:
        return False
    p.write_text(patched, encoding="utf-8")
    return True


def patch_tree(root: str | Path, replacements: Mapping[str, str]) -> int:
    changed = 0
    for p in sorted(Path(root).rglob("*")):
        if p.is_file() and patch_file(p, replacements):
            changed += 1
    return changed


def sanitize_project_name(name: str) -> str:
    """Turn a display name into a single package segment.

    - lowercase
    - drop everything outside [a-z0-9]
    - drop a leading run of digits
    - empty result -> DEFAULT_PACKAGE_SEGMENT
    """
    s = str(name or "").lower()
    s = _NON_ALNUM_RE.sub("", s)
    s = _LEADING_DIGITS_RE.sub("", s)
    return s or DEFAULT_PACKAGE_SEGMENT


def package_name_for(project_name: str) -> str:
    return f"{PACKAGE_PREFIX}.{sanitize_project_name(project_name)}"


def package_path(package_name: str) -> Path:
    return Path(*[seg for seg in package_name.split(".") if seg])


def npm_package_name(project_name: str) -> str:
    return _NPM_NAME_RE.sub("-", str(project_name or "").strip().lower()) or "android-app"


def kotlin_string(value: str) -> str:
    """Escape ``value`` for use inside a double-quoted Kotlin string literal."""
    return str(value or "").replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")


def android_string(value: str) -> str:
    """Escape ``value`` as the text of a ``<string>`` resource.

    Backslashes and XML entities first, then the characters aapt treats
    specially.
    """
    s = escape(str(value or "").replace("\\", "\\\\"))
    s = s.replace("'", "\\'").replace('"', '\\"')
    if s[:1] in ("@", "?"):
        s = "\\" + s
    return s
