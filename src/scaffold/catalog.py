"""Section-aware edits for the Gradle version catalog (libs.versions.toml).

The catalog is treated as plain text split into bracket-delimited sections.
Only insertion is supported: a ``key = value`` line is added right below the
section header unless the section already declares that key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

VERSIONS = "[versions]"
LIBRARIES = "[libraries]"
PLUGINS = "[plugins]"

_HEADER_RE = re.compile(r"^\s*\[(\[)?\s*([^\[\]]+?)\s*\](?(1)\])\s*(#.*)?$")


@dataclass(frozen=True)
class Section:
    name: str
    # Index of the header line; body spans lines[start:end].
    header_index: int
    start: int
    end: int


def section_name(header: str) -> str:
    m = _HEADER_RE.match(header or "")
    if m:
        return m.group(2)
    return str(header or "").strip().strip("[]").strip()


def parse_sections(lines: list[str]) -> list[Section]:
    headers: list[tuple[int, str]] = []
    for i, line in enumerate(lines):
        m = _HEADER_RE.match(line.rstrip("\r\n"))
        if m:
            headers.append((i, m.group(2)))

    out: list[Section] = []
    for n, (idx, name) in enumerate(headers):
        end = headers[n + 1][0] if n + 1 < len(headers) else len(lines)
        out.append(Section(name=name, header_index=idx, start=idx + 1, end=end))
    return out


def find_section(lines: list[str], header: str) -> Section | None:
    name = section_name(header)
    for sec in parse_sections(lines):
        if sec.name == name:
            return sec
    return None


def line_key(line: str) -> str:
    return line.split("=", 1)[0].strip()


def _key_re(key: str) -> re.Pattern[str]:
    return re.compile(rf"^\s*{re.escape(key)}\s*=")


def section_has_key(lines: list[str], section: Section, key: str) -> bool:
    rx = _key_re(key)
    return any(rx.match(ln) for ln in lines[section.start : section.end])


def insert_line(text: str, header: str, line: str) -> str | None:
    """Return ``text`` with ``line`` added under ``header``, or None if unchanged."""
    lines = text.splitlines(keepends=True)
    sec = find_section(lines, header)
    if sec is None:
        return None

    key = line_key(line)
    if not key or section_has_key(lines, sec, key):
        return None

    newline = "\r\n" if lines[sec.header_index].endswith("\r\n") else "\n"
    if not lines[sec.header_index].endswith(("\n", "\r")):
        lines[sec.header_index] += newline
    lines.insert(sec.header_index + 1, line.rstrip("\r\n") + newline)
    return "".join(lines)


def merge_line(path: str | Path, header: str, line: str) -> bool:
    p = Path(path)
    if not p.is_file():
        return False
    patched = insert_line(p.read_text(encoding="utf-8"), header, line)
    if patched is None:
        return False
    p.write_text(patched, encoding="utf-8")
    return True


def format_value(value: str) -> str:
    v = str(value or "").strip()
    if v.startswith("{"):
        return v
    return f'"{v}"'
