"""Per-group barrel files (``components/<group>/index.ts``).

Every component of a group is re-exported from one barrel.  Updates are
additive: existing export lines survive, the new one is added once, and
the result is de-duplicated and sorted by exported name.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from nextforge.utils import read_if_exists, to_posix

_EXPORT_LINE = re.compile(
    r"""^export\s+(?:\{\s*(?:default\s+as\s+)?(\w+)\s*\}|\*)\s+from\s+["']([^"']+)["'];?$"""
)
_SOURCE_SUFFIX = re.compile(r"\.(tsx|ts|jsx|js)$")


def export_line(barrel_path: Path, component_file: Path, name: str) -> str:
    """Build ``export { default as Name } from "./Name/Name";`` for a barrel.

    The import path is relative to the barrel and always uses forward
    slashes.
    """
    relative = os.path.relpath(component_file, barrel_path.parent)
    import_path = _SOURCE_SUFFIX.sub("", to_posix(relative))
    if not import_path.startswith("."):
        import_path = f"./{import_path}"
    return f'export {{ default as {name} }} from "{import_path}";'


def _sort_key(line: str) -> tuple[str, str]:
    match = _EXPORT_LINE.match(line)
    if match is None:
        return ("", line)
    name = match.group(1) or match.group(2).rsplit("/", 1)[-1]
    return (name.lower(), line)


def upsert_export(barrel_path: str | Path, line: str) -> bool:
    """Add *line* to the barrel at *barrel_path*, creating it if needed.

    Lines that are not exports are dropped; export lines are compared
    without their trailing semicolon.

    Returns:
        ``True`` if the barrel did not exist before.
    """
    path = Path(barrel_path)
    prior = read_if_exists(path)
    created = not path.exists()

    def _normalise(raw: str) -> str:
        return raw.strip().rstrip(";").rstrip() + ";"

    lines = {
        _normalise(raw)
        for raw in prior.splitlines()
        if raw.strip() and _EXPORT_LINE.match(raw.strip())
    }
    lines.add(_normalise(line))

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(sorted(lines, key=_sort_key)) + "\n", encoding="utf-8")
    return created

