"""Component manifest at ``.nextforge/manifest.json``.

Records which components exist per group so tooling can list them without
walking the tree.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nextforge.utils import load_json, save_json_atomic

MANIFEST_PATH = Path(".nextforge") / "manifest.json"


class ComponentManifest(BaseModel):
    """Unique, case-insensitively sorted component names per group."""

    model_config = ConfigDict(populate_by_name=True)

    components: dict[str, list[str]] = Field(default_factory=dict)
    updated_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        alias="updatedAt",
    )

    def add(self, group: str, name: str) -> None:
        names = set(self.components.get(group, []))
        names.add(name)
        self.components[group] = sorted(names, key=str.lower)
        self.updated_at = datetime.now(timezone.utc).isoformat()


def load_manifest(path: Path) -> ComponentManifest:
    """Read the manifest, starting fresh if it is missing or unreadable."""
    if not path.exists():
        return ComponentManifest()
    try:
        return ComponentManifest.model_validate(load_json(path))
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError):
        return ComponentManifest()


def update_component_manifest(cwd: str | Path, group: str, name: str) -> Path:
    """Add *name* to *group* in the manifest under *cwd* and write it atomically."""
    path = Path(cwd) / MANIFEST_PATH
    manifest = load_manifest(path)
    manifest.add(group, name)
    return save_json_atomic(manifest.model_dump(by_alias=True), path)
