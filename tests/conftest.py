"""Shared pytest fixtures for the nextforge test suite.

Provides reusable fixtures for:
- Temporary Next.js-like project directories
- Deterministic environment mappings
- Rich consoles that record output
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary project root with an ``app/`` directory (auto-cleanup)."""
    project_dir = tmp_path / "web"
    (project_dir / "app").mkdir(parents=True)
    yield project_dir


@pytest.fixture
def write_package_json():
    """Write a ``package.json`` into a directory.

    Usage::

        write_package_json(tmp_path, devDependencies={"typescript": "^5"})
    """

    def _write(root: Path, **fields: Any) -> Path:
        path = root / "package.json"
        payload = {"name": "web", "version": "0.0.0", **fields}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def in_project(tmp_project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with the temporary project as working directory."""
    monkeypatch.chdir(tmp_project_dir)
    for var in ("NEXTFORGE_USE_TAILWIND", "NEXTFORGE_USE_CHAKRA", "NEXTFORGE_PAGES_DIR",
                "NEXTFORGE_DEFAULT_LAYOUT", "NEXTFORGE_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    return tmp_project_dir


# ---------------------------------------------------------------------------
# Environment & Console
# ---------------------------------------------------------------------------


@pytest.fixture
def clean_env() -> dict[str, str]:
    """An environment mapping with nothing nextforge-specific in it."""
    return {"SHELL": "/bin/bash", "TERM": "xterm-256color"}


@pytest.fixture
def recording_console() -> Console:
    """A wide, colourless Rich console writing into a StringIO buffer.

    Read the output with ``recording_console.file.getvalue()``.
    """
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False)
