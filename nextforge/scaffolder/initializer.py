"""``init``: write a ``nextforge.config.<ext>`` for the current project.

The file flavour follows the project: TypeScript projects get ``.ts``,
ESM packages ``.mjs``, everything else CommonJS ``.js``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from nextforge.config import CONFIG_CANDIDATES, NextForgeConfig
from nextforge.utils import console, print_success, print_warning, run_command

from .templates import TemplateRenderer

_INSTALL_TSX = {
    "pnpm": "pnpm add -D tsx",
    "yarn": "yarn add -D tsx",
    "npm": "npm i -D tsx",
}


@dataclass
class InitResult:
    """Outcome of ``run_init``; ``path`` is ``None`` when nothing was written."""

    path: Path | None
    extension: str
    existing: Path | None = None
    tsx_installed: bool | None = None


def read_package_json(cwd: Path) -> dict[str, Any]:
    """Return ``package.json`` as a dict, or ``{}`` if missing or invalid."""
    try:
        data = json.loads((cwd / "package.json").read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def has_dependency(pkg: dict[str, Any], name: str) -> bool:
    """True if *name* is listed in dependencies or devDependencies."""
    for key in ("dependencies", "devDependencies"):
        deps = pkg.get(key) or {}
        if isinstance(deps, dict) and deps.get(name):
            return True
    return False


def detect_package_manager(cwd: Path) -> str:
    """Guess the package manager from the lock file present in *cwd*."""
    if (cwd / "pnpm-lock.yaml").exists():
        return "pnpm"
    if (cwd / "yarn.lock").exists():
        return "yarn"
    return "npm"


def config_extension(pkg: dict[str, Any]) -> str:
    if has_dependency(pkg, "typescript"):
        return "ts"
    if pkg.get("type") == "module":
        return "mjs"
    return "js"


def tsx_resolvable(cwd: Path) -> bool:
    """True if ``tsx`` is installed in the project's ``node_modules``."""
    return (cwd / "node_modules" / "tsx" / "package.json").is_file()


async def run_init(
    cwd: str | Path,
    force: bool = False,
    yes: bool = False,
    renderer: TemplateRenderer | None = None,
) -> InitResult:
    """Create the project config file.

    An existing config is a benign skip unless *force* is set.  For
    TypeScript configs without ``tsx`` the install command is printed, or
    run when *yes* is set; a failed install is reported, not raised.
    """
    root = Path(cwd)
    pkg = read_package_json(root)
    ext = config_extension(pkg)
    target = root / f"nextforge.config.{ext}"

    if not force:
        for name in CONFIG_CANDIDATES:
            existing = root / name
            if existing.exists():
                console.print(
                    f"A config already exists at {name}. Re-run with --force to overwrite."
                )
                return InitResult(path=None, extension=ext, existing=existing)

    result = InitResult(path=target, extension=ext)
    if ext == "ts" and not tsx_resolvable(root):
        pm = detect_package_manager(root)
        cmd = _INSTALL_TSX[pm]
        if yes:
            console.print(f"Installing tsx using {pm}...")
            returncode, _, stderr = await run_command(cmd, cwd=root, timeout=300)
            result.tsx_installed = returncode == 0
            if not result.tsx_installed:
                print_warning(f"Failed to install tsx automatically. Please install manually: {cmd}")
                if stderr:
                    console.print(stderr, style="dim", markup=False)
        else:
            console.print("TypeScript detected. tsx is required to load nextforge.config.ts")
            console.print(f"Run: {cmd}")

    renderer = renderer or TemplateRenderer()
    await renderer.render_to_file(
        f"config/nextforge.config.{ext}.j2",
        target,
        {"config": NextForgeConfig().as_dict()},
        force=True,
    )
    print_success(f"Created {target.name}")
    console.print("Run: nextforge doctor")
    return result
