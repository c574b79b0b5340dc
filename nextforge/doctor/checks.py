"""Doctor checks.

Each check is a small class exposing ``id``, ``title`` and an async
``run(context)``.  Checks only read the environment and never depend on
one another; ``get_checks`` returns them in report order.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable

from nextforge.scaffolder.initializer import has_dependency, read_package_json, tsx_resolvable
from nextforge.utils import run_command

from .models import CheckResult, ExecutionContext

MIN_NODE_MAJOR = 18
APP_DIR_CANDIDATES: tuple[str, ...] = ("app", "src/app", "apps/web/app", "apps/next/app")


@runtime_checkable
class Check(Protocol):
    id: str
    title: str

    async def run(self, context: ExecutionContext) -> CheckResult: ...


# ---------------------------------------------------------------------------
# Node.js version
# ---------------------------------------------------------------------------


def parse_node_major(version: str) -> int | None:
    """Extract the major version from ``v20.11.1`` style output."""
    match = re.match(r"^\s*v?(\d+)", version)
    return int(match.group(1)) if match else None


class NodeVersionCheck:
    id = "node-version"
    title = "Node.js version"

    def __init__(self, minimum_major: int = MIN_NODE_MAJOR) -> None:
        self.minimum_major = minimum_major

    async def run(self, context: ExecutionContext) -> CheckResult:
        node = shutil.which("node", path=context.env.get("PATH"))
        if node is None:
            return CheckResult.fail(
                "Node.js was not found on PATH.",
                fix=f"Install Node.js {self.minimum_major} or newer from https://nodejs.org",
            )

        returncode, stdout, stderr = await run_command(
            [node, "--version"], cwd=context.working_directory, timeout=15
        )
        if returncode != 0:
            raise RuntimeError(stderr or f"`node --version` exited with {returncode}")

        version = stdout.strip()
        major = parse_node_major(version)
        if major is None:
            raise RuntimeError(f"Unrecognised node version output: {version!r}")
        if major < self.minimum_major:
            return CheckResult.fail(
                f"Node {version} is too old. Minimum {self.minimum_major} required.",
                fix=f"Upgrade Node.js to {self.minimum_major} or newer (e.g. `nvm install {self.minimum_major}`).",
            )
        return CheckResult.ok(f"Running Node {version}")


# ---------------------------------------------------------------------------
# tsx loader
# ---------------------------------------------------------------------------


class TsxLoaderCheck:
    id = "tsx-loader"
    title = "TypeScript config loader (tsx)"

    async def run(self, context: ExecutionContext) -> CheckResult:
        cwd = context.working_directory
        if not (cwd / "nextforge.config.ts").exists():
            return CheckResult.ok("No nextforge.config.ts found; no loader needed.")

        if tsx_resolvable(cwd):
            return CheckResult.ok("tsx dependency detected.")

        pkg = read_package_json(cwd)
        if has_dependency(pkg, "tsx"):
            return CheckResult.ok(
                "tsx is listed in package.json but not installed yet.",
                fix="Run your package manager's install command.",
            )
        return CheckResult.ok(
            "tsx not found. nextforge reads nextforge.config.ts without it, "
            "but Node-based tooling will not.",
            fix="npm i -D tsx",
        )


# ---------------------------------------------------------------------------
# App directory
# ---------------------------------------------------------------------------


class AppDirCheck:
    id = "app-dir"
    title = "Next.js app directory"

    def __init__(self, candidates: tuple[str, ...] = APP_DIR_CANDIDATES) -> None:
        self.candidates = candidates

    async def run(self, context: ExecutionContext) -> CheckResult:
        cwd = context.working_directory
        explicit = context.flags.app
        if explicit:
            app_path = Path(explicit)
            if not app_path.is_absolute():
                app_path = cwd / app_path
            if app_path.is_dir():
                return CheckResult.ok(f"Found app directory at {explicit}")
            return CheckResult.fail(
                f"App directory not found at {explicit}",
                fix=f"Create it (mkdir -p {explicit}) or pass the correct --app path.",
            )

        found = [loc for loc in self.candidates if (cwd / loc).is_dir()]
        if len(found) == 1:
            return CheckResult.ok(f"Found app directory at {found[0]}")
        if not found:
            return CheckResult.fail(
                f"No app directory found in common locations ({', '.join(self.candidates)}).",
                fix="Pass --app <dir> or set pagesDir in nextforge.config.",
            )
        return CheckResult.warn(
            f"Several app directories found: {', '.join(found)}.",
            fix=f"Pick one with --app or pagesDir in nextforge.config (e.g. --app {found[0]}).",
        )


# ---------------------------------------------------------------------------
# Shell quoting
# ---------------------------------------------------------------------------


class ShellQuotingCheck:
    id = "shell-quoting"
    title = "Shell quoting"

    async def run(self, context: ExecutionContext) -> CheckResult:
        shell = context.env.get("SHELL", "")
        if "zsh" not in Path(shell).name:
            return CheckResult.ok(f"Shell {Path(shell).name or 'unknown'} needs no special quoting")
        return CheckResult.warn(
            "Detected zsh, which treats unquoted [ ], * and ? as glob patterns.",
            fix='Quote such arguments, e.g. nextforge doctor --app "apps/[site]/app".',
        )


def get_checks() -> tuple[Check, ...]:
    """The registered checks, in report order."""
    return (NodeVersionCheck(), TsxLoaderCheck(), AppDirCheck(), ShellQuotingCheck())
