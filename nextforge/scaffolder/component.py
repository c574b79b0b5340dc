"""``add:component`` scaffolding.

Takes a ``ComponentRequest`` and writes a React component directory under
``<app>/components/<group>/``, then registers the component in the group
barrel and the project manifest.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

from pydantic import BaseModel, Field

from nextforge.config import NextForgeConfig
from nextforge.paths import (
    ComponentLocation,
    ResolutionOptions,
    plan_component,
    resolve_root,
    validate_group,
)
from nextforge.utils import print_info, print_warning, to_pascal_case

from .barrel import export_line, upsert_export
from .manifest import update_component_manifest
from .templates import TemplateRenderer

Framework = Literal["basic", "tailwind", "chakra", "both"]

FRAMEWORKS: tuple[str, ...] = get_args(Framework)
_VALID_NAME = re.compile(r"^[A-Z][A-Za-z0-9]*$")


class ComponentNameError(ValueError):
    """Raised for component names that cannot become a PascalCase identifier."""


# ---------------------------------------------------------------------------
# Name and framework helpers
# ---------------------------------------------------------------------------


def parse_component_name(raw: str) -> tuple[str, list[str]]:
    """Split ``marketing/hero-banner`` into ``("HeroBanner", ["Marketing"])``.

    Raises:
        ComponentNameError: Empty names, ``.``/``..`` segments, or segments
            that do not start with a letter once PascalCased.
    """
    parts = [part.strip() for part in str(raw).replace("\\", "/").split("/")]
    parts = [part for part in parts if part]
    if any(part in (".", "..") for part in parts):
        raise ComponentNameError("Component path cannot contain '.' or '..'.")
    if not parts:
        raise ComponentNameError("Component name is required")

    converted: list[str] = []
    for part in parts:
        name = to_pascal_case(part)
        if not _VALID_NAME.match(name):
            raise ComponentNameError(
                f'Invalid component name "{part}". Use letters/numbers; must start with a letter.'
            )
        converted.append(name)
    return converted[-1], converted[:-1]


def resolve_framework(flag: str | None, config: NextForgeConfig) -> Framework:
    """Pick the template flavour.

    Precedence: ``--framework`` flag, then the config's ``useTailwind`` /
    ``useChakra`` booleans, then ``basic``.
    """
    if flag:
        choice = flag.strip().lower()
        if choice not in FRAMEWORKS:
            raise ValueError(
                f'Invalid --framework "{flag}". Use one of: {", ".join(FRAMEWORKS)}'
            )
        return choice  # type: ignore[return-value]
    if config.use_tailwind and config.use_chakra:
        return "both"
    if config.use_tailwind:
        return "tailwind"
    if config.use_chakra:
        return "chakra"
    return "basic"


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class ComponentRequest(BaseModel):
    """Options of a single ``add:component`` invocation."""

    name: str = Field(..., description="Component name, optionally nested: marketing/Hero")
    group: str = Field(default="ui")
    app: str | None = Field(default=None, description="Explicit --app directory")
    framework: str | None = Field(default=None)
    client: bool = False
    with_tests: bool = False
    with_style: bool = False
    with_story: bool = False
    force: bool = False
    create_app: bool = False


@dataclass
class ComponentResult:
    """What ``ComponentGenerator.generate`` produced."""

    name: str
    group: str
    framework: str
    location: ComponentLocation
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    barrel_created: bool | None = None
    manifest_path: Path | None = None


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ComponentGenerator:
    """Writes component files for ``add:component``."""

    def __init__(
        self,
        config: NextForgeConfig,
        cwd: str | Path,
        renderer: TemplateRenderer | None = None,
        verbose: bool = False,
    ) -> None:
        self.config = config
        self.cwd = Path(cwd)
        self.renderer = renderer or TemplateRenderer()
        self.verbose = verbose

    async def generate(self, request: ComponentRequest) -> ComponentResult:
        """Create the component described by *request*.

        Raises:
            ComponentNameError: The name is invalid.
            ValueError: The group or framework is invalid.
            AppDirectoryNotFoundError: The app directory is missing and
                ``create_app`` is not set.
        """
        group = validate_group(request.group)
        name, subdirs = parse_component_name(request.name)
        framework = resolve_framework(request.framework, self.config)

        root = resolve_root(
            ResolutionOptions(
                explicit_path_override=request.app,
                configured_default_path=self.config.pages_dir,
                create_if_missing=request.create_app,
                working_directory=self.cwd,
            )
        )
        location = plan_component(root, group, name, subdirs)
        result = ComponentResult(
            name=name, group=group, framework=framework, location=location
        )

        if self.verbose:
            print_info(f"Framework: {framework} ({'flag' if request.framework else 'config'})")
            print_info(f"App directory: {root}")
            print_info(f"Group: {group}, client: {request.client}")

        context = self._build_context(name, group, framework, request.client)
        for template, filename in self._file_plan(name, group, framework, request):
            target = location.component_directory / filename
            written = await self.renderer.render_to_file(
                template, target, context, force=request.force
            )
            (result.written if written else result.skipped).append(target)

        self._register(result)
        return result

    # -- Planning ----------------------------------------------------------

    def _build_context(
        self, name: str, group: str, framework: str, client: bool
    ) -> dict[str, Any]:
        return {
            "name": name,
            "props_name": f"{name}Props",
            "group": group,
            "framework": framework,
            "is_layout": group == "layout",
            "client": client,
        }

    def _file_plan(
        self, name: str, group: str, framework: str, request: ComponentRequest
    ) -> list[tuple[str, str]]:
        """Return ``(template, filename)`` pairs in write order."""
        plan = [
            ("component/component.tsx.j2", f"{name}.tsx"),
            ("component/index.ts.j2", "index.ts"),
        ]
        if group == "feature":
            plan.append(("component/hook.ts.j2", f"use{name}.ts"))
        if request.with_tests:
            plan.append(("component/test.tsx.j2", f"{name}.test.tsx"))
        if request.with_style:
            if framework in ("chakra", "both"):
                plan.append(("component/styles.ts.j2", f"{name}.styles.ts"))
            elif framework == "basic":
                plan.append(("component/module.css.j2", f"{name}.module.css"))
            elif self.verbose:
                print_info("Tailwind detected, skipping CSS module creation.")
        if request.with_story:
            plan.append(("component/story.tsx.j2", f"{name}.stories.tsx"))
        return plan

    # -- Registration ------------------------------------------------------

    def _register(self, result: ComponentResult) -> None:
        """Update the group barrel and the manifest; failures only warn."""
        location = result.location
        component_file = location.component_directory / f"{result.name}.tsx"
        try:
            line = export_line(location.barrel_file_path, component_file, result.name)
            result.barrel_created = upsert_export(location.barrel_file_path, line)
        except (OSError, ValueError) as exc:
            print_warning(f"Barrel update skipped: {exc}")

        try:
            result.manifest_path = update_component_manifest(
                self.cwd, result.group, result.name
            )
        except (OSError, ValueError) as exc:
            print_warning(f"Manifest update skipped: {exc}")
