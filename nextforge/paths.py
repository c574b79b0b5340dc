"""App directory resolution and component path planning.

``resolve_root`` turns the ``--app`` flag, the configured ``pagesDir`` or
the ``"app"`` default into an absolute directory.  ``plan_component``
derives where a component and its group barrel live under that directory.
Planning is pure; only ``resolve_root`` touches the filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Sequence, get_args

Group = Literal["ui", "layout", "section", "feature"]

GROUPS: tuple[str, ...] = get_args(Group)
DEFAULT_APP_DIR = "app"
BARREL_FILENAME = "index.ts"


class AppDirectoryNotFoundError(FileNotFoundError):
    """Raised when the resolved app directory is missing (and may not be created) or is a file."""

    def __init__(self, path: Path, reason: str = "App directory not found") -> None:
        self.path = path
        super().__init__(f"{reason}: {path}")


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolutionOptions:
    """Inputs for :func:`resolve_root`.

    ``explicit_path_override`` is the ``--app`` flag and
    ``configured_default_path`` the config file's ``pagesDir``.
    """

    explicit_path_override: str | None = None
    configured_default_path: str | None = None
    create_if_missing: bool = False
    working_directory: Path = field(default_factory=Path.cwd)


def normalize_app_path(value: str) -> str:
    """Use forward slashes and drop one trailing separator.

    Examples::

        normalize_app_path("a\\\\b\\\\") -> "a/b"
        normalize_app_path("a/b/")     -> "a/b"
    """
    normalized = value.replace("\\", "/")
    if normalized.endswith("/") and len(normalized) > 1:
        normalized = normalized[:-1]
    return normalized


def resolve_root(options: ResolutionOptions) -> Path:
    """Return the absolute app directory described by *options*.

    Raises:
        AppDirectoryNotFoundError: The directory is missing and
            ``create_if_missing`` is false, or the path is
            an existing file.
    """
    chosen = options.explicit_path_override
    if chosen is None:
        chosen = options.configured_default_path
    if chosen is None:
        chosen = DEFAULT_APP_DIR

    normalized = Path(normalize_app_path(chosen))
    if normalized.is_absolute():
        root = normalized
    else:
        root = Path(os.path.normpath(Path(options.working_directory).absolute() / normalized))

    if root.exists() and not root.is_dir():
        raise AppDirectoryNotFoundError(root, reason="App path is not a directory")
    if not root.exists():
        if not options.create_if_missing:
            raise AppDirectoryNotFoundError(root)
        root.mkdir(parents=True, exist_ok=True)

    return root


# ---------------------------------------------------------------------------
# Component planning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ComponentLocation:
    """Where a component and its group's barrel file live."""

    group_directory: Path
    component_directory: Path
    barrel_file_path: Path


def validate_group(value: str | None) -> Group:
    """Normalise a ``--group`` value, defaulting to ``ui``.

    Raises:
        ValueError: If the value is not one of :data:`GROUPS`.
    """
    group = (value or "ui").strip().lower()
    if group not in GROUPS:
        raise ValueError(f'Invalid --group "{value}". Use one of: {", ".join(GROUPS)}')
    return group  # type: ignore[return-value]


def plan_component(
    root: str | Path,
    group: str,
    name: str,
    subdirs: Sequence[str] = (),
) -> ComponentLocation:
    """Compute the directories for *name* inside *group*.

    All components of a group share one barrel file at the group root, so
    writers of that file have to merge rather than replace it.
    """
    if group not in GROUPS:
        raise ValueError(f'Invalid group "{group}". Use one of: {", ".join(GROUPS)}')
    group_directory = Path(root) / "components" / group
    component_directory = group_directory.joinpath(*subdirs, name)
    return ComponentLocation(
        group_directory=group_directory,
        component_directory=component_directory,
        barrel_file_path=group_directory / BARREL_FILENAME,
    )
