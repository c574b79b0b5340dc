"""Unit tests for app-directory resolution and path planning (nextforge.paths).

Tests cover:
- normalize_app_path (separators, trailing slash)
- resolve_root precedence (--app > pagesDir > "app"), idempotence
- missing directory handling (raise vs create)
- validate_group / plan_component
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nextforge.paths import (
    BARREL_FILENAME,
    GROUPS,
    AppDirectoryNotFoundError,
    ComponentLocation,
    ResolutionOptions,
    normalize_app_path,
    plan_component,
    resolve_root,
    validate_group,
)


# ---------------------------------------------------------------------------
# normalize_app_path
# ---------------------------------------------------------------------------


class TestNormalizeAppPath:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("app", "app"),
            ("src/app/", "src/app"),
            ("src\\app\\", "src/app"),
            ("/", "/"),
            ("a//", "a/"),
        ],
    )
    def test_normalize(self, raw: str, expected: str):
        assert normalize_app_path(raw) == expected


# ---------------------------------------------------------------------------
# resolve_root
# ---------------------------------------------------------------------------


class TestResolveRoot:
    @pytest.mark.unit
    def test_defaults_to_app(self, tmp_project_dir: Path):
        root = resolve_root(ResolutionOptions(working_directory=tmp_project_dir))
        assert root == tmp_project_dir / "app"
        assert root.is_absolute()

    @pytest.mark.unit
    def test_configured_default_beats_app(self, tmp_project_dir: Path):
        (tmp_project_dir / "src" / "app").mkdir(parents=True)
        root = resolve_root(
            ResolutionOptions(
                configured_default_path="src/app", working_directory=tmp_project_dir
            )
        )
        assert root == tmp_project_dir / "src" / "app"

    @pytest.mark.unit
    def test_explicit_override_wins(self, tmp_project_dir: Path):
        (tmp_project_dir / "site").mkdir()
        (tmp_project_dir / "src" / "app").mkdir(parents=True)
        root = resolve_root(
            ResolutionOptions(
                explicit_path_override="site",
                configured_default_path="src/app",
                working_directory=tmp_project_dir,
            )
        )
        assert root == tmp_project_dir / "site"

    @pytest.mark.unit
    def test_trailing_separator_and_backslashes(self, tmp_project_dir: Path):
        (tmp_project_dir / "src" / "app").mkdir(parents=True)
        root = resolve_root(
            ResolutionOptions(
                explicit_path_override="src\\app\\", working_directory=tmp_project_dir
            )
        )
        assert root == tmp_project_dir / "src" / "app"

    @pytest.mark.unit
    def test_absolute_override_is_used_as_is(self, tmp_path: Path, tmp_project_dir: Path):
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        root = resolve_root(
            ResolutionOptions(
                explicit_path_override=str(elsewhere), working_directory=tmp_project_dir
            )
        )
        assert root == elsewhere

    @pytest.mark.unit
    def test_dot_segments_are_collapsed(self, tmp_project_dir: Path):
        root = resolve_root(
            ResolutionOptions(
                explicit_path_override="./nested/../app", working_directory=tmp_project_dir
            )
        )
        assert root == tmp_project_dir / "app"

    @pytest.mark.unit
    def test_missing_directory_raises(self, tmp_project_dir: Path):
        with pytest.raises(AppDirectoryNotFoundError) as excinfo:
            resolve_root(
                ResolutionOptions(
                    explicit_path_override="missing", working_directory=tmp_project_dir
                )
            )
        assert excinfo.value.path == tmp_project_dir / "missing"
        assert "App directory not found" in str(excinfo.value)
        assert not (tmp_project_dir / "missing").exists()

    @pytest.mark.unit
    def test_missing_directory_is_a_file_not_found_error(self, tmp_project_dir: Path):
        with pytest.raises(FileNotFoundError):
            resolve_root(
                ResolutionOptions(
                    configured_default_path="nope", working_directory=tmp_project_dir
                )
            )

    @pytest.mark.unit
    def test_existing_file_is_not_a_root(self, tmp_project_dir: Path):
        (tmp_project_dir / "site").write_text("not a directory")
        with pytest.raises(AppDirectoryNotFoundError, match="not a directory"):
            resolve_root(
                ResolutionOptions(
                    explicit_path_override="site",
                    create_if_missing=True,
                    working_directory=tmp_project_dir,
                )
            )

    @pytest.mark.unit
    def test_create_if_missing(self, tmp_project_dir: Path):
        root = resolve_root(
            ResolutionOptions(
                explicit_path_override="apps/web/app",
                create_if_missing=True,
                working_directory=tmp_project_dir,
            )
        )
        assert root.is_dir()
        assert root == tmp_project_dir / "apps" / "web" / "app"

    @pytest.mark.unit
    def test_resolution_is_idempotent(self, tmp_project_dir: Path):
        options = ResolutionOptions(
            explicit_path_override="fresh",
            create_if_missing=True,
            working_directory=tmp_project_dir,
        )
        assert resolve_root(options) == resolve_root(options)


# ---------------------------------------------------------------------------
# Groups and component planning
# ---------------------------------------------------------------------------


class TestValidateGroup:
    @pytest.mark.unit
    def test_default_is_ui(self):
        assert validate_group(None) == "ui"
        assert validate_group("") == "ui"

    @pytest.mark.unit
    def test_case_insensitive(self):
        assert validate_group("Section") == "section"

    @pytest.mark.unit
    def test_invalid_group(self):
        with pytest.raises(ValueError, match='Invalid --group "widgets"'):
            validate_group("widgets")


class TestPlanComponent:
    @pytest.mark.unit
    def test_paths_for_each_group(self, tmp_path: Path):
        for group in GROUPS:
            location = plan_component(tmp_path, group, "Hero")
            assert isinstance(location, ComponentLocation)
            assert location.group_directory == tmp_path / "components" / group
            assert location.component_directory == tmp_path / "components" / group / "Hero"
            assert location.barrel_file_path == location.group_directory / BARREL_FILENAME

    @pytest.mark.unit
    def test_subdirectories(self, tmp_path: Path):
        location = plan_component(tmp_path, "section", "Hero", ["Marketing"])
        assert location.component_directory == (
            tmp_path / "components" / "section" / "Marketing" / "Hero"
        )
        # Nested components still share the group-level barrel.
        assert location.barrel_file_path == tmp_path / "components" / "section" / "index.ts"

    @pytest.mark.unit
    def test_planning_touches_nothing(self, tmp_path: Path):
        plan_component(tmp_path, "ui", "Button")
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_invalid_group(self, tmp_path: Path):
        with pytest.raises(ValueError):
            plan_component(tmp_path, "pages", "Button")
