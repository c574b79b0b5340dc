"""End-to-end tests driving the nextforge CLI against a temporary project.

Each test builds a small Next.js-shaped directory, runs ``main()`` with a
real argv, and inspects what ended up on disk.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nextforge.cli import main
from nextforge.config import read_config_file

pytestmark = pytest.mark.integration


class TestFreshProject:
    def test_init_then_add_components(self, in_project: Path, write_package_json):
        write_package_json(in_project, type="module")

        assert main(["init"]) == 0
        config_file = in_project / "nextforge.config.mjs"
        assert read_config_file(config_file)["pagesDir"] == "app"

        assert main(["add:component", "button", "--with-tests", "--with-story"]) == 0
        assert main(["add:component", "Alert"]) == 0
        assert main(["add:component", "marketing/hero", "--type", "section", "--client"]) == 0

        ui = in_project / "app" / "components" / "ui"
        assert sorted(p.name for p in (ui / "Button").iterdir()) == [
            "Button.stories.tsx",
            "Button.test.tsx",
            "Button.tsx",
            "index.ts",
        ]
        assert (ui / "index.ts").read_text().splitlines() == [
            'export { default as Alert } from "./Alert/Alert";',
            'export { default as Button } from "./Button/Button";',
        ]

        hero = in_project / "app" / "components" / "section" / "Marketing" / "Hero" / "Hero.tsx"
        assert hero.read_text().startswith('"use client";')

        manifest = json.loads((in_project / ".nextforge" / "manifest.json").read_text())
        assert manifest["components"] == {"ui": ["Alert", "Button"], "section": ["Hero"]}

    def test_init_is_idempotent(self, in_project: Path):
        assert main(["init"]) == 0
        config_file = in_project / "nextforge.config.js"
        config_file.write_text("module.exports = { useChakra: true };\n")

        assert main(["init"]) == 0
        assert read_config_file(config_file) == {"useChakra": True}


class TestConfiguredProject:
    def test_chakra_config_drives_templates(self, in_project: Path):
        (in_project / "nextforge.config.ts").write_text(
            "export default {\n  useTailwind: false,\n  useChakra: true,\n};\n"
        )
        assert main(["add:component", "Card", "--with-style"]) == 0

        card_dir = in_project / "app" / "components" / "ui" / "Card"
        assert "@chakra-ui/react" in (card_dir / "Card.tsx").read_text()
        assert (card_dir / "Card.styles.ts").exists()

    def test_env_override_beats_file(self, in_project: Path, monkeypatch):
        (in_project / "site").mkdir()
        (in_project / "nextforge.config.json").write_text(json.dumps({"pagesDir": "app"}))
        monkeypatch.setenv("NEXTFORGE_PAGES_DIR", "site")

        assert main(["add:component", "Nav", "--group", "layout"]) == 0
        assert (in_project / "site" / "components" / "layout" / "Nav" / "Nav.tsx").exists()

    def test_flag_beats_env(self, in_project: Path, monkeypatch):
        (in_project / "other").mkdir()
        monkeypatch.setenv("NEXTFORGE_PAGES_DIR", "site")

        assert main(["add:component", "Nav", "--app", "other"]) == 0
        assert (in_project / "other" / "components" / "ui" / "Nav").is_dir()
