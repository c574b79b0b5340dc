"""nextforge project configuration.

A project describes its preferences in ``nextforge.config.<ext>`` at its
root.  The settings are held in a Pydantic v2 model so they are validated
at construction time and can be dumped back with their on-disk camelCase
names.

Precedence, highest first: CLI flags, ``NEXTFORGE_*`` environment
variables, the config file, model defaults.
"""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nextforge.utils import console

CONFIG_CANDIDATES: tuple[str, ...] = (
    "nextforge.config.ts",
    "nextforge.config.mjs",
    "nextforge.config.js",
    "nextforge.config.cjs",
    "nextforge.config.json",
    "nextforge.config.yaml",
    "nextforge.config.yml",
)

_EXPORT_PATTERNS = (
    re.compile(r"export\s+default\s+(.*)", re.DOTALL),
    re.compile(r"module\.exports\s*=\s*(.*)", re.DOTALL),
    re.compile(r"exports\.default\s*=\s*(.*)", re.DOTALL),
)
_LINE_COMMENT = re.compile(r"(^|\s)//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_DEFINE_CONFIG = re.compile(r"^defineConfig\s*\(\s*(.*)\)\s*$", re.DOTALL)
_KEY_COLON = re.compile(r"([{,]\s*)([\w$]+|\"[^\"]*\"|'[^']*')\s*:")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


class ConfigError(ValueError):
    """Raised when a config file cannot be read or holds invalid values."""


class NextForgeConfig(BaseModel):
    """Project-level generator preferences."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    use_tailwind: bool = Field(default=True, alias="useTailwind")
    use_chakra: bool = Field(default=False, alias="useChakra")
    default_layout: str = Field(default="main", alias="defaultLayout")
    pages_dir: str = Field(default="app", alias="pagesDir")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def as_dict(self) -> dict[str, Any]:
        """Return the settings keyed by their on-disk (camelCase) names."""
        return self.model_dump(by_alias=True)

    @classmethod
    def load(cls, path: Path) -> "NextForgeConfig":
        """Load and validate a single config file."""
        return _validate(read_config_file(Path(path)), source=Path(path).name)

    @classmethod
    def env_overrides(cls, env: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Collect overrides from ``NEXTFORGE_*`` variables.

        Recognised variables (all optional):
            NEXTFORGE_USE_TAILWIND, NEXTFORGE_USE_CHAKRA,
            NEXTFORGE_DEFAULT_LAYOUT, NEXTFORGE_PAGES_DIR.

        Boolean variables are true only for the literal ``"true"``.
        Returns a partial mapping (aliases as keys), not a model.
        """
        env = os.environ if env is None else env
        overrides: dict[str, Any] = {}
        if env.get("NEXTFORGE_USE_TAILWIND") is not None:
            overrides["useTailwind"] = env["NEXTFORGE_USE_TAILWIND"] == "true"
        if env.get("NEXTFORGE_USE_CHAKRA") is not None:
            overrides["useChakra"] = env["NEXTFORGE_USE_CHAKRA"] == "true"
        if env.get("NEXTFORGE_DEFAULT_LAYOUT"):
            overrides["defaultLayout"] = env["NEXTFORGE_DEFAULT_LAYOUT"]
        if env.get("NEXTFORGE_PAGES_DIR"):
            overrides["pagesDir"] = env["NEXTFORGE_PAGES_DIR"]
        return overrides


# ---------------------------------------------------------------------------
# File discovery and parsing
# ---------------------------------------------------------------------------


def find_config_file(cwd: Path) -> Path | None:
    """Return the first existing config candidate in *cwd*, if any."""
    for name in CONFIG_CANDIDATES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a config file into a raw mapping.

    JSON and YAML are parsed directly.  For JS/TS the object literal that is
    exported is extracted and read as a YAML flow mapping, which accepts
    unquoted keys, either quote style and trailing commas.

    Raises:
        ConfigError: The file has no readable exported object.
    """
    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        else:
            data = _parse_object_literal(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must export an object, got {type(data).__name__}")
    return data


def _parse_object_literal(source: str) -> Any:
    text = _BLOCK_COMMENT.sub("", source)
    text = _LINE_COMMENT.sub(r"\1", text)
    for pattern in _EXPORT_PATTERNS:
        match = pattern.search(text)
        if match:
            break
    else:
        raise ConfigError("No `export default` or `module.exports` object found")

    body = match.group(1).strip()
    body = re.sub(r"\s+satisfies\s+[\w.<>\[\]]+\s*;?\s*$", "", body)
    body = body.rstrip().rstrip(";").rstrip()
    wrapped = _DEFINE_CONFIG.match(body)
    if wrapped:
        body = wrapped.group(1).strip()
    if _IDENTIFIER.match(body):
        # `const config: Config = {...}; export default config;`
        declared = re.search(
            rf"\b(?:const|let|var)\s+{re.escape(body)}\s*(?::[^=]+)?=\s*(?=\{{)", text
        )
        if declared is None:
            raise ConfigError(f"Exported `{body}` is not declared as an object literal")
        body = text[declared.end():]
    literal = _leading_object(body)
    if literal is None:
        raise ConfigError("Exported config is not an object literal")
    # YAML flow mappings need a space after each key colon.
    flow = _KEY_COLON.sub(r"\1\2: ", literal)
    return yaml.safe_load(flow)


def _leading_object(text: str) -> str | None:
    """Return the balanced ``{...}`` at the start of *text*, skipping strings."""
    if not text.startswith("{"):
        return None
    depth = 0
    quote = None
    escaped = False
    for index, char in enumerate(text):
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "\"'`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[: index + 1]
    return None


# ---------------------------------------------------------------------------
# Loading and merging
# ---------------------------------------------------------------------------


def _validate(data: Mapping[str, Any], source: str) -> NextForgeConfig:
    try:
        return NextForgeConfig.model_validate(dict(data))
    except ValidationError as exc:
        issues = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid nextforge config ({source}): {issues}") from exc


def merge_config(
    file_config: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
    flags: Mapping[str, Any] | None = None,
) -> NextForgeConfig:
    """Combine the three config layers into a validated model.

    Keys may use either the camelCase aliases or the snake_case field names.
    """
    merged: dict[str, Any] = {}
    for layer in (file_config or {}, NextForgeConfig.env_overrides(env), flags or {}):
        for key, value in layer.items():
            merged[_alias_for(key)] = value
    return _validate(merged, source="merged")


def _alias_for(key: str) -> str:
    field_info = NextForgeConfig.model_fields.get(key)
    if field_info is not None and field_info.alias:
        return field_info.alias
    return key


def load_config(
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    flags: Mapping[str, Any] | None = None,
    verbose: bool = False,
) -> NextForgeConfig:
    """Load the project's config from *cwd* and apply env and flag overrides.

    A missing config file is not an error: defaults are used.
    """
    env = os.environ if env is None else env
    root = Path(cwd) if cwd is not None else Path.cwd()
    config_file = find_config_file(root)
    file_config = read_config_file(config_file) if config_file else {}
    config = merge_config(file_config, env, flags)

    if verbose or env.get("NEXTFORGE_DEBUG") == "1":
        source = config_file.name if config_file else "defaults"
        console.print(f"[dim]\\[nextforge] Loaded config from {source}:[/dim]", config.as_dict())
    return config
