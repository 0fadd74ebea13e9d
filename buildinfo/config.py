"""
config.py

Responsibility: Load the optional per-project `buildinfo.yaml` into a typed config.

The file is a flat YAML mapping; every key is optional:

    manifest: pubspec.yaml
    output: lib/build_info.dart
    language: dart
    strict: false

CLI flags override file values, which override the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from buildinfo.errors import BuildInfoError
from buildinfo.renderer import LANGUAGES

CONFIG_FILENAME = "buildinfo.yaml"


class ConfigError(BuildInfoError, ValueError):
    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """Where to read the manifest, where to write the output, and in what language."""

    manifest: str = "pubspec.yaml"
    output: str = "lib/build_info.dart"
    language: str = "dart"
    strict: bool = False

    def manifest_path(self, root: str | Path) -> Path:
        return Path(root) / self.manifest

    def output_path(self, root: str | Path) -> Path:
        return Path(root) / self.output

    def with_overrides(
        self,
        *,
        manifest: str | None = None,
        output: str | None = None,
        language: str | None = None,
        strict: bool | None = None,
    ) -> GeneratorConfig:
        """Return a copy with every non-None override applied."""
        changes: dict[str, Any] = {
            "manifest": manifest,
            "output": output,
            "language": language,
            "strict": strict,
        }
        for key in ("manifest", "output"):
            value = changes[key]
            if value is not None and not value.strip():
                raise ConfigError(f"`{key}` must be a non-empty path")
        cfg = replace(self, **{k: v for k, v in changes.items() if v is not None})
        _check_language(cfg.language)
        return cfg


def _check_language(language: str) -> None:
    if language not in LANGUAGES:
        supported = ", ".join(sorted(LANGUAGES))
        raise ConfigError(f"Unsupported language {language!r} (expected one of: {supported})")


def _from_mapping(data: dict[str, Any], source: Path) -> GeneratorConfig:
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ConfigError(f"Unknown key(s) in {source}: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key in ("manifest", "output", "language"):
        if key in data:
            raw = data[key]
            if not isinstance(raw, str) or not raw.strip():
                raise ConfigError(f"`{key}` must be a non-empty string in {source}")
            values[key] = raw.strip()
    if "strict" in data:
        if not isinstance(data["strict"], bool):
            raise ConfigError(f"`strict` must be true or false in {source}")
        values["strict"] = data["strict"]

    cfg = GeneratorConfig(**values)
    _check_language(cfg.language)
    return cfg


def load_config(root: str | Path, config_path: str | Path | None = None) -> GeneratorConfig:
    """
    Load `buildinfo.yaml` from `root`, or from `config_path` when given.

    A missing default file yields the defaults; a missing explicit file is an error.
    """
    if config_path is None:
        path = Path(root) / CONFIG_FILENAME
        if not path.exists():
            return GeneratorConfig()
    else:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file does not exist: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e

    if data is None:
        return GeneratorConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a mapping/object at the top level: {path}")
    return _from_mapping(data, path)
