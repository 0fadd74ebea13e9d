"""
manifest.py

Responsibility: Read the `version:` field of a manifest file into a typed value.

This implementation intentionally stays lenient, like the shell step it replaces:
- It scans lines for the first `version:` key instead of loading the whole YAML
  document, so a manifest that is not valid YAML still yields a version.
- A missing or empty version degrades to empty strings unless `strict` is set.

Only a missing manifest file is always an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from buildinfo.errors import BuildInfoError

log = logging.getLogger(__name__)

VERSION_KEY = "version:"
BUILD_SEPARATOR = "+"


class ManifestNotFound(BuildInfoError, FileNotFoundError):
    pass


class InvalidManifest(BuildInfoError, ValueError):
    pass


@dataclass(frozen=True)
class ManifestVersion:
    """A `MAJOR.MINOR.PATCH+BUILD` string split into its two halves."""

    full: str = ""
    app_version: str = ""
    build_number: str = ""

    @classmethod
    def parse(cls, full: str) -> ManifestVersion:
        app_version, _sep, build_number = full.partition(BUILD_SEPARATOR)
        return cls(full=full, app_version=app_version, build_number=build_number)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def read_version_line(text: str) -> str:
    """
    Return the value of the first `version:` line in `text`, or "" if there is none.

    - Leading/trailing whitespace and carriage returns are removed.
    - Only the first token is kept, so `version: 1.0.0+1  # bump` gives `1.0.0+1`.
    - One pair of surrounding YAML quotes is stripped.
    """
    for raw in text.splitlines():
        line = raw.strip()
        if not line.startswith(VERSION_KEY):
            continue
        value = line[len(VERSION_KEY) :].replace("\r", "").strip()
        tokens = value.split()
        if not tokens:
            return ""
        return _unquote(tokens[0])
    return ""


def load_manifest_version(manifest_path: str | Path, *, strict: bool = False) -> ManifestVersion:
    """
    Load and parse the version of the manifest at `manifest_path`.

    Raises `ManifestNotFound` if the file does not exist. With `strict`, a missing
    or empty version raises `InvalidManifest` instead of returning empty fields.
    """
    path = Path(manifest_path)
    if not path.is_file():
        raise ManifestNotFound(f"Manifest file does not exist: {path}")

    # Decode leniently; only the ASCII version line matters.
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise InvalidManifest(f"Cannot read manifest {path}: {e.strerror or e}") from e
    full = read_version_line(text)

    if not full:
        if strict:
            raise InvalidManifest(f"Manifest has no `version:` value: {path}")
        log.warning("No version found in %s; writing empty version fields", path)
        return ManifestVersion()

    version = ManifestVersion.parse(full)
    log.debug("Parsed version %r from %s", version.full, path)
    return version
