"""
buildinfo package

This package implements a build-metadata generator as a CLI-first utility.

Key responsibilities are split across modules:
- `manifest.py`: read the `version:` line of a manifest into a typed value
- `config.py`: optional per-project `buildinfo.yaml` settings
- `renderer.py`: structured rendering of the generated constants file
- `generator.py`: the generate operation (manifest -> timestamp -> output file)
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

from buildinfo.errors import BuildInfoError
from buildinfo.generator import GeneratedInfo, generate, preview
from buildinfo.manifest import InvalidManifest, ManifestNotFound, ManifestVersion

__all__ = [
    "BuildInfoError",
    "GeneratedInfo",
    "InvalidManifest",
    "ManifestNotFound",
    "ManifestVersion",
    "__version__",
    "generate",
    "preview",
]

__version__ = "0.1.0"
