"""
generator.py

Responsibility: The generate operation.

High-level flow:
1) Read the manifest version -> `ManifestVersion`
2) Capture the local wall-clock time
3) Render and overwrite the generated source file

The project root is always passed in explicitly; nothing here looks at the
current working directory or at where the package is installed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from buildinfo.config import GeneratorConfig
from buildinfo.manifest import load_manifest_version
from buildinfo.renderer import write_build_info

log = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%H:%M:%S %Y-%m-%d"


@dataclass(frozen=True)
class GeneratedInfo:
    """The values written to the generated file, plus the raw manifest version."""

    app_version: str
    build_number: str
    build_time: str
    full_version: str = ""


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def preview(
    root: str | Path,
    *,
    config: GeneratorConfig | None = None,
    now: Callable[[], datetime] = datetime.now,
) -> GeneratedInfo:
    """
    Compute the values `generate` would write, without touching the output file.

    Raises `ManifestNotFound` if the manifest is missing.
    """
    cfg = config or GeneratorConfig()
    version = load_manifest_version(cfg.manifest_path(root), strict=cfg.strict)
    return GeneratedInfo(
        app_version=version.app_version,
        build_number=version.build_number,
        build_time=format_timestamp(now()),
        full_version=version.full,
    )


def generate(
    root: str | Path,
    *,
    config: GeneratorConfig | None = None,
    now: Callable[[], datetime] = datetime.now,
) -> GeneratedInfo:
    """
    Read `<root>/<manifest>` and overwrite `<root>/<output>` with the build constants.

    The manifest is read before anything is written, so a missing manifest leaves
    any previously generated file as it was.
    """
    cfg = config or GeneratorConfig()
    info = preview(root, config=cfg, now=now)
    out_path = write_build_info(info, cfg.output_path(root), cfg.language, manifest=cfg.manifest)
    log.info(
        "Generated %s (version=%s build=%s time=%s)",
        out_path,
        info.app_version,
        info.build_number,
        info.build_time,
    )
    return info
