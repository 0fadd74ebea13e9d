"""
cli.py

Responsibility: CLI entrypoint for buildinfo.

High-level flow (default command `generate`):
1) Load `buildinfo.yaml` (if any) and apply CLI overrides -> `GeneratorConfig`
2) Run `generate` against the explicit `--root`
3) Print a one-line confirmation to stdout

Exit status: 0 on success, 1 on any buildinfo error (missing manifest included),
2 on usage errors.

This module should orchestrate behavior but keep concerns isolated:
- Manifest parsing: `manifest.py`
- Configuration: `config.py`
- Rendering: `renderer.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from buildinfo import __version__
from buildinfo.config import GeneratorConfig, load_config
from buildinfo.errors import BuildInfoError
from buildinfo.generator import generate, preview
from buildinfo.renderer import LANGUAGES

log = logging.getLogger(__name__)


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    cfg = load_config(args.root, args.config)
    return cfg.with_overrides(
        manifest=args.manifest,
        output=args.output,
        language=args.language,
        strict=args.strict,
    )


def generate_cmd(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    root = Path(args.root)

    if args.dry_run:
        info = preview(root, config=cfg)
        print(
            f"Would generate {cfg.output_path(root)}: "
            f"version={info.app_version} build={info.build_number} time={info.build_time}"
        )
        return 0

    info = generate(root, config=cfg)
    print(
        f"Generated {cfg.output_path(root)}: "
        f"version={info.app_version} build={info.build_number} time={info.build_time}"
    )
    return 0


def show_cmd(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    info = preview(Path(args.root), config=cfg)
    print(f"buildTime={info.build_time}")
    print(f"appVersion={info.app_version}")
    print(f"buildNumber={info.build_number}")
    return 0


def _add_common_options(p: argparse.ArgumentParser, *, top_level: bool) -> None:
    # Subcommands suppress their defaults so options given before the subcommand survive.
    if top_level:
        root, config, verbose, quiet = ".", None, 0, False
    else:
        root = config = verbose = quiet = argparse.SUPPRESS
    p.add_argument("--root", default=root, help="Project root containing the manifest (default: current directory)")
    p.add_argument("--config", default=config, help="Config file (default: <root>/buildinfo.yaml if present)")
    p.add_argument("-v", "--verbose", action="count", default=verbose, help="Log more (repeat for debug output)")
    p.add_argument("-q", "--quiet", action="store_true", default=quiet, help="Only log errors")


def _add_manifest_options(p: argparse.ArgumentParser, *, top_level: bool) -> None:
    unset = None if top_level else argparse.SUPPRESS
    p.add_argument("--manifest", default=unset, help="Manifest path relative to root (default: pubspec.yaml)")
    p.add_argument("--strict", dest="strict", action="store_true", default=unset, help="Fail if the manifest has no version")
    p.add_argument(
        "--no-strict",
        dest="strict",
        action="store_false",
        default=unset,
        help="Write empty fields if the manifest has no version (overrides `strict: true`)",
    )


def _add_output_options(p: argparse.ArgumentParser, *, top_level: bool) -> None:
    unset = None if top_level else argparse.SUPPRESS
    p.add_argument("--output", default=unset, help="Output path relative to root (default: lib/build_info.dart)")
    p.add_argument("--language", default=unset, choices=sorted(LANGUAGES), help="Target language (default: dart)")
    p.add_argument(
        "--dry-run",
        action="store_true",
        default=False if top_level else argparse.SUPPRESS,
        help="Print the values without writing the file",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildinfo", description="Write version and build time constants from a manifest")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    # The top-level parser also takes the generate options, since generate is the default command.
    _add_common_options(p, top_level=True)
    _add_manifest_options(p, top_level=True)
    _add_output_options(p, top_level=True)
    p.set_defaults(func=generate_cmd)

    sub = p.add_subparsers(dest="command")

    g = sub.add_parser("generate", help="Write the generated build info file (default)")
    _add_common_options(g, top_level=False)
    _add_manifest_options(g, top_level=False)
    _add_output_options(g, top_level=False)
    g.set_defaults(func=generate_cmd)

    s = sub.add_parser("show", help="Print the values that would be generated")
    _add_common_options(s, top_level=False)
    _add_manifest_options(s, top_level=False)
    s.set_defaults(func=show_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)
    try:
        return int(args.func(args))
    except BuildInfoError as e:
        log.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
