"""
renderer.py

Responsibility: Render the generated build-info source file.

Rules:
- One Jinja2 template per target language, shipped in `buildinfo/templates/`.
- Every value goes through the language's `literal` filter, which emits a complete,
  escaped string literal; templates never interpolate raw text.
- Output is written with `\\n` newlines and fully replaces any previous file.

This module intentionally does NOT know about manifests, config files, or CLI parsing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from buildinfo.errors import BuildInfoError

if TYPE_CHECKING:
    from buildinfo.generator import GeneratedInfo

log = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class RenderError(BuildInfoError, RuntimeError):
    pass


_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _braced_unicode(ch: str) -> str:
    return f"\\u{{{ord(ch):x}}}"


def _four_digit_unicode(ch: str) -> str:
    return f"\\u{ord(ch):04x}"


def _escape(value: str, specials: str, control: Callable[[str], str]) -> str:
    out: list[str] = []
    for ch in value:
        if ch == "\\" or ch in specials:
            out.append("\\" + ch)
        elif ch in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(control(ch))
        else:
            out.append(ch)
    return "".join(out)


def dart_literal(value: str) -> str:
    return "'" + _escape(value, "'$", _braced_unicode) + "'"


def kotlin_literal(value: str) -> str:
    return '"' + _escape(value, '"$', _four_digit_unicode) + '"'


def swift_literal(value: str) -> str:
    return '"' + _escape(value, '"', _braced_unicode) + '"'


def python_literal(value: str) -> str:
    return repr(value)


# language -> (template file, string literal writer)
LANGUAGES: dict[str, tuple[str, Callable[[str], str]]] = {
    "dart": ("dart.j2", dart_literal),
    "kotlin": ("kotlin.j2", kotlin_literal),
    "swift": ("swift.j2", swift_literal),
    "python": ("python.j2", python_literal),
}


def _environment(literal: Callable[[str], str]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["literal"] = lambda v: literal(str(v))
    return env


def render_build_info(info: GeneratedInfo, language: str = "dart", *, manifest: str = "pubspec.yaml") -> str:
    """
    Render `info` as a source file in `language`.

    The three constants always appear in the order buildTime, appVersion, buildNumber.
    """
    try:
        template_name, literal = LANGUAGES[language]
    except KeyError:
        raise RenderError(f"No template for language: {language}") from None

    env = _environment(literal)
    try:
        template = env.get_template(template_name)
        return template.render(
            build_time=info.build_time,
            app_version=info.app_version,
            build_number=info.build_number,
            manifest=manifest,
        )
    except TemplateError as e:
        raise RenderError(f"Failed rendering template: {template_name}") from e


def write_build_info(
    info: GeneratedInfo,
    destination: str | Path,
    language: str = "dart",
    *,
    manifest: str = "pubspec.yaml",
) -> Path:
    """
    Render and write `info` to `destination`, creating parent directories as needed.

    The file is truncated and rewritten; nothing of the previous content survives.
    """
    text = render_build_info(info, language, manifest=manifest)
    dst_path = Path(destination)
    try:
        dst_path.parent.mkdir(parents=True, exist_ok=True)
        dst_path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise RenderError(f"Cannot write {dst_path}: {e.strerror or e}") from e
    log.debug("Wrote %d bytes to %s", len(text.encode("utf-8")), dst_path)
    return dst_path
