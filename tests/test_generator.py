import re
from datetime import datetime
from pathlib import Path

import pytest

from buildinfo.config import GeneratorConfig
from buildinfo.generator import GeneratedInfo, format_timestamp, generate, preview
from buildinfo.manifest import ManifestNotFound

TIMESTAMP_RE = re.compile(r"\d{2}:\d{2}:\d{2} \d{4}-\d{2}-\d{2}")


def _fixed_now() -> datetime:
    return datetime(2024, 3, 5, 7, 8, 9)


def _project(tmp_path: Path, version_line: str) -> Path:
    (tmp_path / "pubspec.yaml").write_text(f"name: demo_app\n{version_line}\n", encoding="utf-8")
    return tmp_path


def test_format_timestamp() -> None:
    assert format_timestamp(datetime(2024, 12, 1, 23, 5, 0)) == "23:05:00 2024-12-01"


def test_generate_writes_dart_file(tmp_path: Path) -> None:
    root = _project(tmp_path, "version: 1.0.0+1")

    info = generate(root, now=_fixed_now)

    assert info == GeneratedInfo(
        app_version="1.0.0",
        build_number="1",
        build_time="07:08:09 2024-03-05",
        full_version="1.0.0+1",
    )
    out = (root / "lib" / "build_info.dart").read_text(encoding="utf-8")
    assert "const String buildTime = '07:08:09 2024-03-05';" in out
    assert "const String appVersion = '1.0.0';" in out
    assert "const String buildNumber = '1';" in out
    assert out.index("buildTime") < out.index("appVersion") < out.index("buildNumber")


def test_generate_without_build_number(tmp_path: Path) -> None:
    root = _project(tmp_path, "version: 2.3.4")

    info = generate(root, now=_fixed_now)

    assert info.app_version == "2.3.4"
    assert info.build_number == ""
    assert "const String buildNumber = '';" in (root / "lib" / "build_info.dart").read_text(encoding="utf-8")


def test_real_clock_timestamp_format(tmp_path: Path) -> None:
    info = generate(_project(tmp_path, "version: 1.0.0+1"))
    assert TIMESTAMP_RE.fullmatch(info.build_time)


def test_repeat_runs_keep_version_fields(tmp_path: Path) -> None:
    root = _project(tmp_path, "version: 1.0.0+1")
    first = generate(root)
    second = generate(root)
    assert (first.app_version, first.build_number) == (second.app_version, second.build_number)


def test_same_second_is_byte_identical(tmp_path: Path) -> None:
    root = _project(tmp_path, "version: 1.0.0+1")
    out = root / "lib" / "build_info.dart"

    generate(root, now=_fixed_now)
    first = out.read_bytes()
    generate(root, now=_fixed_now)
    assert out.read_bytes() == first


def test_missing_manifest_creates_nothing(tmp_path: Path) -> None:
    with pytest.raises(ManifestNotFound):
        generate(tmp_path)
    assert not (tmp_path / "lib").exists()


def test_missing_manifest_keeps_previous_output(tmp_path: Path) -> None:
    out = tmp_path / "lib" / "build_info.dart"
    out.parent.mkdir()
    out.write_text("// previous build\n", encoding="utf-8")

    with pytest.raises(ManifestNotFound):
        generate(tmp_path)
    assert out.read_text(encoding="utf-8") == "// previous build\n"


def test_missing_version_writes_empty_fields(tmp_path: Path) -> None:
    (tmp_path / "pubspec.yaml").write_text("name: demo_app\n", encoding="utf-8")

    info = generate(tmp_path, now=_fixed_now)

    assert (info.app_version, info.build_number) == ("", "")
    assert "const String appVersion = '';" in (tmp_path / "lib" / "build_info.dart").read_text(encoding="utf-8")


def test_custom_config(tmp_path: Path) -> None:
    (tmp_path / "app").mkdir()
    (tmp_path / "app" / "pubspec.yaml").write_text("version: 4.0.0+40\n", encoding="utf-8")
    cfg = GeneratorConfig(manifest="app/pubspec.yaml", output="gen/build_info.py", language="python")

    generate(tmp_path, config=cfg, now=_fixed_now)

    out = (tmp_path / "gen" / "build_info.py").read_text(encoding="utf-8")
    assert "appVersion: str = '4.0.0'" in out
    assert "buildNumber: str = '40'" in out


def test_preview_does_not_write(tmp_path: Path) -> None:
    root = _project(tmp_path, "version: 1.0.0+1")

    info = preview(root, now=_fixed_now)

    assert info.app_version == "1.0.0"
    assert not (root / "lib").exists()
