# tests/test_media.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from txbench.config.types import TestConfig
from txbench.media.command import build_command, resolve
from txbench.media.files import clean_output_dir, cleanup_filename, find_sources, replicate
from txbench.media.inspector import inspect_media, parse_mediainfo
from txbench.media.types import MediaInfo

MEDIAINFO_OUTPUT = """\
General
Complete name                            : /media/clip.mov
Duration                                 : 10010
Duration                                 : 10 s 10 ms

Video
Width                                    : 1440
Width                                    : 1 440 pixels
Scan type                                : Interlaced
Duration                                 : 99999
"""


# -------------------------
# Metadata inspection
# -------------------------


def test_parse_mediainfo_reads_first_duration_and_flags() -> None:
    info = parse_mediainfo(MEDIAINFO_OUTPUT)
    assert info == MediaInfo(duration_s=10, interlaced=True, needs_scaling=True)


def test_parse_mediainfo_progressive_full_hd() -> None:
    out = "Duration : 20500\nWidth : 1920\nScan type : Progressive\n"
    assert parse_mediainfo(out) == MediaInfo(20, False, False)


def test_parse_mediainfo_without_duration() -> None:
    assert parse_mediainfo("General\nFormat : QuickTime\n").duration_s is None


def test_inspect_missing_tool_degrades(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        info = inspect_media(tmp_path / "x.mov", executable=str(tmp_path / "no-such-tool"))

    assert info == MediaInfo()
    assert "Metadata unavailable" in caplog.text


def test_inspect_uses_tool_output(tmp_path: Path) -> None:
    fake = tmp_path / "fake_mediainfo.py"
    fake.write_text(
        "import sys\nprint('Duration : 42000')\nprint('Scan type : Interlaced')\n",
        encoding="utf-8",
    )
    tool = tmp_path / "mediainfo"
    tool.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{fake}" "$@"\n', encoding="utf-8")
    tool.chmod(0o755)

    info = inspect_media(tmp_path / "x.mov", executable=str(tool))

    assert info == MediaInfo(42, True, False)


def test_inspect_tolerates_non_utf8_output(tmp_path: Path) -> None:
    # Latin-1 tags come through as raw bytes
    fake = tmp_path / "fake_mediainfo.py"
    fake.write_text(
        "import sys\n"
        "sys.stdout.buffer.write(b'Duration : 10000\\nTitle : caf\\xe9\\nWidth : 1440\\n')\n",
        encoding="utf-8",
    )
    tool = tmp_path / "mediainfo"
    tool.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{fake}" "$@"\n', encoding="utf-8")
    tool.chmod(0o755)

    info = inspect_media(tmp_path / "x.mov", executable=str(tool))

    assert info == MediaInfo(10, False, True)


def test_inspect_tool_failure_degrades(tmp_path: Path) -> None:
    tool = tmp_path / "mediainfo"
    tool.write_text("#!/bin/sh\nexit 1\n", encoding="utf-8")
    tool.chmod(0o755)

    assert inspect_media(tmp_path / "x.mov", executable=str(tool)) == MediaInfo()


# -------------------------
# Command templating
# -------------------------


def test_resolve_replaces_all_occurrences() -> None:
    assert resolve("cp IN IN.bak", {"IN": "a.mov"}) == "cp a.mov a.mov.bak"


def test_resolve_leaves_unknown_placeholders() -> None:
    assert resolve("tool INPUT_FILE EXTRA", {"INPUT_FILE": "a"}) == "tool a EXTRA"


def test_resolve_does_not_rescan_substituted_text() -> None:
    out = resolve("A B", {"A": "B", "B": "C"})
    assert out == "B C"


def test_resolve_prefers_longest_key() -> None:
    assert resolve("FILE_X", {"FILE": "f", "FILE_X": "fx"}) == "fx"


def test_resolve_without_substitutions_is_identity() -> None:
    assert resolve("echo INPUT_FILE", {}) == "echo INPUT_FILE"


def _test(**kw) -> TestConfig:
    fields = dict(
        name="prores",
        command="ffmbc -i INPUT_FILE INTERLACED_OPTION SCALING_OPTION OUTPUT_FILE",
        processes=[1],
        ext=".mov",
        interlaced_option="-tff",
        scaling_option="-s 1920x1080",
    )
    fields.update(kw)
    return TestConfig(**fields)


def test_build_command_applies_options_when_needed() -> None:
    cmd = build_command(_test(), MediaInfo(10, True, True), "in.mov", "out.mov")
    assert cmd == "ffmbc -i in.mov -tff -s 1920x1080 out.mov"


def test_build_command_blanks_options_when_not_needed() -> None:
    cmd = build_command(_test(), MediaInfo(10, False, False), Path("in.mov"), "out.mov")
    assert cmd == "ffmbc -i in.mov   out.mov"


# -------------------------
# File housekeeping
# -------------------------


@pytest.mark.parametrize(
    "name, expected",
    [
        ("clip.mov", "clip.mov"),
        ("/a/b/My Clip (1).mov", "My_Clip__1_.mov"),
        ("C:\\media\\x-y.mov", "x-y.mov"),
        ("ProRes 422 HQ", "ProRes_422_HQ"),
    ],
)
def test_cleanup_filename(name: str, expected: str) -> None:
    assert cleanup_filename(name) == expected


def test_find_sources_is_recursive_and_sorted(tmp_path: Path) -> None:
    (tmp_path / "sub").mkdir()
    for rel in ["b.mov", "sub/a.mov", "a.mov", "notes.txt", "c.mxf"]:
        (tmp_path / rel).write_bytes(b"x")

    found = find_sources(tmp_path)

    assert found == sorted([tmp_path / "a.mov", tmp_path / "b.mov", tmp_path / "sub" / "a.mov"])


def test_find_sources_custom_pattern(tmp_path: Path) -> None:
    (tmp_path / "a.mov").write_bytes(b"x")
    (tmp_path / "b.mxf").write_bytes(b"x")
    assert find_sources(tmp_path, "*.mxf") == [tmp_path / "b.mxf"]


def test_replicate_makes_numbered_copies(tmp_path: Path) -> None:
    src = tmp_path / "clip.mov"
    src.write_bytes(b"data")
    out = tmp_path / "out"
    out.mkdir()

    copies = replicate(src, out, 2)

    assert copies == [out / "clip_1.mov", out / "clip_2.mov"]
    assert all(c.read_bytes() == b"data" for c in copies)


def test_replicate_skips_existing_copies(tmp_path: Path) -> None:
    src = tmp_path / "clip.mov"
    src.write_bytes(b"new")
    out = tmp_path / "out"
    out.mkdir()
    (out / "clip_1.mov").write_bytes(b"old")

    copies = replicate(src, out, 2)

    assert (out / "clip_1.mov").read_bytes() == b"old"
    assert copies[1].read_bytes() == b"new"


def test_replicate_zero_copies(tmp_path: Path) -> None:
    src = tmp_path / "clip.mov"
    src.write_bytes(b"x")
    assert replicate(src, tmp_path, 0) == []


def test_replicate_missing_destination_raises(tmp_path: Path) -> None:
    src = tmp_path / "clip.mov"
    src.write_bytes(b"x")
    with pytest.raises(OSError):
        replicate(src, tmp_path / "missing", 1)


def test_clean_output_dir_removes_files_only(tmp_path: Path) -> None:
    (tmp_path / "a.mov").write_bytes(b"x")
    (tmp_path / "b.txt").write_bytes(b"x")
    (tmp_path / "keep").mkdir()

    removed = clean_output_dir(tmp_path)

    assert removed == 2
    assert [p.name for p in tmp_path.iterdir()] == ["keep"]
