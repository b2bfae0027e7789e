from __future__ import annotations

from pathlib import Path

import pytest

from lecoal.bundle.manifest import (
    MANIFEST_FILENAME,
    Manifest,
    ManifestEntry,
    build_manifest,
    parse_manifest_text,
    read_manifest,
    render_manifest,
    write_manifest,
)
from lecoal.core.errors import ManifestError
from lecoal.core.model import Bundle, File


def test_build_and_render_scenario(scenario_bundle: Bundle) -> None:
    manifest = build_manifest(scenario_bundle)
    assert manifest == Manifest(
        "Coalesced_INT.bin",
        (ManifestEntry("BIOGame_Config.ini", "BIOGame/Config.ini"),),
    )
    assert render_manifest(manifest) == "Coalesced_INT.bin\r\n1\r\nBIOGame_Config.ini;;BIOGame/Config.ini\r\n"


def test_entries_follow_bundle_order(rich_bundle: Bundle) -> None:
    manifest = build_manifest(rich_bundle)
    assert [e.original_name for e in manifest.entries] == [f.name for f in rich_bundle.files]
    assert parse_manifest_text(render_manifest(manifest)) == manifest


def test_write_then_read(tmp_path: Path, rich_bundle: Bundle) -> None:
    manifest = build_manifest(rich_bundle)
    path = write_manifest(tmp_path / MANIFEST_FILENAME, manifest, newline="\n")
    assert read_manifest(path) == manifest


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="failed to find a manifest"):
        read_manifest(tmp_path / MANIFEST_FILENAME)


def test_count_line_is_trimmed() -> None:
    manifest = parse_manifest_text("B.bin\n 1 \na.ini;;a.ini\n")
    assert manifest.entries == (ManifestEntry("a.ini", "a.ini"),)


def test_original_name_may_contain_separator_after_first() -> None:
    manifest = parse_manifest_text("B.bin\n1\na.ini;;odd;;name\n")
    assert manifest.entries[0] == ManifestEntry("a.ini", "odd;;name")


@pytest.mark.parametrize(
    ("text", "fragment"),
    [
        ("", "empty manifest"),
        ("B.bin\n", "missing file count"),
        ("B.bin\nabc\n", "not an integer"),
        ("B.bin\n-1\n", "negative file count"),
        ("B.bin\n2\na.ini;;a.ini\n", "only 1 entries"),
        ("B.bin\n1\na.ini;;a.ini\nb.ini;;b.ini\n", "2 entries are listed"),
        ("B.bin\n1\nno-separator\n", "expected '<sanitized>;;<original>'"),
        ("B.bin\n1\n;;orig\n", "expected '<sanitized>;;<original>'"),
    ],
)
def test_malformed_manifests(text: str, fragment: str) -> None:
    with pytest.raises(ManifestError) as ei:
        parse_manifest_text(text, path="m")
    assert fragment in str(ei.value)
    assert ei.value.path == "m"


def test_trailing_blank_lines_are_tolerated() -> None:
    assert len(parse_manifest_text("B.bin\n0\n\n\n").entries) == 0


def test_colliding_sanitized_names_are_rejected() -> None:
    bundle = Bundle("B.bin", (File("a/b.ini"), File("a\\b.ini")))
    with pytest.raises(ManifestError, match="both map to on-disk name 'a_b.ini'"):
        build_manifest(bundle)


def test_file_named_like_manifest_is_rejected() -> None:
    with pytest.raises(ManifestError, match="collides with the manifest name"):
        build_manifest(Bundle("B.bin", (File(MANIFEST_FILENAME),)))


@pytest.mark.parametrize("name", ["bad\nname", "a;;b", ""])
def test_unrepresentable_file_names_are_rejected(name: str) -> None:
    with pytest.raises(ManifestError):
        build_manifest(Bundle("B.bin", (File(name),)))
