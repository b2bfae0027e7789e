from __future__ import annotations

from pathlib import Path

import pytest

from lecoal.bundle.io import load_directory, pack, save_directory, unpack
from lecoal.bundle.manifest import MANIFEST_FILENAME
from lecoal.codecs.coalesced_bin import dump_bundle_bytes, write_coalesced
from lecoal.core.errors import AmbiguousLineEndingError, ManifestError, MissingSourceFileError, TextGrammarError
from lecoal.core.model import Bundle, File, Section

from conftest import make_bundle


def test_scenario_unpack_then_pack_is_byte_identical(tmp_path: Path, scenario_bundle: Bundle) -> None:
    original = tmp_path / "Coalesced_INT.bin"
    write_coalesced(original, scenario_bundle)

    out_dir = tmp_path / "unpacked"
    manifest = unpack(original, out_dir)

    assert sorted(p.name for p in out_dir.iterdir()) == ["BIOGame_Config.ini", MANIFEST_FILENAME]
    doc = (out_dir / "BIOGame_Config.ini").read_bytes().decode("utf-8")
    assert doc.splitlines()[-2:] == ["sDescription||=Line1", "sDescription||=Line2"]
    assert manifest.entries[0].original_name == "BIOGame/Config.ini"
    assert (out_dir / MANIFEST_FILENAME).read_text(encoding="utf-8").splitlines() == [
        "Coalesced_INT.bin",
        "1",
        "BIOGame_Config.ini;;BIOGame/Config.ini",
    ]

    repacked = tmp_path / "repacked.bin"
    bundle = pack(out_dir, repacked)
    assert bundle == scenario_bundle
    assert repacked.read_bytes() == original.read_bytes()


def test_rich_bundle_full_cycle(tmp_path: Path, rich_bundle: Bundle) -> None:
    original = tmp_path / rich_bundle.name
    write_coalesced(original, rich_bundle)

    unpack(original, tmp_path / "out")
    repacked = tmp_path / "again.bin"
    assert pack(tmp_path / "out", repacked) == rich_bundle
    assert repacked.read_bytes() == original.read_bytes()


def test_duplicate_keys_survive_cycle(tmp_path: Path) -> None:
    bundle = make_bundle(
        "Coalesced_INT.bin",
        {"Array.ini": [("S", [("+Item", "a"), ("+Item", "b"), ("-Item", "a"), ("+Item", "c")])]},
    )
    save_directory(bundle, tmp_path)
    loaded = load_directory(tmp_path)
    assert loaded.files[0].sections[0].pairs == bundle.files[0].sections[0].pairs


def test_empty_bundle_cycle(tmp_path: Path) -> None:
    bundle = Bundle("Empty.bin")
    save_directory(bundle, tmp_path / "d")
    assert [p.name for p in (tmp_path / "d").iterdir()] == [MANIFEST_FILENAME]

    pack(tmp_path / "d", tmp_path / "e.bin")
    assert (tmp_path / "e.bin").read_bytes() == b"\x00\x00\x00\x00"


def test_bundle_name_comes_from_manifest(tmp_path: Path, scenario_bundle: Bundle) -> None:
    save_directory(scenario_bundle, tmp_path)
    manifest_path = tmp_path / MANIFEST_FILENAME
    text = manifest_path.read_text(encoding="utf-8").replace("Coalesced_INT.bin", "Coalesced_FRA.bin", 1)
    manifest_path.write_text(text, encoding="utf-8")

    assert load_directory(tmp_path).name == "Coalesced_FRA.bin"


def test_pack_requires_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        pack(tmp_path, tmp_path / "out.bin")
    assert not (tmp_path / "out.bin").exists()


def test_pack_fails_when_count_mismatches(tmp_path: Path, scenario_bundle: Bundle) -> None:
    save_directory(scenario_bundle, tmp_path)
    (tmp_path / MANIFEST_FILENAME).write_text(
        "Coalesced_INT.bin\n2\nBIOGame_Config.ini;;BIOGame/Config.ini\n", encoding="utf-8"
    )
    with pytest.raises(ManifestError, match="file count is 2"):
        pack(tmp_path, tmp_path / "out.bin")


def test_pack_fails_on_missing_listed_file(tmp_path: Path, scenario_bundle: Bundle) -> None:
    save_directory(scenario_bundle, tmp_path)
    (tmp_path / "BIOGame_Config.ini").unlink()

    with pytest.raises(MissingSourceFileError) as ei:
        pack(tmp_path, tmp_path / "out.bin")
    assert ei.value.relative_path == "BIOGame_Config.ini"
    assert not (tmp_path / "out.bin").exists()


def test_pack_rejects_traversal_in_manifest(tmp_path: Path) -> None:
    (tmp_path / MANIFEST_FILENAME).write_text("B.bin\n1\n../escape.ini;;x.ini\n", encoding="utf-8")
    with pytest.raises(ManifestError, match="not a plain file name"):
        load_directory(tmp_path)


def test_pack_surfaces_grammar_errors_with_file_name(tmp_path: Path, scenario_bundle: Bundle) -> None:
    save_directory(scenario_bundle, tmp_path)
    (tmp_path / "BIOGame_Config.ini").write_text("orphan=1\n", encoding="utf-8")

    with pytest.raises(TextGrammarError) as ei:
        pack(tmp_path, tmp_path / "out.bin")
    assert ei.value.file_name == "BIOGame_Config.ini"
    assert not (tmp_path / "out.bin").exists()


def test_failed_pack_keeps_existing_destination(tmp_path: Path, scenario_bundle: Bundle) -> None:
    dest = tmp_path / "dest.bin"
    dest.write_bytes(b"previous")
    save_directory(scenario_bundle, tmp_path / "d")
    (tmp_path / "d" / "BIOGame_Config.ini").write_text("[]\n", encoding="utf-8")

    with pytest.raises(TextGrammarError):
        pack(tmp_path / "d", dest)
    assert dest.read_bytes() == b"previous"


def test_unpack_writes_nothing_on_ambiguous_value(tmp_path: Path) -> None:
    bundle = Bundle(
        "B.bin",
        (
            File("Good.ini", (Section.from_pairs("S", [("k", "v")]),)),
            File("Bad.ini", (Section.from_pairs("S", [("k", "a\rb\nc")]),)),
        ),
    )
    src = tmp_path / "B.bin"
    src.write_bytes(dump_bundle_bytes(bundle))

    out_dir = tmp_path / "out"
    with pytest.raises(AmbiguousLineEndingError):
        unpack(src, out_dir)
    assert not out_dir.exists()


def test_edited_document_is_picked_up(tmp_path: Path, scenario_bundle: Bundle) -> None:
    save_directory(scenario_bundle, tmp_path)
    doc = tmp_path / "BIOGame_Config.ini"
    doc.write_bytes(doc.read_bytes().replace(b"bFullscreen=True", b"; edited\r\nbFullscreen=False"))

    section = load_directory(tmp_path).files[0].section("Engine.Settings")
    assert section is not None
    assert section.get("bFullscreen") == "False"
    assert section.get("sDescription") == "Line1\r\nLine2"
