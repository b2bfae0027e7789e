"""Quickcheck workspace: encode -> unpack -> pack -> compare bytes.

This workspace is self-contained (no game files required). It builds a small
synthetic bundle, writes it under
`workspaces/00_quickcheck_unpack_pack/outputs/Coalesced_INT.bin`, unpacks it to
`outputs/unpacked/`, packs it back to `outputs/repacked.bin`, and writes a JSON
report.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from lecoal.bundle.io import pack, unpack
from lecoal.codecs.coalesced_bin import write_coalesced
from lecoal.core.model import Bundle, File, Section
from lecoal.core.tables import summarize_bundle


def _fixture_bundle() -> Bundle:
    # Covers duplicate keys, an empty section and all three line-break styles.
    return Bundle(
        "Coalesced_INT.bin",
        (
            File(
                "..\\..\\BIOGame\\Config\\BIOEngine.ini",
                (
                    Section.from_pairs(
                        "Core.System",
                        [("Paths", "..\\..\\Engine\\Content"), ("Paths", "..\\BIOGame\\Content")],
                    ),
                    Section("Engine.Engine"),
                ),
            ),
            File(
                "BIOGame/Config.ini",
                (
                    Section.from_pairs(
                        "Engine.Settings",
                        [
                            ("bFullscreen", "True"),
                            ("sDescription", "Line1\r\nLine2"),
                            ("sUnix", "a\nb\nc"),
                            ("sMac", "a\rb"),
                        ],
                    ),
                ),
            ),
        ),
    )


def _write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    here = Path(__file__).resolve().parent
    outputs = here / "outputs"
    outputs.mkdir(parents=True, exist_ok=True)

    bundle1 = _fixture_bundle()
    original = write_coalesced(outputs / bundle1.name, bundle1)

    unpacked = outputs / "unpacked"
    manifest = unpack(original, unpacked)

    repacked = outputs / "repacked.bin"
    bundle2 = pack(unpacked, repacked)

    ok_tree = bundle2 == bundle1
    ok_bytes = repacked.read_bytes() == original.read_bytes()

    report = {
        "original_path": str(original),
        "unpacked_dir": str(unpacked),
        "repacked_path": str(repacked),
        "manifest_entries": [list(e) for e in manifest.entries],
        "files": summarize_bundle(bundle2).to_dict(orient="records"),
        "tree_equal": ok_tree,
        "bytes_equal": ok_bytes,
    }
    _write_json(outputs / "roundtrip_report.json", report)

    if not (ok_tree and ok_bytes):
        raise SystemExit("roundtrip failed; see outputs/roundtrip_report.json")


if __name__ == "__main__":
    main()
