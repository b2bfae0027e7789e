"""Unpacked-directory format and the Pack/Unpack operations.

An unpacked bundle is a flat folder containing:
- one editable text document per bundled file
- `mele.extractedbin`, the manifest mapping on-disk names to original names
"""

from __future__ import annotations

from .io import load_directory, pack, save_directory, unpack
from .manifest import MANIFEST_FILENAME, Manifest, ManifestEntry, build_manifest, read_manifest, write_manifest

__all__ = [
    "MANIFEST_FILENAME",
    "Manifest",
    "ManifestEntry",
    "build_manifest",
    "read_manifest",
    "write_manifest",
    "save_directory",
    "load_directory",
    "unpack",
    "pack",
]
