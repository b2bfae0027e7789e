"""Unpacked-directory save/load and the Pack/Unpack operations.

An unpacked directory contains:
- one text document per bundled file, named by `sanitize_file_name()`
- `mele.extractedbin`, the manifest (see `lecoal.bundle.manifest`)

Unpack renders every document and the manifest in memory before touching the
disk, so an unrepresentable value or a name collision writes nothing. Every
file (documents, manifest, packed bundle) is written atomically.

Callers (the CLI) are expected to pass already-validated paths; path
expansion and user-facing messages are not handled here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lecoal.bundle.manifest import (
    MANIFEST_FILENAME,
    Manifest,
    build_manifest,
    read_manifest,
    render_manifest,
)
from lecoal.codecs.coal_text import DOCUMENT_NEWLINE, dump_file_text, encode_document, read_file_text
from lecoal.codecs.coalesced_bin import read_coalesced, write_coalesced
from lecoal.core.errors import ManifestError, MissingSourceFileError
from lecoal.core.model import Bundle, File
from lecoal.io.atomic import write_bytes_atomic

logger = logging.getLogger(__name__)


def save_directory(bundle: Bundle, root: str | Path, *, newline: str = DOCUMENT_NEWLINE) -> Manifest:
    """Write `bundle` as documents + manifest under `root`; return the manifest."""
    root = Path(root)
    manifest = build_manifest(bundle)

    # Render everything first; any encode failure aborts before the first write.
    documents: list[tuple[str, bytes]] = []
    for entry, f in zip(manifest.entries, bundle.files):
        documents.append((entry.sanitized_name, encode_document(dump_file_text(f, newline=newline))))
    manifest_bytes = encode_document(render_manifest(manifest, newline=newline))

    root.mkdir(parents=True, exist_ok=True)
    for sanitized_name, data in documents:
        write_bytes_atomic(root / sanitized_name, data)
    # Manifest last: a directory with a manifest is complete.
    write_bytes_atomic(root / MANIFEST_FILENAME, manifest_bytes)

    logger.info("unpacked %d files into %s", len(documents), root)
    return manifest


def _document_path(root: Path, sanitized_name: str, *, manifest_path: Path) -> Path:
    # Manifest entries must name files directly inside `root`.
    if sanitized_name in (".", "..") or Path(sanitized_name).name != sanitized_name or "\\" in sanitized_name:
        raise ManifestError(f"entry {sanitized_name!r} is not a plain file name", path=manifest_path)
    return root / sanitized_name


def load_directory(root: str | Path) -> Bundle:
    """Rebuild a Bundle from an unpacked directory.

    Files are read in manifest order; each document is parsed under its
    original (unsanitized) name.

    Raises:
        ManifestError: manifest missing or malformed.
        MissingSourceFileError: a listed document is absent.
        TextGrammarError: a document violates the grammar.
    """
    root = Path(root)
    manifest_path = root / MANIFEST_FILENAME
    manifest = read_manifest(manifest_path)

    # Resolve every path before parsing anything.
    paths: list[Path] = []
    for entry in manifest.entries:
        p = _document_path(root, entry.sanitized_name, manifest_path=manifest_path)
        if not p.is_file():
            raise MissingSourceFileError(entry.sanitized_name)
        paths.append(p)

    files: list[File] = []
    for entry, p in zip(manifest.entries, paths):
        files.append(read_file_text(p, name=entry.original_name))

    logger.debug("loaded %d files from %s", len(files), root)
    return Bundle(manifest.destination_name, tuple(files))


def unpack(source_file: str | Path, dest_dir: str | Path, *, newline: str = DOCUMENT_NEWLINE) -> Manifest:
    """Unpack a binary bundle file into a directory of text documents."""
    bundle = read_coalesced(source_file)
    return save_directory(bundle, dest_dir, newline=newline)


def pack(source_dir: str | Path, dest_file: str | Path) -> Bundle:
    """Pack an unpacked directory back into a binary bundle file."""
    bundle = load_directory(source_dir)
    write_coalesced(dest_file, bundle)
    logger.info("packed %d files into %s", len(bundle.files), dest_file)
    return bundle
