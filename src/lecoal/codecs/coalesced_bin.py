"""Coalesced bundle binary codec (read + write).

Layout (little-endian, i32 counts, strings per `coal_string`):

    Bundle   := fileCount, File{fileCount}
    File     := name, sectionCount, Section{sectionCount}
    Section  := name, pairCount, Pair{pairCount}
    Pair     := key, value

Decoding is strict: truncated records, negative counts, positive string
prefixes and trailing bytes all raise `StructuralDecodeError` and no partial
bundle is returned. Encoding is depth-first in declared order into an
in-memory buffer; file output goes through an atomic replace.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from lecoal.codecs.coal_string import I32, decode_coal_string, encode_coal_string, read_i32
from lecoal.core.errors import StructuralDecodeError
from lecoal.core.model import Bundle, File, Pair, Section
from lecoal.io.atomic import write_bytes_atomic

logger = logging.getLogger(__name__)


# ----------------------------
# Decode
# ----------------------------


class _Cursor:
    """Sequential reader over a fully materialized byte buffer."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def count(self, what: str) -> int:
        start = self.pos
        value, self.pos = read_i32(self.data, self.pos, what=what)
        if value < 0:
            raise StructuralDecodeError(f"negative {what} {value}", offset=start)
        return value

    def string(self) -> str:
        text, self.pos = decode_coal_string(self.data, self.pos)
        return text


def _read_section(cur: _Cursor) -> Section:
    name = cur.string()
    pair_count = cur.count("pair count")
    pairs: list[Pair] = []
    for _ in range(pair_count):
        key = cur.string()
        value = cur.string()
        pairs.append(Pair(key, value))
    return Section(name, tuple(pairs))


def _read_file(cur: _Cursor) -> File:
    name = cur.string()
    section_count = cur.count("section count")
    logger.debug("file %r: %d sections", name, section_count)
    sections = [_read_section(cur) for _ in range(section_count)]
    return File(name, tuple(sections))


def parse_bundle_bytes(data: bytes, *, name: str = "") -> Bundle:
    """Decode a whole Coalesced bundle from `data`.

    Args:
        data: The complete bundle contents.
        name: Name to give the resulting Bundle (the binary form has none;
            callers usually pass the source file's base name).
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"parse_bundle_bytes: expected bytes, got {type(data).__name__}")

    cur = _Cursor(bytes(data))
    file_count = cur.count("file count")
    logger.debug("bundle %r: %d files", name, file_count)
    files = [_read_file(cur) for _ in range(file_count)]

    if cur.pos != len(cur.data):
        raise StructuralDecodeError(
            f"{len(cur.data) - cur.pos} trailing bytes after last file",
            offset=cur.pos,
        )
    return Bundle(name, tuple(files))


def read_coalesced(path: str | Path, *, name: Optional[str] = None) -> Bundle:
    """Read a bundle file from disk; the Bundle name defaults to the file's base name."""
    p = Path(path)
    data = p.read_bytes()
    logger.debug("read %d bytes from %s", len(data), p)
    return parse_bundle_bytes(data, name=p.name if name is None else name)


# ----------------------------
# Encode
# ----------------------------


def _write_section(out: bytearray, section: Section) -> None:
    out += encode_coal_string(section.name)
    out += I32.pack(len(section.pairs))
    for key, value in section.pairs:
        out += encode_coal_string(key)
        out += encode_coal_string(value)


def dump_bundle_bytes(bundle: Bundle) -> bytes:
    """Encode `bundle` to its binary form.

    `None` entries in a File's sections are skipped; the section count written
    before them is not adjusted.
    """
    if not isinstance(bundle, Bundle):
        raise TypeError(f"dump_bundle_bytes: expected Bundle, got {type(bundle).__name__}")

    out = bytearray()
    out += I32.pack(len(bundle.files))
    for f in bundle.files:
        out += encode_coal_string(f.name)
        out += I32.pack(len(f.sections))
        for section in f.sections:
            if section is None:
                continue
            _write_section(out, section)
    return bytes(out)


def write_coalesced(path: str | Path, bundle: Bundle) -> Path:
    """Encode `bundle` and write it atomically to `path`."""
    data = dump_bundle_bytes(bundle)
    return write_bytes_atomic(path, data)
