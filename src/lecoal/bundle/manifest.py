"""Unpacked-directory manifest.

The manifest sits next to the unpacked documents under a fixed name and maps
each sanitized on-disk name back to the original logical file name:

    line 1: <bundle name>
    line 2: <file count N>
    lines 3..3+N-1: <sanitized name>;;<original name>

Entries are positional: entry i corresponds to Bundle.files[i]. Reading is
strict; a short, long or malformed manifest raises `ManifestError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from lecoal.codecs._text_parser import _split_physical_lines
from lecoal.codecs.coal_text import DOCUMENT_NEWLINE, TEXT_ENCODING, TEXT_ERRORS, sanitize_file_name
from lecoal.core.errors import ManifestError
from lecoal.core.model import Bundle
from lecoal.io.atomic import write_text_atomic

MANIFEST_FILENAME = "mele.extractedbin"
ENTRY_SEPARATOR = ";;"


class ManifestEntry(NamedTuple):
    sanitized_name: str
    original_name: str


@dataclass(frozen=True)
class Manifest:
    destination_name: str
    entries: tuple[ManifestEntry, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(ManifestEntry(*e) for e in self.entries))


def _require_single_line(text: str, *, what: str) -> None:
    if "\r" in text or "\n" in text:
        raise ManifestError(f"{what} {text!r} contains a line break")


def build_manifest(bundle: Bundle) -> Manifest:
    """Build the manifest for `bundle`, one entry per file in bundle order.

    Raises:
        ManifestError if two files sanitize to the same on-disk name or a file
        would overwrite the manifest itself.
    """
    _require_single_line(bundle.name, what="bundle name")
    entries: list[ManifestEntry] = []
    seen: dict[str, str] = {}
    for f in bundle.files:
        _require_single_line(f.name, what="file name")
        if ENTRY_SEPARATOR in f.name:
            raise ManifestError(f"file name {f.name!r} contains {ENTRY_SEPARATOR!r}")
        sanitized = sanitize_file_name(f.name)
        if not sanitized:
            raise ManifestError(f"file name {f.name!r} has no usable on-disk name")
        if sanitized == MANIFEST_FILENAME:
            raise ManifestError(f"file {f.name!r} collides with the manifest name {MANIFEST_FILENAME!r}")
        if sanitized in seen:
            raise ManifestError(
                f"files {seen[sanitized]!r} and {f.name!r} both map to on-disk name {sanitized!r}"
            )
        seen[sanitized] = f.name
        entries.append(ManifestEntry(sanitized, f.name))
    return Manifest(bundle.name, tuple(entries))


def render_manifest(manifest: Manifest, *, newline: str = DOCUMENT_NEWLINE) -> str:
    lines = [manifest.destination_name, str(len(manifest.entries))]
    lines.extend(f"{e.sanitized_name}{ENTRY_SEPARATOR}{e.original_name}" for e in manifest.entries)
    return "".join(line + newline for line in lines)


def _parse_entry(line: str, *, index: int, path: Path | str | None) -> ManifestEntry:
    # Empty halves are dropped, so ";;name" and "name;;" are both invalid.
    chunks = [c for c in line.split(ENTRY_SEPARATOR, 1) if c]
    if len(chunks) != 2:
        raise ManifestError(f"entry {index}: expected '<sanitized>;;<original>', got {line!r}", path=path)
    return ManifestEntry(chunks[0], chunks[1])


def parse_manifest_text(text: str, *, path: Path | str | None = None) -> Manifest:
    """Parse manifest text; `path` is only used in error messages."""
    lines = [line for line, _ in _split_physical_lines(text.lstrip("\ufeff"))]
    if not lines:
        raise ManifestError("empty manifest", path=path)
    name = lines[0]

    if len(lines) < 2:
        raise ManifestError("missing file count line", path=path)
    count_text = lines[1].strip("\r\n ")
    try:
        count = int(count_text)
    except ValueError as e:
        raise ManifestError(f"file count {count_text!r} is not an integer", path=path) from e
    if count < 0:
        raise ManifestError(f"negative file count {count}", path=path)

    body = lines[2:]
    if len(body) < count:
        raise ManifestError(f"file count is {count} but only {len(body)} entries are listed", path=path)
    extra = [line for line in body[count:] if line.strip()]
    if extra:
        raise ManifestError(
            f"file count is {count} but {count + len(extra)} entries are listed", path=path
        )

    entries = [_parse_entry(body[i], index=i, path=path) for i in range(count)]
    return Manifest(name, tuple(entries))


def read_manifest(path: str | Path) -> Manifest:
    p = Path(path)
    if not p.is_file():
        raise ManifestError("failed to find a manifest", path=p)
    text = p.read_bytes().decode(TEXT_ENCODING, TEXT_ERRORS)
    return parse_manifest_text(text, path=p)


def write_manifest(path: str | Path, manifest: Manifest, *, newline: str = DOCUMENT_NEWLINE) -> Path:
    return write_text_atomic(path, render_manifest(manifest, newline=newline), encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
