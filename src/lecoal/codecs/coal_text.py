"""Coalesced text projection codec (File <-> editable INI-like document).

Each bundled File becomes one document:

    [Engine.Settings]
    bFullscreen=True
    sDescription||=Line1
    sDescription||=Line2

Rules (both directions):

- Pair order and duplicate keys are preserved; duplicate section headers are
  kept as separate sections.
- A value containing line breaks is written as one `key||=fragment` line per
  fragment. Each non-final fragment line ends with the value's own separator
  (CRLF, CR or LF), and the reader joins fragments with the line break that
  ended the previous fragment line. Documents normalized to CRLF by an editor
  therefore rejoin with CRLF.
- A value mixing bare CR and LF cannot be represented and raises
  `AmbiguousLineEndingError`; it is never truncated.
- Blank lines and `;`/`#` comment lines are ignored on read. A blank line also
  ends a multiline value.

On-disk names are derived with `sanitize_file_name()`; the manifest keeps the
original logical name (see `lecoal.bundle.manifest`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from lecoal.codecs._text_parser import _parse_document
from lecoal.codecs._text_writer import _format_section
from lecoal.core.model import File
from lecoal.io.atomic import write_text_atomic

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"
# Lone surrogates decoded from UTF-16 must survive the trip through UTF-8.
TEXT_ERRORS = "surrogatepass"
DOCUMENT_NEWLINE = "\r\n"

_BOM = "\ufeff"


def sanitize_file_name(name: str) -> str:
    r"""Return a flat, traversal-free on-disk name for a logical file name.

    Path separators (`\` and `/`) become `_`, then any `..` becomes `-`.
    """
    return name.replace("\\", "_").replace("/", "_").replace("..", "-")


def dump_file_text(f: File, *, newline: str = DOCUMENT_NEWLINE) -> str:
    """Render one File as a text document."""
    if newline not in ("\r\n", "\n", "\r"):
        raise ValueError(f"dump_file_text: unsupported newline {newline!r}")

    chunks: list[str] = []
    for section in f.sections:
        if section is None:
            continue
        chunks.extend(_format_section(section, file_name=f.name, newline=newline))
    return "".join(chunks)


def parse_file_text(text: str, *, name: str, source: Optional[str] = None) -> File:
    """Parse one text document into a File called `name`.

    Args:
        text: Document contents (any of CRLF/CR/LF line breaks).
        name: Logical File name (the original, unsanitized name).
        source: Name used in error messages; defaults to `name`.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_file_text: expected str, got {type(text).__name__}")
    if text.startswith(_BOM):
        text = text[len(_BOM) :]
    return _parse_document(text, name=name, file_name=source or name)


def read_file_text(path: str | Path, *, name: str) -> File:
    """Read and parse one document from disk."""
    p = Path(path)
    text = p.read_bytes().decode(TEXT_ENCODING, TEXT_ERRORS)
    f = parse_file_text(text, name=name, source=p.name)
    logger.debug("parsed %s: %d sections", p.name, len(f.sections))
    return f


def encode_document(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def write_file_text(path: str | Path, f: File, *, newline: str = DOCUMENT_NEWLINE) -> Path:
    """Render `f` and write it atomically to `path`."""
    text = dump_file_text(f, newline=newline)
    return write_text_atomic(path, text, encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
