"""Internal writer helpers for the Coalesced text projection.

Private module; public API is in `coal_text.py`.
"""

from __future__ import annotations

from typing import Optional

from lecoal.codecs._text_parser import MULTILINE_MARKER
from lecoal.core.errors import AmbiguousLineEndingError, TextGrammarError
from lecoal.core.model import Section


def _split_value(value: str) -> tuple[list[str], Optional[str]]:
    """Split a pair value into fragments.

    Returns (segments, separator); separator is None for single-line values.
    Raises ValueError when the line breaks cannot be represented.
    """
    if "\r\n" in value:
        sep = "\r\n"
    elif "\r" in value and "\n" not in value:
        sep = "\r"
    elif "\n" in value and "\r" not in value:
        sep = "\n"
    elif "\r" in value and "\n" in value:
        raise ValueError("value contains both CR and LF but not in a CRLF sequence")
    else:
        return [value], None

    segments = value.split(sep)
    # "a\r\nb\nc": a bare break left inside a CRLF-split segment would be lost.
    if any("\r" in s or "\n" in s for s in segments):
        raise ValueError("value mixes CRLF with bare CR/LF")
    return segments, sep


def _check_single_line(text: str, *, what: str, file_name: str) -> None:
    if "\r" in text or "\n" in text:
        raise TextGrammarError(f"{what} {text!r} contains a line break", file_name=file_name)


def _check_key(key: str, value: str, *, file_name: str) -> None:
    """Reject keys whose rendered line would read back as something else."""
    _check_single_line(key, what="key", file_name=file_name)
    if "=" in key:
        problem = "contains '='"
    elif key.endswith(MULTILINE_MARKER):
        problem = f"ends with the multiline marker {MULTILINE_MARKER!r}"
    elif key.startswith(";") or key.startswith("#"):
        problem = "starts with a comment character"
    elif key.startswith("[") and "]" in value:
        problem = "would be read back as a section header"
    else:
        return
    raise TextGrammarError(f"key {key!r} {problem}", file_name=file_name)


def _format_section(section: Section, *, file_name: str, newline: str) -> list[str]:
    """Format one section as physical lines, each including its terminator.

    Non-final fragments of a multiline value end with the value's own
    separator; everything else ends with `newline`.
    """
    _check_single_line(section.name, what="section name", file_name=file_name)
    if not section.name.strip():
        raise TextGrammarError("empty section name", file_name=file_name)
    lines: list[str] = [f"[{section.name}]{newline}"]

    prev_multiline_key: Optional[str] = None
    for key, value in section.pairs:
        _check_key(key, value, file_name=file_name)
        try:
            segments, sep = _split_value(value)
        except ValueError as e:
            raise AmbiguousLineEndingError(file_name=file_name, section=section.name, key=key) from e

        if sep is None:
            lines.append(f"{key}={value}{newline}")
            prev_multiline_key = None
            continue

        if prev_multiline_key == key:
            # Keep two adjacent multiline values with the same key apart.
            lines.append(newline)
        last = len(segments) - 1
        for i, segment in enumerate(segments):
            lines.append(f"{key}{MULTILINE_MARKER}={segment}{newline if i == last else sep}")
        prev_multiline_key = key
    return lines
