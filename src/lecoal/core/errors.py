"""Error taxonomy for the Coalesced codecs.

Every codec failure is a subclass of `CoalescedError` (itself a `ValueError`)
with a stable message suitable for test assertions and inspectable attributes
for callers that want to locate the offending record or document.

This module must not import codecs/bundle/cli.
"""

from __future__ import annotations

from pathlib import Path


class CoalescedError(ValueError):
    """Base class for all Coalesced bundle errors."""


class StructuralDecodeError(CoalescedError):
    """Malformed binary stream: truncated record, bad length prefix or count."""

    def __init__(self, detail: str, *, offset: int) -> None:
        super().__init__(f"malformed bundle at offset {offset}: {detail}")
        self.detail = detail
        self.offset = offset


class TextGrammarError(CoalescedError):
    """A text document violates the section/pair grammar."""

    def __init__(self, detail: str, *, file_name: str, line_no: int | None = None) -> None:
        where = file_name if line_no is None else f"{file_name}:{line_no}"
        super().__init__(f"{where}: {detail}")
        self.detail = detail
        self.file_name = file_name
        self.line_no = line_no


class AmbiguousLineEndingError(CoalescedError):
    """A pair value mixes bare CR and LF and cannot be written as fragments."""

    def __init__(self, *, file_name: str, section: str, key: str) -> None:
        super().__init__(
            f"{file_name} [{section}] {key!r}: value mixes CR and LF outside CRLF sequences"
        )
        self.file_name = file_name
        self.section = section
        self.key = key


class ManifestError(CoalescedError):
    """Manifest missing, malformed or inconsistent with its file count."""

    def __init__(self, detail: str, *, path: Path | str | None = None) -> None:
        msg = detail if path is None else f"{path}: {detail}"
        super().__init__(msg)
        self.detail = detail
        self.path = path


class MissingSourceFileError(CoalescedError):
    """A manifest-listed document is absent from the unpacked directory."""

    def __init__(self, relative_path: str) -> None:
        super().__init__(
            f"missing {relative_path!r}: the file was removed or the manifest was changed"
        )
        self.relative_path = relative_path
