"""Internal parsing helpers for the Coalesced text projection.

Private module; public API is in `coal_text.py`.

The document grammar is line oriented:

    ; comment            (also `#`)
    [Section.Name]
    key=value
    key||=fragment       (multiline value, one line per fragment)

Parsing is a two-state machine (no section open / section open) with an
explicit accumulator for the multiline pair being assembled.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lecoal.core.errors import TextGrammarError
from lecoal.core.model import File, Pair, Section

MULTILINE_MARKER = "||"

# Only CR, LF and CRLF end a line; other Unicode separators are content.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _split_physical_lines(text: str) -> list[tuple[str, str]]:
    """Split `text` into (line, terminator) tuples.

    A final line without terminator gets `""`; a trailing terminator does not
    produce an extra empty line.
    """
    lines: list[tuple[str, str]] = []
    pos = 0
    for m in _LINE_BREAK_RE.finditer(text):
        lines.append((text[pos : m.start()], m.group()))
        pos = m.end()
    if pos < len(text):
        lines.append((text[pos:], ""))
    return lines


class _State(Enum):
    NO_SECTION = "no_section"
    SECTION_OPEN = "section_open"


@dataclass
class _OpenPair:
    key: str
    value: str
    terminator: str  # line break that ended the latest fragment line


class _DocumentParser:
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        self.state = _State.NO_SECTION
        self.sections: list[Section] = []
        self.section_name = ""
        self.pairs: list[Pair] = []
        self.open_pair: Optional[_OpenPair] = None

    def _error(self, detail: str, line_no: int) -> TextGrammarError:
        return TextGrammarError(detail, file_name=self.file_name, line_no=line_no)

    # ---- transitions ----

    def _commit_pair(self) -> None:
        if self.open_pair is not None:
            self.pairs.append(Pair(self.open_pair.key, self.open_pair.value))
            self.open_pair = None

    def _flush_section(self) -> None:
        if self.state is _State.SECTION_OPEN:
            self._commit_pair()
            self.sections.append(Section(self.section_name, tuple(self.pairs)))
        self.pairs = []

    def open_section(self, name: str) -> None:
        self._flush_section()
        self.section_name = name
        self.state = _State.SECTION_OPEN

    def blank(self) -> None:
        # A blank line ends a multiline value; a comment does not.
        self._commit_pair()

    def pair_line(self, line: str, terminator: str, line_no: int) -> None:
        if self.state is not _State.SECTION_OPEN:
            raise self._error("pair line before any section header", line_no)

        if "=" not in line:
            raise self._error("expected 'key=value'", line_no)
        key, value = line.split("=", 1)

        if not key.endswith(MULTILINE_MARKER):
            self._commit_pair()
            self.pairs.append(Pair(key, value))
            return

        key = key[: -len(MULTILINE_MARKER)]
        op = self.open_pair
        if op is not None and op.key == key:
            op.value = op.value + op.terminator + value
            op.terminator = terminator
            return

        self._commit_pair()
        self.open_pair = _OpenPair(key=key, value=value, terminator=terminator)

    def finish(self, name: str) -> File:
        self._flush_section()
        self.state = _State.NO_SECTION
        return File(name, tuple(self.sections))


def _parse_document(text: str, *, name: str, file_name: str) -> File:
    """Parse one text document into a File called `name`.

    `file_name` is only used to locate errors (usually the on-disk name).
    """
    parser = _DocumentParser(file_name)
    for i, (line, terminator) in enumerate(_split_physical_lines(text), start=1):
        if not line.strip():
            parser.blank()
            continue
        if line.startswith(";") or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            header = line[1:-1]
            if not header.strip():
                raise TextGrammarError("expected a section header with text", file_name=file_name, line_no=i)
            parser.open_section(header)
            continue
        parser.pair_line(line, terminator, i)
    return parser.finish(name)
