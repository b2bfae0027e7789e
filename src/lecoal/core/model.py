"""Core data model for Coalesced bundles.

A bundle is a strict ownership tree:

    Bundle -> File -> Section -> Pair

- Every level is an *ordered* tuple; order is significant and preserved.
- Duplicate pair keys and duplicate section names are legal.
- Aggregates are frozen after construction; builders accept any iterable.

This module must not import codecs/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, NamedTuple, Optional


class Pair(NamedTuple):
    key: str
    value: str


def _require_str(value: Any, *, where: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{where}: expected str, got {type(value).__name__}")
    return value


def _coerce_pairs(items: Iterable[Any], *, where: str) -> tuple[Pair, ...]:
    out: list[Pair] = []
    for i, item in enumerate(items):
        if not isinstance(item, tuple) or len(item) != 2:
            raise TypeError(f"{where}[{i}]: expected (key, value) tuple")
        key = _require_str(item[0], where=f"{where}[{i}].key")
        value = _require_str(item[1], where=f"{where}[{i}].value")
        out.append(Pair(key, value))
    return tuple(out)


@dataclass(frozen=True)
class Section:
    """A named, ordered block of key/value pairs."""

    name: str
    pairs: tuple[Pair, ...] = field(default=())

    def __post_init__(self) -> None:
        _require_str(self.name, where="Section.name")
        object.__setattr__(self, "pairs", _coerce_pairs(self.pairs, where=f"Section[{self.name!r}].pairs"))

    @classmethod
    def from_pairs(cls, name: str, pairs: Iterable[tuple[str, str]]) -> "Section":
        return cls(name, tuple(pairs))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value of the first pair with `key`."""
        for pair in self.pairs:
            if pair.key == key:
                return pair.value
        return default

    def get_all(self, key: str) -> list[str]:
        """Return every value stored under `key`, in order."""
        return [pair.value for pair in self.pairs if pair.key == key]


@dataclass(frozen=True)
class File:
    """One logical source file: a name plus its ordered sections.

    `sections` may contain `None` placeholders (sparse construction); the
    binary encoder skips them.
    """

    name: str
    sections: tuple[Optional[Section], ...] = field(default=())

    def __post_init__(self) -> None:
        _require_str(self.name, where="File.name")
        sections = tuple(self.sections)
        for i, section in enumerate(sections):
            if section is not None and not isinstance(section, Section):
                raise TypeError(f"File[{self.name!r}].sections[{i}]: expected Section, got {type(section).__name__}")
        object.__setattr__(self, "sections", sections)

    def section(self, name: str) -> Optional[Section]:
        """Return the first section called `name`, or None."""
        for section in self.sections:
            if section is not None and section.name == name:
                return section
        return None


@dataclass(frozen=True)
class BundleStats:
    files: int
    sections: int
    pairs: int


@dataclass(frozen=True)
class Bundle:
    """Root aggregate: the archive name and its ordered files."""

    name: str
    files: tuple[File, ...] = field(default=())

    def __post_init__(self) -> None:
        _require_str(self.name, where="Bundle.name")
        files = tuple(self.files)
        for i, f in enumerate(files):
            if not isinstance(f, File):
                raise TypeError(f"Bundle.files[{i}]: expected File, got {type(f).__name__}")
        object.__setattr__(self, "files", files)

    def file(self, name: str) -> Optional[File]:
        """Return the first file called `name`, or None."""
        for f in self.files:
            if f.name == name:
                return f
        return None

    def stats(self) -> BundleStats:
        sections = [s for f in self.files for s in f.sections if s is not None]
        return BundleStats(
            files=len(self.files),
            sections=len(sections),
            pairs=sum(len(s.pairs) for s in sections),
        )
