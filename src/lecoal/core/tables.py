"""Flat tabular views of a bundle.

A bundle is a tree, but inspecting one (or diffing two) is easier on a flat
table with one row per pair. This module provides:

- canonical schemas / column order for the `pairs` and `files` tables
- `bundle_to_frame()` and `summarize_bundle()` builders
- deterministic CSV export

Rows follow bundle order exactly; nothing is sorted. String values are kept
verbatim (no stripping) since whitespace is significant in pair values.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from lecoal.core.model import Bundle

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


TABLE_SCHEMAS: dict[str, dict[str, str]] = {
    "pairs": {
        "file_index": "Int64",
        "file": "string",
        "section_index": "Int64",
        "section": "string",
        "pair_index": "Int64",
        "key": "string",
        "value": "string",
    },
    "files": {
        "file_index": "Int64",
        "file": "string",
        "sections": "Int64",
        "pairs": "Int64",
        "multiline_pairs": "Int64",
    },
}

TABLE_COLUMN_ORDER: dict[str, list[str]] = {
    name: list(schema.keys()) for name, schema in TABLE_SCHEMAS.items()
}


def _is_multiline(value: str) -> bool:
    return "\r" in value or "\n" in value


def _frame_from_rows(rows: list[dict[str, Any]], *, table: str) -> "pd.DataFrame":
    import pandas as pd

    schema = TABLE_SCHEMAS[table]
    df = pd.DataFrame(rows, columns=TABLE_COLUMN_ORDER[table])
    for col, dtype in schema.items():
        df[col] = df[col].astype(dtype)
    return df.reset_index(drop=True)


def bundle_to_frame(bundle: Bundle) -> "pd.DataFrame":
    """Return one row per pair, in bundle order.

    `section_index` counts `None` placeholders too, so indices match the
    positions inside `File.sections`.
    """
    if not isinstance(bundle, Bundle):
        raise TypeError(f"bundle_to_frame: expected Bundle, got {type(bundle).__name__}")

    rows: list[dict[str, Any]] = []
    for fi, f in enumerate(bundle.files):
        for si, section in enumerate(f.sections):
            if section is None:
                continue
            for pi, pair in enumerate(section.pairs):
                rows.append(
                    {
                        "file_index": fi,
                        "file": f.name,
                        "section_index": si,
                        "section": section.name,
                        "pair_index": pi,
                        "key": pair.key,
                        "value": pair.value,
                    }
                )
    return _frame_from_rows(rows, table="pairs")


def summarize_bundle(bundle: Bundle) -> "pd.DataFrame":
    """Return one row per file with section/pair counts."""
    rows: list[dict[str, Any]] = []
    for fi, f in enumerate(bundle.files):
        sections = [s for s in f.sections if s is not None]
        rows.append(
            {
                "file_index": fi,
                "file": f.name,
                "sections": len(sections),
                "pairs": sum(len(s.pairs) for s in sections),
                "multiline_pairs": sum(1 for s in sections for p in s.pairs if _is_multiline(p.value)),
            }
        )
    return _frame_from_rows(rows, table="files")


def write_pairs_csv(path: str | Path, bundle: Bundle) -> Path:
    """Write the `pairs` table as CSV and return the output path."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df = bundle_to_frame(bundle)
    df.to_csv(out_path, index=False, lineterminator="\n")
    return out_path
