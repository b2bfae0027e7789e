"""Core: bundle data model, error taxonomy and tabular views.

This package is intentionally standalone and must not import CLI/codecs/bundle
to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import (
    AmbiguousLineEndingError,
    CoalescedError,
    ManifestError,
    MissingSourceFileError,
    StructuralDecodeError,
    TextGrammarError,
)
from .model import Bundle, BundleStats, File, Pair, Section
from .tables import TABLE_COLUMN_ORDER, TABLE_SCHEMAS, bundle_to_frame, summarize_bundle, write_pairs_csv

__all__ = [
    "Bundle",
    "BundleStats",
    "File",
    "Pair",
    "Section",
    "CoalescedError",
    "StructuralDecodeError",
    "TextGrammarError",
    "AmbiguousLineEndingError",
    "ManifestError",
    "MissingSourceFileError",
    "TABLE_SCHEMAS",
    "TABLE_COLUMN_ORDER",
    "bundle_to_frame",
    "summarize_bundle",
    "write_pairs_csv",
]
