"""LECoal: pack and unpack Coalesced configuration bundles.

A Coalesced bundle packs many INI-style configuration files into one binary
archive. `lecoal` unpacks it into a directory of editable text documents plus
a manifest, and packs such a directory back into a byte-identical bundle.
"""

from __future__ import annotations

from lecoal.bundle import pack, unpack
from lecoal.core import Bundle, CoalescedError, File, Pair, Section

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Bundle",
    "File",
    "Pair",
    "Section",
    "CoalescedError",
    "pack",
    "unpack",
]
