"""Codecs for the Coalesced bundle formats.

- `coal_string`: length-prefixed UTF-16 strings
- `coalesced_bin`: the binary bundle container
- `coal_text`: the editable per-file text projection
"""

from __future__ import annotations

from .coal_string import decode_coal_string, encode_coal_string
from .coal_text import dump_file_text, parse_file_text, read_file_text, sanitize_file_name, write_file_text
from .coalesced_bin import dump_bundle_bytes, parse_bundle_bytes, read_coalesced, write_coalesced

__all__ = [
    "decode_coal_string",
    "encode_coal_string",
    "dump_bundle_bytes",
    "parse_bundle_bytes",
    "read_coalesced",
    "write_coalesced",
    "dump_file_text",
    "parse_file_text",
    "read_file_text",
    "write_file_text",
    "sanitize_file_name",
]
