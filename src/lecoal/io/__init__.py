"""Filesystem helpers shared by the codecs and the bundle layer."""

from __future__ import annotations

from .atomic import write_bytes_atomic, write_text_atomic

__all__ = [
    "write_bytes_atomic",
    "write_text_atomic",
]
