"""Coalesced string codec.

Wire form of a string:

    length:i32 (little-endian), then `length * -2` bytes of UTF-16LE

The stored length is the *negated* count of UTF-16 code units including a
trailing NUL, so a non-empty string always has a negative prefix. The empty
string is stored as a bare `0` with no payload.

Decoding drops the final code unit (the NUL) without checking it. Unpaired
surrogates are carried through with `surrogatepass` so that every string
decoded from a bundle encodes back to the same bytes.
"""

from __future__ import annotations

import struct
from typing import Optional

from lecoal.core.errors import StructuralDecodeError

I32 = struct.Struct("<i")

_UTF16 = "utf-16-le"
_NUL = b"\x00\x00"


def read_i32(buf: bytes, offset: int, *, what: str = "int32") -> tuple[int, int]:
    """Read a little-endian i32 at `offset`; return (value, new_offset)."""
    end = offset + I32.size
    if end > len(buf):
        raise StructuralDecodeError(
            f"truncated {what}: need {I32.size} bytes, {len(buf) - offset} left",
            offset=offset,
        )
    return I32.unpack_from(buf, offset)[0], end


def decode_coal_string(buf: bytes, offset: int = 0) -> tuple[str, int]:
    """Decode one Coalesced string at `offset`; return (text, new_offset)."""
    length, pos = read_i32(buf, offset, what="string length")
    if length > 0:
        raise StructuralDecodeError(f"positive string length prefix {length}", offset=offset)

    nbytes = length * -2
    if nbytes == 0:
        return "", pos

    end = pos + nbytes
    if end > len(buf):
        raise StructuralDecodeError(
            f"truncated string: need {nbytes} bytes, {len(buf) - pos} left",
            offset=pos,
        )
    text = bytes(buf[pos : end - len(_NUL)]).decode(_UTF16, "surrogatepass")
    return text, end


def encode_coal_string(s: Optional[str]) -> bytes:
    """Encode `s`; None and "" both become a zero length with no payload."""
    if not s:
        return I32.pack(0)
    payload = s.encode(_UTF16, "surrogatepass") + _NUL
    return I32.pack(-(len(payload) // 2)) + payload
