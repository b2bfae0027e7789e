"""Atomic whole-file writes.

Output is written to a temporary file in the destination directory and moved
into place with `os.replace`, so a failed write never leaves a partial
destination file behind.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def write_bytes_atomic(path: str | Path, data: bytes) -> Path:
    """Write `data` to `path` atomically and return the path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, target)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise
    logger.debug("wrote %d bytes -> %s", len(data), target)
    return target


def write_text_atomic(path: str | Path, text: str, *, encoding: str = "utf-8", errors: str = "strict") -> Path:
    """Encode `text` and write it atomically; no newline translation."""
    return write_bytes_atomic(path, text.encode(encoding, errors))
