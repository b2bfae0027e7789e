"""Helpers shared by the pack/unpack/inspect commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from lecoal.core.errors import CoalescedError


def absolute_path(raw: str, *, what: str) -> Path:
    """Expand `.` to the working directory and make `raw` absolute."""
    if not raw or not raw.strip():
        raise typer.BadParameter(f"expected the '{what}' argument not to be empty")
    if raw.strip() == ".":
        return Path.cwd()
    p = Path(raw)
    return p if p.is_absolute() else Path.cwd() / p


def fail(err: CoalescedError) -> NoReturn:
    """Report a codec error on stderr and exit with status 1."""
    typer.secho("Error in bundle reading/writing logic:", fg=typer.colors.RED, err=True)
    typer.secho(str(err), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from err
