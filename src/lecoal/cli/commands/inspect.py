"""`lecoal inspect` command.

Prints a per-file summary of a bundle file or an unpacked directory, and
optionally writes the flat pair table as CSV.
"""

from __future__ import annotations

from typing import Optional

import typer

from lecoal.bundle.io import load_directory
from lecoal.cli.commands._common import absolute_path, fail
from lecoal.codecs.coalesced_bin import read_coalesced
from lecoal.core.errors import CoalescedError
from lecoal.core.tables import summarize_bundle, write_pairs_csv


def register(app: typer.Typer) -> None:
    @app.command("inspect")
    def inspect(
        from_path: str = typer.Argument(..., metavar="FROM", help="Bundle file or unpacked directory."),
        csv: Optional[str] = typer.Option(None, "--csv", help="Write one row per pair to this CSV file."),
    ) -> None:
        """Summarize a Coalesced bundle or an unpacked directory."""
        src = absolute_path(from_path, what="from")
        try:
            if src.is_dir():
                bundle = load_directory(src)
            elif src.is_file():
                bundle = read_coalesced(src)
            else:
                raise typer.BadParameter("expected the 'from' argument to be an existing file or directory")
        except CoalescedError as e:
            fail(e)

        stats = bundle.stats()
        typer.echo(f"{bundle.name}: {stats.files} files, {stats.sections} sections, {stats.pairs} pairs")
        summary = summarize_bundle(bundle)
        if not summary.empty:
            typer.echo(summary.to_string(index=False))

        if csv:
            out = write_pairs_csv(absolute_path(csv, what="csv"), bundle)
            typer.echo(str(out))
