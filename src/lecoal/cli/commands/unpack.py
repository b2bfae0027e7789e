"""`lecoal unpack` command.

Unpacks a Coalesced bundle into a directory of editable text documents plus
the `mele.extractedbin` manifest. The target directory is created if missing.
"""

from __future__ import annotations

import typer

from lecoal.bundle.io import unpack as unpack_bundle
from lecoal.cli.commands._common import absolute_path, fail
from lecoal.core.errors import CoalescedError


def register(app: typer.Typer) -> None:
    @app.command("unpack")
    def unpack(
        from_path: str = typer.Argument(..., metavar="FROM", help="Coalesced bundle file to unpack."),
        to_path: str = typer.Argument(..., metavar="TO", help="Target directory ('.' for the working directory)."),
    ) -> None:
        """Unpack a Coalesced bundle into a directory of text files."""
        src = absolute_path(from_path, what="from")
        dst = absolute_path(to_path, what="to")
        if not src.is_file():
            raise typer.BadParameter("expected the 'from' argument to be an existing file")

        typer.echo(f"Unpacking {src}\n  into {dst}...")
        try:
            manifest = unpack_bundle(src, dst)
        except CoalescedError as e:
            fail(e)
        typer.echo(f"{len(manifest.entries)} files")
