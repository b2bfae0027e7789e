"""`lecoal pack` command.

Packs an unpacked directory (documents + `mele.extractedbin`) back into a
Coalesced bundle. The target file is created or overwritten atomically.
"""

from __future__ import annotations

import typer

from lecoal.bundle.io import pack as pack_bundle
from lecoal.cli.commands._common import absolute_path, fail
from lecoal.core.errors import CoalescedError


def register(app: typer.Typer) -> None:
    @app.command("pack")
    def pack(
        from_path: str = typer.Argument(..., metavar="FROM", help="Unpacked directory ('.' for the working directory)."),
        to_path: str = typer.Argument(..., metavar="TO", help="Bundle file to create or overwrite."),
    ) -> None:
        """Pack a directory of text files into a Coalesced bundle."""
        src = absolute_path(from_path, what="from")
        dst = absolute_path(to_path, what="to")
        if not src.is_dir():
            raise typer.BadParameter("expected the 'from' argument to be an existing directory")

        typer.echo(f"Packing {src}\n  into {dst}...")
        try:
            bundle = pack_bundle(src, dst)
        except CoalescedError as e:
            fail(e)
        typer.echo(f"{len(bundle.files)} files")
