"""LECoal CLI entrypoint.

Typer application; subcommands live in `lecoal.cli.commands` and register
themselves via `register(app)`.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="lecoal",
    add_completion=False,
    no_args_is_help=True,
    help="Pack and unpack Coalesced_*.bin configuration bundles.",
)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """LECoal CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("version")
def version() -> None:
    """Print the installed LECoal version."""
    from lecoal import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `lecoal --help` is fast.
    """
    from lecoal.cli.commands import inspect as inspect_cmd
    from lecoal.cli.commands import pack as pack_cmd
    from lecoal.cli.commands import unpack as unpack_cmd

    unpack_cmd.register(app)
    pack_cmd.register(app)
    inspect_cmd.register(app)


_register_commands()
