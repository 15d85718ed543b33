"""CLI entry point for scriptmeta."""

from typing import Annotated

import typer

from scriptmeta import __version__
from scriptmeta.cli import init, scan
from scriptmeta.cli.common import console

app = typer.Typer(
    name="scriptmeta",
    help="Derive provided and required capabilities from a resource type scripts tree.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("scan")(scan.scan)
app.command("init")(init.init)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"scriptmeta {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """scriptmeta - capability metadata for script bundles."""
