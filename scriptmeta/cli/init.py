"""Init command for scriptmeta - write a default scriptmeta.toml."""

from pathlib import Path
from typing import Annotated

import typer

from scriptmeta.cli.common import console
from scriptmeta.config import ScanConfig
from scriptmeta.constants import CONFIG_FILENAME


def init(
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help=f"Overwrite an existing {CONFIG_FILENAME}",
        ),
    ] = False,
) -> None:
    """Create scriptmeta.toml in the current directory.

    Examples:
      scriptmeta init
      scriptmeta init --force
    """
    path = Path.cwd() / CONFIG_FILENAME
    if path.exists() and not force:
        console.print(f"[red]Error:[/red] {CONFIG_FILENAME} already exists")
        console.print("[dim]Use --force to overwrite it[/dim]")
        raise typer.Exit(1)

    ScanConfig().save(path)
    console.print(f"[green]Created {CONFIG_FILENAME}[/green]")
