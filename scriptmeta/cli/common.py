"""Shared CLI utilities for scriptmeta commands."""

import logging
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from scriptmeta.config import ScanConfig, find_config, parse_engine_mapping
from scriptmeta.exceptions import ConfigValidationError, ScriptMetaError

console = Console()
error_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Route log records through rich; DEBUG with --verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
    return logging.getLogger("scriptmeta")


def load_config(config_path: Path | None, start_path: Path | None = None) -> ScanConfig:
    """Load the explicit config file, or the nearest scriptmeta.toml, or defaults."""
    path = config_path or find_config(start_path)
    if path is None:
        return ScanConfig()
    return ScanConfig.load(path)


def parse_engine_options(values: list[str] | None) -> dict[str, str]:
    """Parse repeated --engine ext=engine options."""
    mappings: dict[str, str] = {}
    for value in values or []:
        try:
            extension, engine = parse_engine_mapping(value)
        except ConfigValidationError as e:
            raise typer.BadParameter(str(e), param_hint="--engine")
        mappings[extension] = engine
    return mappings


def fail(error: ScriptMetaError | OSError) -> NoReturn:
    """Print an error line and exit with status 1."""
    console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)
