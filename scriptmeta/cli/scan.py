"""Scan command for scriptmeta - analyse a scripts tree."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape
from rich.table import Table

from scriptmeta.capability import CapabilitySet
from scriptmeta.cli.common import console, error_console, fail, load_config, parse_engine_options, setup_logging
from scriptmeta.config import ScanConfig
from scriptmeta.core import scan_sources, scan_tree
from scriptmeta.exceptions import ScriptMetaError
from scriptmeta.render import render_provided, render_required, to_json


class OutputFormat(str, Enum):
    headers = "headers"
    json = "json"
    table = "table"


def _print(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def _print_table(capabilities: CapabilitySet) -> None:
    provided = Table(title="Provided capabilities")
    provided.add_column("Resource types")
    provided.add_column("Version")
    provided.add_column("Selectors")
    provided.add_column("Extension")
    provided.add_column("Method")
    provided.add_column("Engine")
    provided.add_column("Extends")
    rows = sorted(
        (
            ", ".join(sorted(c.resource_types)),
            c.version or "",
            ".".join(c.selectors),
            c.request_extension or "",
            c.request_method or "",
            c.script_engine or "",
            c.extends_resource_type or "",
        )
        for c in capabilities.provided_resource_type_capabilities
    )
    for row in rows:
        provided.add_row(*row)
    console.print(provided)

    if capabilities.provided_script_capabilities:
        scripts = Table(title="Path scripts")
        scripts.add_column("Path")
        scripts.add_column("Engine")
        for script in sorted(capabilities.provided_script_capabilities, key=lambda s: s.path):
            scripts.add_row(script.path, script.script_engine)
        console.print(scripts)

    required = Table(title="Required capabilities")
    required.add_column("Resource type")
    required.add_column("Version range")
    required.add_column("Optional")
    required.add_column("Resolved")
    for requirement in sorted(capabilities.required_resource_type_capabilities, key=lambda r: r.resource_type):
        required.add_row(
            requirement.resource_type,
            str(requirement.version_range or ""),
            "yes" if requirement.optional else "no",
            "no" if requirement in capabilities.unresolved_required else "yes",
        )
    console.print(required)


def _analyse(root: Path | None, config: ScanConfig, logger: logging.Logger) -> CapabilitySet:
    if root is not None:
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")
        return scan_tree(root, config, logger=logger)
    return scan_sources(config, Path.cwd(), logger=logger)


def scan(
    root: Annotated[
        Optional[Path],
        typer.Argument(
            help="Scripts directory to analyse (default: configured source directories)",
            metavar="ROOT",
        ),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to scriptmeta.toml (default: nearest one above the current directory)",
        ),
    ] = None,
    search_paths: Annotated[
        Optional[list[str]],
        typer.Option(
            "--search-path",
            "-s",
            help="Search path prefix, replaces the configured ones (repeatable)",
        ),
    ] = None,
    engines: Annotated[
        Optional[list[str]],
        typer.Option(
            "--engine",
            "-e",
            help="Extra extension to script engine mapping as ext=engine (repeatable)",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format",
        ),
    ] = OutputFormat.headers,
    strict_requirements: Annotated[
        bool,
        typer.Option(
            "--strict-requirements",
            help="Keep unresolved requirements mandatory and fail when any remain",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug details",
        ),
    ] = False,
) -> None:
    """Analyse a scripts tree and print its capabilities.

    Examples:
      scriptmeta scan src/main/scripts
      scriptmeta scan --format json
      scriptmeta scan src/main/scripts -s /libs -e ftl=freemarker
    """
    logger = setup_logging(verbose)
    engine_overrides = parse_engine_options(engines)

    try:
        config = load_config(config_path, root)
        if search_paths:
            config.search_paths = list(search_paths)
        config.script_engines.update(engine_overrides)
        if strict_requirements:
            config.missing_requirements_optional = False
        capabilities = _analyse(root, config, logger)
    except (ScriptMetaError, OSError) as e:
        fail(e)

    if output_format == OutputFormat.json:
        _print(to_json(capabilities))
    elif output_format == OutputFormat.table:
        _print_table(capabilities)
    else:
        _print(f"Provide-Capability: {render_provided(capabilities)}")
        _print(
            "Require-Capability: "
            f"{render_required(capabilities, config.missing_requirements_optional)}"
        )

    mandatory = sorted(
        (r for r in capabilities.unresolved_required if not r.optional),
        key=lambda r: r.resource_type,
    )
    for requirement in mandatory:
        version = f" {requirement.version_range}" if requirement.version_range else ""
        error_console.print(
            f"[yellow]Unresolved requirement:[/yellow] {escape(requirement.resource_type + version)}",
            highlight=False,
        )
    if strict_requirements and mandatory:
        raise typer.Exit(1)
