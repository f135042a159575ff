from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sdl_parser.cli.utils import apply_config, load_sdl, write_text
from sdl_parser.core.exceptions import ParseError
from sdl_parser.exporter import tags_to_json, tags_to_xml

console = Console(stderr=True)


class ExportFormat(str, Enum):
    json = "json"
    xml = "xml"


def export_command(
    sdl_file: Path = typer.Argument(..., exists=True, readable=True),
    to: ExportFormat = typer.Option(
        ExportFormat.json,
        "--to",
        "-t",
        help="Output format",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Use this YAML config instead of config/sdl_parser.yml",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export SDL data to JSON or XML (stdout by default).
    """
    apply_config(config, verbose)

    try:
        tags = load_sdl(sdl_file, verbose=verbose)
    except ParseError as exc:
        console.print(f"[bold red]error[/bold red] {sdl_file}: {exc}")
        raise typer.Exit(code=1)

    if verbose:
        console.log(f"Exporting {to.value.upper()}")

    if to is ExportFormat.xml:
        payload = tags_to_xml(tags)
    else:
        payload = tags_to_json(tags, indent=2 if pretty else None)

    write_text(payload, out=out)

    if verbose:
        console.log("Export complete")
