from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sdl_parser.cli.utils import apply_config, load_sdl
from sdl_parser.core.exceptions import ParseError

console = Console()


def check_command(
    sdl_file: Path = typer.Argument(..., exists=True, readable=True),
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
    Parse an SDL file and report whether it is well formed.
    """
    apply_config(config, verbose)

    try:
        tags = load_sdl(sdl_file, verbose=verbose)
    except ParseError as exc:
        console.print(f"[bold red]error[/bold red] {sdl_file}: {exc}")
        raise typer.Exit(code=1)

    console.print(f"[green]ok[/green] {sdl_file}: {len(tags)} top-level tags")
