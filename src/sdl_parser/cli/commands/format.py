from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sdl_parser.cli.utils import apply_config, load_sdl, write_text
from sdl_parser.config import get_config
from sdl_parser.core.exceptions import ParseError

console = Console(stderr=True)


def format_command(
    sdl_file: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
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
    Rewrite an SDL file in canonical form (stdout by default).
    """
    apply_config(config, verbose)

    try:
        tags = load_sdl(sdl_file, verbose=verbose)
    except ParseError as exc:
        console.print(f"[bold red]error[/bold red] {sdl_file}: {exc}")
        raise typer.Exit(code=1)

    newline = get_config().newline
    write_text(newline.join(tag.serialize() for tag in tags), out=out)

    if verbose:
        console.log("Format complete")
