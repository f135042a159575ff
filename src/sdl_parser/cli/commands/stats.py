from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional

import typer
from rich.console import Console
from rich.table import Table

from sdl_parser.cli.utils import apply_config, load_sdl
from sdl_parser.core.exceptions import ParseError
from sdl_parser.tag import Tag

console = Console()


def collect_stats(tags: Iterable[Tag]) -> Dict[str, int]:
    stats = {"top_level": 0, "tags": 0, "values": 0, "attributes": 0, "depth": 0}

    def visit(tag: Tag, depth: int) -> None:
        stats["tags"] += 1
        stats["values"] += len(tag.values)
        stats["attributes"] += len(tag.attributes)
        stats["depth"] = max(stats["depth"], depth)
        for child in tag.children:
            visit(child, depth + 1)

    for tag in tags:
        stats["top_level"] += 1
        visit(tag, 1)
    return stats


def stats_command(
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
    Show summary statistics for an SDL file.
    """
    apply_config(config, verbose)

    try:
        tags = load_sdl(sdl_file, verbose=verbose)
    except ParseError as exc:
        console.print(f"[bold red]error[/bold red] {sdl_file}: {exc}")
        raise typer.Exit(code=1)

    stats = collect_stats(tags)

    table = Table(title="SDL Statistics")
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Top-level tags", str(stats["top_level"]))
    table.add_row("Tags", str(stats["tags"]))
    table.add_row("Values", str(stats["values"]))
    table.add_row("Attributes", str(stats["attributes"]))
    table.add_row("Max depth", str(stats["depth"]))

    console.print(table)
