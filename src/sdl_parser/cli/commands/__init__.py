"""
CLI command modules for sdl_parser.

Each command module defines a single Typer-compatible command function.
"""

from sdl_parser.cli.commands.check import check_command
from sdl_parser.cli.commands.export import export_command
from sdl_parser.cli.commands.format import format_command
from sdl_parser.cli.commands.stats import stats_command

__all__ = [
    "check_command",
    "export_command",
    "format_command",
    "stats_command",
]
