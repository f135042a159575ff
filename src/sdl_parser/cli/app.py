from __future__ import annotations

import typer

from sdl_parser.cli.commands.check import check_command
from sdl_parser.cli.commands.export import export_command
from sdl_parser.cli.commands.format import format_command
from sdl_parser.cli.commands.stats import stats_command

app = typer.Typer(
    name="sdl",
    help="SDL parser, formatter, inspector, and exporter",
    add_completion=False,
)

app.command("check")(check_command)
app.command("format")(format_command)
app.command("export")(export_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
