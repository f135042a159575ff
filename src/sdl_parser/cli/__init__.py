"""
CLI package for sdl_parser.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from sdl_parser.cli.app import app, main

__all__ = [
    "app",
    "main",
]
