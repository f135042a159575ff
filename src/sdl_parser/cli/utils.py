from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List

from rich.console import Console

from sdl_parser.config import reset_config
from sdl_parser.logging import configure_logging, get_logger, set_level
from sdl_parser.parser_core import SDLParser
from sdl_parser.tag import Tag

console = Console()
log = get_logger("cli")


def apply_config(config: Path | None, verbose: bool) -> None:
    """Load an explicit config file and raise the log level for ``--verbose``."""
    if config is not None:
        configure_logging(reset_config(config))
    if verbose:
        set_level(logging.INFO)


def load_sdl(path: Path, *, verbose: bool = False) -> List[Tag]:
    """
    Parse an SDL file into its top-level tags.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    tags = SDLParser().parse_file(path)
    elapsed = time.perf_counter() - t0

    log.info("Parsed %s: %d top-level tags", path, len(tags))
    if verbose:
        console.log(f"Loaded SDL in {elapsed:.3f}s")

    return tags


def write_text(payload: str, *, out: Path | None) -> None:
    """
    Write text to stdout or file.
    """
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
