"""
parser_core.py
Central parsing engine with logging integration.
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import List, TextIO, Union

from sdl_parser.config import get_config
from sdl_parser.core.exceptions import ParseError
from sdl_parser.loader.tokenizer import Tokenizer
from sdl_parser.loader.tree_builder import TreeBuilder
from sdl_parser.logging import get_logger
from sdl_parser.tag import Tag

Source = Union[str, bytes, bytearray, TextIO, io.IOBase]


class SDLParser:
    """
    High-level parser:
      - opens the source as a text stream
      - tokenizes it line by line
      - builds the Tag forest
      - closes the source, on success and on failure
    """

    def __init__(self, config=None):
        self.cfg = config if config is not None else get_config()
        self.log = get_logger("parser_core")

    # ---------------------------------------------------------
    # Source handling
    # ---------------------------------------------------------
    def _open(self, source: Source) -> TextIO:
        if isinstance(source, str):
            return io.StringIO(source, newline=None)

        if isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
            try:
                text = data.decode(self.cfg.encoding)
            except UnicodeDecodeError as exc:
                line = data[:exc.start].count(b"\n") + 1
                raise self._decode_error(exc, line) from exc
            return io.StringIO(text, newline=None)

        if isinstance(source, io.TextIOBase):
            return source

        if isinstance(source, (io.RawIOBase, io.BufferedIOBase)):
            return io.TextIOWrapper(source, encoding=self.cfg.encoding)

        if hasattr(source, "readline"):
            return source

        raise TypeError(
            f"Cannot parse {type(source).__name__}; expected text, bytes or a stream"
        )

    def _decode_error(self, exc: UnicodeDecodeError, line: int) -> ParseError:
        return ParseError(
            f"Invalid {self.cfg.encoding} input: {exc.reason} (byte 0x{exc.object[exc.start]:02x}).",
            line,
            -1,
        )

    # ---------------------------------------------------------
    # Parse
    # ---------------------------------------------------------
    def parse(self, source: Source) -> List[Tag]:
        """
        Parse SDL source into its top-level Tags.

        Raises:
            ParseError: on the first lexical or grammar error, or on input
                that is not valid in the configured encoding.
        """
        try:
            stream = self._open(source)
        except ParseError as exc:
            self.log.error("SDL parse failed: %s", exc)
            raise
        tokenizer = Tokenizer(stream)

        try:
            try:
                tags = TreeBuilder(tokenizer).build()
            except UnicodeDecodeError as exc:
                # the failing read is for the line after the last one read
                raise self._decode_error(exc, tokenizer.lineno + 1) from exc
        except ParseError as exc:
            self.log.error("SDL parse failed: %s", exc)
            raise
        finally:
            tokenizer.close()

        if self.cfg.debug:
            self.log.debug("Parsed %d top-level tags in %d lines", len(tags), tokenizer.lineno)
        return tags

    def parse_file(self, path: Union[str, Path]) -> List[Tag]:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"SDL file not found: {path}")

        self.log.debug("Reading SDL file: %s", path)
        return self.parse(path.open("r", encoding=self.cfg.encoding))


def parse(source: Union[Source, os.PathLike]) -> List[Tag]:
    """Parse SDL text, bytes, a stream, or a path-like file location."""
    if isinstance(source, os.PathLike):
        return SDLParser().parse_file(source)
    return SDLParser().parse(source)


def parse_file(path: Union[str, Path]) -> List[Tag]:
    return SDLParser().parse_file(path)
