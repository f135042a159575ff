# src/sdl_parser/loader/tokenizer.py

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TextIO

from sdl_parser.core.exceptions import ParseError
from sdl_parser.identifiers import is_identifier_part, is_identifier_start
from sdl_parser.literals import (
    KEYWORDS,
    NUMBER_START,
    STRING_ESCAPES,
    parse_binary,
    parse_character,
    parse_date,
    parse_number,
    parse_time_components,
)
from sdl_parser.logging import get_logger

log = get_logger(__name__)


class TokenKind(Enum):
    IDENTIFIER = "IDENTIFIER"
    COLON = "COLON"
    EQUALS = "EQUALS"
    START_BLOCK = "START_BLOCK"
    END_BLOCK = "END_BLOCK"

    STRING = "STRING"
    CHARACTER = "CHARACTER"
    BOOLEAN = "BOOLEAN"
    NUMBER = "NUMBER"
    DATE = "DATE"
    TIME = "TIME"
    BINARY = "BINARY"
    NULL = "NULL"

    @property
    def is_literal(self) -> bool:
        return self in _LITERAL_KINDS


_LITERAL_KINDS = frozenset(
    {
        TokenKind.STRING,
        TokenKind.CHARACTER,
        TokenKind.BOOLEAN,
        TokenKind.NUMBER,
        TokenKind.DATE,
        TokenKind.TIME,
        TokenKind.BINARY,
        TokenKind.NULL,
    }
)

_PUNCTUATION = {
    "{": TokenKind.START_BLOCK,
    "}": TokenKind.END_BLOCK,
    "=": TokenKind.EQUALS,
    ":": TokenKind.COLON,
}

# characters captured into a number/date/time run
_RUN_CHARS = frozenset(
    "0123456789"
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    ".-+:/"
)


@dataclass(frozen=True)
class Token:
    """
    A single SDL token.

    Attributes:
        kind: TokenKind of the token.
        text: Source text of the token (quoted literals keep their quotes).
        lineno: 1-based line number where the token starts.
        column: 1-based column where the token starts.
        value: Parsed value for literal tokens. TIME tokens carry a
            TimeComponents, resolved by the tree builder.
    """
    kind: TokenKind
    text: str
    lineno: int
    column: int
    value: Any = None


class ScanMode(Enum):
    NORMAL = "normal"
    STRING = "string"
    RAW_STRING = "raw string"
    BINARY = "binary"
    BLOCK_COMMENT = "block comment"


_UNTERMINATED = {
    ScanMode.STRING: "Escape at end of file.",
    ScanMode.RAW_STRING: "String literal (`) not terminated by end quote.",
    ScanMode.BINARY: "Binary literal not terminated by end bracket (]).",
    ScanMode.BLOCK_COMMENT: "Block comment (/*) not terminated by */.",
}


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")


def _is_blank_or_comment(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


class Tokenizer:
    """
    Turns SDL source text into one list of tokens per logical line.

    Multi-line constructs (escaped-string continuations, raw strings,
    binary literals, block comments) switch the scanner into a ScanMode;
    the handler for that mode pulls further physical lines until the
    construct closes, then scanning resumes in NORMAL mode on whatever
    line the construct ended on.
    """

    def __init__(self, source: TextIO):
        self.source = source
        self.line: str = ""
        self.lineno: int = 0
        self.pos: int = 0
        self.mode = ScanMode.NORMAL

        # partial state of the multi-line literal being scanned
        self._buffer: List[str] = []
        self._start_line = 0
        self._start_column = 0

        self._handlers: Dict[ScanMode, Callable[[], Optional[Token]]] = {
            ScanMode.STRING: self._scan_string,
            ScanMode.RAW_STRING: self._scan_raw_string,
            ScanMode.BINARY: self._scan_binary,
            ScanMode.BLOCK_COMMENT: self._scan_block_comment,
        }

    @classmethod
    def from_string(cls, text: str) -> "Tokenizer":
        return cls(io.StringIO(text, newline=None))

    # ------------------------------------------------------------------
    # Line intake
    # ------------------------------------------------------------------

    def _read_raw_line(self) -> Optional[str]:
        raw = self.source.readline()
        if not raw:
            return None
        self.lineno += 1
        line = _strip_eol(raw)
        if self.lineno == 1 and line.startswith("\ufeff"):
            line = line[1:]
        self.line = line
        self.pos = 0
        return line

    def _read_line(self) -> Optional[str]:
        """Read the next physical line, skipping blank and '#' comment lines."""
        while True:
            line = self._read_raw_line()
            if line is None or not _is_blank_or_comment(line):
                return line

    def close(self) -> None:
        self.source.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def next_line_tokens(self) -> Optional[List[Token]]:
        """
        Return the tokens of the next non-empty logical line, or None at end of input.

        Raises:
            ParseError: on the first lexical error.
        """
        while True:
            if self._read_line() is None:
                return None
            tokens = self._scan_logical_line()
            if tokens:
                return tokens

    def __iter__(self):
        while True:
            tokens = self.next_line_tokens()
            if tokens is None:
                return
            yield tokens

    # ------------------------------------------------------------------
    # NORMAL mode
    # ------------------------------------------------------------------

    def _error(self, description: str, lineno: Optional[int] = None, column: Optional[int] = None):
        return ParseError(
            description,
            self.lineno if lineno is None else lineno,
            self.pos + 1 if column is None else column,
        )

    def _scan_logical_line(self) -> List[Token]:
        tokens: List[Token] = []

        while True:
            if self.mode is not ScanMode.NORMAL:
                token = self._handlers[self.mode]()
                if token is not None:
                    tokens.append(token)
                continue

            line = self.line
            if self.pos >= len(line):
                return tokens

            c = line[self.pos]
            nxt = line[self.pos + 1] if self.pos + 1 < len(line) else ""

            if c.isspace():
                self.pos += 1
            elif c == "#":
                self.pos = len(line)
            elif c == "/" and nxt == "/":
                self.pos = len(line)
            elif c == "-" and nxt == "-":
                self.pos = len(line)
            elif c == "/" and nxt == "*":
                self._begin(ScanMode.BLOCK_COMMENT, skip=2)
            elif c == "/":
                raise self._error("Unexpected character: /")
            elif c == "\\":
                self._continue_line()
            elif c == '"':
                self._begin(ScanMode.STRING)
            elif c == "`":
                self._begin(ScanMode.RAW_STRING)
            elif c == "[":
                self._begin(ScanMode.BINARY)
            elif c == "'":
                tokens.append(self._scan_character())
            elif c in _PUNCTUATION:
                tokens.append(Token(_PUNCTUATION[c], c, self.lineno, self.pos + 1))
                self.pos += 1
            elif c in NUMBER_START:
                tokens.append(self._scan_number_run())
            elif is_identifier_start(c):
                tokens.append(self._scan_identifier())
            else:
                raise self._error(f"Unexpected character: {c}")

    def _continue_line(self) -> None:
        rest = self.line[self.pos + 1:]
        if rest.strip():
            raise self._error(
                "Line continuation (\\) must be the last non-whitespace character on a line."
            )
        column = self.pos + 1
        if self._read_line() is None:
            raise self._error("Line continuation at end of file.", column=column)

    def _begin(self, mode: ScanMode, skip: int = 1) -> None:
        self.mode = mode
        self._buffer = []
        self._start_line = self.lineno
        self._start_column = self.pos + 1
        self.pos += skip

    def _end(self) -> None:
        self.mode = ScanMode.NORMAL
        self._buffer = []

    def _next_raw_line_or_fail(self) -> str:
        line = self._read_raw_line()
        if line is None:
            raise ParseError(_UNTERMINATED[self.mode], self._start_line, self._start_column)
        return line

    def _scan_character(self) -> Token:
        line = self.line
        start = self.pos
        end = start + (3 if line[start + 1:start + 2] == "\\" else 2)
        if end >= len(line):
            raise self._error("Character literal missing end quote (').")
        if line[end] != "'":
            raise self._error(
                "Malformed character literal. Expected a single character or "
                "escape sequence followed by a closing quote (')."
            )
        text = line[start:end + 1]
        try:
            value = parse_character(text)
        except ValueError as exc:
            raise self._error(str(exc)) from exc
        self.pos = end + 1
        return Token(TokenKind.CHARACTER, text, self.lineno, start + 1, value)

    def _scan_number_run(self) -> Token:
        line = self.line
        start = self.pos
        end = start + 1
        while end < len(line):
            ch = line[end]
            if ch == "/" and line[end + 1:end + 2] in ("*", "/"):
                break
            if ch not in _RUN_CHARS:
                break
            end += 1

        text = line[start:end]
        self.pos = end

        if "/" in text and ":" not in text:
            kind, parser = TokenKind.DATE, parse_date
        elif ":" in text:
            kind, parser = TokenKind.TIME, parse_time_components
        else:
            kind, parser = TokenKind.NUMBER, parse_number

        try:
            value = parser(text)
        except ValueError as exc:
            raise self._error(str(exc), column=start + 1) from exc
        return Token(kind, text, self.lineno, start + 1, value)

    def _scan_identifier(self) -> Token:
        line = self.line
        start = self.pos
        end = start + 1
        while end < len(line) and is_identifier_part(line[end]):
            end += 1

        text = line[start:end]
        self.pos = end

        if text in KEYWORDS:
            kind = TokenKind.NULL if text == "null" else TokenKind.BOOLEAN
            return Token(kind, text, self.lineno, start + 1, KEYWORDS[text])
        return Token(TokenKind.IDENTIFIER, text, self.lineno, start + 1)

    # ------------------------------------------------------------------
    # Multi-line modes
    # ------------------------------------------------------------------

    def _scan_string(self) -> Optional[Token]:
        line = self.line
        buffer = self._buffer

        while self.pos < len(line):
            c = line[self.pos]

            if c == '"':
                self.pos += 1
                value = "".join(buffer)
                token = Token(
                    TokenKind.STRING,
                    f'"{value}"',
                    self._start_line,
                    self._start_column,
                    value,
                )
                self._end()
                return token

            if c != "\\":
                buffer.append(c)
                self.pos += 1
                continue

            escape = line[self.pos + 1:self.pos + 2]
            if escape and not escape.isspace():
                if escape not in STRING_ESCAPES:
                    raise self._error(f"Illegal escape character in string literal: '{escape}'.")
                buffer.append(STRING_ESCAPES[escape])
                self.pos += 2
                continue

            if line[self.pos + 1:].strip():
                raise self._error(
                    "Malformed string literal - escape followed by whitespace "
                    "followed by non-whitespace."
                )

            line = self._next_raw_line_or_fail()
            self.pos = len(line) - len(line.lstrip())

        raise ParseError(
            "String literal not terminated by end quote.",
            self._start_line,
            self._start_column,
        )

    def _scan_raw_string(self) -> Optional[Token]:
        while True:
            end = self.line.find("`", self.pos)
            if end >= 0:
                self._buffer.append(self.line[self.pos:end])
                self.pos = end + 1
                value = "".join(self._buffer)
                token = Token(
                    TokenKind.STRING,
                    f"`{value}`",
                    self._start_line,
                    self._start_column,
                    value,
                )
                self._end()
                return token

            self._buffer.append(self.line[self.pos:])
            self._buffer.append("\n")
            self._next_raw_line_or_fail()

    def _scan_binary(self) -> Optional[Token]:
        while True:
            end = self.line.find("]", self.pos)
            if end >= 0:
                self._buffer.append(self.line[self.pos:end])
                self.pos = end + 1
                text = "[" + "".join(self._buffer) + "]"
                try:
                    value = parse_binary(text)
                except ValueError as exc:
                    raise ParseError(str(exc), self._start_line, self._start_column) from exc
                token = Token(
                    TokenKind.BINARY,
                    text,
                    self._start_line,
                    self._start_column,
                    value,
                )
                self._end()
                return token

            self._buffer.append(self.line[self.pos:])
            self._next_raw_line_or_fail()

    def _scan_block_comment(self) -> Optional[Token]:
        while True:
            end = self.line.find("*/", self.pos)
            if end >= 0:
                self.pos = end + 2
                self._end()
                return None
            self._next_raw_line_or_fail()


def tokenize(text: str) -> List[List[Token]]:
    """Tokenize a whole document, returning one token list per logical line."""
    tokenizer = Tokenizer.from_string(text)
    try:
        lines = list(tokenizer)
    finally:
        tokenizer.close()
    log.debug("Tokenized %d logical lines", len(lines))
    return lines
