# src/sdl_parser/loader/tree_builder.py

from __future__ import annotations

from typing import Any, List, Sequence, Tuple

from sdl_parser.core.exceptions import ParseError, SDLError
from sdl_parser.literals import combine
from sdl_parser.loader.tokenizer import Token, TokenKind, Tokenizer
from sdl_parser.logging import get_logger
from sdl_parser.tag import Tag

log = get_logger(__name__)

CONTENT = "content"

_KIND_LABELS = {
    TokenKind.TIME: "TIME (component of date/time)",
}


def _label(kind: TokenKind) -> str:
    return _KIND_LABELS.get(kind, kind.value)


def _expecting_but_got(expecting: str, got: str, token: Token) -> ParseError:
    return ParseError(f"Was expecting {expecting} but got {got}", token.lineno, token.column)


class TreeBuilder:
    """
    Builds Tags from the token lines produced by a Tokenizer.

    One logical line yields one Tag. A line ending in ``{`` opens a block
    whose lines become the Tag's children, up to the matching ``}`` line.
    """

    def __init__(self, tokenizer: Tokenizer):
        self.tokenizer = tokenizer
        self.tag_count = 0

    def build(self) -> List[Tag]:
        tags: List[Tag] = []

        while True:
            tokens = self.tokenizer.next_line_tokens()
            if tokens is None:
                break

            first = tokens[0]
            if first.kind is TokenKind.END_BLOCK:
                raise ParseError(
                    "No opening block ({) for close block (}).",
                    first.lineno,
                    first.column,
                )
            tags.append(self._statement(tokens))

        log.debug("Built %d top-level tags (%d total)", len(tags), self.tag_count)
        return tags

    # ------------------------------------------------------------------
    # Statements and blocks
    # ------------------------------------------------------------------

    def _statement(self, tokens: List[Token]) -> Tag:
        last = tokens[-1]
        if last.kind is not TokenKind.START_BLOCK:
            return self.construct_tag(tokens)

        if len(tokens) == 1:
            raise ParseError(
                "Block ({) must follow a tag or value on the same line.",
                last.lineno,
                last.column,
            )
        tag = self.construct_tag(tokens[:-1])
        self._add_children(tag)
        return tag

    def _add_children(self, parent: Tag) -> None:
        while True:
            tokens = self.tokenizer.next_line_tokens()
            if tokens is None:
                break

            first = tokens[0]
            if first.kind is TokenKind.END_BLOCK:
                if len(tokens) > 1:
                    extra = tokens[1]
                    raise _expecting_but_got("END OF LINE", _label(extra.kind), extra)
                return
            parent.add_child(self._statement(tokens))

        raise ParseError("No close block (}).", self.tokenizer.lineno, -1)

    # ------------------------------------------------------------------
    # Tag grammar
    # ------------------------------------------------------------------

    def construct_tag(self, tokens: Sequence[Token]) -> Tag:
        tokens = list(tokens)
        first = tokens[0]

        if first.kind.is_literal:
            first = Token(TokenKind.IDENTIFIER, CONTENT, first.lineno, first.column)
            tokens.insert(0, first)
        elif first.kind is not TokenKind.IDENTIFIER:
            raise _expecting_but_got("IDENTIFIER", _label(first.kind), first)

        index = 1
        namespace, name = "", first.text
        if len(tokens) > 1 and tokens[1].kind is TokenKind.COLON:
            colon = tokens[1]
            if len(tokens) == 2 or tokens[2].kind is not TokenKind.IDENTIFIER:
                raise ParseError(
                    "Colon (:) encountered in unexpected location.",
                    colon.lineno,
                    colon.column,
                )
            namespace, name = first.text, tokens[2].text
            index = 3

        try:
            tag = Tag(name, namespace)
        except SDLError as exc:
            raise ParseError(str(exc), first.lineno, first.column) from exc

        index = self._add_values(tag, tokens, index)
        if index < len(tokens):
            self._add_attributes(tag, tokens, index)

        self.tag_count += 1
        return tag

    def _literal_at(self, tokens: Sequence[Token], index: int) -> Tuple[Any, int]:
        """
        Resolve the literal at ``index`` and return ``(value, next_index)``.

        A DATE immediately followed by a TIME merges into one datetime. A
        TIME on its own must be a time span and so cannot carry a zone.
        """
        token = tokens[index]

        if token.kind is TokenKind.DATE and index + 1 < len(tokens):
            following = tokens[index + 1]
            if following.kind is TokenKind.TIME:
                try:
                    return combine(token.value, following.value), index + 2
                except ValueError as exc:
                    raise ParseError(str(exc), following.lineno, following.column) from exc

        if token.kind is TokenKind.TIME:
            if token.value.has_zone:
                raise _expecting_but_got("TIME SPAN", _label(TokenKind.TIME), token)
            try:
                return token.value.to_duration(), index + 1
            except ValueError as exc:
                raise ParseError(str(exc), token.lineno, token.column) from exc

        return token.value, index + 1

    def _add_values(self, tag: Tag, tokens: Sequence[Token], index: int) -> int:
        while index < len(tokens):
            token = tokens[index]
            if token.kind is TokenKind.IDENTIFIER:
                break
            if not token.kind.is_literal:
                raise _expecting_but_got("LITERAL or IDENTIFIER", _label(token.kind), token)
            value, index = self._literal_at(tokens, index)
            tag.add_value(value)
        return index

    def _add_attributes(self, tag: Tag, tokens: Sequence[Token], index: int) -> None:
        size = len(tokens)

        def take(expected_kind: TokenKind, expecting: str) -> Token:
            nonlocal index
            previous = tokens[index - 1]
            if index >= size:
                raise _expecting_but_got(expecting, "END OF LINE", previous)
            token = tokens[index]
            if token.kind is not expected_kind:
                raise _expecting_but_got(expecting, _label(token.kind), token)
            index += 1
            return token

        while index < size:
            key_token = take(TokenKind.IDENTIFIER, "IDENTIFIER")
            namespace, key = "", key_token.text

            if index >= size:
                raise _expecting_but_got('":" or "="', "END OF LINE", key_token)

            separator = tokens[index]
            if separator.kind is TokenKind.COLON:
                index += 1
                namespace, key = key, take(TokenKind.IDENTIFIER, "IDENTIFIER").text
                take(TokenKind.EQUALS, '"="')
            elif separator.kind is TokenKind.EQUALS:
                index += 1
            else:
                raise _expecting_but_got('":" or "="', _label(separator.kind), separator)

            if index >= size:
                raise _expecting_but_got("LITERAL", "END OF LINE", tokens[index - 1])
            value_token = tokens[index]
            if not value_token.kind.is_literal:
                raise _expecting_but_got("LITERAL", _label(value_token.kind), value_token)

            value, index = self._literal_at(tokens, index)
            tag.set_attribute(key, value, namespace)


def build_tree(tokenizer: Tokenizer) -> List[Tag]:
    """Convenience wrapper: build every top-level Tag from ``tokenizer``."""
    return TreeBuilder(tokenizer).build()
