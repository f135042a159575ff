# src/sdl_parser/loader/__init__.py

"""
Public interface for the SDL loader stack.

Intended usage from other parts of the project and tests:

    from sdl_parser.loader import (
        Token,
        TokenKind,
        Tokenizer,
        TreeBuilder,
        build_tree,
        tokenize,
    )

    tags = build_tree(Tokenizer.from_string('name "value" key=1'))
"""

from __future__ import annotations

from .tokenizer import ScanMode, Token, TokenKind, Tokenizer, tokenize
from .tree_builder import TreeBuilder, build_tree

__all__ = [
    "ScanMode",
    "Token",
    "TokenKind",
    "Tokenizer",
    "TreeBuilder",
    "build_tree",
    "tokenize",
]
