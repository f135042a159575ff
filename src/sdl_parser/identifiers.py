# src/sdl_parser/identifiers.py

"""
SDL identifier grammar.

Tag names, namespaces and attribute keys must start with a Unicode letter
or an underscore, followed by any number of Unicode letters, digits,
underscores or dashes:

    _a-1        valid
    日本語_tag   valid
    1abc        invalid (starts with a digit)
    -abc        invalid (starts with a dash)
"""

from __future__ import annotations

from sdl_parser.core.exceptions import InvalidIdentifierError


def is_identifier_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def is_identifier_part(c: str) -> bool:
    return c.isalnum() or c in "_-"


def validate_identifier(identifier: str) -> str:
    """
    Return ``identifier`` unchanged if it is legal, else raise.

    Raises:
        InvalidIdentifierError: if the identifier is None, empty, or contains
            an illegal character.
    """
    if not isinstance(identifier, str) or not identifier:
        raise InvalidIdentifierError("SDL identifiers cannot be null or empty.")

    if not is_identifier_start(identifier[0]):
        raise InvalidIdentifierError(
            f"'{identifier[0]}' is not a legal first character for an SDL "
            "identifier. SDL identifiers must start with a unicode letter or "
            "an underscore (_)."
        )

    for c in identifier[1:]:
        if not is_identifier_part(c):
            raise InvalidIdentifierError(
                f"'{c}' is not a legal character for an SDL identifier. SDL "
                "identifiers must start with a unicode letter or underscore (_) "
                "followed by 0 or more unicode letters, digits, underscores (_), "
                "or dashes (-)."
            )

    return identifier


def is_identifier(identifier: str) -> bool:
    try:
        validate_identifier(identifier)
    except InvalidIdentifierError:
        return False
    return True


# Words the tokenizer always reads as null or boolean literals.
RESERVED_WORDS = frozenset({"null", "true", "false", "on", "off"})


def validate_name(name: str) -> str:
    """
    Validate a tag name, namespace or attribute key.

    Like validate_identifier, but also refuses the literal keywords, which
    could never be read back as a name.
    """
    validate_identifier(name)
    if name in RESERVED_WORDS:
        raise InvalidIdentifierError(
            f"'{name}' is an SDL literal keyword and cannot be used as a name."
        )
    return name
