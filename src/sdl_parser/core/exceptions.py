class SDLError(Exception):
    """Base exception for sdl_parser failures."""


class ParseError(SDLError):
    """
    Raised when SDL text cannot be parsed.

    Attributes:
        description: Human-readable description of the failure.
        line: 1-based line number, or -1 when unknown.
        position: 1-based column on that line, or -1 when unknown.
    """

    def __init__(self, description: str, line: int = -1, position: int = -1):
        self.description = description
        self.line = line
        self.position = position
        super().__init__(
            f"{description} Line {_describe(line)}, Position {_describe(position)}"
        )


class InvalidIdentifierError(SDLError, ValueError):
    """Raised when a tag name, namespace or attribute key is not a legal identifier."""


class UnsupportedValueError(SDLError, TypeError):
    """Raised when a value cannot be coerced to an SDL literal type."""


class BinaryCodecError(SDLError, ValueError):
    """Raised when binary literal text is not valid Base64."""


def _describe(number: int) -> str:
    return "unknown" if number < 0 else str(number)
