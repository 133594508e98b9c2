"""Value types shared by the byte source, lexer and grammar validator."""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

ByteOffset: TypeAlias = int

DEFAULT_MAX_NESTING_DEPTH = 128
DEFAULT_CHUNK_SIZE = 65536


@dataclass(frozen=True)
class Position:
    """
    Location of a byte in the input stream.

    Columns count Unicode scalar values, so a multi-byte UTF-8 sequence
    occupies a single column.
    """

    offset: ByteOffset = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class TokenType(Enum):
    """Lexical classes produced by the lexer."""

    OBJECT_OPEN = "{"
    OBJECT_CLOSE = "}"
    ARRAY_OPEN = "["
    ARRAY_CLOSE = "]"
    COMMA = ","
    COLON = ":"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    END_OF_INPUT = "end of input"


VALUE_TOKENS = frozenset(
    {
        TokenType.STRING,
        TokenType.NUMBER,
        TokenType.TRUE,
        TokenType.FALSE,
        TokenType.NULL,
    }
)


@dataclass(frozen=True)
class JsonToken:
    """
    Represents a JSON token with the position of its first byte.

    ``value`` holds the decoded text of a string, the raw lexeme of a
    number and the literal spelling of everything else.
    """

    type: TokenType
    value: str
    position: Position

    def describe(self) -> str:
        """Short human-readable rendering used in diagnostics."""
        if self.type is TokenType.END_OF_INPUT:
            return "end of input"
        if self.type is TokenType.STRING:
            return f"string {self.value!r}"
        if self.type is TokenType.NUMBER:
            return f"number {self.value}"
        return f"'{self.value}'"


class ErrorKind(Enum):
    """Classifies the first violation found in a document."""

    INVALID_UTF8 = "invalid_utf8"
    UNTERMINATED_STRING = "unterminated_string"
    INVALID_ESCAPE = "invalid_escape"
    INVALID_CONTROL_CHARACTER = "invalid_control_character"
    INVALID_UNICODE_ESCAPE = "invalid_unicode_escape"
    INVALID_NUMBER_FORMAT = "invalid_number_format"
    UNEXPECTED_TOKEN = "unexpected_token"
    DUPLICATE_KEY = "duplicate_key"
    TRAILING_COMMA = "trailing_comma"
    TRAILING_CONTENT = "trailing_content"
    MAX_DEPTH_EXCEEDED = "max_depth_exceeded"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    IO_ERROR = "io_error"


class JSONValidationError(ValueError):
    """
    Handles validation failures with precise position information.

    Carries the error kind, the byte offset and the line/column of the
    first non-conforming byte. I/O failures of the byte source have no
    position because they originate below the grammar.
    """

    def __init__(
        self, kind: ErrorKind, msg: str, position: Position | None = None
    ) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError("kind must be an ErrorKind")
        if position is None and kind is not ErrorKind.IO_ERROR:
            raise ValueError(f"{kind.name} errors require a position")

        self.kind = kind
        self.msg = msg
        self.position = position

        if position is None:
            super().__init__(msg)
        else:
            super().__init__(
                f"{msg} at line {position.line}, column {position.column}"
            )

    @property
    def pos(self) -> ByteOffset | None:
        return self.position.offset if self.position else None

    @property
    def lineno(self) -> int | None:
        return self.position.line if self.position else None

    @property
    def colno(self) -> int | None:
        return self.position.column if self.position else None

    def format(self) -> str:
        """Renders the error as ``<line>:<column>: <message>``."""
        if self.position is None:
            return self.msg
        return f"{self.position}: {self.msg}"

    def __reduce__(self) -> tuple[type, tuple[object, ...]]:
        return (type(self), (self.kind, self.msg, self.position))


@dataclass(frozen=True)
class ValidatorConfig:
    """
    Configures validation behavior with immutable settings.

    Passed explicitly to each lexer and validator so runs with different
    policies never share state.
    """

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    reject_duplicate_keys: bool = False
    allow_nan_infinity: bool = False
    allow_bom: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE

    def __post_init__(self) -> None:
        for name in ("max_nesting_depth", "chunk_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer")
            if value < 1:
                raise ValueError(f"{name} must be at least 1")
        for name in (
            "reject_duplicate_keys",
            "allow_nan_infinity",
            "allow_bom",
        ):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")
