"""
Byte-level JSON lexer.

Walks raw bytes once, validating UTF-8, string escapes and the number
grammar inline, and hands out one classified token per call.
"""

import logging
import re

from jsonvfy._profiling import ProfileContext
from jsonvfy._source import EOF
from jsonvfy._source import ByteSource
from jsonvfy._types import ErrorKind
from jsonvfy._types import JsonToken
from jsonvfy._types import JSONValidationError
from jsonvfy._types import Position
from jsonvfy._types import TokenType
from jsonvfy._types import ValidatorConfig
from jsonvfy._utf8 import ASCII_LIMIT
from jsonvfy._utf8 import describe_invalid
from jsonvfy._utf8 import sequence_length

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(rb"[ \t\r\n]+")
# Printable ASCII minus '"' and '\'; everything else in a string takes the
# slow path.
_PLAIN_STRING = re.compile(rb"[\x20\x21\x23-\x5b\x5d-\x7f]+")
_DIGITS = re.compile(rb"[0-9]+")
_WORD = re.compile(rb"[A-Za-z0-9_]+")

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_MINUS = ord("-")
_PLUS = ord("+")
_DOT = ord(".")
_ZERO = ord("0")
_U = ord("u")
_CAPITAL_I = ord("I")
_BOM = b"\xef\xbb\xbf"

_STRUCTURAL = {
    ord("{"): TokenType.OBJECT_OPEN,
    ord("}"): TokenType.OBJECT_CLOSE,
    ord("["): TokenType.ARRAY_OPEN,
    ord("]"): TokenType.ARRAY_CLOSE,
    ord(","): TokenType.COMMA,
    ord(":"): TokenType.COLON,
}

_SIMPLE_ESCAPES = {
    ord('"'): '"',
    ord("\\"): "\\",
    ord("/"): "/",
    ord("b"): "\b",
    ord("f"): "\f",
    ord("n"): "\n",
    ord("r"): "\r",
    ord("t"): "\t",
}

_KEYWORDS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
}
_NON_FINITE = frozenset({"NaN", "Infinity"})

_DIGIT_BYTES = frozenset(b"0123456789")
_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")
_WORD_START = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
)
# Bytes that may not directly follow a complete number
_NUMBER_TAIL = _DIGIT_BYTES | _WORD_START | frozenset(b".+-")

# Longest keyword is "Infinity"; one byte more is always an invalid word
_MAX_WORD = len(b"Infinity") + 1
_WORD_BYTES = _DIGIT_BYTES | _WORD_START


def _show_byte(byte: int) -> str:
    if byte == EOF:
        return "end of input"
    if 0x20 <= byte < ASCII_LIMIT:
        return repr(chr(byte))
    return f"byte 0x{byte:02X}"


class JsonLexer:
    """
    Pull-based tokenizer over a ByteSource.

    Each ``next_token`` call skips JSON whitespace and returns exactly one
    token; END_OF_INPUT is returned once and the lexer is exhausted after
    it. Any violation raises JSONValidationError and leaves the lexer
    unusable, there is no recovery.
    """

    def __init__(
        self, source: ByteSource, config: ValidatorConfig | None = None
    ) -> None:
        self.source = source
        self.config = config or ValidatorConfig()
        self.line = 1
        self.column = 1
        self._started = False
        self._finished = False

    def __iter__(self) -> "JsonLexer":
        return self

    def __next__(self) -> JsonToken:
        if self._finished:
            raise StopIteration
        return self.next_token()

    @property
    def position(self) -> Position:
        """Position of the next unread byte."""
        return Position(self.source.offset, self.line, self.column)

    def _error(
        self, kind: ErrorKind, msg: str, position: Position | None = None
    ) -> JSONValidationError:
        return JSONValidationError(kind, msg, position or self.position)

    def _advance(self) -> int:
        """Consumes one ASCII byte that is not a line feed."""
        self.column += 1
        return self.source.advance()

    def _check_utf8(self, lead: int) -> int:
        """Checks the UTF-8 sequence at the cursor, returns its length."""
        length = sequence_length(lead, self.source.peek_at)
        if not length:
            raise self._error(
                ErrorKind.INVALID_UTF8,
                describe_invalid(lead, self.source.peek_at),
            )
        return length

    def _skip_bom(self) -> None:
        if self.source.peek_bytes(len(_BOM)) != _BOM:
            return
        if not self.config.allow_bom:
            raise self._error(
                ErrorKind.UNEXPECTED_TOKEN,
                "byte order mark is not allowed at the start of JSON text",
            )
        logger.debug("skipping UTF-8 byte order mark")
        self.source.take(len(_BOM))

    def skip_whitespace(self) -> None:
        """Skips space, tab, CR and LF, tracking line and column."""
        count, newlines, tail = self.source.skip_while(_WHITESPACE)
        if newlines:
            self.line += newlines
            self.column = tail + 1
        else:
            self.column += count

    def next_token(self) -> JsonToken:
        """Returns the next token, raising on the first lexical violation."""
        if self._finished:
            raise RuntimeError("next_token() called after end of input")
        if not self._started:
            self._started = True
            self._skip_bom()

        self.skip_whitespace()
        byte = self.source.peek()
        start = self.position

        if byte == EOF:
            self._finished = True
            return JsonToken(TokenType.END_OF_INPUT, "", start)

        token_type = _STRUCTURAL.get(byte)
        if token_type is not None:
            self._advance()
            return JsonToken(token_type, token_type.value, start)

        if byte == _QUOTE:
            return self.scan_string()
        if byte == _MINUS or byte in _DIGIT_BYTES:
            return self.scan_number()
        if byte in _WORD_START:
            return self.scan_literal()
        if byte in (_DOT, _PLUS):
            raise self._error(
                ErrorKind.INVALID_NUMBER_FORMAT,
                f"number cannot start with {chr(byte)!r}",
            )
        if byte > ASCII_LIMIT:
            length = self._check_utf8(byte)
            char = self.source.peek_bytes(length).decode("utf-8")
            raise self._error(
                ErrorKind.UNEXPECTED_TOKEN, f"unexpected character {char!r}"
            )
        raise self._error(
            ErrorKind.UNEXPECTED_TOKEN,
            f"unexpected character {_show_byte(byte)}",
        )

    def scan_string(self) -> JsonToken:
        """Scans a string literal and returns its decoded text."""
        with ProfileContext("scan_string") as prof:
            start = self.position
            self._advance()
            text = bytearray()

            while True:
                run = self.source.take_while(_PLAIN_STRING)
                if run:
                    text += run
                    self.column += len(run)

                byte = self.source.peek()
                if byte == _QUOTE:
                    self._advance()
                    break
                if byte == _BACKSLASH:
                    text += self._scan_escape(start).encode("utf-8")
                elif byte == EOF:
                    raise self._error(
                        ErrorKind.UNTERMINATED_STRING,
                        "unterminated string",
                        start,
                    )
                elif byte < 0x20:
                    raise self._error(
                        ErrorKind.INVALID_CONTROL_CHARACTER,
                        f"unescaped control character U+{byte:04X} in string",
                    )
                else:
                    text += self.source.take(self._check_utf8(byte))
                    self.column += 1

            prof.scanned(self.source.offset - start.offset)
            return JsonToken(TokenType.STRING, text.decode("utf-8"), start)

    def _scan_escape(self, string_start: Position) -> str:
        """Decodes one escape sequence, pairing UTF-16 surrogates."""
        escape_start = self.position
        self._advance()
        byte = self.source.peek()

        simple = _SIMPLE_ESCAPES.get(byte)
        if simple is not None:
            self._advance()
            return simple
        if byte == EOF:
            raise self._error(
                ErrorKind.UNTERMINATED_STRING,
                "unterminated string",
                string_start,
            )
        if byte != _U:
            if byte > ASCII_LIMIT:
                length = self._check_utf8(byte)
                shown = repr(self.source.peek_bytes(length).decode("utf-8"))
            else:
                shown = _show_byte(byte)
            raise self._error(
                ErrorKind.INVALID_ESCAPE,
                f"invalid escape character {shown} after backslash",
                escape_start,
            )

        code = self._read_unicode_escape(escape_start, string_start)
        if 0xDC00 <= code <= 0xDFFF:
            raise self._error(
                ErrorKind.INVALID_UNICODE_ESCAPE,
                f"unpaired low surrogate \\u{code:04X}",
                escape_start,
            )
        if not 0xD800 <= code <= 0xDBFF:
            return chr(code)

        low_start = self.position
        if self.source.peek() != _BACKSLASH or self.source.peek_at(1) != _U:
            raise self._error(
                ErrorKind.INVALID_UNICODE_ESCAPE,
                f"unpaired high surrogate \\u{code:04X}",
                escape_start,
            )
        self._advance()
        low = self._read_unicode_escape(low_start, string_start)
        if not 0xDC00 <= low <= 0xDFFF:
            raise self._error(
                ErrorKind.INVALID_UNICODE_ESCAPE,
                f"high surrogate \\u{code:04X} followed by \\u{low:04X} "
                "instead of a low surrogate",
                low_start,
            )
        return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))

    def _read_unicode_escape(
        self, escape_start: Position, string_start: Position
    ) -> int:
        """Reads the ``uXXXX`` part of an escape, starting on the ``u``."""
        self._advance()
        digits = ""
        for _ in range(4):
            byte = self.source.peek()
            if byte == EOF:
                raise self._error(
                    ErrorKind.UNTERMINATED_STRING,
                    "unterminated string",
                    string_start,
                )
            if byte > ASCII_LIMIT:
                self._check_utf8(byte)
            if byte not in _HEX_BYTES:
                raise self._error(
                    ErrorKind.INVALID_UNICODE_ESCAPE,
                    f"invalid unicode escape \\u{digits}: expected hex "
                    f"digit, found {_show_byte(byte)}",
                    escape_start,
                )
            digits += chr(self._advance())
        return int(digits, 16)

    def _take_digits(self) -> bytes:
        run = self.source.take_while(_DIGITS)
        self.column += len(run)
        return run

    def _number_error(self, msg: str) -> JSONValidationError:
        return self._error(ErrorKind.INVALID_NUMBER_FORMAT, msg)

    def scan_number(self) -> JsonToken:
        """Scans a number against the exact JSON number grammar."""
        with ProfileContext("scan_number") as prof:
            start = self.position
            lexeme = bytearray()

            if self.source.peek() == _MINUS:
                lexeme.append(self._advance())
                if (
                    self.config.allow_nan_infinity
                    and self.source.peek() == _CAPITAL_I
                ):
                    return self._scan_negative_infinity(start)

            byte = self.source.peek()
            if byte == _ZERO:
                lexeme.append(self._advance())
                if self.source.peek() in _DIGIT_BYTES:
                    raise self._number_error("leading zeros are not allowed")
            elif byte in _DIGIT_BYTES:
                lexeme += self._take_digits()
            else:
                raise self._number_error(
                    f"expected digit after '-', found {_show_byte(byte)}"
                )

            if self.source.peek() == _DOT:
                lexeme.append(self._advance())
                digits = self._take_digits()
                if not digits:
                    raise self._number_error(
                        "expected digit after decimal point, found "
                        f"{_show_byte(self.source.peek())}"
                    )
                lexeme += digits

            if self.source.peek() in (ord("e"), ord("E")):
                lexeme.append(self._advance())
                if self.source.peek() in (_PLUS, _MINUS):
                    lexeme.append(self._advance())
                digits = self._take_digits()
                if not digits:
                    raise self._number_error(
                        "expected digit in exponent, found "
                        f"{_show_byte(self.source.peek())}"
                    )
                lexeme += digits

            tail = self.source.peek()
            if tail in _NUMBER_TAIL:
                raise self._number_error(
                    f"unexpected {_show_byte(tail)} after number"
                )

            prof.scanned(len(lexeme))
            return JsonToken(TokenType.NUMBER, lexeme.decode("ascii"), start)

    def _take_word(self) -> str:
        """Consumes a bare word, keeping at most ``_MAX_WORD`` bytes of it."""
        word = self.source.take_while(_WORD, _MAX_WORD)
        self.column += len(word)
        shown = word.decode("ascii")
        if len(word) == _MAX_WORD and self.source.peek() in _WORD_BYTES:
            shown += "..."
        return shown

    def _scan_negative_infinity(self, start: Position) -> JsonToken:
        word = self._take_word()
        if word != "Infinity":
            raise self._error(
                ErrorKind.INVALID_NUMBER_FORMAT,
                f"invalid number '-{word}'",
                start,
            )
        return JsonToken(TokenType.NUMBER, "-Infinity", start)

    def scan_literal(self) -> JsonToken:
        """Scans true, false and null, plus NaN/Infinity when enabled."""
        with ProfileContext("scan_literal") as prof:
            start = self.position
            word = self._take_word()
            prof.scanned(self.source.offset - start.offset)

            token_type = _KEYWORDS.get(word)
            if token_type is not None:
                return JsonToken(token_type, token_type.value, start)
            if self.config.allow_nan_infinity and word in _NON_FINITE:
                return JsonToken(TokenType.NUMBER, word, start)

            msg = f"invalid literal '{word}'"
            if word.lower() in _KEYWORDS:
                msg += " (literals are case-sensitive)"
            raise self._error(ErrorKind.UNEXPECTED_TOKEN, msg, start)
