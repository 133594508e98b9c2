"""
Grammar validator driving the lexer.

Sequences tokens with an explicit stack of container frames instead of
recursive calls, so nesting depth is bounded by configuration rather than
by the interpreter's recursion limit.
"""

import logging
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from jsonvfy._lexer import JsonLexer
from jsonvfy._types import VALUE_TOKENS
from jsonvfy._types import ErrorKind
from jsonvfy._types import JsonToken
from jsonvfy._types import JSONValidationError
from jsonvfy._types import Position
from jsonvfy._types import TokenType
from jsonvfy._types import ValidatorConfig

logger = logging.getLogger(__name__)


class Container(Enum):
    OBJECT = "object"
    ARRAY = "array"


class Expect(Enum):
    """What a frame accepts next."""

    VALUE = "value"
    VALUE_OR_CLOSE = "value_or_close"
    KEY = "key"
    KEY_OR_CLOSE = "key_or_close"
    COLON = "colon"
    COMMA_OR_CLOSE = "comma_or_close"


_CLOSERS = {
    Container.OBJECT: TokenType.OBJECT_CLOSE,
    Container.ARRAY: TokenType.ARRAY_CLOSE,
}


@dataclass
class Frame:
    """One open container on the nesting stack."""

    container: Container
    expects: Expect
    opened_at: Position
    keys: set[str] | None = field(default=None, repr=False)

    @property
    def closer(self) -> str:
        return _CLOSERS[self.container].value


class JsonValidator:
    """
    Token-sequencing state machine for the JSON value grammar.

    Accepts exactly one value followed by end of input. The first
    violation raises JSONValidationError and no further token is pulled
    from the lexer.
    """

    def __init__(
        self, lexer: JsonLexer, config: ValidatorConfig | None = None
    ) -> None:
        self.lexer = lexer
        self.config = config or lexer.config
        self.stack: list[Frame] = []
        self.max_depth_seen = 0
        self._root_done = False

    @property
    def depth(self) -> int:
        return len(self.stack)

    def run(self) -> None:
        """Validates the whole input, raising on the first violation."""
        while True:
            token = self.lexer.next_token()
            if self._root_done:
                self._after_root(token)
                logger.debug(
                    "document accepted, max depth %d", self.max_depth_seen
                )
                return
            if not self.stack:
                self._on_value(token)
            else:
                self._step(self.stack[-1], token)

    def _after_root(self, token: JsonToken) -> None:
        if token.type is TokenType.END_OF_INPUT:
            return
        if token.type in (TokenType.OBJECT_CLOSE, TokenType.ARRAY_CLOSE):
            raise _error(
                ErrorKind.UNEXPECTED_TOKEN,
                f"unmatched {token.describe()}",
                token,
            )
        raise _error(
            ErrorKind.TRAILING_CONTENT,
            f"unexpected {token.describe()} after the end of the JSON value",
            token,
        )

    def _step(self, frame: Frame, token: JsonToken) -> None:
        kind = token.type
        if kind is TokenType.END_OF_INPUT:
            raise _error(
                ErrorKind.UNEXPECTED_END_OF_INPUT,
                f"unexpected end of input, unclosed {frame.container.value} "
                f"opened at line {frame.opened_at.line}, "
                f"column {frame.opened_at.column}",
                token,
            )

        expects = frame.expects
        if expects is Expect.VALUE:
            # Arrays only expect a bare VALUE after a comma
            in_array = frame.container is Container.ARRAY
            if in_array and kind is TokenType.ARRAY_CLOSE:
                raise _error(
                    ErrorKind.TRAILING_COMMA,
                    "trailing comma before ']'",
                    token,
                )
            self._on_value(token)
        elif expects is Expect.VALUE_OR_CLOSE:
            if kind is TokenType.ARRAY_CLOSE:
                self._pop()
            else:
                self._on_value(token)
        elif expects is Expect.KEY_OR_CLOSE:
            if kind is TokenType.OBJECT_CLOSE:
                self._pop()
            elif kind is TokenType.STRING:
                self._on_key(frame, token)
            else:
                raise _unexpected(token, "string key or '}'")
        elif expects is Expect.KEY:
            if kind is TokenType.STRING:
                self._on_key(frame, token)
            elif kind is TokenType.OBJECT_CLOSE:
                raise _error(
                    ErrorKind.TRAILING_COMMA,
                    "trailing comma before '}'",
                    token,
                )
            else:
                raise _unexpected(token, "string key")
        elif expects is Expect.COLON:
            if kind is not TokenType.COLON:
                raise _unexpected(token, "':' after object key")
            frame.expects = Expect.VALUE
        elif expects is Expect.COMMA_OR_CLOSE:
            if kind is TokenType.COMMA:
                frame.expects = (
                    Expect.KEY
                    if frame.container is Container.OBJECT
                    else Expect.VALUE
                )
            elif kind is _CLOSERS[frame.container]:
                self._pop()
            else:
                raise _unexpected(token, f"',' or '{frame.closer}'")

    def _on_value(self, token: JsonToken) -> None:
        kind = token.type
        if kind in VALUE_TOKENS:
            self._value_done()
        elif kind is TokenType.OBJECT_OPEN:
            self._push(Container.OBJECT, Expect.KEY_OR_CLOSE, token)
        elif kind is TokenType.ARRAY_OPEN:
            self._push(Container.ARRAY, Expect.VALUE_OR_CLOSE, token)
        elif kind is TokenType.END_OF_INPUT:
            raise _error(
                ErrorKind.UNEXPECTED_END_OF_INPUT,
                "unexpected end of input, expected value",
                token,
            )
        else:
            raise _unexpected(token, "value")

    def _on_key(self, frame: Frame, token: JsonToken) -> None:
        if frame.keys is not None:
            # Compared as decoded text: "a" and "\u0061" are the same key
            if token.value in frame.keys:
                raise _error(
                    ErrorKind.DUPLICATE_KEY,
                    f"duplicate key {token.value!r}",
                    token,
                )
            frame.keys.add(token.value)
        frame.expects = Expect.COLON

    def _push(
        self, container: Container, expects: Expect, token: JsonToken
    ) -> None:
        limit = self.config.max_nesting_depth
        if len(self.stack) >= limit:
            raise _error(
                ErrorKind.MAX_DEPTH_EXCEEDED,
                f"maximum nesting depth of {limit} exceeded",
                token,
            )
        keys: set[str] | None = None
        if container is Container.OBJECT and self.config.reject_duplicate_keys:
            keys = set()
        self.stack.append(Frame(container, expects, token.position, keys))
        self.max_depth_seen = max(self.max_depth_seen, len(self.stack))

    def _pop(self) -> None:
        self.stack.pop()
        self._value_done()

    def _value_done(self) -> None:
        if self.stack:
            self.stack[-1].expects = Expect.COMMA_OR_CLOSE
        else:
            self._root_done = True


def _error(kind: ErrorKind, msg: str, token: JsonToken) -> JSONValidationError:
    return JSONValidationError(kind, msg, token.position)


def _unexpected(token: JsonToken, expected: str) -> JSONValidationError:
    return _error(
        ErrorKind.UNEXPECTED_TOKEN,
        f"expected {expected}, found {token.describe()}",
        token,
    )
