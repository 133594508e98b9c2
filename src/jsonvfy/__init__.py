"""
Streaming RFC 8259 conformance checker for JSON byte streams.

Validates structure without building a value tree and reports the first
violation with its byte offset, line, column and an expected-token
description.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from jsonvfy._lexer import JsonLexer
from jsonvfy._profiling import HotPathStats
from jsonvfy._profiling import clear_hot_path_stats
from jsonvfy._profiling import get_hot_path_stats
from jsonvfy._source import ByteSource
from jsonvfy._source import Source
from jsonvfy._types import ErrorKind
from jsonvfy._types import JsonToken
from jsonvfy._types import JSONValidationError
from jsonvfy._types import Position
from jsonvfy._types import TokenType
from jsonvfy._types import ValidatorConfig
from jsonvfy._validator import JsonValidator

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one validation run.

    Truthy when the document is valid. An invalid result carries the
    first error found; there is never more than one.
    """

    error: JSONValidationError | None = None

    @property
    def valid(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error else None

    def __bool__(self) -> bool:
        return self.valid


def _resolve_config(
    config: ValidatorConfig | None, options: dict[str, Any]
) -> ValidatorConfig:
    if config is None:
        return ValidatorConfig(**options)
    if options:
        return dataclasses.replace(config, **options)
    return config


def tokenize(
    source: Source, *, config: ValidatorConfig | None = None, **options: Any
) -> JsonLexer:
    """
    Returns a lazy token stream over ``source``.

    Iteration yields every token including the final END_OF_INPUT and
    raises JSONValidationError on the first lexical violation.
    """
    cfg = _resolve_config(config, options)
    return JsonLexer(ByteSource(source, cfg.chunk_size), cfg)


def check(
    source: Source, *, config: ValidatorConfig | None = None, **options: Any
) -> None:
    """
    Validates ``source`` and raises JSONValidationError if it is not JSON.

    Accepts bytes-like objects and binary streams. Keyword options are the
    ValidatorConfig fields and override ``config`` when both are given.
    """
    cfg = _resolve_config(config, options)
    lexer = JsonLexer(ByteSource(source, cfg.chunk_size), cfg)
    logger.debug("validating with %s", cfg)
    JsonValidator(lexer, cfg).run()


def verify(
    source: Source, *, config: ValidatorConfig | None = None, **options: Any
) -> ValidationResult:
    """
    Validates ``source`` and returns the verdict instead of raising.

    Invalid JSON and I/O failures of the source both produce an invalid
    result; wrong argument types still raise TypeError.
    """
    try:
        check(source, config=config, **options)
    except JSONValidationError as exc:
        logger.debug("document rejected: %s (%s)", exc, exc.kind.value)
        return ValidationResult(exc)
    return ValidationResult()


__all__ = [
    "ByteSource",
    "ErrorKind",
    "HotPathStats",
    "JSONValidationError",
    "JsonLexer",
    "JsonToken",
    "JsonValidator",
    "Position",
    "TokenType",
    "ValidationResult",
    "ValidatorConfig",
    "check",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "tokenize",
    "verify",
]
