"""
Command-line front end.

Validates each given file (``-`` reads stdin) and maps the verdicts to
exit codes: 0 when every document is valid, 1 when any is invalid and 2
when an input could not be read.
"""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from contextlib import AbstractContextManager
from contextlib import nullcontext
from typing import IO

from jsonvfy import ValidationResult
from jsonvfy import __version__
from jsonvfy import tokenize
from jsonvfy import verify
from jsonvfy._types import DEFAULT_MAX_NESTING_DEPTH
from jsonvfy._types import ErrorKind
from jsonvfy._types import JSONValidationError
from jsonvfy._types import ValidatorConfig

logger = logging.getLogger("jsonvfy.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_IO_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="jsonvfy",
        description="Verify that files are syntactically valid JSON "
        "(RFC 8259).",
    )
    ap.add_argument(
        "files", nargs="+", metavar="FILE", help="JSON file, or - for stdin"
    )
    ap.add_argument(
        "-t",
        "--tokenize",
        action="store_true",
        help="print the token stream instead of verifying",
    )
    ap.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_NESTING_DEPTH,
        help="maximum nesting depth (default: %(default)s)",
    )
    ap.add_argument(
        "--reject-duplicate-keys",
        action="store_true",
        help="reject objects that repeat a key",
    )
    ap.add_argument(
        "--allow-nan-infinity",
        action="store_true",
        help="accept NaN, Infinity and -Infinity as numbers",
    )
    ap.add_argument(
        "--allow-bom",
        action="store_true",
        help="skip a leading UTF-8 byte order mark",
    )
    ap.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="diagnostic output format (default: %(default)s)",
    )
    ap.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="print nothing for valid files",
    )
    ap.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    ap.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return ap


def _open(name: str) -> AbstractContextManager[IO[bytes]]:
    if name == "-":
        return nullcontext(sys.stdin.buffer)
    return open(name, "rb")


def _report(
    name: str, result: ValidationResult, args: argparse.Namespace
) -> None:
    label = f"{name}:" if len(args.files) > 1 else ""
    error = result.error

    if args.format == "json":
        record: dict[str, object] = {"file": name, "valid": result.valid}
        if error is not None:
            record.update(
                kind=error.kind.value,
                offset=error.pos,
                line=error.lineno,
                column=error.colno,
                message=error.msg,
            )
        print(json.dumps(record))
    elif error is not None and error.position is None:
        print(f"{name}: {error.msg}", file=sys.stderr)
    elif error is not None:
        print(f"{label}{error.format()}", file=sys.stderr)
    elif not args.quiet:
        print(f"{label} OK" if label else "OK")


def _print_tokens(fp: IO[bytes], config: ValidatorConfig) -> None:
    for token in tokenize(fp, config=config):
        print(f"{token.position}\t{token.type.name}\t{token.value!r}")


def _process(
    name: str, args: argparse.Namespace, config: ValidatorConfig
) -> int:
    try:
        handle = _open(name)
    except OSError as exc:
        logger.debug("cannot open %s", name, exc_info=True)
        error = JSONValidationError(
            ErrorKind.IO_ERROR, f"cannot open: {exc.strerror or exc}"
        )
        _report(name, ValidationResult(error), args)
        return EXIT_IO_ERROR

    with handle as fp:
        if args.tokenize:
            try:
                _print_tokens(fp, config)
            except JSONValidationError as exc:
                _report(name, ValidationResult(exc), args)
                return _exit_code(exc)
            return EXIT_OK
        result = verify(fp, config=config)

    _report(name, result, args)
    return EXIT_OK if result.error is None else _exit_code(result.error)


def _exit_code(error: JSONValidationError) -> int:
    if error.kind is ErrorKind.IO_ERROR:
        return EXIT_IO_ERROR
    return EXIT_INVALID


def main(argv: Sequence[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ValidatorConfig(
            max_nesting_depth=args.max_depth,
            reject_duplicate_keys=args.reject_duplicate_keys,
            allow_nan_infinity=args.allow_nan_infinity,
            allow_bom=args.allow_bom,
        )
    except ValueError as exc:
        ap.error(str(exc))

    status = EXIT_OK
    for name in args.files:
        status = max(status, _process(name, args, config))
    return status


if __name__ == "__main__":
    sys.exit(main())
