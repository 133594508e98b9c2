"""UTF-8 well-formedness checks following Table 3-7 of the Unicode Standard."""

from __future__ import annotations

from collections.abc import Callable
from typing import Final

ASCII_LIMIT: Final = 0x7F

_TAIL: Final = (0x80, 0xBF)


def _build_table() -> dict[int, tuple[tuple[int, int], ...]]:
    """Maps each valid lead byte to the ranges allowed for its trail bytes."""
    table: dict[int, tuple[tuple[int, int], ...]] = {}
    for lead in range(0xC2, 0xE0):
        table[lead] = (_TAIL,)

    # E0 and F0 exclude overlong forms, ED excludes encoded surrogates and
    # F4 caps the code space at U+10FFFF.
    table[0xE0] = ((0xA0, 0xBF), _TAIL)
    for lead in (*range(0xE1, 0xED), 0xEE, 0xEF):
        table[lead] = (_TAIL, _TAIL)
    table[0xED] = ((0x80, 0x9F), _TAIL)
    table[0xF0] = ((0x90, 0xBF), _TAIL, _TAIL)
    for lead in range(0xF1, 0xF4):
        table[lead] = (_TAIL, _TAIL, _TAIL)
    table[0xF4] = ((0x80, 0x8F), _TAIL, _TAIL)
    return table


_TRAIL_RANGES: Final = _build_table()


def is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def sequence_length(lead: int, peek_at: Callable[[int], int]) -> int:
    """
    Returns the length of the well-formed sequence starting with ``lead``.

    Args:
        lead: First byte of the sequence, already known to be non-ASCII
        peek_at: Lookahead returning the byte ``n`` positions past the lead,
            or a negative value past the end of input

    Returns:
        2, 3 or 4 for a well-formed sequence, 0 when ill-formed
    """
    ranges = _TRAIL_RANGES.get(lead)
    if ranges is None:
        return 0

    for ahead, (low, high) in enumerate(ranges, start=1):
        if not low <= peek_at(ahead) <= high:
            return 0
    return len(ranges) + 1


def describe_invalid(lead: int, peek_at: Callable[[int], int]) -> str:
    """Explains why the sequence starting with ``lead`` is ill-formed."""
    if is_continuation(lead):
        return f"unexpected continuation byte 0x{lead:02X}"

    ranges = _TRAIL_RANGES.get(lead)
    if ranges is None:
        return f"invalid UTF-8 lead byte 0x{lead:02X}"

    for ahead, (low, high) in enumerate(ranges, start=1):
        byte = peek_at(ahead)
        if byte < 0:
            return f"truncated UTF-8 sequence starting with 0x{lead:02X}"
        if not low <= byte <= high:
            return (
                f"invalid UTF-8 sequence: 0x{lead:02X} followed by "
                f"0x{byte:02X}"
            )
    return f"invalid UTF-8 sequence starting with 0x{lead:02X}"
