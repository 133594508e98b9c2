"""Sequential byte supplier feeding the lexer."""

import re
from typing import IO
from typing import Any
from typing import TypeAlias

from jsonvfy._types import DEFAULT_CHUNK_SIZE
from jsonvfy._types import ByteOffset
from jsonvfy._types import ErrorKind
from jsonvfy._types import JSONValidationError

EOF = -1

Source: TypeAlias = bytes | bytearray | memoryview | IO[bytes]


class ByteSource:
    """
    Forward-only reader over an in-memory buffer or a binary stream.

    Streams are read in ``chunk_size`` pieces and consumed bytes are
    dropped on refill, so memory stays bounded by the chunk size plus the
    small lookahead the lexer asks for. The source never seeks.
    """

    def __init__(
        self, data: Source, chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> None:
        if isinstance(data, str):
            raise TypeError(
                "the JSON document must be bytes or a binary stream, not str"
            )

        self._stream: IO[bytes] | None
        if isinstance(data, bytes | bytearray | memoryview):
            self._buf = bytes(data)
            self._stream = None
            self._eof = True
        elif hasattr(data, "read"):
            self._buf = b""
            self._stream = data
            self._eof = False
        else:
            raise TypeError(
                "the JSON document must be bytes or a binary stream, "
                f"not {type(data).__name__}"
            )

        self.chunk_size = chunk_size
        self._idx = 0
        self._base: ByteOffset = 0

    @property
    def offset(self) -> ByteOffset:
        """Absolute offset of the next unread byte."""
        return self._base + self._idx

    def _read_chunk(self) -> bytes:
        if self._stream is None:
            raise RuntimeError("in-memory input has no stream to read")
        try:
            chunk: Any = self._stream.read(self.chunk_size)
        except (OSError, ValueError) as exc:
            # ValueError is how closed files report an interrupted read
            raise JSONValidationError(
                ErrorKind.IO_ERROR, f"failed to read input: {exc}"
            ) from exc

        if isinstance(chunk, bytes | bytearray):
            return bytes(chunk)
        raise TypeError(
            f"stream returned {type(chunk).__name__}, expected bytes "
            "(open the file in binary mode)"
        )

    def _fill(self, need: int) -> bool:
        """Makes ``need`` unread bytes available if the input has them."""
        while len(self._buf) - self._idx < need and not self._eof:
            chunk = self._read_chunk()
            if not chunk:
                self._eof = True
                break
            self._base += self._idx
            self._buf = self._buf[self._idx :] + chunk
            self._idx = 0
        return len(self._buf) - self._idx >= need

    def peek(self) -> int:
        """Returns the next byte without consuming it, or EOF."""
        if self._idx < len(self._buf) or self._fill(1):
            return self._buf[self._idx]
        return EOF

    def peek_at(self, ahead: int) -> int:
        """Returns the byte ``ahead`` positions past the next one, or EOF."""
        if self._fill(ahead + 1):
            return self._buf[self._idx + ahead]
        return EOF

    def peek_bytes(self, count: int) -> bytes:
        self._fill(count)
        return self._buf[self._idx : self._idx + count]

    def advance(self) -> int:
        """Consumes and returns the next byte, or EOF."""
        byte = self.peek()
        if byte != EOF:
            self._idx += 1
        return byte

    def take(self, count: int) -> bytes:
        """Consumes up to ``count`` bytes."""
        data = self.peek_bytes(count)
        self._idx += len(data)
        return data

    def take_while(
        self, pattern: re.Pattern[bytes], limit: int | None = None
    ) -> bytes:
        """
        Consumes the longest run of bytes matched by ``pattern``.

        The pattern must match one or more bytes of a single class (for
        example ``[0-9]+``) so runs can continue across chunk boundaries.
        At most ``limit`` bytes are consumed when it is given.
        """
        chunks = []
        taken = 0
        while self._fill(1):
            endpos = len(self._buf)
            if limit is not None:
                endpos = min(endpos, self._idx + limit - taken)
            match = pattern.match(self._buf, self._idx, endpos)
            if match is None:
                break
            chunks.append(match.group())
            taken += match.end() - self._idx
            self._idx = match.end()
            if limit is not None and taken >= limit:
                break
        return b"".join(chunks)

    def skip_while(self, pattern: re.Pattern[bytes]) -> tuple[int, int, int]:
        """
        Consumes a run like ``take_while`` without keeping its bytes.

        Returns the run length, the number of line feeds in it and the
        number of bytes after the last line feed (the whole run length
        when there is none).
        """
        count = newlines = tail = 0
        while self._fill(1):
            match = pattern.match(self._buf, self._idx)
            if match is None:
                break
            start, end = match.span()
            found = self._buf.count(b"\n", start, end)
            if found:
                newlines += found
                tail = end - self._buf.rfind(b"\n", start, end) - 1
            else:
                tail += end - start
            count += end - start
            self._idx = end
        return count, newlines, tail
