"""Decoder that splits a fragmented byte stream into terminated lines."""

from typing import Iterator

CRLF = b"\r\n"


class LineDecoder:
    """Turns arbitrarily chunked bytes into complete lines.

    Bytes are appended with feed() and complete lines are pulled with
    lines(). Anything after the last terminator stays buffered until the
    rest of it arrives, including a lone trailing CR.
    """

    def __init__(self, terminator: bytes = CRLF):
        """
        Initialize the decoder.

        Args:
            terminator: Byte sequence ending each line.
        """
        if not terminator:
            raise ValueError("Line terminator must not be empty")
        self.terminator = terminator
        self._buffer = bytearray()

    def feed(self, data: bytes) -> None:
        """Append newly received bytes."""
        self._buffer.extend(data)

    def lines(self) -> Iterator[bytes]:
        """
        Yield each complete line currently buffered, terminator stripped.

        Lines are extracted lazily: a consumer that stops iterating leaves
        the remaining lines in the buffer.

        Yields:
            One line per terminator, in arrival order.
        """
        while True:
            index = self._buffer.find(self.terminator)
            if index < 0:
                return
            line = bytes(self._buffer[:index])
            del self._buffer[: index + len(self.terminator)]
            yield line

    def drain(self) -> bytes:
        """Remove and return every buffered byte not yet decoded."""
        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    @property
    def buffered_size(self) -> int:
        """Number of bytes waiting for a terminator."""
        return len(self._buffer)
