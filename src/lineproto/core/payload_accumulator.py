"""Accumulator for payload-capture mode."""

from .line_decoder import CRLF

END_OF_DATA = b"\r\n.\r\n"


class PayloadAccumulator:
    """Collects raw bytes until the buffer ends with the payload terminator.

    The stream is not split into lines. After every append the suffix of
    the whole buffer is compared with the terminator, so a terminator
    straddling several reads is still found. Payload mode begins right
    after the line terminator of the command that opened it, which is
    counted as the first bytes of the payload terminator.
    """

    def __init__(self, terminator: bytes = END_OF_DATA, opening: bytes = CRLF):
        """
        Initialize the accumulator.

        Args:
            terminator: Byte sequence that ends the payload.
            opening: Bytes already consumed before payload mode started.
        """
        self.terminator = terminator
        self._opening = opening
        self._buffer = bytearray(opening)

    def feed(self, data: bytes) -> bytes | None:
        """
        Append bytes and check for the end of the payload.

        Args:
            data: Newly received bytes.

        Returns:
            The payload without its terminator once complete, else None.
        """
        self._buffer.extend(data)
        if not self._buffer.endswith(self.terminator):
            return None

        end = len(self._buffer) - len(self.terminator)
        payload = bytes(self._buffer[len(self._opening):max(end, len(self._opening))])
        self.reset()
        return payload

    def reset(self) -> None:
        """Discard everything captured so far."""
        self._buffer = bytearray(self._opening)

    @property
    def buffered_size(self) -> int:
        """Number of payload bytes captured so far."""
        return len(self._buffer) - len(self._opening)
