"""Encoder for numeric status reply lines."""

from .line_decoder import CRLF
from .outcome import Outcome, ReplyCode


class ResponseEncoder:
    """Maps outcomes to "<code> <text>" reply lines."""

    ENCODING = "utf-8"

    def encode(self, outcome: Outcome) -> bytes:
        """
        Encode an outcome as one reply line.

        Args:
            outcome: The outcome to send.

        Returns:
            The reply bytes including the line terminator.
        """
        assert outcome.code in ReplyCode.__members__.values(), (
            f"Unknown reply code: {outcome.code!r}"
        )
        # Line breaks inside the text would split the reply
        text = " ".join(outcome.text.splitlines())
        return f"{int(outcome.code)} {text}".encode(self.ENCODING) + CRLF
