"""Per-connection session wiring decoders, state machine and encoder."""

import logging
from dataclasses import dataclass, field

from .command_parser import Command, CommandParser
from .errors import SessionClosedError
from .line_decoder import LineDecoder
from .outcome import Outcome, ReplyCode, SideEffect
from .payload_accumulator import PayloadAccumulator
from .response_encoder import ResponseEncoder
from .session_state import DecodeMode, MailEnvelope, SessionState
from .state_machine import SessionStateMachine

logger = logging.getLogger(__name__)


@dataclass
class SessionReply:
    """Bytes to write back after one arrival, and whether to close afterwards."""

    data: bytes = b""
    close: bool = False
    commands: list[Command] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)
    envelopes: list[MailEnvelope] = field(default_factory=list)


class Session:
    """Protocol session for one accepted connection.

    Owns the connection's buffers, decode mode and protocol state. Received
    bytes go to the line decoder or, while capturing a payload, to the
    payload accumulator. Each decoded unit is dispatched to the state
    machine in arrival order and the encoded replies are returned for the
    transport to write. The session performs no I/O itself.
    """

    def __init__(self, state_machine: SessionStateMachine, greeting: str | None = None):
        """
        Initialize the session.

        Args:
            state_machine: Protocol variant driving this connection.
            greeting: Text of the 220 reply sent on connect.
        """
        self.state_machine = state_machine
        self.greeting = greeting or state_machine.default_greeting
        self.state: SessionState = state_machine.initial_state()
        self.mode = DecodeMode.LINE
        self.closed = False

        self.parser = CommandParser()
        self.encoder = ResponseEncoder()
        self._decoder = LineDecoder()
        self._accumulator: PayloadAccumulator | None = None

    def open(self) -> bytes:
        """Get the greeting to send when the connection is accepted."""
        return self.encoder.encode(Outcome(ReplyCode.SERVICE_READY, self.greeting))

    def receive(self, data: bytes) -> SessionReply:
        """
        Process bytes received from the peer.

        Args:
            data: The bytes of one read, possibly a fragment.

        Returns:
            SessionReply with every reply produced, in order.

        Raises:
            SessionClosedError: If the session has already closed.
        """
        if self.closed:
            raise SessionClosedError("Session is closed")

        reply = SessionReply()
        pending = data

        while pending and not self.closed:
            if self.mode is DecodeMode.PAYLOAD:
                pending = self._receive_payload(pending, reply)
            else:
                pending = self._receive_lines(pending, reply)

        reply.close = self.closed
        return reply

    def _receive_lines(self, data: bytes, reply: SessionReply) -> bytes:
        """Decode and dispatch lines; return bytes left over for payload mode."""
        self._decoder.feed(data)

        for line in self._decoder.lines():
            command = self.parser.parse(line)
            reply.commands.append(command)
            self.state, outcome = self.state_machine.apply(self.state, command)
            self._record(outcome, reply)

            if outcome.side_effect is SideEffect.ENTER_PAYLOAD_MODE:
                self.mode = DecodeMode.PAYLOAD
                self._accumulator = PayloadAccumulator(self.state_machine.payload_terminator)
                logger.debug("Entering payload mode")
                return self._decoder.drain()

            if self.closed:
                break

        return b""

    def _receive_payload(self, data: bytes, reply: SessionReply) -> bytes:
        payload = self._accumulator.feed(data)
        if payload is None:
            return b""

        self.state, outcome = self.state_machine.accept_payload(self.state, payload)
        self._record(outcome, reply)
        if outcome.envelope is not None:
            reply.envelopes.append(outcome.envelope)
        return b""

    def _record(self, outcome: Outcome, reply: SessionReply) -> None:
        """Encode an outcome into the reply and apply its side effect."""
        reply.outcomes.append(outcome)
        reply.data += self.encoder.encode(outcome)

        if outcome.side_effect is SideEffect.EXIT_PAYLOAD_MODE:
            self.mode = DecodeMode.LINE
            self._accumulator = None
            logger.debug("Payload captured, back to line mode")
        elif outcome.closes_connection():
            self.close()

    def close(self) -> None:
        """Release buffers and state; the session accepts no further data."""
        self.closed = True
        self._decoder.drain()
        self._accumulator = None

    @property
    def buffered_size(self) -> int:
        """Bytes held for the unit currently being decoded."""
        if self.mode is DecodeMode.PAYLOAD and self._accumulator is not None:
            return self._accumulator.buffered_size
        return self._decoder.buffered_size
