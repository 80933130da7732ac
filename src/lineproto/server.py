"""ProtocolServer - Connection-facing orchestrator for the lineproto server."""

import logging

from .interfaces import CredentialChecker, PayloadSink
from .core import (
    Command,
    DecodeMode,
    LoginStateMachine,
    MailStateMachine,
    Outcome,
    ProtocolViolation,
    ReplyCode,
    ResponseEncoder,
    Session,
    SessionManager,
    SessionReply,
    SessionStateMachine,
)
from .config import Config
from .providers import LoggingPayloadSink, StaticCredentialChecker

logger = logging.getLogger(__name__)

# Arguments of these verbs are secrets and never logged
MASKED_VERBS = frozenset({"PASS"})


def build_state_machine(
    protocol: str, credential_checker: CredentialChecker | None = None
) -> SessionStateMachine:
    """
    Create the state machine for a protocol variant.

    Args:
        protocol: "ftp" or "smtp".
        credential_checker: Login backend, required for "ftp".

    Returns:
        The state machine for the variant.

    Raises:
        ValueError: If the protocol is unknown or a checker is missing.
    """
    if protocol == "ftp":
        if credential_checker is None:
            raise ValueError("The ftp protocol needs a credential checker")
        return LoginStateMachine(credential_checker)
    if protocol == "smtp":
        return MailStateMachine()
    raise ValueError(f"Unknown protocol: {protocol}")


class ProtocolServer:
    """Main server orchestrating sessions for all connections.

    The transport reports connection events and received bytes; the
    server routes them to the right Session, enforces buffer limits and
    hands accepted payloads to the sink. It never touches sockets.
    """

    def __init__(
        self,
        config: Config | None = None,
        credential_checker: CredentialChecker | None = None,
        payload_sink: PayloadSink | None = None,
    ):
        """
        Initialize the server.

        Args:
            config: Server configuration (uses defaults if None).
            credential_checker: Login backend (built from config if None).
            payload_sink: Consumer of accepted messages (logs them if None).
        """
        self.config = config or Config()
        self.credential_checker = credential_checker or StaticCredentialChecker(
            accounts=self.config.accounts,
            allow_anonymous=self.config.allow_anonymous,
        )
        self.payload_sink = payload_sink or LoggingPayloadSink()
        self.encoder = ResponseEncoder()

        self.state_machine = build_state_machine(self.config.protocol, self.credential_checker)
        self.session_manager = SessionManager(self._create_session)

    def _create_session(self) -> Session:
        return Session(self.state_machine, greeting=self.config.greeting)

    def on_connection_opened(self, connection_id: str) -> bytes:
        """
        Create a session for a new connection.

        Args:
            connection_id: Transport-assigned connection identifier.

        Returns:
            The greeting bytes to send.
        """
        logger.info(f"[{connection_id}] Connection opened ({self.state_machine.name})")
        session = self.session_manager.open_session(connection_id)
        return session.open()

    def on_bytes_received(self, connection_id: str, data: bytes) -> SessionReply:
        """
        Process bytes received on a connection.

        Args:
            connection_id: The connection the bytes arrived on.
            data: The received bytes.

        Returns:
            SessionReply with the bytes to write and whether to close after.
            A connection over a buffer limit gets a final error reply and
            is marked for closing.

        Raises:
            SessionClosedError: If the connection has no open session.
        """
        session = self.session_manager.get_session(connection_id)
        reply = session.receive(data)

        for command in reply.commands:
            logger.info(f"[{connection_id}] Received: {self._describe(command)}")

        for outcome in reply.outcomes:
            self._log_outcome(connection_id, outcome)

        for envelope in reply.envelopes:
            self.payload_sink.deliver(connection_id, envelope)

        try:
            self._check_limits(connection_id, session)
        except ProtocolViolation as e:
            session.close()
            reply.data += self.violation_reply(e)
            reply.close = True
        return reply

    def on_connection_closed(self, connection_id: str) -> None:
        """
        Discard the session of a closed connection.

        Args:
            connection_id: The connection identifier.
        """
        self.session_manager.remove_session(connection_id)
        logger.info(f"[{connection_id}] Connection closed")

    def violation_reply(self, error: ProtocolViolation) -> bytes:
        """Get the final reply sent before dropping a connection over a limit."""
        if error.in_payload:
            outcome = Outcome(ReplyCode.STORAGE_EXCEEDED, "Message exceeds maximum size.")
        else:
            outcome = Outcome(ReplyCode.SYNTAX_ERROR, "Line too long.")
        return self.encoder.encode(outcome)

    def timeout_reply(self) -> bytes:
        """Get the reply sent before dropping an idle connection."""
        return self.encoder.encode(
            Outcome(ReplyCode.SERVICE_UNAVAILABLE, "Timeout, closing control connection.")
        )

    def _check_limits(self, connection_id: str, session: Session) -> None:
        if session.closed:
            return
        if session.mode is DecodeMode.PAYLOAD:
            if session.buffered_size > self.config.max_payload_size:
                logger.warning(f"[{connection_id}] Payload exceeds {self.config.max_payload_size} bytes")
                raise ProtocolViolation("Payload too large", in_payload=True)
        elif session.buffered_size > self.config.max_line_length:
            logger.warning(f"[{connection_id}] Line exceeds {self.config.max_line_length} bytes")
            raise ProtocolViolation("Line too long")

    @staticmethod
    def _describe(command: Command) -> str:
        if command.verb in MASKED_VERBS:
            return f"{command.verb} ****"
        return f"{command.verb} {command.argument}".rstrip()

    def _log_outcome(self, connection_id: str, outcome: Outcome) -> None:
        logger.debug(f"[{connection_id}] Reply: {int(outcome.code)} {outcome.text}")
        if outcome.is_error():
            logger.info(f"[{connection_id}] Rejected with {int(outcome.code)}: {outcome.text}")
