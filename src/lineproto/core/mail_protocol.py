"""Mail state machine modeled on the SMTP command channel."""

from .command_parser import Command
from .errors import InvalidStateError
from .outcome import Outcome, ReplyCode, SideEffect
from .payload_accumulator import END_OF_DATA
from .session_state import MailPhase, MailState
from .state_machine import SessionStateMachine

INIT = MailPhase.INIT
GREETED = MailPhase.GREETED
MAIL_FROM = MailPhase.MAIL_FROM
RCPT_TO = MailPhase.RCPT_TO


def _strip_prefix(argument: str, prefix: str) -> str | None:
    """Return the text after a case-insensitive prefix, or None if absent."""
    if not argument.upper().startswith(prefix):
        return None
    return argument[len(prefix):].strip()


class MailStateMachine(SessionStateMachine):
    """Envelope construction (MAIL, RCPT) followed by DATA body capture."""

    name = "smtp"
    default_greeting = "Welcome to the lineproto SMTP server"
    payload_terminator = END_OF_DATA

    VERBS = frozenset({"HELO", "EHLO", "MAIL", "RCPT", "DATA", "RSET", "NOOP", "QUIT"})

    def initial_state(self) -> MailState:
        return MailState()

    def _helo(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        client_name = command.argument or "Client"
        return (
            state.greet(client_name),
            Outcome(ReplyCode.ACTION_OK, f"Hello {client_name}, pleased to meet you"),
        )

    def _mail(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        sender = _strip_prefix(command.argument, "FROM:")
        if sender is None:
            return state, self.argument_error()
        return state.start_mail(sender), Outcome(ReplyCode.ACTION_OK, "OK")

    def _rcpt(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        recipient = _strip_prefix(command.argument, "TO:")
        if not recipient:
            return state, self.argument_error()
        return state.add_recipient(recipient), Outcome(ReplyCode.ACTION_OK, "OK")

    def _data(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        return state.start_data(), Outcome(
            ReplyCode.START_MAIL_INPUT,
            "End data with <CR><LF>.<CR><LF>",
            SideEffect.ENTER_PAYLOAD_MODE,
        )

    def _rset(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        return state.reset_envelope(), Outcome(ReplyCode.ACTION_OK, "OK")

    def _noop(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        return state, Outcome(ReplyCode.ACTION_OK, "OK")

    def _quit(self, state: MailState, command: Command) -> tuple[MailState, Outcome]:
        return state, Outcome(ReplyCode.CLOSING, "Bye", SideEffect.CLOSE_CONNECTION)

    def accept_payload(self, state: MailState, payload: bytes) -> tuple[MailState, Outcome]:
        """
        Accept the captured message body.

        Args:
            state: The connection's state, which must be capturing data.
            payload: The body without its terminator.

        Returns:
            Tuple of (greeted_state, outcome carrying the finished envelope).

        Raises:
            InvalidStateError: If the session is not capturing a body.
        """
        if state.phase is not MailPhase.DATA_CAPTURE:
            raise InvalidStateError(f"Cannot accept a payload in phase {state.phase.value}")

        envelope = state.envelope.with_body(payload)
        return state.reset_envelope(), Outcome(
            ReplyCode.ACTION_OK,
            "OK: Message accepted for delivery",
            SideEffect.EXIT_PAYLOAD_MODE,
            envelope=envelope,
        )

    TRANSITIONS = {
        (INIT, "HELO"): _helo,
        (INIT, "EHLO"): _helo,
        (INIT, "RSET"): _rset,
        (INIT, "NOOP"): _noop,
        (INIT, "QUIT"): _quit,
        (GREETED, "HELO"): _helo,
        (GREETED, "EHLO"): _helo,
        (GREETED, "MAIL"): _mail,
        (GREETED, "RSET"): _rset,
        (GREETED, "NOOP"): _noop,
        (GREETED, "QUIT"): _quit,
        (MAIL_FROM, "HELO"): _helo,
        (MAIL_FROM, "EHLO"): _helo,
        (MAIL_FROM, "RCPT"): _rcpt,
        (MAIL_FROM, "RSET"): _rset,
        (MAIL_FROM, "NOOP"): _noop,
        (MAIL_FROM, "QUIT"): _quit,
        (RCPT_TO, "HELO"): _helo,
        (RCPT_TO, "EHLO"): _helo,
        (RCPT_TO, "RCPT"): _rcpt,
        (RCPT_TO, "DATA"): _data,
        (RCPT_TO, "RSET"): _rset,
        (RCPT_TO, "NOOP"): _noop,
        (RCPT_TO, "QUIT"): _quit,
    }
