"""Reply codes and the structured result of dispatching one command."""

from dataclasses import dataclass
from enum import Enum, IntEnum

from .session_state import MailEnvelope


class ReplyCode(IntEnum):
    """Status codes shared by the FTP and SMTP control channels."""

    COMMAND_OK = 200
    SYSTEM_TYPE = 215
    SERVICE_READY = 220
    CLOSING = 221
    LOGGED_IN = 230
    ACTION_OK = 250
    PATHNAME = 257
    NEED_PASSWORD = 331
    START_MAIL_INPUT = 354
    SERVICE_UNAVAILABLE = 421
    SYNTAX_ERROR = 500
    SYNTAX_ERROR_ARGUMENTS = 501
    NOT_IMPLEMENTED = 502
    BAD_SEQUENCE = 503
    NOT_LOGGED_IN = 530
    STORAGE_EXCEEDED = 552


class SideEffect(Enum):
    """What the session must do after writing the reply."""

    NONE = "none"
    CLOSE_CONNECTION = "close"
    ENTER_PAYLOAD_MODE = "enter_payload"
    EXIT_PAYLOAD_MODE = "exit_payload"


@dataclass(frozen=True)
class Outcome:
    """Result of one command: reply code, reply text and side effect.

    Attributes:
        code: Reply code written to the peer.
        text: Free-form reply text.
        side_effect: Action for the session after the reply is written.
        envelope: The completed envelope when a mail payload is accepted.
    """

    code: ReplyCode
    text: str
    side_effect: SideEffect = SideEffect.NONE
    envelope: MailEnvelope | None = None

    def is_error(self) -> bool:
        """Check if the reply is a 4xx or 5xx failure."""
        return self.code >= 400

    def closes_connection(self) -> bool:
        """Check if the connection ends after this reply."""
        return self.side_effect is SideEffect.CLOSE_CONNECTION
