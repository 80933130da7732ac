"""Immutable per-connection protocol state records."""

from dataclasses import dataclass, field
from enum import Enum


class DecodeMode(Enum):
    """Which decoder the session routes incoming bytes to."""

    LINE = "line"
    PAYLOAD = "payload"


class LoginPhase(Enum):
    """Phases of the login (FTP control channel) variant."""

    UNAUTHENTICATED = "unauthenticated"
    AWAITING_PASSWORD = "awaiting_password"
    AUTHENTICATED = "authenticated"


class MailPhase(Enum):
    """Phases of the mail (SMTP) variant."""

    INIT = "init"
    GREETED = "greeted"
    MAIL_FROM = "mail_from"
    RCPT_TO = "rcpt_to"
    DATA_CAPTURE = "data_capture"


@dataclass(frozen=True)
class MailEnvelope:
    """Sender, recipients and body of one message (immutable)."""

    sender: str | None = None
    recipients: tuple[str, ...] = field(default_factory=tuple)
    body: bytes = b""

    def __init__(
        self,
        sender: str | None = None,
        recipients: list[str] | tuple[str, ...] | None = None,
        body: bytes = b"",
    ):
        object.__setattr__(self, "sender", sender)
        object.__setattr__(self, "recipients", tuple(recipients) if recipients else ())
        object.__setattr__(self, "body", bytes(body))

    def with_sender(self, sender: str) -> "MailEnvelope":
        """Return new envelope with the sender set."""
        return MailEnvelope(sender=sender, recipients=self.recipients, body=self.body)

    def add_recipient(self, recipient: str) -> "MailEnvelope":
        """Return new envelope with a recipient appended."""
        return MailEnvelope(
            sender=self.sender,
            recipients=self.recipients + (recipient,),
            body=self.body,
        )

    def with_body(self, body: bytes) -> "MailEnvelope":
        """Return new envelope carrying the message body."""
        return MailEnvelope(sender=self.sender, recipients=self.recipients, body=body)

    def is_empty(self) -> bool:
        """Check if nothing has been recorded yet."""
        return self.sender is None and not self.recipients and not self.body


@dataclass(frozen=True)
class LoginState:
    """Login variant state: current phase plus the identity being entered."""

    phase: LoginPhase = LoginPhase.UNAUTHENTICATED
    identity: str | None = None

    def await_password(self, identity: str) -> "LoginState":
        """Record a user name and wait for its password."""
        return LoginState(phase=LoginPhase.AWAITING_PASSWORD, identity=identity)

    def authenticate(self) -> "LoginState":
        """Mark the recorded identity as logged in."""
        return LoginState(phase=LoginPhase.AUTHENTICATED, identity=self.identity)

    def reset(self) -> "LoginState":
        """Forget any partially entered identity."""
        return LoginState()

    def is_authenticated(self) -> bool:
        """Check if the session has logged in."""
        return self.phase is LoginPhase.AUTHENTICATED


@dataclass(frozen=True)
class MailState:
    """Mail variant state: current phase plus the envelope under construction."""

    phase: MailPhase = MailPhase.INIT
    envelope: MailEnvelope = field(default_factory=MailEnvelope)
    client_name: str | None = None

    def greet(self, client_name: str) -> "MailState":
        """Accept HELO/EHLO, discarding any envelope in progress."""
        return MailState(phase=MailPhase.GREETED, client_name=client_name)

    def start_mail(self, sender: str) -> "MailState":
        """Begin a new envelope from a sender."""
        return MailState(
            phase=MailPhase.MAIL_FROM,
            envelope=MailEnvelope().with_sender(sender),
            client_name=self.client_name,
        )

    def add_recipient(self, recipient: str) -> "MailState":
        """Append a recipient to the envelope."""
        return MailState(
            phase=MailPhase.RCPT_TO,
            envelope=self.envelope.add_recipient(recipient),
            client_name=self.client_name,
        )

    def start_data(self) -> "MailState":
        """Switch to capturing the message body."""
        return MailState(
            phase=MailPhase.DATA_CAPTURE,
            envelope=self.envelope,
            client_name=self.client_name,
        )

    def reset_envelope(self) -> "MailState":
        """Drop the envelope and return to the state before it began."""
        if self.phase is MailPhase.INIT:
            return self
        return MailState(phase=MailPhase.GREETED, client_name=self.client_name)


SessionState = LoginState | MailState
