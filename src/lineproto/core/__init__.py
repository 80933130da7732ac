"""Core components for the lineproto session engine."""

from .session_state import (
    DecodeMode,
    LoginPhase,
    LoginState,
    MailEnvelope,
    MailPhase,
    MailState,
    SessionState,
)
from .errors import SessionError, ProtocolViolation, SessionClosedError, InvalidStateError
from .outcome import Outcome, ReplyCode, SideEffect
from .line_decoder import LineDecoder
from .payload_accumulator import PayloadAccumulator
from .command_parser import CommandParser, Command
from .response_encoder import ResponseEncoder
from .state_machine import SessionStateMachine
from .login_protocol import LoginStateMachine
from .mail_protocol import MailStateMachine
from .session import Session, SessionReply
from .session_manager import SessionManager

__all__ = [
    "DecodeMode",
    "LoginPhase",
    "LoginState",
    "MailEnvelope",
    "MailPhase",
    "MailState",
    "SessionState",
    "SessionError",
    "ProtocolViolation",
    "SessionClosedError",
    "InvalidStateError",
    "Outcome",
    "ReplyCode",
    "SideEffect",
    "LineDecoder",
    "PayloadAccumulator",
    "CommandParser",
    "Command",
    "ResponseEncoder",
    "SessionStateMachine",
    "LoginStateMachine",
    "MailStateMachine",
    "Session",
    "SessionReply",
    "SessionManager",
]
