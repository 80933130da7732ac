"""Table-driven session state machine shared by the protocol variants."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, ClassVar

from .command_parser import Command
from .errors import InvalidStateError
from .outcome import Outcome, ReplyCode
from .session_state import SessionState

Handler = Callable[["SessionStateMachine", SessionState, Command], tuple[SessionState, Outcome]]


class SessionStateMachine(ABC):
    """Validates commands against the current state and computes the next one.

    Subclasses describe their protocol with TRANSITIONS, a table mapping
    every legal (phase, verb) pair to a handler. A recognized verb missing
    from the table for the current phase is a bad sequence. The machine
    holds no per-connection data: state goes in and comes out of apply().
    """

    name: ClassVar[str]
    default_greeting: ClassVar[str]
    payload_terminator: ClassVar[bytes | None] = None

    VERBS: ClassVar[frozenset[str]]
    TRANSITIONS: ClassVar[dict[tuple[Enum, str], Handler]]

    @abstractmethod
    def initial_state(self) -> SessionState:
        """Create the state of a freshly accepted connection."""
        pass

    def apply(self, state: SessionState, command: Command) -> tuple[SessionState, Outcome]:
        """
        Dispatch one command.

        Args:
            state: The connection's current state.
            command: The parsed command.

        Returns:
            Tuple of (next_state, outcome). Failures leave state unchanged.
        """
        if not command.verb:
            return state, self.syntax_error()

        if command.verb not in self.VERBS:
            return state, Outcome(ReplyCode.NOT_IMPLEMENTED, "Command not implemented.")

        handler = self.TRANSITIONS.get((state.phase, command.verb))
        if handler is None:
            return state, self.bad_sequence()

        return handler(self, state, command)

    def accept_payload(self, state: SessionState, payload: bytes) -> tuple[SessionState, Outcome]:
        """
        Finish payload capture.

        Only variants with a payload mode override this.

        Raises:
            InvalidStateError: The variant never enters payload mode.
        """
        raise InvalidStateError(f"{self.name} has no payload mode")

    def legal_verbs(self, phase: Enum) -> frozenset[str]:
        """Get the verbs accepted in a phase."""
        return frozenset(verb for (p, verb) in self.TRANSITIONS if p is phase)

    @staticmethod
    def syntax_error() -> Outcome:
        return Outcome(ReplyCode.SYNTAX_ERROR, "Syntax error, command unrecognized.")

    @staticmethod
    def argument_error() -> Outcome:
        return Outcome(ReplyCode.SYNTAX_ERROR_ARGUMENTS, "Syntax error in parameters or arguments.")

    @staticmethod
    def bad_sequence() -> Outcome:
        return Outcome(ReplyCode.BAD_SEQUENCE, "Bad sequence of commands.")
