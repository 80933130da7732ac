"""Login state machine modeled on the FTP control channel."""

from ..interfaces.credential_checker import CredentialChecker
from .command_parser import Command
from .outcome import Outcome, ReplyCode, SideEffect
from .session_state import LoginPhase, LoginState
from .state_machine import SessionStateMachine

UNAUTHENTICATED = LoginPhase.UNAUTHENTICATED
AWAITING_PASSWORD = LoginPhase.AWAITING_PASSWORD
AUTHENTICATED = LoginPhase.AUTHENTICATED


class LoginStateMachine(SessionStateMachine):
    """USER/PASS login followed by a small set of informational commands."""

    name = "ftp"
    default_greeting = "Welcome to the lineproto FTP server"

    VERBS = frozenset({"USER", "PASS", "SYST", "PWD", "NOOP", "QUIT"})

    def __init__(self, credential_checker: CredentialChecker):
        """
        Initialize the state machine.

        Args:
            credential_checker: Backend deciding which logins are accepted.
        """
        self.credential_checker = credential_checker

    def initial_state(self) -> LoginState:
        return LoginState()

    def _user(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        if not command.has_argument():
            return state, self.argument_error()
        return (
            state.await_password(command.argument),
            Outcome(ReplyCode.NEED_PASSWORD, f"User {command.argument} okay, need password."),
        )

    def _pass(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        if not command.has_argument():
            return state, self.argument_error()
        if self.credential_checker.check_credential(state.identity, command.argument):
            return state.authenticate(), Outcome(ReplyCode.LOGGED_IN, "User logged in, proceed.")
        return state.reset(), Outcome(ReplyCode.NOT_LOGGED_IN, "Login incorrect.")

    def _syst(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        return state, Outcome(ReplyCode.SYSTEM_TYPE, "UNIX Type: L8")

    def _pwd(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        return state, Outcome(ReplyCode.PATHNAME, '"/" is the current directory')

    def _login_required(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        return state, Outcome(ReplyCode.NOT_LOGGED_IN, "Please login with USER and PASS.")

    def _noop(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        return state, Outcome(ReplyCode.COMMAND_OK, "NOOP ok.")

    def _quit(self, state: LoginState, command: Command) -> tuple[LoginState, Outcome]:
        return state, Outcome(
            ReplyCode.CLOSING,
            "Service closing control connection.",
            SideEffect.CLOSE_CONNECTION,
        )

    TRANSITIONS = {
        (UNAUTHENTICATED, "USER"): _user,
        (UNAUTHENTICATED, "SYST"): _syst,
        (UNAUTHENTICATED, "PWD"): _login_required,
        (UNAUTHENTICATED, "NOOP"): _noop,
        (UNAUTHENTICATED, "QUIT"): _quit,
        (AWAITING_PASSWORD, "USER"): _user,
        (AWAITING_PASSWORD, "PASS"): _pass,
        (AWAITING_PASSWORD, "SYST"): _syst,
        (AWAITING_PASSWORD, "PWD"): _login_required,
        (AWAITING_PASSWORD, "NOOP"): _noop,
        (AWAITING_PASSWORD, "QUIT"): _quit,
        (AUTHENTICATED, "SYST"): _syst,
        (AUTHENTICATED, "PWD"): _pwd,
        (AUTHENTICATED, "NOOP"): _noop,
        (AUTHENTICATED, "QUIT"): _quit,
    }
