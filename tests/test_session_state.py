"""Tests for the session state records."""

from lineproto.core.session_state import (
    LoginPhase,
    LoginState,
    MailEnvelope,
    MailPhase,
    MailState,
)


class TestMailEnvelope:
    """Tests for MailEnvelope."""

    def test_default_values(self):
        """A new envelope is empty."""
        envelope = MailEnvelope()
        assert envelope.sender is None
        assert envelope.recipients == ()
        assert envelope.body == b""
        assert envelope.is_empty() is True

    def test_list_recipients_become_tuple(self):
        """Recipients are stored immutably."""
        envelope = MailEnvelope(recipients=["<a@x>"])
        assert envelope.recipients == ("<a@x>",)

    def test_add_recipient(self):
        """add_recipient appends without touching the original."""
        envelope = MailEnvelope(sender="<s@x>")
        updated = envelope.add_recipient("<a@x>").add_recipient("<b@x>")
        assert updated.recipients == ("<a@x>", "<b@x>")
        assert updated.sender == "<s@x>"
        assert envelope.recipients == ()  # Original unchanged

    def test_with_body(self):
        """with_body attaches the message body."""
        envelope = MailEnvelope(sender="<s@x>").with_body(b"hello")
        assert envelope.body == b"hello"
        assert envelope.is_empty() is False


class TestLoginState:
    """Tests for LoginState."""

    def test_default_values(self):
        """Login state starts unauthenticated."""
        state = LoginState()
        assert state.phase is LoginPhase.UNAUTHENTICATED
        assert state.identity is None
        assert state.is_authenticated() is False

    def test_await_password_then_authenticate(self):
        """Identity is kept through authentication."""
        state = LoginState().await_password("admin").authenticate()
        assert state.phase is LoginPhase.AUTHENTICATED
        assert state.identity == "admin"
        assert state.is_authenticated() is True

    def test_reset(self):
        """reset forgets the identity."""
        state = LoginState().await_password("admin").reset()
        assert state == LoginState()


class TestMailState:
    """Tests for MailState."""

    def test_default_values(self):
        """Mail state starts in INIT with an empty envelope."""
        state = MailState()
        assert state.phase is MailPhase.INIT
        assert state.envelope.is_empty()

    def test_greet_discards_envelope(self):
        """greet returns to GREETED with a fresh envelope."""
        state = MailState().greet("x").start_mail("<a@x>").greet("y")
        assert state.phase is MailPhase.GREETED
        assert state.client_name == "y"
        assert state.envelope.is_empty()

    def test_start_mail_starts_new_envelope(self):
        """start_mail records the sender in a new envelope."""
        state = MailState().greet("x").start_mail("<a@x>")
        assert state.phase is MailPhase.MAIL_FROM
        assert state.envelope.sender == "<a@x>"
        assert state.client_name == "x"

    def test_reset_envelope_keeps_init(self):
        """Resetting before the greeting stays in INIT."""
        assert MailState().reset_envelope() == MailState()

    def test_reset_envelope_returns_to_greeted(self):
        """Resetting mid-envelope returns to GREETED."""
        state = MailState().greet("x").start_mail("<a@x>").add_recipient("<b@x>").start_data()
        reset = state.reset_envelope()
        assert reset.phase is MailPhase.GREETED
        assert reset.envelope.is_empty()
        assert reset.client_name == "x"
