"""Tests for the ResponseEncoder module."""

import pytest
from lineproto.core.outcome import Outcome, ReplyCode, SideEffect
from lineproto.core.response_encoder import ResponseEncoder


class TestResponseEncoder:
    """Tests for ResponseEncoder."""

    @pytest.fixture
    def encoder(self):
        return ResponseEncoder()

    def test_encode_reply_line(self, encoder):
        """Replies are "<code> <text>" plus CRLF."""
        outcome = Outcome(ReplyCode.NEED_PASSWORD, "User admin okay, need password.")
        assert encoder.encode(outcome) == b"331 User admin okay, need password.\r\n"

    def test_side_effect_not_encoded(self, encoder):
        """Side effects do not change the reply bytes."""
        outcome = Outcome(ReplyCode.CLOSING, "Bye", SideEffect.CLOSE_CONNECTION)
        assert encoder.encode(outcome) == b"221 Bye\r\n"

    def test_line_breaks_in_text_flattened(self, encoder):
        """Text never spans more than one reply line."""
        outcome = Outcome(ReplyCode.ACTION_OK, "Hello\r\nworld")
        assert encoder.encode(outcome) == b"250 Hello world\r\n"

    def test_plain_int_member_code(self, encoder):
        """A plain integer matching a known code is accepted."""
        assert encoder.encode(Outcome(250, "OK")) == b"250 OK\r\n"

    def test_unknown_code_fails_loudly(self, encoder):
        """Unknown codes are a programming error."""
        with pytest.raises(AssertionError):
            encoder.encode(Outcome(299, "Invented"))


class TestOutcome:
    """Tests for Outcome."""

    def test_defaults(self):
        """Outcomes default to no side effect and no envelope."""
        outcome = Outcome(ReplyCode.ACTION_OK, "OK")
        assert outcome.side_effect is SideEffect.NONE
        assert outcome.envelope is None

    def test_is_error(self):
        """4xx and 5xx replies are errors."""
        assert Outcome(ReplyCode.BAD_SEQUENCE, "x").is_error() is True
        assert Outcome(ReplyCode.SERVICE_UNAVAILABLE, "x").is_error() is True
        assert Outcome(ReplyCode.START_MAIL_INPUT, "x").is_error() is False

    def test_closes_connection(self):
        """Only CLOSE_CONNECTION closes."""
        assert Outcome(ReplyCode.CLOSING, "Bye", SideEffect.CLOSE_CONNECTION).closes_connection()
        assert not Outcome(ReplyCode.ACTION_OK, "OK").closes_connection()
