"""Pytest configuration and fixtures."""

import pytest

from lineproto.core import LoginStateMachine, MailStateMachine, Session
from lineproto.providers import StaticCredentialChecker


@pytest.fixture
def credential_checker():
    """Checker accepting admin/password and anonymous logins."""
    return StaticCredentialChecker(accounts={"admin": "password"}, allow_anonymous=True)


@pytest.fixture
def login_machine(credential_checker):
    """Login (FTP) state machine."""
    return LoginStateMachine(credential_checker)


@pytest.fixture
def mail_machine():
    """Mail (SMTP) state machine."""
    return MailStateMachine()


@pytest.fixture
def login_session(login_machine):
    """Session running the login protocol."""
    return Session(login_machine)


@pytest.fixture
def mail_session(mail_machine):
    """Session running the mail protocol."""
    return Session(mail_machine)
