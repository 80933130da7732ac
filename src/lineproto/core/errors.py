"""Exceptions raised by the session core and the server layer."""


class SessionError(Exception):
    """Base class for all session errors."""

    pass


class ProtocolViolation(SessionError):
    """A peer broke the protocol in a way that ends the connection.

    Raised when a connection buffers more line or payload data than the
    configured limits allow.
    """

    def __init__(self, message: str, in_payload: bool = False):
        super().__init__(message)
        self.in_payload = in_payload


class SessionClosedError(SessionError):
    """Data arrived for a session that is closed or was never opened."""

    pass


class InvalidStateError(SessionError):
    """An operation was invoked in a state that can never reach it."""

    pass
