"""Session manager for handling one session per open connection."""

from typing import Callable

from .errors import SessionClosedError
from .session import Session


class SessionManager:
    """Manages sessions for all open connections.

    Sessions are never shared: each connection id maps to its own
    Session, created on accept and dropped on disconnect.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """
        Initialize the session manager.

        Args:
            session_factory: Creates a fresh Session for a new connection.
        """
        self._sessions: dict[str, Session] = {}
        self._session_factory = session_factory

    def open_session(self, connection_id: str) -> Session:
        """
        Create the session for a newly accepted connection.

        An existing session under the same id is replaced.

        Args:
            connection_id: Transport-assigned connection identifier.

        Returns:
            The new session.
        """
        session = self._session_factory()
        self._sessions[connection_id] = session
        return session

    def get_session(self, connection_id: str) -> Session:
        """
        Get the session of an open connection.

        Raises:
            SessionClosedError: If no session is open under this id.
        """
        session = self._sessions.get(connection_id)
        if session is None:
            raise SessionClosedError(f"No open session for connection {connection_id}")
        return session

    def remove_session(self, connection_id: str) -> None:
        """
        Remove a connection's session, releasing its buffers.

        Args:
            connection_id: The connection identifier.
        """
        session = self._sessions.pop(connection_id, None)
        if session is not None:
            session.close()

    def session_count(self) -> int:
        """Get the number of open sessions."""
        return len(self._sessions)

    def list_connections(self) -> list[str]:
        """Get list of all connection ids with open sessions."""
        return list(self._sessions.keys())
