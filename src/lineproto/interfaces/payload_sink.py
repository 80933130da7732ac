"""Abstract interface for consumers of accepted payloads."""

from abc import ABC, abstractmethod

from ..core.session_state import MailEnvelope


class PayloadSink(ABC):
    """Receives each message once the session has accepted it."""

    @abstractmethod
    def deliver(self, connection_id: str, envelope: MailEnvelope) -> None:
        """Hand over an accepted message.

        Args:
            connection_id: The connection the message arrived on.
            envelope: Sender, recipients and body of the message.
        """
        pass
