"""Abstract interface for credential backends."""

from abc import ABC, abstractmethod


class CredentialChecker(ABC):
    """Decides whether an identity/secret pair may log in.

    Implementations are shared by every connection and must not be
    changed by any of them.
    """

    @abstractmethod
    def check_credential(self, identity: str, secret: str) -> bool:
        """Return True if the credentials are accepted."""
        pass
