"""Credential checker backed by a fixed account table."""

from types import MappingProxyType

from ..interfaces import CredentialChecker

ANONYMOUS = "anonymous"


class StaticCredentialChecker(CredentialChecker):
    """Accepts logins listed in a fixed user name to password table.

    The table is copied into a read-only mapping so connections sharing
    the checker cannot change it.
    """

    def __init__(self, accounts: dict[str, str] | None = None, allow_anonymous: bool = False):
        """
        Initialize with the accepted accounts.

        Args:
            accounts: Mapping of user names to passwords.
            allow_anonymous: Accept user "anonymous" with any password.
        """
        self.accounts = MappingProxyType(dict(accounts or {}))
        self.allow_anonymous = allow_anonymous

    def check_credential(self, identity: str, secret: str) -> bool:
        if identity is None:
            return False
        if self.allow_anonymous and identity.lower() == ANONYMOUS:
            return True
        expected = self.accounts.get(identity)
        return expected is not None and expected == secret
