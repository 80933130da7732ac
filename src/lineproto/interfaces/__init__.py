"""Abstract interfaces for the lineproto server."""

from .credential_checker import CredentialChecker
from .payload_sink import PayloadSink

__all__ = ["CredentialChecker", "PayloadSink"]
