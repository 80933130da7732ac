"""Collaborator implementations for the lineproto server."""

from .static_credentials import StaticCredentialChecker
from .logging_sink import LoggingPayloadSink

__all__ = ["StaticCredentialChecker", "LoggingPayloadSink"]
