"""Payload sink that only logs accepted messages."""

import logging

from ..core.session_state import MailEnvelope
from ..interfaces import PayloadSink

logger = logging.getLogger(__name__)


class LoggingPayloadSink(PayloadSink):
    """Logs each accepted message and keeps nothing."""

    def deliver(self, connection_id: str, envelope: MailEnvelope) -> None:
        recipients = ", ".join(envelope.recipients)
        logger.info(
            f"[{connection_id}] Mail received from {envelope.sender} "
            f"to {recipients} ({len(envelope.body)} bytes)"
        )
        logger.debug(f"[{connection_id}] Body: {envelope.body[:200]!r}")
