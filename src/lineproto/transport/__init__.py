"""Network transports for the lineproto server."""

from .tcp_transport import TcpTransport

__all__ = ["TcpTransport"]
