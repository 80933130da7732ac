"""asyncio TCP transport feeding connections into a ProtocolServer."""

import asyncio
import itertools
import logging

from ..server import ProtocolServer

logger = logging.getLogger(__name__)

READ_SIZE = 4096


class TcpTransport:
    """Listening socket and per-connection read/write loop.

    Each accepted connection runs in its own task. Within a task a reply
    is written and drained before the next read, so commands on one
    connection are handled strictly one after another.
    """

    def __init__(
        self,
        server: ProtocolServer,
        host: str = "127.0.0.1",
        port: int = 0,
        idle_timeout: float | None = None,
    ):
        """
        Initialize the transport.

        Args:
            server: The server receiving connection events.
            host: Address to listen on.
            port: Port to listen on (0 picks a free port).
            idle_timeout: Seconds to wait for data before dropping a connection.
        """
        self.server = server
        self.host = host
        self.port = port
        self.idle_timeout = idle_timeout
        self._listener: asyncio.AbstractServer | None = None
        self._ids = itertools.count(1)

    async def start(self) -> None:
        """Start listening for connections."""
        self._listener = await asyncio.start_server(self._handle_client, self.host, self.port)
        self.port = self._listener.sockets[0].getsockname()[1]
        logger.info(f"Listening on {self.host}:{self.port}")

    async def serve_forever(self) -> None:
        """Start listening if needed and serve until cancelled."""
        if self._listener is None:
            await self.start()
        async with self._listener:
            await self._listener.serve_forever()

    async def stop(self) -> None:
        """Stop accepting connections."""
        if self._listener is not None:
            self._listener.close()
            await self._listener.wait_closed()
            self._listener = None
            logger.info("Listener stopped")

    async def _handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        peername = writer.get_extra_info("peername")
        connection_id = f"{next(self._ids)}@{peername[0]}:{peername[1]}" if peername else str(next(self._ids))

        try:
            await self._send(writer, self.server.on_connection_opened(connection_id))

            while True:
                try:
                    data = await asyncio.wait_for(reader.read(READ_SIZE), timeout=self.idle_timeout)
                except asyncio.TimeoutError:
                    logger.info(f"[{connection_id}] Idle timeout")
                    await self._send(writer, self.server.timeout_reply())
                    break

                if not data:
                    logger.info(f"[{connection_id}] Peer disconnected")
                    break

                reply = self.server.on_bytes_received(connection_id, data)
                if reply.data:
                    await self._send(writer, reply.data)
                if reply.close:
                    break
        except (ConnectionResetError, ConnectionAbortedError, BrokenPipeError, OSError) as e:
            logger.info(f"[{connection_id}] Connection error: {e}")
        except Exception as e:
            logger.exception(f"[{connection_id}] Unhandled error: {e}")
        finally:
            self.server.on_connection_closed(connection_id)
            try:
                writer.close()
                await writer.wait_closed()
            except Exception as e:
                logger.debug(f"[{connection_id}] Error during writer cleanup: {e}")

    async def _send(self, writer: asyncio.StreamWriter, data: bytes) -> None:
        writer.write(data)
        await writer.drain()
