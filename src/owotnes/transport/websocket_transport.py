"""
WebSocketTransport - the bridge's connection to an OWOT world.

- Connects to wss://<host>/<world>/ws/[?key=<member key>] with the site's
  Origin header (OWOT refuses foreign origins).
- send() is fire-and-forget: payloads go on an outbound queue drained by a
  per-connection writer task, so render ticks never await the network and
  message order is preserved.
- On close: reconnect after a fixed delay, or raise TransportClosedError when
  the deployment treats a lost connection as fatal (supervisor restarts).
"""

from __future__ import annotations
import asyncio
from typing import Callable, Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from owotnes.models.config import TransportConfig
from owotnes.models.enums import LogCategory
from owotnes.models.errors import TransportClosedError
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TRANSPORT)

OpenCallback = Callable[[], None]
MessageCallback = Callable[[Union[str, bytes]], None]


class WebSocketTransport:
    """
    ITransport implementation over a websockets client connection.

    Example:
        transport = WebSocketTransport(config.transport)
        transport.on_open = session.on_transport_open
        transport.on_message = session.handle_message
        create_tracked_task(transport.run(), category=TaskCategory.TRANSPORT,
                            description="OWOT WebSocket")
    """

    def __init__(
        self,
        config: TransportConfig,
        on_open: Optional[OpenCallback] = None,
        on_message: Optional[MessageCallback] = None,
    ):
        self.config = config
        self.on_open = on_open
        self.on_message = on_message

        self._ws = None
        self._queue: Optional[asyncio.Queue] = None
        self._stopping = False

        # Metrics
        self.connections = 0
        self.messages_sent = 0
        self.messages_received = 0
        self.dropped = 0
        self.send_errors = 0

    @property
    def is_open(self) -> bool:
        return self._ws is not None and self._queue is not None

    def send(self, payload: str) -> None:
        if not self.is_open:
            self.dropped += 1
            log.debug("Dropping outbound message, transport not open", size=len(payload))
            return
        self._queue.put_nowait(payload)

    async def run(self) -> None:
        """
        Connect and pump messages until stop().

        Raises:
            TransportClosedError: Connection lost and transport.fatal_on_close is set
        """
        log.info("Transport starting", url=self._redacted_url(), origin=self.config.origin)

        while not self._stopping:
            try:
                await self._connect_once()
            except (OSError, WebSocketException, asyncio.TimeoutError) as e:
                log.warn("Connection failed", error=str(e), error_type=type(e).__name__)

            if self._stopping:
                break

            if self.config.fatal_on_close:
                raise TransportClosedError(
                    "Canvas connection closed",
                    details={"url": self._redacted_url()},
                )

            log.info(f"Reconnecting in {self.config.reconnect_delay:.1f}s")
            await asyncio.sleep(self.config.reconnect_delay)

        log.info("Transport stopped")

    async def _connect_once(self) -> None:
        async with websockets.connect(
            self.config.url,
            origin=self.config.origin,
            max_size=None,
        ) as ws:
            self._ws = ws
            self._queue = asyncio.Queue()
            self.connections += 1
            writer = asyncio.create_task(self._writer(ws, self._queue), name="OWOT writer")
            log.info("Connected", world=self.config.world or "(main)", connection=self.connections)

            try:
                if self.on_open is not None:
                    self.on_open()

                async for message in ws:
                    self.messages_received += 1
                    if self.on_message is not None:
                        self.on_message(message)
            except ConnectionClosed as e:
                log.warn("Connection closed", code=e.rcvd.code if e.rcvd else None)
            finally:
                self._ws = None
                self._queue = None
                writer.cancel()
                try:
                    await writer
                except asyncio.CancelledError:
                    pass

    async def _writer(self, ws, queue: asyncio.Queue) -> None:
        while True:
            payload = await queue.get()
            try:
                await ws.send(payload)
            except ConnectionClosed:
                return
            except Exception as e:
                # Closing ends the read loop; run() then reconnects
                self.send_errors += 1
                log.error("Send failed, dropping connection", error=str(e), error_type=type(e).__name__)
                await ws.close()
                return
            self.messages_sent += 1

    async def stop(self) -> None:
        """Stop reconnecting and close the current connection."""
        self._stopping = True
        ws = self._ws
        if ws is not None:
            await ws.close()

    def _redacted_url(self) -> str:
        if self.config.member_key:
            return self.config.url.replace(self.config.member_key, "***")
        return self.config.url

    def get_metrics(self) -> dict:
        return {
            "open": self.is_open,
            "connections": self.connections,
            "messages_sent": self.messages_sent,
            "messages_received": self.messages_received,
            "dropped": self.dropped,
            "send_errors": self.send_errors,
        }
