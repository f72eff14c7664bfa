"""
WebSocket session manager for the ecast socket.io 0.9 endpoint.

Handshake: GET https://{ws_base}/socket.io/1/ returns a session token,
then wss://{ws_base}/socket.io/1/websocket/{token} is opened.

Once started, a write loop drains the outbound queue onto the socket and a
read loop dispatches inbound frames. Either loop closes the socket on exit,
which ends the other one. There is no reconnect.
"""

import asyncio
import logging
import re
from typing import Any, Awaitable, Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from jackbox_client.errors import ConnectionError, FatalError, MalformedError
from jackbox_client.models.messages import SubMessage
from jackbox_client.transport.envelope import dispatch_frame
from jackbox_client.transport.http import DEFAULT_WS_BASE, HttpClient

INFO_PATH = "/socket.io/1/"
SOCKET_PATH = "/socket.io/1/websocket/"
TOKEN_PATTERN = re.compile(r"([a-z0-9]{28}):60:60:websocket,flashsocket")

MAX_MESSAGE_SIZE = 2048
QUEUE_SIZE = 20

CLOSE_NORMAL = 1000
CLOSE_GOING_AWAY = 1001
CLOSE_ABNORMAL = 1006
EXPECTED_CLOSE_CODES = {CLOSE_NORMAL, CLOSE_GOING_AWAY, CLOSE_ABNORMAL}

logger = logging.getLogger(__name__)

MessageHandler = Callable[[SubMessage], None]


def close_code(exc: ConnectionClosed) -> int:
    """Close code of a closed connection; 1006 when no close frame was exchanged."""
    frame = exc.rcvd or exc.sent
    return frame.code if frame is not None else CLOSE_ABNORMAL


async def write_loop(
    conn: Any,
    outbound: "asyncio.Queue[str]",
    close: Callable[[], Awaitable[None]],
) -> None:
    """Send queued frames in order until a write fails."""
    try:
        while True:
            frame = await outbound.get()
            logger.debug("-> %s", frame)
            try:
                await conn.send(frame)
            except ConnectionClosed as e:
                logger.debug("Websocket closed while writing (code %d)", close_code(e))
                return
            except Exception as e:
                logger.error("Websocket write error: %s", e)
                return
    finally:
        await close()


async def read_loop(
    conn: Any,
    outbound: "asyncio.Queue[str]",
    deliver: MessageHandler,
    close: Callable[[], Awaitable[None]],
) -> None:
    """Read and dispatch frames one at a time until the connection ends."""
    try:
        while True:
            try:
                raw = await conn.recv()
            except ConnectionClosed as e:
                if close_code(e) not in EXPECTED_CLOSE_CODES:
                    logger.error("Websocket error: %s", e)
                return
            except Exception as e:
                logger.error("Websocket error: %s", e)
                return

            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", errors="replace")
            for message in await dispatch_frame(raw.strip(), outbound):
                deliver(message)
    finally:
        await close()


class SocketSession:
    def __init__(
        self,
        http: HttpClient,
        ws_base: str = DEFAULT_WS_BASE,
        connect: Optional[Callable[..., Awaitable[Any]]] = None,
        queue_size: int = QUEUE_SIZE,
        open_timeout: Optional[float] = None,
    ):
        self._http = http
        self._ws_base = ws_base
        self._connect = connect or websockets.connect
        self._open_timeout = open_timeout
        self._conn: Any = None
        self._closed = False
        self._read_task: Optional[asyncio.Task[None]] = None
        self._write_task: Optional[asyncio.Task[None]] = None
        self._handlers: list[MessageHandler] = []
        self.outbound: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self.inbound: asyncio.Queue[SubMessage] = asyncio.Queue(maxsize=queue_size)

    @property
    def started(self) -> bool:
        return self._read_task is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def add_message_handler(self, handler: MessageHandler) -> Callable[[], None]:
        """Add a handler for decoded sub-messages. Returns a cleanup function."""
        self._handlers.append(handler)
        def remove() -> None:
            try:
                self._handlers.remove(handler)
            except ValueError:
                pass
        return remove

    async def handshake(self) -> None:
        """Fetch a session token and open the socket — no reads or writes yet."""
        body = await self._http.get_text(f"https://{self._ws_base}{INFO_PATH}")
        matches = TOKEN_PATTERN.findall(body)
        if len(matches) != 1:
            raise MalformedError(
                "Failed to retrieve websocket session token",
                details={"matches": len(matches)},
            )

        url = f"wss://{self._ws_base}{SOCKET_PATH}{matches[0]}"
        try:
            self._conn = await self._connect(
                url,
                max_size=MAX_MESSAGE_SIZE,
                ping_interval=None,  # keepalive is the 2::: / 2:: exchange
                open_timeout=self._open_timeout,
            )
        except Exception as e:
            raise ConnectionError(f"Failed to connect to {url}: {e}") from e

    def start(self) -> None:
        if self._conn is None:
            raise FatalError("Session must complete the handshake before starting")
        if self.started:
            return
        self._write_task = asyncio.create_task(write_loop(self._conn, self.outbound, self.close))
        self._read_task = asyncio.create_task(
            read_loop(self._conn, self.outbound, self._deliver, self.close)
        )

    async def send(self, frame: str) -> None:
        if not self.started:
            raise FatalError("Session not started")
        await self.outbound.put(frame)

    def _deliver(self, message: SubMessage) -> None:
        for handler in list(self._handlers):
            try:
                handler(message)
            except Exception as e:
                logger.error("Message handler failed for %s: %s", message.type, e)
        try:
            self.inbound.put_nowait(message)
        except asyncio.QueueFull:
            logger.debug("Inbound queue full, dropping %s", message.type)

    async def wait(self) -> None:
        """Block until both loops have ended."""
        if self._read_task is None or self._write_task is None:
            return
        _, pending = await asyncio.wait(
            {self._read_task, self._write_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        # The socket is closed by now; the survivor may be parked on a queue
        for task in pending:
            task.cancel()
        await asyncio.gather(self._read_task, self._write_task, return_exceptions=True)

    async def close(self) -> None:
        if self._closed or self._conn is None:
            return
        self._closed = True
        await self._conn.close()
