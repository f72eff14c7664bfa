"""Shared fakes: an in-memory websocket and an httpx mock of the ecast endpoints."""

import asyncio
from typing import Any, Optional

import httpx
import pytest
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close

TOKEN = "abcdefghij0123456789abcdefgh"
SOCKET_INFO = f"{TOKEN}:60:60:websocket,flashsocket"
WS_BASE = "ecast.test:38203"
ROOM_BASE = "ecast.test"

ROOM = {
    "roomid": "ABCD",
    "server": "ecast.jackboxgames.com",
    "apptag": "drawful2",
    "appid": "8511cbe0-dfff-4ea9-94e0-424daad072c3",
    "numAudience": 0,
    "audienceEnabled": True,
    "joinAs": "player",
    "requiresPassword": False,
}


class FakeConnection:
    """Stands in for a websockets ClientConnection.

    Items put on `incoming` are returned by recv(); exceptions are raised.
    """

    def __init__(self, frames: tuple = (), fail_after: Optional[int] = None):
        self.incoming: asyncio.Queue = asyncio.Queue()
        for frame in frames:
            self.incoming.put_nowait(frame)
        self.sent: list[str] = []
        self.close_calls = 0
        self._fail_after = fail_after

    async def recv(self) -> Any:
        item = await self.incoming.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def send(self, frame: str) -> None:
        if self._fail_after is not None and len(self.sent) >= self._fail_after:
            raise OSError("broken pipe")
        self.sent.append(frame)

    async def close(self) -> None:
        self.close_calls += 1
        # Close initiated locally; the peer never answers
        self.incoming.put_nowait(ConnectionClosedOK(None, Close(1000, "")))


class FakeConnector:
    def __init__(self, conn: Optional[FakeConnection] = None, error: Optional[Exception] = None):
        self.conn = conn
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, url: str, **kwargs: Any) -> FakeConnection:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.conn  # type: ignore[return-value]


class EcastStub:
    """httpx handler for the room lookup and socket.io bootstrap endpoints."""

    def __init__(self, room_status: int = 200, room: Any = None, socket_info: str = SOCKET_INFO):
        self.room_status = room_status
        self.room = ROOM if room is None else room
        self.socket_info = socket_info
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.startswith("/room/"):
            if self.room_status != 200:
                return httpx.Response(self.room_status, text="room error")
            if isinstance(self.room, str):
                return httpx.Response(200, text=self.room)
            return httpx.Response(200, json=self.room)
        if request.url.path == "/socket.io/1/":
            return httpx.Response(200, text=self.socket_info)
        return httpx.Response(500)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


async def wait_until(condition, attempts: int = 200) -> None:
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


@pytest.fixture
def ecast() -> EcastStub:
    return EcastStub()


@pytest.fixture
def drawing_file(tmp_path):
    path = tmp_path / "drawing.json"
    path.write_text('[{"thickness":2,"color":"#000","points":[{"x":1,"y":2}]}]')
    return path
