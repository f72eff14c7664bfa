"""
JackboxClient / AsyncJackboxClient — one user, one room, one socket session.
"""

import asyncio
import uuid
from pathlib import Path
from typing import Any, AsyncGenerator, Callable, Optional, Union

import httpx

from jackbox_client.drawings import build_player_picture, load_drawing
from jackbox_client.errors import FatalError
from jackbox_client.models.messages import (
    JoinRoomAction,
    JoinRoomOptions,
    SendMessageToRoomOwnerAction,
    SubMessage,
)
from jackbox_client.models.room import RoomInfo
from jackbox_client.rooms import RoomsAPI
from jackbox_client.transport.envelope import encode_envelope
from jackbox_client.transport.http import DEFAULT_ROOM_BASE, DEFAULT_WS_BASE, HttpClient
from jackbox_client.transport.websocket import MessageHandler, SocketSession


def new_user_id() -> str:
    return str(uuid.uuid4())


def build_join_room(room: RoomInfo, user_id: str, name: str) -> JoinRoomAction:
    return JoinRoomAction(
        app_id=room.app_id,
        join_type=room.join_as,
        name=name,
        options=JoinRoomOptions(roomcode=room.room_id, name=name),
        room_id=room.room_id,
        user_id=user_id,
    )


def build_room_owner_message(room: RoomInfo, user_id: str, message: dict[str, Any]) -> SendMessageToRoomOwnerAction:
    return SendMessageToRoomOwnerAction(
        app_id=room.app_id,
        room_id=room.room_id,
        user_id=user_id,
        message=message,
    )


class AsyncJackboxClient:
    """Async Jackbox client (primary)."""

    def __init__(
        self,
        user_id: Optional[str] = None,
        room_base: str = DEFAULT_ROOM_BASE,
        ws_base: str = DEFAULT_WS_BASE,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        connect: Optional[Callable[..., Any]] = None,
    ):
        self._user_id = user_id or new_user_id()
        self._ws_base = ws_base
        self._timeout = timeout
        self._connect = connect

        self.http = HttpClient(timeout=timeout, transport=transport)
        self.rooms = RoomsAPI(self.http, room_base=room_base)

        self._room: Optional[RoomInfo] = None
        self._session: Optional[SocketSession] = None

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def room(self) -> Optional[RoomInfo]:
        return self._room

    @property
    def connected(self) -> bool:
        return self._session is not None and self._session.started and not self._session.closed

    async def join_room(self, name: str, room_code: str) -> RoomInfo:
        """Resolve the room, open the socket and send JoinRoom.

        A failed lookup aborts before any connection is attempted.
        """
        self._room = await self.rooms.get(room_code, self._user_id)
        frame = encode_envelope(build_join_room(self._room, self._user_id, name))

        session = SocketSession(
            self.http,
            ws_base=self._ws_base,
            connect=self._connect,
            open_timeout=self._timeout,
        )
        await session.handshake()
        session.start()
        self._session = session

        await session.send(frame)
        return self._room

    async def send_to_room_owner(self, message: dict[str, Any]) -> None:
        self._ensure_joined()
        action = build_room_owner_message(self._room, self._user_id, message)  # type: ignore[arg-type]
        await self._session.send(encode_envelope(action))  # type: ignore[union-attr]

    async def set_player_picture(self, path: Union[str, Path]) -> None:
        """Load a drawing file and send it to the room owner as the player picture."""
        self._ensure_joined()
        picture = build_player_picture(load_drawing(path))
        await self.send_to_room_owner(picture.model_dump(by_alias=True, mode="json"))

    def add_message_handler(self, handler: MessageHandler) -> Callable[[], None]:
        self._ensure_joined()
        return self._session.add_message_handler(handler)  # type: ignore[union-attr]

    async def messages(self) -> AsyncGenerator[SubMessage, None]:
        """Yield decoded sub-messages until the session ends."""
        self._ensure_joined()
        session = self._session
        waiter = asyncio.ensure_future(session.wait())  # type: ignore[union-attr]
        try:
            while True:
                getter = asyncio.ensure_future(session.inbound.get())  # type: ignore[union-attr]
                await asyncio.wait({getter, waiter}, return_when=asyncio.FIRST_COMPLETED)
                if getter.done():
                    yield getter.result()
                    continue
                getter.cancel()
                while not session.inbound.empty():  # type: ignore[union-attr]
                    yield session.inbound.get_nowait()  # type: ignore[union-attr]
                return
        finally:
            if not waiter.done():
                waiter.cancel()

    async def wait(self) -> None:
        """Block until the socket session ends."""
        if self._session:
            await self._session.wait()

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            await self._session.wait()
        await self.http.close()

    def _ensure_joined(self) -> None:
        if self._room is None or self._session is None or not self._session.started:
            raise FatalError("JackboxClient must join a room before sending", code="not_initialized")


class JackboxClient:
    """Sync wrapper around AsyncJackboxClient. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._loop = asyncio.new_event_loop()
        self._async = AsyncJackboxClient(**kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def user_id(self) -> str:
        return self._async.user_id

    @property
    def room(self) -> Optional[RoomInfo]:
        return self._async.room

    @property
    def connected(self) -> bool:
        return self._async.connected

    def join_room(self, name: str, room_code: str) -> RoomInfo:
        return self._run(self._async.join_room(name, room_code))

    def set_player_picture(self, path: Union[str, Path]) -> None:
        self._run(self._async.set_player_picture(path))

    def send_to_room_owner(self, message: dict[str, Any]) -> None:
        self._run(self._async.send_to_room_owner(message))

    def wait(self) -> None:
        self._run(self._async.wait())

    def close(self) -> None:
        try:
            self._run(self._async.close())
        finally:
            self._loop.close()
