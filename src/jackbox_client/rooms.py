"""
Room lookup — resolves a room code to RoomInfo.
"""

from pydantic import ValidationError

from jackbox_client.errors import MalformedError, NotFoundError
from jackbox_client.models.room import RoomInfo
from jackbox_client.transport.http import DEFAULT_ROOM_BASE, HttpClient


class RoomsAPI:
    def __init__(self, http: HttpClient, room_base: str = DEFAULT_ROOM_BASE):
        self._http = http
        self._room_base = room_base

    async def get(self, room_code: str, user_id: str) -> RoomInfo:
        """Look up a room. A single attempt; 404 means the room does not exist."""
        code = room_code.strip().upper()
        try:
            data = await self._http.get(
                f"https://{self._room_base}/room/{code}",
                params={"userId": user_id},
            )
        except NotFoundError:
            raise NotFoundError(f"Failed to find room {code}", details={"room_code": code})
        try:
            return RoomInfo.model_validate(data)
        except ValidationError as e:
            raise MalformedError(f"Invalid room info for {code}: {e.error_count()} validation error(s)") from e
