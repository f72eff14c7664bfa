"""
Messages carried inside a `5:::` envelope.

An envelope is `{"name": "msg", "args": [...]}` where every arg is a
sub-message discriminated by its `type` field (Action, Result or Event).
Field names below are snake_case; the wire uses the camelCase aliases.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jackbox_client.models.drawing import PictureLine


class MessageType:
    ACTION = "Action"
    RESULT = "Result"
    EVENT = "Event"


class ActionName:
    JOIN_ROOM = "JoinRoom"
    SEND_MESSAGE_TO_ROOM_OWNER = "SendMessageToRoomOwner"


class Envelope(BaseModel):
    name: str = ""
    args: Optional[list[Any]] = None


class SubMessage(BaseModel):
    """Only the discriminator; used to sniff an arg before full validation."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def null_type_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ActionMessage(SubMessage):
    # Action-specific keys (joinType, options, message, ...) are kept as extras
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = MessageType.ACTION
    action: str = ""
    app_id: str = Field("", alias="appId")
    room_id: str = Field("", alias="roomId")
    user_id: str = Field("", alias="userId")


class ResultMessage(SubMessage):
    type: str = MessageType.RESULT
    action: str = ""
    success: bool = False
    initial: bool = False
    room_id: str = Field("", alias="roomId")
    join_type: str = Field("", alias="joinType")
    user_id: str = Field("", alias="userId")


class EventMessage(SubMessage):
    type: str = MessageType.EVENT
    event: str = ""
    room_id: str = Field("", alias="roomId")
    blob: Optional[dict[str, Any]] = Field(default_factory=dict)


class JoinRoomOptions(BaseModel):
    roomcode: str
    name: str = ""


class JoinRoomAction(ActionMessage):
    action: str = ActionName.JOIN_ROOM
    join_type: str = Field(alias="joinType")
    name: str = ""
    options: JoinRoomOptions


class SendMessageToRoomOwnerAction(ActionMessage):
    action: str = ActionName.SEND_MESSAGE_TO_ROOM_OWNER
    message: dict[str, Any]


class SetPlayerPictureMessage(BaseModel):
    """`message` body of a SendMessageToRoomOwner action that sets the player's avatar."""

    model_config = ConfigDict(populate_by_name=True)

    set_player_picture: bool = Field(True, alias="setPlayerPicture")
    picture_lines: list[PictureLine] = Field(alias="pictureLines")


SUB_MESSAGE_MODELS: dict[str, type[SubMessage]] = {
    MessageType.ACTION: ActionMessage,
    MessageType.RESULT: ResultMessage,
    MessageType.EVENT: EventMessage,
}
