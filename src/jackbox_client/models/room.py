"""
Room metadata returned by the ecast room lookup.
"""

from pydantic import BaseModel, ConfigDict, Field


class RoomInfo(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    room_id: str = Field("", alias="roomid")
    server: str = ""
    app_tag: str = Field("", alias="apptag")
    app_id: str = Field("", alias="appid")
    num_audience: int = Field(0, alias="numAudience")
    audience_enabled: bool = Field(False, alias="audienceEnabled")
    join_as: str = Field("", alias="joinAs")
    requires_password: bool = Field(False, alias="requiresPassword")
