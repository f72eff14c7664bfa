"""
jackbox-client — Jackbox.tv room client for Python.

Resolves a room code, joins the room over the ecast socket.io endpoint and
sends player actions such as a Drawful player picture.
"""

from jackbox_client.client import JackboxClient, AsyncJackboxClient, new_user_id
from jackbox_client.rooms import RoomsAPI
from jackbox_client.errors import (
    JackboxError,
    NotFoundError,
    MalformedError,
    FatalError,
    TransientError,
    ConnectionError,
)
from jackbox_client.models.messages import MessageType, ActionName

__version__ = "0.1.0"
__all__ = [
    "JackboxClient",
    "AsyncJackboxClient",
    "new_user_id",
    "RoomsAPI",
    "JackboxError",
    "NotFoundError",
    "MalformedError",
    "FatalError",
    "TransientError",
    "ConnectionError",
    "MessageType",
    "ActionName",
]
