"""
Frame handling for the socket.io 0.9 subset the ecast service speaks.

Inbound frames:
- `1::`          connect acknowledgment, ignored
- `2:::`         keepalive ping, answered with `2::`
- `5:::<json>`   envelope carrying typed sub-messages
Anything else is dropped without comment.
"""

import asyncio
import logging
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from jackbox_client.errors import MalformedError
from jackbox_client.models.messages import SUB_MESSAGE_MODELS, Envelope, SubMessage

HELLO = "1::"
PING = "2:::"
PONG = "2::"
MESSAGE_PREFIX = "5:::"
ENVELOPE_NAME = "msg"

logger = logging.getLogger(__name__)


def encode_envelope(*args: BaseModel) -> str:
    """Wrap sub-messages into a `5:::` frame ready for the outbound queue."""
    envelope = Envelope(
        name=ENVELOPE_NAME,
        args=[arg.model_dump(by_alias=True, mode="json") for arg in args],
    )
    return f"{MESSAGE_PREFIX}{envelope.model_dump_json()}"


def parse_sub_message(raw: Any) -> Optional[SubMessage]:
    """Sniff the `type` of one envelope arg and validate it as that variant.

    Returns None for types this client does not know about.
    """
    try:
        sniffed = SubMessage.model_validate(raw)
        model = SUB_MESSAGE_MODELS.get(sniffed.type)
        if model is None:
            return None
        return model.model_validate(raw)
    except ValidationError as e:
        raise MalformedError(f"Invalid sub-message: {e.error_count()} validation error(s)") from e


def decode_envelope(raw: str) -> list[SubMessage]:
    """Decode the JSON body of a `5:::` frame.

    A bad envelope yields nothing. A bad arg stops decoding at that arg;
    messages decoded from the args before it are still returned.
    """
    try:
        envelope = Envelope.model_validate_json(raw)
    except ValidationError as e:
        logger.debug("Dropping undecodable envelope: %s", e)
        return []

    messages: list[SubMessage] = []
    for item in envelope.args or []:
        try:
            message = parse_sub_message(item)
        except MalformedError as e:
            logger.debug("Dropping remaining envelope args: %s", e)
            break
        if message is not None:
            messages.append(message)
    return messages


async def dispatch_frame(frame: str, outbound: "asyncio.Queue[str]") -> list[SubMessage]:
    """Handle one trimmed inbound frame, replying to pings on `outbound`."""
    if frame == HELLO:
        return []
    if frame == PING:
        await outbound.put(PONG)
        return []
    if frame.startswith(MESSAGE_PREFIX):
        return decode_envelope(frame[len(MESSAGE_PREFIX):])
    return []
