"""
Drawful picture loading.

A drawing file is a JSON array of strokes:
    [{"thickness": 2, "color": "#000", "points": [{"x": 1, "y": 2}, ...]}, ...]
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from jackbox_client.errors import MalformedError, NotFoundError
from jackbox_client.models.drawing import PictureLine
from jackbox_client.models.messages import SetPlayerPictureMessage

_LINES = TypeAdapter(Optional[list[PictureLine]])


def load_drawing(path: Union[str, Path]) -> list[PictureLine]:
    try:
        contents = Path(path).read_bytes()
    except OSError as e:
        raise NotFoundError(f"Cannot read drawing {path}: {e}", details={"path": str(path)}) from e
    try:
        return _LINES.validate_json(contents) or []
    except ValidationError as e:
        raise MalformedError(f"Invalid drawing {path}: {e.error_count()} validation error(s)") from e


def build_player_picture(lines: list[PictureLine]) -> SetPlayerPictureMessage:
    return SetPlayerPictureMessage(set_player_picture=True, picture_lines=lines)
