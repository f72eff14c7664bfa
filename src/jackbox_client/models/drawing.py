"""
Drawful canvas strokes. Missing keys take zero values.
"""

from pydantic import BaseModel


class Point(BaseModel):
    x: int = 0
    y: int = 0


class PictureLine(BaseModel):
    thickness: int = 0
    color: str = ""
    points: list[Point] = []
