from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from .math2d import Rect, Vec2

Color = Tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
LIGHT_GRAY: Color = (160, 160, 160, 255)
DARK_RED: Color = (139, 0, 0, 255)
DARK_BLUE: Color = (0, 0, 139, 255)


class Anchor(str, Enum):
    """Which point of a text box its position refers to (device space, y down)."""

    LEFT_TOP = "left_top"
    LEFT_CENTER = "left_center"
    LEFT_BOTTOM = "left_bottom"
    CENTER_TOP = "center_top"
    CENTER_CENTER = "center_center"
    CENTER_BOTTOM = "center_bottom"
    RIGHT_TOP = "right_top"
    RIGHT_CENTER = "right_center"
    RIGHT_BOTTOM = "right_bottom"

    def text_origin(self, pos: Vec2, size: Vec2) -> Vec2:
        """Top-left corner of a box of `size` anchored at `pos`."""
        horizontal, vertical = self.value.split("_")
        x = pos.x
        if horizontal == "center":
            x -= size.x / 2.0
        elif horizontal == "right":
            x -= size.x
        y = pos.y
        if vertical == "center":
            y -= size.y / 2.0
        elif vertical == "bottom":
            y -= size.y
        return Vec2(x, y)


@dataclass(frozen=True)
class Stroke:
    width: float
    color: Color


@dataclass(frozen=True)
class FontSpec:
    size: float
    monospace: bool = True


@dataclass(frozen=True, slots=True)
class LineSegment:
    start: Vec2
    end: Vec2
    stroke: Stroke


@dataclass(frozen=True, slots=True)
class CircleFilled:
    center: Vec2
    radius: float
    color: Color


@dataclass(frozen=True, slots=True)
class Text:
    pos: Vec2
    anchor: Anchor
    text: str
    font: FontSpec
    color: Color


@dataclass(frozen=True, slots=True)
class RectFilled:
    rect: Rect
    rounding: float
    color: Color


@dataclass(frozen=True, slots=True)
class RectStroke:
    rect: Rect
    rounding: float
    stroke: Stroke


DrawOp = Union[LineSegment, CircleFilled, Text, RectFilled, RectStroke]
