from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Protocol, Tuple

from .draw_ops import (
    Anchor,
    CircleFilled,
    Color,
    DrawOp,
    FontSpec,
    LineSegment,
    RectFilled,
    RectStroke,
    Stroke,
    Text,
)
from .math2d import Rect, Vec2
from .position import Position, SpaceConverter, sanitize_aspect_ratio


class CanvasHost(Protocol):
    """Services the hosting widget provides to the core each frame."""

    def theme_is_dark(self) -> bool:
        ...

    def text_size(self, text: str, font: FontSpec) -> Vec2:
        ...


@dataclass
class HeadlessHost:
    """Host without a rendering backend; monospace text metrics are approximated."""

    dark: bool = True
    char_width_ratio: float = 0.6

    def theme_is_dark(self) -> bool:
        return self.dark

    def text_size(self, text: str, font: FontSpec) -> Vec2:
        return Vec2(len(text) * font.size * self.char_width_ratio, font.size)


class CanvasHandle:
    """Per-frame drawing handle: converts positions and records draw instructions."""

    def __init__(
        self,
        converter: SpaceConverter,
        host: CanvasHost,
        ops: Optional[List[DrawOp]] = None,
        hover_pos: Optional[Vec2] = None,
    ):
        self.converter = converter
        self.host = host
        self.ops: List[DrawOp] = ops if ops is not None else []
        self.hover_pos = hover_pos

    # -- conversions ------------------------------------------------------
    def convert_to_device_space(self, pos: Position) -> Position:
        return self.converter.to_device(pos)

    def convert_to_overlay_space(self, pos: Position) -> Position:
        return self.converter.to_overlay(pos)

    def convert_to_logical_space(self, pos: Position) -> Position:
        return self.converter.to_logical(pos)

    def bounding_box(self) -> Rect:
        """The drawing surface in overlay space (same numbers as the device rect)."""
        return self.converter.device_rect

    def draw_region_in_logical_space(self) -> Rect:
        return self.converter.logical_region()

    def dark_mode(self) -> bool:
        return bool(self.host.theme_is_dark())

    def text_size(self, text: str, font: FontSpec) -> Vec2:
        return self.host.text_size(text, font)

    def cursor_pos(self) -> Optional[Position]:
        if self.hover_pos is None:
            return None
        return Position.device(self.hover_pos.x, self.hover_pos.y)

    def set_aspect_ratio(self, aspect_ratio: float) -> None:
        """Override the aspect ratio for the rest of this frame; the canvas state is untouched."""
        self.converter = replace(self.converter, aspect_ratio=sanitize_aspect_ratio(aspect_ratio))

    # -- drawing ----------------------------------------------------------
    def _device(self, pos: Position) -> Vec2:
        return self.converter.to_device(pos).point

    def line_segment(self, points: Tuple[Position, Position], stroke: Stroke) -> None:
        start, end = points
        self.ops.append(LineSegment(self._device(start), self._device(end), stroke))

    def circle_filled(self, center: Position, radius: float, color: Color) -> None:
        self.ops.append(CircleFilled(self._device(center), radius, color))

    def text(self, pos: Position, anchor: Anchor, text: str, font: FontSpec, color: Color) -> None:
        self.ops.append(Text(self._device(pos), anchor, str(text), font, color))

    def rect(
        self,
        corner_a: Position,
        corner_b: Position,
        rounding: float,
        fill: Color,
        stroke: Optional[Stroke] = None,
    ) -> None:
        """Rectangle spanned by two corners in any space; filled, then outlined when stroke is given."""
        rect = Rect(self._device(corner_a), self._device(corner_b))
        self.ops.append(RectFilled(rect, rounding, fill))
        if stroke is not None:
            self.ops.append(RectStroke(rect, rounding, stroke))

    def rect_filled(self, rect: Rect, rounding: float, color: Color) -> None:
        """rect is given in device space."""
        self.ops.append(RectFilled(rect, rounding, color))

    def rect_stroke(self, rect: Rect, rounding: float, stroke: Stroke) -> None:
        """rect is given in device space."""
        self.ops.append(RectStroke(rect, rounding, stroke))
