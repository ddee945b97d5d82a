from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union

from .draw_ops import BLACK, WHITE, Anchor, Color, FontSpec, Stroke
from .drawable import InputResponse
from .handle import CanvasHandle
from .math2d import Rect
from .position import Position
from .ticks import Tick, format_number

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 60.0
THICK_LINE_WIDTH = 1.0
THIN_LINE_WIDTH = 0.5
MAJOR_TICK_STROKE_LENGTH = 4.0
MINOR_TICK_STROKE_LENGTH = 2.0
LABEL_GAP = 2.0
MAX_TICKS = 1000
TICK_FONT = FontSpec(size=16.0, monospace=True)


class AxisKind(str, Enum):
    X = "x"
    Y = "y"


class Side(str, Enum):
    LEFT_OR_BOTTOM = "left_or_bottom"
    RIGHT_OR_TOP = "right_or_top"
    CENTER = "center"


@dataclass(frozen=True)
class Alignment:
    """Where an overlay-anchored axis sits; padding is measured from that side."""

    side: Side
    padding: float = 0.0

    @classmethod
    def left_or_bottom(cls, padding: float = DEFAULT_PADDING) -> "Alignment":
        return cls(Side.LEFT_OR_BOTTOM, padding)

    @classmethod
    def right_or_top(cls, padding: float = DEFAULT_PADDING) -> "Alignment":
        return cls(Side.RIGHT_OR_TOP, padding)

    @classmethod
    def center(cls) -> "Alignment":
        return cls(Side.CENTER)


@dataclass(frozen=True)
class OverlayPlacement:
    """Axis fixed to the frame of the surface."""

    alignment: Alignment = field(default_factory=Alignment.left_or_bottom)


@dataclass(frozen=True)
class LogicalPlacement:
    """Axis fixed at a logical x (for the y axis) or y (for the x axis); pans with the data."""

    coordinate: float


Placement = Union[OverlayPlacement, LogicalPlacement]


def overlay_line_points(bounding_box: Rect, alignment: Alignment, kind: AxisKind) -> Tuple[Position, Position]:
    bottom, top = bounding_box.bottom, bounding_box.top
    left, right = bounding_box.left, bounding_box.right
    if kind is AxisKind.X:
        if alignment.side is Side.LEFT_OR_BOTTOM:
            y = bottom + alignment.padding
        elif alignment.side is Side.RIGHT_OR_TOP:
            y = top - alignment.padding
        else:
            y = (bottom + top) / 2.0
        return Position.overlay(left, y), Position.overlay(right, y)
    if alignment.side is Side.LEFT_OR_BOTTOM:
        x = left + alignment.padding
    elif alignment.side is Side.RIGHT_OR_TOP:
        x = right - alignment.padding
    else:
        x = (left + right) / 2.0
    return Position.overlay(x, bottom), Position.overlay(x, top)


def logical_line_points(
    handle: CanvasHandle, bounding_box: Rect, coordinate: float, kind: AxisKind
) -> Tuple[Position, Position]:
    """Line at a logical coordinate, or the nearest overlay edge when it is off-screen."""
    outer_min = handle.convert_to_logical_space(Position.overlay(bounding_box.min.x, bounding_box.min.y))
    outer_max = handle.convert_to_logical_space(Position.overlay(bounding_box.max.x, bounding_box.max.y))
    inner_box = bounding_box.shrink(DEFAULT_PADDING)
    inner_min = handle.convert_to_logical_space(Position.overlay(inner_box.min.x, inner_box.min.y))
    inner_max = handle.convert_to_logical_space(Position.overlay(inner_box.max.x, inner_box.max.y))

    if kind is AxisKind.Y:
        low, high = inner_min.x, inner_max.x
    else:
        low, high = inner_min.y, inner_max.y

    if low > coordinate:
        return overlay_line_points(bounding_box, Alignment.left_or_bottom(DEFAULT_PADDING), kind)
    if high < coordinate:
        return overlay_line_points(bounding_box, Alignment.right_or_top(DEFAULT_PADDING), kind)
    if kind is AxisKind.Y:
        return Position.logical(coordinate, outer_min.y), Position.logical(coordinate, outer_max.y)
    return Position.logical(outer_min.x, coordinate), Position.logical(outer_max.x, coordinate)


def tick_values(start: float, end: float, interval: float, limit: int = MAX_TICKS) -> Iterator[float]:
    """Multiples of interval from the first one at or after start up to end."""
    if not math.isfinite(interval) or interval <= 0.0:
        logger.debug("skipping ticks for interval %r", interval)
        return
    first = math.ceil(start / interval) * interval
    for index in range(max(0, limit)):
        value = first + index * interval
        if value > end:
            return
        yield value


@dataclass(frozen=True)
class Axis:
    """Configuration of one axis; evaluated against the current cutout every frame."""

    major_tick_interval: Optional[Tick] = None
    minor_tick_interval: Optional[Tick] = None
    # thin lines across the surface at every major tick
    lines: bool = False
    label: str = ""
    # maximum number of major ticks, None for unbounded
    length: Optional[int] = None
    placement: Placement = field(default_factory=OverlayPlacement)

    def line_points(self, handle: CanvasHandle, kind: AxisKind) -> Tuple[Position, Position]:
        bounding_box = handle.bounding_box()
        if isinstance(self.placement, LogicalPlacement):
            return logical_line_points(handle, bounding_box, self.placement.coordinate, kind)
        return overlay_line_points(bounding_box, self.placement.alignment, kind)

    def draw(self, handle: CanvasHandle, color: Color, kind: AxisKind) -> None:
        points = self.line_points(handle, kind)
        handle.line_segment(points, Stroke(THICK_LINE_WIDTH, color))

        region = handle.draw_region_in_logical_space()
        draw_space = region.width if kind is AxisKind.X else region.height
        start, end = (self._along(handle, p, kind) for p in points)

        if self.minor_tick_interval is not None:
            interval = self.minor_tick_interval.get_absolute_tick(draw_space)
            for value in tick_values(start, end, interval):
                self._draw_minor_tick(handle, color, self._tick_position(handle, points[0], value, kind), kind)

        if self.major_tick_interval is not None:
            interval = self.major_tick_interval.get_absolute_tick(draw_space)
            limit = MAX_TICKS if self.length is None else min(self.length, MAX_TICKS)
            for value in tick_values(start, end, interval, limit):
                pos = self._tick_position(handle, points[0], value, kind)
                if self.lines:
                    self._draw_grid_line(handle, color, pos, kind)
                self._draw_major_tick(handle, color, pos, kind)

        if self.label:
            self._draw_label(handle, color, points[1], kind)

    # -- helpers ----------------------------------------------------------
    @staticmethod
    def _along(handle: CanvasHandle, pos: Position, kind: AxisKind) -> float:
        logical = handle.convert_to_logical_space(pos)
        return logical.x if kind is AxisKind.X else logical.y

    @staticmethod
    def _tick_position(handle: CanvasHandle, line_start: Position, value: float, kind: AxisKind) -> Position:
        base = handle.convert_to_logical_space(line_start)
        if kind is AxisKind.X:
            return Position.logical(value, base.y)
        return Position.logical(base.x, value)

    @staticmethod
    def _stroke_points(center: Position, length: float, kind: AxisKind) -> Tuple[Position, Position]:
        half = length / 2.0
        if kind is AxisKind.X:
            return Position.overlay(center.x, center.y - half), Position.overlay(center.x, center.y + half)
        return Position.overlay(center.x - half, center.y), Position.overlay(center.x + half, center.y)

    def _draw_minor_tick(self, handle: CanvasHandle, color: Color, pos: Position, kind: AxisKind) -> None:
        overlay = handle.convert_to_overlay_space(pos)
        handle.line_segment(
            self._stroke_points(overlay, MINOR_TICK_STROKE_LENGTH, kind),
            Stroke(THIN_LINE_WIDTH, color),
        )

    def _draw_major_tick(self, handle: CanvasHandle, color: Color, pos: Position, kind: AxisKind) -> None:
        overlay = handle.convert_to_overlay_space(pos)
        logical = handle.convert_to_logical_space(pos)
        handle.line_segment(
            self._stroke_points(overlay, MAJOR_TICK_STROKE_LENGTH, kind),
            Stroke(THICK_LINE_WIDTH, color),
        )

        offset = MAJOR_TICK_STROKE_LENGTH / 2.0 + LABEL_GAP
        if kind is AxisKind.X:
            text = format_number(logical.x)
            size = handle.text_size(text, TICK_FONT)
            text_pos = Position.overlay(overlay.x, overlay.y - size.y - offset)
            handle.text(text_pos, Anchor.CENTER_BOTTOM, text, TICK_FONT, color)
        else:
            text = format_number(logical.y)
            size = handle.text_size(text, TICK_FONT)
            text_pos = Position.overlay(overlay.x - size.x - offset, overlay.y)
            handle.text(text_pos, Anchor.LEFT_CENTER, text, TICK_FONT, color)

    def _draw_grid_line(self, handle: CanvasHandle, color: Color, pos: Position, kind: AxisKind) -> None:
        overlay = handle.convert_to_overlay_space(pos)
        box = handle.bounding_box()
        if kind is AxisKind.X:
            points = (Position.overlay(overlay.x, box.bottom), Position.overlay(overlay.x, box.top))
        else:
            points = (Position.overlay(box.left, overlay.y), Position.overlay(box.right, overlay.y))
        handle.line_segment(points, Stroke(THIN_LINE_WIDTH, color))

    def _draw_label(self, handle: CanvasHandle, color: Color, far_end: Position, kind: AxisKind) -> None:
        end = handle.convert_to_overlay_space(far_end)
        offset = MAJOR_TICK_STROKE_LENGTH + LABEL_GAP
        if kind is AxisKind.X:
            pos = Position.overlay(end.x - offset, end.y + offset)
            handle.text(pos, Anchor.RIGHT_BOTTOM, self.label, TICK_FONT, color)
        else:
            pos = Position.overlay(end.x + offset, end.y - offset)
            handle.text(pos, Anchor.LEFT_TOP, self.label, TICK_FONT, color)


@dataclass(frozen=True)
class CoordinateSystem:
    """Overlay drawable rendering an x and/or y axis with ticks and labels."""

    x_axis: Optional[Axis] = field(default_factory=Axis)
    y_axis: Optional[Axis] = field(default_factory=Axis)

    @classmethod
    def x_only(cls) -> "CoordinateSystem":
        return cls(x_axis=Axis(), y_axis=None)

    def with_major_tick_interval(self, tick: Tick) -> "CoordinateSystem":
        return self.with_major_tick_interval_x(tick).with_major_tick_interval_y(tick)

    def with_major_tick_interval_x(self, tick: Tick) -> "CoordinateSystem":
        if self.x_axis is None:
            return self
        return replace(self, x_axis=replace(self.x_axis, major_tick_interval=tick))

    def with_major_tick_interval_y(self, tick: Tick) -> "CoordinateSystem":
        if self.y_axis is None:
            return self
        return replace(self, y_axis=replace(self.y_axis, major_tick_interval=tick))

    def with_x_axis_placement(self, placement: Placement) -> "CoordinateSystem":
        if self.x_axis is None:
            return self
        return replace(self, x_axis=replace(self.x_axis, placement=placement))

    def with_y_axis_placement(self, placement: Placement) -> "CoordinateSystem":
        if self.y_axis is None:
            return self
        return replace(self, y_axis=replace(self.y_axis, placement=placement))

    def axes(self) -> List[Tuple[Axis, AxisKind]]:
        result = []
        if self.x_axis is not None:
            result.append((self.x_axis, AxisKind.X))
        if self.y_axis is not None:
            result.append((self.y_axis, AxisKind.Y))
        return result

    # -- drawable ---------------------------------------------------------
    def draw(self, handle: CanvasHandle, context: Any) -> None:
        color = WHITE if handle.dark_mode() else BLACK
        for axis, kind in self.axes():
            axis.draw(handle, color, kind)

    def get_bounds(self, context: Any) -> Optional[Rect]:
        # overlay content has no extent of its own
        return None

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        return None
