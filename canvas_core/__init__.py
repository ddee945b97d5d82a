"""Viewport and coordinate-transform engine for pan/zoom canvases with labeled axes."""

from .axes import Alignment, Axis, AxisKind, CoordinateSystem, LogicalPlacement, OverlayPlacement
from .canvas import Canvas, CanvasState, FrameResult
from .config import CanvasConfig, load_canvas_config, save_canvas_config
from .drawable import (
    BorrowError,
    Drawable,
    DrawableGroup,
    DrawablePair,
    EmptyDrawable,
    InputResponse,
    SharedDrawable,
)
from .handle import CanvasHandle, CanvasHost, HeadlessHost
from .math2d import Rect, Vec2
from .position import Position, Space, SpaceConverter, calculate_padding_and_scaling_factor
from .ticks import AbsoluteTick, AutomaticTick, Tick, format_number
from .viewport import FrameInput, InteractionMode, ViewportController

__all__ = [
    "AbsoluteTick",
    "Alignment",
    "AutomaticTick",
    "Axis",
    "AxisKind",
    "BorrowError",
    "Canvas",
    "CanvasConfig",
    "CanvasHandle",
    "CanvasHost",
    "CanvasState",
    "CoordinateSystem",
    "Drawable",
    "DrawableGroup",
    "DrawablePair",
    "EmptyDrawable",
    "FrameInput",
    "FrameResult",
    "HeadlessHost",
    "InputResponse",
    "InteractionMode",
    "LogicalPlacement",
    "OverlayPlacement",
    "Position",
    "Rect",
    "SharedDrawable",
    "Space",
    "SpaceConverter",
    "Tick",
    "Vec2",
    "ViewportController",
    "calculate_padding_and_scaling_factor",
    "format_number",
    "load_canvas_config",
    "save_canvas_config",
]
