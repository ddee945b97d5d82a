from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .config import CanvasConfig
from .draw_ops import DARK_BLUE, DARK_RED, LIGHT_GRAY, Anchor, DrawOp, FontSpec, Stroke
from .drawable import DEFAULT_BOUNDS, Drawable, InputResponse, default_cutout
from .handle import CanvasHost, CanvasHandle, HeadlessHost
from .math2d import Rect, Vec2
from .position import MIN_PADDING, Position, SpaceConverter, calculate_padding_and_scaling_factor, sanitize_aspect_ratio
from .viewport import SCROLL_DEAD_ZONE, SCROLL_NOTCH, ZOOM_STEP, FrameInput, InteractionMode, ViewportController

CURSOR_FONT = FontSpec(size=20.0, monospace=True)
CURSOR_OFFSET = Vec2(10.0, 10.0)
CURSOR_BOX_PADDING = 5.0
FRAME_STROKE = Stroke(5.0, DARK_RED)


class CanvasState:
    """Persistent per-canvas state: the viewport controller plus display options."""

    def __init__(
        self,
        cutout: Rect = DEFAULT_BOUNDS,
        *,
        aspect_ratio: float = 1.0,
        margin: float = MIN_PADDING,
        draw_frame: bool = False,
        show_cursor: bool = True,
        zoom_step: float = ZOOM_STEP,
        scroll_notch: float = SCROLL_NOTCH,
        scroll_dead_zone: float = SCROLL_DEAD_ZONE,
    ) -> None:
        self.controller = ViewportController(
            cutout,
            zoom_step=zoom_step,
            scroll_notch=scroll_notch,
            scroll_dead_zone=scroll_dead_zone,
            margin=margin,
        )
        self.aspect_ratio = 1.0
        self.set_aspect_ratio(aspect_ratio)
        self.draw_frame = draw_frame
        self.show_cursor = show_cursor

    @classmethod
    def from_config(cls, config: CanvasConfig, cutout: Rect = DEFAULT_BOUNDS) -> "CanvasState":
        return cls(
            cutout,
            aspect_ratio=config.aspect_ratio,
            margin=config.margin,
            draw_frame=config.draw_frame,
            show_cursor=config.show_cursor,
            zoom_step=config.zoom_step,
            scroll_notch=config.scroll_notch,
            scroll_dead_zone=config.scroll_dead_zone,
        )

    def set_aspect_ratio(self, aspect_ratio: float) -> None:
        if not math.isfinite(aspect_ratio):
            raise ValueError("aspect ratio must be finite")
        self.aspect_ratio = sanitize_aspect_ratio(aspect_ratio)

    @property
    def margin(self) -> float:
        return self.controller.margin

    @margin.setter
    def margin(self, margin: float) -> None:
        self.controller.margin = margin

    @property
    def mode(self) -> InteractionMode:
        return self.controller.mode

    def current_cutout(self) -> Rect:
        return self.controller.cutout

    def current_scaling_and_padding(self, device_rect: Rect) -> tuple[Vec2, Vec2]:
        padding, scaling = calculate_padding_and_scaling_factor(
            device_rect, self.controller.cutout, self.aspect_ratio, self.margin
        )
        return scaling, padding

    def converter(self, device_rect: Rect) -> SpaceConverter:
        return SpaceConverter(device_rect, self.controller.cutout, self.aspect_ratio, self.margin)

    def reset_cutout(self, drawable: Drawable, context: Any = None) -> None:
        self.controller.reset(default_cutout(drawable, context))


@dataclass
class FrameResult:
    """Geometry produced by one frame, for the host to render."""

    ops: List[DrawOp] = field(default_factory=list)
    cutout: Rect = DEFAULT_BOUNDS
    scaling: Vec2 = Vec2(1.0, 1.0)
    padding: Vec2 = Vec2(0.0, 0.0)


class Canvas:
    """Runs one frame: input, then content, then overlays."""

    def __init__(self, state: CanvasState, drawable: Drawable, context: Any = None) -> None:
        self.state = state
        self.drawable = drawable
        self.context = context

    def reset_cutout(self) -> None:
        self.state.reset_cutout(self.drawable, self.context)

    def frame(
        self,
        device_rect: Rect,
        frame_input: Optional[FrameInput] = None,
        host: Optional[CanvasHost] = None,
    ) -> FrameResult:
        frame_input = frame_input or FrameInput()
        host = host or HeadlessHost()

        self.state.controller.process(
            frame_input,
            device_rect,
            self.state.aspect_ratio,
            lambda: default_cutout(self.drawable, self.context),
        )

        handle = CanvasHandle(self.state.converter(device_rect), host, hover_pos=frame_input.hover_pos)
        response = InputResponse(cursor_pos=handle.cursor_pos(), clicked=frame_input.clicked)
        self.drawable.handle_input(response, handle, self.context)
        self.drawable.draw(handle, self.context)

        if self.state.show_cursor and response.cursor_pos is not None:
            self._draw_cursor_readout(handle, response.cursor_pos, device_rect)
        if self.state.draw_frame:
            handle.rect_stroke(device_rect, 0.0, FRAME_STROKE)

        scaling, padding = self.state.current_scaling_and_padding(device_rect)
        return FrameResult(
            ops=handle.ops,
            cutout=self.state.current_cutout(),
            scaling=scaling,
            padding=padding,
        )

    def _draw_cursor_readout(self, handle: CanvasHandle, cursor: Position, device_rect: Rect) -> None:
        logical = handle.convert_to_logical_space(cursor)
        text = f"Cursor: ({logical.x:.2f}, {logical.y:.2f})"
        size = handle.text_size(text, CURSOR_FONT)
        origin = device_rect.min + CURSOR_OFFSET
        box_size = size + Vec2(2 * CURSOR_BOX_PADDING, 2 * CURSOR_BOX_PADDING)
        handle.rect_filled(Rect.from_min_size(origin, box_size), 2.0, DARK_BLUE)
        text_origin = origin + Vec2(CURSOR_BOX_PADDING, CURSOR_BOX_PADDING)
        handle.text(
            Position.device(text_origin.x, text_origin.y),
            Anchor.LEFT_TOP,
            text,
            CURSOR_FONT,
            LIGHT_GRAY,
        )
