from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .math2d import Rect, Vec2
from .position import MIN_PADDING, Position, SpaceConverter, calculate_padding_and_scaling_factor

logger = logging.getLogger(__name__)

ZOOM_STEP = 0.9
SCROLL_NOTCH = 50.0
SCROLL_DEAD_ZONE = 1.0


class InteractionMode(str, Enum):
    NORMAL = "normal"
    DRAGGING = "dragging"


@dataclass
class FrameInput:
    """Raw input gathered by the host for one frame; points are in device space."""

    hover_pos: Optional[Vec2] = None
    scroll_delta_y: float = 0.0
    drag_started: bool = False
    drag_delta: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    drag_released: bool = False
    reset_requested: bool = False
    clicked: bool = False


class ViewportController:
    """Owns the visible cutout and the normal/dragging interaction mode.

    Zooming keeps the logical point under the cursor fixed on screen; dragging
    translates the cutout by the pointer delta at the current scale.
    """

    def __init__(
        self,
        cutout: Rect,
        *,
        zoom_step: float = ZOOM_STEP,
        scroll_notch: float = SCROLL_NOTCH,
        scroll_dead_zone: float = SCROLL_DEAD_ZONE,
        margin: float = MIN_PADDING,
    ) -> None:
        self.cutout = cutout
        self.mode = InteractionMode.NORMAL
        self.zoom_step = zoom_step
        self.scroll_notch = scroll_notch
        self.scroll_dead_zone = scroll_dead_zone
        self.margin = margin

    # -- state ------------------------------------------------------------
    def _converter(self, device_rect: Rect, aspect_ratio: float) -> SpaceConverter:
        return SpaceConverter(device_rect, self.cutout, aspect_ratio, self.margin)

    def _commit(self, cutout: Rect, reason: str) -> bool:
        if not cutout.is_finite() or cutout.width <= 0.0 or cutout.height <= 0.0:
            logger.debug("discarding degenerate cutout after %s: %s", reason, cutout)
            return False
        self.cutout = cutout
        return True

    def reset(self, default_cutout: Rect) -> None:
        self.cutout = default_cutout

    # -- transitions ------------------------------------------------------
    def on_scroll(
        self,
        scroll_delta_y: float,
        hover_device_pos: Optional[Vec2],
        device_rect: Rect,
        aspect_ratio: float = 1.0,
    ) -> bool:
        if self.mode is not InteractionMode.NORMAL:
            return False
        if hover_device_pos is None or abs(scroll_delta_y) <= self.scroll_dead_zone:
            return False

        converter = self._converter(device_rect, aspect_ratio)
        fix_point = converter.to_logical(Position.device(hover_device_pos.x, hover_device_pos.y)).point

        try:
            zoom_factor = self.zoom_step ** (scroll_delta_y / self.scroll_notch)
        except OverflowError:
            zoom_factor = math.inf
        if not math.isfinite(zoom_factor) or zoom_factor <= 0.0:
            logger.debug("ignoring scroll with zoom factor %r", zoom_factor)
            return False

        origin = fix_point * (1.0 - zoom_factor) + zoom_factor * self.cutout.min
        new_cutout = Rect.from_min_size(origin, self.cutout.size * zoom_factor)
        return self._commit(new_cutout, "zoom")

    def on_drag_start(self, hover_device_pos: Optional[Vec2], device_rect: Rect) -> bool:
        if self.mode is not InteractionMode.NORMAL or hover_device_pos is None:
            return False
        if not device_rect.contains(hover_device_pos):
            return False
        self.mode = InteractionMode.DRAGGING
        return True

    def on_drag_release(self) -> bool:
        if self.mode is not InteractionMode.DRAGGING:
            return False
        self.mode = InteractionMode.NORMAL
        return True

    def on_drag_delta(self, drag_delta: Vec2, device_rect: Rect, aspect_ratio: float = 1.0) -> bool:
        if self.mode is not InteractionMode.DRAGGING:
            return False
        _padding, scaling = calculate_padding_and_scaling_factor(
            device_rect, self.cutout, aspect_ratio, self.margin
        )
        scaled = drag_delta.div(scaling)
        # device x grows rightward, the view moves against the pointer;
        # the y sense is already reversed by the device/overlay flip
        translation = Vec2(-scaled.x, scaled.y)
        return self._commit(self.cutout.translate(translation), "pan")

    def process(
        self,
        frame_input: FrameInput,
        device_rect: Rect,
        aspect_ratio: float,
        default_cutout: Callable[[], Rect],
    ) -> None:
        """Apply one frame of input according to the current mode."""
        if self.mode is InteractionMode.NORMAL:
            if frame_input.reset_requested:
                self.reset(default_cutout())
            self.on_scroll(frame_input.scroll_delta_y, frame_input.hover_pos, device_rect, aspect_ratio)
            if frame_input.drag_started:
                self.on_drag_start(frame_input.hover_pos, device_rect)
        elif frame_input.drag_released:
            self.on_drag_release()
        else:
            self.on_drag_delta(frame_input.drag_delta, device_rect, aspect_ratio)
