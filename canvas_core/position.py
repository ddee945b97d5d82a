from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from .math2d import Rect, Vec2, positive_extent

logger = logging.getLogger(__name__)

MIN_PADDING = 20.0


class Space(str, Enum):
    DEVICE = "device"
    OVERLAY = "overlay"
    LOGICAL = "logical"


@dataclass(frozen=True)
class Position:
    """A point tagged with the coordinate space it lives in."""

    space: Space
    point: Vec2

    @classmethod
    def device(cls, x: float, y: float) -> "Position":
        return cls(Space.DEVICE, Vec2(float(x), float(y)))

    @classmethod
    def overlay(cls, x: float, y: float) -> "Position":
        return cls(Space.OVERLAY, Vec2(float(x), float(y)))

    @classmethod
    def logical(cls, x: float, y: float) -> "Position":
        return cls(Space.LOGICAL, Vec2(float(x), float(y)))

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y


def sanitize_aspect_ratio(aspect_ratio: float) -> float:
    """Return aspect_ratio, or 1.0 when it is not a positive finite number."""
    try:
        value = float(aspect_ratio)
    except (TypeError, ValueError):
        value = float("nan")
    if not math.isfinite(value) or value <= 0.0:
        logger.warning("invalid aspect ratio %r; using 1.0", aspect_ratio)
        return 1.0
    return value


def calculate_padding_and_scaling_factor(
    device_rect: Rect,
    cutout: Rect,
    aspect_ratio: float = 1.0,
    margin: float = MIN_PADDING,
) -> tuple[Vec2, Vec2]:
    """Fit the cutout into device_rect; returns (padding, scaling_factor).

    The limiting axis gets the margin as padding, the other axis is centered.
    Scaling is per axis so that a non-unit aspect ratio stretches one logical
    axis against the other.
    """
    aspect_ratio = sanitize_aspect_ratio(aspect_ratio)
    usable = device_rect.shrink(margin)
    usable_w = positive_extent(usable.width)
    usable_h = positive_extent(usable.height)
    device_w = positive_extent(device_rect.width)
    device_h = positive_extent(device_rect.height)
    cutout_w = positive_extent(cutout.width)
    cutout_h = positive_extent(cutout.height)

    if aspect_ratio > 1.0:
        x_stretch, y_stretch = aspect_ratio, 1.0
    else:
        x_stretch, y_stretch = 1.0, 1.0 / aspect_ratio

    ratio_content = (cutout_w * x_stretch) / (cutout_h * y_stretch)
    ratio_device = usable_w / usable_h

    if ratio_content < ratio_device:
        # height limited
        scale = usable_h / (cutout_h * y_stretch)
        x_padding = (device_w - cutout_w * scale * x_stretch) / 2.0
        y_padding = margin
    else:
        # width limited
        scale = usable_w / (cutout_w * x_stretch)
        x_padding = margin
        y_padding = (device_h - cutout_h * scale * y_stretch) / 2.0

    padding = Vec2(x_padding, y_padding)
    scaling_factor = Vec2(scale * x_stretch, scale * y_stretch)
    return padding, scaling_factor


def _flip(point: Vec2, device_rect: Rect) -> Vec2:
    # device <-> overlay, self-inverse
    return Vec2(point.x, device_rect.max.y - point.y + device_rect.min.y)


@dataclass(frozen=True)
class SpaceConverter:
    """Converts positions between device, overlay and logical space.

    Padding and scaling are derived from the inputs on every call.
    """

    device_rect: Rect
    cutout: Rect
    aspect_ratio: float = 1.0
    margin: float = MIN_PADDING

    def padding_and_scaling(self) -> tuple[Vec2, Vec2]:
        return calculate_padding_and_scaling_factor(
            self.device_rect, self.cutout, self.aspect_ratio, self.margin
        )

    def to_device(self, pos: Position) -> Position:
        if pos.space is Space.DEVICE:
            return pos
        overlay = self.to_overlay(pos)
        return Position(Space.DEVICE, _flip(overlay.point, self.device_rect))

    def to_overlay(self, pos: Position) -> Position:
        if pos.space is Space.OVERLAY:
            return pos
        if pos.space is Space.DEVICE:
            return Position(Space.OVERLAY, _flip(pos.point, self.device_rect))
        padding, scaling = self.padding_and_scaling()
        moved = pos.point - self.cutout.min
        point = moved.mul(scaling) + padding + self.device_rect.min
        return Position(Space.OVERLAY, point)

    def to_logical(self, pos: Position) -> Position:
        if pos.space is Space.LOGICAL:
            return pos
        overlay = self.to_overlay(pos)
        padding, scaling = self.padding_and_scaling()
        moved = overlay.point - padding - self.device_rect.min
        point = moved.div(scaling) + self.cutout.min
        return Position(Space.LOGICAL, point)

    def convert(self, pos: Position, space: Space) -> Position:
        if space is Space.DEVICE:
            return self.to_device(pos)
        if space is Space.OVERLAY:
            return self.to_overlay(pos)
        return self.to_logical(pos)

    def logical_region(self) -> Rect:
        """The device rect expressed in logical space."""
        lo = self.to_logical(Position(Space.OVERLAY, self.device_rect.min)).point
        hi = self.to_logical(Position(Space.OVERLAY, self.device_rect.max)).point
        return Rect(lo, hi)
