from __future__ import annotations

import math
from dataclasses import dataclass

EPSILON = 1e-6


def positive_extent(extent: float) -> float:
    """extent itself when it is a usable divisor, EPSILON when it is zero, negative or not finite."""
    if math.isfinite(extent) and extent > 0.0:
        return extent
    return EPSILON


@dataclass(frozen=True)
class Vec2:
    """Small immutable 2D vector with basic math helpers."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def mul(self, other: "Vec2") -> "Vec2":
        """Componentwise product."""
        return Vec2(self.x * other.x, self.y * other.y)

    def div(self, other: "Vec2") -> "Vec2":
        """Componentwise quotient."""
        return Vec2(self.x / other.x, self.y / other.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; corners are normalized so min <= max componentwise."""

    min: Vec2
    max: Vec2

    def __post_init__(self) -> None:
        lo = Vec2(min(self.min.x, self.max.x), min(self.min.y, self.max.y))
        hi = Vec2(max(self.min.x, self.max.x), max(self.min.y, self.max.y))
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @classmethod
    def from_points(cls, x0: float, y0: float, x1: float, y1: float) -> "Rect":
        return cls(Vec2(float(x0), float(y0)), Vec2(float(x1), float(y1)))

    @classmethod
    def from_min_size(cls, origin: Vec2, size: Vec2) -> "Rect":
        return cls(origin, origin + size)

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    @property
    def size(self) -> Vec2:
        return Vec2(self.width, self.height)

    @property
    def center(self) -> Vec2:
        return Vec2((self.min.x + self.max.x) / 2.0, (self.min.y + self.max.y) / 2.0)

    # Edge names follow the y-up convention of overlay and logical space.
    @property
    def left(self) -> float:
        return self.min.x

    @property
    def right(self) -> float:
        return self.max.x

    @property
    def bottom(self) -> float:
        return self.min.y

    @property
    def top(self) -> float:
        return self.max.y

    def aspect_ratio(self) -> float:
        return positive_extent(self.width) / positive_extent(self.height)

    def shrink(self, amount: float) -> "Rect":
        """Inset every side by amount; an over-shrunk axis collapses onto its center."""
        center = self.center
        half_w = max(0.0, self.width / 2.0 - amount)
        half_h = max(0.0, self.height / 2.0 - amount)
        return Rect(
            Vec2(center.x - half_w, center.y - half_h),
            Vec2(center.x + half_w, center.y + half_h),
        )

    def translate(self, delta: Vec2) -> "Rect":
        return Rect(self.min + delta, self.max + delta)

    def union(self, other: "Rect") -> "Rect":
        return Rect(
            Vec2(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Vec2(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def contains(self, point: Vec2) -> bool:
        return self.min.x <= point.x <= self.max.x and self.min.y <= point.y <= self.max.y

    def is_finite(self) -> bool:
        return self.min.is_finite() and self.max.is_finite()
