from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, Protocol, TypeVar

from .handle import CanvasHandle
from .math2d import Rect
from .position import Position

DEFAULT_BOUNDS = Rect.from_points(0.0, 0.0, 10.0, 10.0)


@dataclass(frozen=True)
class InputResponse:
    """What a drawable sees of the frame's input."""

    cursor_pos: Optional[Position] = None
    clicked: bool = False


class Drawable(Protocol):
    """Content that can be placed on a canvas.

    `context` is a read-only value passed through from the host unchanged.
    `get_bounds` returns None for content without an intrinsic extent.
    """

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        ...

    def get_bounds(self, context: Any) -> Optional[Rect]:
        ...

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        ...


def union_bounds(bounds: List[Optional[Rect]]) -> Optional[Rect]:
    result: Optional[Rect] = None
    for rect in bounds:
        if rect is None:
            continue
        result = rect if result is None else result.union(rect)
    return result


def default_cutout(drawable: Drawable, context: Any = None) -> Rect:
    """Intrinsic bounds of drawable, or DEFAULT_BOUNDS when it has none."""
    bounds = drawable.get_bounds(context)
    return bounds if bounds is not None else DEFAULT_BOUNDS


class EmptyDrawable:
    def draw(self, handle: CanvasHandle, context: Any) -> None:
        return None

    def get_bounds(self, context: Any) -> Optional[Rect]:
        return None

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        return None


@dataclass
class DrawableGroup:
    """Ordered collection; items draw and receive input in order."""

    items: List[Drawable] = field(default_factory=list)

    def add(self, item: Drawable) -> "DrawableGroup":
        self.items.append(item)
        return self

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        for item in self.items:
            item.draw(handle, context)

    def get_bounds(self, context: Any) -> Optional[Rect]:
        return union_bounds([item.get_bounds(context) for item in self.items])

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        for item in self.items:
            item.handle_input(response, handle, context)


@dataclass
class DrawablePair:
    """Two drawables composed; `first` is drawn beneath `second`."""

    first: Drawable
    second: Drawable

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        self.first.draw(handle, context)
        self.second.draw(handle, context)

    def get_bounds(self, context: Any) -> Optional[Rect]:
        return union_bounds([self.first.get_bounds(context), self.second.get_bounds(context)])

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        self.first.handle_input(response, handle, context)
        self.second.handle_input(response, handle, context)


class BorrowError(RuntimeError):
    pass


T = TypeVar("T", bound=Drawable)


class SharedDrawable(Generic[T]):
    """Shared owner of a drawable; several canvases may hold the same instance.

    Every use borrows the inner drawable exclusively; a nested borrow (for
    example the drawable reaching itself through another canvas while drawing)
    raises BorrowError.
    """

    def __init__(self, inner: T) -> None:
        self._inner = inner
        self._borrowed = False

    @property
    def borrowed(self) -> bool:
        return self._borrowed

    @contextmanager
    def borrow(self) -> Iterator[T]:
        if self._borrowed:
            raise BorrowError("shared drawable is already borrowed")
        self._borrowed = True
        try:
            yield self._inner
        finally:
            self._borrowed = False

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        with self.borrow() as inner:
            inner.draw(handle, context)

    def get_bounds(self, context: Any) -> Optional[Rect]:
        with self.borrow() as inner:
            return inner.get_bounds(context)

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        with self.borrow() as inner:
            inner.handle_input(response, handle, context)
