from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from PyQt6 import QtWidgets

from canvas_core.axes import CoordinateSystem
from canvas_core.config import load_canvas_config
from canvas_core.draw_ops import Color
from canvas_core.drawable import DrawablePair, InputResponse
from canvas_core.handle import CanvasHandle
from canvas_core.math2d import Rect
from canvas_core.position import Position
from canvas_core.ticks import AutomaticTick
from diagnostics.logging_setup import configure_logging, get_logger, shutdown_logging

from .widget import CanvasWidget


@dataclass
class SamplePoints:
    """A sine wave sampled as dots; clicking logs the logical click position."""

    points: List[Tuple[float, float]] = field(
        default_factory=lambda: [(x / 10.0, 5.0 * math.sin(x / 10.0)) for x in range(0, 200)]
    )
    color: Color = (93, 194, 243, 255)
    radius: float = 2.5

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        for x, y in self.points:
            handle.circle_filled(Position.logical(x, y), self.radius, self.color)

    def get_bounds(self, context: Any) -> Optional[Rect]:
        if not self.points:
            return None
        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        return Rect.from_points(min(xs), min(ys), max(xs), max(ys))

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        if response.clicked and response.cursor_pos is not None:
            logical = handle.convert_to_logical_space(response.cursor_pos)
            get_logger().info("demo click at x=%.3f y=%.3f", logical.x, logical.y)


def main() -> int:
    configure_logging()
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    axes = CoordinateSystem().with_major_tick_interval(AutomaticTick(8))
    widget = CanvasWidget(DrawablePair(SamplePoints(), axes), config=load_canvas_config())
    widget.setWindowTitle("Canvas")
    widget.resize(900, 560)
    widget.show()
    try:
        return app.exec()
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())
