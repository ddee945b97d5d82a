"""PyQt6 host for the canvas engine."""

from .painting import paint_ops
from .widget import CanvasWidget

__all__ = ["CanvasWidget", "paint_ops"]
