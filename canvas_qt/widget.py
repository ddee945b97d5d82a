from __future__ import annotations

import logging
from typing import Any, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from canvas_core.canvas import Canvas, CanvasState, FrameResult
from canvas_core.config import CanvasConfig
from canvas_core.draw_ops import FontSpec
from canvas_core.drawable import Drawable, EmptyDrawable
from canvas_core.math2d import Rect, Vec2
from canvas_core.viewport import FrameInput

from . import painting

logger = logging.getLogger(__name__)

# one wheel notch is 120 in Qt angle units and 50 scroll units in the engine
WHEEL_NOTCH_ANGLE = 120.0
CLICK_SLOP_PX = 3.0


class CanvasWidget(QtWidgets.QWidget):
    """QWidget hosting a canvas: feeds Qt input to the viewport and paints each frame."""

    def __init__(
        self,
        drawable: Optional[Drawable] = None,
        context: Any = None,
        config: Optional[CanvasConfig] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self.config = config or CanvasConfig()
        self.state = CanvasState.from_config(self.config)
        self.canvas = Canvas(self.state, drawable or EmptyDrawable(), context)
        self.canvas.reset_cutout()
        self._hover: Optional[Vec2] = None
        self._last_drag: Optional[Vec2] = None
        self._press_pos: Optional[Vec2] = None
        self._clicked = False
        self.setMouseTracking(True)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setMinimumHeight(320)
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding,
        )

    def set_drawable(self, drawable: Drawable, context: Any = None) -> None:
        self.canvas = Canvas(self.state, drawable, context)
        self.canvas.reset_cutout()
        self.update()

    def device_rect(self) -> Rect:
        return Rect.from_points(0.0, 0.0, max(1, self.width()), max(1, self.height()))

    # -- host services ----------------------------------------------------
    def theme_is_dark(self) -> bool:
        return self.palette().color(QtGui.QPalette.ColorRole.Window).lightness() < 128

    def text_size(self, text: str, font: FontSpec) -> Vec2:
        return painting.text_size(text, font)

    # -- input ------------------------------------------------------------
    def hover(self, pos: Optional[Vec2]) -> None:
        self._hover = pos
        self.update()

    def scroll(self, angle_delta_y: float, pos: Vec2) -> None:
        self._hover = pos
        units = angle_delta_y / WHEEL_NOTCH_ANGLE * self.config.scroll_notch
        self.state.controller.on_scroll(units, pos, self.device_rect(), self.state.aspect_ratio)
        self.update()

    def begin_drag(self, pos: Vec2) -> None:
        self._hover = pos
        self._press_pos = pos
        self._last_drag = pos
        self.state.controller.on_drag_start(pos, self.device_rect())
        self.update()

    def drag_to(self, pos: Vec2) -> None:
        self._hover = pos
        if self._last_drag is not None:
            delta = pos - self._last_drag
            self.state.controller.on_drag_delta(delta, self.device_rect(), self.state.aspect_ratio)
        self._last_drag = pos
        self.update()

    def end_drag(self, pos: Vec2) -> None:
        self._hover = pos
        if self._press_pos is not None and (pos - self._press_pos).length() <= CLICK_SLOP_PX:
            self._clicked = True
        self._press_pos = None
        self._last_drag = None
        self.state.controller.on_drag_release()
        self.update()

    def request_reset(self) -> None:
        self.canvas.reset_cutout()
        logger.debug("cutout reset to %s", self.state.current_cutout())
        self.update()

    # -- frame ------------------------------------------------------------
    def render_frame(self) -> FrameResult:
        frame_input = FrameInput(hover_pos=self._hover, clicked=self._clicked)
        self._clicked = False
        return self.canvas.frame(self.device_rect(), frame_input, host=self)

    # -- QWidget ----------------------------------------------------------
    def paintEvent(self, _: QtGui.QPaintEvent) -> None:  # type: ignore[override]
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), self.palette().color(QtGui.QPalette.ColorRole.Base))
        painting.paint_ops(painter, self.render_frame().ops)
        painter.end()

    @staticmethod
    def _event_pos(event: QtGui.QSinglePointEvent) -> Vec2:
        point = event.position()
        return Vec2(point.x(), point.y())

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.MouseButton.LeftButton:
            self.begin_drag(self._event_pos(event))
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        pos = self._event_pos(event)
        if event.buttons() & QtCore.Qt.MouseButton.LeftButton:
            self.drag_to(pos)
        else:
            self.hover(pos)
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:
        if event.button() == QtCore.Qt.MouseButton.LeftButton:
            self.end_drag(self._event_pos(event))
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QtGui.QWheelEvent) -> None:
        angle = event.angleDelta().y()
        if angle == 0:
            return
        self.scroll(float(angle), self._event_pos(event))
        event.accept()

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:
        if event.key() == QtCore.Qt.Key.Key_Space:
            self.request_reset()
            event.accept()
            return
        super().keyPressEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:
        self.hover(None)
        super().leaveEvent(event)
