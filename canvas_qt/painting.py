from __future__ import annotations

from typing import Iterable

from PyQt6 import QtCore, QtGui

from canvas_core.draw_ops import (
    CircleFilled,
    Color,
    DrawOp,
    FontSpec,
    LineSegment,
    RectFilled,
    RectStroke,
    Text,
)
from canvas_core.math2d import Rect, Vec2


def qcolor(color: Color) -> QtGui.QColor:
    r, g, b, a = color
    return QtGui.QColor(r, g, b, a)


def qfont(spec: FontSpec) -> QtGui.QFont:
    font = QtGui.QFont("Monospace" if spec.monospace else "Sans Serif")
    if spec.monospace:
        font.setStyleHint(QtGui.QFont.StyleHint.Monospace)
    font.setPixelSize(max(1, int(round(spec.size))))
    return font


def text_size(text: str, spec: FontSpec) -> Vec2:
    metrics = QtGui.QFontMetricsF(qfont(spec))
    return Vec2(metrics.horizontalAdvance(text), metrics.height())


def _qrect(rect: Rect) -> QtCore.QRectF:
    return QtCore.QRectF(rect.min.x, rect.min.y, rect.width, rect.height)


def paint_ops(painter: QtGui.QPainter, ops: Iterable[DrawOp]) -> None:
    """Render a frame's draw instructions; all coordinates are device pixels."""
    painter.save()
    for op in ops:
        if isinstance(op, LineSegment):
            pen = QtGui.QPen(qcolor(op.stroke.color))
            pen.setWidthF(op.stroke.width)
            painter.setPen(pen)
            painter.drawLine(QtCore.QPointF(op.start.x, op.start.y), QtCore.QPointF(op.end.x, op.end.y))
        elif isinstance(op, CircleFilled):
            painter.setPen(QtCore.Qt.PenStyle.NoPen)
            painter.setBrush(qcolor(op.color))
            painter.drawEllipse(QtCore.QPointF(op.center.x, op.center.y), op.radius, op.radius)
        elif isinstance(op, Text):
            size = text_size(op.text, op.font)
            origin = op.anchor.text_origin(op.pos, size)
            painter.setFont(qfont(op.font))
            painter.setPen(qcolor(op.color))
            painter.drawText(
                QtCore.QRectF(origin.x, origin.y, size.x, size.y),
                QtCore.Qt.AlignmentFlag.AlignLeft | QtCore.Qt.AlignmentFlag.AlignVCenter,
                op.text,
            )
        elif isinstance(op, RectFilled):
            painter.setPen(QtCore.Qt.PenStyle.NoPen)
            painter.setBrush(qcolor(op.color))
            painter.drawRoundedRect(_qrect(op.rect), op.rounding, op.rounding)
        elif isinstance(op, RectStroke):
            pen = QtGui.QPen(qcolor(op.stroke.color))
            pen.setWidthF(op.stroke.width)
            painter.setPen(pen)
            painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            painter.drawRoundedRect(_qrect(op.rect), op.rounding, op.rounding)
    painter.restore()
