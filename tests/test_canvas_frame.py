import math
from dataclasses import dataclass, field
from typing import Any, List, Optional

import pytest

from canvas_core.canvas import Canvas, CanvasState, FRAME_STROKE
from canvas_core.config import CanvasConfig
from canvas_core.draw_ops import DARK_BLUE, LIGHT_GRAY, Anchor, CircleFilled, RectFilled, RectStroke, Text
from canvas_core.drawable import InputResponse
from canvas_core.handle import CanvasHandle
from canvas_core.math2d import Rect, Vec2
from canvas_core.position import Position
from canvas_core.viewport import FrameInput, InteractionMode

BOUNDS = Rect.from_points(0.0, 0.0, 100.0, 100.0)


@dataclass
class Recorder:
    bounds: Optional[Rect] = BOUNDS
    responses: List[InputResponse] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    contexts: List[Any] = field(default_factory=list)

    def draw(self, handle: CanvasHandle, context: Any) -> None:
        self.events.append("draw")
        self.contexts.append(context)
        handle.circle_filled(Position.logical(50.0, 50.0), 3.0, (255, 0, 0, 255))

    def get_bounds(self, context: Any) -> Optional[Rect]:
        return self.bounds

    def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
        self.events.append("input")
        self.responses.append(response)


def _canvas(recorder: Recorder, **options: Any) -> Canvas:
    canvas = Canvas(CanvasState(**options), recorder, context={"name": "ctx"})
    canvas.reset_cutout()
    return canvas


def _close(a: Rect, b: Rect) -> bool:
    return all(
        math.isclose(x, y, abs_tol=1e-9)
        for x, y in zip((a.min.x, a.min.y, a.max.x, a.max.y), (b.min.x, b.min.y, b.max.x, b.max.y))
    )


def test_plain_frame_reports_geometry(device_rect) -> None:
    recorder = Recorder()
    result = _canvas(recorder).frame(device_rect)

    assert result.cutout == BOUNDS
    assert math.isclose(result.scaling.x, 4.6) and math.isclose(result.scaling.y, 4.6)
    assert math.isclose(result.padding.x, 270.0) and math.isclose(result.padding.y, 20.0)
    (circle,) = result.ops
    assert isinstance(circle, CircleFilled)
    # logical (50, 50) is the centre of the fitted square
    assert math.isclose(circle.center.x, 500.0)
    assert math.isclose(circle.center.y, 250.0)


def test_input_is_handled_before_drawing(device_rect) -> None:
    recorder = Recorder()
    _canvas(recorder).frame(device_rect, FrameInput(hover_pos=Vec2(10.0, 10.0), clicked=True))
    assert recorder.events == ["input", "draw"]
    assert recorder.contexts == [{"name": "ctx"}]
    (response,) = recorder.responses
    assert response.clicked
    assert response.cursor_pos == Position.device(10.0, 10.0)


def test_no_hover_means_no_cursor(device_rect) -> None:
    recorder = Recorder()
    _canvas(recorder).frame(device_rect, FrameInput())
    assert recorder.responses[0].cursor_pos is None
    assert not recorder.responses[0].clicked


def test_cursor_readout(device_rect) -> None:
    result = _canvas(Recorder()).frame(device_rect, FrameInput(hover_pos=Vec2(316.0, 434.0)))
    _circle, box, label = result.ops
    assert isinstance(box, RectFilled) and isinstance(label, Text)
    assert label.text == "Cursor: (10.00, 10.00)"
    assert label.anchor is Anchor.LEFT_TOP
    assert label.color == LIGHT_GRAY
    assert label.pos == Vec2(15.0, 15.0)
    assert box.color == DARK_BLUE
    # 22 characters at 20 px with the headless 0.6 width ratio, plus 5 px padding per side
    assert box.rect == Rect.from_points(10.0, 10.0, 284.0, 40.0)


def test_cursor_readout_can_be_disabled(device_rect) -> None:
    result = _canvas(Recorder(), show_cursor=False).frame(device_rect, FrameInput(hover_pos=Vec2(5.0, 5.0)))
    assert not [op for op in result.ops if isinstance(op, Text)]


def test_frame_outline_is_drawn_last(device_rect) -> None:
    result = _canvas(Recorder(), draw_frame=True).frame(device_rect, FrameInput(hover_pos=Vec2(5.0, 5.0)))
    outline = result.ops[-1]
    assert isinstance(outline, RectStroke)
    assert outline.rect == device_rect
    assert outline.stroke == FRAME_STROKE


def test_scroll_then_reset_through_frames(device_rect) -> None:
    canvas = _canvas(Recorder())
    zoomed = canvas.frame(device_rect, FrameInput(hover_pos=Vec2(316.0, 434.0), scroll_delta_y=50.0))
    assert _close(zoomed.cutout, Rect.from_points(1.0, 1.0, 91.0, 91.0))
    # the drawing of the same frame already uses the new cutout
    assert math.isclose(zoomed.scaling.x, 460.0 / 90.0)

    restored = canvas.frame(device_rect, FrameInput(reset_requested=True))
    assert restored.cutout == BOUNDS


def test_drag_through_frames(device_rect) -> None:
    canvas = _canvas(Recorder())
    canvas.frame(device_rect, FrameInput(hover_pos=Vec2(500.0, 250.0), drag_started=True))
    assert canvas.state.mode is InteractionMode.DRAGGING

    moved = canvas.frame(device_rect, FrameInput(hover_pos=Vec2(546.0, 273.0), drag_delta=Vec2(46.0, 23.0)))
    assert _close(moved.cutout, Rect.from_points(-10.0, 5.0, 90.0, 105.0))

    canvas.frame(device_rect, FrameInput(drag_released=True))
    assert canvas.state.mode is InteractionMode.NORMAL


def test_reset_uses_default_bounds_without_extent(device_rect) -> None:
    canvas = _canvas(Recorder(bounds=None))
    assert canvas.frame(device_rect).cutout == Rect.from_points(0.0, 0.0, 10.0, 10.0)


def test_aspect_ratio_validation() -> None:
    state = CanvasState()
    with pytest.raises(ValueError):
        state.set_aspect_ratio(float("nan"))
    state.set_aspect_ratio(-2.0)
    assert state.aspect_ratio == 1.0
    state.set_aspect_ratio(2.5)
    assert state.aspect_ratio == 2.5


def test_state_from_config() -> None:
    config = CanvasConfig(aspect_ratio=2.0, draw_frame=True, show_cursor=False, zoom_step=0.5)
    state = CanvasState.from_config(config, BOUNDS)
    assert state.aspect_ratio == 2.0
    assert state.draw_frame and not state.show_cursor
    assert state.controller.zoom_step == 0.5
    assert state.current_cutout() == BOUNDS


def test_margin_is_shared_with_controller(device_rect) -> None:
    state = CanvasState(BOUNDS)
    state.margin = 40.0
    assert state.controller.margin == 40.0
    scaling, padding = state.current_scaling_and_padding(device_rect)
    # height limited: (500 - 80) / 100
    assert math.isclose(scaling.y, 4.2)
    assert math.isclose(padding.y, 40.0)
    assert state.converter(device_rect).margin == 40.0


def test_drawable_sees_cursor_through_handle(device_rect) -> None:
    seen = []

    class CursorReader(Recorder):
        def handle_input(self, response: InputResponse, handle: CanvasHandle, context: Any) -> None:
            seen.append(handle.cursor_pos())

    canvas = Canvas(CanvasState(BOUNDS), CursorReader(), None)
    canvas.frame(device_rect, FrameInput(hover_pos=Vec2(7.0, 8.0)))
    assert seen == [Position.device(7.0, 8.0)]
