import math

from canvas_core.math2d import Rect, Vec2
from canvas_core.position import Position, SpaceConverter, calculate_padding_and_scaling_factor
from canvas_core.viewport import FrameInput, InteractionMode, ViewportController

HOVER_AT_TEN = Vec2(316.0, 434.0)


def _rect_close(a: Rect, b: Rect, tol: float = 1e-9) -> bool:
    return all(
        math.isclose(x, y, rel_tol=tol, abs_tol=tol)
        for x, y in zip((a.min.x, a.min.y, a.max.x, a.max.y), (b.min.x, b.min.y, b.max.x, b.max.y))
    )


def test_initial_mode_is_normal(square_cutout) -> None:
    controller = ViewportController(square_cutout)
    assert controller.mode is InteractionMode.NORMAL
    assert controller.cutout == square_cutout


def test_scroll_zoom_scenario(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    assert controller.on_scroll(50.0, HOVER_AT_TEN, device_rect)
    assert _rect_close(controller.cutout, Rect.from_points(1, 1, 91, 91))


def test_scroll_keeps_point_under_cursor(device_rect) -> None:
    controller = ViewportController(Rect.from_points(-3, 2, 17, 9))
    hover = Vec2(612.0, 101.0)
    before = SpaceConverter(device_rect, controller.cutout, 1.7).to_logical(Position.device(hover.x, hover.y))
    for delta in (50.0, -120.0, 7.5):
        controller.on_scroll(delta, hover, device_rect, 1.7)
        after = SpaceConverter(device_rect, controller.cutout, 1.7).to_logical(Position.device(hover.x, hover.y))
        assert math.isclose(after.x, before.x, abs_tol=1e-9)
        assert math.isclose(after.y, before.y, abs_tol=1e-9)


def test_scroll_out_grows_cutout(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    controller.on_scroll(-50.0, HOVER_AT_TEN, device_rect)
    assert math.isclose(controller.cutout.width, 100.0 / 0.9)


def test_scroll_ignored_without_hover_or_in_dead_zone(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    assert not controller.on_scroll(50.0, None, device_rect)
    assert not controller.on_scroll(1.0, HOVER_AT_TEN, device_rect)
    assert not controller.on_scroll(-0.5, HOVER_AT_TEN, device_rect)
    assert controller.cutout == square_cutout


def test_scroll_with_degenerate_factor_keeps_cutout(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    assert not controller.on_scroll(1e9, HOVER_AT_TEN, device_rect)
    assert not controller.on_scroll(-1e9, HOVER_AT_TEN, device_rect)
    assert controller.cutout == square_cutout


def test_drag_lifecycle(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    assert not controller.on_drag_delta(Vec2(10, 10), device_rect)
    assert not controller.on_drag_start(Vec2(2000.0, 10.0), device_rect)
    assert controller.mode is InteractionMode.NORMAL

    assert controller.on_drag_start(Vec2(500.0, 250.0), device_rect)
    assert controller.mode is InteractionMode.DRAGGING
    # zoom is disabled while dragging
    assert not controller.on_scroll(50.0, HOVER_AT_TEN, device_rect)

    assert controller.on_drag_delta(Vec2(46.0, 23.0), device_rect)
    assert _rect_close(controller.cutout, Rect.from_points(-10, 5, 90, 105))

    assert controller.on_drag_release()
    assert controller.mode is InteractionMode.NORMAL
    assert not controller.on_drag_release()


def test_pan_preserves_scale(device_rect) -> None:
    controller = ViewportController(Rect.from_points(-4, -1, 6, 30))
    controller.on_drag_start(Vec2(10.0, 10.0), device_rect)
    _, before = calculate_padding_and_scaling_factor(device_rect, controller.cutout, 0.3)
    for delta in (Vec2(5, -3), Vec2(-120, 44), Vec2(0.25, 0.5)):
        controller.on_drag_delta(delta, device_rect, 0.3)
    _, after = calculate_padding_and_scaling_factor(device_rect, controller.cutout, 0.3)
    assert math.isclose(after.x, before.x, rel_tol=1e-9)
    assert math.isclose(after.y, before.y, rel_tol=1e-9)


def test_reset_is_idempotent(square_cutout) -> None:
    controller = ViewportController(square_cutout)
    default = Rect.from_points(-1, -1, 1, 1)
    controller.reset(default)
    once = controller.cutout
    controller.reset(default)
    assert controller.cutout == once == default


def test_process_follows_mode(device_rect, square_cutout) -> None:
    controller = ViewportController(square_cutout)
    default = Rect.from_points(0, 0, 10, 10)

    controller.process(FrameInput(hover_pos=Vec2(500, 250), drag_started=True), device_rect, 1.0, lambda: default)
    assert controller.mode is InteractionMode.DRAGGING

    # reset requests are only honoured in normal mode
    controller.process(
        FrameInput(drag_delta=Vec2(46.0, 0.0), reset_requested=True), device_rect, 1.0, lambda: default
    )
    assert _rect_close(controller.cutout, Rect.from_points(-10, 0, 90, 100))

    controller.process(FrameInput(drag_released=True, drag_delta=Vec2(999, 999)), device_rect, 1.0, lambda: default)
    assert controller.mode is InteractionMode.NORMAL
    assert _rect_close(controller.cutout, Rect.from_points(-10, 0, 90, 100))

    controller.process(FrameInput(reset_requested=True), device_rect, 1.0, lambda: default)
    assert controller.cutout == default


def test_scroll_zooms_into_tiny_cutout(device_rect) -> None:
    controller = ViewportController(Rect.from_points(0, 0, 1.5e-6, 1.5e-6))
    assert controller.on_scroll(250.0, Vec2(500.0, 250.0), device_rect)
    assert math.isclose(controller.cutout.width, 1.5e-6 * 0.9**5, rel_tol=1e-9)
    assert math.isclose(controller.cutout.height, 1.5e-6 * 0.9**5, rel_tol=1e-9)


def test_pan_of_tiny_cutout_is_kept(device_rect) -> None:
    controller = ViewportController(Rect.from_points(0, 0, 1e-8, 1e-8))
    controller.on_drag_start(Vec2(500.0, 250.0), device_rect)
    assert controller.on_drag_delta(Vec2(46.0, 0.0), device_rect)
    # 46 px at 4.6e10 px per unit
    assert math.isclose(controller.cutout.min.x, -1e-9, rel_tol=1e-6)
