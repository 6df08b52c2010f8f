"""
Tests for the crop geometry engine.

Covers:
- Fresh-drag rectangles under every aspect ratio (size floor, bounds, ratio)
- Handle resizing keeps the fixed point in place
- Whole-rect moves stay inside the canvas
- Handle hit testing and aspect ratio reconciliation
"""
import itertools
import pytest

from models.transform import Rect, Vec2
from services import crop_geometry
from services.crop_geometry import (
    start_drag, update_free_drag, resize_by_handle, move_rect,
    handle_at_point, handle_anchor, fixed_point, reconcile_aspect_ratio,
    normalize_aspect_ratio, aspect_ratio_value
)
from utils.errors import ValidationError

BOUNDS = (800, 600)
RATIOS = ['free', '1:1', '4:3', '16:9']
EPSILON = 1e-6


def assert_inside(rect, bounds=BOUNDS):
    assert rect.x >= -EPSILON
    assert rect.y >= -EPSILON
    assert rect.right <= bounds[0] + EPSILON
    assert rect.bottom <= bounds[1] + EPSILON


def assert_ratio(rect, ratio_name):
    ratio = aspect_ratio_value(ratio_name)
    if ratio is not None:
        assert abs(rect.w / rect.h - ratio) < EPSILON


# ══════════════════════════════════════════════════════════════════════════
# Aspect ratio names
# ══════════════════════════════════════════════════════════════════════════

class TestAspectRatioNames:

    def test_known_names(self):
        assert normalize_aspect_ratio('4:3') == '4:3'
        assert normalize_aspect_ratio('free') == 'free'

    def test_square_alias(self):
        assert normalize_aspect_ratio('square') == '1:1'

    def test_unknown_name_rejected(self):
        with pytest.raises(ValidationError):
            normalize_aspect_ratio('3:2')

    def test_ratio_values(self):
        assert aspect_ratio_value('free') is None
        assert aspect_ratio_value('16:9') == pytest.approx(16 / 9)


# ══════════════════════════════════════════════════════════════════════════
# Fresh drag
# ══════════════════════════════════════════════════════════════════════════

class TestFreeDrag:

    def test_start_drag_is_zero_sized(self):
        assert start_drag(Vec2(12, 34)) == Rect(12, 34, 0, 0)

    def test_free_drag_down_right(self):
        rect = update_free_drag(Vec2(100, 100), Vec2(300, 250), 'free', BOUNDS)
        assert rect == Rect(100, 100, 200, 150)

    def test_free_drag_up_left_is_normalized(self):
        rect = update_free_drag(Vec2(300, 250), Vec2(100, 100), 'free', BOUNDS)
        assert rect == Rect(100, 100, 200, 150)

    def test_four_by_three_scenario(self):
        rect = update_free_drag(Vec2(100, 100), Vec2(300, 250), '4:3', BOUNDS)
        assert rect.w / rect.h == pytest.approx(4 / 3)
        assert rect.w == pytest.approx(200)
        assert rect.h == pytest.approx(150)
        assert_inside(rect)

    def test_dominant_axis_wins(self):
        # Height dominates: 50 wide, 300 tall under 1:1 becomes 300x300
        rect = update_free_drag(Vec2(100, 100), Vec2(150, 400), '1:1', BOUNDS)
        assert rect.w == pytest.approx(300)
        assert rect.h == pytest.approx(300)

    def test_zero_drag_floors_to_one_pixel(self):
        rect = update_free_drag(Vec2(50, 50), Vec2(50, 50), 'free', BOUNDS)
        assert rect.w >= 1 and rect.h >= 1

    def test_drag_past_canvas_is_clamped(self):
        rect = update_free_drag(Vec2(700, 500), Vec2(1200, 900), 'free', BOUNDS)
        assert_inside(rect)

    @pytest.mark.parametrize("ratio", RATIOS)
    def test_properties_hold_for_many_drags(self, ratio):
        anchors = [Vec2(0, 0), Vec2(400, 300), Vec2(799, 599), Vec2(10, 590)]
        deltas = [-900, -250, -1, 0, 1, 37, 500, 1000]
        for anchor, dx, dy in itertools.product(anchors, deltas, deltas):
            rect = update_free_drag(anchor, Vec2(anchor.x + dx, anchor.y + dy), ratio, BOUNDS)
            assert rect.w >= 1 - EPSILON and rect.h >= 1 - EPSILON
            assert_inside(rect)
            assert_ratio(rect, ratio)


# ══════════════════════════════════════════════════════════════════════════
# Handle resize
# ══════════════════════════════════════════════════════════════════════════

class TestResizeByHandle:

    START = Rect(200, 150, 200, 150)

    def test_se_keeps_top_left(self):
        rect = resize_by_handle('se', self.START, Vec2(400, 300), Vec2(450, 330), 'free', BOUNDS)
        assert (rect.x, rect.y) == (200, 150)
        assert (rect.w, rect.h) == (250, 180)

    def test_nw_keeps_bottom_right(self):
        rect = resize_by_handle('nw', self.START, Vec2(200, 150), Vec2(150, 100), 'free', BOUNDS)
        assert (rect.right, rect.bottom) == (400, 300)
        assert (rect.w, rect.h) == (250, 200)

    def test_n_moves_only_vertically(self):
        rect = resize_by_handle('n', self.START, Vec2(300, 150), Vec2(380, 120), 'free', BOUNDS)
        assert rect.x == self.START.x
        assert rect.w == self.START.w
        assert rect.bottom == self.START.bottom
        assert rect.h == pytest.approx(180)

    def test_e_moves_only_horizontally(self):
        rect = resize_by_handle('e', self.START, Vec2(400, 225), Vec2(420, 500), 'free', BOUNDS)
        assert rect.y == self.START.y
        assert rect.h == self.START.h
        assert rect.w == pytest.approx(220)

    @pytest.mark.parametrize("handle", ['nw', 'n', 'ne', 'e', 'se', 's', 'sw', 'w'])
    @pytest.mark.parametrize("ratio", RATIOS)
    def test_fixed_point_does_not_move(self, handle, ratio):
        before = fixed_point(handle, self.START)
        anchor = handle_anchor(self.START, handle)
        for dx, dy in [(-30, -20), (25, 40), (60, -10), (-5, 70)]:
            rect = resize_by_handle(handle, self.START, anchor, Vec2(anchor.x + dx, anchor.y + dy), ratio, BOUNDS)
            after = fixed_point(handle, rect)
            assert after.x == pytest.approx(before.x)
            assert after.y == pytest.approx(before.y)
            assert_inside(rect)
            assert rect.w >= 1 and rect.h >= 1

    @pytest.mark.parametrize("handle", ['nw', 'ne', 'se', 'sw', 'n', 'e', 's', 'w'])
    def test_fixed_ratio_is_kept(self, handle):
        anchor = handle_anchor(self.START, handle)
        rect = resize_by_handle(handle, self.START, anchor, Vec2(anchor.x + 40, anchor.y + 25), '4:3', BOUNDS)
        assert_ratio(rect, '4:3')

    def test_growth_stops_at_canvas_edge(self):
        rect = resize_by_handle('se', self.START, Vec2(400, 300), Vec2(2000, 2000), 'free', BOUNDS)
        assert (rect.x, rect.y) == (200, 150)
        assert rect.right == pytest.approx(800)
        assert rect.bottom == pytest.approx(600)


# ══════════════════════════════════════════════════════════════════════════
# Move, hit testing, reconciliation
# ══════════════════════════════════════════════════════════════════════════

class TestMoveRect:

    def test_translates_by_pointer_delta(self):
        rect = move_rect(Rect(10, 10, 100, 50), Vec2(20, 20), Vec2(50, 45), BOUNDS)
        assert rect == Rect(40, 35, 100, 50)

    def test_clamped_inside_canvas(self):
        rect = move_rect(Rect(10, 10, 100, 50), Vec2(20, 20), Vec2(5000, -300), BOUNDS)
        assert rect == Rect(700, 0, 100, 50)


class TestHandleAtPoint:

    RECT = Rect(100, 100, 200, 100)

    def test_corner_hit(self):
        assert handle_at_point(self.RECT, Vec2(102, 98)) == 'nw'
        assert handle_at_point(self.RECT, Vec2(300, 200)) == 'se'

    def test_edge_midpoint_hit(self):
        assert handle_at_point(self.RECT, Vec2(200, 100)) == 'n'
        assert handle_at_point(self.RECT, Vec2(100, 150)) == 'w'

    def test_inside_is_not_a_handle(self):
        assert handle_at_point(self.RECT, Vec2(180, 160)) is None
        assert self.RECT.contains(Vec2(180, 160))

    def test_outside_is_not_a_handle(self):
        assert handle_at_point(self.RECT, Vec2(10, 10)) is None

    def test_no_rect(self):
        assert handle_at_point(None, Vec2(10, 10)) is None


class TestReconcileAspectRatio:

    def test_keeps_top_left_and_grows_smaller_side(self):
        rect = reconcile_aspect_ratio(Rect(50, 60, 400, 100), '4:3')
        assert (rect.x, rect.y) == (50, 60)
        assert rect.w == pytest.approx(400)
        assert rect.h == pytest.approx(300)

    def test_free_leaves_rect_unchanged(self):
        rect = Rect(50, 60, 400, 100)
        assert reconcile_aspect_ratio(rect, 'free') == rect

    def test_square(self):
        rect = reconcile_aspect_ratio(Rect(0, 0, 100, 250), 'square')
        assert rect.w == pytest.approx(250)
        assert rect.h == pytest.approx(250)
