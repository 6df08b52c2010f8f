"""
Tests for the crop selection state machine.

Covers:
- Press outside/inside/on a handle picks the interaction
- Degenerate selections are discarded on release
- Aspect ratio changes reconcile the selection
- Hover targets for cursor feedback
"""
import pytest

from models.crop_session import CropSession, CropInteraction
from models.transform import Rect, Vec2

BOUNDS = (800, 600)


@pytest.fixture
def session():
    return CropSession()


@pytest.fixture
def selected(session):
    session.begin(Vec2(100, 100))
    session.update(Vec2(300, 250), BOUNDS)
    session.end()
    return session


class TestInteractions:

    def test_drag_outside_draws_new(self, session):
        assert session.begin(Vec2(100, 100)) is CropInteraction.DRAWING_NEW
        session.update(Vec2(300, 250), BOUNDS)
        assert session.end() == Rect(100, 100, 200, 150)
        assert not session.is_interacting

    def test_press_inside_moves(self, selected):
        assert selected.begin(Vec2(200, 170)) is CropInteraction.MOVING
        selected.update(Vec2(210, 180), BOUNDS)
        selected.end()
        assert selected.rect == Rect(110, 110, 200, 150)

    def test_press_on_handle_resizes(self, selected):
        assert selected.begin(Vec2(300, 250)) is CropInteraction.RESIZING
        assert selected.active_handle == 'se'
        selected.update(Vec2(350, 300), BOUNDS)
        selected.end()
        assert selected.rect == Rect(100, 100, 250, 200)

    def test_click_without_drag_is_discarded(self, session):
        session.begin(Vec2(50, 50))
        assert session.end() is None

    def test_update_without_interaction_keeps_rect(self, selected):
        before = selected.rect
        selected.update(Vec2(0, 0), BOUNDS)
        assert selected.rect == before

    def test_press_outside_replaces_selection(self, selected):
        selected.begin(Vec2(600, 500))
        assert selected.rect == Rect(600, 500, 0, 0)


class TestAspectRatio:

    def test_ratio_applies_to_next_drag(self, session):
        session.set_aspect_ratio('1:1')
        session.begin(Vec2(0, 0))
        session.update(Vec2(100, 40), BOUNDS)
        assert session.rect.w == pytest.approx(session.rect.h)

    def test_existing_rect_reconciled(self, selected):
        selected.set_aspect_ratio('16:9', BOUNDS)
        assert selected.rect.w / selected.rect.h == pytest.approx(16 / 9)
        assert (selected.rect.x, selected.rect.y) == (100, 100)

    def test_reset_forgets_everything(self, selected):
        selected.set_aspect_ratio('4:3')
        selected.reset()
        assert selected.rect is None
        assert selected.aspect_ratio == 'free'


class TestHoverTarget:

    def test_targets(self, selected):
        assert selected.hover_target(Vec2(100, 100)) == 'nw'
        assert selected.hover_target(Vec2(200, 175)) == 'move'
        assert selected.hover_target(Vec2(700, 500)) == 'new'

    def test_no_selection(self, session):
        assert session.hover_target(Vec2(10, 10)) == 'new'

    def test_hit_size_override(self, selected):
        assert selected.hover_target(Vec2(290, 240)) == 'move'
        assert selected.hover_target(Vec2(290, 240), handle_size=32) == 'se'
        assert selected.begin(Vec2(290, 240), handle_size=32) is CropInteraction.RESIZING
        assert selected.active_handle == 'se'
