"""
Tests for the layer stack and the compositor.

Covers:
- Id assignment (monotonic, never reused)
- Active layer selection on add/delete
- Last-layer protection
- Reordering with boundary no-ops
- Bitmap replacement on canvas changes
- Compositing order, visibility, opacity and offsets
"""
import numpy as np
import pytest

from models.layer import Layer
from models.layer_stack import LayerStack
from services.compositor import composite_onto
from services.surface import Surface
from utils.errors import InvariantViolation


@pytest.fixture
def stack():
    stack = LayerStack(10, 10)
    stack.add_layer("Background")
    return stack


# ══════════════════════════════════════════════════════════════════════════
# Ids and selection
# ══════════════════════════════════════════════════════════════════════════

class TestLayerIds:

    def test_ids_are_sequential(self, stack):
        second = stack.add_layer()
        third = stack.add_layer()
        assert stack.layer_ids() == [1, second.id, third.id] == [1, 2, 3]

    def test_ids_never_reused_after_delete(self, stack):
        stack.add_layer()
        stack.delete_active_layer()
        assert stack.add_layer().id == 3

    def test_default_names(self, stack):
        assert stack.add_layer().name == "Layer 2"
        assert stack.add_layer("Sketch").name == "Sketch"

    def test_insert_keeps_next_id_ahead(self, stack):
        stack.insert_layer(Layer(9, "Restored", Surface.blank(10, 10)))
        assert stack.next_layer_id == 10

    def test_insert_duplicate_id_rejected(self, stack):
        with pytest.raises(InvariantViolation):
            stack.insert_layer(Layer(1, "Again", Surface.blank(10, 10)))

    def test_layer_id_must_be_positive(self):
        with pytest.raises(ValueError):
            Layer(0, "Zero", Surface.blank(1, 1))


class TestActiveLayer:

    def test_new_layer_becomes_active(self, stack):
        layer = stack.add_layer()
        assert stack.active_layer_id == layer.id

    def test_delete_activates_layer_below(self, stack):
        stack.add_layer()
        top = stack.add_layer()
        stack.delete_active_layer()
        assert top.id not in stack.layer_ids()
        assert stack.active_layer_id == 2

    def test_delete_bottom_activates_layer_above(self, stack):
        stack.add_layer()
        stack.set_active(1)
        stack.delete_active_layer()
        assert stack.active_layer_id == 2

    def test_last_layer_cannot_be_deleted(self, stack):
        with pytest.raises(InvariantViolation):
            stack.delete_active_layer()
        assert len(stack) == 1

    def test_set_active_unknown_id_ignored(self, stack):
        assert stack.set_active(42) is False
        assert stack.active_layer_id == 1


# ══════════════════════════════════════════════════════════════════════════
# Reordering and bitmap replacement
# ══════════════════════════════════════════════════════════════════════════

class TestReorder:

    def test_move_up_and_down(self, stack):
        stack.add_layer()
        stack.set_active(1)
        assert stack.reorder(1) is True
        assert stack.layer_ids() == [2, 1]
        assert stack.reorder(-1) is True
        assert stack.layer_ids() == [1, 2]

    def test_boundary_is_noop(self, stack):
        stack.add_layer()
        assert stack.reorder(1) is False  # already on top
        stack.set_active(1)
        assert stack.reorder(-1) is False
        assert stack.layer_ids() == [1, 2]


class TestReplaceBitmaps:

    def test_adopts_new_size(self, stack):
        stack.add_layer()
        stack.replace_bitmaps(4, 3, lambda layer: layer.bitmap.resized(4, 3))
        assert (stack.width, stack.height) == (4, 3)
        assert all(layer.bitmap.size == (4, 3) for layer in stack)

    def test_failing_transform_leaves_stack_unchanged(self, stack):
        def explode(layer):
            raise RuntimeError("bad transform")
        with pytest.raises(RuntimeError):
            stack.replace_bitmaps(4, 3, explode)
        assert (stack.width, stack.height) == (10, 10)
        assert stack.layers[0].bitmap.size == (10, 10)


# ══════════════════════════════════════════════════════════════════════════
# Compositing
# ══════════════════════════════════════════════════════════════════════════

class TestCompositing:

    def test_top_layer_wins(self, stack):
        stack.layers[0].bitmap.fill_rect((0, 0, 10, 10), "#ff0000")
        stack.add_layer().bitmap.fill_rect((0, 0, 10, 10), "#0000ff")
        assert stack.composite_visible().pixel(5, 5) == (0, 0, 255, 255)

    def test_hidden_layer_skipped(self, stack):
        stack.layers[0].bitmap.fill_rect((0, 0, 10, 10), "#ff0000")
        top = stack.add_layer()
        top.bitmap.fill_rect((0, 0, 10, 10), "#0000ff")
        top.visible = False
        assert stack.composite_visible().pixel(5, 5) == (255, 0, 0, 255)

    def test_opacity_blends(self, stack):
        stack.layers[0].bitmap.fill_rect((0, 0, 10, 10), "#000000")
        top = stack.add_layer()
        top.bitmap.fill_rect((0, 0, 10, 10), "#ffffff")
        top.opacity = 0.5
        r, g, b, a = stack.composite_visible().pixel(5, 5)
        assert a == 255
        assert abs(r - 128) <= 1

    def test_offset_shifts_content(self, stack):
        layer = stack.layers[0]
        layer.bitmap.fill_rect((0, 0, 2, 2), "#00ff00")
        layer.offset = (5, 5)
        result = stack.composite_visible()
        assert result.pixel(0, 0)[3] == 0
        assert result.pixel(6, 6) == (0, 255, 0, 255)

    def test_empty_stack_is_transparent(self):
        result = LayerStack(3, 2).composite_visible()
        assert result.size == (3, 2)
        assert result.pixel(1, 1) == (0, 0, 0, 0)

    def test_opacity_clamped(self):
        layer = Layer(1, "L", Surface.blank(1, 1), opacity=3.0)
        assert layer.opacity == 1.0
        layer.opacity = -1
        assert layer.opacity == 0.0

    def test_composite_onto_ignores_out_of_range(self):
        base = np.zeros((4, 4, 4), dtype=np.uint8)
        top = np.full((2, 2, 4), 255, dtype=np.uint8)
        composite_onto(base, top, 10, 10)
        assert not base.any()
        composite_onto(base, top, -1, -1)
        assert base[0, 0].tolist() == [255, 255, 255, 255]
        assert base[1, 1].tolist() == [0, 0, 0, 0]
