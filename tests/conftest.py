"""
Shared fixtures for Raster Layer Editor tests.

Provides editor sessions, surfaces and snapshot helpers.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from controller import EditorController
from models.document import Document
from services.surface import Surface


# ── Helpers ─────────────────────────────────────────────────────────────

def pixels(surface):
    """Raw RGBA bytes of a surface, for bit-identical comparisons"""
    return surface.image.tobytes()


def document_signature(document):
    """Everything undo/redo must reproduce exactly"""
    return (
        document.width,
        document.height,
        document.layers.active_layer_id,
        [
            (layer.id, layer.name, layer.offset_x, layer.offset_y,
             layer.opacity, layer.visible, pixels(layer.bitmap))
            for layer in document.layers
        ],
    )


# ── Fixtures ────────────────────────────────────────────────────────────

@pytest.fixture
def editor():
    """Fresh 800x600 session with a white Background layer"""
    return EditorController(800, 600)


@pytest.fixture
def small_editor():
    """Small canvas for pixel-level assertions"""
    return EditorController(40, 30)


@pytest.fixture
def document():
    doc = Document(100, 80)
    doc.layers.add_layer("Background")
    return doc


@pytest.fixture
def red_surface():
    surface = Surface.blank(20, 10)
    surface.fill_rect((0, 0, 20, 10), "#ff0000")
    return surface
