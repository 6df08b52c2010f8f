"""
Raster Layer Editor - Document Model

THE MODEL in the MVC architecture: canvas size, zoom and the layer stack.
The controller owns one Document and passes it to services explicitly;
there is no global editor state.
"""

import logging

from models.layer_stack import LayerStack
from models.transform import Vec2
from constants import (
    DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT,
    DEFAULT_ZOOM, MIN_ZOOM, MAX_ZOOM
)


def clamp_zoom(value) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, float(value)))


class Document:
    """Canvas with its layer stack

    Properties:
        width, height: Canvas size in pixels (shared by every layer bitmap)
        zoom: Display zoom factor, clamped to [MIN_ZOOM, MAX_ZOOM]
        layers: LayerStack
    """

    def __init__(self, width: int = DEFAULT_CANVAS_WIDTH, height: int = DEFAULT_CANVAS_HEIGHT):
        self._logger = logging.getLogger('Document')
        self.layers = LayerStack(width, height)
        self._zoom = DEFAULT_ZOOM

    @property
    def width(self) -> int:
        return self.layers.width

    @property
    def height(self) -> int:
        return self.layers.height

    @property
    def bounds(self) -> Vec2:
        return Vec2(self.width, self.height)

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value):
        self._zoom = clamp_zoom(value)

    def set_size(self, width: int, height: int):
        """Record a new canvas size (bitmaps are resynchronized by the caller)"""
        self.layers.width = int(width)
        self.layers.height = int(height)
        self._logger.debug(f"Canvas size set to {width}x{height}")
