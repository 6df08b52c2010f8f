"""
Raster Layer Editor - Layer Data Model

One independently positioned, opacity-weighted bitmap in the layer stack.

This is part of the MODEL layer - pure data, no UI logic.

Usage:
    layer = Layer(3, "Sketch", Surface.blank(800, 600))
    layer.opacity = 0.5
    local = layer.to_local(Vec2(120, 80))
"""

from models.transform import Vec2
from services.surface import Surface


class Layer:
    """Layer in the stack

    Properties:
        id: Unique positive integer, assigned by the stack, never reused
        name: Display name
        bitmap: Owned Surface (canvas-sized)
        visible: Hidden layers contribute nothing when compositing
        opacity: Float clamped to [0, 1]
        offset_x, offset_y: Translation applied when compositing
    """

    def __init__(self, layer_id: int, name: str, bitmap: Surface,
                 visible: bool = True, opacity: float = 1.0,
                 offset_x: float = 0.0, offset_y: float = 0.0):
        if int(layer_id) <= 0:
            raise ValueError(f"Layer id must be a positive integer, got {layer_id}")
        self._id = int(layer_id)
        self.name = name
        self.bitmap = bitmap
        self.visible = bool(visible)
        self._opacity = 1.0
        self.opacity = opacity
        self.offset_x = float(offset_x)
        self.offset_y = float(offset_y)

    @property
    def id(self) -> int:
        return self._id

    @property
    def opacity(self) -> float:
        return self._opacity

    @opacity.setter
    def opacity(self, value):
        self._opacity = min(1.0, max(0.0, float(value)))

    @property
    def offset(self) -> Vec2:
        return Vec2(self.offset_x, self.offset_y)

    @offset.setter
    def offset(self, value):
        x, y = value
        self.offset_x, self.offset_y = float(x), float(y)

    def to_local(self, canvas_point: Vec2) -> Vec2:
        """Convert a canvas point into this layer's bitmap coordinates"""
        return Vec2(canvas_point.x - self.offset_x, canvas_point.y - self.offset_y)

    def __repr__(self):
        return (f"Layer(id={self._id}, name={self.name!r}, visible={self.visible}, "
                f"opacity={self._opacity:.2f}, offset=({self.offset_x:g}, {self.offset_y:g}))")
