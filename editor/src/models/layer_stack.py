"""
Raster Layer Editor - Layer Stack

Ordered collection of layers. Index 0 is the bottom of the stack; the
list order is both the compositing (back-to-front) order and the order
the layer panel shows (reversed, top first).

Invariants:
- active_layer_id references an existing layer whenever the stack is non-empty
- next_layer_id only ever grows; ids are never reused
- every layer bitmap has the stack's width/height between operations
"""

import logging
from typing import List, Optional

from models.layer import Layer
from services.surface import Surface
from services.compositor import flatten_layers
from utils.errors import InvariantViolation
from constants import DEFAULT_LAYER_NAME_PATTERN


class LayerStack:
    """Layer collection with active-layer selection

    Properties:
        width, height: Size every layer bitmap shares
        layers: Layers bottom-to-top (read-only view, copy of the list)
        active_layer_id: Id of the layer tools act on, or None when empty
        next_layer_id: Id the next added layer receives
    """

    def __init__(self, width: int, height: int, next_layer_id: int = 1):
        self._logger = logging.getLogger('LayerStack')
        self.width = int(width)
        self.height = int(height)
        self._layers: List[Layer] = []
        self.active_layer_id: Optional[int] = None
        self.next_layer_id = int(next_layer_id)

    # ========================================
    # Queries
    # ========================================

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    def __len__(self):
        return len(self._layers)

    def __iter__(self):
        return iter(list(self._layers))

    def get_layer(self, layer_id) -> Optional[Layer]:
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    def has_layer(self, layer_id) -> bool:
        return self.get_layer(layer_id) is not None

    def index_of(self, layer_id) -> int:
        """Stack index of a layer, -1 if absent"""
        for index, layer in enumerate(self._layers):
            if layer.id == layer_id:
                return index
        return -1

    @property
    def active_layer(self) -> Optional[Layer]:
        return self.get_layer(self.active_layer_id)

    def layer_ids(self) -> List[int]:
        return [layer.id for layer in self._layers]

    # ========================================
    # Mutation
    # ========================================

    def add_layer(self, name: Optional[str] = None, source=None) -> Layer:
        """Add a new layer on top of the stack and make it active

        Args:
            name: Display name, "Layer N" if omitted
            source: Optional Surface or Pillow image drawn at (0, 0)

        Returns:
            The new Layer
        """
        layer_id = self.next_layer_id
        self.next_layer_id += 1

        bitmap = Surface.blank(self.width, self.height)
        if source is not None:
            bitmap.draw_bitmap(source)

        layer = Layer(layer_id, name or DEFAULT_LAYER_NAME_PATTERN.format(index=len(self._layers) + 1), bitmap)
        self._layers.append(layer)
        self.active_layer_id = layer.id
        self._logger.debug(f"Added layer {layer.id} ({layer.name})")
        return layer

    def insert_layer(self, layer: Layer, index: Optional[int] = None):
        """Insert an already-built layer (history restoration, project load)

        Keeps next_layer_id ahead of every id present.
        """
        if self.has_layer(layer.id):
            raise InvariantViolation(f"Layer id {layer.id} is already in the stack")
        if index is None:
            self._layers.append(layer)
        else:
            self._layers.insert(index, layer)
        if layer.id >= self.next_layer_id:
            self.next_layer_id = layer.id + 1
        if self.active_layer_id is None:
            self.active_layer_id = layer.id

    def delete_active_layer(self) -> Layer:
        """Remove the active layer and activate its neighbour

        The layer below becomes active, or the one above when the deleted
        layer was the bottom one.

        Raises:
            InvariantViolation: If only one layer remains
        """
        if len(self._layers) <= 1:
            raise InvariantViolation("Cannot delete the last layer")
        index = self.index_of(self.active_layer_id)
        if index < 0:
            raise InvariantViolation("No active layer to delete")
        removed = self._layers.pop(index)
        self.active_layer_id = self._layers[max(0, index - 1)].id
        self._logger.debug(f"Deleted layer {removed.id} ({removed.name})")
        return removed

    def can_reorder(self, direction: int) -> bool:
        """Whether the active layer has a neighbour in that direction (+1 up, -1 down)"""
        index = self.index_of(self.active_layer_id)
        if index < 0 or direction not in (1, -1):
            return False
        return 0 <= index + direction < len(self._layers)

    def reorder(self, direction: int) -> bool:
        """Swap the active layer with its neighbour; no-op at the boundary

        Returns:
            True if the layer moved
        """
        if not self.can_reorder(direction):
            return False
        index = self.index_of(self.active_layer_id)
        other = index + direction
        self._layers[index], self._layers[other] = self._layers[other], self._layers[index]
        return True

    def set_active(self, layer_id) -> bool:
        """Activate a layer; unknown ids are ignored"""
        if not self.has_layer(layer_id):
            return False
        self.active_layer_id = layer_id
        return True

    def clear(self):
        """Drop every layer (full-canvas reinitialization)"""
        self._layers = []
        self.active_layer_id = None

    def reset(self, width: int, height: int, next_layer_id: int = 1):
        """Empty the stack for a new canvas and restart id assignment"""
        self.clear()
        self.width = int(width)
        self.height = int(height)
        self.next_layer_id = int(next_layer_id)

    def replace_bitmaps(self, width: int, height: int, transform):
        """Swap every bitmap for transform(layer) and adopt the new size

        All new bitmaps are built before any layer is touched so a failing
        transform leaves the stack unchanged.
        """
        new_bitmaps = [transform(layer) for layer in self._layers]
        for layer, bitmap in zip(self._layers, new_bitmaps):
            layer.bitmap = bitmap
        self.width = int(width)
        self.height = int(height)

    # ========================================
    # Compositing
    # ========================================

    def composite_visible(self) -> Surface:
        """Canvas-sized flattening of every visible layer (bottom to top)"""
        return flatten_layers(self._layers, self.width, self.height)
