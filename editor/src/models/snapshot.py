"""Immutable editor-state snapshots used by history and project files.

A snapshot owns encoded PNG bytes for every layer, never a reference to
a live bitmap, so later edits cannot alter stored history.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class LayerSnapshot:
    """Frozen copy of one layer"""
    id: int
    name: str
    offset_x: float
    offset_y: float
    opacity: float
    visible: bool
    encoded_bitmap: bytes = field(repr=False)


@dataclass(frozen=True)
class StateSnapshot:
    """Frozen copy of the whole editor state (canvas size, zoom, layer stack)"""
    width: int
    height: int
    zoom: float
    active_layer_id: Optional[int]
    layers: Tuple[LayerSnapshot, ...] = ()
    next_layer_id: Optional[int] = None

    @property
    def layer_ids(self):
        return [layer.id for layer in self.layers]
