"""
Raster Layer Editor - Data Models

This module contains the data model classes for the editor state.
This is the MODEL in MVC architecture.
"""

from .transform import Vec2, Rect
from .layer import Layer
from .layer_stack import LayerStack
from .snapshot import LayerSnapshot, StateSnapshot
from .crop_session import CropSession, CropInteraction
from .document import Document

__all__ = [
    'Vec2', 'Rect', 'Layer', 'LayerStack', 'LayerSnapshot', 'StateSnapshot',
    'CropSession', 'CropInteraction', 'Document',
]
