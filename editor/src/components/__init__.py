"""UI components for the Raster Layer Editor

- CanvasWidget: zoomable document view with crop overlay
- LayerListWidget: layer panel (visibility, order, opacity)
- create_toolbar / create_options_bar: main and tool option toolbars
"""

from .canvas_widget import CanvasWidget
from .layer_list_widget import LayerListWidget
from .toolbar import create_toolbar, create_options_bar

__all__ = [
    'CanvasWidget',
    'LayerListWidget',
    'create_toolbar',
    'create_options_bar',
]
