"""
Raster Layer Editor - Controller

Maps commands and pointer input onto the document, the history and the
crop session. This is the CONTROLLER in MVC architecture.
"""

from .core import EditorController

__all__ = ['EditorController']
