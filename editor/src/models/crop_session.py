"""
Raster Layer Editor - Crop Session

Ephemeral state of the crop tool: the selection rect, the interaction in
progress and the aspect ratio. Exists only while the crop tool is active.

All geometry is delegated to services.crop_geometry; this class only
tracks which interaction is running and what it started from.
"""

import logging
from enum import Enum
from typing import Optional

from models.transform import Rect, Vec2
from services import crop_geometry
from constants import CROP_HANDLE_SIZE


class CropInteraction(Enum):
    NONE = 'none'
    DRAWING_NEW = 'drawingNew'
    MOVING = 'moving'
    RESIZING = 'resizing'


class CropSession:
    """Crop selection state machine

    Properties:
        rect: Current selection in canvas pixels, or None
        interaction: CropInteraction in progress
        active_handle: Handle being dragged while RESIZING
        aspect_ratio: Canonical ratio name
        anchor_mouse: Pointer position at interaction start
        rect_at_start: Rect at interaction start
    """

    def __init__(self, aspect_ratio='free', handle_size=CROP_HANDLE_SIZE):
        self._logger = logging.getLogger('CropSession')
        self.rect: Optional[Rect] = None
        self.interaction = CropInteraction.NONE
        self.active_handle: Optional[str] = None
        self.aspect_ratio = crop_geometry.normalize_aspect_ratio(aspect_ratio)
        self.anchor_mouse = Vec2(0.0, 0.0)
        self.rect_at_start: Optional[Rect] = None
        self.handle_size = handle_size

    @property
    def is_interacting(self) -> bool:
        return self.interaction is not CropInteraction.NONE

    def begin(self, point: Vec2, handle_size=None) -> CropInteraction:
        """Start an interaction at point

        A handle hit starts a resize, a point inside the rect starts a
        move, anything else starts a fresh selection. handle_size
        overrides the session's hit size, e.g. to follow the view zoom.
        """
        if handle_size is None:
            handle_size = self.handle_size
        self.anchor_mouse = point
        if self.rect is not None:
            handle = crop_geometry.handle_at_point(self.rect, point, handle_size)
            if handle:
                self.interaction = CropInteraction.RESIZING
                self.active_handle = handle
                self.rect_at_start = self.rect
                return self.interaction
            if self.rect.contains(point):
                self.interaction = CropInteraction.MOVING
                self.active_handle = None
                self.rect_at_start = self.rect
                return self.interaction

        self.interaction = CropInteraction.DRAWING_NEW
        self.active_handle = None
        self.rect_at_start = None
        self.rect = crop_geometry.start_drag(point)
        return self.interaction

    def update(self, point: Vec2, canvas_bounds) -> Optional[Rect]:
        """Recompute the rect for the current pointer position"""
        if self.interaction is CropInteraction.MOVING:
            self.rect = crop_geometry.move_rect(self.rect_at_start, self.anchor_mouse, point, canvas_bounds)
        elif self.interaction is CropInteraction.RESIZING:
            self.rect = crop_geometry.resize_by_handle(
                self.active_handle, self.rect_at_start, self.anchor_mouse, point,
                self.aspect_ratio, canvas_bounds)
        elif self.interaction is CropInteraction.DRAWING_NEW:
            self.rect = crop_geometry.update_free_drag(self.anchor_mouse, point, self.aspect_ratio, canvas_bounds)
        return self.rect

    def end(self) -> Optional[Rect]:
        """Finish the interaction; a degenerate rect is discarded"""
        self.interaction = CropInteraction.NONE
        self.active_handle = None
        self.rect_at_start = None
        if self.rect is not None and self.rect.is_degenerate():
            self._logger.debug("Discarded degenerate crop selection")
            self.rect = None
        return self.rect

    def set_aspect_ratio(self, aspect_ratio, canvas_bounds=None):
        """Switch ratio and reconcile an existing selection with it"""
        self.aspect_ratio = crop_geometry.normalize_aspect_ratio(aspect_ratio)
        if self.rect is not None:
            self.rect = crop_geometry.reconcile_aspect_ratio(self.rect, self.aspect_ratio, canvas_bounds)
        return self.rect

    def hover_target(self, point: Vec2, handle_size=None):
        """What a press at point would do: a handle name, 'move' or 'new'"""
        if handle_size is None:
            handle_size = self.handle_size
        handle = crop_geometry.handle_at_point(self.rect, point, handle_size)
        if handle:
            return handle
        if self.rect is not None and self.rect.contains(point):
            return 'move'
        return 'new'

    def reset(self):
        self.rect = None
        self.interaction = CropInteraction.NONE
        self.active_handle = None
        self.rect_at_start = None
        self.aspect_ratio = 'free'
