"""Canvas-wide commands for EditorController: new, resize, scale, crop, zoom"""

from models.transform import Rect, Vec2
from services import crop_geometry
from utils.errors import EditorError
from utils.validation import parse_dimension, parse_percentage
from constants import (
    BACKGROUND_LAYER_NAME, BACKGROUND_FILL_COLOR,
    DEFAULT_ZOOM, ZOOM_STEP, FIT_TO_SCREEN_PADDING
)


class CanvasMixin:
    """Canvas size, crop application and view zoom"""

    # ========================================
    # Canvas lifecycle
    # ========================================

    def _initialize_canvas(self, width, height):
        """Fresh canvas with a white background as the only history entry"""
        self._leave_crop_mode()
        stack = self.document.layers
        stack.reset(width, height, 1)
        self.document.zoom = DEFAULT_ZOOM
        background = stack.add_layer(BACKGROUND_LAYER_NAME)
        background.bitmap.fill_rect((0, 0, width, height), BACKGROUND_FILL_COLOR)
        self.current_path = None
        self._reset_history("New Canvas")

    def new_canvas(self, width, height):
        """Discard everything and start a new canvas

        Invalid sizes are rejected with a message and change nothing.
        """
        try:
            width = parse_dimension(width, "Width")
            height = parse_dimension(height, "Height")
        except EditorError as e:
            return self._fail(e, "Please enter valid width and height.")
        self._initialize_canvas(width, height)
        self.fit_to_screen()
        return self._done(f"New canvas {width}x{height}")

    def resize_canvas(self, width, height):
        """Resample every layer bitmap to the new canvas size"""
        try:
            width = parse_dimension(width, "Width")
            height = parse_dimension(height, "Height")
        except EditorError as e:
            return self._fail(e, "Please enter valid width and height.")

        self._save_state("Resize Canvas")
        self.document.layers.replace_bitmaps(width, height, lambda layer: layer.bitmap.resized(width, height))
        self.crop_session.rect = None
        return self._done(f"Resized canvas to {width}x{height}")

    def scale_active_layer(self, percent):
        """Scale the active layer's content about the canvas centre

        Args:
            percent: Scale in percent (100 keeps the layer unchanged)
        """
        try:
            factor = parse_percentage(percent)
        except EditorError as e:
            return self._fail(e, "Please enter a valid scale percentage.")

        layer = self.document.layers.active_layer
        if layer is None:
            return False
        self._save_state("Scale Layer")
        layer.bitmap = layer.bitmap.scaled_centered(factor)
        return self._done(f"Scaled {layer.name} to {factor * 100:g}%")

    # ========================================
    # Crop
    # ========================================

    def apply_crop(self):
        """Crop every layer to the selection and return to the Move tool

        Each layer is cut at the selection position relative to its own
        offset; offsets are reset afterwards. No-op without a selection.
        """
        rect = self.crop_session.rect
        if rect is None or rect.is_degenerate():
            return False

        _, _, width, height = rect.to_pixels()
        self._save_state("Crop")
        stack = self.document.layers
        stack.replace_bitmaps(width, height, lambda layer: layer.bitmap.crop_region(
            rect.x - layer.offset_x, rect.y - layer.offset_y, width, height))
        for layer in stack:
            layer.offset = (0.0, 0.0)

        self._leave_crop_mode()
        self.document.zoom = DEFAULT_ZOOM
        self.fit_to_screen()
        return self._done(f"Cropped to {width}x{height}")

    def cancel_crop(self):
        """Discard the crop selection and return to the Move tool"""
        self._leave_crop_mode()
        self._notify_changed()
        return True

    def set_crop_rect(self, x, y, width, height):
        """Select a crop region numerically (switches to the crop tool)

        The region is shrunk to the canvas and moved inside it.
        """
        try:
            width = min(parse_dimension(width, "Crop width"), self.document.width)
            height = min(parse_dimension(height, "Crop height"), self.document.height)
            x, y = float(x), float(y)
        except (EditorError, TypeError, ValueError) as e:
            return self._fail(e, "Please enter a valid crop region.")
        self.select_tool('crop')
        self.crop_session.rect = crop_geometry.move_rect(
            Rect(x, y, width, height), Vec2(0, 0), Vec2(0, 0), self.document.bounds)
        self._notify_changed()
        return True

    def set_aspect_ratio(self, aspect_ratio):
        """Constrain the crop selection to 'free', '1:1', '4:3' or '16:9'"""
        try:
            aspect_ratio = crop_geometry.normalize_aspect_ratio(aspect_ratio)
        except EditorError as e:
            return self._fail(e)
        self._save_state("Aspect Ratio")
        self.crop_session.set_aspect_ratio(aspect_ratio, self.document.bounds)
        return self._done(f"Aspect ratio {aspect_ratio}")

    def _leave_crop_mode(self):
        self.crop_session.reset()
        if self.active_tool_name != 'move':
            self.select_tool('move')

    # ========================================
    # Zoom (view state, not recorded in history)
    # ========================================

    def set_zoom(self, zoom):
        self.document.zoom = zoom
        self._notify_changed()
        return self.document.zoom

    def zoom_in(self):
        return self.set_zoom(self.document.zoom + ZOOM_STEP)

    def zoom_out(self):
        return self.set_zoom(self.document.zoom - ZOOM_STEP)

    def fit_to_screen(self, viewport_width=None, viewport_height=None):
        """Largest zoom (at most 100%) showing the whole canvas with padding

        Uses the last viewport size reported by the view when no size is
        given; returns None if none is known.
        """
        if viewport_width is None or viewport_height is None:
            if self.viewport_size is None:
                return None
            viewport_width, viewport_height = self.viewport_size
        width_ratio = (viewport_width - FIT_TO_SCREEN_PADDING) / self.document.width
        height_ratio = (viewport_height - FIT_TO_SCREEN_PADDING) / self.document.height
        return self.set_zoom(min(width_ratio, height_ratio, 1.0))

    def composite(self):
        """Flattened image of the visible layers"""
        return self.document.layers.composite_visible()
