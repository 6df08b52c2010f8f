"""
Raster Layer Editor - Editor Controller

THE CONTROLLER in the MVC architecture. Owns the Document, the history
and the crop session, and maps commands and pointer input onto them.

Every public command either succeeds and returns True, or is rejected
with a single-line message (last_message, message listeners) and returns
False with the document unchanged. Mutating commands record the state
as it was right before the mutation.
"""

import logging

from models.document import Document
from models.crop_session import CropSession
from models.transform import Vec2
from utils.history_manager import HistoryManager
from utils.logger import loggerNotify, one_line
from controller.tools import build_tools
from controller.history_mixin import HistoryMixin
from controller.layer_mixin import LayerMixin
from controller.canvas_mixin import CanvasMixin
from controller.file_mixin import FileMixin
from controller.pointer_mixin import PointerMixin
from constants import (
    DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT, MAX_HISTORY_ENTRIES,
    DEFAULT_TOOL, DEFAULT_BRUSH_SIZE, DEFAULT_BRUSH_COLOR,
    DEFAULT_TEXT_CONTENT, DEFAULT_TEXT_SIZE, DEFAULT_TEXT_COLOR
)


class EditorController(HistoryMixin, LayerMixin, CanvasMixin, FileMixin, PointerMixin):
    """Single editing session

    Attributes:
        document: Document (canvas size, zoom, layer stack)
        history: HistoryManager of StateSnapshots
        crop_session: CropSession used while the crop tool is active
        tools: Tool instances keyed by name
        last_action: Short description of the last successful action
        last_message: Last user-visible failure or diagnostic
    """

    def __init__(self, width=DEFAULT_CANVAS_WIDTH, height=DEFAULT_CANVAS_HEIGHT,
                 max_history=MAX_HISTORY_ENTRIES):
        self._logger = logging.getLogger('EditorController')
        self.document = Document(width, height)
        self.history = HistoryManager(max_history)
        self.crop_session = CropSession()

        self.tools = build_tools(self)
        self.active_tool_name = DEFAULT_TOOL

        self.brush_size = DEFAULT_BRUSH_SIZE
        self.brush_color = DEFAULT_BRUSH_COLOR
        self.text_content = DEFAULT_TEXT_CONTENT
        self.text_size = DEFAULT_TEXT_SIZE
        self.text_color = DEFAULT_TEXT_COLOR

        # Set by the view; used for screen -> canvas conversion and Fit To Screen
        self.stage_origin = Vec2(0.0, 0.0)
        self.viewport_size = None

        self.current_path = None
        self.last_action = ""
        self.last_message = ""
        self._message_listeners = []
        self._change_listeners = []

        self._initialize_canvas(width, height)

    # ========================================
    # Listeners
    # ========================================

    def add_message_listener(self, callback):
        """callback(message) for rejected commands and restoration diagnostics"""
        self._message_listeners.append(callback)

    def add_change_listener(self, callback):
        """callback() whenever the document or the crop overlay changed"""
        self._change_listeners.append(callback)

    def _notify_changed(self):
        for callback in self._change_listeners:
            try:
                callback()
            except Exception as e:
                self._logger.error(f"Error notifying change listener: {e}")

    def _broadcast(self, message):
        self.last_message = message
        for callback in self._message_listeners:
            try:
                callback(message)
            except Exception as e:
                self._logger.error(f"Error notifying message listener: {e}")

    def _report(self, message):
        """Surface a diagnostic that is not a rejected command"""
        message = one_line(message)
        self._logger.warning(message)
        self._broadcast(message)

    def _fail(self, error, user_message=None):
        """Reject a command: surface a one-line message, leave state as is"""
        self._broadcast(loggerNotify(error, user_message))
        return False

    def _done(self, action):
        self.last_action = action
        self._logger.info(action)
        self._notify_changed()
        return True

    # ========================================
    # Queries
    # ========================================

    @property
    def active_tool(self):
        return self.tools[self.active_tool_name]

    @property
    def layers(self):
        return self.document.layers

    @property
    def active_layer(self):
        return self.document.layers.active_layer

    def drawable_layer(self):
        """The active layer if tools may act on it (hidden layers are locked)"""
        layer = self.document.layers.active_layer
        if layer is None or not layer.visible:
            return None
        return layer
