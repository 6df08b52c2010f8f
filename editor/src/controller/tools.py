"""Tool system - one class per editing tool.

Each tool knows:
- What a pointer press, drag and release do on the canvas
- Whether the action it starts is recorded in history (and under what name)
- Which cursor the canvas shows while it is active

Points handed to the tools are already in canvas coordinates; tools that
paint convert them to layer-local coordinates themselves.
"""

from abc import ABC, abstractmethod

from models.crop_session import CropInteraction
from utils.coordinate_transforms import canvas_to_layer


class Tool(ABC):
	"""Abstract base class for editing tools."""
	
	name = None
	cursor = 'default'
	
	def __init__(self, editor):
		self.editor = editor
	
	def activate(self):
		"""Called when the tool becomes the active tool."""
		pass
	
	def deactivate(self):
		"""Called when another tool replaces this one."""
		pass
	
	def cancel(self):
		"""Abandon a drag in progress, e.g. when undo replaces the layers."""
		pass
	
	@abstractmethod
	def on_pointer_down(self, point) -> bool:
		"""Handle a press at a canvas point.
		
		Returns:
			bool: True if the document or overlay changed
		"""
		pass
	
	def on_pointer_move(self, point) -> bool:
		return False
	
	def on_pointer_up(self, point) -> bool:
		return False


class MoveTool(Tool):
	"""Drag the active layer's offset"""
	
	name = 'move'
	cursor = 'move'
	
	def __init__(self, editor):
		super().__init__(editor)
		self._layer = None
		self._start_point = None
		self._start_offset = None
	
	def on_pointer_down(self, point):
		layer = self.editor.drawable_layer()
		if layer is None:
			return False
		self.editor._save_state("Move Layer")
		self._layer = layer
		self._start_point = point
		self._start_offset = layer.offset
		return False
	
	def on_pointer_move(self, point):
		if self._layer is None:
			return False
		delta = point - self._start_point
		self._layer.offset = self._start_offset + delta
		return True
	
	def on_pointer_up(self, point):
		self.cancel()
		return False
	
	def cancel(self):
		self._layer = None


class BrushTool(Tool):
	"""Freehand strokes with round caps and joins"""
	
	name = 'brush'
	cursor = 'cross'
	stroke_mode = 'normal'
	description = "Brush Stroke"
	
	def __init__(self, editor):
		super().__init__(editor)
		self._layer = None
		self._last_point = None
	
	def on_pointer_down(self, point):
		layer = self.editor.drawable_layer()
		if layer is None:
			return False
		self.editor._save_state(self.description)
		self._layer = layer
		self._last_point = point
		self._stroke(point)
		return True
	
	def on_pointer_move(self, point):
		if self._layer is None:
			return False
		self._stroke(point)
		self._last_point = point
		return True
	
	def on_pointer_up(self, point):
		self.cancel()
		return False
	
	def cancel(self):
		self._layer = None
		self._last_point = None
	
	def _stroke(self, point):
		self._layer.bitmap.stroke_line(
			canvas_to_layer(self._last_point, self._layer),
			canvas_to_layer(point, self._layer),
			self.editor.brush_size,
			self.editor.brush_color,
			mode=self.stroke_mode,
		)


class EraserTool(BrushTool):
	"""Brush that clears pixels to full transparency"""
	
	name = 'eraser'
	stroke_mode = 'erase'
	description = "Eraser Stroke"


class TextTool(Tool):
	"""Stamp the current text at the click point (vertically centred)"""
	
	name = 'text'
	cursor = 'text'
	
	def on_pointer_down(self, point):
		editor = self.editor
		layer = editor.drawable_layer()
		if layer is None or not editor.text_content:
			return False
		editor._save_state("Add Text")
		layer.bitmap.draw_text(
			editor.text_content,
			canvas_to_layer(point, layer),
			editor.text_size,
			editor.text_color,
		)
		return True


class CropTool(Tool):
	"""Draw, move and resize the crop selection
	
	The selection lives in the editor's CropSession; it is discarded when
	another tool is selected.
	"""
	
	name = 'crop'
	cursor = 'crosshair'
	
	def deactivate(self):
		self.editor.crop_session.reset()
	
	def cancel(self):
		self.editor.crop_session.end()
	
	def on_pointer_down(self, point):
		self.editor.crop_session.begin(point, self.editor.crop_handle_hit_size())
		return True
	
	def on_pointer_move(self, point):
		session = self.editor.crop_session
		if session.interaction is CropInteraction.NONE:
			return False
		session.update(point, self.editor.document.bounds)
		return True
	
	def on_pointer_up(self, point):
		session = self.editor.crop_session
		if session.interaction is CropInteraction.NONE:
			return False
		session.end()
		return True


TOOL_CLASSES = {
	tool_class.name: tool_class
	for tool_class in (MoveTool, BrushTool, EraserTool, TextTool, CropTool)
}


def build_tools(editor):
	"""One instance of every tool bound to the editor, keyed by name"""
	return {name: tool_class(editor) for name, tool_class in TOOL_CLASSES.items()}
