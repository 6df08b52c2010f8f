"""Pointer input and tool selection for EditorController"""

from utils.coordinate_transforms import screen_to_canvas
from utils.errors import ValidationError
from models.transform import Vec2
from constants import TOOL_NAMES, CROP_HANDLE_SIZE


class PointerMixin:
	"""Routes screen-space pointer events to the active tool"""
	
	def set_stage_origin(self, x, y):
		"""Widget position of the canvas top-left corner"""
		self.stage_origin = Vec2(float(x), float(y))
	
	def set_viewport_size(self, width, height):
		self.viewport_size = (width, height)
	
	def to_canvas(self, screen_point):
		return screen_to_canvas(screen_point, self.stage_origin, self.document.zoom)
	
	def crop_handle_hit_size(self):
		"""Handle hit square in canvas px, matching the handles drawn on screen"""
		return CROP_HANDLE_SIZE / self.document.zoom
	
	def crop_hover_target(self, screen_point):
		"""What a crop press at a widget position would do"""
		return self.crop_session.hover_target(self.to_canvas(screen_point), self.crop_handle_hit_size())
	
	def select_tool(self, name):
		"""Make a tool active; leaving the crop tool discards its selection"""
		if name not in TOOL_NAMES:
			return self._fail(ValidationError(f"Unknown tool: {name}"))
		if name == self.active_tool_name:
			return True
		self.active_tool.deactivate()
		self.active_tool_name = name
		self.active_tool.activate()
		self._logger.debug(f"Tool selected: {name}")
		self._notify_changed()
		return True
	
	def _route(self, handler_name, screen_point, tool):
		if tool is not None and tool != self.active_tool_name:
			if not self.select_tool(tool):
				return False
		handler = getattr(self.active_tool, handler_name)
		changed = handler(self.to_canvas(screen_point))
		if changed:
			self._notify_changed()
		return changed
	
	def pointer_down(self, screen_point, tool=None):
		"""Press at a widget position
		
		Args:
			screen_point: (x, y) in widget pixels
			tool: Optional tool name to switch to first
			
		Returns:
			bool: True if something visible changed
		"""
		return self._route('on_pointer_down', screen_point, tool)
	
	def pointer_move(self, screen_point, tool=None):
		return self._route('on_pointer_move', screen_point, tool)
	
	def pointer_up(self, screen_point, tool=None):
		return self._route('on_pointer_up', screen_point, tool)
	
	# ========================================
	# Tool options
	# ========================================
	
	def set_brush(self, size=None, color=None):
		"""Brush/eraser width in pixels and brush colour"""
		if size is not None:
			self.brush_size = max(1, int(size))
		if color is not None:
			self.brush_color = color
	
	def set_text(self, content=None, size=None, color=None):
		"""Text tool content, font size in pixels and colour"""
		if content is not None:
			self.text_content = content
		if size is not None:
			self.text_size = max(1, int(size))
		if color is not None:
			self.text_color = color
