"""
Raster Layer Editor - Canvas Widget

Displays the flattened layers at the current zoom, centred in the
viewport, and draws the crop overlay (dimmed outside region, selection
border and the eight resize handles). Mouse input is forwarded to the
controller in widget pixels; the controller converts it to canvas space.
"""

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QRectF, QPointF
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush

from services import crop_geometry
from utils.coordinate_transforms import canvas_to_screen
from utils.qt_image import pil_to_qimage
from constants import CROP_HANDLES, CROP_HANDLE_SIZE


# Cursor for each crop hover target
CROP_CURSORS = {
	'nw': Qt.SizeFDiagCursor,
	'se': Qt.SizeFDiagCursor,
	'ne': Qt.SizeBDiagCursor,
	'sw': Qt.SizeBDiagCursor,
	'n': Qt.SizeVerCursor,
	's': Qt.SizeVerCursor,
	'e': Qt.SizeHorCursor,
	'w': Qt.SizeHorCursor,
	'move': Qt.SizeAllCursor,
	'new': Qt.CrossCursor,
}

# Cursor for each tool's cursor name
TOOL_CURSORS = {
	'default': Qt.ArrowCursor,
	'move': Qt.SizeAllCursor,
	'cross': Qt.CrossCursor,
	'text': Qt.IBeamCursor,
	'crosshair': Qt.CrossCursor,
}

BACKGROUND_COLOR = QColor(45, 45, 48)
CHECKER_LIGHT = QColor(204, 204, 204)
CHECKER_DARK = QColor(153, 153, 153)
CHECKER_SIZE = 8


class CanvasWidget(QWidget):
	"""Zoomable view of the document with crop overlay"""
	
	def __init__(self, editor, parent=None):
		super().__init__(parent)
		self.editor = editor
		self._qimage = None  # Cached composite, rebuilt after every change
		self._dragging = False
		
		self.setMouseTracking(True)
		self.setFocusPolicy(Qt.StrongFocus)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		self.setMinimumSize(200, 200)
		
		editor.add_change_listener(self.refresh)
	
	def refresh(self):
		"""Drop the cached composite and repaint"""
		self._qimage = None
		self._update_stage_origin()
		self._update_cursor()
		self.update()
	
	# ========================================
	# Geometry
	# ========================================
	
	def stage_rect(self):
		"""Widget rectangle covered by the canvas at the current zoom"""
		document = self.editor.document
		width = document.width * document.zoom
		height = document.height * document.zoom
		x = max(0.0, (self.width() - width) / 2)
		y = max(0.0, (self.height() - height) / 2)
		return QRectF(x, y, width, height)
	
	def _update_stage_origin(self):
		rect = self.stage_rect()
		self.editor.set_stage_origin(rect.x(), rect.y())
	
	def resizeEvent(self, event):
		self.editor.set_viewport_size(self.width(), self.height())
		self._update_stage_origin()
		super().resizeEvent(event)
	
	# ========================================
	# Painting
	# ========================================
	
	def paintEvent(self, event):
		painter = QPainter(self)
		painter.fillRect(self.rect(), BACKGROUND_COLOR)
		
		stage = self.stage_rect()
		self._paint_checkerboard(painter, stage)
		
		if self._qimage is None:
			self._qimage = pil_to_qimage(self.editor.composite().image)
		painter.setRenderHint(QPainter.SmoothPixmapTransform, self.editor.document.zoom < 1.0)
		painter.drawImage(stage, self._qimage)
		
		if self.editor.active_tool_name == 'crop' and self.editor.crop_session.rect is not None:
			self._paint_crop_overlay(painter, stage)
		painter.end()
	
	def _paint_checkerboard(self, painter, stage):
		painter.save()
		painter.setClipRect(stage)
		painter.fillRect(stage, CHECKER_LIGHT)
		y = stage.top()
		row = 0
		while y < stage.bottom():
			x = stage.left() + (CHECKER_SIZE if row % 2 else 0)
			while x < stage.right():
				painter.fillRect(QRectF(x, y, CHECKER_SIZE, CHECKER_SIZE), CHECKER_DARK)
				x += CHECKER_SIZE * 2
			y += CHECKER_SIZE
			row += 1
		painter.restore()
	
	def _paint_crop_overlay(self, painter, stage):
		editor = self.editor
		zoom = editor.document.zoom
		rect = editor.crop_session.rect
		top_left = canvas_to_screen((rect.x, rect.y), editor.stage_origin, zoom)
		selection = QRectF(top_left.x, top_left.y, rect.w * zoom, rect.h * zoom)
		
		# Dim everything outside the selection
		painter.save()
		dim = QColor(0, 0, 0, 128)
		painter.fillRect(QRectF(stage.left(), stage.top(), stage.width(), selection.top() - stage.top()), dim)
		painter.fillRect(QRectF(stage.left(), selection.bottom(), stage.width(), stage.bottom() - selection.bottom()), dim)
		painter.fillRect(QRectF(stage.left(), selection.top(), selection.left() - stage.left(), selection.height()), dim)
		painter.fillRect(QRectF(selection.right(), selection.top(), stage.right() - selection.right(), selection.height()), dim)
		
		painter.setPen(QPen(QColor(255, 255, 255), 1, Qt.DashLine))
		painter.setBrush(Qt.NoBrush)
		painter.drawRect(selection)
		
		# Handles are drawn at screen size, hit-tested at canvas size
		painter.setPen(QPen(QColor(0, 0, 0), 1))
		painter.setBrush(QBrush(QColor(255, 255, 255)))
		half = CROP_HANDLE_SIZE / 2
		for handle in CROP_HANDLES:
			anchor = canvas_to_screen(crop_geometry.handle_anchor(rect, handle), editor.stage_origin, zoom)
			painter.drawRect(QRectF(anchor.x - half, anchor.y - half, CROP_HANDLE_SIZE, CROP_HANDLE_SIZE))
		
		painter.setPen(QColor(255, 255, 255))
		painter.drawText(QPointF(selection.left() + 4, selection.top() - 4),
		                 f"{round(rect.w)} x {round(rect.h)}")
		painter.restore()
	
	# ========================================
	# Input
	# ========================================
	
	def _update_cursor(self, pos=None):
		editor = self.editor
		if editor.active_tool_name == 'crop':
			if editor.crop_session.is_interacting:
				return
			if pos is None:
				self.setCursor(CROP_CURSORS['new'])
				return
			target = editor.crop_hover_target((pos.x(), pos.y()))
			self.setCursor(CROP_CURSORS[target])
		else:
			self.setCursor(TOOL_CURSORS.get(editor.active_tool.cursor, Qt.ArrowCursor))
	
	def mousePressEvent(self, event):
		if event.button() == Qt.LeftButton:
			self._dragging = True
			self.editor.pointer_down((event.x(), event.y()))
		super().mousePressEvent(event)
	
	def mouseMoveEvent(self, event):
		if self._dragging:
			self.editor.pointer_move((event.x(), event.y()))
		else:
			self._update_cursor(event.pos())
		super().mouseMoveEvent(event)
	
	def mouseReleaseEvent(self, event):
		if event.button() == Qt.LeftButton and self._dragging:
			self._dragging = False
			self.editor.pointer_up((event.x(), event.y()))
			self._update_cursor(event.pos())
		super().mouseReleaseEvent(event)
	
	def wheelEvent(self, event):
		"""Ctrl+wheel zooms in 10% steps"""
		if event.modifiers() & Qt.ControlModifier:
			if event.angleDelta().y() > 0:
				self.editor.zoom_in()
			elif event.angleDelta().y() < 0:
				self.editor.zoom_out()
			event.accept()
		else:
			super().wheelEvent(event)
