"""File operations for the main window - new, open, save, export, images"""
import os

from PyQt5.QtWidgets import QFileDialog

from components.dimension_dialog import ask_dimensions, ask_scale
from constants import (
	DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT,
	DEFAULT_PROJECT_FILENAME, DEFAULT_EXPORT_FILENAME
)

PROJECT_FILTER = "Project Files (*.json);;All Files (*)"
IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp);;All Files (*)"


class FileActions:
	"""Handles all file menu operations and the canvas size dialogs"""
	
	def __init__(self, main_window):
		"""Initialize with reference to main window
		
		Args:
			main_window: The RasterEditorWindow instance
		"""
		self.main_window = main_window
		self.editor = main_window.editor
	
	def new_canvas(self):
		"""Ask for a size and start a new canvas"""
		values = ask_dimensions(self.main_window, "New Canvas", DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT)
		if values is None:
			return
		if self.editor.new_canvas(*values):
			self.main_window._update_window_title()
	
	def resize_canvas(self):
		document = self.editor.document
		values = ask_dimensions(self.main_window, "Resize Canvas", document.width, document.height)
		if values is not None:
			self.editor.resize_canvas(*values)
	
	def scale_layer(self):
		if self.editor.active_layer is None:
			return
		value = ask_scale(self.main_window)
		if value is not None:
			self.editor.scale_active_layer(value)
	
	def save_project(self):
		"""Save to the current project file, asking for one if needed"""
		if self.editor.current_path:
			self._save_to_file(self.editor.current_path)
		else:
			self.save_project_as()
	
	def save_project_as(self):
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Save Project",
			DEFAULT_PROJECT_FILENAME,
			PROJECT_FILTER
		)
		if filename:
			self._save_to_file(filename)
	
	def _save_to_file(self, filename):
		"""Internal save method
		
		Args:
			filename: Path to save file to
		"""
		if self.editor.save_project(filename):
			self.main_window._add_to_recent_files(filename)
			self.main_window._update_window_title()
	
	def open_project(self):
		"""Open a project file chosen by the user"""
		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Project",
			"",
			PROJECT_FILTER
		)
		if filename:
			self.load_project_file(filename)
	
	def load_project_file(self, filename):
		if self.editor.open_project(filename):
			self.main_window._add_to_recent_files(filename)
			self.main_window._update_window_title()
			self.editor.fit_to_screen()
			return True
		return False
	
	def export_png(self):
		"""Export the flattened visible layers as PNG"""
		filename, _ = QFileDialog.getSaveFileName(
			self.main_window,
			"Export PNG",
			DEFAULT_EXPORT_FILENAME,
			"PNG Images (*.png)"
		)
		if filename:
			if not filename.lower().endswith('.png'):
				filename += '.png'
			if self.editor.export_png(filename):
				self.main_window.status_left.setText(f"Exported to {os.path.basename(filename)}")
	
	def open_image(self):
		"""Open an image as the background or as a new layer"""
		filename, _ = QFileDialog.getOpenFileName(
			self.main_window,
			"Open Image",
			"",
			IMAGE_FILTER
		)
		if filename:
			self.editor.open_image(filename)
