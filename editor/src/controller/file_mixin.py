"""File commands for EditorController: projects, PNG export and image import"""

import os

from services import file_operations
from services.state_codec import apply_snapshot, decode_layers
from utils.errors import EditorError
from constants import BACKGROUND_LAYER_NAME


class FileMixin:
	"""Save/open projects, export PNG, open images as layers"""
	
	def save_project(self, filename):
		"""Write the current state as a JSON project file"""
		try:
			snapshot = self._capture_current_state()
			file_operations.save_project(snapshot, filename)
		except OSError as e:
			return self._fail(e, f"Could not save project: {e}")
		self.current_path = filename
		return self._done(f"Saved {os.path.basename(filename)}")
	
	def open_project(self, filename):
		"""Replace the session with a project file
		
		The file is parsed and every layer decoded before the document is
		touched. Corrupt layers are dropped with a diagnostic; history
		restarts with the loaded state as its initial entry.
		"""
		try:
			snapshot = file_operations.load_project(filename)
		except (OSError, EditorError) as e:
			return self._fail(e, f"Could not open project: {e}")
		decoded = decode_layers(snapshot)
		
		self._leave_crop_mode()
		self.active_tool.cancel()
		with self.history.restoring():
			failures = apply_snapshot(self.document, snapshot, decoded)
		self._reset_history("Open Project")
		self.current_path = filename
		
		if failures:
			self._report_decode_failures(failures)
		return self._done(f"Opened {os.path.basename(filename)}")
	
	def export_png(self, filename):
		"""Flatten the visible layers and write them as a PNG file"""
		try:
			file_operations.export_png(self.composite(), filename)
		except OSError as e:
			return self._fail(e, f"Could not export image: {e}")
		self.last_action = f"Exported {os.path.basename(filename)}"
		self._logger.info(self.last_action)
		return True
	
	def open_image(self, filename):
		"""Open an image file
		
		A session that still holds only the initial background adopts the
		image: the canvas takes its size and the background its pixels and
		file name. Otherwise the image is added as a new layer.
		"""
		try:
			surface = file_operations.load_image(filename)
		except (OSError, EditorError) as e:
			return self._fail(e, f"Could not open image: {e}")
		
		name = os.path.basename(filename)
		stack = self.document.layers
		self._save_state("Open Image")
		
		if len(stack) == 1 and stack.layers[0].name == BACKGROUND_LAYER_NAME:
			stack.replace_bitmaps(surface.width, surface.height, lambda layer: surface.copy())
			stack.layers[0].name = name
			self.crop_session.rect = None
			self.fit_to_screen()
		else:
			stack.add_layer(name, surface)
		return self._done(f"Opened image {name}")
