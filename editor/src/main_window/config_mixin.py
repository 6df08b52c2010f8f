"""Configuration management for RasterEditorWindow"""

import os
from PyQt5.QtWidgets import QMessageBox

from utils.editor_config import EditorConfig


class ConfigMixin:
	"""Configuration file operations and recent projects"""
	
	def _load_config(self):
		"""Load recent projects and settings from the config file"""
		self.config = EditorConfig().load()
	
	def _save_config(self):
		"""Save recent projects and settings to the config file"""
		self.config.brush_size = self.editor.brush_size
		self.config.brush_color = self.editor.brush_color
		try:
			self.config.save()
		except OSError as e:
			self._logger.warning(f"Could not save config {self.config.config_file}: {e}")
	
	def _add_to_recent_files(self, filepath):
		"""Add a project to the recent files list"""
		self.config.add_recent_project(filepath)
		
		# Update menu
		if hasattr(self, 'recent_menu'):
			self._update_recent_files_menu()
		
		self._save_config()
	
	def _update_recent_files_menu(self):
		"""Numbered Recent Projects entries, most recent first"""
		self.recent_menu.clear()
		recent = self.config.recent_projects
		self.recent_menu.setEnabled(bool(recent))
		for number, filepath in enumerate(recent, start=1):
			action = self.recent_menu.addAction(f"&{number} {os.path.basename(filepath)}")
			action.setStatusTip(filepath)
			action.triggered.connect(lambda checked, path=filepath: self._open_recent_file(path))
		if recent:
			self.recent_menu.addSeparator()
			self.recent_menu.addAction("Clear Recent Projects", self._clear_recent_files)
	
	def _clear_recent_files(self):
		"""Clear the recent files list"""
		self.config.clear_recent_projects()
		self._update_recent_files_menu()
		self._save_config()
	
	def _open_recent_file(self, filepath):
		"""Open a project from the recent files list"""
		if not os.path.exists(filepath):
			QMessageBox.warning(self, "File Not Found", f"The file no longer exists:\n{filepath}")
			# Remove from recent files
			self.config.remove_recent_project(filepath)
			self._update_recent_files_menu()
			self._save_config()
			return
		self.file_actions.load_project_file(filepath)
	
	def _update_window_title(self):
		"""Window title with the current project name"""
		if self.editor.current_path:
			self.setWindowTitle(f"Raster Layer Editor - {os.path.basename(self.editor.current_path)}")
		else:
			self.setWindowTitle("Raster Layer Editor - Untitled")
