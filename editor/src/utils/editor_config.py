"""User configuration file (~/.rastereditor/config.json)

Holds the recent projects list and a few user preferences. A missing
file yields defaults; an unreadable one is logged and replaced by
defaults on the next save.
"""

import os
import json
import logging

from constants import (
	CONFIG_DIR_NAME, CONFIG_FILE_NAME, MAX_RECENT_PROJECTS,
	MAX_HISTORY_ENTRIES, DEFAULT_BRUSH_SIZE, DEFAULT_BRUSH_COLOR
)

_logger = logging.getLogger('EditorConfig')


def default_config_dir():
	return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)


class EditorConfig:
	"""Persisted user settings
	
	Attributes:
		recent_projects: Project paths, most recent first
		max_history: Undo stack capacity
		brush_size, brush_color: Last brush settings
	"""
	
	def __init__(self, config_dir=None):
		self.config_dir = config_dir or default_config_dir()
		self.config_file = os.path.join(self.config_dir, CONFIG_FILE_NAME)
		self.recent_projects = []
		self.max_history = MAX_HISTORY_ENTRIES
		self.brush_size = DEFAULT_BRUSH_SIZE
		self.brush_color = DEFAULT_BRUSH_COLOR
	
	def load(self):
		"""Read the config file; missing or corrupt files leave the defaults"""
		if not os.path.exists(self.config_file):
			return self
		try:
			with open(self.config_file, 'r', encoding='utf-8') as f:
				config = json.load(f)
		except (OSError, json.JSONDecodeError) as e:
			_logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
			return self
		if not isinstance(config, dict):
			_logger.warning(f"Ignoring malformed config {self.config_file}")
			return self
		
		recent = config.get('recent_projects', [])
		if isinstance(recent, list):
			# Filter out files that no longer exist
			self.recent_projects = [p for p in recent if isinstance(p, str) and os.path.exists(p)][:MAX_RECENT_PROJECTS]
		
		max_history = config.get('max_history')
		if isinstance(max_history, int) and not isinstance(max_history, bool) and max_history >= 1:
			self.max_history = max_history
		
		brush_size = config.get('brush_size')
		if isinstance(brush_size, (int, float)) and not isinstance(brush_size, bool) and brush_size >= 1:
			self.brush_size = int(brush_size)
		
		brush_color = config.get('brush_color')
		if isinstance(brush_color, str) and brush_color:
			self.brush_color = brush_color
		return self
	
	def save(self):
		"""Write the config file, creating the directory if needed
		
		Raises:
			OSError: If the file cannot be written
		"""
		os.makedirs(self.config_dir, exist_ok=True)
		config = {
			'recent_projects': self.recent_projects[:MAX_RECENT_PROJECTS],
			'max_history': self.max_history,
			'brush_size': self.brush_size,
			'brush_color': self.brush_color,
		}
		with open(self.config_file, 'w', encoding='utf-8') as f:
			json.dump(config, f, indent=2)
	
	def add_recent_project(self, filepath):
		"""Move a path to the front of the recent list (capped)"""
		filepath = os.path.abspath(filepath)
		if filepath in self.recent_projects:
			self.recent_projects.remove(filepath)
		self.recent_projects.insert(0, filepath)
		self.recent_projects = self.recent_projects[:MAX_RECENT_PROJECTS]
	
	def remove_recent_project(self, filepath):
		if filepath in self.recent_projects:
			self.recent_projects.remove(filepath)
	
	def clear_recent_projects(self):
		self.recent_projects = []
