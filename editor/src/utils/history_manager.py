"""
Undo/Redo History Manager for the Raster Layer Editor

Manages state history with undo/redo functionality as two bounded
stacks of frozen state snapshots (linear history, no redo branches).

Phases:
	RECORDING - default; capture() pushes snapshots
	RESTORING - entered for the duration of an undo/redo application;
	            capture() is a no-op so a restoration never records itself
"""

import copy
import logging
from contextlib import contextmanager
from enum import Enum


class HistoryPhase(Enum):
	RECORDING = 'recording'
	RESTORING = 'restoring'


class HistoryEntry:
	"""One stored state with an optional description of the action it precedes"""

	__slots__ = ('state', 'description')

	def __init__(self, state, description=""):
		self.state = state
		self.description = description


class HistoryManager:
	"""Manages undo/redo history with state snapshots

	The bottom undo entry is the initial state. Each capture() records the
	state as it was immediately before a mutating action, so undo needs at
	least two entries: the top entry is popped and handed back for
	restoration while the caller's current state moves to the redo stack.
	"""

	def __init__(self, max_history=20):
		"""
		Initialize the history manager

		Args:
			max_history: Maximum number of states kept on the undo stack
		"""
		if max_history < 1:
			raise ValueError("max_history must be at least 1")
		self.max_history = max_history
		self.undo_stack = []  # HistoryEntry list, oldest first
		self.redo_stack = []  # HistoryEntry list, most recent last
		self._phase = HistoryPhase.RECORDING
		self._listeners = []  # Callbacks to notify on state changes
		self._logger = logging.getLogger('HistoryManager')

	# ========================================
	# Phase
	# ========================================

	@property
	def phase(self):
		return self._phase

	@property
	def is_restoring(self):
		return self._phase is HistoryPhase.RESTORING

	@contextmanager
	def restoring(self):
		"""Run a block in the RESTORING phase

		Nested use keeps the outer phase until the outermost block exits.
		"""
		previous = self._phase
		self._phase = HistoryPhase.RESTORING
		try:
			yield self
		finally:
			self._phase = previous

	# ========================================
	# Recording
	# ========================================

	def capture(self, state, description=""):
		"""
		Record the state as it is right before a mutating action

		Args:
			state: State value to store, or a zero-argument callable producing
			       it (only called while recording)
			description: Optional description of the action about to happen

		Returns:
			True if an entry was pushed, False while restoring
		"""
		if self.is_restoring:
			self._logger.debug(f"Capture skipped while restoring: {description}")
			return False

		if callable(state):
			state = state()

		self.undo_stack.append(HistoryEntry(copy.deepcopy(state), description))

		# FIFO eviction of the oldest entries
		while len(self.undo_stack) > self.max_history:
			self.undo_stack.pop(0)

		# Any new action invalidates prior redo history
		self.redo_stack = []

		self._notify_listeners()
		self._logger.debug(f"State saved: {description} (undo: {len(self.undo_stack)})")
		return True

	# ========================================
	# Undo / redo
	# ========================================

	def undo(self, current_state):
		"""
		Step back one action

		Args:
			current_state: The caller's state right now (becomes the redo target)

		Returns:
			The state to restore, or None if there is nothing to undo
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - at beginning of history")
			return None

		if callable(current_state):
			current_state = current_state()

		entry = self.undo_stack.pop()
		self.redo_stack.append(HistoryEntry(copy.deepcopy(current_state), entry.description))

		self._notify_listeners()
		self._logger.debug(f"Undo: {entry.description} (undo: {len(self.undo_stack)}, redo: {len(self.redo_stack)})")
		return copy.deepcopy(entry.state)

	def redo(self, current_state):
		"""
		Re-apply the most recently undone action

		Args:
			current_state: The caller's state right now (pushed back onto undo)

		Returns:
			The state to restore, or None if there is nothing to redo
		"""
		if not self.can_redo():
			self._logger.debug("Cannot redo - at end of history")
			return None

		if callable(current_state):
			current_state = current_state()

		entry = self.redo_stack.pop()
		self.undo_stack.append(HistoryEntry(copy.deepcopy(current_state), entry.description))
		while len(self.undo_stack) > self.max_history:
			self.undo_stack.pop(0)

		self._notify_listeners()
		self._logger.debug(f"Redo: {entry.description} (undo: {len(self.undo_stack)}, redo: {len(self.redo_stack)})")
		return copy.deepcopy(entry.state)

	def can_undo(self):
		"""Check if undo is available"""
		return len(self.undo_stack) >= 2

	def can_redo(self):
		"""Check if redo is available"""
		return len(self.redo_stack) > 0

	def clear(self):
		"""Clear all history"""
		self.undo_stack = []
		self.redo_stack = []
		self._notify_listeners()
		self._logger.debug("History cleared")

	# ========================================
	# Listeners and descriptions
	# ========================================

	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes

		Args:
			callback: Function to call when history changes (receives can_undo, can_redo)
		"""
		self._listeners.append(callback)

	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)

	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception as e:
				self._logger.error(f"Error notifying listener: {e}")

	def get_undo_description(self):
		"""Description of the action undo would revert"""
		if self.can_undo():
			return self.undo_stack[-1].description
		return ""

	def get_redo_description(self):
		"""Description of the action redo would re-apply"""
		if self.can_redo():
			return self.redo_stack[-1].description
		return ""
