"""History management and undo/redo for EditorController"""

from services.state_codec import capture_state, apply_snapshot, decode_layers


class HistoryMixin:
    """Undo/redo system and state capture/restoration"""

    def _capture_current_state(self):
        """Capture the current document state for history"""
        return capture_state(self.document)

    def _save_state(self, description):
        """Save the state as it is right before a mutating action"""
        if self.history.is_restoring:
            return False  # Don't save state during undo/redo
        return self.history.capture(self._capture_current_state, description)

    def _restore_state(self, state):
        """Restore a state from history

        Layer bitmaps are decoded before the document is touched; layers
        that fail to decode are dropped and reported. Any drag in progress
        is abandoned since the layers it holds are replaced.

        Returns:
            List of DecodeFailure, or None if the state could not be applied
        """
        if state is None:
            return []

        self.active_tool.cancel()
        with self.history.restoring():
            # A crop selection from another canvas size is meaningless now
            self.crop_session.rect = None
            try:
                decoded = decode_layers(state)
                failures = apply_snapshot(self.document, state, decoded)
            except Exception as e:
                self._logger.exception("Error restoring history state")
                self._fail(e, "Could not restore history state")
                return None

        if failures:
            self._report_decode_failures(failures)
        self._notify_changed()
        return failures

    def _report_decode_failures(self, failures):
        names = ", ".join(repr(f.layer_name) for f in failures)
        self._report(f"{len(failures)} layer(s) could not be restored and were dropped: {names}")

    def undo(self):
        """Undo the last action

        If the state cannot be applied the history entry is put back and
        the document returns to what it was before the undo.

        Returns:
            True if a state was restored, False otherwise
        """
        if not self.history.can_undo():
            return False
        description = self.history.get_undo_description()
        current = self._capture_current_state()
        state = self.history.undo(current)
        if self._restore_state(state) is None:
            self.history.redo(state)
            self._restore_state(current)
            return False
        self.last_action = f"Undo {description}" if description else "Undo"
        self._logger.info(self.last_action)
        return True

    def redo(self):
        """Redo the last undone action"""
        if not self.history.can_redo():
            return False
        description = self.history.get_redo_description()
        current = self._capture_current_state()
        state = self.history.redo(current)
        if self._restore_state(state) is None:
            self.history.undo(state)
            self._restore_state(current)
            return False
        self.last_action = f"Redo {description}" if description else "Redo"
        self._logger.info(self.last_action)
        return True

    def can_undo(self):
        return self.history.can_undo()

    def can_redo(self):
        return self.history.can_redo()

    def _reset_history(self, description):
        """Drop all history and record the current state as the initial entry"""
        self.history.clear()
        self.history.capture(self._capture_current_state, description)
