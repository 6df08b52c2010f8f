"""Undo/redo wiring and status bar updates for RasterEditorWindow"""


class HistoryMixin:
    """Undo/redo actions and status bar"""

    def undo(self):
        """Undo the last action"""
        self.editor.undo()

    def redo(self):
        """Redo the last undone action"""
        self.editor.redo()

    def _on_history_changed(self, can_undo, can_redo):
        """Called when history state changes to update UI"""
        for widget in (getattr(self, 'undo_action', None), getattr(self, 'undo_btn', None)):
            if widget is not None:
                widget.setEnabled(can_undo)
        for widget in (getattr(self, 'redo_action', None), getattr(self, 'redo_btn', None)):
            if widget is not None:
                widget.setEnabled(can_redo)
        self._update_status_bar()

    def _on_editor_message(self, message):
        """Rejected commands and restoration diagnostics"""
        self.statusBar().showMessage(message, 8000)

    def _update_status_bar(self):
        """Update status bar with current action and stats"""
        # Left side: Last action
        if self.editor.last_action:
            left_msg = f"Last action: {self.editor.last_action}"
        else:
            left_msg = "Ready"

        # Right side: Stats
        document = self.editor.document
        active = document.layers.active_layer
        right_msg = (f"{document.width} x {document.height} | Zoom: {round(document.zoom * 100)}% | "
                     f"Layers: {len(document.layers)} | Active: {active.name if active else '-'}")

        # Update labels
        if hasattr(self, 'status_left'):
            self.status_left.setText(left_msg)
        if hasattr(self, 'status_right'):
            self.status_right.setText(right_msg)
