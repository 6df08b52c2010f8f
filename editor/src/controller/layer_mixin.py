"""Layer commands for EditorController"""

from utils.errors import InvariantViolation


class LayerMixin:
    """Add, delete, reorder and edit layers of the stack"""

    def add_layer(self, name=None, source=None):
        """Add a layer on top of the stack and make it active

        Args:
            name: Display name ("Layer N" if omitted)
            source: Optional Surface or Pillow image drawn at (0, 0)
        """
        self._save_state("Add Layer")
        layer = self.document.layers.add_layer(name, source)
        return self._done(f"Added {layer.name}")

    def paste_image(self, source):
        """Add a layer seeded from a clipboard image"""
        self._save_state("Paste Image")
        self.document.layers.add_layer("Pasted Image", source)
        return self._done("Pasted image")

    def delete_layer(self):
        """Delete the active layer; the last remaining layer cannot be deleted"""
        stack = self.document.layers
        if len(stack) <= 1:
            return self._fail(InvariantViolation("Cannot delete the last layer"))
        self._save_state("Delete Layer")
        removed = stack.delete_active_layer()
        return self._done(f"Deleted {removed.name}")

    def reorder_layer(self, direction):
        """Move the active layer up (+1) or down (-1); no-op at the boundary"""
        stack = self.document.layers
        if not stack.can_reorder(direction):
            return False
        self._save_state("Move Layer Up" if direction > 0 else "Move Layer Down")
        stack.reorder(direction)
        return self._done("Reordered layers")

    def set_active_layer(self, layer_id):
        """Select the layer tools act on; unknown ids are ignored"""
        if not self.document.layers.set_active(layer_id):
            return False
        self._notify_changed()
        return True

    def set_layer_opacity(self, value, record=True):
        """Set the active layer's opacity (clamped to [0, 1])

        Args:
            value: Opacity between 0 and 1
            record: False for intermediate slider updates of one gesture
        """
        layer = self.document.layers.active_layer
        if layer is None:
            return False
        if record:
            self._save_state("Change Opacity")
        layer.opacity = value
        return self._done(f"Opacity of {layer.name} set to {round(layer.opacity * 100)}%")

    def toggle_layer_visibility(self, layer_id):
        """Show or hide a layer"""
        layer = self.document.layers.get_layer(layer_id)
        if layer is None:
            return False
        self._save_state("Toggle Visibility")
        layer.visible = not layer.visible
        return self._done(f"{'Showed' if layer.visible else 'Hid'} {layer.name}")
