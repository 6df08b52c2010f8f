"""Modal dialogs for New Canvas, Resize Canvas and Scale Layer.

The dialogs return the raw text the user typed; validation happens in
the controller so invalid input is reported the same way everywhere.
"""

from PyQt5.QtWidgets import QDialog, QFormLayout, QLineEdit, QDialogButtonBox


class DimensionDialog(QDialog):
	"""Width/height or percentage entry"""
	
	def __init__(self, title, fields, parent=None):
		"""
		Args:
			title: Window title
			fields: List of (label, initial_text)
		"""
		super().__init__(parent)
		self.setWindowTitle(title)
		self.setModal(True)
		
		layout = QFormLayout(self)
		self.inputs = []
		for label, initial in fields:
			line_edit = QLineEdit(str(initial))
			layout.addRow(label, line_edit)
			self.inputs.append(line_edit)
		
		buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
		buttons.accepted.connect(self.accept)
		buttons.rejected.connect(self.reject)
		layout.addRow(buttons)
	
	def values(self):
		return [line_edit.text() for line_edit in self.inputs]


def ask_dimensions(parent, title, width, height):
	"""(width_text, height_text), or None if cancelled"""
	dialog = DimensionDialog(title, [("Width (px)", width), ("Height (px)", height)], parent)
	if dialog.exec_() != QDialog.Accepted:
		return None
	return tuple(dialog.values())


def ask_scale(parent):
	"""Scale percentage text, or None if cancelled"""
	dialog = DimensionDialog("Scale Active Layer", [("Scale (%)", 100)], parent)
	if dialog.exec_() != QDialog.Accepted:
		return None
	return dialog.values()[0]
