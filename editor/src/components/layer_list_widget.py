"""
Raster Layer Editor - Layer List Widget

Shows the layer stack top first with a visibility check box per layer,
the add/delete/reorder buttons and the active layer's opacity slider.
Rebuilt from the controller after every change.
"""

from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
                             QLabel, QListWidget, QListWidgetItem, QSlider)
from PyQt5.QtCore import Qt, QTimer


class LayerListWidget(QWidget):
	"""Layer panel bound to an EditorController"""
	
	def __init__(self, editor, parent=None):
		super().__init__(parent)
		self.editor = editor
		self._rebuild_pending = False
		self._opacity_recorded = False  # One history entry per slider drag
		
		self._setup_ui()
		editor.add_change_listener(self._schedule_rebuild)
		self.rebuild()
	
	def _setup_ui(self):
		"""Setup the layer list UI"""
		main_layout = QVBoxLayout(self)
		main_layout.setContentsMargins(4, 4, 4, 4)
		main_layout.setSpacing(4)
		
		main_layout.addWidget(QLabel("Layers"))
		
		self.list_widget = QListWidget()
		self.list_widget.itemChanged.connect(self._on_item_changed)
		self.list_widget.currentItemChanged.connect(self._on_current_item_changed)
		main_layout.addWidget(self.list_widget)
		
		# Layer actions
		button_row = QHBoxLayout()
		self.add_btn = QPushButton("Add")
		self.add_btn.setToolTip("Add Layer")
		self.add_btn.clicked.connect(lambda: self.editor.add_layer())
		self.delete_btn = QPushButton("Delete")
		self.delete_btn.setToolTip("Delete Active Layer")
		self.delete_btn.clicked.connect(lambda: self.editor.delete_layer())
		self.up_btn = QPushButton("Up")
		self.up_btn.setToolTip("Move Layer Up")
		self.up_btn.clicked.connect(lambda: self.editor.reorder_layer(1))
		self.down_btn = QPushButton("Down")
		self.down_btn.setToolTip("Move Layer Down")
		self.down_btn.clicked.connect(lambda: self.editor.reorder_layer(-1))
		for btn in (self.add_btn, self.delete_btn, self.up_btn, self.down_btn):
			button_row.addWidget(btn)
		main_layout.addLayout(button_row)
		
		# Opacity of the active layer
		opacity_row = QHBoxLayout()
		opacity_row.addWidget(QLabel("Opacity"))
		self.opacity_slider = QSlider(Qt.Horizontal)
		self.opacity_slider.setRange(0, 100)
		self.opacity_slider.sliderPressed.connect(self._on_opacity_pressed)
		self.opacity_slider.valueChanged.connect(self._on_opacity_changed)
		opacity_row.addWidget(self.opacity_slider)
		self.opacity_label = QLabel("100%")
		self.opacity_label.setMinimumWidth(40)
		opacity_row.addWidget(self.opacity_label)
		main_layout.addLayout(opacity_row)
	
	def _schedule_rebuild(self):
		# Coalesce the many change notifications of a drag into one rebuild
		if not self._rebuild_pending:
			self._rebuild_pending = True
			QTimer.singleShot(0, self.rebuild)
	
	def rebuild(self):
		"""Rebuild the list from the layer stack (top layer first)"""
		self._rebuild_pending = False
		stack = self.editor.document.layers
		
		self.list_widget.blockSignals(True)
		self.list_widget.clear()
		current_item = None
		for layer in reversed(stack.layers):
			item = QListWidgetItem(layer.name)
			item.setData(Qt.UserRole, layer.id)
			item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
			item.setCheckState(Qt.Checked if layer.visible else Qt.Unchecked)
			self.list_widget.addItem(item)
			if layer.id == stack.active_layer_id:
				current_item = item
		if current_item is not None:
			self.list_widget.setCurrentItem(current_item)
		self.list_widget.blockSignals(False)
		
		active = stack.active_layer
		self.delete_btn.setEnabled(len(stack) > 1)
		self.up_btn.setEnabled(stack.can_reorder(1))
		self.down_btn.setEnabled(stack.can_reorder(-1))
		
		if not self.opacity_slider.isSliderDown():
			self.opacity_slider.blockSignals(True)
			self.opacity_slider.setValue(round(active.opacity * 100) if active else 100)
			self.opacity_slider.blockSignals(False)
		self.opacity_label.setText(f"{self.opacity_slider.value()}%")
		self.opacity_slider.setEnabled(active is not None)
	
	def _on_item_changed(self, item):
		"""Check box toggled"""
		layer = self.editor.document.layers.get_layer(item.data(Qt.UserRole))
		if layer is None:
			return
		if layer.visible != (item.checkState() == Qt.Checked):
			self.editor.toggle_layer_visibility(layer.id)
	
	def _on_current_item_changed(self, current, previous):
		if current is not None:
			self.editor.set_active_layer(current.data(Qt.UserRole))
	
	def _on_opacity_pressed(self):
		self._opacity_recorded = False
	
	def _on_opacity_changed(self, value):
		self.opacity_label.setText(f"{value}%")
		dragging = self.opacity_slider.isSliderDown()
		record = not dragging or not self._opacity_recorded
		self.editor.set_layer_opacity(value / 100.0, record=record)
		if dragging:
			self._opacity_recorded = True
