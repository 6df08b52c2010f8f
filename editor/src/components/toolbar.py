from PyQt5 import QtCore
from PyQt5.QtWidgets import (QToolBar, QPushButton, QWidget, QSizePolicy, QLabel,
                             QSpinBox, QLineEdit, QButtonGroup, QColorDialog)
from PyQt5.QtGui import QColor

from constants import TOOL_NAMES, ASPECT_RATIOS


def create_toolbar(parent):
	"""Create the main toolbar with file, history and tool buttons"""
	toolbar = QToolBar("Main Toolbar")
	toolbar.setMovable(False)
	toolbar.setIconSize(QtCore.QSize(24, 24))
	parent.addToolBar(toolbar)
	
	# Add toolbar buttons
	new_btn = QPushButton("New")
	open_btn = QPushButton("Open")
	save_btn = QPushButton("Save")
	undo_btn = QPushButton("Undo")
	redo_btn = QPushButton("Redo")
	
	# Store references to undo/redo buttons for state management
	parent.undo_btn = undo_btn
	parent.redo_btn = redo_btn
	
	# Connect buttons to parent methods
	new_btn.clicked.connect(parent.new_canvas)
	open_btn.clicked.connect(parent.open_project)
	save_btn.clicked.connect(parent.save_project)
	undo_btn.clicked.connect(parent.undo)
	redo_btn.clicked.connect(parent.redo)
	
	# Initially disable undo/redo
	undo_btn.setEnabled(False)
	redo_btn.setEnabled(False)
	
	toolbar.addWidget(new_btn)
	toolbar.addWidget(open_btn)
	toolbar.addWidget(save_btn)
	toolbar.addSeparator()
	toolbar.addWidget(undo_btn)
	toolbar.addWidget(redo_btn)
	toolbar.addSeparator()
	
	# Tool buttons (exclusive)
	parent.tool_buttons = {}
	tool_group = QButtonGroup(toolbar)
	tool_group.setExclusive(True)
	for name in TOOL_NAMES:
		btn = QPushButton(name.capitalize())
		btn.setCheckable(True)
		btn.clicked.connect(lambda checked, n=name: parent.editor.select_tool(n))
		tool_group.addButton(btn)
		toolbar.addWidget(btn)
		parent.tool_buttons[name] = btn
	parent.tool_buttons[parent.editor.active_tool_name].setChecked(True)
	
	# Add spacer to push export to the right
	spacer_widget = QWidget()
	spacer_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
	toolbar.addWidget(spacer_widget)
	
	toolbar.addSeparator()
	export_btn = QPushButton("Export PNG")
	export_btn.clicked.connect(parent.export_png)
	toolbar.addWidget(export_btn)
	
	return toolbar


def _color_button(initial, on_picked):
	"""Button showing a colour swatch that opens a colour dialog"""
	btn = QPushButton()
	btn.setFixedWidth(40)
	
	def show(color):
		btn.setStyleSheet(f"background-color: {color};")
		btn.setProperty("color", color)
	
	def pick():
		color = QColorDialog.getColor(QColor(btn.property("color")), btn)
		if color.isValid():
			show(color.name())
			on_picked(color.name())
	
	show(initial)
	btn.clicked.connect(pick)
	return btn


def create_options_bar(parent):
	"""Second toolbar with the options of the active tool
	
	Brush options show for brush/eraser, text options for text, aspect
	ratio and apply/cancel for crop. Call the returned update function
	after the active tool changes.
	"""
	editor = parent.editor
	toolbar = QToolBar("Tool Options")
	toolbar.setMovable(False)
	parent.addToolBarBreak()
	parent.addToolBar(toolbar)
	
	groups = {'brush': [], 'text': [], 'crop': []}
	
	def add(group, widget):
		groups[group].append(toolbar.addWidget(widget))
	
	# Brush / eraser
	add('brush', QLabel(" Size "))
	brush_size = QSpinBox()
	brush_size.setRange(1, 200)
	brush_size.setValue(editor.brush_size)
	brush_size.valueChanged.connect(lambda v: editor.set_brush(size=v))
	add('brush', brush_size)
	add('brush', QLabel(" Color "))
	add('brush', _color_button(editor.brush_color, lambda c: editor.set_brush(color=c)))
	
	# Text
	add('text', QLabel(" Text "))
	text_content = QLineEdit(editor.text_content)
	text_content.setMaximumWidth(200)
	text_content.textChanged.connect(lambda t: editor.set_text(content=t))
	add('text', text_content)
	add('text', QLabel(" Size "))
	text_size = QSpinBox()
	text_size.setRange(1, 500)
	text_size.setValue(editor.text_size)
	text_size.valueChanged.connect(lambda v: editor.set_text(size=v))
	add('text', text_size)
	add('text', QLabel(" Color "))
	add('text', _color_button(editor.text_color, lambda c: editor.set_text(color=c)))
	
	# Crop
	add('crop', QLabel(" Ratio "))
	ratio_group = QButtonGroup(toolbar)
	ratio_group.setExclusive(True)
	ratio_buttons = {}
	for ratio in ('free',) + tuple(ASPECT_RATIOS):
		btn = QPushButton(ratio.capitalize() if ratio == 'free' else ratio)
		btn.setCheckable(True)
		btn.clicked.connect(lambda checked, r=ratio: editor.set_aspect_ratio(r))
		ratio_group.addButton(btn)
		ratio_buttons[ratio] = btn
		add('crop', btn)
	apply_btn = QPushButton("Apply Crop")
	apply_btn.clicked.connect(lambda: editor.apply_crop())
	add('crop', apply_btn)
	cancel_btn = QPushButton("Cancel")
	cancel_btn.clicked.connect(lambda: editor.cancel_crop())
	add('crop', cancel_btn)
	
	def update_options():
		tool = editor.active_tool_name
		visible_group = 'brush' if tool in ('brush', 'eraser') else tool
		for group, actions in groups.items():
			for action in actions:
				action.setVisible(group == visible_group)
		ratio_buttons[editor.crop_session.aspect_ratio].setChecked(True)
		apply_btn.setEnabled(editor.crop_session.rect is not None)
	
	update_options()
	return toolbar, update_options
