"""Menu bar creation and menu action handlers for RasterEditorWindow"""

from PyQt5.QtWidgets import QActionGroup

from constants import TOOL_NAMES, ASPECT_RATIOS


class MenuMixin:
    """Menu bar and menu action handlers"""

    def _create_menu_bar(self):
        """Create the menu bar with File, Edit, Image, Layer, View menus"""
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")

        new_action = file_menu.addAction("&New Canvas...")
        new_action.setShortcut("Ctrl+N")
        new_action.triggered.connect(self.file_actions.new_canvas)

        open_action = file_menu.addAction("&Open Project...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.file_actions.open_project)

        # Recent Files submenu
        self.recent_menu = file_menu.addMenu("Recent Projects")
        self._update_recent_files_menu()

        file_menu.addSeparator()

        save_action = file_menu.addAction("&Save Project")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.file_actions.save_project)

        save_as_action = file_menu.addAction("Save Project &As...")
        save_as_action.setShortcut("Ctrl+Shift+S")
        save_as_action.triggered.connect(self.file_actions.save_project_as)

        file_menu.addSeparator()

        open_image_action = file_menu.addAction("Open &Image...")
        open_image_action.setShortcut("Ctrl+I")
        open_image_action.triggered.connect(self.file_actions.open_image)

        export_png_action = file_menu.addAction("Export as &PNG...")
        export_png_action.setShortcut("Ctrl+E")
        export_png_action.triggered.connect(self.file_actions.export_png)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)

        # Edit Menu
        self.edit_menu = menubar.addMenu("&Edit")

        self.undo_action = self.edit_menu.addAction("&Undo")
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)
        self.undo_action.setEnabled(False)

        self.redo_action = self.edit_menu.addAction("&Redo")
        self.redo_action.setShortcut("Ctrl+Y")
        self.redo_action.triggered.connect(self.redo)
        self.redo_action.setEnabled(False)

        self.edit_menu.addSeparator()

        paste_action = self.edit_menu.addAction("&Paste Image as Layer")
        paste_action.setShortcut("Ctrl+V")
        paste_action.triggered.connect(self.clipboard_actions.paste_image)

        # Image Menu
        image_menu = menubar.addMenu("&Image")

        resize_action = image_menu.addAction("&Resize Canvas...")
        resize_action.triggered.connect(self.file_actions.resize_canvas)

        image_menu.addSeparator()

        # Aspect ratio submenu (crop tool)
        ratio_menu = image_menu.addMenu("Crop &Aspect Ratio")
        self.ratio_action_group = QActionGroup(self)
        self.ratio_actions = {}
        for ratio in ('free',) + tuple(ASPECT_RATIOS):
            action = ratio_menu.addAction(ratio.capitalize() if ratio == 'free' else ratio)
            action.setCheckable(True)
            action.triggered.connect(lambda checked, r=ratio: self.editor.set_aspect_ratio(r))
            self.ratio_action_group.addAction(action)
            self.ratio_actions[ratio] = action

        self.apply_crop_action = image_menu.addAction("Apply &Crop")
        self.apply_crop_action.setShortcut("Return")
        self.apply_crop_action.triggered.connect(lambda: self.editor.apply_crop())

        cancel_crop_action = image_menu.addAction("Cancel Crop")
        cancel_crop_action.setShortcut("Escape")
        cancel_crop_action.triggered.connect(lambda: self.editor.cancel_crop())

        # Layer Menu
        layer_menu = menubar.addMenu("&Layer")

        add_layer_action = layer_menu.addAction("&Add Layer")
        add_layer_action.setShortcut("Ctrl+Shift+N")
        add_layer_action.triggered.connect(lambda: self.editor.add_layer())

        delete_layer_action = layer_menu.addAction("&Delete Layer")
        delete_layer_action.triggered.connect(lambda: self.editor.delete_layer())

        layer_menu.addSeparator()

        up_action = layer_menu.addAction("Move Layer &Up")
        up_action.setShortcut("Ctrl+]")
        up_action.triggered.connect(lambda: self.editor.reorder_layer(1))

        down_action = layer_menu.addAction("Move Layer &Down")
        down_action.setShortcut("Ctrl+[")
        down_action.triggered.connect(lambda: self.editor.reorder_layer(-1))

        layer_menu.addSeparator()

        scale_action = layer_menu.addAction("&Scale Layer...")
        scale_action.triggered.connect(self.file_actions.scale_layer)

        # View Menu
        view_menu = menubar.addMenu("&View")

        zoom_in_action = view_menu.addAction("Zoom &In")
        zoom_in_action.setShortcut("Ctrl+=")
        zoom_in_action.triggered.connect(lambda: self.editor.zoom_in())

        zoom_out_action = view_menu.addAction("Zoom &Out")
        zoom_out_action.setShortcut("Ctrl+-")
        zoom_out_action.triggered.connect(lambda: self.editor.zoom_out())

        zoom_fit_action = view_menu.addAction("&Fit to Screen")
        zoom_fit_action.setShortcut("Ctrl+0")
        zoom_fit_action.triggered.connect(lambda: self.editor.fit_to_screen())

        view_menu.addSeparator()

        # Tool selection
        tools_menu = view_menu.addMenu("&Tools")
        self.tool_action_group = QActionGroup(self)
        self.tool_actions = {}
        tool_shortcuts = {'move': "V", 'brush': "B", 'eraser': "E", 'text': "T", 'crop': "C"}
        for name in TOOL_NAMES:
            action = tools_menu.addAction(name.capitalize())
            action.setCheckable(True)
            action.setShortcut(tool_shortcuts[name])
            action.triggered.connect(lambda checked, n=name: self.editor.select_tool(n))
            self.tool_action_group.addAction(action)
            self.tool_actions[name] = action

    def _update_menu_actions(self):
        """Sync checkable menu items and enabled state with the editor"""
        editor = self.editor
        self.tool_actions[editor.active_tool_name].setChecked(True)
        self.ratio_actions[editor.crop_session.aspect_ratio].setChecked(True)
        self.apply_crop_action.setEnabled(editor.crop_session.rect is not None)
        if hasattr(self, 'tool_buttons'):
            self.tool_buttons[editor.active_tool_name].setChecked(True)
