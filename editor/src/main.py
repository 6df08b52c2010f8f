import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    # Get the directory containing this file (editor/src)
    current_dir = os.path.dirname(os.path.abspath(__file__))
    # Add it to the Python path
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QSplitter, QApplication, QLabel
from PyQt5.QtCore import Qt, QTimer

# Component imports
from components.canvas_widget import CanvasWidget
from components.layer_list_widget import LayerListWidget
from components.toolbar import create_toolbar, create_options_bar

# Controller
from controller import EditorController

# Utility imports
from utils.logger import set_main_window
from version import get_version

# Action imports
from actions.file_actions import FileActions
from actions.clipboard_actions import ClipboardActions

# Mixin imports
from main_window.menu_mixin import MenuMixin
from main_window.config_mixin import ConfigMixin
from main_window.history_mixin import HistoryMixin


class RasterEditorWindow(MenuMixin, ConfigMixin, HistoryMixin, QMainWindow):
    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger('RasterEditorWindow')
        self.resize(1280, 800)
        self.setMinimumSize(960, 600)

        # Recent files and user settings
        self._load_config()

        # Editing session (single source of truth for document and history)
        self.editor = EditorController(max_history=self.config.max_history)
        self.editor.set_brush(size=self.config.brush_size, color=self.config.brush_color)
        self.editor.history.add_listener(self._on_history_changed)
        self.editor.add_message_listener(self._on_editor_message)
        self.editor.add_change_listener(self._on_editor_changed)

        # Initialize global logger with main window reference
        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)
        self.clipboard_actions = ClipboardActions(self)

        self.setup_ui()
        self._update_window_title()

        # Fit once the canvas widget has its real size
        QTimer.singleShot(0, self.editor.fit_to_screen)

    # ============= UI Setup =============

    def setup_ui(self):
        self._create_menu_bar()
        create_toolbar(self)
        self.options_bar, self._update_tool_options = create_options_bar(self)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        # Create splitter for resizable panels
        splitter = QSplitter(Qt.Horizontal)

        self.canvas_widget = CanvasWidget(self.editor)
        splitter.addWidget(self.canvas_widget)

        self.layer_list_widget = LayerListWidget(self.editor)
        splitter.addWidget(self.layer_list_widget)

        splitter.setSizes([1000, 280])
        splitter.setCollapsible(0, False)
        main_layout.addWidget(splitter)

        # Status bar: temporary messages replace the left label
        self.status_left = QLabel("Ready")
        self.status_right = QLabel()
        self.statusBar().addWidget(self.status_left, 1)
        self.statusBar().addPermanentWidget(self.status_right)

        self._on_history_changed(self.editor.can_undo(), self.editor.can_redo())
        self._update_menu_actions()

    # ============= Editor callbacks =============

    def new_canvas(self):
        self.file_actions.new_canvas()

    def open_project(self):
        self.file_actions.open_project()

    def save_project(self):
        self.file_actions.save_project()

    def export_png(self):
        self.file_actions.export_png()

    def _on_editor_changed(self):
        if hasattr(self, 'options_bar'):
            self._update_tool_options()
            self._update_menu_actions()
            self._update_status_bar()

    def closeEvent(self, event):
        self._save_config()
        super().closeEvent(event)


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("Raster Layer Editor")
    app.setApplicationVersion(get_version())

    window = RasterEditorWindow()
    window.show()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
