"""Clipboard operations - paste images as layers"""
from PyQt5.QtWidgets import QApplication

from utils.qt_image import qimage_to_pil


class ClipboardActions:
    """Handles clipboard operations"""

    def __init__(self, main_window):
        """Initialize with reference to main window

        Args:
            main_window: The RasterEditorWindow instance
        """
        self.main_window = main_window

    def paste_image(self):
        """Paste the clipboard image as a new layer"""
        clipboard = QApplication.clipboard()
        qimage = clipboard.image()
        if qimage.isNull():
            self.main_window.status_left.setText("Clipboard has no image")
            return False
        return self.main_window.editor.paste_image(qimage_to_pil(qimage))
