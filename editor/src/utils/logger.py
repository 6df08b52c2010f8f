"""Global logging and error handling utilities"""
import logging
from PyQt5.QtWidgets import QMessageBox

_main_window = None
_logger = logging.getLogger('Editor')

def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window

def one_line(message) -> str:
    """Collapse a message onto a single line for status/popup display"""
    return " ".join(str(message).split())

def loggerNotify(e: Exception, user_message: str = None, title: str = "Warning") -> str:
    """Report a user-facing operation failure without raising

    Used at command boundaries where the editor state is already known to
    be unchanged (validation failures, rejected layer deletes, unreadable
    files).

    Returns:
        The single-line message that was shown
    """
    message = one_line(user_message if user_message else str(e))
    _logger.warning("%s (%s: %s)", message, type(e).__name__, e)

    if _main_window:
        QMessageBox.warning(_main_window, title, message)

    return message
