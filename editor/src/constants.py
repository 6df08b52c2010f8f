"""
Raster Layer Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas defaults and zoom limits
- History limits
- Crop handle and aspect ratio definitions
- Brush and text tool defaults
- File naming defaults
"""

# ======================================================================
# CANVAS
# ======================================================================

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600

# Background layer created by New Canvas
BACKGROUND_LAYER_NAME = "Background"
BACKGROUND_FILL_COLOR = "#ffffff"

# Name given to layers added without an explicit name ("Layer 3")
DEFAULT_LAYER_NAME_PATTERN = "Layer {index}"

# ======================================================================
# ZOOM
# ======================================================================

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
DEFAULT_ZOOM = 1.0
ZOOM_STEP = 0.1

# Padding (pixels) kept around the canvas by Fit To Screen
FIT_TO_SCREEN_PADDING = 40

# ======================================================================
# HISTORY
# ======================================================================

# Maximum number of snapshots kept on the undo stack (oldest evicted first)
MAX_HISTORY_ENTRIES = 20

# ======================================================================
# CROP
# ======================================================================

# Side of the square hotspot centred on each crop handle
CROP_HANDLE_SIZE = 8

# Handle names in hit-test priority order (corners and edge midpoints)
CROP_HANDLES = ('nw', 'n', 'ne', 'e', 'se', 's', 'sw', 'w')

# Aspect ratio name -> (ratio_w, ratio_h); 'free' has no entry
ASPECT_RATIOS = {
    '1:1': (1, 1),
    '4:3': (4, 3),
    '16:9': (16, 9),
}

# Alternative names accepted for aspect ratios
ASPECT_RATIO_ALIASES = {
    'square': '1:1',
}

# ======================================================================
# TOOLS
# ======================================================================

TOOL_NAMES = ('move', 'brush', 'eraser', 'text', 'crop')
DEFAULT_TOOL = 'move'

DEFAULT_BRUSH_SIZE = 20
DEFAULT_BRUSH_COLOR = "#ffffff"

DEFAULT_TEXT_CONTENT = "Hello World"
DEFAULT_TEXT_SIZE = 40
DEFAULT_TEXT_COLOR = "#ffffff"

# Fonts tried in order for the text tool; Pillow's built-in font is the last resort
TEXT_FONT_CANDIDATES = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf")

# ======================================================================
# FILES
# ======================================================================

PROJECT_FILE_EXTENSION = ".json"
DEFAULT_PROJECT_FILENAME = "project.json"
DEFAULT_EXPORT_FILENAME = "image.png"

# Prefix of the data URLs stored in project files
PNG_DATA_URL_PREFIX = "data:image/png;base64,"

# User configuration
CONFIG_DIR_NAME = ".rastereditor"
CONFIG_FILE_NAME = "config.json"
MAX_RECENT_PROJECTS = 10
