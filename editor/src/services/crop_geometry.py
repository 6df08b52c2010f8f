"""
Raster Layer Editor - Crop Geometry

Pure functions computing axis-aligned crop rectangles in canvas pixels.
Nothing here touches editor state; every function takes the rectangle,
pointer positions and canvas bounds it needs and returns a new Rect.

The same rules serve the three crop interactions:
- fresh drag (start_drag / update_free_drag)
- resize by one of the eight handles (resize_by_handle)
- whole-rect translation (move_rect)

Aspect ratios are named: 'free', '1:1', '4:3', '16:9' ('square' is
accepted for '1:1'). Under a fixed ratio every returned rect satisfies
w / h == ratio up to float error, including degenerate and oversized drags.

Usage:
    rect = start_drag(Vec2(100, 100))
    rect = update_free_drag(Vec2(100, 100), Vec2(300, 250), '4:3', (800, 600))
    handle = handle_at_point(rect, pointer)
    if handle:
        rect = resize_by_handle(handle, rect, anchor, pointer, '4:3', (800, 600))
"""

from models.transform import Rect, Vec2
from utils.errors import ValidationError
from constants import (
    ASPECT_RATIOS, ASPECT_RATIO_ALIASES, CROP_HANDLES, CROP_HANDLE_SIZE
)

FREE = 'free'

# Handles whose fixed point sits on the right / bottom side of the rect
_FIXED_RIGHT = ('nw', 'w', 'sw')
_FIXED_BOTTOM = ('nw', 'n', 'ne')
_EDGE_VERTICAL = ('n', 's')
_EDGE_HORIZONTAL = ('e', 'w')


# ========================================
# Aspect ratios
# ========================================

def normalize_aspect_ratio(name) -> str:
    """Return the canonical aspect ratio name

    Raises:
        ValidationError: If the name is not a known ratio
    """
    if name is None:
        return FREE
    key = str(name).strip().lower()
    key = ASPECT_RATIO_ALIASES.get(key, key)
    if key != FREE and key not in ASPECT_RATIOS:
        raise ValidationError(f"Unknown aspect ratio: {name}")
    return key


def aspect_ratio_value(name):
    """Width/height ratio for a named aspect ratio, or None for 'free'"""
    key = normalize_aspect_ratio(name)
    if key == FREE:
        return None
    ratio_w, ratio_h = ASPECT_RATIOS[key]
    return ratio_w / ratio_h


# ========================================
# Internal helpers
# ========================================

def _sign(value):
    # Zero takes the positive direction so a ratio can still be derived
    return -1.0 if value < 0 else 1.0


def _apply_dominant_axis(w_raw, h_raw, ratio):
    """Recompute the proportionally smaller axis from the larger one, keeping signs"""
    if abs(w_raw) / ratio > abs(h_raw):
        h_raw = _sign(h_raw) * (abs(w_raw) / ratio)
    else:
        w_raw = _sign(w_raw) * (abs(h_raw) * ratio)
    return w_raw, h_raw


def _normalize(origin_x, origin_y, w_raw, h_raw):
    return Rect(min(origin_x, origin_x + w_raw), min(origin_y, origin_y + h_raw),
                abs(w_raw), abs(h_raw))


def _floor_size(w, h, ratio):
    """Floor both sides at one pixel; under a fixed ratio the short side sets the scale"""
    if ratio is None:
        return max(1.0, w), max(1.0, h)
    if w >= 1 and h >= 1:
        return w, h
    if ratio >= 1:
        h = max(1.0, h)
        return h * ratio, h
    w = max(1.0, w)
    return w, w / ratio


def _fit_size(w, h, bound_w, bound_h, ratio):
    """Shrink a size that does not fit the canvas (uniformly under a fixed ratio)"""
    if ratio is None:
        return min(w, bound_w), min(h, bound_h)
    scale = 1.0
    if w > bound_w:
        scale = min(scale, bound_w / w)
    if h > bound_h:
        scale = min(scale, bound_h / h)
    return w * scale, h * scale


def _clamp_origin(x, y, w, h, bound_w, bound_h):
    x = max(0.0, min(x, bound_w - w))
    y = max(0.0, min(y, bound_h - h))
    return x, y


# ========================================
# Public API
# ========================================

def start_drag(point: Vec2) -> Rect:
    """Zero-size rect anchored at the initial click"""
    return Rect(point.x, point.y, 0.0, 0.0)


def update_free_drag(anchor_point: Vec2, current_point: Vec2, aspect_ratio, canvas_bounds) -> Rect:
    """Rect spanned by a fresh drag from anchor_point to current_point

    Args:
        anchor_point: Canvas position where the drag started
        current_point: Current canvas pointer position
        aspect_ratio: Aspect ratio name ('free', '1:1', '4:3', '16:9')
        canvas_bounds: (width, height) of the canvas

    Returns:
        Normalized rect inside the canvas with w, h >= 1
    """
    bound_w, bound_h = canvas_bounds
    ratio = aspect_ratio_value(aspect_ratio)

    w_raw = current_point.x - anchor_point.x
    h_raw = current_point.y - anchor_point.y
    if ratio is not None:
        w_raw, h_raw = _apply_dominant_axis(w_raw, h_raw, ratio)

    rect = _normalize(anchor_point.x, anchor_point.y, w_raw, h_raw)
    w, h = _floor_size(rect.w, rect.h, ratio)
    w, h = _fit_size(w, h, bound_w, bound_h, ratio)
    x, y = _clamp_origin(rect.x, rect.y, w, h, bound_w, bound_h)
    w = min(w, bound_w - x)
    h = min(h, bound_h - y)
    return Rect(x, y, max(1.0, w), max(1.0, h))


def fixed_point(handle: str, rect: Rect) -> Vec2:
    """Corner of rect that stays put while dragging handle

    Edge handles report the corner at the start of the fixed edge
    (e.g. 'n' -> bottom-left), which is also where the derived axis grows from.
    """
    if handle not in CROP_HANDLES:
        raise ValueError(f"Unknown crop handle: {handle}")
    fx = rect.x + rect.w if handle in _FIXED_RIGHT else rect.x
    fy = rect.y + rect.h if handle in _FIXED_BOTTOM else rect.y
    return Vec2(fx, fy)


def resize_by_handle(handle: str, rect_at_start: Rect, anchor_mouse: Vec2, current_mouse: Vec2,
                     aspect_ratio, canvas_bounds) -> Rect:
    """Resize rect_at_start by dragging one of its eight handles

    The raw size is measured from the fixed point (the corner/edge opposite
    the handle) to the pointer, so the dragged handle follows the pointer.
    Edge handles move along one axis; the other axis keeps its original
    extent, or is derived from the ratio when one is set. Corner handles
    let the proportionally larger axis win.

    Growth is limited at the canvas edges by shortening the moving sides,
    so the fixed point does not move while it lies inside the canvas.

    Args:
        handle: One of 'nw', 'n', 'ne', 'e', 'se', 's', 'sw', 'w'
        rect_at_start: Rect when the resize started
        anchor_mouse: Pointer position when the resize started
        current_mouse: Current pointer position
        aspect_ratio: Aspect ratio name
        canvas_bounds: (width, height) of the canvas
    """
    bound_w, bound_h = canvas_bounds
    ratio = aspect_ratio_value(aspect_ratio)
    fixed = fixed_point(handle, rect_at_start)

    current_x, current_y = current_mouse
    if handle in _EDGE_VERTICAL:
        current_x = rect_at_start.x + rect_at_start.w
    if handle in _EDGE_HORIZONTAL:
        current_y = rect_at_start.y + rect_at_start.h

    w_raw = current_x - fixed.x
    h_raw = current_y - fixed.y

    if ratio is not None:
        if handle in _EDGE_HORIZONTAL:
            h_raw = abs(w_raw) / ratio
        elif handle in _EDGE_VERTICAL:
            w_raw = abs(h_raw) * ratio
        else:
            w_raw, h_raw = _apply_dominant_axis(w_raw, h_raw, ratio)

    # Room left between the fixed point and the canvas edge in each drag direction
    max_w = (bound_w - fixed.x) if w_raw >= 0 else fixed.x
    max_h = (bound_h - fixed.y) if h_raw >= 0 else fixed.y
    if ratio is None:
        w_raw = _sign(w_raw) * max(0.0, min(abs(w_raw), max_w))
        h_raw = _sign(h_raw) * max(0.0, min(abs(h_raw), max_h))
    else:
        scale = 1.0
        if abs(w_raw) > max_w:
            scale = min(scale, max(0.0, max_w) / abs(w_raw))
        if abs(h_raw) > max_h:
            scale = min(scale, max(0.0, max_h) / abs(h_raw))
        w_raw *= scale
        h_raw *= scale

    w_mag, h_mag = _floor_size(abs(w_raw), abs(h_raw), ratio)
    rect = _normalize(fixed.x, fixed.y, _sign(w_raw) * w_mag, _sign(h_raw) * h_mag)
    x, y = _clamp_origin(rect.x, rect.y, rect.w, rect.h, bound_w, bound_h)
    return Rect(x, y, rect.w, rect.h)


def move_rect(rect_at_start: Rect, anchor_mouse: Vec2, current_mouse: Vec2, canvas_bounds) -> Rect:
    """Translate rect_at_start by the pointer delta, keeping it inside the canvas"""
    bound_w, bound_h = canvas_bounds
    new_x = rect_at_start.x + (current_mouse.x - anchor_mouse.x)
    new_y = rect_at_start.y + (current_mouse.y - anchor_mouse.y)
    new_x, new_y = _clamp_origin(new_x, new_y, rect_at_start.w, rect_at_start.h, bound_w, bound_h)
    return Rect(new_x, new_y, rect_at_start.w, rect_at_start.h)


def handle_anchor(rect: Rect, handle: str) -> Vec2:
    """Centre of a handle hotspot (corner or edge midpoint)"""
    anchors = {
        'nw': (rect.x, rect.y),
        'n': (rect.x + rect.w / 2, rect.y),
        'ne': (rect.x + rect.w, rect.y),
        'e': (rect.x + rect.w, rect.y + rect.h / 2),
        'se': (rect.x + rect.w, rect.y + rect.h),
        's': (rect.x + rect.w / 2, rect.y + rect.h),
        'sw': (rect.x, rect.y + rect.h),
        'w': (rect.x, rect.y + rect.h / 2),
    }
    return Vec2(*anchors[handle])


def handle_at_point(rect, point: Vec2, handle_hit_size=CROP_HANDLE_SIZE):
    """First handle whose square hotspot contains point, or None

    None covers both "inside the rect" (caller starts a move) and
    "outside" (caller starts a new selection); use Rect.contains to tell
    them apart.
    """
    if rect is None:
        return None
    half = handle_hit_size / 2
    for handle in CROP_HANDLES:
        anchor = handle_anchor(rect, handle)
        if (anchor.x - half <= point.x <= anchor.x + half and
                anchor.y - half <= point.y <= anchor.y + half):
            return handle
    return None


def reconcile_aspect_ratio(rect: Rect, new_aspect_ratio, canvas_bounds=None) -> Rect:
    """Adapt an existing rect to a newly chosen aspect ratio

    The top-left corner stays fixed and the proportionally smaller side
    grows to match. With canvas_bounds the result is shrunk (ratio kept)
    and shifted as needed to stay inside the canvas.
    """
    ratio = aspect_ratio_value(new_aspect_ratio)
    w, h = rect.w, rect.h
    if ratio is not None:
        if w / ratio > h:
            h = w / ratio
        else:
            w = h * ratio
    w, h = _floor_size(w, h, ratio)
    x, y = rect.x, rect.y
    if canvas_bounds is not None:
        bound_w, bound_h = canvas_bounds
        w, h = _fit_size(w, h, bound_w, bound_h, ratio)
        x, y = _clamp_origin(x, y, w, h, bound_w, bound_h)
    return Rect(x, y, w, h)
