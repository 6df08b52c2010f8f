"""
Raster Layer Editor - Compositor

Source-over blending of RGBA bitmaps with numpy. Used to flatten the
layer stack (canvas display and PNG export) and to blit one surface
onto another.
"""

import numpy as np

from services.surface import Surface


def composite_onto(base: np.ndarray, top: np.ndarray, x: int, y: int, opacity: float = 1.0):
    """Blend top over base in place with its top-left corner at (x, y)

    Both arrays are (h, w, 4) uint8 with straight (non-premultiplied)
    alpha. The part of top falling outside base is ignored, so negative
    or oversized offsets are fine.
    """
    base_h, base_w = base.shape[:2]
    top_h, top_w = top.shape[:2]

    # Visible intersection in base coordinates
    left = max(0, x)
    upper = max(0, y)
    right = min(base_w, x + top_w)
    lower = min(base_h, y + top_h)
    if right <= left or lower <= upper or opacity <= 0:
        return base

    dst = base[upper:lower, left:right].astype(np.float32) / 255.0
    src = top[upper - y:lower - y, left - x:right - x].astype(np.float32) / 255.0

    src_alpha = src[..., 3:4] * float(opacity)
    dst_alpha = dst[..., 3:4]
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)

    # Avoid dividing by zero where both pixels are fully transparent
    safe_alpha = np.where(out_alpha > 0, out_alpha, 1.0)
    out_rgb = (src[..., :3] * src_alpha + dst[..., :3] * dst_alpha * (1.0 - src_alpha)) / safe_alpha

    out = np.concatenate([out_rgb, out_alpha], axis=-1)
    base[upper:lower, left:right] = np.clip(np.round(out * 255.0), 0, 255).astype(np.uint8)
    return base


def flatten_layers(layers, width, height) -> Surface:
    """Paint every visible layer bottom-to-top at its offset and opacity

    Invisible layers are skipped entirely.

    Args:
        layers: Layers in back-to-front order
        width, height: Canvas size

    Returns:
        New canvas-sized Surface
    """
    canvas = np.zeros((int(height), int(width), 4), dtype=np.uint8)
    for layer in layers:
        if not layer.visible:
            continue
        composite_onto(canvas, layer.bitmap.to_array(),
                       int(round(layer.offset_x)), int(round(layer.offset_y)),
                       layer.opacity)
    return Surface.from_array(canvas)
