"""Coordinate transformation utilities for the canvas.

Provides conversion between the three coordinate systems the editor uses:
- Screen space (widget pixels, Y-down)
- Canvas space (document pixels, origin at the canvas top-left)
- Layer space (a layer's bitmap pixels, canvas space minus the layer offset)

Points may be Vec2 or any (x, y) pair.
"""

from models.transform import Vec2


def screen_to_canvas(screen_point, stage_origin, zoom):
	"""Convert a widget pixel position to canvas coordinates.
	
	Args:
		screen_point: (x, y) in widget pixels
		stage_origin: (x, y) of the canvas top-left corner in widget pixels
		zoom: Display zoom factor
		
	Returns:
		Vec2 in canvas pixels
	"""
	screen_x, screen_y = screen_point
	origin_x, origin_y = stage_origin
	return Vec2((screen_x - origin_x) / zoom, (screen_y - origin_y) / zoom)


def canvas_to_screen(canvas_point, stage_origin, zoom):
	"""Inverse of screen_to_canvas()."""
	canvas_x, canvas_y = canvas_point
	origin_x, origin_y = stage_origin
	return Vec2(canvas_x * zoom + origin_x, canvas_y * zoom + origin_y)


def canvas_to_layer(canvas_point, layer):
	"""Convert canvas coordinates to the layer's local bitmap coordinates."""
	canvas_x, canvas_y = canvas_point
	return Vec2(canvas_x - layer.offset_x, canvas_y - layer.offset_y)


def screen_to_layer(screen_point, stage_origin, zoom, layer):
	"""Widget pixels straight to layer-local coordinates."""
	return canvas_to_layer(screen_to_canvas(screen_point, stage_origin, zoom), layer)
