"""Validation of numeric user input (New, Resize, Scale Layer)"""

import math

from utils.errors import ValidationError


def _parse_number(value, label):
	if isinstance(value, bool):
		raise ValidationError(f"{label} must be a number")
	if isinstance(value, str):
		value = value.strip()
	try:
		number = float(value)
	except (TypeError, ValueError):
		raise ValidationError(f"{label} must be a number, got {value!r}")
	if math.isnan(number) or math.isinf(number):
		raise ValidationError(f"{label} must be a finite number")
	if number <= 0:
		raise ValidationError(f"{label} must be greater than zero")
	return number


def parse_dimension(value, label="Dimension"):
	"""Parse a canvas width or height in pixels
	
	Raises:
		ValidationError: For NaN, non-numeric or non-positive input
	"""
	number = _parse_number(value, label)
	pixels = int(number)
	if pixels < 1:
		raise ValidationError(f"{label} must be at least 1 pixel")
	return pixels


def parse_percentage(value, label="Scale"):
	"""Parse a scale percentage (100 = unchanged) and return it as a factor"""
	return _parse_number(value, label) / 100.0
