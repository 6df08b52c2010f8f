"""
Raster Layer Editor - File Operations Service

This module handles file I/O for projects, exported images and opened
images. Separates file operations from UI logic.

Project files are JSON:
    {width, height, zoom, activeLayerId, nextLayerId,
     layers: [{id, name, x, y, opacity, visible, imageDataURL}]}
where imageDataURL is a base64 PNG data URL.
"""

import json
import base64
import logging

from models.snapshot import LayerSnapshot, StateSnapshot
from services.surface import Surface
from utils.errors import DecodeFailure, ProjectFormatError
from constants import DEFAULT_ZOOM, PNG_DATA_URL_PREFIX

_logger = logging.getLogger('ProjectIO')


def _bytes_to_data_url(encoded: bytes) -> str:
    return PNG_DATA_URL_PREFIX + base64.b64encode(encoded).decode("ascii")


def snapshot_to_project_dict(snapshot: StateSnapshot, next_layer_id=None):
    """Build the JSON-serializable project structure

    Args:
        snapshot: Captured editor state
        next_layer_id: Id counter to persist (defaults to the snapshot's)
    """
    if next_layer_id is None:
        next_layer_id = snapshot.next_layer_id
    if next_layer_id is None:
        next_layer_id = max(snapshot.layer_ids, default=0) + 1
    return {
        'width': snapshot.width,
        'height': snapshot.height,
        'zoom': snapshot.zoom,
        'activeLayerId': snapshot.active_layer_id,
        'nextLayerId': next_layer_id,
        'layers': [
            {
                'id': layer.id,
                'name': layer.name,
                'x': layer.offset_x,
                'y': layer.offset_y,
                'opacity': layer.opacity,
                'visible': layer.visible,
                'imageDataURL': _bytes_to_data_url(layer.encoded_bitmap),
            }
            for layer in snapshot.layers
        ],
    }


def _require_positive_int(data, key):
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value or value <= 0:
        raise ProjectFormatError(f"Project field '{key}' must be a positive number")
    return int(value)


def project_dict_to_snapshot(data) -> StateSnapshot:
    """Validate a parsed project structure and turn it into a snapshot

    Layers whose image data URL is unreadable keep empty bytes; they fail
    to decode on restoration and are dropped there with a diagnostic.

    Raises:
        ProjectFormatError: If required fields are missing or malformed
    """
    if not isinstance(data, dict):
        raise ProjectFormatError("Project file must contain a JSON object")

    width = _require_positive_int(data, 'width')
    height = _require_positive_int(data, 'height')
    raw_layers = data.get('layers')
    if not isinstance(raw_layers, list):
        raise ProjectFormatError("Project field 'layers' must be a list")

    layers = []
    seen_ids = set()
    for index, raw in enumerate(raw_layers):
        if not isinstance(raw, dict):
            raise ProjectFormatError(f"Layer entry {index} must be an object")
        try:
            layer_id = int(raw['id'])
        except (KeyError, TypeError, ValueError):
            raise ProjectFormatError(f"Layer entry {index} has no valid id")
        if layer_id <= 0 or layer_id in seen_ids:
            raise ProjectFormatError(f"Layer entry {index} has an invalid or duplicate id {layer_id}")
        seen_ids.add(layer_id)

        try:
            encoded = Surface.data_url_to_bytes(raw.get('imageDataURL'))
        except DecodeFailure as e:
            _logger.error(f"Layer {raw.get('name')!r} (id {layer_id}) has unreadable image data: {e}")
            encoded = b""

        try:
            layers.append(LayerSnapshot(
                id=layer_id,
                name=str(raw.get('name') or f"Layer {layer_id}"),
                offset_x=float(raw.get('x', 0.0)),
                offset_y=float(raw.get('y', 0.0)),
                opacity=min(1.0, max(0.0, float(raw.get('opacity', 1.0)))),
                visible=bool(raw.get('visible', True)),
                encoded_bitmap=encoded,
            ))
        except (TypeError, ValueError) as e:
            raise ProjectFormatError(f"Layer entry {index} has malformed properties: {e}")

    next_layer_id = data.get('nextLayerId')
    derived_next = max(seen_ids, default=0) + 1
    try:
        next_layer_id = max(int(next_layer_id), derived_next) if next_layer_id else derived_next
    except (TypeError, ValueError):
        next_layer_id = derived_next

    try:
        zoom = float(data.get('zoom', DEFAULT_ZOOM))
    except (TypeError, ValueError):
        zoom = DEFAULT_ZOOM

    active_layer_id = data.get('activeLayerId')
    return StateSnapshot(
        width=width,
        height=height,
        zoom=zoom,
        active_layer_id=active_layer_id if active_layer_id in seen_ids else None,
        layers=tuple(layers),
        next_layer_id=next_layer_id,
    )


def save_project(snapshot: StateSnapshot, filename, next_layer_id=None):
    """Write a project file

    Raises:
        OSError: If the file cannot be written
    """
    project = snapshot_to_project_dict(snapshot, next_layer_id)
    with open(filename, 'w', encoding='utf-8') as f:
        json.dump(project, f, indent=2)
    _logger.info(f"Project saved to {filename}")


def load_project(filename) -> StateSnapshot:
    """Read and validate a project file

    Raises:
        OSError: If the file cannot be read
        ProjectFormatError: If the content is not a valid project
    """
    with open(filename, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ProjectFormatError(f"Project file is not valid JSON: {e}")
    snapshot = project_dict_to_snapshot(data)
    _logger.info(f"Project loaded from {filename}")
    return snapshot


def export_png(surface: Surface, filename):
    """Write a flattened image as PNG

    Raises:
        OSError: If the file cannot be written
    """
    surface.image.save(filename, format="PNG")
    _logger.info(f"Image exported to {filename}")


def load_image(filename) -> Surface:
    """Open an image file as an RGBA surface

    Raises:
        OSError: If the file cannot be read
        DecodeFailure: If the file is not a readable image
    """
    with open(filename, 'rb') as f:
        data = f.read()
    return Surface.decode(data)
