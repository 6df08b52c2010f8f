"""
Raster Layer Editor - State Codec

Converts between the live Document and immutable StateSnapshots.

capture_state() encodes every layer bitmap to PNG bytes so a snapshot
never aliases a live bitmap. apply_snapshot() decodes the layers in
parallel, joins, and only then replaces the document's layers; a layer
whose bitmap cannot be decoded is logged and dropped while the rest are
restored.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from models.layer import Layer
from models.snapshot import LayerSnapshot, StateSnapshot
from services.surface import Surface
from utils.errors import DecodeFailure
from constants import BACKGROUND_LAYER_NAME

_logger = logging.getLogger('StateCodec')

# Upper bound on decoder threads for one restoration
MAX_DECODE_WORKERS = 8


def capture_state(document) -> StateSnapshot:
    """Frozen, self-contained copy of the document"""
    stack = document.layers
    layers = tuple(
        LayerSnapshot(
            id=layer.id,
            name=layer.name,
            offset_x=layer.offset_x,
            offset_y=layer.offset_y,
            opacity=layer.opacity,
            visible=layer.visible,
            encoded_bitmap=layer.bitmap.encode(),
        )
        for layer in stack
    )
    return StateSnapshot(
        width=document.width,
        height=document.height,
        zoom=document.zoom,
        active_layer_id=stack.active_layer_id,
        layers=layers,
        next_layer_id=stack.next_layer_id,
    )


def _decode_layer(layer_snapshot: LayerSnapshot, width: int, height: int) -> Surface:
    try:
        surface = Surface.decode(layer_snapshot.encoded_bitmap)
    except DecodeFailure as e:
        raise DecodeFailure(str(e), layer_snapshot.id, layer_snapshot.name) from e
    return surface.fitted(width, height)


def decode_layers(snapshot: StateSnapshot):
    """Decode every layer bitmap of a snapshot concurrently

    Returns:
        (decoded, failures): decoded is a list of (LayerSnapshot, Surface)
        in snapshot order; failures is a list of DecodeFailure
    """
    decoded = []
    failures = []
    if not snapshot.layers:
        return decoded, failures

    workers = min(MAX_DECODE_WORKERS, len(snapshot.layers))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            (layer_snapshot, pool.submit(_decode_layer, layer_snapshot, snapshot.width, snapshot.height))
            for layer_snapshot in snapshot.layers
        ]
        for layer_snapshot, future in futures:
            try:
                decoded.append((layer_snapshot, future.result()))
            except DecodeFailure as e:
                _logger.error(f"Failed to load image for layer {layer_snapshot.name!r} "
                              f"(id {layer_snapshot.id}): {e}")
                failures.append(e)
    return decoded, failures


def apply_snapshot(document, snapshot: StateSnapshot, decoded=None):
    """Replace the document's canvas and layers with the snapshot's

    Layer order is the snapshot's order. If the stored active layer is
    missing the topmost layer becomes active; if no layer survives
    decoding a blank background is created so the stack is never empty.

    Args:
        document: Document to overwrite
        snapshot: State to restore
        decoded: Result of decode_layers() if already computed

    Returns:
        List of DecodeFailure for layers that were dropped
    """
    if decoded is None:
        decoded, failures = decode_layers(snapshot)
    else:
        decoded, failures = decoded

    stack = document.layers
    next_layer_id = stack.next_layer_id
    if snapshot.next_layer_id is not None:
        next_layer_id = max(next_layer_id, snapshot.next_layer_id)

    stack.reset(snapshot.width, snapshot.height, next_layer_id)
    document.zoom = snapshot.zoom

    for layer_snapshot, surface in decoded:
        stack.insert_layer(Layer(
            layer_snapshot.id,
            layer_snapshot.name,
            surface,
            visible=layer_snapshot.visible,
            opacity=layer_snapshot.opacity,
            offset_x=layer_snapshot.offset_x,
            offset_y=layer_snapshot.offset_y,
        ))

    if len(stack) == 0:
        _logger.warning("No layer could be restored; creating a blank background")
        stack.add_layer(BACKGROUND_LAYER_NAME)
    elif not stack.set_active(snapshot.active_layer_id):
        stack.set_active(stack.layer_ids()[-1])

    return failures
