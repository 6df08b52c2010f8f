"""Headless raster editor: command-line entry point.

Runs editor commands against project files without opening a window.
Each subcommand loads a project (where it takes one), applies one
command through the same controller the GUI uses and writes the result.

Usage:
    python editor/src/headless.py <command> [options]

Examples:
    raster-editor-headless new poster.json --width 1920 --height 1080
    raster-editor-headless add-layer poster.json --image photo.png
    raster-editor-headless crop poster.json 100 100 400 300
    raster-editor-headless export poster.json poster.png
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from controller import EditorController
from services.file_operations import load_image
from utils.errors import EditorError, ValidationError
from utils.validation import parse_dimension, parse_percentage
from constants import DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT


def _dimension(value):
    """argparse type for pixel sizes (exit status 2 on bad input)"""
    try:
        return parse_dimension(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def _percentage(value):
    try:
        parse_percentage(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))
    return float(value)


def _coordinate(value):
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Coordinate must be a number, got {value!r}")
    if number != number:
        raise argparse.ArgumentTypeError("Coordinate must be a number")
    return number


def _open(project_file) -> EditorController:
    editor = EditorController()
    if not editor.open_project(project_file):
        print(f"Error: {editor.last_message}")
        sys.exit(1)
    if editor.last_message:
        print(f"Warning: {editor.last_message}")
    return editor


def _finish(editor, ok, output):
    if not ok:
        print(f"Error: {editor.last_message or 'nothing to do'}")
        sys.exit(1)
    if not editor.save_project(output):
        print(f"Error: {editor.last_message}")
        sys.exit(1)
    print(f"{editor.last_action or 'Saved'} -> {output}")


# ========================================
# Subcommands
# ========================================

def cmd_new(args):
    editor = EditorController(args.width, args.height)
    _finish(editor, True, args.output)


def cmd_info(args):
    editor = _open(args.project)
    document = editor.document
    print(f"Canvas: {document.width}x{document.height} (zoom {document.zoom * 100:.0f}%)")
    print(f"Layers ({len(document.layers)}, top first):")
    for layer in reversed(document.layers.layers):
        marker = '*' if layer.id == document.layers.active_layer_id else ' '
        visibility = 'visible' if layer.visible else 'hidden'
        print(f" {marker} [{layer.id}] {layer.name} - {visibility}, "
              f"opacity {layer.opacity * 100:.0f}%, offset ({layer.offset_x:g}, {layer.offset_y:g})")


def cmd_resize(args):
    editor = _open(args.project)
    _finish(editor, editor.resize_canvas(args.width, args.height), args.output or args.project)


def cmd_scale_layer(args):
    editor = _open(args.project)
    if args.layer is not None and not editor.set_active_layer(args.layer):
        print(f"Error: No layer with id {args.layer}")
        sys.exit(1)
    _finish(editor, editor.scale_active_layer(args.percent), args.output or args.project)


def cmd_crop(args):
    editor = _open(args.project)
    ok = editor.set_crop_rect(args.x, args.y, args.width, args.height) and editor.apply_crop()
    _finish(editor, ok, args.output or args.project)


def cmd_add_layer(args):
    editor = _open(args.project)
    source = None
    name = args.name
    if args.image:
        try:
            source = load_image(args.image)
        except (OSError, EditorError) as e:
            print(f"Error: Could not open image: {e}")
            sys.exit(1)
        name = name or os.path.basename(args.image)
    _finish(editor, editor.add_layer(name, source), args.output or args.project)


def cmd_export(args):
    editor = _open(args.project)
    if not editor.export_png(args.output):
        print(f"Error: {editor.last_message}")
        sys.exit(1)
    print(f"Exported {args.project} -> {args.output}")


def build_parser():
    parser = argparse.ArgumentParser(
        description='Edit raster layer projects from the command line.',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    new = subparsers.add_parser('new', help='Create a project with a white background.')
    new.add_argument('output', help='Project file to write.')
    new.add_argument('--width', type=_dimension, default=DEFAULT_CANVAS_WIDTH,
                     help=f'Canvas width in pixels (default: {DEFAULT_CANVAS_WIDTH}).')
    new.add_argument('--height', type=_dimension, default=DEFAULT_CANVAS_HEIGHT,
                     help=f'Canvas height in pixels (default: {DEFAULT_CANVAS_HEIGHT}).')
    new.set_defaults(func=cmd_new)

    info = subparsers.add_parser('info', help='Print canvas size and layers.')
    info.add_argument('project', help='Project file.')
    info.set_defaults(func=cmd_info)

    resize = subparsers.add_parser('resize', help='Resample every layer to a new canvas size.')
    resize.add_argument('project', help='Project file.')
    resize.add_argument('width', type=_dimension, help='New width in pixels.')
    resize.add_argument('height', type=_dimension, help='New height in pixels.')
    resize.add_argument('-o', '--output', help='Write to this file instead of overwriting the project.')
    resize.set_defaults(func=cmd_resize)

    scale = subparsers.add_parser('scale-layer', help='Scale a layer about the canvas centre.')
    scale.add_argument('project', help='Project file.')
    scale.add_argument('percent', type=_percentage, help='Scale in percent (100 = unchanged).')
    scale.add_argument('--layer', type=int, help='Layer id (default: the active layer).')
    scale.add_argument('-o', '--output', help='Write to this file instead of overwriting the project.')
    scale.set_defaults(func=cmd_scale_layer)

    crop = subparsers.add_parser('crop', help='Crop every layer to a region.')
    crop.add_argument('project', help='Project file.')
    crop.add_argument('x', type=_coordinate, help='Left edge in canvas pixels.')
    crop.add_argument('y', type=_coordinate, help='Top edge in canvas pixels.')
    crop.add_argument('width', type=_dimension, help='Region width in pixels.')
    crop.add_argument('height', type=_dimension, help='Region height in pixels.')
    crop.add_argument('-o', '--output', help='Write to this file instead of overwriting the project.')
    crop.set_defaults(func=cmd_crop)

    add_layer = subparsers.add_parser('add-layer', help='Add a layer on top of the stack.')
    add_layer.add_argument('project', help='Project file.')
    add_layer.add_argument('--name', help='Layer name (default: "Layer N" or the image file name).')
    add_layer.add_argument('--image', help='Image file drawn into the new layer.')
    add_layer.add_argument('-o', '--output', help='Write to this file instead of overwriting the project.')
    add_layer.set_defaults(func=cmd_add_layer)

    export = subparsers.add_parser('export', help='Flatten visible layers to a PNG.')
    export.add_argument('project', help='Project file.')
    export.add_argument('output', help='PNG file to write.')
    export.set_defaults(func=cmd_export)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    args.func(args)


if __name__ == '__main__':
    main()
