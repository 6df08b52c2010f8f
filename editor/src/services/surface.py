"""
Raster Layer Editor - Drawing Surface

Fixed-size RGBA bitmap owned by one layer, backed by a Pillow image.
Provides the drawing primitives the tools need (line strokes with round
caps and joins, rectangle fill/clear, text, bitmap blits with scaling)
and the portable encoding used by history and project files (PNG bytes
and base64 PNG data URLs).

Erasing works on the alpha channel through a numpy mask so an erase
stroke leaves fully transparent pixels behind (destination-out).
"""

import io
import base64
import binascii
import logging

import numpy as np
from PIL import Image, ImageDraw, ImageColor, ImageFont, UnidentifiedImageError

from utils.errors import DecodeFailure
from constants import PNG_DATA_URL_PREFIX, TEXT_FONT_CANDIDATES

_logger = logging.getLogger('Surface')

TRANSPARENT = (0, 0, 0, 0)


def parse_color(color):
    """Accept '#rrggbb', CSS names or tuples; return an RGBA tuple"""
    if isinstance(color, (tuple, list)):
        rgba = tuple(int(c) for c in color)
        return rgba if len(rgba) == 4 else rgba[:3] + (255,)
    return ImageColor.getcolor(color, "RGBA")


def load_font(size):
    """Bold font at the given pixel size, falling back to Pillow's default font"""
    for candidate in TEXT_FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, int(size))
        except OSError:
            continue
    _logger.debug("No TrueType font available, using Pillow's default font")
    return ImageFont.load_default(size=int(size))


class Surface:
    """Per-layer pixel buffer

    Properties:
        width, height: Fixed bitmap size in pixels
        image: Underlying Pillow RGBA image (owned, never shared)
    """

    def __init__(self, image: Image.Image):
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self._image = image

    # ========================================
    # Construction
    # ========================================

    @classmethod
    def blank(cls, width, height):
        """Fully transparent surface"""
        return cls(Image.new("RGBA", (int(width), int(height)), TRANSPARENT))

    @classmethod
    def from_image(cls, source: Image.Image, width=None, height=None):
        """Surface of the given size with source drawn at the top-left corner

        Without a size the surface takes the source's size.
        """
        source = source.convert("RGBA")
        if width is None or height is None:
            return cls(source.copy())
        surface = cls.blank(width, height)
        surface._image.paste(source, (0, 0))
        return surface

    @classmethod
    def from_array(cls, pixels: np.ndarray):
        """Surface from an (h, w, 4) uint8 RGBA array"""
        return cls(Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)))

    def copy(self):
        return Surface(self._image.copy())

    # ========================================
    # Properties
    # ========================================

    @property
    def width(self) -> int:
        return self._image.width

    @property
    def height(self) -> int:
        return self._image.height

    @property
    def size(self):
        return self._image.size

    @property
    def image(self) -> Image.Image:
        return self._image

    def to_array(self) -> np.ndarray:
        """Copy of the pixels as an (h, w, 4) uint8 array"""
        return np.array(self._image, dtype=np.uint8)

    def pixel(self, x, y):
        return self._image.getpixel((int(x), int(y)))

    # ========================================
    # Drawing primitives
    # ========================================

    def stroke_line(self, start, end, width, color="#000000", mode="normal"):
        """Stroke a segment with round caps and joins

        Args:
            start, end: Layer-local points (Vec2 or (x, y))
            width: Line width in pixels
            color: Stroke color (ignored when erasing)
            mode: 'normal' paints over, 'erase' clears alpha along the stroke
        """
        x0, y0 = start
        x1, y1 = end
        width = max(1, int(round(float(width))))

        if mode == "erase":
            mask = Image.new("L", self._image.size, 0)
            self._draw_round_segment(ImageDraw.Draw(mask), (x0, y0), (x1, y1), width, 255)
            self._erase_with_mask(mask)
            return

        rgba = parse_color(color)
        layer = Image.new("RGBA", self._image.size, TRANSPARENT)
        self._draw_round_segment(ImageDraw.Draw(layer), (x0, y0), (x1, y1), width, rgba)
        self._image.alpha_composite(layer)

    @staticmethod
    def _draw_round_segment(draw, start, end, width, fill):
        radius = width / 2
        if start != end:
            draw.line([start, end], fill=fill, width=width, joint="curve")
        # Round caps
        for cx, cy in (start, end):
            draw.ellipse([cx - radius, cy - radius, cx + radius, cy + radius], fill=fill)

    def _erase_with_mask(self, mask: Image.Image):
        pixels = np.array(self._image, dtype=np.uint8)
        coverage = np.asarray(mask, dtype=np.float32) / 255.0
        alpha = pixels[..., 3].astype(np.float32) * (1.0 - coverage)
        pixels[..., 3] = np.clip(np.round(alpha), 0, 255).astype(np.uint8)
        # Fully erased pixels become transparent black so encodings stay stable
        pixels[pixels[..., 3] == 0] = 0
        self._image = Image.fromarray(pixels)

    def fill_rect(self, rect, color):
        """Paint an (x, y, w, h) region with a solid color"""
        x, y, w, h = self._box(rect)
        if w <= 0 or h <= 0:
            return
        ImageDraw.Draw(self._image).rectangle([x, y, x + w - 1, y + h - 1], fill=parse_color(color))

    def clear_rect(self, rect):
        """Make an (x, y, w, h) region fully transparent"""
        x, y, w, h = self._box(rect)
        if w <= 0 or h <= 0:
            return
        self._image.paste(TRANSPARENT, (x, y, x + w, y + h))

    def draw_text(self, text, point, font_size, color):
        """Draw text with its left edge at point.x and its vertical middle at point.y"""
        if not text:
            return
        font = load_font(font_size)
        draw = ImageDraw.Draw(self._image)
        x, y = point
        draw.text((x, y), text, font=font, fill=parse_color(color), anchor="lm")

    def draw_bitmap(self, source, src_rect=None, dst_rect=None):
        """Composite source (Surface or Pillow image) onto this surface

        Args:
            source: Bitmap to draw
            src_rect: (x, y, w, h) region of source; whole source if None
            dst_rect: (x, y, w, h) destination; same size at (0, 0) if None.
                      Differing sizes scale the region.
        """
        src_image = source.image if isinstance(source, Surface) else source.convert("RGBA")
        if src_rect is None:
            src_rect = (0, 0, src_image.width, src_image.height)
        sx, sy, sw, sh = self._box(src_rect)
        if sw <= 0 or sh <= 0:
            return
        region = src_image.crop((sx, sy, sx + sw, sy + sh))

        if dst_rect is None:
            dst_rect = (0, 0, sw, sh)
        dx, dy, dw, dh = self._box(dst_rect)
        if dw <= 0 or dh <= 0:
            return
        if (dw, dh) != region.size:
            region = region.resize((dw, dh), Image.LANCZOS)

        from services.compositor import composite_onto
        base = np.array(self._image, dtype=np.uint8)
        composite_onto(base, np.array(region, dtype=np.uint8), dx, dy)
        self._image = Image.fromarray(base)

    @staticmethod
    def _box(rect):
        if hasattr(rect, 'to_pixels'):
            return rect.to_pixels()
        x, y, w, h = rect
        return int(round(x)), int(round(y)), int(round(w)), int(round(h))

    # ========================================
    # Whole-bitmap transforms (return new surfaces)
    # ========================================

    def crop_region(self, x, y, width, height):
        """New surface holding the (x, y, width, height) region

        Parts of the region outside this surface come out transparent.
        """
        x, y, width, height = int(round(x)), int(round(y)), int(width), int(height)
        return Surface(self._image.crop((x, y, x + width, y + height)))

    def resized(self, width, height):
        """New surface with the whole bitmap resampled to width x height"""
        return Surface(self._image.resize((int(width), int(height)), Image.LANCZOS))

    def scaled_centered(self, factor):
        """New same-size surface with the content scaled about the centre"""
        new_w = max(1, int(round(self.width * factor)))
        new_h = max(1, int(round(self.height * factor)))
        start_x = (self.width - new_w) / 2
        start_y = (self.height - new_h) / 2
        result = Surface.blank(self.width, self.height)
        result.draw_bitmap(self, None, (start_x, start_y, new_w, new_h))
        return result

    def fitted(self, width, height):
        """New surface of the given size with this bitmap at (0, 0), cropped or padded"""
        if self.size == (int(width), int(height)):
            return self.copy()
        return Surface.from_image(self._image, width, height)

    # ========================================
    # Portable encoding
    # ========================================

    def encode(self) -> bytes:
        """Lossless PNG bytes"""
        buffer = io.BytesIO()
        self._image.save(buffer, format="PNG")
        return buffer.getvalue()

    @classmethod
    def decode(cls, data: bytes):
        """Surface from encoded image bytes

        Raises:
            DecodeFailure: If the bytes are not a readable image, or decode
                to more pixels than Pillow's decompression bomb limit
        """
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return cls(img.convert("RGBA"))
        except (UnidentifiedImageError, Image.DecompressionBombError,
                OSError, ValueError, SyntaxError) as e:
            raise DecodeFailure(f"Cannot decode image data: {e}") from e

    def to_data_url(self) -> str:
        return PNG_DATA_URL_PREFIX + base64.b64encode(self.encode()).decode("ascii")

    @staticmethod
    def data_url_to_bytes(data_url: str) -> bytes:
        """Raw bytes of a base64 data URL

        Raises:
            DecodeFailure: If the URL is not base64 image data
        """
        if not isinstance(data_url, str) or not data_url.startswith("data:"):
            raise DecodeFailure("Not an image data URL")
        header, _, payload = data_url.partition(",")
        if ";base64" not in header:
            raise DecodeFailure("Image data URL is not base64 encoded")
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeFailure(f"Invalid base64 image data: {e}") from e

    @classmethod
    def from_data_url(cls, data_url: str):
        return cls.decode(cls.data_url_to_bytes(data_url))

    def __eq__(self, other):
        if not isinstance(other, Surface):
            return NotImplemented
        return self.size == other.size and self._image.tobytes() == other._image.tobytes()

    __hash__ = None

    def __repr__(self):
        return f"Surface({self.width}x{self.height})"
