"""Conversion between Pillow images and Qt images.

Pillow's ImageQt bridge no longer supports PyQt5, so pixels are copied
through raw RGBA buffers instead.
"""

from PIL import Image
from PyQt5.QtGui import QImage


def pil_to_qimage(image: Image.Image) -> QImage:
    """Deep-copied QImage of a Pillow image (converted to RGBA)"""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    data = image.tobytes("raw", "RGBA")
    qimage = QImage(data, image.width, image.height, image.width * 4, QImage.Format_RGBA8888)
    # QImage does not own `data`; copy before it goes out of scope
    return qimage.copy()


def qimage_to_pil(qimage: QImage) -> Image.Image:
    """Pillow RGBA image from any QImage"""
    qimage = qimage.convertToFormat(QImage.Format_RGBA8888)
    width, height = qimage.width(), qimage.height()
    bits = qimage.constBits()
    bits.setsize(qimage.byteCount())
    stride = qimage.bytesPerLine()
    return Image.frombuffer("RGBA", (width, height), bytes(bits), "raw", "RGBA", stride, 1).copy()
