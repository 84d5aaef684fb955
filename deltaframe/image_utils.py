"""
Pixel helpers that do not depend on files.

OpenCV hands back arrays in several layouts depending on the source file
(grayscale, BGR, BGRA, 8 or 16 bits per sample). Everything else in deltaframe
works on a single canonical layout: (h, w, 4) uint8 in R, G, B, A order.
"""

import numpy as np
import cv2

from .constants import C

# (magic bytes, offset, format tag)
SIGNATURES = [
    (b'\x89PNG\r\n\x1a\n', 0, 'png'),
    (b'\xff\xd8\xff', 0, 'jpeg'),
    (b'GIF87a', 0, 'gif'),
    (b'GIF89a', 0, 'gif'),
    (b'BM', 0, 'bmp'),
    (b'II*\x00', 0, 'tiff'),
    (b'MM\x00*', 0, 'tiff'),
    (b'WEBP', 8, 'webp'),
]

def sniff_format(data):
    """Return the format tag for encoded image bytes, or None if not recognized."""
    for (magic, offset, tag) in SIGNATURES:
        if data[offset:offset+len(magic)] == magic:
            return tag
    return None


def _to_uint8(img):
    if img.dtype == np.uint8:
        return img
    if img.dtype == np.uint16:
        return (img >> 8).astype(np.uint8)
    if np.issubdtype(img.dtype, np.floating):
        return (np.clip(img, 0.0, 1.0) * 255 + 0.5).astype(np.uint8)
    raise ValueError(f"unsupported sample type {img.dtype}")


def to_rgba(img):
    """Convert an image as returned by cv2.imdecode(..., IMREAD_UNCHANGED) to
    a new (h, w, 4) uint8 RGBA array. Alpha is straight, not premultiplied;
    images without alpha become fully opaque."""
    img = np.ascontiguousarray(_to_uint8(np.asarray(img)))
    if img.ndim == 3 and img.shape[2] == 1:
        img = np.ascontiguousarray(img[:, :, 0])
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.ndim == 3 and img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise ValueError(f"cannot convert image with shape {img.shape} to RGBA")


def rgba_to_bgra(img):
    """Inverse of to_rgba for the 4-channel case; used before encoding with OpenCV."""
    return cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)


def blank_rgba(h, w):
    """A fully transparent RGBA canvas."""
    return np.full((h, w, 4), C.TRANSPARENT, dtype=np.uint8)
