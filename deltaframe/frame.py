"""This module provides the following classes:

Rect - The bounding rectangle of a frame.

Frame - Holds a single decoded image as an RGBA numpy array, plus the
        logic for reading it from and writing it to disk with OpenCV.

Frames are immutable once created: the pixel array is marked read-only
so that a frame can be handed to several worker threads at once. Any
operation that changes pixels makes a new Frame.

The errors from deltaframe.errors are re-exported here.
"""
import logging
from collections import namedtuple

import cv2
import numpy as np

from .constants import C
from .errors import (FrameError, FileAccessError, NotImageError, EncodeError,  # pylint: disable=unused-import
                     DimensionMismatchError)
from .image_utils import to_rgba, rgba_to_bgra, sniff_format
from . import storage

logger = logging.getLogger(__name__)

class Rect(namedtuple('Rect', ['x', 'y', 'w', 'h'])):
    """Origin and size of a frame."""
    __slots__ = ()

    def __str__(self):
        return f"({self.x},{self.y})-({self.x+self.w},{self.y+self.h})"


def decode(data, urn=None):
    """Decode image bytes to an RGBA array. Returns (img, format)."""
    img = None
    if len(data) > 0:
        try:
            img = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_UNCHANGED)
        except cv2.error as e: # pylint: disable=catching-non-exception
            raise NotImageError(f"failed to decode image {urn}: {e}") from e
    if img is None:
        raise NotImageError(f"failed to decode image {urn}")
    try:
        return to_rgba(img), sniff_format(data)
    except ValueError as e:
        raise NotImageError(f"failed to decode image {urn}: {e}") from e


def encode_png(img, compression=C.DEFAULT_PNG_COMPRESSION):
    """Encode an RGBA array as PNG bytes."""
    try:
        ok, buf = cv2.imencode('.png', rgba_to_bgra(img),
                               [cv2.IMWRITE_PNG_COMPRESSION, compression])
    except cv2.error as e: # pylint: disable=catching-non-exception
        raise EncodeError(f"failed to encode PNG: {e}") from e
    if not ok:
        raise EncodeError("failed to encode PNG")
    return buf.tobytes()


class Frame:
    """Abstraction to hold an image frame.
    If a stage needs different pixels, it makes a new Frame."""
    png_compression = C.DEFAULT_PNG_COMPRESSION

    def __init__(self, *, img, urn=None, fmt=None, copy=False):
        """:param img: (h, w, 4) uint8 RGBA array. Unless copy is True the frame takes ownership
                    of img and marks it read-only, so the caller must not write to it afterwards.
        :param copy: copy img first, leaving the caller's array writable.
        :param urn: where the frame was read from or last written to.
        :param fmt: format tag of the file it was read from.
        """
        if img.ndim != 3 or img.shape[2] != 4 or img.dtype != np.uint8:
            raise ValueError(f"Frame requires an (h, w, 4) uint8 array, got {img.shape} {img.dtype}")
        if copy:
            img = img.copy()
        img.flags.writeable = False
        self._img = img
        self.urn = urn
        self.format = fmt

    @classmethod
    def load(cls, urn):
        """Read and decode the image at urn."""
        img, fmt = decode(storage.load(urn), urn)
        logger.info("Loaded image %s (format: %s)", urn, fmt)
        return cls(img=img, urn=urn, fmt=fmt)

    def save(self, urn):
        """Write the image to urn as a PNG, whatever the extension of urn."""
        storage.save(urn, self.png_bytes)
        logger.debug("saved %s", urn)
        self.urn = urn

    @property
    def png_bytes(self):
        return encode_png(self._img, self.png_compression)

    @property
    def img(self):
        """return the RGBA numpy array. It is not writable."""
        return self._img

    @property
    def shape(self):
        """Returns shape. note: shape[0] = height, shape[1]=width, shape[2]==depth"""
        return tuple(self._img.shape)

    @property
    def bounds(self):
        (h, w) = self._img.shape[:2]
        return Rect(0, 0, w, h)

    def __eq__(self, b):
        if not isinstance(b, Frame):
            return NotImplemented
        return np.array_equal(self._img, b._img)

    __hash__ = None

    def __repr__(self):
        return f"<Frame urn={self.urn} format={self.format} bounds={self.bounds}>"


def check_bounds(a, b):
    """Raise DimensionMismatchError unless frames a and b have the same bounds."""
    if a.bounds != b.bounds:
        raise DimensionMismatchError(f"image dimensions do not match ({a.bounds} vs {b.bounds})")
