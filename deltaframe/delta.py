"""
The two pixel operations everything else is built on:

diff_frames(base, current) - a sparse overlay of the pixels that changed.
merge_frames(base, diff)   - the overlay applied back onto a base.

Both are pure: they read their inputs and return new frames.
"""

import numpy as np

from .constants import C
from .frame import Frame, check_bounds
from .image_utils import blank_rgba


def changed_mask(base, current):
    """Boolean (h, w) mask of pixels whose R, G or B differ. Alpha is ignored."""
    check_bounds(base, current)
    return np.any(base.img[:, :, :3] != current.img[:, :, :3], axis=2)


def diff_frames(base:Frame, current:Frame):
    """Return (diff, changed).

    diff is a new frame with the bounds of the inputs. Pixels where current
    differs from base carry the RGB of current with alpha OPAQUE; all other
    pixels are fully transparent. changed is the number of differing pixels.
    Raises DimensionMismatchError if the frames are not the same size.
    """
    mask = changed_mask(base, current)
    (h, w) = mask.shape
    out = blank_rgba(h, w)
    out[mask, :3] = current.img[mask, :3]
    out[mask, 3] = C.OPAQUE
    return Frame(img=out), int(np.count_nonzero(mask))


def merge_frames(base:Frame, diff:Frame):
    """Overlay diff onto base and return the result as a new frame.

    Any diff pixel with alpha > 0 replaces the base pixel with its own RGBA;
    partial alpha is not blended. Transparent diff pixels let the base through.
    Raises DimensionMismatchError if the frames are not the same size.
    """
    check_bounds(base, diff)
    opaque = diff.img[:, :, 3] > C.TRANSPARENT
    out = np.where(opaque[:, :, np.newaxis], diff.img, base.img)
    return Frame(img=out)
