"""
Output file names.

output_filename("path/to/image.png", "BASE") -> "path/to/image.BASE.png"
original_filename("path/to/image.DIFF.jpg")  -> "path/to/image.jpg"
"""

import os
import logging

from .constants import C
from .errors import NamingError

logger = logging.getLogger(__name__)

KNOWN_TAGS = (C.BASE_TAG, C.DIFF_TAG)

def output_filename(path, tag):
    """Return path with .tag inserted before the extension.
    A path without an extension gets C.DEFAULT_EXTENSION."""
    (dirpath, fname) = os.path.split(path)
    (name, ext) = os.path.splitext(fname)
    if not ext:
        ext = C.DEFAULT_EXTENSION
        logger.warning("Input file %s has no extension, assuming %s for output.", path, ext)
    if tag and not tag.startswith("."):
        tag = "." + tag
    return os.path.join(dirpath, f"{name}{tag}{ext}")


def original_filename(path):
    """Return path with a trailing .BASE or .DIFF removed from the name."""
    (dirpath, fname) = os.path.split(path)
    (name, ext) = os.path.splitext(fname)
    if not ext:
        raise NamingError(f"input file {path} seems to be missing an extension")

    for tag in KNOWN_TAGS:
        if name.endswith("." + tag):
            name = name[:-len(tag)-1]
            break
    else:
        logger.warning("Input file %s does not have expected .%s or .%s suffix.",
                       path, C.BASE_TAG, C.DIFF_TAG)

    if not name:
        raise NamingError(f"could not determine original base name for {path}")
    return os.path.join(dirpath, name + ext)


def has_tag(path, tag):
    """True if the file name of path contains .tag. as in image.BASE.png"""
    return f".{tag}." in os.path.basename(path)
