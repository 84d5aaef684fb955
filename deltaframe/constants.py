"""Constants"""

import os

# pylint: disable=too-few-public-methods
class C:
    """Constants"""
    BASE_TAG = 'BASE'
    DIFF_TAG = 'DIFF'
    DEFAULT_EXTENSION = '.png'
    OPAQUE = 255
    TRANSPARENT = 0
    DEFAULT_PNG_COMPRESSION = 3
    DEFAULT_WORKERS = os.cpu_count() or 4
    DEFAULT_LOGLEVEL = 'INFO'
