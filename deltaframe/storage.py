"""
Storage layer for deltaframe.
Handles all get and put operations in a single place, so we can easily handle new storage systems.
Only local files are supported: plain paths or file: URLs.
"""

import urllib.parse
import os
import shutil
import functools
import logging
from os.path import dirname

from .errors import FileAccessError

logger = logging.getLogger(__name__)

@functools.lru_cache(maxsize=4)
def mkdirs(path):
    logger.debug("mkdirs %s",path)
    os.makedirs(path, exist_ok = True)

def local_path(url):
    """Return the local filesystem path for url.
    Only a file: prefix is read as a URL; anything else is a path, so names like cam:0.png work.
    Remote URLs such as s3://bucket/key raise FileAccessError."""
    url = os.fspath(url)
    try:
        o = urllib.parse.urlparse(url)
    except ValueError as e:
        raise FileAccessError(f"cannot parse {url}: {e}") from e
    if o.scheme=="file":
        return urllib.parse.unquote(o.path)
    if "://" in url and o.scheme and len(o.scheme)>1:
        raise FileAccessError(f"unsupported scheme {o.scheme} in url {url}")
    return url

def save(url, data):
    path = local_path(url)
    logger.debug("save %s (%s bytes)",path,len(data))
    try:
        if dirname(path):
            mkdirs(dirname(path))
        with open(path,'wb') as f:
            f.write(data)
    except OSError as e:
        raise FileAccessError(f"failed to write {path}: {e}") from e

def load(url):
    path = local_path(url)
    try:
        with open(path,'rb') as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(f"failed to open {path}: {e}") from e

def copy_file(src, dst):
    """Copy src to dst byte for byte and flush it to stable storage."""
    src_path = local_path(src)
    dst_path = local_path(dst)
    try:
        if dirname(dst_path):
            mkdirs(dirname(dst_path))
        with open(src_path,'rb') as fsrc, open(dst_path,'wb') as fdst:
            shutil.copyfileobj(fsrc, fdst)
            fdst.flush()
            os.fsync(fdst.fileno())
    except OSError as e:
        raise FileAccessError(f"failed to copy {src_path} to {dst_path}: {e}") from e
