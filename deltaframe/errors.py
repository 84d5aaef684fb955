"""
Errors raised while reading, writing, naming or combining frames.
All of them are FrameError, so a caller can decide per call whether a failure is fatal.
"""

class FrameError(RuntimeError):
    """Base class for deltaframe errors"""

class FileAccessError(FrameError):
    """A file could not be opened, created, read or written"""

class NotImageError(FrameError):
    """cv2 cannot read image"""

class EncodeError(FrameError):
    """cv2 cannot encode image"""

class DimensionMismatchError(FrameError):
    """Two frames that must have the same bounds do not"""

class NamingError(FrameError):
    """An output path cannot be derived from an input path"""
