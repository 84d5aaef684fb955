"""
Stage implementation and the two stages the pipelines are built from.

A Stage is one unit of work on a pair of frames. It keeps timing
statistics so that the pipeline can report them when it shuts down.
Stages may be called from several worker threads at once.
"""

import time
import math
import logging
import threading
from abc import ABC,abstractmethod
from collections import namedtuple

from .constants import C
from .delta import diff_frames, merge_frames
from .frame import Frame
from .naming import output_filename, original_filename

logger = logging.getLogger(__name__)

PairResult = namedtuple('PairResult', ['prev_urn', 'urn', 'diff_urn', 'changed'])


class Stage(ABC):
    """Abstract base class for the work done on a frame pair"""

    def __init__(self):
        self.sum_t   = 0
        self.sum_t2  = 0
        self.count   = 0
        self.lock    = threading.Lock()

    @abstractmethod
    def process(self, a:Frame, b:Frame):
        """Called to process a pair of frames. Returns the stage's result."""

    def run(self, a:Frame, b:Frame):
        """Process the pair and record how long it took, even if it failed."""
        t0 = time.time()
        try:
            return self.process(a, b)
        finally:
            t = time.time() - t0
            with self.lock:
                self.sum_t  += t
                self.sum_t2 += (t*t)
                self.count  += 1

    @property
    def t_mean(self):
        return self.sum_t / self.count if self.count>0 else float("nan")

    @property
    def t2_mean(self):
        return self.sum_t2 / self.count if self.count>0 else float("nan")

    @property
    def t_variance(self):
        return self.t2_mean - self.t_mean * self.t_mean

    @property
    def t_stddev(self):
        return math.sqrt(max(self.t_variance, 0.0)) if self.count>0 else float("nan")


class DiffFrames(Stage):
    """Compare the previous frame with the current one and save the diff next to the current frame.
    Returns a PairResult."""
    tag = C.DIFF_TAG

    def process(self, a:Frame, b:Frame):
        logger.info("Processing pair: %s vs %s", a.urn, b.urn)
        (diff, changed) = diff_frames(a, b)
        logger.info("Found %d different pixels between %s and %s.", changed, a.urn, b.urn)
        diff_urn = output_filename(b.urn, self.tag)
        diff.save(diff_urn)
        logger.info("Difference image saved to %s", diff_urn)
        return PairResult(a.urn, b.urn, diff_urn, changed)


class ApplyDiff(Stage):
    """Apply a diff frame to the previous reconstructed frame and save the result
    under the original name of the diff. Returns the reconstructed frame."""

    def process(self, a:Frame, b:Frame):
        urn = original_filename(b.urn)
        merged = merge_frames(a, b)
        merged.save(urn)
        logger.info("Saved reconstructed image: %s", urn)
        return merged
